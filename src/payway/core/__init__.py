"""
Core primitives: credentials, payload building, signing and execution.
"""

from .client import PayWayClient, execute_payload
from .config import DEFAULT_BASE_URL, PayWayConfig, load_payway_config
from .environment import GatewayEnvironment, build_environment, load_env_file
from .errors import (
    APIError,
    ConfigurationError,
    EncryptionError,
    PayWayError,
    UnexpectedContentTypeError,
    UnsupportedOperationError,
)
from .params import (
    CURRENCIES,
    HTML_PAYMENT_OPTION,
    PAYMENT_OPTIONS,
    TRANSACTION_STATUSES,
    TRANSACTION_TYPES,
    VIEW_TYPES,
    CancelPreAuthParams,
    CheckTransactionParams,
    CompletePreAuthParams,
    CompletePreAuthWithPayoutParams,
    CreateTransactionParams,
    PayoutItem,
    ReturnDeeplink,
    TransactionListParams,
)
from .payloads import (
    BuiltPayload,
    build_cancel_pre_auth_payload,
    build_check_transaction_payload,
    build_complete_pre_auth_payload,
    build_complete_pre_auth_with_payout_payload,
    build_transaction_list_payload,
    build_transaction_payload,
)
from .signing import RSA_CHUNK_SIZE, create_hash, encrypt_merchant_auth
from .transport import RequestsTransport, Transport, TransportResponse

__all__ = [
    "APIError",
    "CURRENCIES",
    "HTML_PAYMENT_OPTION",
    "PAYMENT_OPTIONS",
    "TRANSACTION_STATUSES",
    "TRANSACTION_TYPES",
    "VIEW_TYPES",
    "BuiltPayload",
    "CancelPreAuthParams",
    "CheckTransactionParams",
    "CompletePreAuthParams",
    "CompletePreAuthWithPayoutParams",
    "ConfigurationError",
    "CreateTransactionParams",
    "DEFAULT_BASE_URL",
    "EncryptionError",
    "GatewayEnvironment",
    "PayWayClient",
    "PayWayConfig",
    "PayWayError",
    "PayoutItem",
    "RSA_CHUNK_SIZE",
    "RequestsTransport",
    "ReturnDeeplink",
    "TransactionListParams",
    "Transport",
    "TransportResponse",
    "UnexpectedContentTypeError",
    "UnsupportedOperationError",
    "build_cancel_pre_auth_payload",
    "build_check_transaction_payload",
    "build_complete_pre_auth_payload",
    "build_complete_pre_auth_with_payout_payload",
    "build_environment",
    "build_transaction_list_payload",
    "build_transaction_payload",
    "create_hash",
    "encrypt_merchant_auth",
    "execute_payload",
    "load_env_file",
    "load_payway_config",
]
