"""
Public facade for the PayWay SDK.

The most useful pieces are re-exported here so integrators can
``from payway import ...`` without navigating the package.
"""

from .api import create_payway_client
from .core import (
    CURRENCIES,
    HTML_PAYMENT_OPTION,
    PAYMENT_OPTIONS,
    TRANSACTION_STATUSES,
    TRANSACTION_TYPES,
    VIEW_TYPES,
    APIError,
    BuiltPayload,
    CancelPreAuthParams,
    CheckTransactionParams,
    CompletePreAuthParams,
    CompletePreAuthWithPayoutParams,
    ConfigurationError,
    CreateTransactionParams,
    EncryptionError,
    PayWayClient,
    PayWayConfig,
    PayWayError,
    PayoutItem,
    RequestsTransport,
    ReturnDeeplink,
    TransactionListParams,
    Transport,
    TransportResponse,
    UnexpectedContentTypeError,
    UnsupportedOperationError,
    build_environment,
    load_env_file,
    load_payway_config,
)

__all__ = (
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
    "EncryptionError",
    "PayWayClient",
    "PayWayConfig",
    "PayWayError",
    "PayoutItem",
    "RequestsTransport",
    "ReturnDeeplink",
    "TransactionListParams",
    "Transport",
    "TransportResponse",
    "UnexpectedContentTypeError",
    "UnsupportedOperationError",
    "build_environment",
    "create_payway_client",
    "load_env_file",
    "load_payway_config",
)
