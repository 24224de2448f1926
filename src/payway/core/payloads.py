"""
Helpers for constructing the signed form payloads sent to the PayWay gateway.

Field order is part of the wire contract: the gateway concatenates the posted
values in its own documented order to recompute ``hash``, so each builder
lists its fields explicitly instead of iterating over a parameter object.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .config import PayWayConfig
from .encoding import b64encode_text, compact_json, stringify
from .errors import ConfigurationError
from .params import (
    CancelPreAuthParams,
    CheckTransactionParams,
    CompletePreAuthParams,
    CompletePreAuthWithPayoutParams,
    CreateTransactionParams,
    TransactionListParams,
)
from .signing import create_hash, encrypt_merchant_auth, serialize_merchant_auth

__all__ = [
    "BuiltPayload",
    "CHECK_TRANSACTION_PATH",
    "PRE_AUTH_CANCELLATION_PATH",
    "PRE_AUTH_COMPLETION_PATH",
    "PRE_AUTH_COMPLETION_WITH_PAYOUT_PATH",
    "PURCHASE_PATH",
    "REQUEST_TIME_FORMAT",
    "TRANSACTION_LIST_PATH",
    "build_cancel_pre_auth_payload",
    "build_check_transaction_payload",
    "build_complete_pre_auth_payload",
    "build_complete_pre_auth_with_payout_payload",
    "build_transaction_list_payload",
    "build_transaction_payload",
    "format_request_time",
]

_PAYMENTS_PREFIX = "api/payment-gateway/v1/payments/"
_PRE_AUTH_PREFIX = "api/merchant-portal/merchant-access/online-transaction/"

PURCHASE_PATH = _PAYMENTS_PREFIX + "purchase"
CHECK_TRANSACTION_PATH = _PAYMENTS_PREFIX + "check-transaction"
TRANSACTION_LIST_PATH = _PAYMENTS_PREFIX + "transaction-list"
PRE_AUTH_COMPLETION_PATH = _PRE_AUTH_PREFIX + "pre-auth-completion"
PRE_AUTH_COMPLETION_WITH_PAYOUT_PATH = _PRE_AUTH_PREFIX + "pre-auth-completion-with-payout"
PRE_AUTH_CANCELLATION_PATH = _PRE_AUTH_PREFIX + "pre-auth-cancellation"

REQUEST_TIME_FORMAT = "%Y%m%d%H%M%S"

_Fields = Sequence[Tuple[str, Any]]


@dataclass(frozen=True)
class BuiltPayload:
    """
    A signed request ready to be posted.

    ``fields`` is a read-only, ordered view of the form values; its ``hash``
    entry always equals :attr:`hash`.
    """

    fields: Mapping[str, str]
    hash: str
    url: str
    method: str = "POST"

    def __post_init__(self) -> None:
        fields = dict(self.fields)
        if fields.get("hash") != self.hash:
            raise ValueError("Payload fields must carry the payload hash")
        object.__setattr__(self, "fields", MappingProxyType(fields))

    def __hash__(self) -> int:
        return hash((tuple(self.fields.items()), self.hash, self.url, self.method))

    @property
    def payment_option(self) -> Optional[str]:
        return self.fields.get("payment_option")

    def as_dict(self) -> Dict[str, Any]:
        return {
            "fields": dict(self.fields),
            "hash": self.hash,
            "url": self.url,
            "method": self.method,
        }


def format_request_time(now: Optional[datetime] = None) -> str:
    """Render ``now`` (default: host local time) as ``yyyyMMddHHmmss``."""
    moment = datetime.now() if now is None else now
    return moment.strftime(REQUEST_TIME_FORMAT)


def _trim(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


def _encode_url(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return b64encode_text(value)
    return b64encode_text(compact_json(value))


def _encode_compound(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    return b64encode_text(compact_json(value))


def _skip_success_page(value: Optional[Union[bool, int]]) -> Optional[int]:
    if isinstance(value, bool):
        return int(value)
    return value


def _signed_payload(
    config: PayWayConfig,
    path: str,
    body: _Fields,
    *,
    now: Optional[datetime],
    unsigned: _Fields = (),
) -> BuiltPayload:
    included = [(key, value) for key, value in body if value is not None]
    req_time = format_request_time(now)
    signature = create_hash(
        [req_time, config.merchant_id, *(value for _, value in included)],
        config.api_key,
    )

    fields: Dict[str, str] = {"req_time": req_time, "merchant_id": config.merchant_id}
    for key, value in included:
        fields[key] = stringify(value)
    fields["hash"] = signature
    for key, value in unsigned:
        if value is not None:
            fields[key] = stringify(value)

    url = config.endpoint(path)
    logging.debug("Built payload for %s with fields %s", url, ", ".join(fields))
    return BuiltPayload(fields=fields, hash=signature, url=url)


def build_transaction_payload(
    config: PayWayConfig,
    params: Optional[CreateTransactionParams] = None,
    *,
    now: Optional[datetime] = None,
) -> BuiltPayload:
    """Build the ``purchase`` request that opens a checkout session."""
    p = params if params is not None else CreateTransactionParams()
    body: List[Tuple[str, Any]] = [
        ("tran_id", p.tran_id),
        ("amount", p.amount),
        ("items", _encode_compound(p.items)),
        ("shipping", p.shipping),
        ("firstname", _trim(p.firstname)),
        ("lastname", _trim(p.lastname)),
        ("email", _trim(p.email)),
        ("phone", _trim(p.phone)),
        ("type", p.type),
        ("payment_option", p.payment_option),
        ("return_url", _encode_url(p.return_url)),
        ("cancel_url", _encode_url(p.cancel_url)),
        ("continue_success_url", _encode_url(p.continue_success_url)),
        ("return_deeplink", _encode_url(p.return_deeplink)),
        ("currency", p.currency),
        ("custom_fields", _encode_compound(p.custom_fields)),
        ("return_params", p.return_params),
        ("payout", _encode_compound(p.payout)),
        ("lifetime", p.lifetime),
        ("additional_params", _encode_compound(p.additional_params)),
        ("google_pay_token", p.google_pay_token),
        ("skip_success_page", _skip_success_page(p.skip_success_page)),
    ]
    # view_type only changes how the checkout page renders and is not hashed.
    return _signed_payload(
        config,
        PURCHASE_PATH,
        body,
        now=now,
        unsigned=[("view_type", p.view_type)],
    )


def build_check_transaction_payload(
    config: PayWayConfig,
    tran_id: Union[str, CheckTransactionParams],
    *,
    now: Optional[datetime] = None,
) -> BuiltPayload:
    if isinstance(tran_id, CheckTransactionParams):
        tran_id = tran_id.tran_id
    return _signed_payload(
        config,
        CHECK_TRANSACTION_PATH,
        [("tran_id", tran_id)],
        now=now,
    )


def build_transaction_list_payload(
    config: PayWayConfig,
    params: Optional[TransactionListParams] = None,
    *,
    now: Optional[datetime] = None,
) -> BuiltPayload:
    p = params if params is not None else TransactionListParams()
    return _signed_payload(
        config,
        TRANSACTION_LIST_PATH,
        [
            ("from_date", p.from_date),
            ("to_date", p.to_date),
            ("from_amount", p.from_amount),
            ("to_amount", p.to_amount),
            ("status", p.status),
        ],
        now=now,
    )


def _require_rsa_public_key(config: PayWayConfig) -> None:
    if not config.has_rsa_public_key:
        raise ConfigurationError("asymmetric key required for pre-authorization")


def _pre_auth_payload(
    config: PayWayConfig,
    path: str,
    auth_data: Mapping[str, Any],
    *,
    now: Optional[datetime],
) -> BuiltPayload:
    merchant_auth = encrypt_merchant_auth(
        serialize_merchant_auth(auth_data),
        config.rsa_public_key,
    )
    request_time = format_request_time(now)
    # Pre-auth endpoints hash the encrypted blob first, unlike the payment API.
    signature = create_hash(
        [merchant_auth, request_time, config.merchant_id],
        config.api_key,
    )
    fields = {
        "request_time": request_time,
        "merchant_id": config.merchant_id,
        "merchant_auth": merchant_auth,
        "hash": signature,
    }
    url = config.endpoint(path)
    logging.debug("Built pre-auth payload for %s", url)
    return BuiltPayload(fields=fields, hash=signature, url=url)


def build_complete_pre_auth_payload(
    config: PayWayConfig,
    params: CompletePreAuthParams,
    *,
    now: Optional[datetime] = None,
) -> BuiltPayload:
    """Capture a previously authorized amount."""
    _require_rsa_public_key(config)
    return _pre_auth_payload(
        config,
        PRE_AUTH_COMPLETION_PATH,
        {
            "mc_id": config.merchant_id,
            "tran_id": params.tran_id,
            "complete_amount": params.complete_amount,
        },
        now=now,
    )


def build_complete_pre_auth_with_payout_payload(
    config: PayWayConfig,
    params: CompletePreAuthWithPayoutParams,
    *,
    now: Optional[datetime] = None,
) -> BuiltPayload:
    """Capture a pre-authorized amount and split it across payout accounts."""
    _require_rsa_public_key(config)
    return _pre_auth_payload(
        config,
        PRE_AUTH_COMPLETION_WITH_PAYOUT_PATH,
        {
            "mc_id": config.merchant_id,
            "tran_id": params.tran_id,
            "complete_amount": params.complete_amount,
            "payout": list(params.payout),
        },
        now=now,
    )


def build_cancel_pre_auth_payload(
    config: PayWayConfig,
    params: CancelPreAuthParams,
    *,
    now: Optional[datetime] = None,
) -> BuiltPayload:
    """Release the funds held by a pre-authorization."""
    _require_rsa_public_key(config)
    return _pre_auth_payload(
        config,
        PRE_AUTH_CANCELLATION_PATH,
        {"mc_id": config.merchant_id, "tran_id": params.tran_id},
        now=now,
    )
