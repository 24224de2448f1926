"""
Typed parameter records, one per gateway operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence, Union

__all__ = [
    "CURRENCIES",
    "HTML_PAYMENT_OPTION",
    "PAYMENT_OPTIONS",
    "TRANSACTION_STATUSES",
    "TRANSACTION_TYPES",
    "VIEW_TYPES",
    "CancelPreAuthParams",
    "CheckTransactionParams",
    "CompletePreAuthParams",
    "CompletePreAuthWithPayoutParams",
    "CreateTransactionParams",
    "PayoutItem",
    "ReturnDeeplink",
    "TransactionListParams",
]

Amount = Union[int, float, Decimal, str]

PAYMENT_OPTIONS = (
    "cards",
    "abapay",
    "abapay_deeplink",
    "abapay_khqr_deeplink",
    "wechat",
    "alipay",
    "bakong",
)

# Renders the hosted checkout page rather than returning JSON.
HTML_PAYMENT_OPTION = "abapay"

VIEW_TYPES = ("hosted_view", "popup")
CURRENCIES = ("USD", "KHR")
TRANSACTION_TYPES = ("purchase", "pre-auth")
TRANSACTION_STATUSES = (
    "APPROVED",
    "DECLINED",
    "PENDING",
    "PRE-AUTH",
    "CANCELLED",
    "REFUNDED",
)


@dataclass(frozen=True)
class ReturnDeeplink:
    """Per-platform deep link the payment app returns to."""

    android_scheme: str
    ios_scheme: str


@dataclass(frozen=True)
class PayoutItem:
    """One beneficiary of a payout split: account and amount."""

    acc: str
    amt: Amount


@dataclass(frozen=True)
class CreateTransactionParams:
    """
    Parameters of the ``purchase`` operation.

    Compound values for ``items``, ``custom_fields``, ``payout`` and
    ``additional_params`` are JSON serialized and base64 encoded by the
    builder; pass a ``str`` to send a value that is already encoded.
    """

    tran_id: Optional[str] = None
    amount: Optional[Amount] = None
    items: Optional[Union[str, Sequence[Mapping[str, Any]]]] = None
    shipping: Optional[Amount] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    type: Optional[str] = None
    payment_option: Optional[str] = None
    return_url: Optional[str] = None
    cancel_url: Optional[str] = None
    continue_success_url: Optional[str] = None
    return_deeplink: Optional[Union[str, ReturnDeeplink, Mapping[str, str]]] = None
    currency: Optional[str] = None
    custom_fields: Optional[Union[str, Mapping[str, Any]]] = None
    return_params: Optional[str] = None
    payout: Optional[Union[str, Sequence[PayoutItem], Sequence[Mapping[str, Any]]]] = None
    lifetime: Optional[int] = None
    additional_params: Optional[Union[str, Mapping[str, Any]]] = None
    google_pay_token: Optional[str] = None
    skip_success_page: Optional[Union[bool, int]] = None
    view_type: Optional[str] = None


@dataclass(frozen=True)
class CheckTransactionParams:
    tran_id: str


@dataclass(frozen=True)
class TransactionListParams:
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    from_amount: Optional[Amount] = None
    to_amount: Optional[Amount] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class CompletePreAuthParams:
    tran_id: str
    complete_amount: Amount


@dataclass(frozen=True)
class CompletePreAuthWithPayoutParams:
    tran_id: str
    complete_amount: Amount
    payout: Sequence[Union[PayoutItem, Mapping[str, Any]]]


@dataclass(frozen=True)
class CancelPreAuthParams:
    tran_id: str
