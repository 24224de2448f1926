"""
PayWay client: payload builders bound to one set of credentials, plus the
execution step that posts a payload and classifies the response.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from types import TracebackType
from typing import Any, Iterable, Mapping, Optional, Type, TypeVar

import requests

from .config import PayWayConfig
from .errors import APIError, UnexpectedContentTypeError, UnsupportedOperationError
from .params import (
    HTML_PAYMENT_OPTION,
    CancelPreAuthParams,
    CompletePreAuthParams,
    CompletePreAuthWithPayoutParams,
    CreateTransactionParams,
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
from .signing import create_hash
from .transport import RequestsTransport, Transport, TransportResponse

__all__ = ["PayWayClient", "execute_payload"]

P = TypeVar("P")


def _is_json(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def _is_html(content_type: str) -> bool:
    return "text/html" in content_type.lower()


def _error_body(response: TransportResponse) -> Any:
    if _is_json(response.content_type):
        try:
            return json.loads(response.text)
        except json.JSONDecodeError:
            return response.text
    return response.text


def _html_or_raise(response: TransportResponse, allow_html: bool) -> str:
    if allow_html:
        return response.text
    raise UnexpectedContentTypeError(
        "Received HTML response but expected JSON. "
        "Pass allow_html=True to accept HTML content.",
        content_type=response.content_type,
        body=response.text,
    )


def execute_payload(
    transport: Transport,
    payload: BuiltPayload,
    *,
    allow_html: bool = False,
    timeout: Optional[float] = None,
) -> Any:
    """
    Post ``payload`` through ``transport`` and return the decoded response.

    JSON bodies are returned parsed; HTML bodies are only returned (as text)
    when ``allow_html`` is set.
    """
    if payload.payment_option == HTML_PAYMENT_OPTION and not allow_html:
        raise UnsupportedOperationError(
            f'Cannot execute server-to-server call with payment_option "{HTML_PAYMENT_OPTION}": '
            "the gateway answers with a checkout page. Submit the payload fields from "
            "the browser instead, or pass allow_html=True to receive the HTML."
        )

    logging.info("Submitting %s request to %s", payload.method, payload.url)
    response = transport.send(payload.url, payload.fields, timeout=timeout)

    if not response.ok:
        logging.warning(
            "PayWay responded with %s %s for %s",
            response.status_code,
            response.reason,
            payload.url,
        )
        raise APIError(response.status_code, response.reason, _error_body(response))

    if _is_json(response.content_type):
        try:
            return json.loads(response.text)
        except json.JSONDecodeError as exc:
            raise UnexpectedContentTypeError(
                f"Failed to parse JSON from PayWay at {payload.url}",
                content_type=response.content_type,
                body=response.text,
            ) from exc

    if _is_html(response.content_type):
        return _html_or_raise(response, allow_html)

    try:
        return json.loads(response.text)
    except json.JSONDecodeError:
        logging.debug(
            "Response from %s with content type %r is not JSON",
            payload.url,
            response.content_type,
        )
    return _html_or_raise(response, allow_html)


def _coerce_params(cls: Type[P], params: Optional[P], fields: Mapping[str, Any]) -> P:
    if params is None:
        return cls(**fields)
    if fields:
        raise TypeError(f"Pass either a {cls.__name__} or keyword fields, not both")
    return params


class PayWayClient:
    """
    Client for the ABA PayWay hosted payment gateway.

    ``build_*`` methods are pure and never touch the network; ``execute`` and
    the operation helpers (``create_transaction``, ``check_transaction``, ...)
    perform exactly one POST through the configured transport.
    """

    def __init__(
        self,
        config: PayWayConfig,
        *,
        transport: Optional[Transport] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if transport is not None and session is not None:
            raise ValueError("Provide either a transport or a session, not both.")
        self.config = config
        self.transport: Transport = transport or RequestsTransport(session)

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "PayWayClient":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def merchant_id(self) -> str:
        return self.config.merchant_id

    def create_hash(self, values: Iterable[Any]) -> str:
        return create_hash(values, self.config.api_key)

    def build_transaction_payload(
        self,
        params: Optional[CreateTransactionParams] = None,
        *,
        now: Optional[datetime] = None,
        **fields: Any,
    ) -> BuiltPayload:
        params = _coerce_params(CreateTransactionParams, params, fields)
        return build_transaction_payload(self.config, params, now=now)

    def build_check_transaction_payload(
        self,
        tran_id: str,
        *,
        now: Optional[datetime] = None,
    ) -> BuiltPayload:
        return build_check_transaction_payload(self.config, tran_id, now=now)

    def build_transaction_list_payload(
        self,
        params: Optional[TransactionListParams] = None,
        *,
        now: Optional[datetime] = None,
        **fields: Any,
    ) -> BuiltPayload:
        params = _coerce_params(TransactionListParams, params, fields)
        return build_transaction_list_payload(self.config, params, now=now)

    def build_complete_pre_auth_payload(
        self,
        params: Optional[CompletePreAuthParams] = None,
        *,
        now: Optional[datetime] = None,
        **fields: Any,
    ) -> BuiltPayload:
        params = _coerce_params(CompletePreAuthParams, params, fields)
        return build_complete_pre_auth_payload(self.config, params, now=now)

    def build_complete_pre_auth_with_payout_payload(
        self,
        params: Optional[CompletePreAuthWithPayoutParams] = None,
        *,
        now: Optional[datetime] = None,
        **fields: Any,
    ) -> BuiltPayload:
        params = _coerce_params(CompletePreAuthWithPayoutParams, params, fields)
        return build_complete_pre_auth_with_payout_payload(self.config, params, now=now)

    def build_cancel_pre_auth_payload(
        self,
        params: Optional[CancelPreAuthParams] = None,
        *,
        now: Optional[datetime] = None,
        **fields: Any,
    ) -> BuiltPayload:
        params = _coerce_params(CancelPreAuthParams, params, fields)
        return build_cancel_pre_auth_payload(self.config, params, now=now)

    def execute(self, payload: BuiltPayload, *, allow_html: bool = False) -> Any:
        return execute_payload(
            self.transport,
            payload,
            allow_html=allow_html,
            timeout=self.config.timeout_seconds,
        )

    def create_transaction(
        self,
        params: Optional[CreateTransactionParams] = None,
        *,
        allow_html: bool = False,
        **fields: Any,
    ) -> Any:
        payload = self.build_transaction_payload(params, **fields)
        return self.execute(payload, allow_html=allow_html)

    def check_transaction(self, tran_id: str) -> Any:
        return self.execute(self.build_check_transaction_payload(tran_id))

    def transaction_list(
        self,
        params: Optional[TransactionListParams] = None,
        **fields: Any,
    ) -> Any:
        return self.execute(self.build_transaction_list_payload(params, **fields))

    def complete_pre_auth(
        self,
        params: Optional[CompletePreAuthParams] = None,
        **fields: Any,
    ) -> Any:
        return self.execute(self.build_complete_pre_auth_payload(params, **fields))

    def complete_pre_auth_with_payout(
        self,
        params: Optional[CompletePreAuthWithPayoutParams] = None,
        **fields: Any,
    ) -> Any:
        return self.execute(
            self.build_complete_pre_auth_with_payout_payload(params, **fields)
        )

    def cancel_pre_auth(
        self,
        params: Optional[CancelPreAuthParams] = None,
        **fields: Any,
    ) -> Any:
        return self.execute(self.build_cancel_pre_auth_payload(params, **fields))
