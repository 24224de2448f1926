"""
Credentials and configuration for the PayWay client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlsplit

from .encoding import stringify
from .environment import build_environment
from .errors import ConfigurationError

__all__ = [
    "DEFAULT_BASE_URL",
    "PayWayConfig",
    "load_payway_config",
]

DEFAULT_BASE_URL = "https://checkout-sandbox.payway.com.kh/"
DEFAULT_TIMEOUT_SECONDS = 30.0

_PARAMETER_TO_ENV_KEY = {
    "base_url": "PAYWAY_BASE_URL",
    "merchant_id": "PAYWAY_MERCHANT_ID",
    "api_key": "PAYWAY_API_KEY",
    "rsa_public_key": "PAYWAY_RSA_PUBLIC_KEY",
    "rsa_public_key_file": "PAYWAY_RSA_PUBLIC_KEY_FILE",
    "timeout_seconds": "PAYWAY_TIMEOUT_SECONDS",
}


def _collect_parameter_overrides(explicit: Mapping[str, Any]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for key, value in explicit.items():
        if value is None:
            continue
        overrides[_PARAMETER_TO_ENV_KEY[key]] = stringify(value)
    return overrides


def _normalize_base_url(raw_url: str) -> str:
    value = raw_url.strip()
    parts = urlsplit(value)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(
            f"Base URL must be an absolute http(s) URL, got '{raw_url}'"
        )
    if not value.endswith("/"):
        value += "/"
    return value


def _require_text(value: Optional[str], field_name: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ConfigurationError(f"{field_name} must not be empty")
    return text


def _read_public_key_file(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(
            f"PAYWAY_RSA_PUBLIC_KEY_FILE could not be read: {exc}"
        ) from exc


@dataclass(frozen=True)
class PayWayConfig:
    """
    Static merchant credentials held by one client.

    ``api_key`` is the HMAC secret. ``rsa_public_key`` is the PEM encoded key
    issued by the bank; it is only needed for pre-auth operations.
    """

    base_url: str
    merchant_id: str
    api_key: str = field(repr=False)
    rsa_public_key: Optional[str] = field(default=None, repr=False)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", _normalize_base_url(self.base_url))
        object.__setattr__(
            self, "merchant_id", _require_text(self.merchant_id, "merchant_id")
        )
        _require_text(self.api_key, "api_key")
        if self.rsa_public_key is not None and not self.rsa_public_key.strip():
            object.__setattr__(self, "rsa_public_key", None)
        if self.timeout_seconds <= 0:
            raise ConfigurationError("timeout_seconds must be greater than zero")

    @property
    def has_rsa_public_key(self) -> bool:
        return self.rsa_public_key is not None

    def endpoint(self, path: str) -> str:
        return f"{self.base_url}{path.lstrip('/')}"

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "PayWayConfig":
        base_url = values.get("PAYWAY_BASE_URL", DEFAULT_BASE_URL)

        merchant_id = values.get("PAYWAY_MERCHANT_ID")
        if merchant_id is None:
            raise ConfigurationError("PAYWAY_MERCHANT_ID must be provided")
        api_key = values.get("PAYWAY_API_KEY")
        if api_key is None:
            raise ConfigurationError("PAYWAY_API_KEY must be provided")

        rsa_public_key = values.get("PAYWAY_RSA_PUBLIC_KEY")
        key_file = values.get("PAYWAY_RSA_PUBLIC_KEY_FILE")
        if not rsa_public_key and key_file:
            rsa_public_key = _read_public_key_file(key_file)

        timeout_raw = values.get("PAYWAY_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        try:
            timeout_seconds = float(timeout_raw)
        except ValueError as exc:
            raise ConfigurationError(
                f"PAYWAY_TIMEOUT_SECONDS must be a number, got '{timeout_raw}'"
            ) from exc

        return cls(
            base_url=base_url,
            merchant_id=merchant_id,
            api_key=api_key,
            rsa_public_key=rsa_public_key or None,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        base_url: Optional[str] = None,
        merchant_id: Optional[str] = None,
        api_key: Optional[str] = None,
        rsa_public_key: Optional[str] = None,
        rsa_public_key_file: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ) -> "PayWayConfig":
        parameter_overrides = _collect_parameter_overrides(
            {
                "base_url": base_url,
                "merchant_id": merchant_id,
                "api_key": api_key,
                "rsa_public_key": rsa_public_key,
                "rsa_public_key_file": rsa_public_key_file,
                "timeout_seconds": timeout_seconds,
            }
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_payway_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    base_url: Optional[str] = None,
    merchant_id: Optional[str] = None,
    api_key: Optional[str] = None,
    rsa_public_key: Optional[str] = None,
    rsa_public_key_file: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
) -> PayWayConfig:
    """
    Convenience wrapper that mirrors :meth:`PayWayConfig.from_env`.

    Settings may come from the process environment, a ``.env`` file, keyword
    arguments, or any combination; keyword arguments win.
    """
    return PayWayConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        base_url=base_url,
        merchant_id=merchant_id,
        api_key=api_key,
        rsa_public_key=rsa_public_key,
        rsa_public_key_file=rsa_public_key_file,
        timeout_seconds=timeout_seconds,
    )
