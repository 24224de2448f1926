"""
Public, high-level helpers for working with the PayWay gateway.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import PayWayClient
from .core.config import PayWayConfig, load_payway_config
from .core.transport import Transport

__all__ = ["create_payway_client"]


def create_payway_client(
    *,
    config: Optional[PayWayConfig] = None,
    transport: Optional[Transport] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    base_url: Optional[str] = None,
    merchant_id: Optional[str] = None,
    api_key: Optional[str] = None,
    rsa_public_key: Optional[str] = None,
    rsa_public_key_file: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
) -> PayWayClient:
    """
    Construct a :class:`PayWayClient`.

    Callers either supply a ready-made :class:`PayWayConfig` or let the helper
    assemble one from the environment, a ``.env`` file and keyword arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            base_url,
            merchant_id,
            api_key,
            rsa_public_key,
            rsa_public_key_file,
            timeout_seconds,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built PayWayConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_payway_config(
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
    return PayWayClient(cfg, transport=transport, session=session)
