"""Shared pytest fixtures for the PayWay client tests."""

from __future__ import annotations

import base64
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Tuple

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from payway import PayWayClient, PayWayConfig, TransportResponse

SANDBOX_URL = "https://checkout-sandbox.payway.com.kh/"
FROZEN_NOW = datetime(2024, 1, 1, 12, 0, 0)


class RecordingTransport:
    """Transport double that records every call and replays canned responses."""

    def __init__(self, *responses: TransportResponse) -> None:
        self.responses = list(responses)
        self.calls: List[Tuple[str, Dict[str, str], Optional[float]]] = []

    def send(
        self,
        url: str,
        data: Mapping[str, str],
        *,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        self.calls.append((url, dict(data), timeout))
        return self.responses.pop(0)


def json_response(text: str, status_code: int = 200, reason: str = "OK") -> TransportResponse:
    return TransportResponse(
        status_code=status_code,
        reason=reason,
        content_type="application/json; charset=utf-8",
        text=text,
    )


def html_response(text: str, status_code: int = 200) -> TransportResponse:
    return TransportResponse(
        status_code=status_code,
        reason="OK",
        content_type="text/html; charset=utf-8",
        text=text,
    )


def decrypt_merchant_auth(private_key: rsa.RSAPrivateKey, merchant_auth: str) -> bytes:
    """Undo the chunked encryption the way the gateway does."""
    ciphertext = base64.b64decode(merchant_auth)
    block = private_key.key_size // 8
    plaintext = b""
    for offset in range(0, len(ciphertext), block):
        plaintext += private_key.decrypt(
            ciphertext[offset : offset + block], padding.PKCS1v15()
        )
    return plaintext


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """A 1024-bit key, the size the gateway issues to merchants."""
    return rsa.generate_private_key(public_exponent=65537, key_size=1024)


@pytest.fixture(scope="session")
def rsa_public_key_pem(rsa_private_key: rsa.RSAPrivateKey) -> str:
    return (
        rsa_private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode("ascii")
    )


@pytest.fixture
def config() -> PayWayConfig:
    return PayWayConfig(
        base_url=SANDBOX_URL,
        merchant_id="merchant_123",
        api_key="api_key_456",
    )


@pytest.fixture
def pre_auth_config(rsa_public_key_pem: str) -> PayWayConfig:
    return PayWayConfig(
        base_url=SANDBOX_URL,
        merchant_id="merchant_123",
        api_key="api_key_456",
        rsa_public_key=rsa_public_key_pem,
    )


@pytest.fixture
def client(config: PayWayConfig) -> PayWayClient:
    return PayWayClient(config, transport=RecordingTransport())


@pytest.fixture
def pre_auth_client(pre_auth_config: PayWayConfig) -> PayWayClient:
    return PayWayClient(pre_auth_config, transport=RecordingTransport())
