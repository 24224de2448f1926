"""
Request signing and merchant auth encryption for the PayWay gateway.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import math
from typing import Any, Iterable, List, Mapping, Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .encoding import compact_json, stringify
from .errors import EncryptionError

__all__ = [
    "RSA_CHUNK_SIZE",
    "chunk_plaintext",
    "create_hash",
    "encrypt_merchant_auth",
    "expected_chunk_count",
    "load_rsa_public_key",
    "serialize_merchant_auth",
]

# Largest PKCS#1 v1.5 plaintext for a 1024-bit modulus (128 - 11 bytes).
RSA_CHUNK_SIZE = 117


def create_hash(values: Iterable[Any], api_key: str) -> str:
    """
    Sign ``values`` with HMAC-SHA512 keyed by ``api_key``.

    Values are stringified and concatenated without a separator; the digest
    is returned base64 encoded.
    """
    data = "".join(stringify(value) for value in values)
    digest = hmac.new(
        api_key.encode("utf-8"),
        data.encode("utf-8"),
        hashlib.sha512,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def serialize_merchant_auth(data: Mapping[str, Any]) -> str:
    return compact_json(data)


def chunk_plaintext(data: bytes, size: int = RSA_CHUNK_SIZE) -> List[bytes]:
    if size <= 0:
        raise ValueError("Chunk size must be positive")
    return [data[offset : offset + size] for offset in range(0, len(data), size)]


def expected_chunk_count(data: bytes, size: int = RSA_CHUNK_SIZE) -> int:
    return math.ceil(len(data) / size)


def load_rsa_public_key(public_key_pem: Optional[Union[str, bytes]]) -> rsa.RSAPublicKey:
    if not public_key_pem:
        raise EncryptionError("RSA public key is required for pre-auth operations")

    raw = public_key_pem.encode("utf-8") if isinstance(public_key_pem, str) else public_key_pem
    try:
        key = serialization.load_pem_public_key(raw.strip())
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise EncryptionError(f"RSA public key could not be loaded: {exc}") from exc

    if not isinstance(key, rsa.RSAPublicKey):
        raise EncryptionError("Configured public key is not an RSA key")
    return key


def encrypt_merchant_auth(
    plaintext: Union[str, bytes],
    public_key_pem: Optional[Union[str, bytes]],
) -> str:
    """
    Encrypt ``plaintext`` for the ``merchant_auth`` field.

    The UTF-8 bytes are split into 117-byte chunks, each chunk is encrypted
    with RSA PKCS#1 v1.5, and the concatenated ciphertexts are base64 encoded.
    The gateway decrypts on exactly these chunk boundaries.
    """
    key = load_rsa_public_key(public_key_pem)
    data = plaintext.encode("utf-8") if isinstance(plaintext, str) else plaintext

    encrypted = bytearray()
    for chunk in chunk_plaintext(data):
        try:
            encrypted.extend(key.encrypt(chunk, padding.PKCS1v15()))
        except ValueError as exc:
            raise EncryptionError(f"RSA encryption failed: {exc}") from exc
    return base64.b64encode(bytes(encrypted)).decode("ascii")
