"""Ed25519 key material generation.

The secret key layout is ``seed || public_key`` (64 bytes), the format used by
libsodium and the IRL Browser apps, so stored keys stay interchangeable.
"""
from __future__ import annotations

import base64
import binascii
import os
from dataclasses import dataclass, field

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from ..utils.errors import EntropyUnavailable, InvalidKeyLength, InvalidKeyMaterial

SEED_SIZE = 32
PUBLIC_KEY_SIZE = 32
SECRET_KEY_SIZE = SEED_SIZE + PUBLIC_KEY_SIZE
SIGNATURE_SIZE = 64


@dataclass(frozen=True, slots=True)
class KeyPair:
    """Raw Ed25519 key pair; ``secret_key`` is kept out of repr"""

    secret_key: bytes = field(repr=False)
    public_key: bytes

    @property
    def seed(self) -> bytes:
        return self.secret_key[:SEED_SIZE]

    def secret_key_b64(self) -> str:
        """Standard base64 of the 64-byte secret key, the persisted form"""
        return base64.b64encode(self.secret_key).decode("ascii")


def generate_seed() -> bytes:
    try:
        return os.urandom(SEED_SIZE)
    except NotImplementedError as exc:
        raise EntropyUnavailable("No secure random number generator available") from exc


def raw_public_key(private_key: Ed25519PrivateKey) -> bytes:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def key_pair_from_seed(seed: bytes) -> KeyPair:
    """Deterministically derive the key pair for ``seed``."""
    if len(seed) != SEED_SIZE:
        raise InvalidKeyLength("seed", SEED_SIZE, len(seed))
    private_key = Ed25519PrivateKey.from_private_bytes(bytes(seed))
    public_key = raw_public_key(private_key)
    return KeyPair(secret_key=bytes(seed) + public_key, public_key=public_key)


def generate_key_pair() -> KeyPair:
    return key_pair_from_seed(generate_seed())


def secret_key_from_b64(value: str) -> bytes:
    """Decode a persisted standard-base64 secret key and check its length."""
    try:
        secret_key = base64.b64decode(value.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise InvalidKeyMaterial("Stored private key is not valid base64") from exc
    if len(secret_key) != SECRET_KEY_SIZE:
        raise InvalidKeyLength("secret key", SECRET_KEY_SIZE, len(secret_key))
    return secret_key


__all__ = [
    "KeyPair",
    "SEED_SIZE",
    "PUBLIC_KEY_SIZE",
    "SECRET_KEY_SIZE",
    "SIGNATURE_SIZE",
    "generate_seed",
    "generate_key_pair",
    "key_pair_from_seed",
    "raw_public_key",
    "secret_key_from_b64",
]
