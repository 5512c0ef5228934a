from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey
)

from ..utils.errors import InvalidKeyLength, InvalidKeyMaterial, constant_time_compare
from .keys import PUBLIC_KEY_SIZE, SECRET_KEY_SIZE, SEED_SIZE, SIGNATURE_SIZE, raw_public_key


class Ed25519Signer:
    """Thin wrapper around Ed25519 that works on raw 64-byte secret keys and 32-byte public keys"""

    def __init__(self, *, private_key: Ed25519PrivateKey | None = None, public_key: Ed25519PublicKey | None = None) -> None:
        if not private_key and not public_key:
            raise InvalidKeyMaterial("At least one of private_key or public_key is required")
        self._private_key = private_key
        self._public_key = public_key or private_key.public_key()  # type: ignore[union-attr]

    @classmethod
    def from_secret_key(cls, secret_key: bytes) -> Ed25519Signer:
        """Load a ``seed || public_key`` secret key, rejecting a mismatched public half."""
        if len(secret_key) != SECRET_KEY_SIZE:
            raise InvalidKeyLength("secret key", SECRET_KEY_SIZE, len(secret_key))
        private_key = Ed25519PrivateKey.from_private_bytes(bytes(secret_key[:SEED_SIZE]))
        if not constant_time_compare(raw_public_key(private_key), bytes(secret_key[SEED_SIZE:])):
            raise InvalidKeyMaterial("Secret key public half does not match its seed")
        return cls(private_key=private_key)

    @classmethod
    def from_public_key(cls, public_key: bytes) -> Ed25519Signer:
        if len(public_key) != PUBLIC_KEY_SIZE:
            raise InvalidKeyLength("public key", PUBLIC_KEY_SIZE, len(public_key))
        try:
            return cls(public_key=Ed25519PublicKey.from_public_bytes(bytes(public_key)))
        except ValueError as exc:
            raise InvalidKeyMaterial("Not a valid Ed25519 public key") from exc

    @property
    def public_key(self) -> bytes:
        return self._public_key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    def sign(self, *, message: bytes) -> bytes:
        if not self._private_key:
            raise InvalidKeyMaterial("Signing requested without private key material")
        return self._private_key.sign(message)

    def verify(self, *, message: bytes, signature: bytes) -> bool:
        if len(signature) != SIGNATURE_SIZE:
            return False
        try:
            self._public_key.verify(signature, message)
        except InvalidSignature:
            return False
        return True
