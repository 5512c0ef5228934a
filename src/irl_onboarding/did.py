"""did:key identifiers for Ed25519 public keys.

A DID is ``did:key:z`` followed by the base58btc encoding of the multicodec
prefix ``0xED 0x01`` and the 32-byte public key. Only this method is
supported; resolution is a pure decode, no network lookup happens.
"""
from __future__ import annotations

from typing import Any, Dict

from .crypto.keys import PUBLIC_KEY_SIZE
from .utils import b58d, b58e
from .utils.errors import DecodeError, InvalidDid, InvalidKeyLength

DID_KEY_PREFIX = "did:key:"
MULTIBASE_BASE58BTC = "z"
ED25519_MULTICODEC_PREFIX = b"\xed\x01"


def derive_did(public_key: bytes) -> str:
    if len(public_key) != PUBLIC_KEY_SIZE:
        raise InvalidKeyLength("public key", PUBLIC_KEY_SIZE, len(public_key))
    multicodec_key = ED25519_MULTICODEC_PREFIX + bytes(public_key)
    return f"{DID_KEY_PREFIX}{MULTIBASE_BASE58BTC}{b58e(multicodec_key)}"


def public_key_from_did(did: str) -> bytes:
    """Recover the Ed25519 public key encoded in ``did``.

    The multicodec prefix is checked before the remaining bytes are trusted as
    a key, so a did:key for another key type is rejected rather than misread.
    """
    if not isinstance(did, str) or not did.startswith(DID_KEY_PREFIX + MULTIBASE_BASE58BTC):
        raise InvalidDid(f"Unsupported DID: {did!r}")
    body = did[len(DID_KEY_PREFIX) + len(MULTIBASE_BASE58BTC):]
    try:
        decoded = b58d(body)
    except DecodeError as exc:
        raise InvalidDid(f"DID is not valid base58btc: {did!r}") from exc
    if not decoded.startswith(ED25519_MULTICODEC_PREFIX):
        raise InvalidDid("DID does not carry an Ed25519 multicodec prefix")
    public_key = decoded[len(ED25519_MULTICODEC_PREFIX):]
    if len(public_key) != PUBLIC_KEY_SIZE:
        raise InvalidDid(f"DID key is {len(public_key)} bytes, expected {PUBLIC_KEY_SIZE}")
    return public_key


def did_document(did: str) -> Dict[str, Any]:
    """Return the minimal W3C DID document for an Ed25519 did:key."""
    public_key_from_did(did)
    multibase = did[len(DID_KEY_PREFIX):]
    vm_id = f"{did}#{multibase}"
    return {
        "@context": [
            "https://www.w3.org/ns/did/v1",
            "https://w3id.org/security/suites/ed25519-2020/v1",
        ],
        "id": did,
        "verificationMethod": [
            {
                "id": vm_id,
                "type": "Ed25519VerificationKey2020",
                "controller": did,
                "publicKeyMultibase": multibase,
            }
        ],
        "authentication": [vm_id],
        "assertionMethod": [vm_id],
    }


__all__ = [
    "DID_KEY_PREFIX",
    "ED25519_MULTICODEC_PREFIX",
    "derive_did",
    "public_key_from_did",
    "did_document",
]
