from __future__ import annotations

import secrets


class IrlError(Exception):
    """Base exception for IRL onboarding"""


class DecodeError(IrlError, ValueError):
    """Raised when base64url or base58 text cannot be decoded"""


class EntropyUnavailable(IrlError):
    """Raised when the host has no cryptographically secure random source"""


class InvalidKeyLength(IrlError, ValueError):
    """Raised when key bytes do not have the length the operation requires"""

    def __init__(self, kind: str, expected: int, actual: int) -> None:
        super().__init__(f"Invalid {kind} length. Expected {expected} bytes, got {actual}.")
        self.kind = kind
        self.expected = expected
        self.actual = actual


class InvalidKeyMaterial(IrlError, ValueError):
    """Raised when key bytes have the right length but are not a usable Ed25519 key"""


class InvalidDid(IrlError, ValueError):
    """Raised when a DID is not a well-formed Ed25519 did:key"""


class MalformedAssertion(IrlError, ValueError):
    """Raised when a signed assertion does not have the header.payload.signature shape"""


class NoIdentity(IrlError):
    """Raised when no persisted identity exists; the user must create a profile first"""


class CredentialRejected(IrlError):
    """Base for reasons a relying party refuses a credential"""


class InvalidSignature(CredentialRejected):
    """Raised when the signature does not match the issuer's public key"""


class CredentialExpired(CredentialRejected):
    """Raised when the credential's exp claim has passed"""


class AudienceMismatch(CredentialRejected):
    """Raised when the aud claim names a different origin"""


class UnexpectedCredentialType(CredentialRejected):
    """Raised when the type claim is not the one the caller asked for"""


class InvalidClaims(CredentialRejected):
    """Raised when required claims are missing or inconsistent"""


def constant_time_compare(lhs: bytes | str, rhs: bytes | str) -> bool:
    """Compare two byte sequences without leaking timing information"""
    if isinstance(lhs, str):
        lhs = lhs.encode("utf-8")
    if isinstance(rhs, str):
        rhs = rhs.encode("utf-8")

    return secrets.compare_digest(lhs, rhs)


__all__ = [
    "IrlError",
    "DecodeError",
    "EntropyUnavailable",
    "InvalidKeyLength",
    "InvalidKeyMaterial",
    "InvalidDid",
    "MalformedAssertion",
    "NoIdentity",
    "CredentialRejected",
    "InvalidSignature",
    "CredentialExpired",
    "AudienceMismatch",
    "UnexpectedCredentialType",
    "InvalidClaims",
    "constant_time_compare",
]
