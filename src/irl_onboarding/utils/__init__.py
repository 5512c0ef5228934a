from __future__ import annotations

from .b58 import b58d, b58e
from .b64d import b64d
from .b64e import b64e

from .errors import (
    AudienceMismatch,
    CredentialExpired,
    CredentialRejected,
    DecodeError,
    EntropyUnavailable,
    InvalidClaims,
    InvalidDid,
    InvalidKeyLength,
    InvalidKeyMaterial,
    InvalidSignature,
    IrlError,
    MalformedAssertion,
    NoIdentity,
    UnexpectedCredentialType,
    constant_time_compare,
)

__all__ = [
    "b64e",
    "b64d",
    "b58e",
    "b58d",
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
