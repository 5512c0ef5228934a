"""Claim payloads and the relying-party acceptance check."""
from __future__ import annotations

import time
from enum import Enum
from typing import Any, Dict, Mapping, Optional

import structlog

from ..did import public_key_from_did
from ..utils.errors import (
    AudienceMismatch,
    CredentialExpired,
    InvalidClaims,
    InvalidDid,
    InvalidSignature,
    MalformedAssertion,
    UnexpectedCredentialType,
)
from .assertion import decode_unverified, verify_assertion

logger = structlog.get_logger(__name__)

# Validity window of every issued credential, in seconds.
CREDENTIAL_TTL_SECONDS = 120

REQUIRED_CLAIMS = ("iss", "aud", "iat", "exp", "type", "data")


class CredentialType(str, Enum):
    PROFILE_DETAILS = "irl:profile:details"
    AVATAR = "irl:avatar"


def build_claims(
    *,
    issuer: str,
    audience: str,
    credential_type: CredentialType,
    data: Mapping[str, Any],
    now: Optional[int] = None,
) -> Dict[str, Any]:
    issued_at = int(time.time()) if now is None else int(now)
    return {
        "iss": issuer,
        "aud": audience,
        "iat": issued_at,
        "exp": issued_at + CREDENTIAL_TTL_SECONDS,
        "type": credential_type.value,
        "data": dict(data),
    }


def check_claims(
    claims: Any,
    *,
    audience: str,
    now: Optional[int] = None,
    leeway: int = 0,
    expected_type: Optional[CredentialType] = None,
) -> None:
    """Raise a :class:`CredentialRejected` subclass unless ``claims`` are currently acceptable."""
    if not isinstance(claims, Mapping):
        raise InvalidClaims("Claims payload is not an object")
    missing = [name for name in REQUIRED_CLAIMS if name not in claims]
    if missing:
        raise InvalidClaims(f"Missing claims: {', '.join(missing)}")
    iat, exp = claims["iat"], claims["exp"]
    if not all(isinstance(value, int) and not isinstance(value, bool) for value in (iat, exp)):
        raise InvalidClaims("iat and exp must be integer unix timestamps")
    if exp <= iat:
        raise InvalidClaims("exp must be later than iat")
    current = int(time.time()) if now is None else int(now)
    if current >= exp + leeway:
        raise CredentialExpired(f"Credential expired at {exp}")
    if claims["aud"] != audience:
        raise AudienceMismatch(f"Credential is for {claims['aud']!r}, not {audience!r}")
    if expected_type is not None and claims["type"] != expected_type.value:
        raise UnexpectedCredentialType(f"Expected {expected_type.value}, got {claims['type']!r}")


def accept_credential(
    assertion: str,
    *,
    audience: str,
    now: Optional[int] = None,
    leeway: int = 0,
    expected_type: Optional[CredentialType] = None,
) -> Dict[str, Any]:
    """Verify a credential against the key embedded in its ``iss`` DID and check its claims.

    Returns the payload once the signature, expiry, audience and (optionally)
    type all check out.
    """
    try:
        unverified = decode_unverified(assertion)
    except MalformedAssertion as exc:
        raise InvalidClaims(str(exc)) from exc
    claims = unverified.payload
    if not isinstance(claims, dict) or not isinstance(claims.get("iss"), str):
        raise InvalidClaims("Credential has no issuer DID")
    issuer = claims["iss"]
    try:
        public_key = public_key_from_did(issuer)
    except InvalidDid as exc:
        raise InvalidClaims(f"Issuer is not an Ed25519 did:key: {exc}") from exc
    data = claims.get("data")
    if isinstance(data, Mapping) and "did" in data and data["did"] != issuer:
        raise InvalidClaims("data.did does not match the issuer")
    if not verify_assertion(assertion, public_key):
        raise InvalidSignature(f"Signature does not match issuer {issuer}")
    check_claims(claims, audience=audience, now=now, leeway=leeway, expected_type=expected_type)
    logger.info("credential.accepted", iss=issuer, aud=audience, type=claims["type"])
    return claims


__all__ = [
    "CREDENTIAL_TTL_SECONDS",
    "CredentialType",
    "build_claims",
    "check_claims",
    "accept_credential",
]
