"""Compact signed assertions (EdDSA JWTs).

Wire format::

    b64url(header) "." b64url(payload) "." b64url(ed25519 signature)

The signature covers the ASCII text of the first two segments exactly as
transmitted. Verification never re-serializes JSON, so any change to a
segment, including a different but equivalent encoding, fails.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

import structlog

from ..crypto.signing import Ed25519Signer
from ..utils import b64d, b64e
from ..utils.errors import DecodeError, InvalidKeyLength, InvalidKeyMaterial, MalformedAssertion

logger = structlog.get_logger(__name__)

SEGMENT_SEPARATOR = "."


class Algorithm(str, Enum):
    """Closed set of signing algorithms; the header value is never negotiated."""

    EDDSA = "EdDSA"


@dataclass(frozen=True, slots=True)
class Header:
    alg: Algorithm = Algorithm.EDDSA
    typ: str = "JWT"

    def to_dict(self) -> Dict[str, str]:
        return {"alg": self.alg.value, "typ": self.typ}


HEADER = Header()


@dataclass(frozen=True, slots=True)
class UnverifiedAssertion:
    """Parsed content of an assertion whose signature has NOT been checked.

    Nothing here may be trusted until :func:`verify_assertion` has returned
    ``True`` for the same token and the issuer's public key.
    """
    header: Dict[str, Any]
    payload: Any
    signature: bytes = field(repr=False)
    signing_input: str = field(repr=False)


def canonical_json(value: Any) -> bytes:
    """Serialize without whitespace, keeping mapping insertion order."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False).encode("utf-8")


def _split(assertion: str) -> Optional[Tuple[str, str, str]]:
    if not isinstance(assertion, str):
        return None
    parts = assertion.split(SEGMENT_SEPARATOR)
    if len(parts) != 3 or not all(parts):
        return None
    return parts[0], parts[1], parts[2]


def sign_assertion(payload: Mapping[str, Any], secret_key: bytes) -> str:
    """Sign ``payload`` with a 64-byte Ed25519 secret key and return the compact token."""
    signer = Ed25519Signer.from_secret_key(secret_key)
    header_segment = b64e(canonical_json(HEADER.to_dict()))
    payload_segment = b64e(canonical_json(payload))
    signing_input = f"{header_segment}{SEGMENT_SEPARATOR}{payload_segment}"
    signature = signer.sign(message=signing_input.encode("utf-8"))
    return f"{signing_input}{SEGMENT_SEPARATOR}{b64e(signature)}"


def verify_assertion(assertion: str, public_key: bytes) -> bool:
    """Return ``True`` only for a valid signature by ``public_key`` over the exact segments.

    Claims are not interpreted: an expired token with a good signature still
    verifies. Malformed input of any kind yields ``False``.
    """
    parts = _split(assertion)
    if parts is None:
        logger.debug("assertion.verify.failed", reason="segments")
        return False
    header_segment, payload_segment, signature_segment = parts
    try:
        signature = b64d(signature_segment)
        verifier = Ed25519Signer.from_public_key(public_key)
    except (DecodeError, InvalidKeyLength, InvalidKeyMaterial, TypeError) as exc:
        logger.debug("assertion.verify.failed", reason=type(exc).__name__)
        return False
    signing_input = f"{header_segment}{SEGMENT_SEPARATOR}{payload_segment}"
    try:
        message = signing_input.encode("ascii")
    except UnicodeEncodeError:
        logger.debug("assertion.verify.failed", reason="non-ascii")
        return False
    valid = verifier.verify(message=message, signature=signature)
    if not valid:
        logger.debug("assertion.verify.failed", reason="signature")
    return valid


def decode_unverified(assertion: str) -> UnverifiedAssertion:
    """Parse an assertion for inspection WITHOUT checking its signature."""
    parts = _split(assertion)
    if parts is None:
        raise MalformedAssertion("Invalid assertion format. Expected 3 non-empty parts separated by dots.")
    header_segment, payload_segment, signature_segment = parts
    try:
        header = json.loads(b64d(header_segment).decode("utf-8"))
        payload = json.loads(b64d(payload_segment).decode("utf-8"))
        signature = b64d(signature_segment)
    except (DecodeError, ValueError, RecursionError) as exc:
        raise MalformedAssertion(f"Assertion segment could not be decoded: {exc}") from exc
    if not isinstance(header, dict):
        raise MalformedAssertion("Assertion header is not a JSON object")
    return UnverifiedAssertion(
        header=header,
        payload=payload,
        signature=signature,
        signing_input=f"{header_segment}{SEGMENT_SEPARATOR}{payload_segment}",
    )


__all__ = [
    "Algorithm",
    "Header",
    "HEADER",
    "UnverifiedAssertion",
    "canonical_json",
    "sign_assertion",
    "verify_assertion",
    "decode_unverified",
]
