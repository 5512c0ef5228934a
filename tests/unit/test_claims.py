import sys

import pytest

from irl_onboarding.credentials.assertion import HEADER, canonical_json, sign_assertion
from irl_onboarding.credentials.claims import (
    CREDENTIAL_TTL_SECONDS,
    CredentialType,
    accept_credential,
    build_claims,
    check_claims,
)
from irl_onboarding.did import derive_did
from irl_onboarding.utils import b64e
from irl_onboarding.utils.errors import (
    AudienceMismatch,
    CredentialExpired,
    InvalidClaims,
    InvalidSignature,
    UnexpectedCredentialType,
)

ORIGIN = "https://app.example"


def _claims(did: str, now: int = 1_700_000_000) -> dict:
    return build_claims(
        issuer=did,
        audience=ORIGIN,
        credential_type=CredentialType.PROFILE_DETAILS,
        data={"did": did, "name": "Ada"},
        now=now,
    )


def test_build_claims_order_and_window() -> None:
    claims = _claims("did:key:zABC", now=1000)
    assert list(claims) == ["iss", "aud", "iat", "exp", "type", "data"]
    assert claims["exp"] - claims["iat"] == CREDENTIAL_TTL_SECONDS == 120
    assert claims["type"] == "irl:profile:details"


def test_check_claims_accepts_fresh() -> None:
    check_claims(_claims("did:key:zABC", now=1000), audience=ORIGIN, now=1119)


def test_check_claims_expiry_boundary() -> None:
    claims = _claims("did:key:zABC", now=1000)
    with pytest.raises(CredentialExpired):
        check_claims(claims, audience=ORIGIN, now=1120)
    check_claims(claims, audience=ORIGIN, now=1125, leeway=10)


def test_check_claims_audience_and_type() -> None:
    claims = _claims("did:key:zABC", now=1000)
    with pytest.raises(AudienceMismatch):
        check_claims(claims, audience="https://evil.example", now=1000)
    with pytest.raises(UnexpectedCredentialType):
        check_claims(claims, audience=ORIGIN, now=1000, expected_type=CredentialType.AVATAR)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda c: c.pop("iss"),
        lambda c: c.pop("data"),
        lambda c: c.update(exp=c["iat"]),
        lambda c: c.update(exp="1120"),
        lambda c: c.update(iat=True),
    ],
)
def test_check_claims_rejects_inconsistent(mutate) -> None:
    claims = _claims("did:key:zABC", now=1000)
    mutate(claims)
    with pytest.raises(InvalidClaims):
        check_claims(claims, audience=ORIGIN, now=1000)


def test_check_claims_rejects_non_object() -> None:
    with pytest.raises(InvalidClaims):
        check_claims([1, 2], audience=ORIGIN, now=0)


def test_accept_credential_resolves_issuer(zero_key_pair) -> None:
    did = derive_did(zero_key_pair.public_key)
    token = sign_assertion(_claims(did, now=1000), zero_key_pair.secret_key)
    claims = accept_credential(token, audience=ORIGIN, now=1010, expected_type=CredentialType.PROFILE_DETAILS)
    assert claims["iss"] == did
    assert claims["data"]["name"] == "Ada"


def test_accept_credential_rejects_forged_issuer(zero_key_pair, other_key_pair) -> None:
    did = derive_did(other_key_pair.public_key)
    token = sign_assertion(_claims(did, now=1000), zero_key_pair.secret_key)
    with pytest.raises(InvalidSignature):
        accept_credential(token, audience=ORIGIN, now=1010)


def test_accept_credential_rejects_mismatched_data_did(zero_key_pair, other_key_pair) -> None:
    did = derive_did(zero_key_pair.public_key)
    claims = _claims(did, now=1000)
    claims["data"]["did"] = derive_did(other_key_pair.public_key)
    token = sign_assertion(claims, zero_key_pair.secret_key)
    with pytest.raises(InvalidClaims):
        accept_credential(token, audience=ORIGIN, now=1010)


def test_accept_credential_rejects_expired(zero_key_pair) -> None:
    did = derive_did(zero_key_pair.public_key)
    token = sign_assertion(_claims(did, now=1000), zero_key_pair.secret_key)
    with pytest.raises(CredentialExpired):
        accept_credential(token, audience=ORIGIN, now=2000)


@pytest.mark.parametrize("token", ["", "a.b", "a.b.c"])
def test_accept_credential_rejects_malformed(token: str) -> None:
    with pytest.raises(InvalidClaims):
        accept_credential(token, audience=ORIGIN, now=0)


def test_accept_credential_rejects_non_did_key_issuer(zero_key_pair) -> None:
    token = sign_assertion(_claims("did:web:example.com", now=1000), zero_key_pair.secret_key)
    with pytest.raises(InvalidClaims):
        accept_credential(token, audience=ORIGIN, now=1010)


def _header_segment() -> str:
    return b64e(canonical_json(HEADER.to_dict()))


def test_accept_credential_rejects_undecodable_json() -> None:
    token = _header_segment() + "." + b64e(b"[" * 100_000 + b"]" * 100_000) + ".c2ln"
    with pytest.raises(InvalidClaims):
        accept_credential(token, audience=ORIGIN, now=0)


@pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no int digit limit")
def test_accept_credential_rejects_oversized_integer() -> None:
    token = _header_segment() + "." + b64e(b"{\"iat\":" + b"1" * 5000 + b"}") + ".c2ln"
    with pytest.raises(InvalidClaims):
        accept_credential(token, audience=ORIGIN, now=0)
