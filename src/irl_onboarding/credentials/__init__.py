from .assertion import (
    HEADER,
    Algorithm,
    Header,
    UnverifiedAssertion,
    decode_unverified,
    sign_assertion,
    verify_assertion,
)
from .claims import (
    CREDENTIAL_TTL_SECONDS,
    CredentialType,
    accept_credential,
    build_claims,
    check_claims,
)
from .issuance import (
    CredentialIssuer,
    Identity,
    issue_avatar_credential,
    issue_profile_details_credential,
    load_identity,
)

__all__ = [
    "HEADER",
    "Algorithm",
    "Header",
    "UnverifiedAssertion",
    "sign_assertion",
    "verify_assertion",
    "decode_unverified",
    "CREDENTIAL_TTL_SECONDS",
    "CredentialType",
    "build_claims",
    "check_claims",
    "accept_credential",
    "Identity",
    "CredentialIssuer",
    "load_identity",
    "issue_profile_details_credential",
    "issue_avatar_credential",
]
