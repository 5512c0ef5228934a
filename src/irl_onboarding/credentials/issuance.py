"""Issue signed profile and avatar credentials for the local identity.

The identity is passed in explicitly; nothing here reads ambient storage, so
signing stays a pure function of (identity, audience, time).
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional

import structlog

from ..crypto.keys import SEED_SIZE, secret_key_from_b64
from ..did import derive_did
from ..models import Profile
from ..storage.profile_store import ProfileStore
from ..utils.errors import InvalidKeyMaterial, NoIdentity
from .assertion import sign_assertion
from .claims import CredentialType, build_claims

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Identity:
    """Profile plus the secret key that signs for it"""

    profile: Profile
    secret_key: bytes = field(repr=False)

    @property
    def did(self) -> str:
        return self.profile.did

    @classmethod
    def from_store(cls, store: ProfileStore) -> "Identity":
        profile = store.get_profile()
        private_key = store.get_private_key()
        if profile is None or private_key is None:
            raise NoIdentity("No profile found. User must create a profile first.")
        secret_key = secret_key_from_b64(private_key)
        if derive_did(secret_key[SEED_SIZE:]) != profile.did:
            raise InvalidKeyMaterial("Stored private key does not belong to the profile DID")
        return cls(profile=profile, secret_key=secret_key)


def load_identity(store: ProfileStore) -> Identity:
    return Identity.from_store(store)


def _require(identity: Optional[Identity]) -> Identity:
    if identity is None:
        raise NoIdentity("No profile found. User must create a profile first.")
    return identity


def _issue(identity: Identity, audience: str, credential_type: CredentialType, data: dict, now: Optional[int]) -> str:
    claims = build_claims(
        issuer=identity.did,
        audience=audience,
        credential_type=credential_type,
        data=data,
        now=now,
    )
    token = sign_assertion(claims, identity.secret_key)
    logger.info("credential.issued", iss=identity.did, aud=audience, type=credential_type.value, exp=claims["exp"])
    return token


def issue_profile_details_credential(
    identity: Optional[Identity], audience_origin: str, *, now: Optional[int] = None
) -> str:
    identity = _require(identity)
    profile = identity.profile
    data = {
        "did": profile.did,
        "name": profile.name,
        "socials": [link.to_dict() for link in profile.socials],
    }
    return _issue(identity, audience_origin, CredentialType.PROFILE_DETAILS, data, now)


def issue_avatar_credential(
    identity: Optional[Identity], audience_origin: str, *, now: Optional[int] = None
) -> Optional[str]:
    """Return a signed avatar credential, or ``None`` when no avatar is set."""
    identity = _require(identity)
    profile = identity.profile
    if not profile.avatar:
        return None
    data = {"did": profile.did, "avatar": profile.avatar}
    return _issue(identity, audience_origin, CredentialType.AVATAR, data, now)


class CredentialIssuer:
    """Binds an identity to a clock for repeated issuance"""

    def __init__(self, identity: Identity, *, clock: Callable[[], float] = time.time) -> None:
        self.identity = identity
        self._clock = clock

    def profile_details(self, audience_origin: str) -> str:
        return issue_profile_details_credential(self.identity, audience_origin, now=int(self._clock()))

    def avatar(self, audience_origin: str) -> Optional[str]:
        return issue_avatar_credential(self.identity, audience_origin, now=int(self._clock()))


__all__ = [
    "Identity",
    "CredentialIssuer",
    "load_identity",
    "issue_profile_details_credential",
    "issue_avatar_credential",
]
