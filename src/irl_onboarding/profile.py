"""Create and maintain the local profile and its identity key."""
from __future__ import annotations

from typing import Iterable, Optional

import structlog

from .crypto.keys import generate_key_pair
from .did import derive_did
from .models import Profile, SocialLink
from .storage.profile_store import ProfileStore
from .utils.errors import NoIdentity

logger = structlog.get_logger(__name__)


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError("Profile name must not be empty")
    return cleaned


def create_profile(
    store: ProfileStore,
    name: str,
    socials: Iterable[SocialLink] = (),
    avatar: Optional[str] = None,
) -> Profile:
    """Mint a fresh Ed25519 identity, derive its DID and persist both.

    Any existing profile in ``store`` is replaced; its key is gone afterwards.
    """
    name = _clean_name(name)
    key_pair = generate_key_pair()
    did = derive_did(key_pair.public_key)
    profile = Profile(did=did, name=name, socials=list(socials), avatar=avatar or None)
    store.save_private_key(key_pair.secret_key_b64())
    store.save_profile(profile)
    logger.info("identity.created", did=did, socials=len(profile.socials), avatar=bool(profile.avatar))
    return profile


def get_current_profile(store: ProfileStore) -> Optional[Profile]:
    return store.get_profile() if store.has_profile() else None


def update_profile(
    store: ProfileStore,
    *,
    name: Optional[str] = None,
    socials: Optional[Iterable[SocialLink]] = None,
    avatar: Optional[str] = None,
    clear_avatar: bool = False,
) -> Profile:
    """Change display fields; the DID and key stay as they are."""
    profile = get_current_profile(store)
    if profile is None:
        raise NoIdentity("No profile found. User must create a profile first.")
    if name is not None:
        profile.name = _clean_name(name)
    if socials is not None:
        profile.socials = list(socials)
    if clear_avatar:
        profile.avatar = None
    elif avatar is not None:
        profile.avatar = avatar or None
    store.save_profile(profile)
    logger.info("profile.updated", did=profile.did)
    return profile


def clear_profile(store: ProfileStore) -> None:
    store.clear_profile()


__all__ = ["create_profile", "get_current_profile", "update_profile", "clear_profile"]
