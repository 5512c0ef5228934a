from __future__ import annotations

import pytest

from irl_onboarding.crypto.keys import KeyPair, key_pair_from_seed
from irl_onboarding.credentials.issuance import Identity
from irl_onboarding.models import Profile, SocialLink, SocialPlatform
from irl_onboarding.storage.profile_store import MemoryProfileStore

ZERO_SEED = bytes(32)
ZERO_DID = "did:key:z6MkiTBz1ymuepAQ4HEHYSF1H8quG5GLVVQR3djdX3mDooWp"


@pytest.fixture()
def zero_key_pair() -> KeyPair:
    return key_pair_from_seed(ZERO_SEED)


@pytest.fixture()
def other_key_pair() -> KeyPair:
    return key_pair_from_seed(bytes(range(32)))


@pytest.fixture()
def profile() -> Profile:
    return Profile(
        did=ZERO_DID,
        name="Ada",
        socials=[SocialLink(platform=SocialPlatform.GITHUB, handle="ada")],
    )


@pytest.fixture()
def identity(zero_key_pair: KeyPair, profile: Profile) -> Identity:
    return Identity(profile=profile, secret_key=zero_key_pair.secret_key)


@pytest.fixture()
def memory_store(zero_key_pair: KeyPair, profile: Profile) -> MemoryProfileStore:
    store = MemoryProfileStore()
    store.save_profile(profile)
    store.save_private_key(zero_key_pair.secret_key_b64())
    return store
