import pytest

from irl_onboarding.credentials.issuance import Identity
from irl_onboarding.did import derive_did, public_key_from_did
from irl_onboarding.models import SocialLink, SocialPlatform
from irl_onboarding.profile import clear_profile, create_profile, get_current_profile, update_profile
from irl_onboarding.storage.profile_store import MemoryProfileStore
from irl_onboarding.utils.errors import NoIdentity


def test_create_profile_persists_identity() -> None:
    store = MemoryProfileStore()
    profile = create_profile(store, "  Ada  ", [SocialLink(SocialPlatform.X, "ada")])
    assert profile.name == "Ada"
    assert profile.did.startswith("did:key:z6Mk")
    identity = Identity.from_store(store)
    assert derive_did(identity.secret_key[32:]) == profile.did
    assert public_key_from_did(profile.did) == identity.secret_key[32:]
    assert get_current_profile(store) == profile


def test_create_profile_rejects_blank_name() -> None:
    store = MemoryProfileStore()
    with pytest.raises(ValueError):
        create_profile(store, "   ")
    assert not store.has_profile()


def test_create_profile_mints_new_identity_each_time() -> None:
    store = MemoryProfileStore()
    first = create_profile(store, "Ada")
    second = create_profile(store, "Ada")
    assert first.did != second.did
    assert Identity.from_store(store).did == second.did


def test_update_profile_keeps_did() -> None:
    store = MemoryProfileStore()
    created = create_profile(store, "Ada", avatar="data:image/png;base64,AAAA")
    updated = update_profile(store, name="Grace", socials=[])
    assert updated.did == created.did
    assert updated.name == "Grace"
    assert updated.avatar == "data:image/png;base64,AAAA"
    assert update_profile(store, clear_avatar=True).avatar is None
    assert get_current_profile(store).name == "Grace"


def test_update_without_profile() -> None:
    with pytest.raises(NoIdentity):
        update_profile(MemoryProfileStore(), name="Ada")


def test_clear_profile() -> None:
    store = MemoryProfileStore()
    create_profile(store, "Ada")
    clear_profile(store)
    assert get_current_profile(store) is None
    with pytest.raises(NoIdentity):
        Identity.from_store(store)
