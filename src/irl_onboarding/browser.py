"""Host capability API handed to a page once a profile exists.

Mirrors what a native IRL Browser exposes: signed profile and avatar
credentials addressed to the requesting origin.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import structlog

from . import __version__
from .credentials.issuance import Identity, issue_avatar_credential, issue_profile_details_credential
from .storage.profile_store import ProfileStore

logger = structlog.get_logger(__name__)

SUPPORTED_PERMISSIONS = ("profile",)


@dataclass(frozen=True, slots=True)
class BrowserDetails:
    name: str = "IRL Browser Onboarding"
    version: str = __version__
    platform: str = "browser"
    supported_permissions: List[str] = field(default_factory=lambda: list(SUPPORTED_PERMISSIONS))

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "version": self.version,
            "platform": self.platform,
            "supportedPermissions": list(self.supported_permissions),
        }


class IrlBrowser:
    """Issue credentials for the stored identity to a single origin"""

    def __init__(self, store: ProfileStore, origin: str) -> None:
        self.store = store
        self.origin = origin

    def get_profile_details(self) -> str:
        identity = Identity.from_store(self.store)
        return issue_profile_details_credential(identity, self.origin)

    def get_avatar(self) -> Optional[str]:
        identity = Identity.from_store(self.store)
        return issue_avatar_credential(identity, self.origin)

    def get_browser_details(self) -> BrowserDetails:
        return BrowserDetails()

    def request_permission(self, permission: str) -> bool:
        if permission in SUPPORTED_PERMISSIONS:
            return True
        logger.warning("permission.unsupported", permission=permission, origin=self.origin)
        return False

    def close(self) -> None:
        logger.info("browser.close", origin=self.origin)


__all__ = ["BrowserDetails", "IrlBrowser", "SUPPORTED_PERMISSIONS"]
