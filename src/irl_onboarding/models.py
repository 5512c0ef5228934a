"""Shared domain models used across IRL onboarding."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class SocialPlatform(str, Enum):
    INSTAGRAM = "INSTAGRAM"
    X = "X"
    BLUESKY = "BLUESKY"
    LINKEDIN = "LINKEDIN"
    YOUTUBE = "YOUTUBE"
    SPOTIFY = "SPOTIFY"
    TIKTOK = "TIKTOK"
    SNAPCHAT = "SNAPCHAT"
    GITHUB = "GITHUB"
    FACEBOOK = "FACEBOOK"
    REDDIT = "REDDIT"
    DISCORD = "DISCORD"
    TWITCH = "TWITCH"
    TELEGRAM = "TELEGRAM"
    PINTEREST = "PINTEREST"
    TUMBLR = "TUMBLR"
    SOUNDCLOUD = "SOUNDCLOUD"
    BANDCAMP = "BANDCAMP"
    PATREON = "PATREON"
    KO_FI = "KO_FI"
    MASTODON = "MASTODON"
    WEBSITE = "WEBSITE"
    EMAIL = "EMAIL"


@dataclass(frozen=True, slots=True)
class SocialLink:
    platform: SocialPlatform
    handle: str

    def to_dict(self) -> Dict[str, str]:
        return {"platform": self.platform.value, "handle": self.handle}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SocialLink":
        return cls(platform=SocialPlatform(payload["platform"]), handle=str(payload["handle"]))


@dataclass(slots=True)
class Profile:
    """Public profile of the local identity.

    ``avatar`` is a base64 image (usually a data URL) or ``None``. Nothing
    secret lives here; the private key is stored separately.
    """
    did: str
    name: str
    socials: List[SocialLink] = field(default_factory=list)
    avatar: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "did": self.did,
            "name": self.name,
            "socials": [link.to_dict() for link in self.socials],
        }
        if self.avatar:
            data["avatar"] = self.avatar
        return data

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Profile":
        return cls(
            did=payload["did"],
            name=payload["name"],
            socials=[SocialLink.from_dict(item) for item in payload.get("socials") or []],
            avatar=payload.get("avatar") or None,
        )


__all__ = ["SocialPlatform", "SocialLink", "Profile"]
