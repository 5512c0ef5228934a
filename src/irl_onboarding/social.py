"""Social link normalisation and validation, per platform."""
from __future__ import annotations

from typing import Dict, Optional

import regex

from .models import SocialLink, SocialPlatform

P = SocialPlatform

DISPLAY_NAMES: Dict[SocialPlatform, str] = {
    P.INSTAGRAM: "Instagram",
    P.X: "X (Twitter)",
    P.BLUESKY: "Bluesky",
    P.LINKEDIN: "LinkedIn",
    P.YOUTUBE: "YouTube",
    P.SPOTIFY: "Spotify",
    P.TIKTOK: "TikTok",
    P.SNAPCHAT: "Snapchat",
    P.GITHUB: "GitHub",
    P.FACEBOOK: "Facebook",
    P.REDDIT: "Reddit",
    P.DISCORD: "Discord",
    P.TWITCH: "Twitch",
    P.TELEGRAM: "Telegram",
    P.PINTEREST: "Pinterest",
    P.TUMBLR: "Tumblr",
    P.SOUNDCLOUD: "SoundCloud",
    P.BANDCAMP: "Bandcamp",
    P.PATREON: "Patreon",
    P.KO_FI: "Ko-fi",
    P.MASTODON: "Mastodon",
    P.WEBSITE: "Website",
    P.EMAIL: "Email",
}

PLACEHOLDERS: Dict[SocialPlatform, str] = {
    P.INSTAGRAM: "@username",
    P.X: "@username",
    P.BLUESKY: "@username.bsky.social",
    P.LINKEDIN: "username",
    P.YOUTUBE: "@username or channel URL",
    P.SPOTIFY: "artist/user URL or ID",
    P.TIKTOK: "@username",
    P.SNAPCHAT: "username",
    P.GITHUB: "username",
    P.FACEBOOK: "username",
    P.REDDIT: "u/username",
    P.DISCORD: "username#0000",
    P.TWITCH: "username",
    P.TELEGRAM: "@username",
    P.PINTEREST: "username",
    P.TUMBLR: "username",
    P.SOUNDCLOUD: "username",
    P.BANDCAMP: "username",
    P.PATREON: "username",
    P.KO_FI: "username",
    P.MASTODON: "@username@server.com",
    P.WEBSITE: "https://example.com",
    P.EMAIL: "email@example.com",
}

# Username extraction from pasted profile URLs
URL_PATTERNS: Dict[SocialPlatform, regex.Pattern] = {
    P.INSTAGRAM: regex.compile(r"instagram\.com/([^/?]+)"),
    P.X: regex.compile(r"(?:twitter\.com|x\.com)/([^/?]+)"),
    P.BLUESKY: regex.compile(r"bsky\.app/profile/([^/?]+)"),
    P.LINKEDIN: regex.compile(r"linkedin\.com/in/([^/?]+)"),
    P.GITHUB: regex.compile(r"github\.com/([^/?]+)"),
    P.FACEBOOK: regex.compile(r"facebook\.com/([^/?]+)"),
    P.REDDIT: regex.compile(r"reddit\.com/u(?:ser)?/([^/?]+)"),
    P.TWITCH: regex.compile(r"twitch\.tv/([^/?]+)"),
    P.YOUTUBE: regex.compile(r"youtube\.com/@([^/?]+)"),
    P.TIKTOK: regex.compile(r"tiktok\.com/@([^/?]+)"),
}

HANDLE_PATTERNS: Dict[SocialPlatform, regex.Pattern] = {
    P.INSTAGRAM: regex.compile(r"^[a-zA-Z0-9._]{1,30}$"),
    P.X: regex.compile(r"^[a-zA-Z0-9_]{1,15}$"),
    P.BLUESKY: regex.compile(r"^[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"),
    P.LINKEDIN: regex.compile(r"^[a-zA-Z0-9-]{3,100}$"),
    P.YOUTUBE: regex.compile(r"^.{1,100}$"),
    P.SPOTIFY: regex.compile(r"^.{1,100}$"),
    P.TIKTOK: regex.compile(r"^[a-zA-Z0-9._]{1,24}$"),
    P.SNAPCHAT: regex.compile(r"^[a-zA-Z0-9._-]{3,15}$"),
    P.GITHUB: regex.compile(r"^[a-zA-Z0-9](?:[a-zA-Z0-9]|-(?=[a-zA-Z0-9])){0,38}$"),
    P.FACEBOOK: regex.compile(r"^.{5,50}$"),
    P.REDDIT: regex.compile(r"^[a-zA-Z0-9_-]{3,20}$"),
    P.DISCORD: regex.compile(r"^.{2,32}#[0-9]{4}$"),
    P.TWITCH: regex.compile(r"^[a-zA-Z0-9_]{4,25}$"),
    P.TELEGRAM: regex.compile(r"^[a-zA-Z0-9_]{5,32}$"),
    P.PINTEREST: regex.compile(r"^[a-zA-Z0-9_]{3,30}$"),
    P.TUMBLR: regex.compile(r"^[a-zA-Z0-9-]{1,32}$"),
    P.SOUNDCLOUD: regex.compile(r"^[a-zA-Z0-9_-]{3,25}$"),
    P.BANDCAMP: regex.compile(r"^[a-zA-Z0-9-]{1,30}$"),
    P.PATREON: regex.compile(r"^[a-zA-Z0-9_]{1,30}$"),
    P.KO_FI: regex.compile(r"^[a-zA-Z0-9_]{1,30}$"),
    P.MASTODON: regex.compile(r"^@?[a-zA-Z0-9_]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"),
    P.WEBSITE: regex.compile(r"^https?://.+\..+$"),
    P.EMAIL: regex.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$"),
}

_AT_PREFIXED = {P.INSTAGRAM, P.X, P.TIKTOK, P.TELEGRAM}


def platform_display_name(platform: SocialPlatform) -> str:
    return DISPLAY_NAMES[platform]


def platform_placeholder(platform: SocialPlatform) -> str:
    return PLACEHOLDERS[platform]


def normalize_handle(platform: SocialPlatform, value: str) -> Optional[str]:
    """Strip URLs, leading ``@`` and platform noise from user input.

    Returns ``None`` for blank input.
    """
    if not value or not value.strip():
        return None

    normalized = value.strip()

    if normalized.startswith(("http://", "https://")):
        pattern = URL_PATTERNS.get(platform)
        if pattern is not None:
            match = pattern.search(normalized)
            if match and match.group(1):
                normalized = match.group(1)

    if platform in _AT_PREFIXED:
        normalized = regex.sub(r"^@", "", normalized)

    if platform is P.REDDIT:
        normalized = regex.sub(r"^u/", "", normalized)
    elif platform is P.EMAIL:
        normalized = normalized.lower()
    elif platform is P.WEBSITE and not normalized.startswith(("http://", "https://")):
        normalized = f"https://{normalized}"

    return normalized


def validate_handle(platform: SocialPlatform, handle: str) -> bool:
    if not handle or not handle.strip():
        return False
    pattern = HANDLE_PATTERNS.get(platform)
    return bool(pattern.fullmatch(handle)) if pattern is not None else True


def full_url(platform: SocialPlatform, handle: str) -> str:
    templates: Dict[SocialPlatform, str] = {
        P.INSTAGRAM: f"https://instagram.com/{handle}",
        P.X: f"https://x.com/{handle}",
        P.BLUESKY: f"https://bsky.app/profile/{handle}",
        P.LINKEDIN: f"https://linkedin.com/in/{handle}",
        P.YOUTUBE: handle if handle.startswith("http") else f"https://youtube.com/@{handle}",
        P.SPOTIFY: handle if handle.startswith("http") else f"https://open.spotify.com/artist/{handle}",
        P.TIKTOK: f"https://tiktok.com/@{handle}",
        P.SNAPCHAT: f"https://snapchat.com/add/{handle}",
        P.GITHUB: f"https://github.com/{handle}",
        P.FACEBOOK: f"https://facebook.com/{handle}",
        P.REDDIT: f"https://reddit.com/u/{handle}",
        P.DISCORD: handle,
        P.TWITCH: f"https://twitch.tv/{handle}",
        P.TELEGRAM: f"https://t.me/{handle}",
        P.PINTEREST: f"https://pinterest.com/{handle}",
        P.TUMBLR: f"https://{handle}.tumblr.com",
        P.SOUNDCLOUD: f"https://soundcloud.com/{handle}",
        P.BANDCAMP: f"https://{handle}.bandcamp.com",
        P.PATREON: f"https://patreon.com/{handle}",
        P.KO_FI: f"https://ko-fi.com/{handle}",
        P.MASTODON: handle,
        P.WEBSITE: handle,
        P.EMAIL: f"mailto:{handle}",
    }
    return templates[platform]


def create_social_link(platform: SocialPlatform, value: str) -> Optional[SocialLink]:
    normalized = normalize_handle(platform, value)
    if not normalized or not validate_handle(platform, normalized):
        return None
    return SocialLink(platform=platform, handle=normalized)


__all__ = [
    "platform_display_name",
    "platform_placeholder",
    "normalize_handle",
    "validate_handle",
    "full_url",
    "create_social_link",
]
