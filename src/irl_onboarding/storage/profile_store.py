from __future__ import annotations

import json
import os
import stat
from pathlib import Path
from typing import Dict, Optional

import structlog

from ..models import Profile
from ..paths import default_store_dir

logger = structlog.get_logger(__name__)


class ProfileStore:
    """Persistence for the single local identity.

    The private key is handed over as standard base64 of the 64-byte
    ``seed || public_key`` secret, the format the IRL Browser apps use.
    """

    def save_profile(self, profile: Profile) -> None:
        raise NotImplementedError

    def get_profile(self) -> Optional[Profile]:
        raise NotImplementedError

    def save_private_key(self, private_key_b64: str) -> None:
        raise NotImplementedError

    def get_private_key(self) -> Optional[str]:
        raise NotImplementedError

    def clear_profile(self) -> None:
        raise NotImplementedError

    def has_profile(self) -> bool:
        return self.get_profile() is not None and self.get_private_key() is not None


class MemoryProfileStore(ProfileStore):
    """Process-local store, for embedding and tests"""

    def __init__(self) -> None:
        self._profile: Optional[Dict[str, object]] = None
        self._private_key: Optional[str] = None

    def save_profile(self, profile: Profile) -> None:
        self._profile = profile.to_dict()

    def get_profile(self) -> Optional[Profile]:
        return Profile.from_dict(self._profile) if self._profile else None

    def save_private_key(self, private_key_b64: str) -> None:
        self._private_key = private_key_b64

    def get_private_key(self) -> Optional[str]:
        return self._private_key

    def clear_profile(self) -> None:
        self._profile = None
        self._private_key = None


class FileProfileStore(ProfileStore):
    """Filesystem-backed store under ``root`` (defaults to the per-user data dir).

    Layout:
      - profile.json   public profile (DID, name, socials, avatar)
      - private_key    base64 secret key, mode 0o600
    """

    PROFILE_FILE = "profile.json"
    PRIVATE_KEY_FILE = "private_key"

    def __init__(self, root: Optional[Path | str] = None) -> None:
        self.root = Path(root).expanduser() if root else default_store_dir()
        self.profile_path = self.root / self.PROFILE_FILE
        self.private_key_path = self.root / self.PRIVATE_KEY_FILE

    def _ensure(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def save_profile(self, profile: Profile) -> None:
        self._ensure()
        tmp = self.profile_path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(profile.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, self.profile_path)

    def get_profile(self) -> Optional[Profile]:
        if not self.profile_path.exists():
            return None
        try:
            data = json.loads(self.profile_path.read_text(encoding="utf-8"))
            return Profile.from_dict(data)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
            logger.warning("profile.load.failed", path=str(self.profile_path), error=str(exc))
            return None

    def save_private_key(self, private_key_b64: str) -> None:
        self._ensure()
        fd = os.open(self.private_key_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="ascii") as handle:
            handle.write(private_key_b64)
        os.chmod(self.private_key_path, 0o600)

    def get_private_key(self) -> Optional[str]:
        if not self.private_key_path.exists():
            return None
        mode = stat.S_IMODE(self.private_key_path.stat().st_mode)
        if mode & 0o077:
            logger.warning("private_key.insecure_permissions", path=str(self.private_key_path), mode=oct(mode))
        return self.private_key_path.read_text(encoding="ascii").strip() or None

    def clear_profile(self) -> None:
        for path in (self.profile_path, self.private_key_path):
            path.unlink(missing_ok=True)
        logger.info("profile.cleared", root=str(self.root))


__all__ = ["ProfileStore", "MemoryProfileStore", "FileProfileStore"]
