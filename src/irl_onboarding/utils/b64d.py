import base64
import binascii

import regex

from .b64e import b64e
from .errors import DecodeError

_URLSAFE_ALPHABET = regex.compile(r"[A-Za-z0-9_-]*")


def b64d(value: str) -> bytes:
    """URL-safe base64 decode that tolerates missing padding.

    Only the canonical unpadded form is accepted: padding characters, the
    standard ``+``/``/`` alphabet and encodings with stray trailing bits all
    raise :class:`DecodeError`.
    """
    if not isinstance(value, str) or not _URLSAFE_ALPHABET.fullmatch(value):
        raise DecodeError("Invalid base64url alphabet")
    if len(value) % 4 == 1:
        raise DecodeError(f"Impossible base64url length: {len(value)}")
    pad = "=" * (-len(value) % 4)
    try:
        data = base64.urlsafe_b64decode((value + pad).encode("ascii"))
    except binascii.Error as exc:
        raise DecodeError(str(exc)) from exc
    if b64e(data) != value:
        raise DecodeError("Non-canonical base64url encoding")
    return data
