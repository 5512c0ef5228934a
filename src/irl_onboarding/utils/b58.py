import base58

from .errors import DecodeError


def b58e(data: bytes) -> str:
    """base58btc encode (Bitcoin alphabet, leading zero bytes become '1')"""
    return base58.b58encode(data).decode("ascii")


def b58d(value: str) -> bytes:
    """base58btc decode; raises DecodeError on characters outside the alphabet"""
    if not isinstance(value, str) or not value:
        raise DecodeError("Empty base58 string")
    try:
        return base58.b58decode(value)
    except ValueError as exc:
        raise DecodeError(f"Invalid base58btc string: {exc}") from exc
