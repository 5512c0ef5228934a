from .keys import (
    PUBLIC_KEY_SIZE,
    SECRET_KEY_SIZE,
    SEED_SIZE,
    SIGNATURE_SIZE,
    KeyPair,
    generate_key_pair,
    generate_seed,
    key_pair_from_seed,
)
from .signing import Ed25519Signer

__all__ = [
    "KeyPair",
    "Ed25519Signer",
    "SEED_SIZE",
    "PUBLIC_KEY_SIZE",
    "SECRET_KEY_SIZE",
    "SIGNATURE_SIZE",
    "generate_seed",
    "generate_key_pair",
    "key_pair_from_seed",
]
