"""Throwaway did:key identities and short-lived signed profile credentials."""

__version__ = "1.0.0"

__all__ = ["__version__"]
