from .profile_store import FileProfileStore, MemoryProfileStore, ProfileStore

__all__ = ["ProfileStore", "MemoryProfileStore", "FileProfileStore"]
