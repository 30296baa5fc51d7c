"""Storage media used by settings accessors."""

from .interfaces import StorageMedium
from .file_medium import FileMedium
from .memory_medium import MemoryMedium, MemoryStore

__all__ = ["StorageMedium", "FileMedium", "MemoryMedium", "MemoryStore"]
