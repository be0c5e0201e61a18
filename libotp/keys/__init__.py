from libotp.keys.abc import KeyProvider
from libotp.keys.memory import InMemoryKey
from libotp.keys.protected import ProtectedKey

__all__ = [
    "KeyProvider",
    "InMemoryKey",
    "ProtectedKey",
]
