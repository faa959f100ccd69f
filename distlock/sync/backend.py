"""
Lock Backend - Abstract interface for the atomic lock operations
"""
from abc import ABC, abstractmethod
from typing import List, Sequence

class LockBackend(ABC):
    """
    Capability interface for a coordination store holding lock keys.

    Every operation works on a set of keys, executes as one indivisible step
    on the store, and returns the keys it affected. An empty key sequence
    never reaches the store.
    """

    @abstractmethod
    def acquire(self, keys: Sequence[str], token: str, ttl_ms: int) -> List[str]:
        """Set each absent key to token with a TTL"""
        pass

    @abstractmethod
    def renew_if_owned(self, keys: Sequence[str], token: str, ttl_ms: int) -> List[str]:
        """Reset the TTL of each key currently holding token"""
        pass

    @abstractmethod
    def release_if_owned(self, keys: Sequence[str], token: str) -> List[str]:
        """Delete each key currently holding token"""
        pass

    @abstractmethod
    def acquire_or_renew_if_owned(self, keys: Sequence[str], token: str, ttl_ms: int) -> List[str]:
        """Acquire absent keys and renew keys already holding token"""
        pass

    @abstractmethod
    def owned(self, keys: Sequence[str]) -> List[str]:
        """Keys currently held by anyone"""
        pass

    def close(self) -> None:
        """Release the underlying connection"""
        pass
