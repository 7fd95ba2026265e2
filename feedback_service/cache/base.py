from typing import Protocol


class Cache(Protocol):
    """Key to bytes store; entries expire after the backend's TTL."""

    async def get(self, key: str) -> bytes | None: ...

    async def set(self, key: str, value: bytes) -> None: ...

    async def close(self) -> None: ...
