from typing import Protocol


class Broker(Protocol):
    """Fire-and-forget publish of a feedback message to a topic."""

    async def publish(self, message: dict) -> None: ...

    async def close(self) -> None: ...
