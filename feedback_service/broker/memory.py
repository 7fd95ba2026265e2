import threading

from feedback_service.core.logging import get_logger

log = get_logger("broker.memory")


class MemoryBroker:
    """Keeps published messages in a list; stands in for the topic locally."""

    def __init__(self):
        self.messages: list[dict] = []
        self.lock = threading.Lock()

    async def publish(self, message: dict) -> None:
        with self.lock:
            self.messages.append(message)
        log.info(f"Published feedback id={message.get('id')} (in-memory)")

    async def close(self) -> None:
        return None
