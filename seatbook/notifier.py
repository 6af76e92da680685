from typing import List, Protocol


class Notifier(Protocol):
    def alert(self, message: str) -> None:
        ...


class MessageQueue:
    """Collects blocking messages until the view shows them."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def alert(self, message: str) -> None:
        self.messages.append(message)

    def drain(self) -> List[str]:
        messages, self.messages = self.messages, []
        return messages
