"""Progress status sinks."""

from typing import List, Optional, Protocol

from rich.console import Console
from rich.status import Status


class StatusSink(Protocol):
    """Anything that can show a one-line progress message."""

    def update(self, text: str) -> None:
        ...

    def stop(self) -> None:
        ...


class RichStatus:
    """Spinner on stderr, started lazily on the first update."""

    def __init__(self, console: Optional[Console] = None, spinner: str = "dots"):
        self.console = console or Console(stderr=True)
        self.spinner = spinner
        self._status: Optional[Status] = None

    def update(self, text: str) -> None:
        message = f"[cyan]{text}[/cyan]"
        if self._status is None:
            self._status = self.console.status(message, spinner=self.spinner)
            self._status.start()
        else:
            self._status.update(message)

    def stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def __enter__(self) -> "RichStatus":
        return self

    def __exit__(self, *exc) -> None:
        self.stop()


class NullStatus:
    """Status sink that records messages without rendering them."""

    def __init__(self):
        self.messages: List[str] = []
        self.stopped = False

    def update(self, text: str) -> None:
        self.messages.append(text)

    def stop(self) -> None:
        self.stopped = True

    def __enter__(self) -> "NullStatus":
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
