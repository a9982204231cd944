"""Progress reporting for a single transfer."""

from collections.abc import Callable

from blob_uploader.logging import setup_logging

from .models import UploadProgressEvent

logger = setup_logging()

ProgressSink = Callable[[UploadProgressEvent], None]


class ProgressReporter:
    """
    Turns byte counts of one transfer into progress events.

    Byte counts are clamped so that emitted values never decrease and never
    exceed the total. The sink is optional; without one the reporter only
    tracks state. A failing sink is logged and does not affect the transfer.
    """

    def __init__(self, file_name: str, total_bytes: int, sink: ProgressSink | None = None):
        self._file_name = file_name
        self._total_bytes = total_bytes
        self._sink = sink
        self._transferred = 0
        self._events = 0

    @property
    def bytes_transferred(self) -> int:
        return self._transferred

    @property
    def events_emitted(self) -> int:
        return self._events

    def update(self, bytes_transferred: int, percentage: int | None = None) -> None:
        """Reports the absolute number of bytes sent so far."""
        self._transferred = min(max(bytes_transferred, self._transferred), self._total_bytes)
        event = UploadProgressEvent.measure(
            self._file_name, self._transferred, self._total_bytes
        )
        if percentage is not None:
            event = event.model_copy(update={"percentage": percentage})
        self._emit(event)

    def advance(self, length: int) -> None:
        """Reports ``length`` more bytes sent."""
        self.update(self._transferred + length)

    def complete(self) -> None:
        """Emits the final event if the transport did not report the full total."""
        if self._events == 0 or self._transferred < self._total_bytes:
            self.update(self._total_bytes)

    def _emit(self, event: UploadProgressEvent) -> None:
        self._events += 1
        if self._sink is None:
            return
        try:
            self._sink(event)
        except Exception:
            logger.exception(
                "Progress sink failed",
                extra={"file_name": self._file_name, "percentage": event.percentage},
            )
