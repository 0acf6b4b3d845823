# ABOUTME: Merges page-completion counts from several fetch streams into one progress ratio.
# ABOUTME: The ratio is weighted by each stream's declared page total, not averaged per stream.

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class ProgressSnapshot:
    """Combined progress across all tracked streams."""

    completed: int
    total: int

    @property
    def ratio(self) -> float:
        """Fraction in [0, 1]; an empty total counts as finished."""
        if self.total <= 0:
            return 1.0
        return min(self.completed / self.total, 1.0)


ProgressCallback = Callable[[ProgressSnapshot], None]


class StreamProgress:
    """Page counter for one stream, owned by a ProgressAggregator."""

    def __init__(self, aggregator: "ProgressAggregator", name: str, total: int) -> None:
        self._aggregator = aggregator
        self.name = name
        self.total = total
        self.completed = 0

    def advance(self, pages: int = 1) -> None:
        """Record ``pages`` more completed pages and publish the new ratio."""
        self.completed = min(self.completed + pages, self.total)
        self._aggregator.publish()

    def finish(self) -> None:
        """Mark every declared page complete."""
        self.advance(self.total - self.completed)


class ProgressAggregator:
    """Holds per-stream (completed, total) counters and notifies subscribers.

    Every update from any stream recomputes
    ``sum(completed) / sum(total)`` over all streams, so a stream with more
    pages weighs proportionally more.
    """

    def __init__(self) -> None:
        self._streams: dict[str, StreamProgress] = {}
        self._subscribers: list[ProgressCallback] = []

    def add_stream(self, name: str, total: int) -> StreamProgress:
        if name in self._streams:
            raise ValueError(f"Stream {name!r} is already tracked")
        if total < 0:
            raise ValueError(f"total must be non-negative, got {total}")
        stream = StreamProgress(self, name, total)
        self._streams[name] = stream
        return stream

    def subscribe(self, callback: ProgressCallback) -> Callable[[], None]:
        """Register ``callback`` for every update; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            completed=sum(s.completed for s in self._streams.values()),
            total=sum(s.total for s in self._streams.values()),
        )

    @property
    def ratio(self) -> float:
        return self.snapshot().ratio

    def publish(self) -> None:
        snapshot = self.snapshot()
        for callback in list(self._subscribers):
            callback(snapshot)
