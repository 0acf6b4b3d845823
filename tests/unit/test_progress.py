# ABOUTME: Unit tests for merged progress across fetch streams.
# ABOUTME: Validates page-total weighting, subscriber notification, and edge cases.

import pytest

from scorecat.core.progress import ProgressAggregator, ProgressSnapshot


class TestWeightedRatio:
    """The combined ratio is completed pages over declared pages."""

    def test_equal_stream_ratios(self) -> None:
        """4-page stream at 2 and 6-page stream at 3 gives (2+3)/(4+6)."""
        aggregator = ProgressAggregator()
        a = aggregator.add_stream("a", 4)
        b = aggregator.add_stream("b", 6)
        a.advance(2)
        b.advance(3)
        assert aggregator.ratio == pytest.approx(0.5)

    def test_weighting_differs_from_naive_average(self) -> None:
        """2-page stream at 1 and 8-page stream at 0 gives 0.1, not 0.25."""
        aggregator = ProgressAggregator()
        a = aggregator.add_stream("a", 2)
        aggregator.add_stream("b", 8)
        a.advance()

        naive = (1 / 2 + 0 / 8) / 2
        assert aggregator.ratio == pytest.approx(0.1)
        assert aggregator.ratio != pytest.approx(naive)

    def test_finish_completes_stream(self) -> None:
        aggregator = ProgressAggregator()
        a = aggregator.add_stream("a", 3)
        aggregator.add_stream("b", 7)
        a.finish()
        assert aggregator.snapshot() == ProgressSnapshot(completed=3, total=10)

    def test_advance_is_clamped_to_total(self) -> None:
        aggregator = ProgressAggregator()
        a = aggregator.add_stream("a", 2)
        a.advance(5)
        assert a.completed == 2
        assert aggregator.ratio == 1.0

    def test_no_pages_counts_as_done(self) -> None:
        aggregator = ProgressAggregator()
        aggregator.add_stream("a", 0)
        aggregator.add_stream("b", 0)
        assert aggregator.ratio == 1.0
        assert ProgressSnapshot(completed=0, total=0).ratio == 1.0


class TestSubscribers:
    """Every update from any stream reaches every subscriber."""

    def test_each_advance_publishes_snapshot(self) -> None:
        aggregator = ProgressAggregator()
        seen: list[float] = []
        aggregator.subscribe(lambda snap: seen.append(snap.ratio))
        a = aggregator.add_stream("a", 2)
        b = aggregator.add_stream("b", 8)

        a.advance()
        b.advance()
        b.advance()
        a.advance()

        assert seen == pytest.approx([0.1, 0.2, 0.3, 0.4])

    def test_unsubscribe_stops_updates(self) -> None:
        aggregator = ProgressAggregator()
        seen: list[ProgressSnapshot] = []
        unsubscribe = aggregator.subscribe(seen.append)
        stream = aggregator.add_stream("a", 4)

        stream.advance()
        unsubscribe()
        stream.advance()

        assert seen == [ProgressSnapshot(completed=1, total=4)]

    def test_multiple_subscribers(self) -> None:
        aggregator = ProgressAggregator()
        first: list[ProgressSnapshot] = []
        second: list[ProgressSnapshot] = []
        aggregator.subscribe(first.append)
        aggregator.subscribe(second.append)
        aggregator.add_stream("a", 1).advance()
        assert first == second == [ProgressSnapshot(completed=1, total=1)]


class TestStreamRegistration:
    def test_duplicate_stream_name_rejected(self) -> None:
        aggregator = ProgressAggregator()
        aggregator.add_stream("authors", 3)
        with pytest.raises(ValueError, match="already tracked"):
            aggregator.add_stream("authors", 5)

    def test_negative_total_rejected(self) -> None:
        with pytest.raises(ValueError):
            ProgressAggregator().add_stream("a", -1)
