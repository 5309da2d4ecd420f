"""Selection of the image nearest to a target hour-of-day.

The comparison works on whole hours only. A missing side is measured against
the day boundary (23 for the later side, 0 for the earlier side), and on an
exact tie the earlier image wins because the second check overrides the first.
Both quirks are relied on by the archived snapshot series and are kept as is.
"""

from __future__ import annotations

from collections.abc import Iterable

from core.models import CapturedImage, DayGroup, SelectionResult

DEFAULT_TARGET_HOUR = 14


class NearestTimeSelector:
    """Picks one representative image per day."""

    def select_for_day(self, group: DayGroup, target_hour: int) -> CapturedImage | None:
        """Return the image closest to `target_hour`, or None for an empty pick."""
        ordered = sorted(group.images, key=lambda it: it.captured_at)

        after = next((it for it in ordered if it.hour >= target_hour), None)
        before = next((it for it in reversed(ordered) if it.hour < target_hour), None)

        gap_after = (after.hour if after is not None else 23) - target_hour
        gap_before = target_hour - (before.hour if before is not None else 0)

        chosen: CapturedImage | None = None
        if gap_after <= gap_before:
            chosen = after
        if gap_after >= gap_before:
            chosen = before

        if chosen is None and before is not None:
            chosen = before
        return chosen

    def select(
        self, groups: Iterable[DayGroup], target_hour: int = DEFAULT_TARGET_HOUR
    ) -> list[SelectionResult]:
        """Run `select_for_day` over `groups`, in the order given."""
        return [
            SelectionResult(date=group.date, chosen=self.select_for_day(group, target_hour))
            for group in groups
        ]
