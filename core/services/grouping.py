"""Per-day grouping of captured images.

Grouping is a pure function of its input: partitions are keyed by the
calendar date of `captured_at` and each partition is stably sorted, so images
sharing a timestamp keep their enumeration order.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date, datetime

from core.models import CapturedImage, DayGroup


def group_by_day(images: Iterable[CapturedImage]) -> dict[date, DayGroup]:
    """Partition `images` by capture date, each group ascending by capture time.

    The returned mapping iterates in ascending date order.
    """
    grouped: dict[date, list[CapturedImage]] = defaultdict(list)
    for image in images:
        grouped[image.capture_date].append(image)
    return {
        day: DayGroup(date=day, images=sorted(items, key=lambda it: it.captured_at))
        for day, items in sorted(grouped.items())
    }


def distinct_by_capture_time(images: Iterable[CapturedImage]) -> list[CapturedImage]:
    """Drop images whose capture instant was already seen, keeping the first."""
    seen: set[datetime] = set()
    result: list[CapturedImage] = []
    for image in images:
        if image.captured_at in seen:
            continue
        seen.add(image.captured_at)
        result.append(image)
    return result


def chronological(groups: dict[date, DayGroup]) -> list[CapturedImage]:
    """Flatten groups into one list ordered by date, then capture time."""
    return [image for group in groups.values() for image in group.images]
