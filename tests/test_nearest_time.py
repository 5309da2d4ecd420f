from datetime import date

from conftest import captured
from core.models import DayGroup
from core.services.grouping import group_by_day
from core.services.nearest_time import NearestTimeSelector


def _day(*hours: int) -> DayGroup:
    images = [captured(f"2019-06-01 {h:02d}:00:00") for h in hours]
    return group_by_day(images)[date(2019, 6, 1)]


def test_tie_prefers_earlier_image():
    chosen = NearestTimeSelector().select_for_day(_day(10, 13, 15, 18), 14)
    assert chosen is not None
    assert chosen.hour == 13


def test_closer_later_image_wins():
    chosen = NearestTimeSelector().select_for_day(_day(10, 14, 18), 14)
    assert chosen is not None
    assert chosen.hour == 14


def test_earliest_image_at_or_after_target_is_used():
    group = DayGroup(
        date=date(2019, 6, 1),
        images=[
            captured("2019-06-01 09:00:00"),
            captured("2019-06-01 14:10:00"),
            captured("2019-06-01 14:50:00"),
        ],
    )
    chosen = NearestTimeSelector().select_for_day(group, 14)
    assert chosen is not None
    assert chosen.captured_at.minute == 10


def test_only_earlier_images_falls_back_to_latest_before():
    chosen = NearestTimeSelector().select_for_day(_day(9, 12), 14)
    assert chosen is not None
    assert chosen.hour == 12


def test_only_early_morning_images_still_fall_back():
    # gap_after (23 - 14) is smaller than gap_before (14 - 2), first branch picks nothing
    chosen = NearestTimeSelector().select_for_day(_day(1, 2), 14)
    assert chosen is not None
    assert chosen.hour == 2


def test_only_later_images_uses_earliest_after():
    chosen = NearestTimeSelector().select_for_day(_day(16, 20), 14)
    assert chosen is not None
    assert chosen.hour == 16


def test_empty_day_yields_none():
    assert NearestTimeSelector().select_for_day(DayGroup(date=date(2019, 6, 1)), 14) is None


def test_select_over_groups():
    images = [
        captured("2019-06-01 13:00:00"),
        captured("2019-06-02 15:00:00"),
        captured("2019-06-02 11:00:00"),
    ]
    groups = group_by_day(images)
    groups[date(2019, 6, 3)] = DayGroup(date=date(2019, 6, 3))

    results = NearestTimeSelector().select(groups.values(), 14)

    assert [r.date for r in results] == [date(2019, 6, 1), date(2019, 6, 2), date(2019, 6, 3)]
    assert results[0].chosen is not None and results[0].chosen.hour == 13
    assert results[1].chosen is not None and results[1].chosen.hour == 15
    assert results[2].chosen is None
