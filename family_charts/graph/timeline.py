"""Lifespan entries for the timeline chart."""

from datetime import date
from typing import Iterable, Optional

from family_charts.graph.models import TimelineEntry, TimelineMetadata, TimelineResult
from family_charts.models import Person


# Sort key for unknown years, keeps them after every real year
UNKNOWN_YEAR = 9999

_SORT_KEYS = {
    "birth": lambda e: e.birth_year if e.birth_year is not None else UNKNOWN_YEAR,
    "death": lambda e: e.death_year if e.death_year is not None else UNKNOWN_YEAR,
    "name": lambda e: f"{e.last_name} {e.first_name}".lower(),
}

SORT_FIELDS = tuple(_SORT_KEYS)


def _in_range(entry: TimelineEntry, start_year: Optional[int], end_year: Optional[int]) -> bool:
    if start_year is not None and entry.birth_year is not None and entry.birth_year < start_year:
        return False
    if end_year is not None and entry.death_year is not None and entry.death_year > end_year:
        return False
    return True


def sort_timeline(entries: list[TimelineEntry], sort_by: str = "birth") -> list[TimelineEntry]:
    """Stable sort; unknown years go last."""
    if sort_by not in _SORT_KEYS:
        raise ValueError(f"Unknown timeline sort: {sort_by}")
    return sorted(entries, key=_SORT_KEYS[sort_by])


def build_timeline(
    persons: Iterable[Person],
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
    sort_by: str = "birth",
    today: Optional[date] = None,
) -> TimelineResult:
    """Entries for everyone with a known birth or death date.

    The year range only excludes a person whose known birth is before
    ``start_year`` or whose known death is after ``end_year``.
    """
    entries = [
        TimelineEntry(
            id=p.id,
            first_name=p.first_name,
            last_name=p.last_name,
            birth_year=p.date_of_birth.year if p.date_of_birth else None,
            death_year=p.date_of_passing.year if p.date_of_passing else None,
            is_living=p.is_living,
            gender=p.gender,
            photo_url=p.photo_url,
        )
        for p in persons
        if p.date_of_birth or p.date_of_passing
    ]
    entries = sort_timeline([e for e in entries if _in_range(e, start_year, end_year)], sort_by)

    current_year = (today or date.today()).year
    years = [y for e in entries for y in (e.birth_year, e.death_year) if y is not None]
    if years:
        min_year, max_year = min(years), max(max(years), current_year)
    else:
        min_year, max_year = current_year - 100, current_year

    return TimelineResult(
        entries=entries,
        metadata=TimelineMetadata(
            min_year=min_year,
            max_year=max_year,
            total_people=len(entries),
        ),
    )
