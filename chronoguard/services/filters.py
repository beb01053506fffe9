"""View filter pipeline: role restriction, date window and attribute filters."""
from datetime import date
from typing import Iterable, Optional

from chronoguard.models.filters import DateRangeMode, EntryFilter, SortOrder
from chronoguard.models.timesheet import TimesheetEntry
from chronoguard.models.user import User
from chronoguard.utils.timecalc import month_range, week_range


def accessible_entries(entries: Iterable[TimesheetEntry], actor: User) -> list[TimesheetEntry]:
    """Managers see every entry, employees only their own."""
    if actor.is_manager:
        return list(entries)
    return [e for e in entries if e.user_id == actor.id]


def date_window(
    mode: DateRangeMode,
    cursor: Optional[date] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Optional[tuple[date, date]]:
    """
    Inclusive date bounds for a range mode, or None for no date restriction.

    DAY/WEEK/MONTH are anchored on ``cursor`` (today when omitted). RANGE
    uses ``start``/``end``; reversed bounds are swapped and a missing bound
    is taken from the other one.
    """
    if mode == DateRangeMode.ALL:
        return None

    if mode == DateRangeMode.RANGE:
        if start is None and end is None:
            return None
        start = start or end
        end = end or start
        if start > end:
            start, end = end, start
        return start, end

    cursor = cursor or date.today()
    if mode == DateRangeMode.DAY:
        return cursor, cursor
    if mode == DateRangeMode.WEEK:
        return week_range(cursor)
    return month_range(cursor)


def matches_search(entry: TimesheetEntry, search: str) -> bool:
    """Case-insensitive substring match on task name, description or user name."""
    needle = search.lower()
    return (
        needle in entry.task_name.lower()
        or needle in entry.description.lower()
        or needle in entry.user_name.lower()
    )


def filter_entries(
    entries: Iterable[TimesheetEntry],
    actor: User,
    filters: EntryFilter,
) -> list[TimesheetEntry]:
    """
    Apply the full pipeline and return the ordered subset.

    The role restriction runs first; the date window and the user,
    category, task and search filters are then combined with AND. Results
    are sorted by (date, start_time), ascending for list views and
    descending for recent-activity views.
    """
    window = date_window(filters.mode, filters.cursor, filters.start, filters.end)
    search = (filters.search or "").strip()

    result = []
    for entry in accessible_entries(entries, actor):
        if window is not None and not (window[0] <= entry.date <= window[1]):
            continue
        if filters.user_id and entry.user_id != filters.user_id:
            continue
        if filters.category and entry.task_category != filters.category:
            continue
        if filters.task_name and entry.task_name != filters.task_name:
            continue
        if search and not matches_search(entry, search):
            continue
        result.append(entry)

    result.sort(
        key=lambda e: (e.date, e.start_time),
        reverse=filters.order == SortOrder.DESC,
    )
    return result
