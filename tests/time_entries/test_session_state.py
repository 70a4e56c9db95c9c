from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from src.timeclock.timeclock.core.enums import ClockState
from src.timeclock.timeclock.departments.model import Department
from src.timeclock.timeclock.time_entries.model import TimeEntry
from src.timeclock.timeclock.time_entries.session_state import TimeEntrySessionState

SALES = Department(department_id=10, name="Sales")
SUPPORT = Department(department_id=11, name="Support")


def _closed(entry_id: int, day: int) -> TimeEntry:
    return TimeEntry(entry_id, 1, 10, datetime(2024, 1, day, 9), datetime(2024, 1, day, 17), Decimal("8.00"))


def test_clock_in_then_out_projects_locally(clock):
    state = TimeEntrySessionState(None, [_closed(1, 1)], [SALES, SUPPORT], clock=clock)
    assert state.state == ClockState.CLOCKED_OUT

    state.clock_in(TimeEntry(2, 1, 11, clock()))
    clock.advance(hours=1, minutes=2, seconds=3)

    assert state.state == ClockState.CLOCKED_IN
    assert state.elapsed() == "01:02:03"
    assert [e.time_entry_id for e in state.recent_entries] == [2, 1]

    completed = state.clock_out(2)

    assert completed.hours == Decimal("1.03")
    assert state.current_entry is None
    assert state.recent_entries[0].clock_out == clock()
    assert state.elapsed() == "00:00:00"


def test_clock_out_without_current_entry_is_noop(clock):
    state = TimeEntrySessionState(None, [_closed(1, 1)], [SALES], clock=clock)

    assert state.clock_out(1) is None
    assert state.recent_entries == [_closed(1, 1)]


def test_reload_replaces_local_projection(clock):
    state = TimeEntrySessionState(TimeEntry(5, 1, 10, clock()), [], [SALES], clock=clock)

    state.reload(None, [_closed(1, 1), _closed(2, 2)])

    assert state.current_entry is None
    assert len(state.recent_entries) == 2


def test_department_map_and_dict(clock):
    state = TimeEntrySessionState(None, [_closed(1, 1)], [SALES, SUPPORT], clock=clock)

    assert state.department_map[11].name == "Support"
    payload = state.to_dict()
    assert payload["state"] == "CLOCKED_OUT"
    assert payload["stats"] == {"completedEntries": 1, "totalHours": "8.00", "hasOpenEntry": False}
    assert [d["name"] for d in payload["departments"]] == ["Sales", "Support"]


def test_clock_out_of_other_entry_leaves_state_unchanged(clock):
    open_entry = TimeEntry(2, 1, 10, clock())
    state = TimeEntrySessionState(None, [_closed(1, 1)], [SALES], clock=clock)
    state.clock_in(open_entry)

    assert state.clock_out(999) is None
    assert state.current_entry == open_entry
    assert state.state == ClockState.CLOCKED_IN
    assert state.recent_entries == [open_entry, _closed(1, 1)]
