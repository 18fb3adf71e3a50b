import pytest

from conftest import MONDAY
from habitflow.core.errors import StorageError
from habitflow.models import DailyProgress
from habitflow.services import HabitTracker
from habitflow.storage import BlobHabitStorage


class _FlakyStorage(BlobHabitStorage):
    """In-memory store whose writes or reads can be switched to fail."""

    def __init__(self):
        super().__init__(None)
        self.fail_toggle = False
        self.fail_reads = False

    def toggle_log(self, habit_id, date):
        if self.fail_toggle:
            raise StorageError("disk full")
        return super().toggle_log(habit_id, date)

    def list_logs_between(self, start, end):
        if self.fail_reads:
            raise StorageError("read failed")
        return super().list_logs_between(start, end)


@pytest.fixture()
def flaky():
    with _FlakyStorage() as storage:
        yield storage


@pytest.fixture()
def tracker(flaky):
    return HabitTracker(flaky, today_fn=lambda: MONDAY, chart_days=7)


def test_refresh_all_loads_everything(tracker):
    tracker.add_habit("Meditate", "Health", [1, 3, 5])
    tracker.add_habit("Swim", "Physical", [6])

    state = tracker.refresh_all()
    assert [item.habit.name for item in state.habits] == ["Meditate"]
    assert state.daily_progress == DailyProgress(completed=0, total=1)
    assert len(state.categories) == 5
    assert len(state.chart_data) == 7
    assert state.chart_data[-1].date == MONDAY
    assert state.stale is False


def test_toggle_updates_cache_from_store(tracker):
    habit_id = tracker.add_habit("Meditate", "Health", [1])

    assert tracker.toggle_habit(habit_id) == 1
    assert tracker.state.habits[0].done
    assert tracker.state.daily_progress == DailyProgress(completed=1, total=1)
    assert tracker.state.chart_data[-1].progress == 100

    assert tracker.toggle_habit(habit_id) == 0
    assert tracker.state.daily_progress.completed == 0


def test_failed_toggle_reloads_from_store(tracker, flaky):
    habit_id = tracker.add_habit("Meditate", "Health", [1])
    flaky.fail_toggle = True

    with pytest.raises(StorageError):
        tracker.toggle_habit(habit_id)

    assert tracker.state.habits[0].status == 0
    assert tracker.state.daily_progress == DailyProgress(completed=0, total=1)
    assert tracker.state.stale is False


def test_failed_reload_marks_state_stale(tracker, flaky):
    habit_id = tracker.add_habit("Meditate", "Health", [1])
    flaky.fail_toggle = True
    flaky.fail_reads = True

    with pytest.raises(StorageError):
        tracker.toggle_habit(habit_id)
    assert tracker.state.stale is True


def test_chart_refresh_failure_is_not_surfaced(tracker, flaky):
    habit_id = tracker.add_habit("Meditate", "Health", [1])
    flaky.fail_reads = True

    assert tracker.toggle_habit(habit_id) == 1
    assert tracker.state.daily_progress.completed == 1
    assert tracker.state.stale is True


def test_visible_habits_follow_selected_category(tracker):
    tracker.add_habit("Meditate", "Health", [1])
    tracker.add_habit("Study", "Academic", [1])

    tracker.set_selected_category("Academic")
    assert [item.habit.name for item in tracker.visible_habits()] == ["Study"]

    tracker.set_selected_category(None)
    assert len(tracker.visible_habits()) == 2


def test_edit_remove_and_clear_history_refresh_state(tracker):
    habit_id = tracker.add_habit("Meditate", "Health", [1])
    tracker.toggle_habit(habit_id)

    assert tracker.clear_history() == 1
    assert tracker.state.daily_progress == DailyProgress(completed=0, total=1)

    assert tracker.edit_habit(habit_id, "Meditate", "Health", [2]) == 1
    assert tracker.state.habits == []

    assert tracker.remove_habit(habit_id) == 1
    assert tracker.state.daily_progress == DailyProgress(completed=0, total=0)


def test_delete_all_data(tracker):
    tracker.add_habit("Meditate", "Health", [1])
    tracker.add_habit("Study", "Academic", [1])

    assert tracker.delete_all_data() == 2
    assert tracker.state.habits == []
    assert len(tracker.state.categories) == 5


def test_failed_reload_after_committed_write_marks_state_stale(tracker, flaky):
    tracker.refresh_all()
    flaky.fail_reads = True

    habit_id = tracker.add_habit("Meditate", "Health", [1])

    assert flaky.get_habit(habit_id).name == "Meditate"
    assert tracker.state.stale is True

    flaky.fail_reads = False
    tracker.refresh_all()
    assert [item.habit.id for item in tracker.state.habits] == [habit_id]
