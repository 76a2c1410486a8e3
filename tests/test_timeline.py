import logging
from collections import deque

from isotown.timeline import Timeline, TimelineEvent


class CountingMission:
    """Done after it has been updated ``needed`` times."""

    def __init__(self, needed):
        self.needed = needed
        self.updates = 0
        self.contexts = []

    def update(self, context):
        self.updates += 1
        self.contexts.append(context)

    def is_done(self, context):
        return self.updates >= self.needed


def test_event_finished_needs_all_missions():
    a, b = CountingMission(1), CountingMission(2)
    event = TimelineEvent([a, b])
    event.update("ctx")
    assert event.is_finished("ctx") is False
    event.update("ctx")
    assert event.is_finished("ctx") is True
    assert a.updates == 2 and b.updates == 2


def test_empty_event_is_finished():
    assert TimelineEvent().is_finished(None) is True


def test_timeline_runs_events_in_order():
    first_mission, second_mission = CountingMission(1), CountingMission(2)
    first, second = TimelineEvent([first_mission]), TimelineEvent([second_mission])
    timeline = Timeline(context="world", active=first, pending=deque([second]))

    timeline.update(0.0)
    assert timeline.active is second
    assert timeline.completed == [first]
    assert timeline.is_finished() is False

    timeline.update(1.0)
    assert timeline.is_finished() is False
    timeline.update(2.0)
    assert timeline.is_finished() is True
    assert timeline.completed == [first, second]
    assert second_mission.contexts == ["world", "world"]


def test_finished_timeline_stops_updating():
    mission = CountingMission(1)
    timeline = Timeline(active=TimelineEvent([mission]))
    timeline.update(0.0)
    timeline.update(1.0)
    timeline.update(2.0)
    assert timeline.is_finished() is True
    assert mission.updates == 1


def test_empty_timeline_does_nothing():
    timeline = Timeline()
    timeline.update(0.0)
    assert timeline.is_finished() is False
    assert timeline.completed == []


def test_pending_without_active_warns_and_waits(caplog):
    event = TimelineEvent([CountingMission(1)])
    timeline = Timeline(pending=deque([event]))
    with caplog.at_level(logging.WARNING, logger="isotown.timeline"):
        timeline.update(0.0)
    assert timeline.active is None
    assert list(timeline.pending) == [event]
    assert timeline.is_finished() is False
    assert any("no active" in record.getMessage() for record in caplog.records)