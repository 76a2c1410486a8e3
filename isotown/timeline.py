"""Scenario timelines: events of missions played one after another."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class TimelineMission(Protocol):
    def update(self, context: Any) -> None: ...

    def is_done(self, context: Any) -> bool: ...


@dataclass
class TimelineEvent:
    """A group of missions that finishes once every mission is done."""

    missions: list[TimelineMission] = field(default_factory=list)

    def update(self, context: Any) -> None:
        for mission in self.missions:
            mission.update(context)

    def is_finished(self, context: Any) -> bool:
        return all(mission.is_done(context) for mission in self.missions)


@dataclass
class Timeline:
    """Runs the active event and moves on to the next pending one when it finishes."""

    context: Any = None
    active: TimelineEvent | None = None
    pending: deque[TimelineEvent] = field(default_factory=deque)
    completed: list[TimelineEvent] = field(default_factory=list)
    _finished: bool = field(default=False, init=False)

    def update(self, time: float) -> None:
        if self.active is None and not self.pending and not self.completed:
            return
        if self._finished:
            return
        if self.active is None:
            logger.warning("timeline has pending events but no active one")
            return
        self.active.update(self.context)
        if self.active.is_finished(self.context):
            self.completed.append(self.active)
            if self.pending:
                self.active = self.pending.popleft()
            else:
                self._finished = True

    def is_finished(self) -> bool:
        return self._finished