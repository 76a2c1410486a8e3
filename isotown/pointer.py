"""Pointer gesture tracking: clicks, drags, long-press focus and two-finger pinch."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Protocol

Point = tuple[int, int]

# Largest squared distance between press and release still counted as a click.
MIN_CLICK_DISTANCE = 16
# Seconds a press must be held without dragging before it becomes a focus gesture.
FOCUS_TIME = 0.5
# Weight of the newest measurement when smoothing the frame rate.
FPS_SMOOTHING = 0.7


class PointerHandler(Protocol):
    def mouse_start(self, pos: Point) -> None: ...

    def mouse_dragged(self, pos: Point, previous: Point) -> None: ...

    def mouse_focus_start(self, press_pos: Point) -> None: ...

    def mouse_focus(self, press_pos: Point, pos: Point) -> None: ...

    def mouse_focus_end(self, press_pos: Point, pos: Point) -> None: ...

    def mouse_released(self, pos: Point) -> None: ...

    def mouse_pressed(self, press_pos: Point) -> None: ...

    def mouse_zoom(self, center: Point, amount: int) -> None: ...

    def mouse_zoom_dragged(self, center: Point, previous: Point) -> None: ...


def _dist_sq(a: Point, b: Point) -> int:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def _halve(value: int) -> int:
    # Integer halving that truncates toward zero.
    return int(value / 2)


class PointerTracker:
    """Turns per-frame pointer state into gesture callbacks on a handler.

    ``update`` is called once per frame with the pointer position, whether the
    primary button or finger is down, the position of a second finger (or
    None) and the current clock reading in seconds.
    """

    def __init__(self, handler: PointerHandler) -> None:
        self.handler = handler
        self.mouse_frames = 0
        self.focus_frames = 0
        self.press_pos: Point = (0, 0)
        self.mouse_moved = False
        self.pinch_moved = False
        self.pinch_dist = -1
        self.is_focus = False
        self.previous_pos: Point = (0, 0)
        self.previous_pinch_center: Point = (0, 0)
        self.enable_press = True
        self._focus_start: float | None = None

    def _focus_elapsed(self, now: float) -> float:
        if self._focus_start is None:
            return 0.0
        return now - self._focus_start

    def update(
        self,
        pos: Point,
        is_down: bool,
        second_touch: Point | None = None,
        focus_time: float = 0.0,
    ) -> None:
        pos = (int(pos[0]), int(pos[1]))
        elapsed = self._focus_elapsed(focus_time)
        handler = self.handler

        if is_down:
            if second_touch is not None:
                self._pinch(pos, (int(second_touch[0]), int(second_touch[1])))
            else:
                self._hold(pos, elapsed, focus_time)
        else:
            self._release(pos, elapsed)

        self.previous_pos = pos
        del handler

    def _pinch(self, pos: Point, second: Point) -> None:
        self.enable_press = False
        center = (_halve(pos[0] + second[0]), _halve(pos[1] + second[1]))
        dist = math.isqrt(_dist_sq(pos, second))
        if dist != self.pinch_dist and self.pinch_dist != -1:
            self.handler.mouse_zoom(center, dist - self.pinch_dist)
        self.pinch_dist = dist
        if center != self.previous_pinch_center and self.pinch_moved:
            self.handler.mouse_zoom_dragged(center, self.previous_pinch_center)
        self.previous_pinch_center = center
        self.pinch_moved = True

    def _hold(self, pos: Point, elapsed: float, now: float) -> None:
        self.pinch_dist = -1
        if self.mouse_frames == 0:
            self.press_pos = pos
            self.handler.mouse_start(pos)
            self._focus_start = now
            self.is_focus = True

        if (
            pos != self.previous_pos
            and self.mouse_moved
            and (not self.is_focus or elapsed < FOCUS_TIME)
        ):
            self.handler.mouse_dragged(pos, self.previous_pos)
            self.is_focus = False

        if self.is_focus and elapsed >= FOCUS_TIME:
            if self.focus_frames == 0:
                self.handler.mouse_focus_start(self.press_pos)
            else:
                self.handler.mouse_focus(self.press_pos, pos)
            self.focus_frames += 1
        else:
            self.focus_frames = 0

        self.mouse_moved = True
        self.mouse_frames += 1

    def _release(self, pos: Point, elapsed: float) -> None:
        if self.mouse_frames > 0:
            if self.enable_press:
                self.handler.mouse_released(pos)
                if _dist_sq(pos, self.press_pos) < MIN_CLICK_DISTANCE:
                    self.handler.mouse_pressed(self.press_pos)
            if self.is_focus and self.focus_frames > 0 and elapsed >= FOCUS_TIME:
                self.handler.mouse_focus_end(self.press_pos, pos)

        self.enable_press = True
        self.mouse_frames = 0
        self.mouse_moved = False
        self.pinch_moved = False
        self.pinch_dist = -1
        self.focus_frames = 0


@dataclass
class FpsMeter:
    """Smoothed frames-per-second estimate; ``fps`` is -1 until the first sample."""

    fps: float = field(default=-1.0)

    def sample(self, elapsed_seconds: float, frames: int = 30) -> float:
        """Record ``frames`` rendered in ``elapsed_seconds`` and return the new estimate."""
        if elapsed_seconds <= 0:
            raise ValueError("elapsed time must be positive")
        current = frames / elapsed_seconds
        if self.fps == -1.0:
            self.fps = current
        else:
            self.fps = FPS_SMOOTHING * current + (1.0 - FPS_SMOOTHING) * self.fps
        return self.fps