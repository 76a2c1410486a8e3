"""Movement helpers for entities: steering, separation and path following."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

Vec = tuple[float, float]

# Longest time step a single update may integrate.
MAX_DELTA = 1.0
# Extra length allowed when deciding that a position lies on a path segment.
SEGMENT_TOLERANCE = 0.5
# Largest angle, in radians, between velocity and segment to count as heading along it.
HEADING_TOLERANCE = 0.25
# Separation multipliers for slow and fast moving entities.
SLOW_PUSH = 50.2
FAST_PUSH = 0.8

_ZERO: Vec = (0.0, 0.0)


def _length(v: Vec) -> float:
    return math.hypot(v[0], v[1])


def _normalized(v: Vec) -> tuple[Vec, float]:
    length = _length(v)
    if length == 0.0:
        return _ZERO, 0.0
    return (v[0] / length, v[1] / length), length


def _dist(a: Vec, b: Vec) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def _angle_between(a: Vec, b: Vec) -> float:
    cross = a[0] * b[1] - a[1] * b[0]
    dot = a[0] * b[0] + a[1] * b[1]
    return math.atan2(cross, dot)


def seek_force(
    pos: Vec, vel: Vec, destination: Vec, max_speed: float, max_force: float
) -> Vec:
    """Steering force that turns ``vel`` towards ``destination`` at full speed.

    A destination at the origin is treated as "no destination" and yields no force.
    """
    if tuple(destination) == _ZERO:
        return _ZERO
    direction, _ = _normalized((destination[0] - pos[0], destination[1] - pos[1]))
    if max_force == 0.0 or max_speed == 0.0:
        return _ZERO
    scale = max_force / max_speed
    return (
        (direction[0] * max_speed - vel[0]) * scale,
        (direction[1] * max_speed - vel[1]) * scale,
    )


def separation_force(
    pos: Vec, vel: Vec, radius: float, max_speed: float, neighbours: Iterable[Vec]
) -> Vec:
    """Average push away from neighbouring points within ``radius``.

    Each push is inversely proportional to the distance; slow entities are
    pushed much harder than entities moving near their top speed.
    """
    slow = vel[0] * vel[0] + vel[1] * vel[1] < (max_speed * max_speed) / 2.0
    push = SLOW_PUSH if slow else FAST_PUSH
    total_x = total_y = 0.0
    count = 0
    for other in neighbours:
        dx = pos[0] - other[0]
        dy = pos[1] - other[1]
        dist_sq = dx * dx + dy * dy
        if not 0.0 < dist_sq <= radius * radius:
            continue
        (ux, uy), length = _normalized((dx, dy))
        total_x += ux / length * push
        total_y += uy / length * push
        count += 1
    if not count:
        return _ZERO
    return (total_x / count, total_y / count)


def apply_force(vel: Vec, force: Vec, delta: float, max_speed: float) -> Vec:
    """Integrate ``force`` over ``delta`` seconds and cap the speed at ``max_speed``."""
    delta = min(delta, MAX_DELTA)
    new_vel = (vel[0] + force[0] * delta, vel[1] + force[1] * delta)
    if new_vel[0] * new_vel[0] + new_vel[1] * new_vel[1] > max_speed * max_speed:
        direction, _ = _normalized(new_vel)
        new_vel = (direction[0] * max_speed, direction[1] * max_speed)
    return new_vel


def path_start_index(points: Sequence[Vec], pos: Vec, vel: Vec) -> int:
    """Index of the waypoint to head for first when joining a path at ``pos``.

    If ``pos`` already lies on a segment and the entity moves along it, the
    segment's end is chosen so the entity does not turn back; otherwise 0.
    """
    for i, (a, b) in enumerate(zip(points, points[1:])):
        between = _dist(pos, a) + _dist(pos, b) < _dist(a, b) + SEGMENT_TOLERANCE
        if tuple(vel) == _ZERO:
            heading = True
        else:
            segment = (b[0] - a[0], b[1] - a[1])
            heading = abs(_angle_between(segment, vel)) < HEADING_TOLERANCE
        if between and heading:
            return i + 1
    return 0


def inventory_full(weight: float, inventory_size: int, limit: float) -> bool:
    """Whether carried ``weight`` exceeds ``limit`` as a fraction of the capacity.

    A capacity of zero is always full; a negative capacity is unlimited.
    """
    if inventory_size == 0:
        return True
    if inventory_size < 0:
        return False
    return weight / inventory_size > limit