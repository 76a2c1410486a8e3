"""A* search over the chunk map and deferred path query results."""

from __future__ import annotations

import math
from collections import deque
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any

from isotown.grid import Chunks
from isotown.pathdata import IndexVec, PathData

# Upper bound on search iterations; waypoint indices count down from it.
MAX_ITERATIONS = 1_000_000

STRAIGHT_COST = 10
DIAGONAL_COST = 14

DIRECTIONS: tuple[tuple[int, int], ...] = (
    (0, -1),
    (1, 0),
    (0, 1),
    (-1, 0),
    (1, -1),
    (1, 1),
    (-1, 1),
    (-1, -1),
)


def _heuristic(a: tuple[int, int], b: tuple[int, int]) -> int:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return math.isqrt(100 * (dx * dx + dy * dy))


@dataclass
class PathfindNode:
    """A search node: a tile with its cost so far and estimated cost to the goal."""

    tile_pos: tuple[int, int] = (0, 0)
    h_score: int = 0
    g_score: int = 0
    prev: tuple[int, int] = (0, 0)
    has_prev: bool = False

    def f(self, dijkstra: int, greed: int) -> int:
        """Weighted total score used to pick the next node to expand."""
        return dijkstra * self.g_score + greed * self.h_score


def _pick_best(open_nodes: dict[tuple[int, int], PathfindNode], dijkstra: int, greed: int) -> PathfindNode:
    best: PathfindNode | None = None
    best_f = 0
    for node in open_nodes.values():
        node_f = node.f(dijkstra, greed)
        if best is None or node_f < best_f or (node_f == best_f and node.h_score < best.h_score):
            best, best_f = node, node_f
    assert best is not None
    return best


def generate_path(
    start: tuple[int, int],
    end: tuple[int, int],
    chunks: Chunks,
    dijkstra: int,
    greed: int,
    radius: float = -1.0,
    ignore_barriers: bool = False,
) -> PathData:
    """Search a path from ``start`` to ``end``; collinear waypoints are merged.

    Missing tiles are not barriers. The end tile is always enterable. An empty
    path is returned when the start is a barrier or equals the end.
    """
    start = (int(start[0]), int(start[1]))
    end = (int(end[0]), int(end[1]))

    def is_barrier(pos: tuple[int, int]) -> bool:
        if ignore_barriers:
            return False
        tile = chunks.get_tile_safe(*pos)
        return tile is not None and tile.is_barrier()

    if is_barrier(start):
        return PathData()

    nodes: dict[tuple[int, int], PathfindNode] = {
        start: PathfindNode(start, _heuristic(start, end))
    }
    open_nodes: dict[tuple[int, int], PathfindNode] = {start: nodes[start]}
    closed: set[tuple[int, int]] = set()

    if start == end:
        return PathData()

    best: PathfindNode | None = None
    iterations = 0
    while open_nodes and iterations < MAX_ITERATIONS:
        iterations += 1
        best = _pick_best(open_nodes, dijkstra, greed)
        del open_nodes[best.tile_pos]
        closed.add(best.tile_pos)

        bx, by = best.tile_pos
        for dx, dy in DIRECTIONS:
            pos = (bx + dx, by + dy)
            diagonal = dx != 0 and dy != 0
            skip = diagonal and (is_barrier((bx + dx, by)) or is_barrier((bx, by + dy)))
            skip = skip or is_barrier(pos) or pos in closed
            if skip and pos != end:
                continue

            new_g = best.g_score + (DIAGONAL_COST if diagonal else STRAIGHT_COST)
            existing = open_nodes.get(pos)
            if existing is None:
                successor = PathfindNode(
                    tile_pos=pos,
                    h_score=_heuristic(pos, end),
                    g_score=new_g,
                    prev=best.tile_pos,
                    has_prev=True,
                )
                nodes[pos] = successor
                open_nodes[pos] = successor
            else:
                existing.g_score = new_g

        if best.tile_pos == end:
            break

    if best is None:
        return PathData()

    waypoints: deque[IndexVec] = deque()
    index = MAX_ITERATIONS - 1
    last_delta = (0, 0)
    node = best
    steps = 0
    while True:
        steps += 1
        if node.has_prev:
            px, py = nodes[node.prev].tile_pos
            delta = (node.tile_pos[0] - px, node.tile_pos[1] - py)
        else:
            delta = node.tile_pos
        if delta != last_delta or not node.has_prev:
            waypoints.appendleft(IndexVec(index, node.tile_pos))
            index -= 1

        keep_going = node.prev in nodes
        if keep_going:
            node = nodes[node.prev]

        last_delta = delta
        if node.tile_pos == start:
            waypoints.appendleft(IndexVec(index, node.tile_pos))
            break
        if steps > MAX_ITERATIONS:
            raise RuntimeError("path reconstruction did not reach the start")
        if not keep_going:
            break

    result = PathData(path=list(waypoints))
    if chunks.has_tile(*end):
        result.destination = chunks.get_tile(*end)
        result.dest_pos = end
    return result


def update_path(
    path_data: PathData,
    end: tuple[int, int],
    chunks: Chunks,
    dijkstra: int,
    greed: int,
    start: tuple[int, int],
    radius: float = -1.0,
    ignore_barriers: bool = False,
) -> None:
    """Extend ``path_data`` with a freshly searched path from ``start`` to ``end``."""
    extra = generate_path(start, end, chunks, dijkstra, greed, radius, ignore_barriers)
    path_data.append(extra)
    path_data.dest_pos = extra.dest_pos
    path_data.destination = extra.destination


class PathQuery:
    """A handle on a path result that may still be computing."""

    def __init__(self, future: Future) -> None:
        self._future = future

    def ready(self) -> bool:
        """True once the result is available."""
        return self._future.done()

    def get(self) -> Any:
        """Return the result; it must already be ready."""
        if not self._future.done():
            raise RuntimeError("path query result is not ready")
        return self._future.result()

    @classmethod
    def resolved(cls, value: Any) -> PathQuery:
        """A query whose result is already known."""
        future: Future = Future()
        future.set_result(value)
        return cls(future)