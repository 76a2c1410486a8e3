"""Paths produced by the pathfinder and the cursor that follows them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from isotown.grid import Tile


def _vec_str(value: tuple[int, int]) -> str:
    return f"({value[0]}, {value[1]})"


def _as_pos(data: Any) -> tuple[int, int]:
    x, y = data
    return int(x), int(y)


@dataclass(frozen=True)
class IndexVec:
    """A path waypoint: a tile position with an increasing sequence index."""

    index: int
    value: tuple[int, int]

    def to_json(self) -> list[Any]:
        return [self.index, list(self.value)]

    @classmethod
    def from_json(cls, data: Any) -> IndexVec:
        try:
            index, value = data
            return cls(int(index), _as_pos(value))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"malformed waypoint: {data!r}") from exc


@dataclass
class PathData:
    """Waypoints towards a destination tile, with a follower position into them."""

    path: list[IndexVec] = field(default_factory=list)
    destination: Tile | None = None
    dest_pos: tuple[int, int] = (0, 0)
    follower: int = 0

    def valid(self) -> bool:
        """True when the path is non-empty and ends on the destination tile."""
        return (
            self.destination is not None
            and bool(self.path)
            and self.path[-1].value == self.destination.tile_pos
        )

    def finished(self) -> bool:
        """True once the follower has moved past the last waypoint."""
        return self.follower >= len(self.path)

    def why_invalid(self) -> str:
        if self.destination is None:
            return "No destination"
        if not self.path:
            return "No path"
        if self.path[-1].value != self.destination.tile_pos:
            return (
                "Path doesn't lead to destination: Path stops in "
                f"{_vec_str(self.path[-1].value)} while dest is "
                f"{_vec_str(self.destination.tile_pos)}"
            )
        return "Valid"

    def front(self) -> tuple[int, int]:
        """The waypoint the follower currently points at."""
        if self.finished():
            raise IndexError("path is already finished")
        return self.path[self.follower].value

    def pop(self) -> None:
        """Advance the follower to the next waypoint."""
        if self.finished():
            raise IndexError("path is already finished")
        self.follower += 1

    def clear(self) -> None:
        self.destination = None
        self.path.clear()
        self.follower = 0

    def append(self, other: PathData) -> None:
        """Continue this path with ``other``, replacing the current last waypoint."""
        index = self.path[-1].index if self.path else 0
        follower = self.follower
        if self.path:
            self.path.pop()
            follower -= 1
        for waypoint in other.path:
            if self.path and self.path[-1].value == waypoint.value:
                continue
            index += 1
            self.path.append(IndexVec(index, waypoint.value))
        self.follower = min(max(follower, 0), len(self.path))

    def __str__(self) -> str:
        body = "".join(
            f"{{ {wp.index} : {_vec_str(wp.value)}}}, " for wp in self.path
        )
        return "{" + body + "}"

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.path:
            data["path"] = [wp.to_json() for wp in self.path]
        data["pos"] = list(self.dest_pos)
        if self.path:
            data["index"] = self.follower
        return data

    @classmethod
    def from_json(cls, data: Any) -> PathData:
        try:
            path = [IndexVec.from_json(item) for item in data.get("path", [])]
            dest_pos = _as_pos(data["pos"])
            follower = int(data["index"]) if "index" in data else 0
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ValueError(f"malformed path data: {exc}") from exc
        if not 0 <= follower <= len(path):
            raise ValueError(f"follower index {follower} outside path of {len(path)}")
        return cls(path=path, dest_pos=dest_pos, follower=follower)