"""Tiles, fixed-size grids of tiles and the chunk map that holds them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

_BYTE_FIELDS = ("speed_bonus", "attack_bonus", "body_bonus")


class EntityType(IntEnum):
    NONE = 0
    CITIZEN = 1
    ENEMY = 2


def pack_flags(
    visible: bool, active: bool, speed_bonus: int, attack_bonus: int, body_bonus: int
) -> int:
    """Pack tile flags: two single bits followed by three octets."""
    for name, value in zip(_BYTE_FIELDS, (speed_bonus, attack_bonus, body_bonus)):
        if not 0 <= value <= 255:
            raise ValueError(f"{name} must fit in one octet, got {value}")
    return (
        int(bool(visible))
        | int(bool(active)) << 1
        | speed_bonus << 2
        | attack_bonus << 10
        | body_bonus << 18
    )


def unpack_flags(code: int) -> tuple[bool, bool, int, int, int]:
    """Inverse of :func:`pack_flags`."""
    return (
        bool(code & 1),
        bool(code >> 1 & 1),
        code >> 2 & 0xFF,
        code >> 10 & 0xFF,
        code >> 18 & 0xFF,
    )


def _ref(obj: Any) -> Any:
    """Reference form of a body: its pointer JSON, or an unresolved reference."""
    if hasattr(obj, "to_ptr_json"):
        return obj.to_ptr_json()
    if isinstance(obj, tuple):
        return [_ref(item) for item in obj]
    return obj


def _freeze(data: Any) -> Any:
    """Make a JSON reference hashable so it can wait in a set until resolved."""
    if isinstance(data, list):
        return tuple(_freeze(item) for item in data)
    return data


def _short(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


@dataclass(eq=False)
class Tile:
    """A single map cell, optionally covered by a building and holding entities."""

    tile_pos: tuple[int, int] = (0, 0)
    visible: bool = True
    active: bool = True
    speed_bonus: int = 0
    attack_bonus: int = 0
    body_bonus: int = 0
    building: Any = None
    entities: list[Any] = field(default_factory=list)

    def is_barrier(self) -> bool:
        return self.building is not None and bool(self.building.base.barrier)

    def remove_entity(self, entity: Any) -> bool:
        try:
            self.entities.remove(entity)
        except ValueError:
            return False
        return True

    def get_building(self) -> Any:
        if self.building is not None and self.building.base is not None:
            return self.building.base
        return None

    def to_json(self) -> list[Any]:
        data: list[Any] = [
            list(self.tile_pos),
            pack_flags(
                self.visible,
                self.active,
                self.speed_bonus,
                self.attack_bonus,
                self.body_bonus,
            ),
        ]
        data.append(_ref(self.building) if self.building is not None else None)
        if self.entities:
            data.append([_ref(e) for e in self.entities])
        elif data[2] is None:
            data.pop()
        return data

    @classmethod
    def from_json(cls, data: Any) -> Tile:
        try:
            x, y = data[0]
            code = int(data[1])
        except (IndexError, KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"malformed tile: {data!r}") from exc
        visible, active, speed, attack, body = unpack_flags(code)
        tile = cls((x, y), visible, active, speed, attack, body)
        if len(data) > 2 and data[2] is not None:
            tile.building = _freeze(data[2])
        if len(data) > 3 and data[3] is not None:
            tile.entities = [_freeze(e) for e in data[3]]
        return tile


class Grid:
    """A ``cx`` by ``cy`` block of tiles at chunk index ``(idx, idy)``."""

    def __init__(self, cx: int = 0, cy: int = 0, idx: int = 0, idy: int = 0) -> None:
        self.cx = cx
        self.cy = cy
        self.idx = idx
        self.idy = idy
        self.tiles: list[Tile] = []
        if cx != 0 and cy != 0:
            self.tiles = [
                Tile((i % cx + cx * idx, i // cx + cy * idy)) for i in range(cx * cy)
            ]
        self.buildings: set[Any] = set()
        self.citizens: set[Any] = set()
        self.enemies: set[Any] = set()

    def tile(self, x: int, y: int) -> Tile:
        """Return the tile at local coordinates ``(x, y)``."""
        if not self.tiles or not (0 <= x < self.cx and 0 <= y < self.cy):
            raise IndexError(f"tile ({x}, {y}) outside grid {self.cx}x{self.cy}")
        return self.tiles[y * self.cx + x]

    def _entity_set(self, entity: Any) -> set[Any] | None:
        if entity.entity_type == EntityType.CITIZEN:
            return self.citizens
        if entity.entity_type == EntityType.ENEMY:
            return self.enemies
        return None

    def insert_entity(self, entity: Any) -> None:
        target = self._entity_set(entity)
        if target is not None:
            target.add(entity)

    def remove_entity(self, entity: Any) -> None:
        target = self._entity_set(entity)
        if target is not None:
            target.discard(entity)

    def insert_building(self, building: Any) -> None:
        self.buildings.add(building)

    def remove_building(self, building: Any) -> None:
        self.buildings.discard(building)

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"c": [self.cx, self.cy], "id": [self.idx, self.idy]}
        if self.buildings or self.citizens or self.enemies:
            data["sets"] = [
                [_ref(item) for item in group]
                for group in (self.buildings, self.citizens, self.enemies)
            ]
        if self.tiles:
            data["t"] = [tile.to_json() for tile in self.tiles]
        return data

    @classmethod
    def from_json(cls, data: Any) -> Grid:
        try:
            cx, cy = data["c"]
            idx, idy = data["id"]
            grid = cls()
            grid.cx, grid.cy, grid.idx, grid.idy = cx, cy, idx, idy
            if "sets" in data:
                buildings, citizens, enemies = data["sets"]
                grid.buildings = {_freeze(r) for r in buildings}
                grid.citizens = {_freeze(r) for r in citizens}
                grid.enemies = {_freeze(r) for r in enemies}
            count = cx * cy
            if count:
                tiles = data["t"]
                grid.tiles = [Tile.from_json(tiles[i]) for i in range(count)]
        except (IndexError, KeyError, TypeError) as exc:
            raise ValueError(f"malformed grid: {exc}") from exc
        return grid


class Chunks:
    """The world map: grids of ``gridw`` by ``gridh`` tiles keyed by chunk index."""

    def __init__(self, gridw: int, gridh: int) -> None:
        self.gridw = gridw
        self.gridh = gridh
        self.available: dict[int, Grid] = {}

    @staticmethod
    def gen_key(x: int, y: int) -> int:
        """Combine two 16-bit chunk indices into one unsigned 32-bit key."""
        return ((_short(x) & 0xFFFFFFFF) + ((_short(y) & 0xFFFFFFFF) << 16)) & 0xFFFFFFFF

    def _index(self, x: int, y: int) -> tuple[int, int]:
        return _short(x // self.gridw), _short(y // self.gridh)

    def add(self, grid: Grid) -> None:
        self.available[self.gen_key(grid.idx, grid.idy)] = grid

    def clear(self) -> None:
        self.available.clear()

    def get(self, index_x: int, index_y: int) -> Grid | None:
        return self.available.get(self.gen_key(index_x, index_y))

    def get_grid(self, x: int, y: int) -> Grid | None:
        return self.get(*self._index(x, y))

    def has_tile(self, x: int, y: int) -> bool:
        if self.gen_key(*self._index(x, y)) not in self.available:
            return False
        return self.get_tile(x, y).active

    def get_tile(self, x: int, y: int) -> Tile:
        grid = self.get_grid(x, y)
        if grid is None:
            raise KeyError(f"no grid holds tile ({x}, {y})")
        tile = grid.tile(x % self.gridw, y % self.gridh)
        tile.tile_pos = (x, y)
        return tile

    def get_tile_safe(self, x: int, y: int) -> Tile | None:
        if not self.has_tile(x, y):
            return None
        return self.get_tile(x, y)

    def is_free(self, x: int, y: int) -> bool:
        return not self.has_build(x, y) and self.has_tile(x, y)

    def has_build(self, x: int, y: int) -> bool:
        if not self.has_tile(x, y):
            return False
        return self.get_tile(x, y).building is not None

    def get_build(self, x: int, y: int) -> Any:
        if not self.has_build(x, y):
            return None
        return self.get_tile(x, y).building

    def to_json(self) -> dict[str, Any]:
        return {
            "g": [self.gridw, self.gridh],
            "a": {str(key): grid.to_json() for key, grid in self.available.items()},
        }

    @classmethod
    def from_json(cls, data: Any) -> Chunks:
        try:
            gridw, gridh = data["g"]
            chunks = cls(gridw, gridh)
            for key, grid_data in data.get("a", {}).items():
                chunks.available[int(key) & 0xFFFFFFFF] = Grid.from_json(grid_data)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ValueError(f"malformed chunks: {exc}") from exc
        return chunks