"""Entity statistics, enum id pairs and spawn descriptions."""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdPair:
    """An enum value identified by its enum group and its id inside the group."""

    group: int = 0
    id: int = 0

    def to_json(self) -> list[int]:
        return [self.group, self.id]

    @classmethod
    def from_json(cls, data: Any) -> IdPair:
        try:
            return cls(int(data[0]), int(data[1]))
        except (IndexError, KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"malformed id pair: {data!r}") from exc


@dataclass(frozen=True)
class SpawnInfo:
    """What a body spawns: an enum id pair and the serializable type to create."""

    id: IdPair = field(default_factory=IdPair)
    serializable_id: int = 0

    def to_json(self) -> list[Any]:
        return [self.id.to_json(), self.serializable_id]

    @classmethod
    def from_json(cls, data: Any) -> SpawnInfo:
        try:
            pair = IdPair.from_json(data[0])
            serializable_id = int(data[1])
        except (IndexError, KeyError, TypeError) as exc:
            raise ValueError(f"malformed spawn info: {data!r}") from exc
        except ValueError as exc:
            raise ValueError(f"malformed spawn info: {data!r}") from exc
        return cls(pair, serializable_id)


@dataclass
class EntityStats:
    """Configuration shared by every entity of one kind."""

    id: int = 0
    type: IdPair = field(default_factory=IdPair)
    hp: int = 0
    alignment: int = 0
    props: dict[str, Any] = field(default_factory=dict)
    inventory_size: int = 0
    transfer_size: int = 0
    max_speed: float = 0.0
    max_force: float = 0.0
    aggressive: bool = False
    sprite_walk: int = -1
    sprite_action: int = -1
    sprite_hit: int = -1
    cooldown_action: float = 0.0
    cooldown_path: float = 0.0
    spawn_id: int = 0
    spawn_type: IdPair = field(default_factory=IdPair)

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.to_json(),
            "hp": self.hp,
            "alignment": self.alignment,
            "props": copy.deepcopy(self.props),
            "inventorySize": self.inventory_size,
            "transferSize": self.transfer_size,
            "maxSpeed": self.max_speed,
            "maxForce": self.max_force,
            "spriteWalk": self.sprite_walk,
            "spriteAction": self.sprite_action,
            "spriteHit": self.sprite_hit,
            "caction": self.cooldown_action,
            "cpath": self.cooldown_path,
        }

    def __str__(self) -> str:
        return json.dumps(self.to_json(), indent=1)


class EntityStatsContainer:
    """Stats stored by numeric key, each also reachable through an id pair."""

    def __init__(self) -> None:
        self._keys: dict[IdPair, int] = {}
        self._stats: dict[int, EntityStats] = {}

    def insert(self, pair: IdPair, key: int, stats: EntityStats) -> None:
        """Store a copy of ``stats`` under ``key`` and map ``pair`` to that key."""
        self._keys[pair] = key
        self._stats[key] = copy.deepcopy(stats)

    def __getitem__(self, key: int) -> EntityStats:
        try:
            return self._stats[key]
        except KeyError:
            raise KeyError(f"no stats with key {key}") from None

    def get(self, pair: IdPair) -> EntityStats | None:
        """Stats reachable through ``pair``, or None when there are none."""
        key = self._keys.get(pair)
        if key is None or key not in self._stats:
            logger.warning("no stats found for pair %s", pair)
            return None
        return self._stats[key]

    def has_key(self, key: int) -> bool:
        return key in self._stats

    def has_pair(self, pair: IdPair) -> bool:
        return pair in self._keys

    def __len__(self) -> int:
        return len(self._stats)

    def __iter__(self) -> Iterator[tuple[int, EntityStats]]:
        return iter(self._stats.items())