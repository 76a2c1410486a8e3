# isotown

Building blocks for the simulation side of an isometric town-building game.
It is a plain Python library with no third-party dependencies.

## Modules

### `isotown.prng`

`Prng` is a small RC4-keystream pseudo-random generator. It is meant for game
randomness and is not suitable for cryptography.

- `Prng(seed)` takes a `bytes` seed. Pass `None` and the generator seeds
  itself from the clock on first use. `seed_bytes(key)` uses at most the
  first 256 octets of the key and rejects an empty key. `seed_time()` seeds
  from the current time.
- `next_octet()` returns a value in `[0, 255]` and `next_bytes(size)` returns
  that many bytes.
- `next_uint()` and `next_ulong()` return 32-bit and 64-bit unsigned
  integers. `next_int()` and `next_long()` return the same values masked to
  their signed maximum.
- `next_double()` returns a float in `[0, 1)`. `next_normal()` returns a
  value from the standard normal distribution. Values are produced in pairs
  and the second one is cached.

The same seed always yields the same sequence.

### `isotown.grid`

- `Tile` is one map cell. It has a `tile_pos`, `visible` and `active` flags,
  three one-octet bonuses, an optional `building` and a list of `entities`.
  `is_barrier()` is true when the tile has a building whose `base.barrier`
  is true. `get_building()` returns `building.base`, or `None`.
- `Grid(cx, cy, idx, idy)` is a `cx` by `cy` block of tiles at chunk index
  `(idx, idy)`. `tile(x, y)` takes local coordinates and raises `IndexError`
  when they fall outside the block. It also holds sets of buildings,
  citizens and enemies. `insert_entity` and `remove_entity` sort entities by
  their `entity_type` (`EntityType.CITIZEN` or `EntityType.ENEMY`).
- `Chunks(gridw, gridh)` maps world coordinates, negative ones included,
  onto grids that were registered with `add(grid)`.
  - `has_tile` and `get_tile_safe` only count tiles in grids that exist and
    whose `active` flag is set.
  - `get_tile` raises `KeyError` when no grid holds the tile.
  - `is_free`, `has_build` and `get_build` report on buildings.
  - `get`, `get_grid`, `gen_key` and `clear` give access to the grids
    themselves.
- `pack_flags` and `unpack_flags` encode a tile's flags and bonuses into one
  integer.

`Tile`, `Grid` and `Chunks` have `to_json()` and `from_json()`, which
convert to and from JSON-compatible lists and dicts. Buildings and entities
are written as references: an object's `to_ptr_json()` when it has one, and
the object itself otherwise. On loading, references are kept as hashable
tuples and are not resolved into objects. Malformed input raises
`ValueError`.

### `isotown.pathdata`

- `IndexVec(index, value)` is a waypoint.
- `PathData` is a list of waypoints, a `destination` tile, a `dest_pos` and a
  `follower` cursor.
  - `valid()` is true when the path is not empty and ends on the
    destination. `why_invalid()` explains why it is not.
  - `front()` and `pop()` read and advance the cursor. Both raise
    `IndexError` once the path is `finished()`.
  - `append(other)` continues the path with another one and renumbers the
    waypoints.
  - `to_json()` and `from_json()` save the waypoints, `dest_pos` and the
    cursor. The destination tile is not saved.

### `isotown.pathfind`

- `generate_path(start, end, chunks, dijkstra, greed, radius=-1.0, ignore_barriers=False)`
  runs an 8-directional A* search over `Chunks`. Straight steps cost 10 and
  diagonal steps cost 14. The heuristic is a scaled Euclidean distance, and
  nodes are ranked by `dijkstra * g + greed * h`.
  - Tiles that are missing are not barriers.
  - Diagonal moves may not cut past a barrier corner.
  - The end tile can always be entered.
  - Straight runs are collapsed into their turning points.
  - The path is empty when the start is a barrier or equals the end.
  - `radius` is accepted but not used.
- `update_path(...)` searches a new leg and appends it to an existing
  `PathData`.
- `PathfindNode` is a search node with an `f(dijkstra, greed)` score.
- `PathQuery` wraps a `concurrent.futures.Future`.
  - `ready()` reports whether the result is available.
  - `get()` returns the result and raises `RuntimeError` if it is not ready.
  - `PathQuery.resolved(value)` builds a query whose result is already known.

### `isotown.stats`

- `IdPair(group, id)` and `SpawnInfo(id, serializable_id)` are frozen
  values with JSON round trips.
- `EntityStats` holds the configuration for one kind of unit. `to_json()`
  returns it as a dict, and `str()` returns the same data as indented JSON.
- `EntityStatsContainer` stores copies of stats under numeric keys.
  - Each stored entry can also be reached through an `IdPair`.
  - `container[key]` raises `KeyError` when the key is unknown.
  - `get(pair)` returns `None` and logs a warning when the pair is unknown.
  - `has_key`, `has_pair`, `len()` and iteration over `(key, stats)` pairs
    are also supported.

### `isotown.steering`

Pure functions on `(x, y)` tuples:

- `seek_force` returns the force that steers towards a destination. A
  destination at the origin yields no force.
- `separation_force` returns the average push away from nearby points.
  Entities moving slowly are pushed much harder than fast ones.
- `apply_force` integrates a force over at most one second and caps the
  speed at `max_speed`.
- `path_start_index` returns the waypoint to head for when joining a path
  mid-segment.
- `inventory_full` checks the carried weight against a fraction of the
  capacity. A capacity of 0 is always full and a negative capacity is
  unlimited.

### `isotown.timeline`

- `TimelineEvent` holds missions. Each mission is any object with
  `update(context)` and `is_done(context)`. The event is finished when every
  mission is done.
- `Timeline` updates its `active` event. When that event finishes, the
  timeline moves it to `completed` and takes the next one from `pending`.
  `is_finished()` becomes true once nothing is left.

### `isotown.pointer`

- `PointerTracker(handler)` turns per-frame pointer state into callbacks on
  the handler: `mouse_start`, `mouse_dragged`, `mouse_focus_start`,
  `mouse_focus`, `mouse_focus_end`, `mouse_released`, `mouse_pressed`,
  `mouse_zoom` and `mouse_zoom_dragged`.
  - Call `update(pos, is_down, second_touch=None, focus_time=0.0)` once per
    frame. `focus_time` is the current clock reading in seconds.
  - A press held for 0.5 s without dragging becomes a focus gesture.
  - A release within a squared distance of 16 of the press point also counts
    as a click.
  - A second touch point drives pinch zoom.
- `FpsMeter.sample(elapsed_seconds, frames=30)` updates a smoothed
  frames-per-second estimate. The first sample is taken as-is. Later samples
  are weighted 0.7 new and 0.3 old. A non-positive time raises `ValueError`.

## Example

```python
from isotown.grid import Chunks, Grid
from isotown.pathfind import generate_path

chunks = Chunks(16, 16)
chunks.add(Grid(16, 16, 0, 0))

path = generate_path((1, 1), (8, 5), chunks, 1, 1)
print(path.valid())
print(path)
```

## What it does not do

This is a library of parts, not a playable game. It has:

- no window, rendering, input polling or main loop;
- no command-line program;
- no world state that owns buildings, entities, resources or power networks;
- no settings or save-file handling beyond the `to_json` and `from_json`
  methods above;
- no worker pool for path queries.

The callers supply buildings and entities, and the callers resolve the
references that the JSON loaders leave in place.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```