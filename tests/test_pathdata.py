import pytest

from isotown.grid import Tile
from isotown.pathdata import IndexVec, PathData


def make_path(points, dest=None, follower=0):
    path = [IndexVec(i, p) for i, p in enumerate(points)]
    destination = Tile(dest) if dest is not None else None
    return PathData(path=path, destination=destination, dest_pos=dest or (0, 0), follower=follower)


def test_valid_when_path_ends_on_destination():
    data = make_path([(0, 0), (1, 1), (2, 2)], dest=(2, 2))
    assert data.valid() is True
    assert data.why_invalid() == "Valid"


def test_no_destination_is_invalid():
    data = make_path([(0, 0), (1, 1)])
    assert data.valid() is False
    assert data.why_invalid() == "No destination"


def test_empty_path_is_invalid():
    data = make_path([], dest=(3, 4))
    assert data.valid() is False
    assert data.why_invalid() == "No path"


def test_path_ending_elsewhere_is_invalid():
    data = make_path([(0, 0), (1, 1)], dest=(3, 4))
    assert data.valid() is False
    assert data.why_invalid().startswith("Path doesn't lead to destination")


def test_front_and_pop_walk_the_path():
    points = [(0, 0), (1, 0), (2, 0)]
    data = make_path(points, dest=(2, 0))
    seen = []
    while not data.finished():
        seen.append(data.front())
        data.pop()
    assert seen == points
    with pytest.raises(IndexError):
        data.front()
    with pytest.raises(IndexError):
        data.pop()


def test_clear_resets_destination_and_path():
    data = make_path([(0, 0), (1, 1)], dest=(1, 1), follower=1)
    data.clear()
    assert data.destination is None
    assert data.path == []
    assert data.finished() is True
    assert data.valid() is False


def test_append_replaces_last_point_and_skips_duplicates():
    first = make_path([(0, 0), (1, 1)])
    second = PathData(path=[IndexVec(5, (1, 1)), IndexVec(6, (2, 2))])
    first.append(second)
    assert [wp.value for wp in first.path] == [(0, 0), (1, 1), (2, 2)]
    indices = [wp.index for wp in first.path]
    assert indices == sorted(indices)
    assert len(set(indices)) == len(indices)
    assert first.follower == 0


def test_append_to_empty_path():
    first = PathData()
    first.append(make_path([(4, 4), (5, 5)]))
    assert [wp.value for wp in first.path] == [(4, 4), (5, 5)]
    assert first.follower == 0


def test_str_lists_waypoints():
    data = make_path([(0, 0), (1, 1)])
    text = str(data)
    assert text.startswith("{")
    assert text.endswith("}")
    assert text.count(" : ") == 2


def test_str_of_empty_path():
    assert str(PathData()) == "{}"


def test_json_round_trip():
    data = make_path([(0, 0), (1, 1), (2, 2)], dest=(2, 2), follower=2)
    restored = PathData.from_json(data.to_json())
    assert restored.path == data.path
    assert restored.dest_pos == data.dest_pos
    assert restored.follower == data.follower
    assert restored.destination is None


def test_json_layout():
    data = make_path([(3, 4)], dest=(3, 4), follower=1)
    assert data.to_json() == {"path": [[0, [3, 4]]], "pos": [3, 4], "index": 1}


def test_empty_path_json_omits_path_and_index():
    data = PathData(dest_pos=(7, 8))
    encoded = data.to_json()
    assert "path" not in encoded
    assert "index" not in encoded
    restored = PathData.from_json(encoded)
    assert restored.path == []
    assert restored.dest_pos == (7, 8)


def test_from_json_rejects_missing_pos():
    with pytest.raises(ValueError):
        PathData.from_json({"path": [[0, [1, 1]]]})


def test_from_json_rejects_out_of_range_index():
    with pytest.raises(ValueError):
        PathData.from_json({"path": [[0, [1, 1]]], "pos": [1, 1], "index": 5})


def test_from_json_rejects_malformed_waypoint():
    with pytest.raises(ValueError):
        PathData.from_json({"path": [[0]], "pos": [1, 1]})