import numpy as np
import pytest

from aoc2025.errors import MalformedInputError, ProductOverflowError, UnsolvableError
from aoc2025.puzzle_input import PuzzleInput
from aoc2025.tiles import (
    AreaQueue,
    BoundingHull,
    RectangleValidator,
    RedTile,
    is_valid_rectangle,
    parse_red_tiles,
    rectangle_area,
)

TILES = [
    "7,1",
    "11,1",
    "11,7",
    "9,7",
    "9,5",
    "2,5",
    "2,3",
    "7,3",
]


def _validator(lines):
    return RectangleValidator(PuzzleInput.from_text("\n".join(lines) + "\n"))


def _border(a, b):
    x_lo, x_hi = sorted((a.x, b.x))
    y_lo, y_hi = sorted((a.y, b.y))
    for x in range(x_lo, x_hi + 1):
        yield x, y_lo
        yield x, y_hi
    for y in range(y_lo, y_hi + 1):
        yield x_lo, y
        yield x_hi, y


def test_example_part_one():
    assert _validator(TILES).solve_part_one() == 50


def test_example_part_two():
    assert _validator(TILES).solve_part_two() == 24


def test_phases_are_idempotent():
    validator = _validator(TILES)
    assert validator.solve_part_two() == 24
    assert validator.solve_part_one() == 50
    assert validator.solve_part_two() == 24


def test_four_corner_rectangle_is_valid_for_both_parts():
    validator = _validator(["2,3", "10,3", "10,8", "2,8"])
    assert validator.solve_part_one() == 54
    assert validator.solve_part_two() == 54


def test_single_tile_spans_a_unit_rectangle():
    validator = _validator(["4,6"])
    assert validator.solve_part_one() == 1
    assert validator.solve_part_two() == 1


@pytest.mark.parametrize("solve", ["solve_part_one", "solve_part_two"])
def test_empty_input_is_unsolvable(solve):
    validator = RectangleValidator(PuzzleInput.from_text(""))
    with pytest.raises(UnsolvableError) as exc:
        getattr(validator, solve)()
    assert "[day 9, part" in str(exc.value)


@pytest.mark.parametrize("line", ["1, 2", "1,2,3", "x,1", "-3,4", "7"])
def test_malformed_lines_are_rejected(line):
    with pytest.raises(MalformedInputError) as exc:
        parse_red_tiles(["1,1", "2,2", line])
    assert "line 3" in str(exc.value)


def test_duplicate_tiles_collapse():
    assert parse_red_tiles(["1,1", "4,4", "1,1"]) == [RedTile(1, 1), RedTile(4, 4)]


def test_rectangle_area_is_inclusive():
    assert rectangle_area(RedTile(2, 5), RedTile(11, 1)) == 50
    assert rectangle_area(RedTile(3, 3), RedTile(3, 3)) == 1


def test_example_hull_extents():
    hull = BoundingHull.from_tiles(parse_red_tiles(TILES))
    assert hull.contains(7, 1)
    assert hull.contains(8, 2)
    assert hull.contains(3, 4)
    assert not hull.contains(2, 1)
    assert not hull.contains(3, 7)


def test_points_outside_the_arrays_are_outside():
    hull = BoundingHull.from_tiles(parse_red_tiles(TILES))
    for x, y in [(-1, 3), (3, -1), (12, 3), (3, 8), (500, 500)]:
        assert not hull.contains(x, y)
    assert not hull.contains_many([-1, 12, 500], [3, 3, 500]).any()


def test_empty_hull_contains_nothing():
    hull = BoundingHull.from_tiles([])
    assert not hull.contains(0, 0)
    assert hull.contains_many(np.arange(3), 0).tolist() == [False, False, False]


def test_every_tile_lies_inside_its_hull():
    rng = np.random.default_rng(9)
    tiles = list(dict.fromkeys(RedTile(int(x), int(y)) for x, y in rng.integers(0, 40, size=(30, 2))))
    hull = BoundingHull.from_tiles(tiles)
    for tile in tiles:
        assert hull.contains(tile.x, tile.y)
    xs = np.array([tile.x for tile in tiles])
    ys = np.array([tile.y for tile in tiles])
    assert hull.contains_many(xs, ys).all()


def test_vectorised_membership_matches_scalar_membership():
    rng = np.random.default_rng(17)
    tiles = list(dict.fromkeys(RedTile(int(x), int(y)) for x, y in rng.integers(0, 25, size=(12, 2))))
    hull = BoundingHull.from_tiles(tiles)

    xs, ys = np.meshgrid(np.arange(-2, 28), np.arange(-2, 28))
    grid = hull.contains_many(xs, ys)
    expected = np.array([[hull.contains(int(x), int(y)) for x in row_x] for row_x, y in zip(xs, ys[:, 0])])
    assert np.array_equal(grid, expected)


def test_rectangle_validity_matches_border_scan():
    rng = np.random.default_rng(23)
    tiles = list(dict.fromkeys(RedTile(int(x), int(y)) for x, y in rng.integers(0, 30, size=(10, 2))))
    hull = BoundingHull.from_tiles(tiles)

    for _ in range(200):
        a = RedTile(*(int(v) for v in rng.integers(0, 32, size=2)))
        b = RedTile(*(int(v) for v in rng.integers(0, 32, size=2)))
        expected = all(hull.contains(x, y) for x, y in _border(a, b))
        assert is_valid_rectangle(hull, a, b) == expected


def test_area_queue_is_descending_and_includes_self_pairs():
    tiles = parse_red_tiles(TILES)
    queue = AreaQueue.from_tiles(tiles)
    assert len(queue) == len(tiles) * (len(tiles) + 1) // 2

    entries = list(queue)
    areas = [area for area, _ in entries]
    assert areas == sorted(areas, reverse=True)
    for area, (a, b) in entries:
        assert area == rectangle_area(a, b)
    assert sum(1 for _, (a, b) in entries if a == b) == len(tiles)
    assert not queue


def test_area_queue_fresh_restarts_from_the_largest_pair():
    queue = AreaQueue.from_tiles(parse_red_tiles(TILES))
    top = queue.pop()
    restarted = queue.fresh()
    assert restarted.peek() == top
    assert top[0] == 50


def test_empty_area_queue():
    queue = AreaQueue.from_tiles([])
    assert len(queue) == 0
    with pytest.raises(IndexError):
        queue.peek()


def test_part_two_never_exceeds_part_one():
    rng = np.random.default_rng(31)
    tiles = list(dict.fromkeys(RedTile(int(x), int(y)) for x, y in rng.integers(0, 50, size=(15, 2))))
    validator = _validator([str(tile) for tile in tiles])
    assert validator.solve_part_two() <= validator.solve_part_one()


def test_coordinates_beyond_32_bits_are_malformed():
    validator = _validator(["0,0", "99999999999999999999,0"])
    with pytest.raises(MalformedInputError) as exc:
        validator.solve_part_one()
    assert "line 2: coordinate 99999999999999999999 does not fit" in str(exc.value)


def test_area_queue_rejects_areas_beyond_64_bits():
    tiles = [RedTile(0, 0), RedTile(3037000500, 3037000500)]
    with pytest.raises(ProductOverflowError) as exc:
        AreaQueue.from_tiles(tiles)
    assert "9223372043074251001" in str(exc.value)


def test_largest_32_bit_rectangle_fits_in_64_bits():
    validator = _validator(["0,0", "2147483647,2147483647"])
    assert validator.solve_part_one() == 2**62


def _random_rectangle(rng):
    x0, y0 = (int(v) for v in rng.integers(1, 20, size=2))
    x1 = x0 + int(rng.integers(1, 15))
    y1 = y0 + int(rng.integers(1, 15))
    return x0, y0, x1, y1


def _rectangle_tiles(rng, x0, y0, x1, y1):
    tiles = [RedTile(x0, y0), RedTile(x1, y0), RedTile(x1, y1), RedTile(x0, y1)]
    for _ in range(int(rng.integers(0, 4))):
        side = int(rng.integers(4))
        if side == 0:
            tiles.append(RedTile(int(rng.integers(x0, x1 + 1)), y0))
        elif side == 1:
            tiles.append(RedTile(int(rng.integers(x0, x1 + 1)), y1))
        elif side == 2:
            tiles.append(RedTile(x0, int(rng.integers(y0, y1 + 1))))
        else:
            tiles.append(RedTile(x1, int(rng.integers(y0, y1 + 1))))
    order = rng.permutation(len(tiles))
    return list(dict.fromkeys(tiles[int(i)] for i in order))


def test_pairs_inside_a_rectangular_hull_are_valid_and_pairs_poking_out_are_not():
    rng = np.random.default_rng(41)
    for _ in range(25):
        x0, y0, x1, y1 = _random_rectangle(rng)
        hull = BoundingHull.from_tiles(_rectangle_tiles(rng, x0, y0, x1, y1))

        for _ in range(10):
            a = RedTile(int(rng.integers(x0, x1 + 1)), int(rng.integers(y0, y1 + 1)))
            b = RedTile(int(rng.integers(x0, x1 + 1)), int(rng.integers(y0, y1 + 1)))
            assert is_valid_rectangle(hull, a, b)

            outside = [
                RedTile(x0 - 1, b.y),
                RedTile(x1 + 1, b.y),
                RedTile(b.x, y0 - 1),
                RedTile(b.x, y1 + 1),
            ]
            for poking in outside:
                assert not is_valid_rectangle(hull, a, poking)
                assert not is_valid_rectangle(hull, poking, a)


def test_rectangular_hull_answers_its_own_area():
    rng = np.random.default_rng(43)
    for _ in range(10):
        x0, y0, x1, y1 = _random_rectangle(rng)
        tiles = _rectangle_tiles(rng, x0, y0, x1, y1)
        validator = _validator([str(tile) for tile in tiles])
        area = (x1 - x0 + 1) * (y1 - y0 + 1)
        assert validator.solve_part_one() == area
        assert validator.solve_part_two() == area
