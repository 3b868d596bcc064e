"""Example: find the largest rectangles spanned by red tiles."""

from aoc2025 import PuzzleInput, RectangleValidator

TEXT = """
7,1
11,1
11,7
9,7
9,5
2,5
2,3
7,3
"""


def render(validator: RectangleValidator) -> str:
    hull = validator.hull
    tiles = {(tile.x, tile.y) for tile in validator.tiles}
    height = len(hull.x_min_by_y) + 1
    width = len(hull.y_min_by_x) + 2
    rows = []
    for y in range(height):
        row = ""
        for x in range(width):
            if (x, y) in tiles:
                row += "#"
            elif hull.contains(x, y):
                row += "X"
            else:
                row += "."
        rows.append(row)
    return "\n".join(rows)


def main() -> None:
    validator = RectangleValidator(PuzzleInput.from_text(TEXT.strip(), name="red tiles"))
    print(render(validator))
    print(f"Largest rectangle: {validator.solve_part_one()}")
    print(f"Largest rectangle inside the hull: {validator.solve_part_two()}")


if __name__ == "__main__":
    main()
