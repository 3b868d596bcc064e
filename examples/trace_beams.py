"""Example: trace a beam through a small manifold and count its timelines."""

from aoc2025 import BeamTracer, PuzzleInput

TEXT = """
.......S.......
...............
.......^.......
...............
......^.^......
...............
.....^.^.^.....
...............
....^.^...^....
...............
...^.^...^.^...
...............
..^...^.....^..
...............
.^.^.^.^.^...^.
...............
"""


def main() -> None:
    tracer = BeamTracer(PuzzleInput.from_text(TEXT.lstrip("\n"), name="beams"))
    print(f"Splits: {tracer.solve_part_one()}")
    print(f"Traced manifold:\n{tracer.manifold}")
    print(f"Timelines: {tracer.solve_part_two()}")
    print(f"Cached anchor cells: {len(tracer.cache)}")


if __name__ == "__main__":
    main()
