"""Example: connect junction boxes shortest-first and inspect the circuits."""

from aoc2025 import Circuits, ConnectivityBuilder, PuzzleInput

TEXT = """
162,817,812
57,618,57
906,360,560
592,479,940
352,342,300
466,668,158
542,29,236
431,825,988
739,650,466
52,470,668
216,146,977
819,987,18
117,168,530
805,96,715
346,949,466
970,615,88
941,993,340
862,61,35
984,92,344
425,690,689
"""


def main() -> None:
    builder = ConnectivityBuilder(PuzzleInput.from_text(TEXT.strip(), name="junction boxes"))
    print(f"Budget: {builder.connection_budget} connections")
    print(f"Product of the three largest circuits: {builder.solve_part_one()}")

    circuits = Circuits(builder.boxes)
    queue = builder.distance_queue()
    for _ in range(builder.connection_budget):
        distance, (a, b) = queue.pop()
        joined = circuits.connect(a, b)
        print(f"  {a} <-> {b}  {distance:8.2f}  {'joined' if joined else 'already connected'}")
    print(f"Circuit sizes: {circuits.sizes()}")

    print(f"Product of the x coordinates of the final pair: {builder.solve_part_two()}")


if __name__ == "__main__":
    main()
