"""Conversion between board coordinates and square names.

Coordinates are (x, y) with (0, 0) at the top-left of the rendered board,
which is a8. Names are what the authority understands: "e2", "h8", ...
"""

Coordinate = tuple[int, int]

FILES = "abcdefgh"
RANKS = "87654321"  # y index 0 is the far rank


def to_name(coord: Coordinate) -> str:
    x, y = coord
    return f"{FILES[x]}{RANKS[y]}"


def to_coordinate(name: str) -> Coordinate:
    if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
        raise ValueError(f"Not a square name: {name!r}")
    return FILES.index(name[0]), RANKS.index(name[1])


def move_descriptor(source: Coordinate, target: Coordinate) -> str:
    """Source and target names glued together, e.g. "e2e4"."""
    return to_name(source) + to_name(target)


def all_coordinates() -> list[Coordinate]:
    return [(x, y) for y in range(8) for x in range(8)]
