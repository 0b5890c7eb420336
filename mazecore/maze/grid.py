"""Grid model and randomized depth-first maze carving."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple, Union


class Dir(str, Enum):
    N = "N"
    E = "E"
    S = "S"
    W = "W"

    @property
    def dx(self) -> int:
        return _OFFSETS[self][0]

    @property
    def dy(self) -> int:
        return _OFFSETS[self][1]

    @property
    def opposite(self) -> "Dir":
        return _OPPOSITE[self]


_OFFSETS: Dict[Dir, Tuple[int, int]] = {
    Dir.N: (0, -1),
    Dir.E: (1, 0),
    Dir.S: (0, 1),
    Dir.W: (-1, 0),
}
_OPPOSITE: Dict[Dir, Dir] = {Dir.N: Dir.S, Dir.E: Dir.W, Dir.S: Dir.N, Dir.W: Dir.E}

# Neighbour order used by every traversal.
DIRECTIONS: Tuple[Dir, ...] = (Dir.N, Dir.E, Dir.S, Dir.W)

DirLike = Union[Dir, str]


def coerce_dir(direction: DirLike) -> Dir:
    try:
        return Dir(direction)
    except ValueError as exc:
        raise ValueError(f"Unknown direction {direction!r}; expected one of N, E, S, W") from exc


class Pos(NamedTuple):
    x: int
    y: int

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


def step(pos: Tuple[int, int], direction: DirLike) -> Pos:
    """Return the coordinate one cell away in ``direction`` (no wall check)."""

    d = coerce_dir(direction)
    return Pos(pos[0] + d.dx, pos[1] + d.dy)


def manhattan(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class Cell:
    x: int
    y: int
    walls: Dict[Dir, bool] = field(default_factory=lambda: {d: True for d in DIRECTIONS})
    visited: bool = False

    def is_open(self, direction: DirLike) -> bool:
        return not self.walls[coerce_dir(direction)]

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "walls": {d.value: self.walls[d] for d in DIRECTIONS},
        }


@dataclass(frozen=True)
class Maze:
    """A width x height grid of cells indexed ``cells[y][x]``.

    The grid shape is fixed once built. Cells and their wall flags stay
    mutable objects; callers must treat a returned maze as read-only.
    """

    width: int
    height: int
    cells: Tuple[Tuple[Cell, ...], ...]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        if not self.in_bounds(x, y):
            raise ValueError(f"({x}, {y}) is outside the {self.width}x{self.height} maze")
        return self.cells[y][x]

    def positions(self) -> List[Pos]:
        return [Pos(x, y) for y in range(self.height) for x in range(self.width)]

    def passage_count(self) -> int:
        """Number of open edges, counting each shared edge once."""

        count = 0
        for row in self.cells:
            for cell in row:
                if cell.x + 1 < self.width and not cell.walls[Dir.E]:
                    count += 1
                if cell.y + 1 < self.height and not cell.walls[Dir.S]:
                    count += 1
        return count

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "cells": [[cell.to_dict() for cell in row] for row in self.cells],
        }


def check_dimensions(width: int, height: int) -> None:
    for value in (width, height):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Maze dimensions must be integers, got {width!r}x{height!r}")
    if width < 1 or height < 1:
        raise ValueError(f"Maze dimensions must be positive, got {width}x{height}")


def generate_maze(width: int, height: int, rng: Optional[random.Random] = None) -> Maze:
    """Carve a perfect maze with an iterative randomized depth-first search.

    Carving starts in the top-left corner. At each step the in-bounds,
    unvisited neighbours of the current cell are considered in shuffled order
    and the first one is opened; when none remain the walk backtracks along
    the stack. The result is a spanning tree with ``width * height - 1``
    open passages.
    """

    check_dimensions(width, height)
    rng = rng if rng is not None else random.Random()

    cells = [[Cell(x, y) for x in range(width)] for y in range(height)]
    stack: List[Cell] = []
    current = cells[0][0]
    current.visited = True

    while True:
        directions = list(DIRECTIONS)
        rng.shuffle(directions)
        neighbors: List[Tuple[Dir, Cell]] = []
        for d in directions:
            nx, ny = current.x + d.dx, current.y + d.dy
            if 0 <= nx < width and 0 <= ny < height and not cells[ny][nx].visited:
                neighbors.append((d, cells[ny][nx]))

        if neighbors:
            d, nxt = neighbors[0]
            current.walls[d] = False
            nxt.walls[d.opposite] = False
            stack.append(current)
            current = nxt
            current.visited = True
        elif stack:
            current = stack.pop()
        else:
            break

    for row in cells:
        for cell in row:
            cell.visited = False

    return Maze(width=width, height=height, cells=tuple(tuple(row) for row in cells))


def can_move(maze: Maze, x: int, y: int, direction: DirLike) -> bool:
    """Return True when a step from ``(x, y)`` in ``direction`` crosses an open passage."""

    d = coerce_dir(direction)
    if not maze.in_bounds(x, y):
        return False
    nx, ny = x + d.dx, y + d.dy
    if not maze.in_bounds(nx, ny):
        return False
    source = maze.cells[y][x]
    target = maze.cells[ny][nx]
    return source.walls[d] is False and target.walls[d.opposite] is False


__all__ = [
    "Cell",
    "DIRECTIONS",
    "Dir",
    "DirLike",
    "Maze",
    "Pos",
    "can_move",
    "check_dimensions",
    "coerce_dir",
    "generate_maze",
    "manhattan",
    "step",
]
