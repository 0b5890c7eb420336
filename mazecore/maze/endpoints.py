"""Start/exit placement strategies and far-cell objective placement."""

from __future__ import annotations

import logging
import random
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from .grid import Maze, Pos
from .search import bfs_all

logger = logging.getLogger(__name__)

NEAR_BUT_FAR_ATTEMPTS = 600
NEAR_RADIUS = 2


class Endpoints(NamedTuple):
    start: Pos
    exit: Pos
    opt_len: int


def _random_cell(maze: Maze, rng: random.Random) -> Pos:
    return Pos(rng.randrange(maze.width), rng.randrange(maze.height))


def farthest_endpoints(maze: Maze, rng: Optional[random.Random] = None) -> Endpoints:
    """Diameter endpoints via the two-sweep BFS.

    A BFS from a random cell finds ``a``; a BFS from ``a`` finds ``b``. On a
    tree ``a``-``b`` is a longest path, so ``opt_len`` is the diameter.
    """

    rng = rng if rng is not None else random.Random()
    seed_cell = _random_cell(maze, rng)
    a = bfs_all(maze, seed_cell).farthest.pos
    from_a = bfs_all(maze, a)
    return Endpoints(start=a, exit=from_a.farthest.pos, opt_len=from_a.farthest.d)


def _near_candidates(maze: Maze, origin: Pos) -> List[Pos]:
    candidates: List[Pos] = []
    for dy in range(-NEAR_RADIUS, NEAR_RADIUS + 1):
        for dx in range(-NEAR_RADIUS, NEAR_RADIUS + 1):
            man = abs(dx) + abs(dy)
            if man == 0 or man > NEAR_RADIUS:
                continue
            nx, ny = origin.x + dx, origin.y + dy
            if maze.in_bounds(nx, ny):
                candidates.append(Pos(nx, ny))
    return candidates


def near_but_far_endpoints(
    maze: Maze,
    min_dist: int,
    rng: Optional[random.Random] = None,
    *,
    attempts: int = NEAR_BUT_FAR_ATTEMPTS,
) -> Endpoints:
    """Find a start/exit pair at most two steps apart on the grid but
    ``min_dist`` or more apart along the maze.

    Each attempt draws a random start and one random nearby exit. When the
    attempt budget runs out the diameter endpoints are returned instead.
    """

    rng = rng if rng is not None else random.Random()
    for _ in range(attempts):
        start = _random_cell(maze, rng)
        candidates = _near_candidates(maze, start)
        if not candidates:
            continue
        bfs = bfs_all(maze, start)
        exit_pos = candidates[rng.randrange(len(candidates))]
        d = int(bfs.dist[exit_pos.y, exit_pos.x])
        if d >= min_dist:
            return Endpoints(start=start, exit=exit_pos, opt_len=d)

    logger.debug(
        "No near-but-far pair with distance >= %d in %d attempts on %dx%d maze; using diameter",
        min_dist,
        attempts,
        maze.width,
        maze.height,
    )
    return farthest_endpoints(maze, rng)


def pick_far_cell(
    maze: Maze,
    origin: Tuple[int, int],
    min_distance: int,
    rng: Optional[random.Random] = None,
) -> Pos:
    """Uniformly random cell at graph distance ``>= min_distance`` from ``origin``.

    Falls back to the farthest cell when nothing is far enough.
    """

    rng = rng if rng is not None else random.Random()
    bfs = bfs_all(maze, origin)
    # argwhere yields (row, col) pairs in row-major order
    candidates = np.argwhere(bfs.dist >= min_distance)
    if len(candidates):
        y, x = candidates[rng.randrange(len(candidates))]
        return Pos(int(x), int(y))
    return bfs.farthest.pos


__all__ = [
    "Endpoints",
    "NEAR_BUT_FAR_ATTEMPTS",
    "farthest_endpoints",
    "near_but_far_endpoints",
    "pick_far_cell",
]
