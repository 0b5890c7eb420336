"""Breadth-first distance fields and shortest paths over a maze."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from .grid import DIRECTIONS, Maze, Pos, can_move


class FarthestCell(NamedTuple):
    pos: Pos
    d: int


class PathResult(NamedTuple):
    path: Optional[List[Pos]]
    dist: Optional[int]


@dataclass
class BfsResult:
    dist: np.ndarray
    prev: List[List[Optional[Pos]]]
    farthest: FarthestCell

    def reachable(self, pos: Tuple[int, int]) -> bool:
        return bool(self.dist[pos[1], pos[0]] >= 0)

    def path_to(self, goal: Tuple[int, int]) -> PathResult:
        """Walk the predecessor tree back from ``goal`` to the BFS origin."""

        x, y = goal
        d = int(self.dist[y, x])
        if d < 0:
            return PathResult(None, None)
        path: List[Pos] = []
        node: Optional[Pos] = Pos(x, y)
        while node is not None:
            path.append(node)
            node = self.prev[node.y][node.x]
        path.reverse()
        return PathResult(path, d)


def _require_in_bounds(maze: Maze, pos: Tuple[int, int], label: str) -> Pos:
    x, y = pos
    if not maze.in_bounds(x, y):
        raise ValueError(f"{label} {pos!r} is outside the {maze.width}x{maze.height} maze")
    return Pos(x, y)


def bfs_all(maze: Maze, start: Tuple[int, int]) -> BfsResult:
    """Distance field, predecessor tree and farthest cell from ``start``.

    Edges are exactly the steps accepted by :func:`can_move`. ``dist`` has
    shape ``(height, width)`` with ``-1`` for unreached cells. The farthest
    cell is the first one dequeued at the maximum distance.
    """

    origin = _require_in_bounds(maze, start, "start")
    dist = np.full((maze.height, maze.width), -1, dtype=np.int64)
    prev: List[List[Optional[Pos]]] = [[None] * maze.width for _ in range(maze.height)]
    queue: deque[Pos] = deque([origin])
    dist[origin.y, origin.x] = 0
    farthest = FarthestCell(origin, 0)

    while queue:
        cur = queue.popleft()
        d0 = int(dist[cur.y, cur.x])
        if d0 > farthest.d:
            farthest = FarthestCell(cur, d0)
        for d in DIRECTIONS:
            if not can_move(maze, cur.x, cur.y, d):
                continue
            nx, ny = cur.x + d.dx, cur.y + d.dy
            if dist[ny, nx] != -1:
                continue
            dist[ny, nx] = d0 + 1
            prev[ny][nx] = cur
            queue.append(Pos(nx, ny))

    return BfsResult(dist=dist, prev=prev, farthest=farthest)


def shortest_path(maze: Maze, start: Tuple[int, int], goal: Tuple[int, int]) -> PathResult:
    """Return the unique tree path from ``start`` to ``goal``, or ``(None, None)``."""

    target = _require_in_bounds(maze, goal, "goal")
    return bfs_all(maze, start).path_to(target)


def distance(maze: Maze, a: Tuple[int, int], b: Tuple[int, int]) -> Optional[int]:
    return shortest_path(maze, a, b).dist


__all__ = [
    "BfsResult",
    "FarthestCell",
    "PathResult",
    "bfs_all",
    "distance",
    "shortest_path",
]
