"""Level composer: maze generation, endpoint placement and objectives."""

from __future__ import annotations

import argparse
import json
import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from ..base import AbstractLevelGenerator
from .endpoints import farthest_endpoints, near_but_far_endpoints, pick_far_cell
from .grid import Maze, Pos, check_dimensions, generate_maze
from .level import GeneratedLevel, LevelMode, ModeLike, coerce_mode
from .progression import level_plan
from .search import PathResult, shortest_path

logger = logging.getLogger(__name__)

MAX_LEVEL_ATTEMPTS = 250
MIN_OBJECTIVE_DISTANCE = 6
KEY_DISTANCE_RATIO = 0.35
CHECKPOINT_DISTANCE_RATIO = 0.25

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retries followed by an infallible fallback.

    ``attempt(index)`` returns a result or ``None`` when validation rejects
    it. After ``max_attempts`` rejections ``fallback()`` supplies the result,
    so :meth:`run` always returns a value.
    """

    max_attempts: int = MAX_LEVEL_ATTEMPTS

    def __post_init__(self) -> None:
        if self.max_attempts < 0:
            raise ValueError("max_attempts must be non-negative")

    def run(self, attempt: Callable[[int], Optional[T]], fallback: Callable[[], T]) -> T:
        for index in range(self.max_attempts):
            result = attempt(index)
            if result is not None:
                return result
            logger.debug("Attempt %d/%d rejected", index + 1, self.max_attempts)
        logger.warning("All %d attempts rejected; using fallback", self.max_attempts)
        return fallback()


def objective_distance(opt_len: int, ratio: float) -> int:
    return max(MIN_OBJECTIVE_DISTANCE, int(math.floor(opt_len * ratio)))


def _chain_reachable(maze: Maze, stops: Sequence[Pos]) -> bool:
    return all(
        shortest_path(maze, a, b).path is not None for a, b in zip(stops, stops[1:])
    )


def _compose_base(maze: Maze, rng: random.Random) -> Optional[GeneratedLevel]:
    start = Pos(0, 0)
    exit_pos = Pos(maze.width - 1, maze.height - 1)
    route = shortest_path(maze, start, exit_pos)
    if route.path is None:
        return None
    return GeneratedLevel(maze, start, exit_pos, route.dist, LevelMode.BASE)


def _compose_far_endpoints(maze: Maze, rng: random.Random) -> Optional[GeneratedLevel]:
    start, exit_pos, opt_len = farthest_endpoints(maze, rng)
    return GeneratedLevel(maze, start, exit_pos, opt_len, LevelMode.FAR_ENDPOINTS)


def _compose_near_but_far(maze: Maze, rng: random.Random) -> Optional[GeneratedLevel]:
    threshold = (maze.width * maze.height) // 2
    start, exit_pos, opt_len = near_but_far_endpoints(maze, threshold, rng)
    return GeneratedLevel(maze, start, exit_pos, opt_len, LevelMode.NEAR_BUT_FAR)


def _compose_key(maze: Maze, rng: random.Random) -> Optional[GeneratedLevel]:
    start, exit_pos, opt_len = farthest_endpoints(maze, rng)
    # The key need not lie on the optimal route.
    key_pos = pick_far_cell(maze, start, objective_distance(opt_len, KEY_DISTANCE_RATIO), rng)
    if not _chain_reachable(maze, (start, key_pos, exit_pos)):
        return None
    return GeneratedLevel(maze, start, exit_pos, opt_len, LevelMode.KEY, key_pos=key_pos)


def _compose_sequence(maze: Maze, rng: random.Random) -> Optional[GeneratedLevel]:
    start, exit_pos, opt_len = farthest_endpoints(maze, rng)
    threshold = objective_distance(opt_len, CHECKPOINT_DISTANCE_RATIO)
    a = pick_far_cell(maze, start, threshold, rng)
    b = pick_far_cell(maze, a, threshold, rng)
    if not _chain_reachable(maze, (start, a, b, exit_pos)):
        return None
    return GeneratedLevel(
        maze, start, exit_pos, opt_len, LevelMode.SEQUENCE, checkpoints=[a, b]
    )


_COMPOSERS: Dict[LevelMode, Callable[[Maze, random.Random], Optional[GeneratedLevel]]] = {
    LevelMode.BASE: _compose_base,
    LevelMode.FAR_ENDPOINTS: _compose_far_endpoints,
    LevelMode.NEAR_BUT_FAR: _compose_near_but_far,
    LevelMode.KEY: _compose_key,
    LevelMode.SEQUENCE: _compose_sequence,
}


def fallback_level(width: int, height: int, rng: Optional[random.Random] = None) -> GeneratedLevel:
    """Unconstrained diameter level; always constructible."""

    rng = rng if rng is not None else random.Random()
    maze = generate_maze(width, height, rng)
    start, exit_pos, opt_len = farthest_endpoints(maze, rng)
    return GeneratedLevel(maze, start, exit_pos, opt_len, LevelMode.FAR_ENDPOINTS)


def generate_level(
    width: int,
    height: int,
    mode: ModeLike,
    rng: Optional[random.Random] = None,
    policy: Optional[RetryPolicy] = None,
) -> GeneratedLevel:
    """Compose a solvable level for ``mode`` on a fresh ``width`` x ``height`` maze.

    Every attempt carves a new maze before placing endpoints and objectives,
    since placement constraints depend on maze topology. If every attempt is
    rejected a plain ``FAR_ENDPOINTS`` level is returned instead of an error.
    """

    level_mode = coerce_mode(mode)
    check_dimensions(width, height)
    rng = rng if rng is not None else random.Random()
    policy = policy if policy is not None else RetryPolicy()
    compose = _COMPOSERS[level_mode]

    def attempt(_index: int) -> Optional[GeneratedLevel]:
        return compose(generate_maze(width, height, rng), rng)

    return policy.run(attempt, lambda: fallback_level(width, height, rng))


def solve_level(level: GeneratedLevel) -> PathResult:
    """Shortest route through every objective in order, then to the exit."""

    stops: List[Pos] = [level.start, *level.objectives(), level.exit]
    route: List[Pos] = [level.start]
    total = 0
    for a, b in zip(stops, stops[1:]):
        leg = shortest_path(level.maze, a, b)
        if leg.path is None:
            return PathResult(None, None)
        route.extend(leg.path[1:])
        total += leg.dist
    return PathResult(route, total)


class LevelGenerator(AbstractLevelGenerator[GeneratedLevel]):
    """Generate levels from a single seeded random source."""

    def __init__(
        self,
        *,
        width: int = 9,
        height: int = 9,
        mode: ModeLike = LevelMode.BASE,
        modes: Optional[Sequence[ModeLike]] = None,
        seed: Optional[int] = None,
        policy: Optional[RetryPolicy] = None,
    ) -> None:
        super().__init__(seed=seed)
        check_dimensions(width, height)
        self.width = width
        self.height = height
        self.mode = coerce_mode(mode)
        self.modes: Tuple[LevelMode, ...] = tuple(
            coerce_mode(m) for m in (modes if modes is not None else LevelMode)
        )
        if not self.modes:
            raise ValueError("modes must not be empty")
        self.policy = policy if policy is not None else RetryPolicy()

    def create_level(
        self,
        *,
        width: Optional[int] = None,
        height: Optional[int] = None,
        mode: Optional[ModeLike] = None,
    ) -> GeneratedLevel:
        return generate_level(
            width if width is not None else self.width,
            height if height is not None else self.height,
            mode if mode is not None else self.mode,
            rng=self.rng,
            policy=self.policy,
        )

    def create_random_level(self) -> GeneratedLevel:
        return self.create_level(mode=self.rng.choice(self.modes))

    def create_level_for(self, level_number: int) -> GeneratedLevel:
        plan = level_plan(level_number)
        return self.create_level(width=plan.width, height=plan.height, mode=plan.mode)


__all__ = [
    "CHECKPOINT_DISTANCE_RATIO",
    "KEY_DISTANCE_RATIO",
    "LevelGenerator",
    "MAX_LEVEL_ATTEMPTS",
    "MIN_OBJECTIVE_DISTANCE",
    "RetryPolicy",
    "fallback_level",
    "generate_level",
    "objective_distance",
    "solve_level",
]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a maze level and print it as JSON")
    parser.add_argument("width", type=int, nargs="?", default=None)
    parser.add_argument("height", type=int, nargs="?", default=None)
    parser.add_argument(
        "--mode",
        type=str,
        default=LevelMode.BASE.value,
        choices=[m.value for m in LevelMode],
    )
    parser.add_argument(
        "--level",
        type=int,
        default=None,
        help="Use the progression schedule for this level number instead of width/height/mode",
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--no-maze", action="store_true", help="Omit the cell grid from the output")
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args(argv)
    if args.level is None and (args.width is None or args.height is None):
        parser.error("width and height are required unless --level is given")
    return args


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    if args.level is not None:
        generator = LevelGenerator(seed=args.seed)
        level = generator.create_level_for(args.level)
    else:
        generator = LevelGenerator(width=args.width, height=args.height, mode=args.mode, seed=args.seed)
        level = generator.create_level()
    print(json.dumps(level.to_dict(include_maze=not args.no_maze), indent=2))


if __name__ == "__main__":
    main()
