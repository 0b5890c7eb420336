"""Level-number schedule: grid size and objective mode per level."""

from __future__ import annotations

from typing import NamedTuple, Tuple

from .level import LevelMode

BASE_LEVEL_SIZE = 9
LEVEL_SIZE_STEP = 2
MAX_LEVEL_SIZE = 20
BASE_LEVELS = 2

MODE_CYCLE: Tuple[LevelMode, ...] = (
    LevelMode.FAR_ENDPOINTS,
    LevelMode.NEAR_BUT_FAR,
    LevelMode.KEY,
    LevelMode.SEQUENCE,
)


class LevelPlan(NamedTuple):
    level: int
    width: int
    height: int
    mode: LevelMode


def _check_level(level: int) -> None:
    if level < 1:
        raise ValueError(f"Level numbers start at 1, got {level}")


def level_size(level: int) -> Tuple[int, int]:
    _check_level(level)
    size = min(MAX_LEVEL_SIZE, BASE_LEVEL_SIZE + (level - 1) * LEVEL_SIZE_STEP)
    return size, size


def mode_for_level(level: int) -> LevelMode:
    """The first levels are plain mazes, then the objective modes rotate."""

    _check_level(level)
    if level <= BASE_LEVELS:
        return LevelMode.BASE
    return MODE_CYCLE[(level - BASE_LEVELS - 1) % len(MODE_CYCLE)]


def level_plan(level: int) -> LevelPlan:
    width, height = level_size(level)
    return LevelPlan(level=level, width=width, height=height, mode=mode_for_level(level))


__all__ = [
    "LevelPlan",
    "MAX_LEVEL_SIZE",
    "MODE_CYCLE",
    "level_plan",
    "level_size",
    "mode_for_level",
]
