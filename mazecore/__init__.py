"""Perfect-maze generation and level composition toolkit."""

__all__ = [
    "AbstractLevelGenerator",
    "AbstractLevelEvaluator",
    "Dir",
    "Pos",
    "Maze",
    "LevelMode",
    "GeneratedLevel",
    "LevelGenerator",
    "LevelEvaluator",
    "LevelEvaluationResult",
    "LevelRun",
    "RetryPolicy",
    "generate_maze",
    "can_move",
    "bfs_all",
    "shortest_path",
    "generate_level",
]

from .base import AbstractLevelGenerator, AbstractLevelEvaluator
from .maze import (
    Dir,
    Pos,
    Maze,
    LevelMode,
    GeneratedLevel,
    LevelGenerator,
    LevelEvaluator,
    LevelEvaluationResult,
    LevelRun,
    RetryPolicy,
    generate_maze,
    can_move,
    bfs_all,
    shortest_path,
    generate_level,
)
