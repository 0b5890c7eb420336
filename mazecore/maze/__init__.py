"""Maze generation, pathfinding and level composition package."""

__all__ = [
    "BfsResult",
    "Cell",
    "Dir",
    "Endpoints",
    "GeneratedLevel",
    "LevelEvaluationResult",
    "LevelEvaluator",
    "LevelGenerator",
    "LevelMode",
    "LevelPlan",
    "LevelRun",
    "Maze",
    "PathResult",
    "Pos",
    "RetryPolicy",
    "bfs_all",
    "can_move",
    "farthest_endpoints",
    "generate_level",
    "generate_maze",
    "level_plan",
    "level_size",
    "mode_for_level",
    "moves_for_path",
    "near_but_far_endpoints",
    "pick_far_cell",
    "shortest_path",
    "solve_level",
    "step",
]

from .grid import Cell, Dir, Maze, Pos, can_move, generate_maze, step
from .search import BfsResult, PathResult, bfs_all, shortest_path
from .endpoints import Endpoints, farthest_endpoints, near_but_far_endpoints, pick_far_cell
from .level import GeneratedLevel, LevelMode
from .progression import LevelPlan, level_plan, level_size, mode_for_level
from .generator import LevelGenerator, RetryPolicy, generate_level, solve_level
from .evaluator import LevelEvaluationResult, LevelEvaluator, LevelRun, moves_for_path
