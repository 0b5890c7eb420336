"""Replay player moves against a level and score the attempt."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..base import AbstractLevelEvaluator
from .generator import solve_level
from .grid import Dir, DirLike, Pos, can_move, coerce_dir, step
from .level import GeneratedLevel, LevelMode

logger = logging.getLogger(__name__)


class LevelRun:
    """Mutable state of one attempt at a level.

    Tracks the player position, the key pickup (``KEY``) and the ordered
    checkpoint progress (``SEQUENCE``). The exit only counts once it is
    unlocked.
    """

    def __init__(self, level: GeneratedLevel) -> None:
        self.level = level
        self.reset()

    def reset(self) -> None:
        self.player: Pos = self.level.start
        self.has_key = False
        self.seq_index = 0
        self.moves: List[Dir] = []
        self.blocked_moves = 0
        self.won = False
        self._collect()

    @property
    def exit_unlocked(self) -> bool:
        if self.level.mode is LevelMode.KEY:
            return self.has_key
        if self.level.mode is LevelMode.SEQUENCE:
            return self.seq_index >= 2
        return True

    @property
    def next_target(self) -> Pos:
        """The checkpoint, key or exit the player should head to next."""

        if self.level.mode is LevelMode.KEY and not self.has_key and self.level.key_pos is not None:
            return self.level.key_pos
        if self.level.mode is LevelMode.SEQUENCE and self.seq_index < len(self.level.checkpoints):
            return self.level.checkpoints[self.seq_index]
        return self.level.exit

    def can_move(self, direction: DirLike) -> bool:
        return can_move(self.level.maze, self.player.x, self.player.y, direction)

    def move(self, direction: DirLike) -> bool:
        """Attempt one step; returns False and leaves the player in place if blocked."""

        d = coerce_dir(direction)
        if self.won:
            return False
        if not can_move(self.level.maze, self.player.x, self.player.y, d):
            self.blocked_moves += 1
            return False
        self.player = step(self.player, d)
        self.moves.append(d)
        self._collect()
        return True

    def _collect(self) -> None:
        level = self.level
        if level.mode is LevelMode.KEY and level.key_pos is not None and self.player == level.key_pos:
            if not self.has_key:
                logger.debug("Key picked up at %s", self.player)
            self.has_key = True
        if level.mode is LevelMode.SEQUENCE and len(level.checkpoints) == 2:
            while self.seq_index < 2 and self.player == level.checkpoints[self.seq_index]:
                self.seq_index += 1
        if self.exit_unlocked and self.player == level.exit:
            self.won = True


@dataclass
class LevelEvaluationResult:
    mode: LevelMode
    completed: bool
    steps: int
    blocked_moves: int
    has_key: bool
    checkpoints_reached: int
    optimal_steps: Optional[int]
    final_position: Pos
    message: str
    path: List[Pos] = field(default_factory=list)

    @property
    def efficiency(self) -> Optional[float]:
        if not self.completed or self.optimal_steps is None:
            return None
        if self.steps == 0:
            return 1.0
        return self.optimal_steps / self.steps

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "completed": self.completed,
            "steps": self.steps,
            "blocked_moves": self.blocked_moves,
            "has_key": self.has_key,
            "checkpoints_reached": self.checkpoints_reached,
            "optimal_steps": self.optimal_steps,
            "efficiency": self.efficiency,
            "final_position": self.final_position.to_dict(),
            "message": self.message,
        }


class LevelEvaluator(AbstractLevelEvaluator[GeneratedLevel, LevelEvaluationResult]):
    """Evaluate a move sequence by replaying it through a :class:`LevelRun`."""

    def evaluate(self, level: GeneratedLevel, moves: Iterable[DirLike]) -> LevelEvaluationResult:
        directions = [coerce_dir(m) for m in moves]
        run = LevelRun(level)
        path = [run.player]
        for d in directions:
            if run.won:
                break
            if run.move(d):
                path.append(run.player)

        optimal = solve_level(level).dist
        if run.won:
            message = "Reached the exit."
        elif level.mode is LevelMode.KEY and not run.has_key:
            message = "The key was never picked up."
        elif level.mode is LevelMode.SEQUENCE and run.seq_index < 2:
            message = f"Only {run.seq_index} of 2 checkpoints visited in order."
        else:
            message = "The exit was not reached."

        return LevelEvaluationResult(
            mode=level.mode,
            completed=run.won,
            steps=len(run.moves),
            blocked_moves=run.blocked_moves,
            has_key=run.has_key,
            checkpoints_reached=run.seq_index,
            optimal_steps=optimal,
            final_position=run.player,
            message=message,
            path=path,
        )


def moves_for_path(path: Iterable[Pos]) -> List[Dir]:
    """Translate consecutive grid-adjacent positions into directions."""

    cells = list(path)
    moves: List[Dir] = []
    for a, b in zip(cells, cells[1:]):
        for d in Dir:
            if step(a, d) == b:
                moves.append(d)
                break
        else:
            raise ValueError(f"{a} and {b} are not grid neighbours")
    return moves


__all__ = [
    "LevelEvaluationResult",
    "LevelEvaluator",
    "LevelRun",
    "moves_for_path",
]
