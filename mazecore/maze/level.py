"""Level records produced by the level composer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .grid import Maze, Pos


class LevelMode(str, Enum):
    BASE = "BASE"
    FAR_ENDPOINTS = "FAR_ENDPOINTS"
    NEAR_BUT_FAR = "NEAR_BUT_FAR"
    KEY = "KEY"
    SEQUENCE = "SEQUENCE"


ModeLike = Union[LevelMode, str]


def coerce_mode(mode: ModeLike) -> LevelMode:
    try:
        return LevelMode(mode)
    except ValueError as exc:
        choices = ", ".join(m.value for m in LevelMode)
        raise ValueError(f"Unknown level mode {mode!r}; expected one of {choices}") from exc


@dataclass
class GeneratedLevel:
    maze: Maze
    start: Pos
    exit: Pos
    opt_len: int
    mode: LevelMode
    key_pos: Optional[Pos] = None
    checkpoints: List[Pos] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.mode = coerce_mode(self.mode)

    @property
    def width(self) -> int:
        return self.maze.width

    @property
    def height(self) -> int:
        return self.maze.height

    @property
    def exit_locked(self) -> bool:
        """Whether the exit starts locked behind a key or checkpoint sequence."""

        return self.key_pos is not None or bool(self.checkpoints)

    def objectives(self) -> List[Pos]:
        """Cells that must be visited, in order, before the exit opens."""

        if self.key_pos is not None:
            return [self.key_pos]
        return list(self.checkpoints)

    def to_dict(self, *, include_maze: bool = True) -> dict:
        payload = {
            "width": self.width,
            "height": self.height,
            "mode": self.mode.value,
            "start": self.start.to_dict(),
            "exit": self.exit.to_dict(),
            "opt_len": self.opt_len,
            "key_pos": self.key_pos.to_dict() if self.key_pos is not None else None,
            "checkpoints": [pos.to_dict() for pos in self.checkpoints],
        }
        if include_maze:
            payload["maze"] = self.maze.to_dict()
        return payload


__all__ = ["GeneratedLevel", "LevelMode", "ModeLike", "coerce_mode"]
