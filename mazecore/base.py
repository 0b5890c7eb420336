"""Abstract interfaces for level generation and evaluation."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, List, Optional, TypeVar

RecordT = TypeVar("RecordT")
ResultT = TypeVar("ResultT")


class AbstractLevelGenerator(ABC, Generic[RecordT]):
    """Base class for builders that emit level records."""

    def __init__(self, *, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    @property
    def rng(self) -> random.Random:
        return self._rng

    @abstractmethod
    def create_level(self, *args, **kwargs) -> RecordT:
        """Create a level from the provided parameters."""

    @abstractmethod
    def create_random_level(self) -> RecordT:
        """Create a single randomized level instance."""

    def generate_batch(self, count: int) -> List[RecordT]:
        """Generate a batch of independent levels."""

        if count < 0:
            raise ValueError("count must be non-negative")
        return [self.create_random_level() for _ in range(count)]

    def records_to_dicts(self, records: Iterable[RecordT]) -> List[Dict[str, Any]]:
        return [self.record_to_dict(record) for record in records]

    def record_to_dict(self, record: RecordT) -> Dict[str, Any]:
        """Dictionary serialization hook for level records."""

        if hasattr(record, "to_dict"):
            return getattr(record, "to_dict")()
        raise TypeError(
            "Level record must implement to_dict() or override record_to_dict() in the generator."
        )


class AbstractLevelEvaluator(ABC, Generic[RecordT, ResultT]):
    """Base class scaffolding for level evaluators."""

    @abstractmethod
    def evaluate(self, level: RecordT, *args, **kwargs) -> ResultT:
        """Evaluate a candidate solution for the given level."""

    def evaluate_many(self, attempts: Iterable[tuple]) -> List[ResultT]:
        """Evaluate ``(level, *args)`` tuples in order."""

        return [self.evaluate(*attempt) for attempt in attempts]


__all__ = [
    "AbstractLevelGenerator",
    "AbstractLevelEvaluator",
]
