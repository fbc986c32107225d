"""
Solution Context Module - Per-solve search state shared with strategies.
"""

import math
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from .pieces import Pieces
from .puzzle import Puzzle
from .rules import MoveGenerator


@dataclass
class SolutionContext:
    """
    Context passed to a strategy for exactly one starting configuration.

    The memo and the best known length only ever tighten while a solve
    runs. A fresh context must be created for every puzzle and every
    alternative configuration so that pruning never leaks between them.

    Attributes:
        puzzle: Puzzle being solved (board, bound, flags)
        pieces: Starting configuration; defaults to the puzzle's pieces
        visited: Canonical hash -> lowest step it was reached at
        solved_steps: Length of the best solution found so far
        states_explored: Configurations evaluated
        pruned_branches: Configurations cut by the bound or the memo
        cancel_flag: Threading event for cancellation
        timeout_sec: Maximum computation time in seconds (None = unlimited)
        start_time: When computation started
        progress_callback: Optional callback for progress updates
    """
    puzzle: Puzzle
    pieces: Optional[Pieces] = None
    visited: Dict[str, int] = field(default_factory=dict)
    solved_steps: float = math.inf
    states_explored: int = 0
    pruned_branches: int = 0
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    timeout_sec: Optional[float] = None
    start_time: float = field(default_factory=time.time)
    progress_callback: Optional[Callable[[float, str], None]] = None
    generator: MoveGenerator = field(init=False, repr=False)

    def __post_init__(self):
        if self.pieces is None:
            self.pieces = self.puzzle.pieces
        self.generator = MoveGenerator(self.puzzle)

    @property
    def bound(self) -> int:
        """Declared optimal step count of the puzzle."""
        return self.puzzle.optimal

    def allow(self, key: str, step: int) -> bool:
        """
        Record a configuration if it is new or reached in fewer steps.

        Args:
            key: Canonical hash of the configuration
            step: Step it was reached at

        Returns:
            True if the configuration should be explored
        """
        known = self.visited.get(key)
        if known is not None and known <= step:
            return False
        self.visited[key] = step
        return True

    def record_solution(self, step: int) -> None:
        """Tighten the best known solution length."""
        if step < self.solved_steps:
            self.solved_steps = step

    def is_cancelled(self) -> bool:
        """
        Check if cancellation requested or timeout exceeded.

        Returns:
            True if strategy should stop execution
        """
        if self.cancel_flag.is_set():
            return True
        if self.timeout_sec is not None and self.elapsed_time() > self.timeout_sec:
            return True
        return False

    def report_progress(self, percent: float, message: str = "") -> None:
        """
        Report progress to the caller.

        Args:
            percent: Progress from 0.0 to 1.0
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(percent, message)

    def elapsed_time(self) -> float:
        """Seconds elapsed since computation started."""
        return time.time() - self.start_time
