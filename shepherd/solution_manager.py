"""
Solution Manager Module - Runs a strategy over every starting configuration.

A puzzle with more pieces than the engine supports is expanded into
alternative starting configurations first. Each configuration gets its
own SolutionContext, so the memo and the best known length never leak
from one search into the next. The shortest solution wins; the earliest
configuration wins ties.

For the core solving logic, see the shepherd.solver package.
"""

import logging
import time
from typing import Callable, Dict, List, Mapping, Optional

from shepherd.solver import (
    Piece, Puzzle, Solution, SolutionContext, SolverStrategy,
    create_strategy, generate_alternatives, get_default_strategy_name,
    needs_alternatives,
)
from shepherd.solver.alternatives import PIECE_LIMITS

logger = logging.getLogger(__name__)


__all__ = [
    "SolutionManager",
]


class SolutionManager:
    """
    Solves puzzles with a selected strategy.

    Example:
        manager = SolutionManager(strategy_name="dfs")
        solution = manager.solve(puzzle)
        if solution.is_solved:
            print(solution.step, solution.actions)
    """

    def __init__(
        self,
        strategy_name: Optional[str] = None,
        piece_limits: Optional[Mapping[str, int]] = None,
        timeout_sec: Optional[float] = None,
        progress_callback: Optional[Callable[[float, str], None]] = None
    ):
        """
        Initialize the solution manager.

        Args:
            strategy_name: Registered strategy to use (default strategy if None)
            piece_limits: Per-kind limits for alternative generation
            timeout_sec: Optional time limit per starting configuration
            progress_callback: Optional callback for progress updates
        """
        self.strategy_name = strategy_name or get_default_strategy_name()
        self.piece_limits = dict(piece_limits) if piece_limits else dict(PIECE_LIMITS)
        self.timeout_sec = timeout_sec
        self.progress_callback = progress_callback
        # validate the name up front so a typo fails before any search
        self._strategy: SolverStrategy = create_strategy(self.strategy_name)
        self.strategy_name = self._strategy.name

    def set_strategy(self, strategy_name: str) -> None:
        """Switch to another registered strategy."""
        self._strategy = create_strategy(strategy_name)
        self.strategy_name = self._strategy.name
        logger.info(f"Strategy changed to: {self.strategy_name}")

    def starting_configurations(self, puzzle: Puzzle) -> List[Dict[str, Piece]]:
        """
        Get every starting configuration to search for a puzzle.

        Returns:
            The puzzle's own pieces, or its valid alternatives
        """
        if not needs_alternatives(puzzle.pieces, self.piece_limits):
            return [dict(puzzle.pieces)]
        alternatives = generate_alternatives(puzzle.pieces, self.piece_limits)
        logger.info(
            f"{puzzle.number}: too many pieces, trying {len(alternatives)} alternative(s)"
        )
        return alternatives

    def solve(self, puzzle: Puzzle) -> Solution:
        """
        Solve a puzzle, expanding alternatives when needed.

        Args:
            puzzle: Puzzle to solve

        Returns:
            Best Solution found (unsolved Solution if none within the bound)
        """
        start_time = time.perf_counter()
        configurations = self.starting_configurations(puzzle)

        best: Optional[Solution] = None
        states_explored = 0
        pruned_branches = 0
        was_cancelled = False

        for index, pieces in enumerate(configurations):
            context = SolutionContext(
                puzzle=puzzle,
                pieces=pieces,
                timeout_sec=self.timeout_sec,
                progress_callback=self.progress_callback,
            )
            solution = self._strategy.solve(context)
            states_explored += solution.metrics.states_explored
            pruned_branches += solution.metrics.pruned_branches
            was_cancelled = was_cancelled or solution.was_cancelled

            if len(configurations) > 1:
                outcome = f"solved in {solution.step}" if solution.is_solved else "not solved"
                logger.debug(f"{puzzle.number}: alternative {index + 1}/{len(configurations)} {outcome}")

            if solution.is_better_than(best):
                best = solution

        if best is None:
            best = Solution(pieces=configurations[0] if configurations else None)

        best.was_cancelled = was_cancelled
        best.metrics.computation_time_ms = (time.perf_counter() - start_time) * 1000
        best.metrics.states_explored = states_explored
        best.metrics.pruned_branches = pruned_branches
        best.metrics.strategy_name = self._strategy.name
        best.metrics.alternatives_tried = len(configurations)
        return best

    def solve_all(self, puzzles: List[Puzzle]) -> Dict[str, Solution]:
        """Solve several puzzles, keyed by puzzle number."""
        return {puzzle.number: self.solve(puzzle) for puzzle in puzzles}
