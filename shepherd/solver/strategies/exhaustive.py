"""
Exhaustive Strategy - Bounded depth-first search for the shortest solution.

Every legal move is tried at every depth up to the puzzle's declared
optimal step count. The only pruning comes from the memo (a
configuration is revisited only when reached in fewer steps) and from
the length of the best solution found so far, which tightens
monotonically. Move ordering never cuts a branch.
"""

import logging
import time
from typing import Optional

from ..base import SolverStrategy
from ..context import SolutionContext
from ..factory import register_strategy
from ..solution import Solution
from ..state import Configuration

logger = logging.getLogger(__name__)


@register_strategy
class ExhaustiveStrategy(SolverStrategy):
    """
    Bounded exhaustive depth-first search.

    Algorithm:
        1. Record the starting configuration in the memo at step 0
        2. A configuration within the bound that beats the best known
           length and passes the goal test becomes the new best
        3. A configuration at the bound or at the best known length is pruned
        4. Otherwise expand all successors, recurse into each, and keep
           the result with the fewest steps (first found on ties)
    """
    name = "dfs"
    aliases = ("exhaustive", "depth-first")
    description = "Depth-first (exhaustive) - Bounded search with step memo"

    def __init__(self):
        self._cancelled = False

    def solve(self, context: SolutionContext) -> Solution:
        """
        Compute the shortest solution within the context's bound.

        Args:
            context: Solution context with puzzle, memo and bound

        Returns:
            Solution with the solved configuration (or none) and metrics
        """
        start_time = time.perf_counter()
        self._cancelled = False

        root = self.root(context)
        final = self.evaluate_next(context, root)

        if final is not None:
            logger.info(
                f"[DFS] {context.puzzle.number}: solved in {final.step}, "
                f"{context.states_explored} states explored, "
                f"{len(context.visited)} distinct"
            )
        else:
            logger.info(
                f"[DFS] {context.puzzle.number}: no solution within {context.bound}, "
                f"{context.states_explored} states explored"
            )

        return self._build_solution(context, final, start_time, self._cancelled)

    def evaluate_next(
        self,
        context: SolutionContext,
        state: Configuration
    ) -> Optional[Configuration]:
        """
        Evaluate one configuration and everything reachable from it.

        Args:
            context: Solution context owning the memo and best length
            state: Configuration to evaluate

        Returns:
            Best solved configuration below this one, or None
        """
        context.states_explored += 1

        if (state.step <= context.bound
                and state.step < context.solved_steps
                and self.is_solved(context, state)):
            context.record_solution(state.step)
            logger.debug(f"[DFS] Solution in {state.step}: {' '.join(state.actions)}")
            return state

        if state.step >= context.bound or state.step >= context.solved_steps:
            context.pruned_branches += 1
            return None

        if self._check_cancelled(context):
            self._cancelled = True
            return None

        children = self.expand(context, state)
        best: Optional[Configuration] = None
        for index, child in enumerate(children):
            result = self.evaluate_next(context, child)
            if result is not None and (best is None or result.step < best.step):
                best = result

            if state.step == 0:
                context.report_progress(
                    (index + 1) / len(children),
                    f"{index + 1}/{len(children)} first moves searched"
                )

        return best
