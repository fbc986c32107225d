"""
Configuration Module - Immutable search state.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .pieces import Pieces, canonical_hash


@dataclass(frozen=True)
class Configuration:
    """
    One node of the search: a piece mapping plus the path that led to it.

    Attributes:
        step: Number of moves made from the starting configuration
        pieces: Piece id -> Piece mapping (never mutated)
        actions: Move descriptors accumulated along the path
        parent: Configuration this one was reached from
    """
    step: int
    pieces: Pieces
    actions: Tuple[str, ...] = ()
    parent: Optional["Configuration"] = field(default=None, repr=False, compare=False)

    @classmethod
    def initial(cls, pieces: Pieces) -> "Configuration":
        """Create the root configuration for a starting piece mapping."""
        return cls(step=0, pieces=dict(pieces))

    def advance(self, pieces: Pieces, action: str) -> "Configuration":
        """Create the child configuration reached by one move."""
        return Configuration(
            step=self.step + 1,
            pieces=pieces,
            actions=self.actions + (action,),
            parent=self,
        )

    @property
    def hash(self) -> str:
        """Canonical identity string used by the search memo."""
        return canonical_hash(self.pieces)

    @property
    def last_action(self) -> Optional[str]:
        return self.actions[-1] if self.actions else None

    def path(self) -> List["Configuration"]:
        """
        Reconstruct the configurations from the root to this one.

        Returns:
            List starting with the initial configuration
        """
        path = []
        node: Optional[Configuration] = self
        while node is not None:
            path.append(node)
            node = node.parent
        path.reverse()
        return path
