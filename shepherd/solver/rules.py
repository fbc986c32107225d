"""
Rules Module - Move generation for the shepherd puzzle.

Computes, for a configuration, every legal successor: slides and jumps
of every shepherd in every direction, with stacks and herds carried
along and command tiles triggering chain reactions.

All functions are pure with respect to the piece mappings they receive;
a successor is always a fresh dict.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .board import BUMP, COMMAND, DEATH, HOLE, Position
from .move import DIRECTIONS, Direction, Move
from .pieces import (
    Piece,
    Pieces,
    herd_under,
    pieces_above,
    pieces_under,
    top_piece_at,
)
from .puzzle import Puzzle

logger = logging.getLogger(__name__)

# Kinds (tile characters or piece kind letters) accepted by each move leg
CAN_SLIDE_TO = frozenset(".bwu+x")
CAN_JUMP_OVER = frozenset("oBW")
CAN_JUMP_TO = frozenset(".bwouBW+")

SlideResult = Tuple[Optional[Tuple[int, int]], bool, bool]


class MoveGenerator:
    """
    Successor generator bound to one puzzle.

    The generator holds only static puzzle data, so a single instance
    can be shared by every branch of a search.

    Example:
        generator = MoveGenerator(puzzle)
        for move, pieces in generator.successors(puzzle.pieces):
            print(move.describe(pieces))
    """

    def __init__(self, puzzle: Puzzle):
        self.puzzle = puzzle
        self.board = puzzle.board

    # -- queries --------------------------------------------------------------

    def kind_at(
        self,
        pos: Position,
        pieces: Optional[Pieces] = None,
        ignore_ids: Optional[Iterable[str]] = None
    ) -> str:
        """
        Get what a mover sees on a position.

        Args:
            pos: Position to inspect
            pieces: Configuration; when omitted only the tile is returned
            ignore_ids: Piece ids to look through

        Returns:
            Kind letter of the exposed piece, else the tile character
        """
        if pieces is not None:
            piece = top_piece_at(pos, pieces, ignore_ids)
            if piece is not None:
                return piece.kind_letter
        return self.board.tile_at(pos)

    def is_solved(self, pieces: Pieces) -> bool:
        """
        Goal test.

        Every end tile must hold an exposed piece of the matching kind,
        and a herd piece only counts when none of its segments is covered.
        """
        for tile in self.board.end_tiles:
            if not any(self._satisfies(tile.piece_letter, tile.pos, piece, pieces)
                       for piece in pieces.values()):
                return False
        return True

    @staticmethod
    def _satisfies(letter: str, pos: Position, piece: Piece, pieces: Pieces) -> bool:
        if piece.kind_letter != letter or piece.pos != pos or not piece.is_exposed:
            return False
        if piece.herd_ids is None:
            return True
        return all(pieces[herd_id].covered_by_id is None for herd_id in piece.herd_ids)

    # -- slide ----------------------------------------------------------------

    def can_slide(
        self,
        origins: Sequence[Position],
        direction: Direction,
        pieces: Pieces,
        ignore_ids: Sequence[str],
        dont_wrap: bool
    ) -> bool:
        """
        Check whether the moving set can advance by one cell.

        Args:
            origins: Current positions of every member of the moving set
            direction: Slide direction
            pieces: Configuration
            ignore_ids: The mover's own stack and herd
            dont_wrap: Disable vertical wrap (herds never cross the seam)

        Returns:
            True if every member can step forward
        """
        tiles = [self.board.tile_at(pos) for pos in origins]
        if all(tile == HOLE for tile in tiles) or any(tile == BUMP for tile in tiles):
            return False

        vector = direction.vector
        targets = [self.board.add(pos, vector, dont_wrap) for pos in origins]
        for origin, target in zip(origins, targets):
            # a wall between two members' destinations would slice the herd
            if len(origins) > 1 and any(self.board.is_wall(other, target) for other in targets):
                return False
            if self.board.is_wall(origin, target):
                return False
            if self.kind_at(target, pieces, ignore_ids) not in CAN_SLIDE_TO:
                return False
        return True

    def find_slide_vector(
        self,
        start: Position,
        direction: Direction,
        pieces: Pieces,
        herd: Optional[Sequence[Piece]] = None
    ) -> SlideResult:
        """
        Slide from a position as far as possible.

        Args:
            start: Position of the mover
            direction: Slide direction
            pieces: Configuration
            herd: Herd segments moving with the mover, if any

        Returns:
            (vector, on_command, aborted). vector is None when nothing
            moved or the slide aborted on a death tile or by looping
            back to its start.
        """
        pos = start
        herd_positions = [piece.pos for piece in herd] if herd is not None else None

        ignore_ids: List[str] = []
        for segment in herd or ():
            ignore_ids.append(segment.id)
            ignore_ids.extend(p.id for p in pieces_above(segment, pieces))
        top = top_piece_at(start, pieces)
        if top is not None:
            ignore_ids.append(top.id)
            ignore_ids.extend(p.id for p in pieces_under(top, pieces))

        dont_wrap = bool(herd_positions)
        moving = herd_positions if herd_positions is not None else [pos]
        on_command = any(self.board.tile_at(p) == COMMAND for p in moving)

        vector = (0, 0)
        moved = False
        while self.can_slide(moving, direction, pieces, ignore_ids, dont_wrap):
            moved = True
            vector = self.board.add(vector, direction.vector, dont_wrap=True)
            pos = self.board.add(pos, direction.vector)
            if herd_positions is not None:
                herd_positions = [self.board.add(p, direction.vector) for p in herd_positions]
            moving = herd_positions if herd_positions is not None else [pos]
            on_command = on_command or any(self.board.tile_at(p) == COMMAND for p in moving)

            if pos == start:
                return None, False, True
            if self.board.tile_at(pos) == DEATH:
                return None, False, True

        if not moved:
            return None, False, False
        return vector, on_command, False

    # -- jump -----------------------------------------------------------------

    def can_jump(
        self,
        start: Position,
        direction: Direction,
        pieces: Pieces,
        id_under: Optional[str] = None
    ) -> bool:
        """
        Check whether a two-cell hop is possible.

        Args:
            start: Position of the jumper
            direction: Jump direction
            pieces: Configuration
            id_under: Id of the piece the jumper covers, if any

        Returns:
            True if the jump is legal
        """
        tile = self.board.tile_at(start)
        if id_under is None and tile == HOLE:
            return False

        ignore_walls = bool(
            self.puzzle.secret
            and id_under is not None
            and (pieces[id_under].covers_id is not None or tile == BUMP)
        )

        over = self.board.add(start, direction.vector)
        target = self.board.add(over, direction.vector)
        if not ignore_walls and self.board.is_wall(start, over):
            return False
        if self.kind_at(over, pieces) not in CAN_JUMP_OVER:
            return False
        if not ignore_walls and self.board.is_wall(over, target):
            return False
        return self.kind_at(target) in CAN_JUMP_TO

    def find_jump_vector(
        self,
        start: Position,
        direction: Direction,
        pieces: Pieces,
        id_under: Optional[str] = None
    ) -> Optional[Tuple[int, int]]:
        """Fixed two-cell displacement if the jump is legal, else None."""
        if not self.can_jump(start, direction, pieces, id_under):
            return None
        dx, dy = direction.vector
        return (2 * dx, 2 * dy)

    # -- applying moves -------------------------------------------------------

    def carry(
        self,
        main: Piece,
        vector: Tuple[int, int],
        pieces: Pieces,
        handle_above: bool = True,
        handle_below: bool = True,
        is_jump: bool = False
    ) -> Dict[str, Piece]:
        """
        Move a piece together with everything that travels with it.

        Pieces above always follow. On a slide the pieces below follow
        too, and a herd moves as a whole with whatever sits on each of its
        segments. On a jump the mover leaves the piece it covered and
        covers the exposed piece at the landing cell, if any.

        Args:
            main: Piece being moved
            vector: Displacement
            pieces: Configuration before the move
            handle_above: Carry the pieces stacked above main
            handle_below: Carry the pieces stacked below main
            is_jump: Apply jump stacking rules

        Returns:
            Updated pieces keyed by id (only pieces that changed)
        """
        updated: Dict[str, Piece] = {}
        work: List[Tuple[Piece, bool, bool, bool]] = [(main, handle_above, handle_below, is_jump)]

        while work:
            piece, above, below, jump = work.pop()
            if piece.herd_ids is not None:
                group = [pieces[herd_id] for herd_id in piece.herd_ids]
            else:
                group = [piece]

            for member in group:
                side = member.id != piece.id
                new_pos = self.board.add(member.pos, vector)
                target = top_piece_at(new_pos, pieces) if jump else None
                covers_id = (target.id if target is not None else None) if jump else member.covers_id
                updated[member.id] = replace(member, pos=new_pos, covers_id=covers_id)

                if member.covered_by_id is not None and (above or side):
                    work.append((pieces[member.covered_by_id], True, False, False))

                if member.covers_id is not None:
                    if jump:
                        updated[member.covers_id] = replace(
                            pieces[member.covers_id], covered_by_id=None
                        )
                    elif below or side:
                        work.append((pieces[member.covers_id], False, True, False))

                if target is not None:
                    updated[target.id] = replace(target, covered_by_id=member.id)

        return updated

    def command_chain(
        self,
        moved: Dict[str, Piece],
        direction: Direction,
        pieces: Pieces
    ) -> Optional[Dict[str, Piece]]:
        """
        Force every other stack to slide after a command was triggered.

        Each stack not moved by the trigger is represented by its base
        piece (one per herd) and slides in the trigger direction. Passes
        repeat until nothing moves, so the order pieces are tried in does
        not matter.

        Args:
            moved: Pieces updated by the triggering move
            direction: Direction of the triggering slide
            pieces: Configuration after the triggering move

        Returns:
            Pieces changed by the chain, or None if a forced slide aborted
            or the chain never settles
        """
        to_move = [
            piece.id for piece in pieces.values()
            if piece.id not in moved
            and piece.covers_id is None
            and (piece.herd_ids is None or piece.id == piece.herd_ids[0])
        ]

        current: Dict[str, Piece] = dict(pieces)
        seen = {_arrangement(current)}
        piece_moved = True
        while piece_moved:
            piece_moved = False
            for piece_id in to_move:
                piece = current[piece_id]
                herd = [current[h] for h in piece.herd_ids] if piece.herd_ids else None
                vector, _, aborted = self.find_slide_vector(piece.pos, direction, current, herd)
                if aborted:
                    logger.debug(f"Command chain aborted by {piece_id} moving {direction.name}")
                    return None
                if vector is not None:
                    piece_moved = True
                    current.update(self.carry(piece, vector, current))

            if piece_moved:
                key = _arrangement(current)
                if key in seen:
                    logger.debug("Command chain cycles, discarding move")
                    return None
                seen.add(key)

        return {
            piece_id: piece for piece_id, piece in current.items()
            if piece_id not in moved and piece is not pieces[piece_id]
        }

    # -- enumeration ----------------------------------------------------------

    def attempt(
        self,
        piece: Piece,
        direction: Direction,
        is_jump: bool,
        pieces: Pieces
    ) -> Optional[Tuple[Move, Dict[str, Piece]]]:
        """
        Try one move type for one shepherd in one direction.

        Returns:
            (move, resulting pieces) or None if the move is not possible
        """
        on_command = False
        if is_jump:
            vector = self.find_jump_vector(piece.pos, direction, pieces, piece.covers_id)
        else:
            herd = herd_under(piece, pieces)
            vector, on_command, _ = self.find_slide_vector(piece.pos, direction, pieces, herd)

        if vector is None:
            return None

        updated = self.carry(piece, vector, pieces, True, True, is_jump)
        new_pieces = dict(pieces)
        new_pieces.update(updated)

        if on_command:
            commanded = self.command_chain(updated, direction, new_pieces)
            if commanded is None:
                return None
            new_pieces.update(commanded)

        move = Move(
            piece_id=piece.id,
            direction=direction,
            is_jump=is_jump,
            vector=vector,
            on_command=on_command,
        )
        return move, new_pieces

    def successors(self, pieces: Pieces) -> Iterator[Tuple[Move, Dict[str, Piece]]]:
        """
        Enumerate every legal successor of a configuration.

        Order: shepherds in mapping order, directions right, down, left,
        up, and for each direction a jump before a slide.

        Yields:
            (move, resulting pieces) pairs
        """
        shepherds = [piece for piece in pieces.values() if piece.is_shepherd]
        for piece in shepherds:
            for direction in DIRECTIONS:
                for is_jump in (True, False):
                    result = self.attempt(piece, direction, is_jump, pieces)
                    if result is not None:
                        yield result


def _arrangement(pieces: Pieces) -> Tuple:
    """Exact layout of a mapping, piece identities included."""
    return tuple(
        (piece.id, piece.pos, piece.covers_id, piece.covered_by_id)
        for piece in pieces.values()
    )
