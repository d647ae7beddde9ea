from __future__ import annotations

from .game import Game
from .movegen import generate_all


def perft(game: Game, depth: int) -> int:
    """Compute the pseudo-legal perft node count of ``game`` at ``depth``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all pseudo-legal child positions'
      perft(depth-1).

    Moves are made with ``Game.apply_move`` and taken back with ``Game.undo``,
    so ``game`` is unchanged on return. King safety is not considered, so
    counts match standard perft only while no side can be left in check.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    nodes = 0
    for m in generate_all(game.board, game.turn):
        game.apply_move(m.from_sq, m.to_sq)
        nodes += perft(game, depth - 1)
        game.undo()
    return nodes
