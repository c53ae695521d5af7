"""Static per-square attack data.

Built once at import and never mutated afterwards; safe to share across
boards and threads.

Direction indices: 0..3 are orthogonal (N, S, E, W), 4..7 diagonal
(NE, NW, SE, SW).
"""

from __future__ import annotations

from typing import List, Tuple

N, S, E, W, NE, NW, SE, SW = range(8)

DIRECTION_OFFSETS: Tuple[int, ...] = (8, -8, 1, -1, 9, 7, -7, -9)
DIRECTION_STEPS: Tuple[Tuple[int, int], ...] = (
    (0, 1),
    (0, -1),
    (1, 0),
    (-1, 0),
    (1, 1),
    (-1, 1),
    (1, -1),
    (-1, -1),
)
ORTHOGONAL = (N, S, E, W)
DIAGONAL = (NE, NW, SE, SW)

_KNIGHT_STEPS = ((-1, 2), (1, 2), (-2, 1), (2, 1), (-2, -1), (2, -1), (-1, -2), (1, -2))
_KING_STEPS = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1))


def _jumps(sq: int, steps: Tuple[Tuple[int, int], ...]) -> Tuple[int, ...]:
    f, r = sq % 8, sq // 8
    out: List[int] = []
    for df, dr in steps:
        tf, tr = f + df, r + dr
        if 0 <= tf < 8 and 0 <= tr < 8:
            out.append(tr * 8 + tf)
    return tuple(out)


def _bound(sq: int, direction: int) -> int:
    # Last on-board square along the ray; ``sq`` itself when the ray is empty.
    df, dr = DIRECTION_STEPS[direction]
    f, r = sq % 8, sq // 8
    last = sq
    while 0 <= f + df < 8 and 0 <= r + dr < 8:
        f += df
        r += dr
        last = r * 8 + f
    return last


KNIGHT_MOVES: Tuple[Tuple[int, ...], ...] = tuple(_jumps(sq, _KNIGHT_STEPS) for sq in range(64))
KING_MOVES: Tuple[Tuple[int, ...], ...] = tuple(_jumps(sq, _KING_STEPS) for sq in range(64))

DIRECTION_BOUNDS: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(_bound(sq, d) for d in range(8)) for sq in range(64)
)

# Squares along each ray, nearest first, derived from the bounds above.
RAYS: Tuple[Tuple[Tuple[int, ...], ...], ...] = tuple(
    tuple(
        tuple(range(sq + DIRECTION_OFFSETS[d], DIRECTION_BOUNDS[sq][d] + DIRECTION_OFFSETS[d], DIRECTION_OFFSETS[d]))
        if DIRECTION_BOUNDS[sq][d] != sq
        else ()
        for d in range(8)
    )
    for sq in range(64)
)
