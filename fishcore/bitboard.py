"""Bitboard tables and operations for an 8x8 chess board.

Squares are integers 0..63 (a1 = 0, h8 = 63), files and ranks are 0..7 and
bitboards are non-negative integers holding 64 bits.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import IntEnum

from .util import PRNG

_MASK64 = (1 << 64) - 1

SQUARE_NB = 64
FILE_NB = 8
RANK_NB = 8

NORTH = 8
EAST = 1
SOUTH = -8
WEST = -1
NORTH_EAST = NORTH + EAST
SOUTH_EAST = SOUTH + EAST
SOUTH_WEST = SOUTH + WEST
NORTH_WEST = NORTH + WEST

FILE_A_BB = 0x0101010101010101
FILE_H_BB = FILE_A_BB << 7
RANK_1_BB = 0xFF
RANK_8_BB = RANK_1_BB << (8 * 7)


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    def __invert__(self) -> "Color":
        return Color(self ^ 1)


class PieceType(IntEnum):
    NO_PIECE_TYPE = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


@dataclass(frozen=True)
class Magic:
    """Magic bitboard data for one square and one sliding piece type."""

    mask: int
    magic: int
    shift: int
    attacks: tuple[int, ...]

    def index(self, occupied: int) -> int:
        """Return the attack table index for the given occupancy."""
        return (((occupied & self.mask) * self.magic) & _MASK64) >> self.shift

    def attacks_bb(self, occupied: int) -> int:
        """Return the attacked squares for the given occupancy."""
        return self.attacks[self.index(occupied)]


def _check_square(s: int) -> None:
    if not (isinstance(s, int) and 0 <= s < SQUARE_NB):
        raise ValueError(f"invalid square: {s!r}")


def make_square(file: int, rank: int) -> int:
    """Return the square at the given file and rank."""
    if not (0 <= file < FILE_NB and 0 <= rank < RANK_NB):
        raise ValueError(f"invalid file/rank: {file}, {rank}")
    return (rank << 3) + file


def file_of(s: int) -> int:
    return s & 7


def rank_of(s: int) -> int:
    return s >> 3


def square_bb(s: int) -> int:
    """Return the bitboard with only square ``s`` set."""
    _check_square(s)
    return 1 << s


def more_than_one(b: int) -> bool:
    return bool(b & (b - 1))


def rank_bb(r: int) -> int:
    """Return the bitboard of all squares on rank ``r``."""
    return RANK_1_BB << (8 * r)


def file_bb(f: int) -> int:
    """Return the bitboard of all squares on file ``f``."""
    return FILE_A_BB << f


def shift(b: int, direction: int) -> int:
    """Move every bit of ``b`` one or two steps in the given direction."""
    if direction == NORTH:
        return (b << 8) & _MASK64
    if direction == SOUTH:
        return b >> 8
    if direction == NORTH + NORTH:
        return (b << 16) & _MASK64
    if direction == SOUTH + SOUTH:
        return b >> 16
    if direction == EAST:
        return ((b & ~FILE_H_BB) << 1) & _MASK64
    if direction == WEST:
        return (b & ~FILE_A_BB) >> 1
    if direction == NORTH_EAST:
        return ((b & ~FILE_H_BB) << 9) & _MASK64
    if direction == NORTH_WEST:
        return ((b & ~FILE_A_BB) << 7) & _MASK64
    if direction == SOUTH_EAST:
        return (b & ~FILE_H_BB) >> 7
    if direction == SOUTH_WEST:
        return (b & ~FILE_A_BB) >> 9
    return 0


def pawn_attacks_bb(color: Color, b: int) -> int:
    """Return the squares attacked by pawns of ``color`` standing on ``b``."""
    if color == Color.WHITE:
        return shift(b, NORTH_WEST) | shift(b, NORTH_EAST)
    return shift(b, SOUTH_WEST) | shift(b, SOUTH_EAST)


def file_distance(x: int, y: int) -> int:
    return abs(file_of(x) - file_of(y))


def rank_distance(x: int, y: int) -> int:
    return abs(rank_of(x) - rank_of(y))


_SQUARE_DISTANCE = [
    [max(file_distance(s1, s2), rank_distance(s1, s2)) for s2 in range(SQUARE_NB)]
    for s1 in range(SQUARE_NB)
]


def distance(x: int, y: int) -> int:
    """Return the number of king steps from ``x`` to ``y``."""
    _check_square(x)
    _check_square(y)
    return _SQUARE_DISTANCE[x][y]


def edge_distance(f: int) -> int:
    return min(f, 7 - f)


def _safe_destination(s: int, step: int) -> int:
    to = s + step
    if 0 <= to < SQUARE_NB and _SQUARE_DISTANCE[s][to] <= 2:
        return 1 << to
    return 0


_ROOK_DIRECTIONS = (NORTH, SOUTH, EAST, WEST)
_BISHOP_DIRECTIONS = (NORTH_EAST, SOUTH_EAST, SOUTH_WEST, NORTH_WEST)


def sliding_attack(pt: PieceType, sq: int, occupied: int) -> int:
    """Compute rook or bishop attacks from ``sq`` by walking the rays."""
    _check_square(sq)
    directions = _ROOK_DIRECTIONS if pt == PieceType.ROOK else _BISHOP_DIRECTIONS
    attacks = 0
    for d in directions:
        s = sq
        while _safe_destination(s, d):
            s += d
            attacks |= 1 << s
            if (occupied >> s) & 1:
                break
    return attacks


def popcount(b: int) -> int:
    return b.bit_count()


def lsb(b: int) -> int:
    """Return the least significant set square of a non-zero bitboard."""
    if b <= 0:
        raise ValueError("lsb of an empty bitboard")
    return (b & -b).bit_length() - 1


def msb(b: int) -> int:
    """Return the most significant set square of a non-zero bitboard."""
    if b <= 0:
        raise ValueError("msb of an empty bitboard")
    return b.bit_length() - 1


def least_significant_square_bb(b: int) -> int:
    if b <= 0:
        raise ValueError("least significant square of an empty bitboard")
    return b & -b


def pop_lsb(b: int) -> tuple[int, int]:
    """Return the least significant square and the bitboard without it."""
    s = lsb(b)
    return s, b & (b - 1)


# Seeds that find the magic numbers quickly, indexed by rank.
_MAGIC_SEEDS = (728, 10316, 55013, 32803, 12281, 15100, 16645, 255)


@functools.lru_cache(maxsize=None)
def _magic(rook: bool, s: int) -> Magic:
    pt = PieceType.ROOK if rook else PieceType.BISHOP
    edges = ((RANK_1_BB | RANK_8_BB) & ~rank_bb(rank_of(s))) | (
        (FILE_A_BB | FILE_H_BB) & ~file_bb(file_of(s))
    )
    mask = sliding_attack(pt, s, 0) & ~edges
    shift_bits = 64 - popcount(mask)

    occupancy: list[int] = []
    reference: list[int] = []
    b = 0
    while True:
        occupancy.append(b)
        reference.append(sliding_attack(pt, s, b))
        b = (b - mask) & mask
        if not b:
            break

    size = len(occupancy)
    attacks = [0] * size
    epoch = [0] * size
    rng = PRNG(_MAGIC_SEEDS[rank_of(s)])
    attempt = 0
    while True:
        magic = 0
        while popcount(((magic * mask) & _MASK64) >> 56) < 6:
            magic = rng.sparse_rand()
        attempt += 1
        for occ, ref in zip(occupancy, reference):
            idx = (((occ & mask) * magic) & _MASK64) >> shift_bits
            if epoch[idx] < attempt:
                epoch[idx] = attempt
                attacks[idx] = ref
            elif attacks[idx] != ref:
                break
        else:
            return Magic(mask=mask, magic=magic, shift=shift_bits, attacks=tuple(attacks))


def _build_pseudo_attacks() -> list[list[int]]:
    table = [[0] * SQUARE_NB for _ in PieceType]
    for s in range(SQUARE_NB):
        for step in (-9, -8, -7, -1, 1, 7, 8, 9):
            table[PieceType.KING][s] |= _safe_destination(s, step)
        for step in (-17, -15, -10, -6, 6, 10, 15, 17):
            table[PieceType.KNIGHT][s] |= _safe_destination(s, step)
        bishop = sliding_attack(PieceType.BISHOP, s, 0)
        rook = sliding_attack(PieceType.ROOK, s, 0)
        table[PieceType.BISHOP][s] = bishop
        table[PieceType.ROOK][s] = rook
        table[PieceType.QUEEN][s] = bishop | rook
    return table


_PSEUDO_ATTACKS = _build_pseudo_attacks()

_PAWN_ATTACKS = [
    [pawn_attacks_bb(color, 1 << s) for s in range(SQUARE_NB)] for color in Color
]


def _build_lines() -> tuple[list[list[int]], list[list[int]]]:
    line = [[0] * SQUARE_NB for _ in range(SQUARE_NB)]
    between = [[0] * SQUARE_NB for _ in range(SQUARE_NB)]
    for s1 in range(SQUARE_NB):
        for pt in (PieceType.BISHOP, PieceType.ROOK):
            for s2 in range(SQUARE_NB):
                if _PSEUDO_ATTACKS[pt][s1] & (1 << s2):
                    line[s1][s2] = (
                        _PSEUDO_ATTACKS[pt][s1] & _PSEUDO_ATTACKS[pt][s2]
                    ) | (1 << s1) | (1 << s2)
                    between[s1][s2] = sliding_attack(pt, s1, 1 << s2) & sliding_attack(
                        pt, s2, 1 << s1
                    )
                between[s1][s2] |= 1 << s2
    return line, between


_LINE_BB, _BETWEEN_BB = _build_lines()


def pawn_attacks(color: Color, s: int) -> int:
    """Return the squares a pawn of ``color`` on ``s`` attacks."""
    _check_square(s)
    return _PAWN_ATTACKS[color][s]


def line_bb(s1: int, s2: int) -> int:
    """Return the full edge-to-edge line through both squares, or 0."""
    _check_square(s1)
    _check_square(s2)
    return _LINE_BB[s1][s2]


def between_bb(s1: int, s2: int) -> int:
    """Return the squares from ``s1`` (excluded) to ``s2`` (included).

    If the squares are not on a common line only ``s2`` is returned.
    """
    _check_square(s1)
    _check_square(s2)
    return _BETWEEN_BB[s1][s2]


def aligned(s1: int, s2: int, s3: int) -> bool:
    """Return True if the three squares lie on one straight or diagonal line."""
    return bool(line_bb(s1, s2) & square_bb(s3))


def pseudo_attacks(pt: PieceType, s: int) -> int:
    """Return the attacks of piece type ``pt`` from ``s`` on an empty board."""
    if pt == PieceType.PAWN or pt == PieceType.NO_PIECE_TYPE:
        raise ValueError(f"no pseudo attacks for piece type {pt!r}")
    _check_square(s)
    return _PSEUDO_ATTACKS[pt][s]


def attacks_bb(pt: PieceType, s: int, occupied: int = 0) -> int:
    """Return the attacks of ``pt`` from ``s`` given the occupied squares."""
    if pt == PieceType.PAWN or pt == PieceType.NO_PIECE_TYPE:
        raise ValueError(f"no attacks for piece type {pt!r}")
    _check_square(s)
    if pt == PieceType.BISHOP:
        return _magic(False, s).attacks_bb(occupied)
    if pt == PieceType.ROOK:
        return _magic(True, s).attacks_bb(occupied)
    if pt == PieceType.QUEEN:
        return _magic(False, s).attacks_bb(occupied) | _magic(True, s).attacks_bb(occupied)
    return _PSEUDO_ATTACKS[pt][s]


def pretty(b: int) -> str:
    """Return an ASCII drawing of a bitboard."""
    separator = "+---+---+---+---+---+---+---+---+\n"
    out = [separator]
    for r in range(RANK_NB - 1, -1, -1):
        out.extend(
            "| X " if b & (1 << make_square(f, r)) else "|   " for f in range(FILE_NB)
        )
        out.append(f"| {r + 1}\n")
        out.append(separator)
    out.append("  a   b   c   d   e   f   g   h\n")
    return "".join(out)