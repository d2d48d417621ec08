import pytest

from fishcore.bitboard import (
    EAST,
    NORTH,
    SOUTH,
    WEST,
    Color,
    Magic,
    PieceType,
    aligned,
    attacks_bb,
    between_bb,
    distance,
    edge_distance,
    file_bb,
    file_distance,
    file_of,
    least_significant_square_bb,
    line_bb,
    lsb,
    make_square,
    more_than_one,
    msb,
    pawn_attacks,
    pawn_attacks_bb,
    pop_lsb,
    popcount,
    pretty,
    pseudo_attacks,
    rank_bb,
    rank_distance,
    rank_of,
    shift,
    sliding_attack,
    square_bb,
)
from fishcore.util import PRNG


def sq(name):
    return make_square(ord(name[0]) - ord("a"), int(name[1]) - 1)


def test_file_and_rank_constants():
    assert file_bb(0) == 0x0101010101010101
    assert rank_bb(0) == 0xFF
    assert file_bb(7) == 0x0101010101010101 << 7
    assert rank_bb(7) == 0xFF << 56


def test_make_square_round_trip():
    for s in range(64):
        assert make_square(file_of(s), rank_of(s)) == s


def test_make_square_rejects_out_of_range():
    with pytest.raises(ValueError):
        make_square(8, 0)


def test_square_bb_rejects_invalid_square():
    with pytest.raises(ValueError):
        square_bb(64)
    with pytest.raises(ValueError):
        square_bb(-1)


def test_lsb_msb_round_trip():
    for s in range(64):
        b = square_bb(s)
        assert lsb(b) == s
        assert msb(b) == s
        assert popcount(b) == 1


def test_lsb_of_empty_raises():
    with pytest.raises(ValueError):
        lsb(0)
    with pytest.raises(ValueError):
        msb(0)
    with pytest.raises(ValueError):
        pop_lsb(0)


def test_pop_lsb_drains_all_squares():
    b = file_bb(3) | rank_bb(5)
    squares = []
    while b:
        s, b = pop_lsb(b)
        squares.append(s)
    assert squares == sorted(squares)
    assert len(squares) == popcount(file_bb(3) | rank_bb(5))


def test_least_significant_square_bb_matches_lsb():
    rng = PRNG(99)
    for _ in range(50):
        b = rng.rand64() or 1
        assert least_significant_square_bb(b) == square_bb(lsb(b))


def test_popcount_is_additive_on_disjoint_sets():
    assert popcount(file_bb(0) | file_bb(7)) == popcount(file_bb(0)) + popcount(file_bb(7))


def test_more_than_one():
    assert not more_than_one(0)
    assert not more_than_one(square_bb(17))
    assert more_than_one(square_bb(17) | square_bb(40))


def test_line_and_between_worked_examples():
    diagonal = 0
    for name in ("a2", "b3", "c4", "d5", "e6", "f7", "g8"):
        diagonal |= square_bb(sq(name))
    assert line_bb(sq("c4"), sq("f7")) == diagonal
    assert between_bb(sq("c4"), sq("f7")) == (
        square_bb(sq("d5")) | square_bb(sq("e6")) | square_bb(sq("f7"))
    )
    assert between_bb(sq("e6"), sq("f8")) == square_bb(sq("f8"))
    assert line_bb(sq("e6"), sq("f8")) == 0


def test_between_and_line_invariants():
    for s1 in range(0, 64, 5):
        for s2 in range(64):
            b = between_bb(s1, s2)
            assert b & square_bb(s2)
            assert not (b & square_bb(s1)) or s1 == s2
            assert line_bb(s1, s2) == line_bb(s2, s1)
            if line_bb(s1, s2):
                assert aligned(s1, s2, s1)
                assert aligned(s1, s2, s2)
                assert b & ~square_bb(s2) & ~line_bb(s1, s2) == 0


@pytest.mark.parametrize("square", ["a1", "h8", "d4", "e5", "b7"])
@pytest.mark.parametrize("pt", [PieceType.ROOK, PieceType.BISHOP])
def test_magic_attacks_match_sliding(square, pt):
    rng = PRNG(12345)
    s = sq(square)
    for _ in range(40):
        occupied = rng.sparse_rand()
        assert attacks_bb(pt, s, occupied) == sliding_attack(pt, s, occupied)
    assert attacks_bb(pt, s, 0) == pseudo_attacks(pt, s)


def test_queen_attacks_are_rook_plus_bishop():
    rng = PRNG(7)
    s = sq("c3")
    occupied = rng.sparse_rand()
    assert attacks_bb(PieceType.QUEEN, s, occupied) == (
        attacks_bb(PieceType.ROOK, s, occupied) | attacks_bb(PieceType.BISHOP, s, occupied)
    )
    assert pseudo_attacks(PieceType.QUEEN, s) == (
        pseudo_attacks(PieceType.ROOK, s) | pseudo_attacks(PieceType.BISHOP, s)
    )


def test_knight_and_king_attacks_are_symmetric():
    for pt in (PieceType.KNIGHT, PieceType.KING):
        for s1 in range(64):
            for s2 in range(64):
                forward = bool(pseudo_attacks(pt, s1) & square_bb(s2))
                backward = bool(pseudo_attacks(pt, s2) & square_bb(s1))
                assert forward == backward


def test_king_attacks_are_distance_one():
    for s1 in range(64):
        neighbours = {s2 for s2 in range(64) if distance(s1, s2) == 1}
        attacked = {s2 for s2 in range(64) if attacks_bb(PieceType.KING, s1) & square_bb(s2)}
        assert attacked == neighbours


def test_attacks_reject_pawn():
    with pytest.raises(ValueError):
        attacks_bb(PieceType.PAWN, 10, 0)
    with pytest.raises(ValueError):
        pseudo_attacks(PieceType.PAWN, 10)


def test_pawn_attack_table_matches_bitboard_version():
    for color in Color:
        for s in range(64):
            assert pawn_attacks(color, s) == pawn_attacks_bb(color, square_bb(s))


def test_pawn_attacks_mirror_between_colors():
    for s1 in range(64):
        for s2 in range(64):
            white = bool(pawn_attacks(Color.WHITE, s1) & square_bb(s2))
            black = bool(pawn_attacks(Color.BLACK, s2) & square_bb(s1))
            assert white == black


def test_color_invert_selects_opposite_pawn_attacks():
    s = sq("d4")
    assert pawn_attacks(~Color.WHITE, s) == pawn_attacks(Color.BLACK, s)
    assert pawn_attacks(~Color.BLACK, s) == pawn_attacks(Color.WHITE, s)
    assert pawn_attacks(~Color.WHITE, s) == square_bb(sq("c3")) | square_bb(sq("e3"))


def test_shift_round_trip_and_edges():
    interior = square_bb(sq("d4")) | square_bb(sq("e5"))
    assert shift(shift(interior, NORTH), SOUTH) == interior
    assert shift(shift(interior, EAST), WEST) == interior
    assert shift(rank_bb(7), NORTH) == 0
    assert shift(file_bb(7), EAST) == 0
    assert shift(file_bb(0), WEST) == 0


def test_distance_invariants():
    for x in range(64):
        for y in range(64):
            assert distance(x, y) == max(file_distance(x, y), rank_distance(x, y))
            assert distance(x, y) == distance(y, x)
    for f in range(8):
        assert edge_distance(f) == edge_distance(7 - f)


def test_magic_index_and_lookup():
    m = Magic(mask=0b11, magic=1 << 62, shift=62, attacks=(10, 11, 12, 13))
    for occ in range(4):
        assert m.index(occ | 0xF0) == occ
        assert m.attacks_bb(occ) == m.attacks[occ]


def test_pretty_layout():
    text = pretty(0)
    lines = text.splitlines()
    assert lines[0] == "+---+---+---+---+---+---+---+---+"
    assert lines[-1] == "  a   b   c   d   e   f   g   h"
    assert "X" not in text
    board = rank_bb(2) | square_bb(sq("h8"))
    drawn = pretty(board)
    assert drawn.count("X") == popcount(board)
    assert lines[1].endswith("| 8")
    assert pretty(square_bb(sq("a8"))).splitlines()[1].startswith("| X |")