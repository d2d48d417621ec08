import pytest

from fishcore.util import PRNG, move_to_front, mul_hi64, now, split

MASK64 = (1 << 64) - 1


def test_prng_is_deterministic_for_same_seed():
    a = PRNG(1070372)
    b = PRNG(1070372)
    assert [a.rand64() for _ in range(50)] == [b.rand64() for _ in range(50)]


def test_prng_different_seeds_differ():
    a = PRNG(728)
    b = PRNG(10316)
    assert [a.rand64() for _ in range(10)] != [b.rand64() for _ in range(10)]


def test_prng_values_fit_in_64_bits():
    rng = PRNG(8977)
    values = [rng.rand64() for _ in range(1000)]
    assert all(0 <= v <= MASK64 for v in values)
    assert len(set(values)) == len(values)


def test_prng_uses_high_bits():
    rng = PRNG(44560)
    values = [rng.rand64() for _ in range(200)]
    assert any(v >= 1 << 63 for v in values)


def test_prng_zero_seed_rejected():
    with pytest.raises(ValueError):
        PRNG(0)


def test_sparse_rand_is_sparser_than_rand64():
    dense = PRNG(54343)
    sparse = PRNG(54343)
    dense_bits = sum(bin(dense.rand64()).count("1") for _ in range(500))
    sparse_bits = sum(bin(sparse.sparse_rand()).count("1") for _ in range(500))
    assert sparse_bits * 3 < dense_bits
    assert all(0 <= sparse.sparse_rand() <= MASK64 for _ in range(100))


def test_sparse_rand_consumes_three_draws():
    a = PRNG(17020)
    b = PRNG(17020)
    x, y, z = a.rand64(), a.rand64(), a.rand64()
    assert b.sparse_rand() == x & y & z


def test_now_is_monotonic_int():
    first = now()
    second = now()
    assert isinstance(first, int)
    assert second >= first


def test_mul_hi64_small_products_have_zero_high_part():
    assert mul_hi64(123456, 789012) == 0
    assert mul_hi64(0, MASK64) == 0


def test_mul_hi64_powers_of_two():
    assert mul_hi64(1 << 32, 1 << 32) == 1
    assert mul_hi64(1 << 63, 2) == 1


def test_mul_hi64_max_values():
    assert mul_hi64(MASK64, MASK64) == MASK64 - 1


def test_mul_hi64_is_commutative():
    rng = PRNG(95205)
    for _ in range(50):
        a, b = rng.rand64(), rng.rand64()
        assert mul_hi64(a, b) == mul_hi64(b, a)
        assert mul_hi64(a, b) <= a


def test_mul_hi64_rejects_out_of_range():
    with pytest.raises(ValueError):
        mul_hi64(-1, 5)
    with pytest.raises(ValueError):
        mul_hi64(5, 1 << 64)


def test_split_basic():
    assert split("a,b,c", ",") == ["a", "b", "c"]


def test_split_empty_string_gives_empty_list():
    assert split("", ",") == []


def test_split_keeps_empty_pieces():
    assert split("a,,b,", ",") == ["a", "", "b", ""]
    assert split(",", ",") == ["", ""]


def test_split_without_delimiter_returns_whole():
    assert split("abc", ";") == ["abc"]


def test_split_multichar_delimiter_roundtrip():
    text = "0-1:::2-3:::4-5"
    pieces = split(text, ":::")
    assert pieces == ["0-1", "2-3", "4-5"]
    assert ":::".join(pieces) == text


def test_split_empty_delimiter_rejected():
    with pytest.raises(ValueError):
        split("abc", "")


def test_move_to_front_moves_first_match():
    items = [1, 2, 3, 4, 5]
    move_to_front(items, lambda x: x % 2 == 0)
    assert items == [2, 1, 3, 4, 5]


def test_move_to_front_no_match_leaves_list():
    items = ["a", "b", "c"]
    move_to_front(items, lambda x: x == "z")
    assert items == ["a", "b", "c"]


def test_move_to_front_already_first():
    items = [7, 8, 9]
    move_to_front(items, lambda x: x == 7)
    assert items == [7, 8, 9]


def test_move_to_front_last_element_preserves_order():
    items = ["w", "x", "y", "z"]
    move_to_front(items, lambda x: x == "z")
    assert items == ["z", "w", "x", "y"]
    assert sorted(items) == ["w", "x", "y", "z"]