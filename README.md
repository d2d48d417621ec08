# fishcore

Building blocks for a UCI chess engine, in plain Python with no third-party
dependencies.

## Modules

- `fishcore.util` – `PRNG`, a xorshift64* generator (`rand64`, `sparse_rand`);
  `now()`, a monotonic clock in milliseconds; `mul_hi64(a, b)`, the high 64
  bits of a 128-bit product; `split(s, delimiter)`; and
  `move_to_front(items, pred)`, which moves the first matching element of a
  list to the front in place.
- `fishcore.bitboard` – 64-bit bitboards with squares 0..63 (a1 = 0, h8 = 63):
  `Color`, `PieceType`, `make_square`, `file_of`, `rank_of`, `square_bb`,
  `rank_bb`, `file_bb`, `shift`, `more_than_one`, pawn attacks
  (`pawn_attacks_bb`, `pawn_attacks`), `line_bb`, `between_bb`, `aligned`,
  distances (`distance`, `file_distance`, `rank_distance`, `edge_distance`),
  `sliding_attack`, `pseudo_attacks`, magic-bitboard lookups for bishops,
  rooks and queens (`Magic`, `attacks_bb`), bit scans (`popcount`, `lsb`,
  `msb`, `least_significant_square_bb`, `pop_lsb`, which returns the square
  and the remaining bitboard) and `pretty`, an ASCII drawing of a bitboard.
- `fishcore.misc` – `engine_version_info()`, `engine_info(to_uci=False)`,
  `remove_whitespace`, `is_whitespace`, `str_to_size_t`,
  `read_file_to_string` (bytes, or `None` if the file cannot be read),
  `get_working_directory`, `get_binary_directory`, and `DebugStats`, slotted
  counters for hit rates, means, standard deviations, extremes and
  correlations (`hit_on`, `mean_of`, `stdev_of`, `extremes_of`, `correl_of`,
  `report`, `clear`).
- `fishcore.benchmark_data` – the built-in positions: `default_commands()`
  (FEN strings and `setoption` commands) and `benchmark_games()` (five games as
  lists of FEN strings).
- `fishcore.benchmark` – turns benchmark arguments into UCI command lists:
  `setup_bench(current_fen, args)`, `setup_benchmark(args)` returning a
  `BenchmarkSetup`, and `main`, the command-line entry point.

## Installation

```
pip install .
```

## Example

```python
from fishcore.bitboard import PieceType, attacks_bb, make_square, pretty, square_bb

e4 = make_square(4, 3)
rook_attacks = attacks_bb(PieceType.ROOK, e4, square_bb(make_square(4, 6)))
print(pretty(rook_attacks))
```

```python
from fishcore.benchmark import START_FEN, setup_bench

commands = setup_bench(START_FEN, ["16", "1", "10", "default", "depth"])
print(commands[:5])
```

`setup_bench` takes, in order and all optional: hash size in MB (16), thread
count (1), limit value (13), the positions (`default`, `current` or the name of
a file with one FEN per line) and the limit type (`depth`, `perft`, `nodes`,
`movetime` or `eval`). It raises `OSError` if the file cannot be read.

`setup_benchmark` takes thread count (all CPUs), hash size in MB (128 per
thread) and duration in seconds (150), and spreads the duration over the
positions of the benchmark games as `go movetime` commands.

## Command line

```
fishcore-bench
fishcore-bench bench 64 1 15
fishcore-bench bench 16 1 5 positions.txt perft
fishcore-bench benchmark 4 512 60
```

The first word is `bench` (the default) or `benchmark`; the rest are the
arguments described above. The command prints the resulting UCI commands, one
per line. It exits with 1 if a FEN file cannot be opened and 2 for an unknown
command word.

## What this package does not do

There is no position representation, move generation, evaluation, search or
UCI loop here. `fishcore-bench` only prints the command lists; nothing runs
them.

## Running the tests

```
pip install .[test]
pytest
```