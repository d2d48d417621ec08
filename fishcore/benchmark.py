"""Build the command lists run by the ``bench`` and ``benchmark`` commands."""

from __future__ import annotations

import os
import struct
import sys
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .benchmark_data import benchmark_games, default_commands

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Chosen so that roughly half of the hash is used once all positions are searched.
TT_SIZE_PER_THREAD = 128
DEFAULT_DURATION_S = 150


@dataclass
class BenchmarkSetup:
    """Settings and UCI commands for a timed benchmark run."""

    tt_size: int
    threads: int
    commands: list[str] = field(default_factory=list)
    original_invocation: str = ""
    filled_invocation: str = ""


def _tokens(args: str | Iterable[str] | None) -> list[str]:
    if args is None:
        return []
    if isinstance(args, str):
        return args.split()
    return [token for arg in args for token in str(arg).split()]


def _f32(x: float) -> float:
    """Round a number to single precision."""
    return struct.unpack("f", struct.pack("f", x))[0]


def _hardware_concurrency() -> int:
    return os.cpu_count() or 1


def _corrected_time(ply: int) -> float:
    # Time per move fitted on long games: ms = 50000 / (ply + 15).
    return 50000.0 / (float(ply) + 15.0)


def setup_bench(current_fen: str, args: str | Iterable[str] | None = None) -> list[str]:
    """Return the UCI commands for ``bench``.

    The arguments are, in order and all optional: hash size in MB (16),
    number of threads (1), limit value (13), FEN source (``default``,
    ``current`` or a file name) and limit type (``depth``, ``perft``,
    ``nodes``, ``movetime`` or ``eval``). Raises OSError if the FEN file
    cannot be read.
    """
    tokens = iter(_tokens(args))
    tt_size = next(tokens, "16")
    threads = next(tokens, "1")
    limit = next(tokens, "13")
    fen_file = next(tokens, "default")
    limit_type = next(tokens, "depth")

    go = "eval" if limit_type == "eval" else f"go {limit_type} {limit}"

    if fen_file == "default":
        fens = default_commands()
    elif fen_file == "current":
        fens = [current_fen]
    else:
        with open(fen_file, encoding="utf-8") as f:
            fens = [line for line in f.read().split("\n") if line]

    commands = [
        f"setoption name Threads value {threads}",
        f"setoption name Hash value {tt_size}",
        "ucinewgame",
    ]
    for fen in fens:
        if "setoption" in fen:
            commands.append(fen)
        else:
            commands.append(f"position fen {fen}")
            commands.append(go)
    return commands


def _leading_ints(tokens: Sequence[str], count: int) -> list[int]:
    """Parse up to ``count`` integers, stopping at the first that is not one."""
    values: list[int] = []
    for token in tokens[:count]:
        try:
            values.append(int(token))
        except ValueError:
            break
    return values


def setup_benchmark(args: str | Iterable[str] | None = None) -> BenchmarkSetup:
    """Return the setup for ``benchmark``.

    The arguments are, in order and all optional: number of threads (all
    hardware threads), hash size in MB (128 per thread) and the desired
    duration in seconds (150).
    """
    values = _leading_ints(_tokens(args), 3)
    given: list[str] = []

    if values:
        threads = values[0]
        given.append(str(threads))
    else:
        threads = _hardware_concurrency()

    if len(values) > 1:
        tt_size = values[1]
        given.append(str(tt_size))
    else:
        tt_size = TT_SIZE_PER_THREAD * threads

    if len(values) > 2:
        desired_time_s = values[2]
        given.append(str(desired_time_s))
    else:
        desired_time_s = DEFAULT_DURATION_S

    setup = BenchmarkSetup(
        tt_size=tt_size,
        threads=threads,
        original_invocation=" ".join(given),
        filled_invocation=f"{threads} {tt_size} {desired_time_s}",
    )

    games = benchmark_games()

    total_time = _f32(0.0)
    for game in games:
        setup.commands.append("ucinewgame")
        for ply in range(1, len(game) + 1):
            total_time = _f32(total_time + _corrected_time(ply))

    time_scale_factor = _f32(_f32(float(desired_time_s * 1000)) / total_time)

    for game in games:
        setup.commands.append("ucinewgame")
        for ply, fen in enumerate(game, start=1):
            setup.commands.append(f"position fen {fen}")
            movetime = int(_corrected_time(ply) * time_scale_factor)
            setup.commands.append(f"go movetime {movetime}")

    return setup


def main(argv: Sequence[str] | None = None) -> int:
    """Print the commands of ``bench [args]`` or ``benchmark [args]``, one per line."""
    args = list(sys.argv[1:] if argv is None else argv)
    command = args[0] if args else "bench"
    rest = args[1:]

    if command == "bench":
        try:
            commands = setup_bench(START_FEN, rest)
        except OSError:
            fen_file = rest[3] if len(rest) > 3 else ""
            print(f"Unable to open file {fen_file}", file=sys.stderr)
            return 1
    elif command == "benchmark":
        commands = setup_benchmark(rest).commands
    else:
        print(f"Unknown command: {command}", file=sys.stderr)
        return 2

    for line in commands:
        print(line)
    return 0