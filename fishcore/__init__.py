"""Chess engine building blocks: bitboards, attack tables, utilities and benchmark command lists."""

__version__ = "0.1.0"

__all__ = ["util", "bitboard", "misc", "benchmark_data", "benchmark"]