"""Building blocks of a UCI chess engine: types, time management, options, tuning, UCI formatting and parsing, and a transposition table."""

__version__ = "0.1.0"