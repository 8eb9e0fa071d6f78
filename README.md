# fishcore

Core pieces of a UCI chess engine, written as a plain Python library with no
third-party dependencies.

## What is inside

- `fishcore.types`: colours, pieces, squares, bounds, search value helpers
  (`is_win`, `is_loss`, `is_decisive`, `mate_in`, `mated_in`, ...) and the
  16-bit `Move` encoding (`Move.from_squares`, `Move.make`, `Move.none`,
  `Move.null`).
- `fishcore.timeman`: `TimeManagement` computes the optimum and maximum
  thinking time for a move from the search `Limits`, including the
  "nodes as time" mode.
- `fishcore.ucioption`: UCI options (`Option.spin`, `Option.check`,
  `Option.combo`, `Option.string`, `Option.button`) held in a case-insensitive
  `OptionsMap` that understands `setoption name ... value ...` and renders the
  `option name ...` lines sent in reply to `uci`. Adding a name twice raises
  `DuplicateOptionError`.
- `fishcore.tune`: the `Tune` registry that turns `Tunable` values and lists of
  integers into spin options, prints a tuning line for each, and reads the
  values back when an option changes.
- `fishcore.uci_format`: formatting of moves, squares, scores (`MateScore`,
  `TablebaseScore`, `InternalScore`), the win rate model, WDL statistics and
  `info` / `bestmove` lines.
- `fishcore.uci_commands`: parsing of the arguments of `go` (`parse_limits`)
  and `position` (`parse_position`).
- `fishcore.tt`: a transposition table of three-entry clusters with packed
  entries, generations and an age-aware replacement policy.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Options:

```python
from fishcore.ucioption import Option, OptionsMap

options = OptionsMap()
options.add("Hash", Option.spin(16, 1, 33554432))
options.add("Ponder", Option.check(False))
options.setoption("name hash value 64")
assert int(options["Hash"]) == 64
print(options.render())
```

Moves:

```python
from fishcore.types import Move, MoveType, PieceType, make_square
from fishcore.uci_format import move_to_uci

e7, e8 = make_square(4, 6), make_square(4, 7)
promotion = Move.make(MoveType.PROMOTION, e7, e8, PieceType.QUEEN)
print(move_to_uci(promotion, False))  # e7e8q
```

Scores and info lines:

```python
from fishcore.uci_format import MateScore, format_info_no_moves, wdl

print(format_info_no_moves(12, MateScore(3)))  # info depth 12 score mate 2
print(wdl(100, 58))  # win, draw and loss per mille
```

Parsing a `go` command and planning the time for the move:

```python
from fishcore.timeman import TimeManagement
from fishcore.types import Color
from fishcore.uci_commands import parse_limits

limits = parse_limits("wtime 60000 btime 60000 winc 1000 binc 1000")
tm = TimeManagement()
adjust = tm.init(limits, Color.WHITE, 20, {"nodestime": 0, "Move Overhead": 10, "Ponder": 0}, -1.0)
print(tm.optimum(), tm.maximum())
```

`init` returns the game's time adjustment; pass it back on later moves.

Transposition table:

```python
from fishcore.tt import TranspositionTable
from fishcore.types import Bound, Move

table = TranspositionTable(1)
key = 0x1234_5678_9ABC_DEF0
found, data, writer = table.probe(key)
assert not found
writer.write(key, 35, False, Bound.EXACT, 8, Move.from_squares(12, 28), 30, table.generation())
found, data, _ = table.probe(key)
assert found and data.depth == 8
```

## What this package does not do

There is no board representation, move generation, search, evaluation or
tablebase probing, and no command loop: nothing reads UCI commands from
standard input or starts a search. The modules above provide the parsing,
formatting, option handling, time planning and hashing that such an engine
would use. The transposition table is single-threaded and allocated as Python
objects rather than raw memory.