"""Transposition table: a hash of previously searched positions."""

from __future__ import annotations

from dataclasses import dataclass, field

from .types import (
    DEPTH_ENTRY_OFFSET,
    MASK64,
    VALUE_NONE,
    Bound,
    Move,
)

# The low bits of gen_bound8 hold the bound and the pv flag; the rest is the generation.
GENERATION_BITS = 3
GENERATION_DELTA = 1 << GENERATION_BITS
GENERATION_CYCLE = 255 + GENERATION_DELTA
GENERATION_MASK = (0xFF << GENERATION_BITS) & 0xFF

CLUSTER_SIZE = 3
CLUSTER_BYTES = 32  # three 10-byte entries plus padding

_HASHFULL_CLUSTERS = 1000


def mul_hi64(a: int, b: int) -> int:
    """High 64 bits of the 128-bit product of two 64-bit numbers."""
    return ((a & MASK64) * (b & MASK64)) >> 64


def _int16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


@dataclass(frozen=True)
class TTData:
    """A copy of the data held by a table entry."""

    move: Move
    value: int
    eval: int
    depth: int
    bound: Bound
    is_pv: bool


@dataclass(slots=True)
class TTEntry:
    """One table slot, with fields packed as in the 10-byte layout."""

    key16: int = 0
    depth8: int = 0
    gen_bound8: int = 0
    move16: Move = field(default_factory=Move.none)
    value16: int = 0
    eval16: int = 0

    def read(self) -> TTData:
        return TTData(
            self.move16,
            self.value16,
            self.eval16,
            self.depth8 + DEPTH_ENTRY_OFFSET,
            Bound(self.gen_bound8 & 0x3),
            bool(self.gen_bound8 & 0x4),
        )

    def is_occupied(self) -> bool:
        return bool(self.depth8)

    def save(
        self,
        key: int,
        value: int,
        pv: bool,
        bound: Bound,
        depth: int,
        move: Move,
        eval_value: int,
        generation8: int,
    ) -> None:
        """Store a node's data, unless the entry already holds something more valuable."""
        key16 = key & 0xFFFF

        # Keep the old move if there is no new one for the same position.
        if move or key16 != self.key16:
            self.move16 = move

        if (
            bound == Bound.EXACT
            or key16 != self.key16
            or depth - DEPTH_ENTRY_OFFSET + 2 * int(pv) > self.depth8 - 4
            or self.relative_age(generation8)
        ):
            if not DEPTH_ENTRY_OFFSET < depth < 256 + DEPTH_ENTRY_OFFSET:
                raise ValueError(f"depth out of storable range: {depth}")
            self.key16 = key16
            self.depth8 = (depth - DEPTH_ENTRY_OFFSET) & 0xFF
            self.gen_bound8 = (generation8 | (int(bool(pv)) << 2) | int(bound)) & 0xFF
            self.value16 = _int16(value)
            self.eval16 = _int16(eval_value)
        elif (
            self.depth8 + DEPTH_ENTRY_OFFSET >= 5
            and Bound(self.gen_bound8 & 0x3) != Bound.EXACT
        ):
            self.depth8 -= 1

    def relative_age(self, generation8: int) -> int:
        """Age of the entry relative to a generation, a multiple of GENERATION_DELTA."""
        return (GENERATION_CYCLE + generation8 - self.gen_bound8) & GENERATION_MASK


class TTWriter:
    """Writes into one table entry found by a probe."""

    __slots__ = ("_entry",)

    def __init__(self, entry: TTEntry) -> None:
        self._entry = entry

    def write(
        self,
        key: int,
        value: int,
        pv: bool,
        bound: Bound,
        depth: int,
        move: Move,
        eval_value: int,
        generation8: int,
    ) -> None:
        self._entry.save(key, value, pv, bound, depth, move, eval_value, generation8)


class TranspositionTable:
    """Clusters of three entries, indexed by the high bits of a position key."""

    def __init__(self, mb_size: int = 1) -> None:
        self.cluster_count = 0
        self._clusters: list[list[TTEntry]] = []
        self._generation8 = 0
        self.resize(mb_size)

    def resize(self, mb_size: int) -> None:
        """Set the table size in megabytes and clear it."""
        if mb_size < 1:
            raise ValueError(f"table size must be at least 1 MB, got {mb_size}")
        self.cluster_count = mb_size * 1024 * 1024 // CLUSTER_BYTES
        self.clear()

    def clear(self) -> None:
        """Empty every entry and reset the generation."""
        self._generation8 = 0
        self._clusters = [
            [TTEntry() for _ in range(CLUSTER_SIZE)] for _ in range(self.cluster_count)
        ]

    def hashfull(self, max_age: int = 0) -> int:
        """Per mille of sampled entries that are occupied and no older than max_age searches."""
        max_age_internal = max_age << GENERATION_BITS
        count = sum(
            1
            for cluster in self._clusters[:_HASHFULL_CLUSTERS]
            for entry in cluster
            if entry.is_occupied()
            and entry.relative_age(self._generation8) <= max_age_internal
        )
        return count // CLUSTER_SIZE

    def new_search(self) -> None:
        """Advance the generation; called at the start of each root search."""
        self._generation8 = (self._generation8 + GENERATION_DELTA) & 0xFF

    def generation(self) -> int:
        return self._generation8

    def probe(self, key: int) -> tuple[bool, TTData, TTWriter]:
        """Look up a key.

        Returns whether the position was found, a copy of the entry's data,
        and a writer for the entry to use, which is the least valuable one in
        the cluster when the key is not present.
        """
        cluster = self._clusters[self.cluster_index(key)]
        key16 = key & 0xFFFF

        for entry in cluster:
            if entry.key16 == key16:
                return entry.is_occupied(), entry.read(), TTWriter(entry)

        replace = cluster[0]
        for entry in cluster[1:]:
            if (
                replace.depth8 - replace.relative_age(self._generation8)
                > entry.depth8 - entry.relative_age(self._generation8)
            ):
                replace = entry

        empty = TTData(Move.none(), VALUE_NONE, VALUE_NONE, DEPTH_ENTRY_OFFSET, Bound.NONE, False)
        return False, empty, TTWriter(replace)

    def cluster_index(self, key: int) -> int:
        """Index of the cluster that holds a key."""
        return mul_hi64(key, self.cluster_count)