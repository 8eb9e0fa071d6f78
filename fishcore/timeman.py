"""Time management: how long to think on the current move."""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .types import Color


def now() -> int:
    """Current monotonic time in milliseconds."""
    return time.monotonic_ns() // 1_000_000


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


@dataclass
class Limits:
    """Search limits as given by a 'go' command."""

    searchmoves: list[str] = field(default_factory=list)
    time: list[int] = field(default_factory=lambda: [0, 0])
    inc: list[int] = field(default_factory=lambda: [0, 0])
    npmsec: int = 0
    movetime: int = 0
    start_time: int = 0
    movestogo: int = 0
    depth: int = 0
    mate: int = 0
    perft: int = 0
    infinite: int = 0
    nodes: int = 0
    ponder_mode: bool = False


class TimeManagement:
    """Computes optimum and maximum thinking time for a move."""

    def __init__(self) -> None:
        self.start_time = 0
        self.optimum_time = 0
        self.maximum_time = 0
        self.available_nodes = -1  # used in 'nodes as time' mode
        self.use_nodes_time = False

    def optimum(self) -> int:
        return self.optimum_time

    def maximum(self) -> int:
        return self.maximum_time

    def elapsed(self, nodes: Callable[[], int]) -> int:
        """Elapsed nodes in 'nodes as time' mode, otherwise elapsed milliseconds."""
        return int(nodes()) if self.use_nodes_time else self.elapsed_time()

    def elapsed_time(self) -> int:
        return now() - self.start_time

    def clear(self) -> None:
        self.available_nodes = -1

    def advance_nodes_time(self, nodes: int) -> None:
        if not self.use_nodes_time:
            raise RuntimeError("not in 'nodes as time' mode")
        self.available_nodes = max(0, self.available_nodes - nodes)

    def init(
        self,
        limits: Limits,
        us: Color,
        ply: int,
        options: Mapping[str, Any],
        original_time_adjust: float,
    ) -> float:
        """Compute time bounds for the current ply.

        ``limits`` is updated in place when playing in 'nodes as time' mode.
        Returns the (possibly initialised) original time adjustment, which the
        caller keeps for the rest of the game.
        """
        npmsec = int(options["nodestime"])

        self.start_time = limits.start_time
        self.use_nodes_time = npmsec != 0

        if limits.time[us] == 0:
            return original_time_adjust

        move_overhead = int(options["Move Overhead"])

        if self.use_nodes_time:
            if self.available_nodes == -1:  # only once at game start
                self.available_nodes = npmsec * limits.time[us]
            limits.time[us] = self.available_nodes
            limits.inc[us] *= npmsec
            limits.npmsec = npmsec
            move_overhead *= npmsec

        scale_factor = npmsec if self.use_nodes_time else 1
        scaled_time = _tdiv(limits.time[us], scale_factor)
        scaled_inc = _tdiv(limits.inc[us], scale_factor)

        centi_mtg = min(limits.movestogo * 100, 5000) if limits.movestogo else 5051

        if scaled_inc:
            ratio = centi_mtg / scaled_inc
        else:
            ratio = math.inf if centi_mtg > 0 else -math.inf if centi_mtg < 0 else math.nan
        if scaled_time < 1000 and ratio > 5.051:
            centi_mtg = int(scaled_time * 5.051)

        time_left = max(
            1,
            limits.time[us]
            + _tdiv(
                limits.inc[us] * (centi_mtg - 100) - move_overhead * (200 + centi_mtg), 100
            ),
        )

        if limits.movestogo == 0:
            if original_time_adjust < 0:
                original_time_adjust = 0.3128 * math.log10(time_left) - 0.4354

            # A clock at or below zero is treated as one millisecond left.
            log_time_in_sec = math.log10(max(scaled_time, 1) / 1000.0)
            opt_constant = min(0.0032116 + 0.000321123 * log_time_in_sec, 0.00508017)
            max_constant = max(3.3977 + 3.03950 * log_time_in_sec, 2.94761)

            opt_scale = (
                min(
                    0.0121431 + (ply + 2.94693) ** 0.461073 * opt_constant,
                    0.213035 * limits.time[us] / time_left,
                )
                * original_time_adjust
            )
            max_scale = min(6.67704, max_constant + ply / 11.9847)
        else:
            opt_scale = min(
                (0.88 + ply / 116.4) / (centi_mtg / 100.0),
                0.88 * limits.time[us] / time_left,
            )
            max_scale = 1.3 + 0.11 * (centi_mtg / 100.0)

        self.optimum_time = int(opt_scale * time_left)
        self.maximum_time = (
            int(min(0.825179 * limits.time[us] - move_overhead, max_scale * self.optimum_time))
            - 10
        )

        if int(options["Ponder"]):
            self.optimum_time += _tdiv(self.optimum_time, 4)

        return original_time_adjust