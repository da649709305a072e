# MIT License (see LICENSE)
"""
Tick reporters.

This subpackage provides observers that receive committed ticks:
    - TickReporter: Abstract base class defining the reporting interface.
    - LogReporter: Emits debug_info() lines through logging.
    - StreamReporter: Plain text to a stream.
    - BufferedReporter: Records frames for later inspection or export.
    - NullReporter: No-op.

Typical usage:
    from nbody_sim.reporting import LogReporter

    sim.run(1000, reporter=LogReporter(), report_every=100)
"""
from .reporters import (
    TickReporter,
    LogReporter,
    StreamReporter,
    NullReporter,
    BufferedReporter,
)

__all__ = [
    "TickReporter",
    "LogReporter",
    "StreamReporter",
    "NullReporter",
    "BufferedReporter",
]
