"""Exception types shared across the engine.

Grid and invariant errors are fatal: they signal an upstream contract
violation and abort the turn. Protocol errors are raised at the parse
boundary for malformed input. Illegal or disconnecting walls are ordinary
return values and never raise.
"""

from __future__ import annotations


class GridBoundsError(IndexError):
    """A coordinate fell outside ``[0, width) x [0, height)``."""


class InvariantViolation(RuntimeError):
    """A state that a validated snapshot can never produce was reached."""


class ProtocolError(ValueError):
    """Turn input could not be parsed."""
