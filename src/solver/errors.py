"""
Exception hierarchy for the Minesweeper solver.

Two kinds of failure exist: invariant violations, which mean the engine
itself has a control-flow bug and must abort, and surface errors, which
come from the game surface and propagate out of the in-flight call.
"""


class MinesweeperError(Exception):
    """Base class for every error raised by this package."""


class InvariantViolation(MinesweeperError):
    """The engine broke one of its own state invariants."""


# ============================================================================
# Surface Errors
# ============================================================================

class SurfaceError(MinesweeperError):
    """A call into the game surface failed."""


class SurfaceUnavailable(SurfaceError):
    """The surface could not be reached or never became playable."""


class ElementNotFound(SurfaceError):
    """No element exists on the surface for the requested cell."""


class StaleReference(SurfaceError):
    """The element for a cell went stale between lookup and use."""
