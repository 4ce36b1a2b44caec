class MazeError(Exception):
    """Base class for every error raised by gridmaze."""


class InvalidConfigError(MazeError, ValueError):
    """
    The caller asked for something that can't be built: bad dimensions,
    an unusable template, or start/end cells that can't be connected.
    """


class InternalMazeError(MazeError, RuntimeError):
    """A topology invariant was broken. Indicates a bug, never retry."""
