"""Exceptions raised by the engine, the capability and the samplers."""


class VariatesError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgument(VariatesError, ValueError):
    """A parameter lies outside its documented domain."""


class OutOfMemory(VariatesError, MemoryError):
    """Engine state could not be allocated."""


class EngineNotSeeded(VariatesError, RuntimeError):
    """A draw was requested before seed() / seed_by_array()."""


class CapabilityReleased(VariatesError, RuntimeError):
    """A capability was used (or released) after release()."""
