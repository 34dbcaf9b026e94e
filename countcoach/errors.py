class CountCoachError(Exception):
    """Base class for errors raised by the trainer core."""


class InvalidConfiguration(CountCoachError, ValueError):
    """A shoe was requested with a deck count outside the supported range."""


class NoActiveQuestion(CountCoachError, RuntimeError):
    """An answer was submitted before any question was generated."""


class UnknownCountingSystem(CountCoachError, KeyError):
    """Lookup of a counting system that is not registered."""
