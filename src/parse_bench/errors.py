"""Exceptions raised by the benchmark harness."""


class ParseBenchError(Exception):
    """Base class for harness errors."""


class ConfigurationError(ParseBenchError, ValueError):
    """Invalid benchmark configuration, raised before any timing starts."""


class MeasurementError(ParseBenchError):
    """A candidate parser failed during the timed phase."""

    def __init__(self, candidate: str, iteration: int, cause: BaseException):
        self.candidate = candidate
        self.iteration = iteration
        self.cause = cause
        super().__init__(
            f"{candidate} failed on measured iteration {iteration}: "
            f"{type(cause).__name__}: {cause}"
        )
