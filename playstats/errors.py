"""Engine exceptions."""


class StatsError(Exception):
    """Base class for errors raised by the statistics engine."""


class InvalidParameterError(StatsError, ValueError):
    """Unrecognized metric, tier or milestone selector."""

    def __init__(self, kind: str, value):
        self.kind = kind
        self.value = value
        super().__init__(f"Unknown {kind}: {value!r}")
