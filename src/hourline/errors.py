# SPDX-License-Identifier: MIT


class HourlineError(ValueError):
    pass


class MalformedDateError(HourlineError):
    """A date key could not be parsed into a calendar date."""

    def __init__(self, value: object, reason: str = "expected YYYY-MM-DD") -> None:
        super().__init__(f"Malformed date {value!r}: {reason}")
        self.value = value


class InvalidRangeError(HourlineError):
    """A range whose start falls after its end."""

    def __init__(self, start: object, end: object) -> None:
        super().__init__(f"Range start {start} is after range end {end}")
        self.start = start
        self.end = end


class DegenerateRangeError(HourlineError):
    """A zero-length timeline that cannot be used for positioning."""

    def __init__(self, start: object, end: object) -> None:
        super().__init__(f"Timeline range {start} to {end} has zero length")
        self.start = start
        self.end = end
