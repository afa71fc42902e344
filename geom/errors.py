"""Exception types for invalid geometry construction and failed operations."""


class GeometryError(ValueError):
    """Raised for impossible geometry operations.

    *op* names the operation that failed and *values* holds the offending
    inputs, so callers can report them without parsing the message.
    """

    def __init__(self, msg: str, op: str = "", values: tuple = ()):
        super().__init__(f"{op}: {msg}" if op else msg)
        self.op = op
        self.values = tuple(values)


class DivideByZeroError(GeometryError):
    """Division by a negligible magnitude."""


class TooSmallError(GeometryError):
    """Input too short to define a direction (e.g. unitizing a tiny vector)."""


class UnitizingError(GeometryError):
    """A unit vector or quaternion whose length is not one."""


class NanInfinityError(GeometryError):
    """NaN or Infinity found in an input coordinate or parameter."""


class TooFewPointsError(GeometryError):
    """Not enough distinct vertices left for the requested shape."""


class OffsetFailure(GeometryError):
    """Raised by ``OffsetErr.unwrap()``; carries the structured ``OffsetError``."""

    def __init__(self, error):
        super().__init__(error.message, op="offset", values=(error.index, error.point))
        self.error = error
