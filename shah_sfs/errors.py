### Exceptions raised by the solver and its helpers.

class InvalidInput(ValueError):
    """Malformed image, inconsistent slant/tilt, or a bad iteration count."""


class OutOfRangeParameters(InvalidInput):
    """Slant outside [0, pi/2] or tilt outside [0, 2*pi]."""
