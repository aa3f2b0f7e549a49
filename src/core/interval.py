# core/interval.py
import math

class Interval:
    """
    Closed range of real numbers [min, max]. The default interval is empty.
    """
    __slots__ = ("min", "max")

    def __init__(self, minimum: float = math.inf, maximum: float = -math.inf):
        self.min = minimum
        self.max = maximum

    def contains(self, x: float) -> bool:
        return self.min <= x <= self.max

    def surrounds(self, x: float) -> bool:
        """Open-interval membership, used to reject hits on the boundary."""
        return self.min < x < self.max

    def clamp(self, x: float) -> float:
        if x < self.min:
            return self.min
        if x > self.max:
            return self.max
        return x

    def __repr__(self) -> str:
        return f"Interval({self.min}, {self.max})"
