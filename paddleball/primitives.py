"""
Shared primitive data types.

Basic geometric types used by the input layer and the host, where positions
cross a boundary and are worth validating. The simulation core itself works on
plain floats.
"""

from pydantic import BaseModel, ConfigDict


class Point2D(BaseModel):
    """Immutable 2D point/vector for screen positions and offsets.

    Coordinates can be positive, negative, or zero (pointer positions may
    fall slightly outside the window during a drag).

    Attributes:
        x: X coordinate (horizontal, grows to the right)
        y: Y coordinate (vertical, grows downward)

    Examples:
        >>> pos = Point2D(x=100.0, y=200.0)
        >>> pos.as_tuple()
        (100.0, 200.0)
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)  # Immutable

    def as_tuple(self) -> tuple:
        return (self.x, self.y)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"


Vector2D = Point2D
