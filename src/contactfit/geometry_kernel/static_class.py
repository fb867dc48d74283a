from enum import Enum


class CoplanarPolicy(str, Enum):
    """How the triangle intersector treats a coplanar triangle pair."""
    RAISE = "RAISE"
    CLIP = "CLIP"
    IGNORE = "IGNORE"


class ConicKind(str, Enum):
    ELLIPSE = "ellipse"
    CIRCLE = "circle"

    @staticmethod
    def parse(value) -> "ConicKind":
        if isinstance(value, ConicKind):
            return value
        try:
            return ConicKind(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unsupported conic kind: {value!r}. Use 'ellipse' or 'circle'.")


class PointLocation(Enum):
    """Position of a point relative to a half-space system."""
    INSIDE = 1
    ON_BOUNDARY = 0
    OUTSIDE = -1
