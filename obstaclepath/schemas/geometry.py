from __future__ import annotations

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    @classmethod
    def of(cls, xy: Tuple[float, float]) -> "Point":
        return cls(x=xy[0], y=xy[1])

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


class Polygon(BaseModel):
    """Closed ring of points; the last point connects back to the first."""

    model_config = ConfigDict(frozen=True)

    points: Tuple[Point, ...] = ()

    @property
    def size(self) -> int:
        return len(self.points)

    def coords(self) -> List[Tuple[float, float]]:
        return [p.as_tuple() for p in self.points]

    def index_of(self, point: Point) -> int:
        for i, p in enumerate(self.points):
            if p == point:
                return i
        return -1

    def reversed(self) -> "Polygon":
        return Polygon(points=tuple(reversed(self.points)))
