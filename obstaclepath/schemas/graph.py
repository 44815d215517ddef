from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from obstaclepath.schemas.geometry import Point, Polygon


PathStatus = Literal["FOUND", "UNREACHABLE", "NO_QUERY"]


class VisibilityGraph(BaseModel):
    vertices: List[Point] = Field(default_factory=list)
    edges: List[List[bool]] = Field(default_factory=list)  # dense, symmetric
    start_index: Optional[int] = None
    end_index: Optional[int] = None

    @property
    def size(self) -> int:
        return len(self.vertices)

    def neighbours(self, i: int) -> List[int]:
        return [j for j, visible in enumerate(self.edges[i]) if visible]

    def edge_count(self) -> int:
        return sum(row[j] for i, row in enumerate(self.edges) for j in range(i + 1, len(row)))


class PathResult(BaseModel):
    status: PathStatus = "NO_QUERY"
    indices: List[int] = Field(default_factory=list)
    points: List[Point] = Field(default_factory=list)
    length: float = 0.0

    @property
    def found(self) -> bool:
        return self.status == "FOUND"


class SceneSnapshot(BaseModel):
    obstacles: List[Polygon] = Field(default_factory=list)
    sketch: List[Point] = Field(default_factory=list)
    start: Optional[Point] = None
    end: Optional[Point] = None
    graph: VisibilityGraph = Field(default_factory=VisibilityGraph)
    path: PathResult = Field(default_factory=PathResult)
    fingerprint: str = ""
