from typing import Any, List, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# -----------------------------
# Domain Models (Pydantic)
# -----------------------------

class Edge(BaseModel):
    """Undirected weighted edge as consumed by the shortest-path engine."""
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    weight: float = 1.0

class ShortestPathResult(BaseModel):
    path: List[str]
    distance: float

class Node(BaseModel):
    id: str
    label: str

class WorkspaceEdge(BaseModel):
    id: str  # "SOURCE-TARGET"
    source: str
    target: str
    weight: float

    def as_edge(self) -> Edge:
        return Edge(**{"from": self.source, "to": self.target, "weight": self.weight})

class Event(BaseModel):
    time: str
    type: str
    detail: dict

# -----------------------------
# API Schemas
# -----------------------------

class ComputePathRequest(BaseModel):
    edges: List[Edge]
    start: str
    end: str

class AddNodeRequest(BaseModel):
    label: str

class AddEdgeRequest(BaseModel):
    source: str
    target: str
    weight: float

class SetEndpointsRequest(BaseModel):
    start: str = ""
    end: str = ""

class GraphResponse(BaseModel):
    nodes: List[Node]
    edges: List[WorkspaceEdge]
    start: str
    end: str

class WorkspacePathResponse(BaseModel):
    start: str
    end: str
    path: List[str] = []
    distance: Optional[float] = None  # None when there is no path
    path_edges: List[str] = []  # ids of workspace edges along the path

# -----------------------------
# In-memory State (one workspace per process)
# -----------------------------

STATE: Dict[str, Any] = {
    "nodes": [],
    "edges": [],
    "start": "",
    "end": "",
    "events": [],
}

SAMPLE_NODES = ["A", "B", "C", "D", "E", "F"]

SAMPLE_EDGES = [
    WorkspaceEdge(id="A-B", source="A", target="B", weight=2),
    WorkspaceEdge(id="B-D", source="B", target="D", weight=1),
    WorkspaceEdge(id="D-F", source="D", target="F", weight=4),
    WorkspaceEdge(id="A-C", source="A", target="C", weight=5),
    WorkspaceEdge(id="B-E", source="B", target="E", weight=3),
    WorkspaceEdge(id="C-E", source="C", target="E", weight=1),
    WorkspaceEdge(id="E-F", source="E", target="F", weight=2),
]

SAMPLE_START = "A"
SAMPLE_END = "F"
