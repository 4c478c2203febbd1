import math
from datetime import datetime, timezone
from typing import List, Optional
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from graphpath.models import *
from graphpath.helpers import *
from graphpath.algo_funcs import compute_shortest_path
# -----------------------------
# App Setup
# -----------------------------

CORS_ORIGINS = [
    "http://localhost:5173",  # Vite default
    "http://localhost:3000",  # CRA/Next.js
]

HOST = "0.0.0.0"
PORT = 8000

app = FastAPI(
    title="Graph Shortest Path API",
    version="0.1.0",
    description=(
        "Shortest paths over small weighted undirected graphs.\n\n"
        "Stateless: /computeShortestPath. Editable workspace: /getGraph, /addNode, "
        "/addEdge, /removeNode, /removeEdge, /setEndpoints, /loadSample, /shortestPath.\n"
        "State is in-memory and resets on restart."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------
# Lifecycle
# -----------------------------

@app.on_event("startup")
async def seed_state() -> None:
    # Seed only once per process start
    load_sample_graph()

# -----------------------------
# Endpoints
# -----------------------------

@app.get("/healthz")
async def healthz():
    return {"ok": True}

@app.get("/events", response_model=List[Event])
async def get_events(limit: Optional[int] = None, since: Optional[str] = None):
    """
    Retrieve events, optionally limited and filtered by a 'since' timestamp (ISO 8601).
    """
    events = STATE.get("events", [])

    if since is not None:
        try:
            since_dt = datetime.fromisoformat(since.replace("Z", "+00:00"))
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid ISO 8601 timestamp for 'since'")
        if since_dt.tzinfo is None:
            since_dt = since_dt.replace(tzinfo=timezone.utc)

        events = [e for e in events
                  if datetime.fromisoformat(e.time.replace("Z", "+00:00")) > since_dt]

    if limit is not None:
        events = events[-limit:] if limit > 0 else []

    return events[::-1]

@app.post("/computeShortestPath", response_model=Optional[ShortestPathResult], tags=["paths"])
async def compute_path(req: ComputePathRequest) -> Optional[ShortestPathResult]:
    # Unknown nodes and disconnected endpoints both come back as null
    return compute_shortest_path(req.edges, req.start, req.end)

@app.get("/getGraph", response_model=GraphResponse, tags=["graph"])
async def get_graph() -> GraphResponse:
    return GraphResponse(nodes=STATE["nodes"], edges=STATE["edges"], start=STATE["start"], end=STATE["end"])

@app.post("/addNode", response_model=Node, tags=["graph"])
async def add_node_route(req: AddNodeRequest) -> Node:
    node_id = normalize_node_id(req.label)
    if not node_id:
        raise HTTPException(status_code=400, detail="Node label must not be empty")
    if find_node(node_id) is not None:
        raise HTTPException(status_code=409, detail=f"Node {node_id} already exists")
    return add_node(node_id)

@app.post("/addEdge", response_model=WorkspaceEdge, tags=["graph"])
async def add_edge_route(req: AddEdgeRequest) -> WorkspaceEdge:
    source = normalize_node_id(req.source)
    target = normalize_node_id(req.target)

    if math.isnan(req.weight) or req.weight < 0:
        raise HTTPException(status_code=400, detail="Weight must be a non-negative number")
    if find_node(source) is None or find_node(target) is None:
        raise HTTPException(status_code=400, detail="source/target must be existing nodes")
    if find_edge(source, target) is not None:
        raise HTTPException(status_code=409, detail=f"An edge between {source} and {target} already exists")

    return add_edge(source, target, req.weight)

@app.delete("/removeNode/{node_id}", response_model=GraphResponse, tags=["graph"])
async def remove_node_route(node_id: str) -> GraphResponse:
    node_id = normalize_node_id(node_id)
    if find_node(node_id) is None:
        raise HTTPException(status_code=404, detail=f"Node {node_id} not found")
    remove_node(node_id)
    return await get_graph()

@app.delete("/removeEdge/{edge_id}", response_model=GraphResponse, tags=["graph"])
async def remove_edge_route(edge_id: str) -> GraphResponse:
    if not any(e.id == edge_id for e in STATE["edges"]):
        raise HTTPException(status_code=404, detail=f"Edge {edge_id} not found")
    remove_edge(edge_id)
    return await get_graph()

@app.post("/setEndpoints", response_model=WorkspacePathResponse, tags=["paths"])
async def set_endpoints_route(req: SetEndpointsRequest) -> WorkspacePathResponse:
    start = normalize_node_id(req.start)
    end = normalize_node_id(req.end)
    for node_id in (start, end):
        # empty clears the selection
        if node_id and find_node(node_id) is None:
            raise HTTPException(status_code=400, detail=f"Node {node_id} not found")
    set_endpoints(start, end)
    return workspace_shortest_path()

@app.post("/loadSample", response_model=GraphResponse, tags=["graph"])
async def load_sample() -> GraphResponse:
    load_sample_graph()
    return await get_graph()

@app.get("/shortestPath", response_model=WorkspacePathResponse, tags=["paths"])
async def shortest_path() -> WorkspacePathResponse:
    return workspace_shortest_path()

# -----------------------------
# Run (if executed directly)
# -----------------------------

# Use: uvicorn graphpath.main:app --reload // or python -m graphpath.main
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "graphpath.main:app",
        host=HOST,
        port=PORT,
        reload=True,
    )
