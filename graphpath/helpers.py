from typing import List, Optional
from datetime import datetime, timezone

from graphpath.models import *
from graphpath.algo_funcs import compute_shortest_path, path_edge_ids

# node ids
def normalize_node_id(label: str) -> str:
    return label.strip().upper()

def find_node(node_id: str) -> Optional[Node]:
    return next((n for n in STATE["nodes"] if n.id == node_id), None)

def find_edge(source: str, target: str) -> Optional[WorkspaceEdge]:
    """Existing edge joining source and target, in either direction."""
    return next((e for e in STATE["edges"] if
                 (e.source == source and e.target == target) or
                 (e.source == target and e.target == source)), None)

# workspace editing
def add_node(node_id: str) -> Node:
    node = Node(id=node_id, label=node_id)
    STATE["nodes"].append(node)
    log_event("node_added", {"node": node.id})
    return node

def add_edge(source: str, target: str, weight: float) -> WorkspaceEdge:
    edge = WorkspaceEdge(id=f"{source}-{target}", source=source, target=target, weight=weight)
    STATE["edges"].append(edge)
    log_event("edge_added", {"edge": edge.id, "weight": edge.weight})
    return edge

def remove_node(node_id: str) -> List[WorkspaceEdge]:
    """
    - removes the node and every edge touching it
    - clears the start/end selection if it pointed at the node
    - returns the edges removed along with the node
    """
    STATE["nodes"] = [n for n in STATE["nodes"] if n.id != node_id]
    dropped = [e for e in STATE["edges"] if node_id in (e.source, e.target)]
    STATE["edges"] = [e for e in STATE["edges"] if node_id not in (e.source, e.target)]
    if STATE["start"] == node_id:
        STATE["start"] = ""
    if STATE["end"] == node_id:
        STATE["end"] = ""
    log_event("node_removed", {"node": node_id, "edges": [e.id for e in dropped]})
    return dropped

def remove_edge(edge_id: str) -> None:
    STATE["edges"] = [e for e in STATE["edges"] if e.id != edge_id]
    log_event("edge_removed", {"edge": edge_id})

def set_endpoints(start: str, end: str) -> None:
    STATE["start"] = start
    STATE["end"] = end
    log_event("endpoints_set", {"start": start, "end": end})

def load_sample_graph() -> None:
    STATE["nodes"] = [Node(id=n, label=n) for n in SAMPLE_NODES]
    STATE["edges"] = [e.model_copy() for e in SAMPLE_EDGES]
    STATE["start"] = SAMPLE_START
    STATE["end"] = SAMPLE_END
    log_event("sample_loaded", {"nodes": len(STATE["nodes"]), "edges": len(STATE["edges"])})

# path finding over the workspace
def workspace_shortest_path() -> WorkspacePathResponse:
    """Empty path and no distance unless start, end and some edge are all present."""
    start, end, edges = STATE["start"], STATE["end"], STATE["edges"]
    response = WorkspacePathResponse(start=start, end=end)
    if not start or not end or not edges:
        return response

    result = compute_shortest_path([e.as_edge() for e in edges], start, end)
    if result is None:
        return response

    response.path = result.path
    response.distance = result.distance
    response.path_edges = path_edge_ids(result.path, edges)
    return response

# logger
def log_event(type_: str, detail: dict):
    now = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    STATE["events"].append(Event(time=now, type=type_, detail=detail))
