import asyncio

import pytest
from fastapi import HTTPException
from graphpath.models import *
from graphpath.helpers import (
    add_edge, add_node, find_edge, load_sample_graph, normalize_node_id,
    remove_node, set_endpoints, workspace_shortest_path,
)
from graphpath.main import (
    add_edge_route, add_node_route, get_events, remove_edge_route,
    remove_node_route, set_endpoints_route,
)

# -----------------------------
# Workspace helpers
# -----------------------------

def test_normalize_node_id():
    assert normalize_node_id("  a ") == "A"
    assert normalize_node_id("   ") == ""

def test_load_sample_graph():
    load_sample_graph()
    assert [n.id for n in STATE["nodes"]] == SAMPLE_NODES
    assert [e.id for e in STATE["edges"]] == [e.id for e in SAMPLE_EDGES]
    assert (STATE["start"], STATE["end"]) == ("A", "F")

def test_sample_edges_are_copied():
    load_sample_graph()
    STATE["edges"][0].weight = 100
    assert SAMPLE_EDGES[0].weight == 2

def test_workspace_shortest_path_on_sample():
    load_sample_graph()
    res = workspace_shortest_path()
    assert res.distance == 7
    assert res.path[0] == "A" and res.path[-1] == "F"
    assert len(res.path_edges) == len(res.path) - 1
    assert res.path_edges[0] == "A-B"

def test_workspace_shortest_path_needs_endpoints_and_edges():
    add_node("A")
    add_node("B")
    set_endpoints("A", "B")
    res = workspace_shortest_path()
    assert res.path == [] and res.distance is None

    add_edge("A", "B", 3)
    set_endpoints("A", "")
    res = workspace_shortest_path()
    assert res.path == [] and res.distance is None

def test_workspace_shortest_path_unreachable():
    for n in "ABCD":
        add_node(n)
    add_edge("A", "B", 1)
    add_edge("C", "D", 1)
    set_endpoints("A", "D")
    res = workspace_shortest_path()
    assert res.path == [] and res.distance is None and res.path_edges == []

def test_isolated_node_is_not_routable():
    # a node without edges never reaches the engine's adjacency
    add_node("A")
    add_node("B")
    add_node("C")
    add_edge("A", "B", 1)
    set_endpoints("C", "C")
    assert workspace_shortest_path().path == []

def test_remove_node_cascades():
    load_sample_graph()
    dropped = remove_node("B")
    assert sorted(e.id for e in dropped) == ["A-B", "B-D", "B-E"]
    assert all("B" not in (e.source, e.target) for e in STATE["edges"])
    assert find_edge("A", "B") is None
    assert STATE["start"] == "A"

def test_remove_node_clears_selection():
    load_sample_graph()
    remove_node("F")
    assert STATE["end"] == ""
    assert workspace_shortest_path().distance is None

def test_find_edge_either_direction():
    add_node("A")
    add_node("B")
    edge = add_edge("A", "B", 1)
    assert find_edge("B", "A") == edge

def test_mutations_are_logged():
    add_node("A")
    add_node("B")
    add_edge("A", "B", 2)
    remove_node("A")
    assert [e.type for e in STATE["events"]] == ["node_added", "node_added", "edge_added", "node_removed"]
    assert STATE["events"][-1].detail == {"node": "A", "edges": ["A-B"]}
    assert STATE["events"][0].time.endswith("Z")

# -----------------------------
# Route handlers
# -----------------------------

def test_add_node_route_normalizes():
    node = asyncio.run(add_node_route(AddNodeRequest(label=" x ")))
    assert node.id == "X"

def test_add_node_route_rejects_empty_and_duplicate():
    asyncio.run(add_node_route(AddNodeRequest(label="a")))
    with pytest.raises(HTTPException) as exc:
        asyncio.run(add_node_route(AddNodeRequest(label="A")))
    assert exc.value.status_code == 409
    with pytest.raises(HTTPException) as exc:
        asyncio.run(add_node_route(AddNodeRequest(label="  ")))
    assert exc.value.status_code == 400

def test_add_edge_route_validation():
    load_sample_graph()
    cases = [
        (AddEdgeRequest(source="A", target="D", weight=-1), 400),
        (AddEdgeRequest(source="A", target="D", weight=float("nan")), 400),
        (AddEdgeRequest(source="A", target="Z", weight=1), 400),
        (AddEdgeRequest(source="b", target="a", weight=1), 409),  # reverse of A-B
    ]
    for req, status in cases:
        with pytest.raises(HTTPException) as exc:
            asyncio.run(add_edge_route(req))
        assert exc.value.status_code == status

def test_add_edge_route_lowers_distance():
    load_sample_graph()
    edge = asyncio.run(add_edge_route(AddEdgeRequest(source="a", target="f", weight=1)))
    assert edge.id == "A-F"
    res = workspace_shortest_path()
    assert res.path == ["A", "F"]
    assert res.distance == 1
    assert res.path_edges == ["A-F"]

def test_remove_routes_404():
    with pytest.raises(HTTPException) as exc:
        asyncio.run(remove_node_route("Q"))
    assert exc.value.status_code == 404
    with pytest.raises(HTTPException) as exc:
        asyncio.run(remove_edge_route("A-Q"))
    assert exc.value.status_code == 404

def test_remove_edge_route_reroutes():
    load_sample_graph()
    graph = asyncio.run(remove_edge_route("E-F"))
    assert "E-F" not in [e.id for e in graph.edges]
    res = workspace_shortest_path()
    assert res.path == ["A", "B", "D", "F"]
    assert res.distance == 7

def test_set_endpoints_route():
    load_sample_graph()
    res = asyncio.run(set_endpoints_route(SetEndpointsRequest(start="c", end="d")))
    assert res.path == ["C", "E", "B", "D"]
    assert res.distance == 5
    with pytest.raises(HTTPException) as exc:
        asyncio.run(set_endpoints_route(SetEndpointsRequest(start="A", end="Z")))
    assert exc.value.status_code == 400
    res = asyncio.run(set_endpoints_route(SetEndpointsRequest()))
    assert res.start == "" and res.path == []

def test_get_events_limit_and_since():
    add_node("A")
    add_node("B")
    add_node("C")
    events = asyncio.run(get_events(limit=2))
    assert [e.detail["node"] for e in events] == ["C", "B"]
    assert asyncio.run(get_events(limit=0)) == []
    assert asyncio.run(get_events(since="2000-01-01T00:00:00Z"))[-1].detail["node"] == "A"
    assert asyncio.run(get_events(since="2999-01-01T00:00:00")) == []
    with pytest.raises(HTTPException) as exc:
        asyncio.run(get_events(since="yesterday"))
    assert exc.value.status_code == 400
