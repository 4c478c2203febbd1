from typing import Callable, Dict, Iterable, List, Optional
import heapq
import math

from graphpath.models import Edge, ShortestPathResult, WorkspaceEdge

Adjacency = Dict[str, Dict[str, float]]

# -----------------------------
# Graph construction
# -----------------------------

def build_adjacency(edges: Iterable[Edge]) -> Adjacency:
    """
    Undirected adjacency map built in one pass over the edge list.
    - nodes are keyed in order of first appearance (from before to)
    - a repeated pair keeps the last weight seen, per direction
    - self-loops are stored as self-neighbors
    """
    adj: Adjacency = {}
    for e in edges:
        adj.setdefault(e.from_, {})
        adj.setdefault(e.to, {})
        adj[e.from_][e.to] = e.weight
        adj[e.to][e.from_] = e.weight  # bidirectional
    return adj

# -----------------------------
# Frontier selection
# -----------------------------

def _scan_frontier(adj: Adjacency, dist: Dict[str, float]):
    unsettled = dict.fromkeys(adj)

    def pop_min() -> Optional[str]:
        current, best = None, math.inf
        for node in unsettled:
            if dist[node] < best:
                current, best = node, dist[node]
        if current is not None:
            del unsettled[current]
        return current

    def push(node: str) -> None:
        pass  # every unsettled node is scanned anyway

    return pop_min, push, unsettled.__contains__


def _heap_frontier(adj: Adjacency, dist: Dict[str, float]):
    order = {node: i for i, node in enumerate(adj)}
    settled = set()
    heap = [(d, order[n], n) for n, d in dist.items() if d < math.inf]
    heapq.heapify(heap)

    def pop_min() -> Optional[str]:
        while heap:
            d, _, node = heapq.heappop(heap)
            # skip outdated entries
            if node in settled or d > dist[node]:
                continue
            settled.add(node)
            return node
        return None

    def push(node: str) -> None:
        heapq.heappush(heap, (dist[node], order[node], node))

    return pop_min, push, lambda node: node not in settled


_FRONTIERS: Dict[str, Callable] = {"scan": _scan_frontier, "heap": _heap_frontier}

# -----------------------------
# Pathfinding
# -----------------------------

def compute_shortest_path(
    edges: Iterable[Edge], start: str, end: str, _frontier: str = "scan"
) -> Optional[ShortestPathResult]:
    """
    Dijkstra from start to end over an undirected weighted edge list.

    Returns None when either node is absent from the edges or when end is
    unreachable. Ties between equally distant frontier nodes go to the node
    that first appeared in the edge list. Weights are used as given; a
    negative weight yields a result that may not be minimal.
    """
    adj = build_adjacency(edges)
    if start not in adj or end not in adj:
        return None

    if start == end:
        return ShortestPathResult(path=[start], distance=0)

    dist = {node: math.inf for node in adj}
    prev: Dict[str, Optional[str]] = {node: None for node in adj}
    dist[start] = 0.0

    pop_min, push, is_unsettled = _FRONTIERS[_frontier](adj, dist)
    while True:
        node = pop_min()
        # nothing reachable is left, or the target is settled
        if node is None or node == end:
            break
        for nbr, w in adj[node].items():
            if is_unsettled(nbr):
                alt = dist[node] + w
                if alt < dist[nbr]:  # strict: ties keep the first predecessor
                    dist[nbr] = alt
                    prev[nbr] = node
                    push(nbr)

    if prev[end] is None:
        return None

    path: List[str] = []
    current: Optional[str] = end
    while current is not None:
        path.append(current)
        current = prev[current]
    path.reverse()

    distance = dist[end]
    if distance == math.inf or not path:
        return None
    return ShortestPathResult(path=path, distance=distance)


def path_edge_ids(path: List[str], edges: Iterable[WorkspaceEdge]) -> List[str]:
    """Ids of the edges that join consecutive path nodes, in either direction."""
    steps = set()
    for a, b in zip(path, path[1:]):
        steps.add((a, b))
        steps.add((b, a))
    return [e.id for e in edges if (e.source, e.target) in steps]
