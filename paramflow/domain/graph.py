"""
Dependency Graph - Cycle Detection

Walks the `requires` edges of a field spec and reports every cycle found.
An edge A -> B exists when B appears in A's requires list.
"""

from typing import Dict, Iterable, List, Mapping, Set, Tuple


def detect_requires_cycles(requires_map: Mapping[str, Iterable[str]]) -> List[List[str]]:
    """
    Returns every distinct cycle in the requires graph.

    Depth-first search runs from each node in declaration order while keeping
    the current recursion path. Reaching a node that is still on the path
    closes a cycle: the slice of the path from that node to the current one.
    Names that are referenced but not declared are treated as leaves.

    Args:
        requires_map: field name -> names of the fields it requires.

    Returns:
        A list of cycles, each a list of field names in traversal order.
        Empty when the graph is acyclic.
    """
    graph: Dict[str, List[str]] = {name: list(deps) for name, deps in requires_map.items()}
    visited: Set[str] = set()
    on_stack: Set[str] = set()
    cycles: List[List[str]] = []
    seen: Set[Tuple[str, ...]] = set()

    def visit(node: str, path: List[str]) -> None:
        if node in on_stack:
            cycle = path[path.index(node):]
            key = _canonical(cycle)
            if key not in seen:
                seen.add(key)
                cycles.append(cycle)
            return

        if node in visited:
            return

        visited.add(node)
        on_stack.add(node)
        path.append(node)

        for neighbor in graph.get(node, []):
            visit(neighbor, path)

        path.pop()
        on_stack.discard(node)

    for name in graph:
        visit(name, [])

    return cycles


def _canonical(cycle: List[str]) -> Tuple[str, ...]:
    # Rotate so the smallest name leads; the same loop entered elsewhere compares equal.
    pivot = cycle.index(min(cycle))
    return tuple(cycle[pivot:] + cycle[:pivot])
