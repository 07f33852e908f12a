"""Display layering of a resolved project graph.

Layer 1 holds the projects nothing references (the top-level consumers). A
project joins the first layer in which every project referencing it has
already been placed, so each layer only depends on layers below it.

Projects inside a reference cycle never become ready and are left out of
every layer. ``find_unplaced`` and ``find_cycles`` report them.
"""

from collections.abc import Iterable, Sequence

from .models import ProjectRecord


def assign_levels(projects: Sequence[ProjectRecord]) -> list[list[ProjectRecord]]:
    """Peel the graph into layers, keeping ``projects`` order within each layer.

    Orphans (no edges at all) are excluded. Stops at the first iteration with
    nothing ready, even if projects remain.
    """
    remaining = [p for p in projects if not p.is_orphan]
    placed: set[str] = set()
    levels: list[list[ProjectRecord]] = []

    while True:
        ready = [p for p in remaining if all(ref in placed for ref in p.referenced_by)]
        if not ready:
            break
        levels.append(ready)
        placed.update(p.canonical_path for p in ready)
        ready_ids = {id(p) for p in ready}
        remaining = [p for p in remaining if id(p) not in ready_ids]

    return levels


def find_unplaced(
    projects: Sequence[ProjectRecord], levels: Iterable[Iterable[ProjectRecord]]
) -> list[ProjectRecord]:
    """Non-orphan projects that ``assign_levels`` could not place."""
    placed_ids = {id(p) for level in levels for p in level}
    return [p for p in projects if not p.is_orphan and id(p) not in placed_ids]


def find_cycles(projects: Sequence[ProjectRecord]) -> list[list[str]]:
    """Reference cycles among ``projects``, as lists of canonical paths.

    A cycle is a strongly connected component of more than one project, or a
    project that references itself.
    """
    nodes = [p.canonical_path for p in projects]
    adjacency = {p.canonical_path: list(p.depends_on) for p in projects}

    cycles: list[list[str]] = []
    for component in tarjan_scc(adjacency, nodes):
        if len(component) > 1:
            cycles.append(component)
        elif component[0] in adjacency.get(component[0], []):
            cycles.append(component)
    return cycles


def tarjan_scc(adjacency: dict[str, list[str]], all_nodes: Sequence[str]) -> list[list[str]]:
    """Tarjan's algorithm for strongly connected components (iterative).

    Uses an explicit call stack to avoid Python recursion limits on deep
    reference chains. Components list their members in discovery order.
    """
    node_set = set(all_nodes)
    counter = 0
    scc_stack: list[str] = []
    on_stack: set[str] = set()
    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    result: list[list[str]] = []

    for root in all_nodes:
        if root in index:
            continue

        # Each frame is (node, neighbor_iterator)
        call_stack: list[tuple] = []
        index[root] = lowlink[root] = counter
        counter += 1
        scc_stack.append(root)
        on_stack.add(root)
        neighbors = [w for w in adjacency.get(root, []) if w in node_set]
        call_stack.append((root, iter(neighbors)))

        while call_stack:
            v, it = call_stack[-1]
            pushed = False
            for w in it:
                if w not in index:
                    index[w] = lowlink[w] = counter
                    counter += 1
                    scc_stack.append(w)
                    on_stack.add(w)
                    w_neighbors = [n for n in adjacency.get(w, []) if n in node_set]
                    call_stack.append((w, iter(w_neighbors)))
                    pushed = True
                    break
                elif w in on_stack:
                    lowlink[v] = min(lowlink[v], index[w])

            if not pushed:
                call_stack.pop()
                if call_stack:
                    caller = call_stack[-1][0]
                    lowlink[caller] = min(lowlink[caller], lowlink[v])

                if lowlink[v] == index[v]:
                    component: list[str] = []
                    while True:
                        w = scc_stack.pop()
                        on_stack.discard(w)
                        component.append(w)
                        if w == v:
                            break
                    component.reverse()
                    result.append(component)

    return result
