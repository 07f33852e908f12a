"""Tests for levels.py - display layering and cycle detection."""

from conftest import make_project

from solution_graph.levels import assign_levels, find_cycles, find_unplaced, tarjan_scc


def _graph(edges, names=None):
    """Linked projects keyed by name from ``{name: [dependency names]}``."""
    names = names or list(edges)
    projects = {}
    for name in names:
        project = make_project(name)
        project.canonical_path = f"/{name}"
        projects[name] = project
    for name, deps in edges.items():
        for dep in deps:
            projects[name].depends_on.append(f"/{dep}")
            projects[dep].referenced_by.append(f"/{name}")
    return projects


def _names(levels):
    return [[p.name for p in level] for level in levels]


class TestAssignLevels:
    def test_chain(self):
        projects = _graph({"A": ["B"], "B": ["C"], "C": []})
        assert _names(assign_levels(list(projects.values()))) == [["A"], ["B"], ["C"]]

    def test_diamond(self):
        projects = _graph({"App": ["Svc", "Data"], "Svc": ["Data"], "Data": []})
        levels = assign_levels(list(projects.values()))
        assert _names(levels) == [["App"], ["Svc"], ["Data"]]

    def test_siblings_share_a_level_in_input_order(self):
        projects = _graph({"X": ["Core"], "A": ["Core"], "Core": []})
        assert _names(assign_levels(list(projects.values()))) == [["X", "A"], ["Core"]]

    def test_orphans_excluded(self):
        projects = _graph({"A": ["B"], "B": [], "Lonely": []})
        levels = assign_levels(list(projects.values()))
        assert all(p.name != "Lonely" for level in levels for p in level)

    def test_empty(self):
        assert assign_levels([]) == []

    def test_cycle_truncates(self):
        projects = _graph({"A": ["B"], "B": ["A"]})
        assert assign_levels(list(projects.values())) == []

    def test_projects_below_cycle_dropped(self):
        projects = _graph({"Top": ["A"], "A": ["B"], "B": ["A", "Leaf"], "Leaf": []})
        assert _names(assign_levels(list(projects.values()))) == [["Top"]]

    def test_edge_to_unknown_path_only(self):
        # Depends on something outside the solution: placed, not an orphan
        project = make_project("A")
        project.canonical_path = "/A"
        project.depends_on = ["/elsewhere"]
        assert _names(assign_levels([project])) == [["A"]]

    def test_monotonic(self):
        projects = _graph(
            {"A": ["B", "D"], "B": ["C"], "C": ["D"], "D": [], "E": ["C"]}
        )
        levels = assign_levels(list(projects.values()))
        level_of = {p.canonical_path: i for i, level in enumerate(levels) for p in level}
        for level_index, level in enumerate(levels):
            for p in level:
                assert all(level_of[ref] < level_index for ref in p.referenced_by)


class TestFindUnplaced:
    def test_reports_cycle_and_below(self):
        projects = _graph({"Top": ["A"], "A": ["B"], "B": ["A", "Leaf"], "Leaf": [], "O": []})
        values = list(projects.values())
        unplaced = find_unplaced(values, assign_levels(values))
        assert [p.name for p in unplaced] == ["A", "B", "Leaf"]

    def test_nothing_unplaced_in_dag(self):
        projects = _graph({"A": ["B"], "B": []})
        values = list(projects.values())
        assert find_unplaced(values, assign_levels(values)) == []


class TestFindCycles:
    def test_two_cycle(self):
        projects = _graph({"A": ["B"], "B": ["A"]})
        cycles = find_cycles(list(projects.values()))
        assert len(cycles) == 1
        assert set(cycles[0]) == {"/A", "/B"}

    def test_self_reference(self):
        projects = _graph({"A": ["A"]})
        assert find_cycles(list(projects.values())) == [["/A"]]

    def test_acyclic_members_excluded(self):
        projects = _graph({"A": ["B"], "B": ["A", "Leaf"], "Leaf": []})
        cycles = find_cycles(list(projects.values()))
        assert len(cycles) == 1
        assert "/Leaf" not in cycles[0]

    def test_no_cycles(self):
        projects = _graph({"A": ["B"], "B": []})
        assert find_cycles(list(projects.values())) == []


class TestTarjanSCC:
    def test_triangle(self):
        adj = {"a": ["b"], "b": ["c"], "c": ["a"]}
        sccs = tarjan_scc(adj, ["a", "b", "c"])
        assert [set(s) for s in sccs] == [{"a", "b", "c"}]

    def test_edges_outside_nodes_ignored(self):
        sccs = tarjan_scc({"a": ["zzz"]}, ["a"])
        assert sccs == [["a"]]

    def test_deep_chain_no_recursion_error(self):
        n = 5000
        nodes = [str(i) for i in range(n)]
        adj = {str(i): [str(i + 1)] for i in range(n - 1)}
        assert len(tarjan_scc(adj, nodes)) == n
