"""Tests for the graph traversal engine."""

import random

import pytest

from algoviz.algorithms import get_algorithm
from algoviz.algorithms.traversal import (
    DFSTopologicalSort,
    GraphBFS,
    IterativeDFS,
    KahnTopologicalSort,
    RecursiveDFS,
)
from algoviz.engine import RunRecorder
from algoviz.graph import Graph, NodeState

TOPOLOGICAL = [KahnTopologicalSort, DFSTopologicalSort]


def ids(nodes):
    return [n.id for n in nodes]


def dfs_fingerprint(graph, cls, start, recorder):
    order = cls().traverse(graph, start, recorder)
    return [(n.id, n.discovery_time, n.finish_time, n.parent) for n in order]


def random_graph(seed, directed, n=12, p=0.25):
    rng = random.Random(seed)
    g = Graph(directed=directed)
    node_ids = [f"n{i:02d}" for i in range(n)]
    rng.shuffle(node_ids)
    for node_id in node_ids:
        g.add_node(node_id)
    for a in node_ids:
        for b in node_ids:
            if a != b and rng.random() < p:
                g.add_edge(a, b)
    return g


@pytest.fixture(params=TOPOLOGICAL, ids=lambda cls: cls.key)
def topo(request):
    return request.param()


# --------------------------------------------------------------------------- #
#                                   DFS                                        #
# --------------------------------------------------------------------------- #
class TestDepthFirst:
    def test_sample_visit_order(self, sample_graph, recorder):
        order = RecursiveDFS().traverse(sample_graph, "A", recorder)
        assert ids(order) == ["A", "B", "D", "C", "E", "F"]

    def test_discovery_and_finish_times(self, sample_graph, recorder):
        RecursiveDFS().traverse(sample_graph, "A", recorder)
        times = {n.id: (n.discovery_time, n.finish_time) for n in sample_graph.nodes.values()}
        assert times == {
            "A": (0, 11), "B": (1, 10), "D": (2, 9),
            "C": (3, 8), "E": (4, 7), "F": (5, 6),
        }
        assert all(n.state is NodeState.FINISHED for n in sample_graph.nodes.values())

    @pytest.mark.parametrize("directed", [False, True])
    def test_recursive_and_iterative_agree_on_sample(self, recorder, directed):
        start = "A"
        rec = dfs_fingerprint(Graph.sample(directed), RecursiveDFS, start, recorder)
        it = dfs_fingerprint(Graph.sample(directed), IterativeDFS, start, recorder)
        assert rec == it

    @pytest.mark.parametrize("seed", range(6))
    @pytest.mark.parametrize("directed", [False, True])
    def test_recursive_and_iterative_agree_on_random_graphs(self, recorder, seed, directed):
        graph = random_graph(seed, directed)
        start = graph.node_ids()[0]
        rec = dfs_fingerprint(graph, RecursiveDFS, start, recorder)
        it = dfs_fingerprint(graph, IterativeDFS, start, recorder)
        assert rec == it

    def test_descendants_nest_inside_ancestors(self, sample_graph, recorder):
        IterativeDFS().traverse(sample_graph, "A", recorder)
        nodes = sample_graph.nodes
        for node in nodes.values():
            if node.parent is not None:
                parent = nodes[node.parent]
                assert parent.discovery_time < node.discovery_time < node.finish_time < parent.finish_time

    def test_only_reachable_nodes(self, recorder):
        g = Graph.from_dict({"directed": True, "nodes": ["A", "B", "C"], "edges": [["A", "B"]]})
        assert ids(RecursiveDFS().traverse(g, "A", recorder)) == ["A", "B"]
        assert g.get_node("C").discovery_time == -1

    def test_start_may_be_a_node(self, sample_graph, recorder):
        order = IterativeDFS().traverse(sample_graph, sample_graph.get_node("C"), recorder)
        assert order[0].id == "C"

    @pytest.mark.parametrize("start", [None, "Z"])
    def test_missing_start(self, sample_graph, recorder, start):
        assert RecursiveDFS().traverse(sample_graph, start, recorder) == []
        assert recorder.messages() == ["No starting node specified!"]

    def test_none_graph(self, recorder):
        with pytest.raises(TypeError):
            RecursiveDFS().traverse(None, "A", recorder)


# --------------------------------------------------------------------------- #
#                                   BFS                                        #
# --------------------------------------------------------------------------- #
class TestBreadthFirst:
    def test_sample_visit_order_and_levels(self, sample_graph, recorder):
        order = GraphBFS().traverse(sample_graph, "A", recorder)
        assert ids(order) == ["A", "B", "C", "D", "E", "F"]
        assert {n.id: n.level for n in order} == {"A": 0, "B": 1, "C": 1, "D": 2, "E": 2, "F": 3}

    def test_level_is_parent_level_plus_one(self, recorder):
        graph = random_graph(3, directed=False)
        start = graph.node_ids()[0]
        for node in GraphBFS().traverse(graph, start, recorder):
            if node.parent is None:
                assert node.id == start and node.level == 0
            else:
                assert node.level == graph.get_node(node.parent).level + 1

    def test_steps_carry_visited_so_far(self, sample_graph, recorder):
        GraphBFS().traverse(sample_graph, "A", recorder)
        sizes = [len(s.visited) for s in recorder.steps]
        assert sizes == sorted(sizes)
        assert sizes[-1] == 6
        assert all(s.data is sample_graph for s in recorder.steps)

    def test_shortest_path(self, sample_graph, recorder):
        path = GraphBFS().shortest_path(sample_graph, "A", "F", recorder)
        assert ids(path) == ["A", "B", "D", "F"]
        assert recorder.last_step.message == "Shortest path found! Length: 3 edges"

    def test_shortest_path_unreachable(self, recorder):
        g = Graph.from_dict({"directed": True, "nodes": ["A", "B"], "edges": [["B", "A"]]})
        assert GraphBFS().shortest_path(g, "A", "B", recorder) == []
        assert recorder.last_step.message == "No path exists from A to B"

    def test_shortest_path_missing_endpoint(self, sample_graph, recorder):
        assert GraphBFS().shortest_path(sample_graph, "A", "Q", recorder) == []
        assert recorder.last_step.is_final


# --------------------------------------------------------------------------- #
#                              Topological sort                                #
# --------------------------------------------------------------------------- #
class TestTopological:
    def test_order_respects_every_edge(self, topo, dag, recorder):
        order = topo.traverse(dag, None, recorder)
        assert sorted(ids(order)) == sorted(dag.node_ids())
        position = {n.id: i for i, n in enumerate(order)}
        for edge in dag.edges:
            assert position[edge.source] < position[edge.target]

    def test_kahn_seeds_in_insertion_order(self, dag, recorder):
        order = KahnTopologicalSort().traverse(dag, None, recorder)
        assert ids(order)[:3] == ["shirt", "pants", "socks"]

    def test_cyclic_sample_gives_empty_result(self, topo, recorder):
        assert topo.traverse(Graph.sample(directed=True), None, recorder) == []
        assert recorder.last_step.is_final
        assert "Cycle detected" in recorder.last_step.message

    def test_self_loop_is_a_cycle(self, topo, recorder):
        g = Graph.from_dict({"directed": True, "nodes": ["A"], "edges": [["A", "A"]]})
        assert topo.traverse(g, None, recorder) == []

    def test_undirected_graph_is_rejected(self, topo, sample_graph, recorder):
        assert topo.traverse(sample_graph, "A", recorder) == []
        assert recorder.messages() == ["Topological sort requires a directed graph!"]

    def test_ignores_start(self, topo, dag, recorder):
        assert len(topo.traverse(dag, "tie", recorder)) == dag.node_count()

    def test_random_dags(self, topo, recorder):
        for seed in range(5):
            rng = random.Random(seed)
            g = Graph(directed=True)
            for i in range(10):
                g.add_node(str(i))
            for a in range(10):
                for b in range(a + 1, 10):
                    if rng.random() < 0.3:
                        g.add_edge(str(a), str(b))
            position = {n.id: i for i, n in enumerate(topo.traverse(g, None, recorder))}
            assert len(position) == 10
            assert all(position[e.source] < position[e.target] for e in g.edges)


class TestRegistry:
    @pytest.mark.parametrize("key, cls", [
        ("dfs_recursive", RecursiveDFS), ("dfs_iterative", IterativeDFS), ("bfs", GraphBFS),
        ("topological_kahn", KahnTopologicalSort), ("topological_dfs", DFSTopologicalSort),
    ])
    def test_lookup(self, key, cls):
        algo = get_algorithm("traversal", key)
        assert isinstance(algo, cls)
        assert algo.produces_ordering

    def test_descriptors(self):
        assert RecursiveDFS.space_complexity == "O(V) recursion stack"
        assert IterativeDFS.space_complexity == "O(V) explicit stack"
        assert KahnTopologicalSort.name == "Topological Sort (Kahn's Algorithm)"
        assert DFSTopologicalSort.name == "Topological Sort (DFS-based)"


def chain(n):
    """Directed path n00000 → n00001 → ... of `n` nodes."""
    g = Graph(directed=True)
    node_ids = [f"n{i:05d}" for i in range(n)]
    for node_id in node_ids:
        g.add_node(node_id)
    for a, b in zip(node_ids, node_ids[1:]):
        g.add_edge(a, b)
    return g


class TestLongChains:
    def test_topological_sorts_handle_a_deep_chain(self, topo):
        g = chain(2000)
        recorder = RunRecorder(history=1)
        order = topo.traverse(g, None, recorder)
        assert ids(order) == g.node_ids()
        assert recorder.last_step.is_final

    def test_dfs_topological_keeps_nested_times_on_a_chain(self):
        g = chain(1500)
        DFSTopologicalSort().traverse(g, None, RunRecorder(history=1))
        first, last = g.get_node("n00000"), g.get_node("n01499")
        assert (first.discovery_time, first.finish_time) == (0, 2999)
        assert (last.discovery_time, last.finish_time) == (1499, 1500)

    def test_cycle_at_the_end_of_a_deep_chain(self):
        g = chain(1500)
        g.add_edge("n01499", "n00000")
        recorder = RunRecorder(history=1)
        assert DFSTopologicalSort().traverse(g, None, recorder) == []
        assert recorder.last_step.message.startswith("Cycle detected starting from node n00000!")

    def test_iterative_dfs_walks_a_deep_chain(self):
        g = chain(2000)
        order = IterativeDFS().traverse(g, "n00000", RunRecorder(history=1))
        assert ids(order) == g.node_ids()

    def test_recursive_dfs_refuses_graphs_past_its_limit(self, recorder):
        g = chain(RecursiveDFS.max_nodes + 1)
        assert RecursiveDFS().traverse(g, "n00000", recorder) == []
        assert len(recorder.steps) == 1
        assert recorder.last_step.is_final
        assert "Use iterative DFS instead." in recorder.last_step.message

    def test_recursive_dfs_at_its_limit(self):
        g = chain(RecursiveDFS.max_nodes)
        order = RecursiveDFS().traverse(g, "n00000", RunRecorder(history=1))
        assert ids(order) == g.node_ids()
