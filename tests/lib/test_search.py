import pytest

from fxgraph.lib.graph import LabeledDiGraph
from fxgraph.lib.path import InvalidEdgeWeightError, Path
from fxgraph.lib.rates import FixedRate
from fxgraph.lib.search import CostOrder, search_path


class TestSearchPath:
    def test_mock_web_usd_to_rmb(self, mock_web):
        path = search_path(
            mock_web.graph, mock_web.reference_source, "USD", "RMB"
        )
        assert path is not None
        assert path.nodes_seq == ("USD", "YEN", "RMB")
        assert path.start == "USD"
        assert path.end == "RMB"
        assert path.rate == pytest.approx(107.0 * 0.066)
        assert path.cost - 1 == pytest.approx(107.0 * 0.066 * 0.14 - 1, abs=1e-9)

    def test_mock_web_rmb_to_usd(self, mock_web):
        path = search_path(
            mock_web.graph, mock_web.reference_source, "RMB", "USD"
        )
        assert path is not None
        assert path.nodes_seq == ("RMB", "YEN", "USD")
        # Seeded by 1 / 0.14; mock pairs other than USD/YEN and YEN/RMB quote 1
        assert path.cost == pytest.approx(1 / 0.14)

    def test_self_path(self, mock_web):
        path = search_path(
            mock_web.graph, mock_web.reference_source, "USD", "USD"
        )
        assert path is not None
        assert path.end == path.start == "USD"
        assert list(path) == []
        assert path.cost == 1.0

    def test_start_hops_skip_identity_segment(self, mock_web):
        """Edges leaving the start node extend the zero-length start path."""
        path = search_path(
            mock_web.graph, mock_web.reference_source, "USD", "YEN"
        )
        assert path is not None
        assert [(s.start, s.end) for s in path] == [("USD", "YEN")]
        assert path.cost == pytest.approx(107.0 * 0.0094)

    def test_disconnected_returns_none(self, mock_web):
        mock_web.graph.add_node("EUR")
        assert (
            search_path(mock_web.graph, mock_web.reference_source, "USD", "EUR")
            is None
        )

    def test_unreachable_against_edge_direction(self, graph_factory):
        g, ref = graph_factory([("A", "B", 1.0), ("B", "C", 1.0)])
        assert search_path(g, ref.__getitem__, "C", "A") is None
        assert search_path(g, ref.__getitem__, "A", "C") is not None

    def test_node_without_edges(self):
        g = LabeledDiGraph()
        g.add_node("A")
        g.add_node("B")
        ref = {"A": FixedRate(1.0), "B": FixedRate(1.0)}
        assert search_path(g, ref.__getitem__, "A", "B") is None

    @pytest.mark.parametrize("start,dest", [("X", "A"), ("A", "X"), ("X", "Y")])
    def test_unknown_endpoints(self, graph_factory, start, dest):
        g, ref = graph_factory([("A", "B", 1.0)])
        with pytest.raises(ValueError, match="does not exist"):
            search_path(g, ref.__getitem__, start, dest)

    def test_first_pop_wins(self, greedy_trap):
        """The greedy search returns the first path popped at the destination."""
        g, ref = greedy_trap
        path = search_path(g, ref.__getitem__, "S", "D")
        assert path is not None
        assert path.nodes_seq == ("S", "A", "D")
        assert path.cost == pytest.approx(1.8)

    def test_picks_most_profitable_branch(self, graph_factory):
        g, ref = graph_factory(
            [
                ("S", "A", 2.0),
                ("S", "B", 0.5),
                ("A", "D", 1.0),
                ("B", "D", 1.0),
            ]
        )
        path = search_path(g, ref.__getitem__, "S", "D")
        assert path.nodes_seq == ("S", "A", "D")
        assert path.cost == pytest.approx(2.0)

    def test_minimize_cost_order(self, graph_factory):
        g, ref = graph_factory(
            [
                ("S", "A", 2.0),
                ("S", "B", 0.5),
                ("A", "D", 1.0),
                ("B", "D", 1.0),
            ]
        )
        path = search_path(
            g, ref.__getitem__, "S", "D", order=CostOrder.MINIMIZE_COST
        )
        assert path.nodes_seq == ("S", "B", "D")
        assert path.cost == pytest.approx(0.5)

    def test_ties_follow_insertion_order(self, graph_factory):
        g, ref = graph_factory(
            [
                ("S", "A", 1.0),
                ("S", "B", 1.0),
                ("A", "D", 1.0),
                ("B", "D", 1.0),
            ]
        )
        path = search_path(g, ref.__getitem__, "S", "D")
        assert path.nodes_seq == ("S", "A", "D")

    def test_reference_rates_rescale_cost(self, graph_factory):
        g, ref = graph_factory(
            [("S", "D", 3.0), ("S", "M", 1.0), ("M", "D", 2.0)],
            reference={"S": 1.0, "M": 5.0, "D": 0.5},
        )
        path = search_path(g, ref.__getitem__, "S", "D")
        # M (cost 5) is expanded first, but S->D (1.5) outranks M->D (1.0)
        assert path.nodes_seq == ("S", "D")
        assert path.cost == pytest.approx(1.5)

    def test_start_priced_by_reference(self, graph_factory):
        g, ref = graph_factory(
            [("S", "D", 4.0)], reference={"S": 0.5, "D": 0.25}
        )
        path = search_path(g, ref.__getitem__, "S", "D")
        # rate = (1 / 0.5) * 4.0, cost = rate * 0.25
        assert path.rate == pytest.approx(8.0)
        assert path.cost == pytest.approx(2.0)

    def test_finished_nodes_not_reexpanded(self, graph_factory):
        calls = []

        class CountingRate(FixedRate):
            def rate(self):
                calls.append((self.value, self.reference))
                return super().rate()

        g = LabeledDiGraph()
        for n in "SABD":
            g.add_node(n)
        g.connect_nodes("S", "A", CountingRate(1.0))
        g.connect_nodes("S", "B", CountingRate(0.9))
        g.connect_nodes("A", "B", CountingRate(0.8))
        g.connect_nodes("B", "A", CountingRate(0.7))
        g.connect_nodes("B", "D", CountingRate(0.6))
        ref = {n: FixedRate(1.0) for n in "SABD"}

        path = search_path(g, ref.__getitem__, "S", "D")
        assert path.nodes_seq == ("S", "B", "D")
        # B->A is never traversed: A is finished before B is popped
        assert (0.7, 1.0) not in calls

    def test_non_finite_edge_rate_propagates(self, graph_factory):
        g, ref = graph_factory([("A", "B", 1.0)])
        g.add_node("C")
        g.connect_nodes("B", "C", FixedRate(float("inf")))
        with pytest.raises(InvalidEdgeWeightError):
            search_path(g, ref.__getitem__, "A", "C")

    def test_returns_path_instance(self, graph_factory):
        g, ref = graph_factory([("A", "B", 1.0)])
        assert isinstance(search_path(g, ref.__getitem__, "A", "B"), Path)


class TestCostOrder:
    def test_from_string(self):
        assert CostOrder.from_string("minimize_cost") is CostOrder.MINIMIZE_COST
        assert CostOrder.from_string("MAXIMIZE_COST") is CostOrder.MAXIMIZE_COST

    def test_from_string_invalid(self):
        with pytest.raises(ValueError, match="Valid values are"):
            CostOrder.from_string("sideways")
