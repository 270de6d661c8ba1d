"""
Unit tests for the read-only support graph.
"""

import pytest

from slabs.slabs.data.snapshot import parse_brick_line as B
from slabs.slabs.models.support import SupportGraph


A, TOP, SIDE = B("0,0,1~2,0,1"), B("1,0,2~1,0,2"), B("5,5,1~5,5,1")


@pytest.fixture
def small_graph():
    return SupportGraph({A: set(), TOP: {A}, SIDE: set()})


class TestSupportGraph:
    def test_supporters_are_frozen(self, small_graph):
        assert isinstance(small_graph.supporters_of(TOP), frozenset)

    def test_mapping_is_read_only(self, small_graph):
        with pytest.raises(TypeError):
            small_graph.supporters[TOP] = frozenset()

    def test_source_dict_is_copied(self):
        src = {A: set(), TOP: {A}}
        g = SupportGraph(src)
        src[SIDE] = set()
        assert SIDE not in g

    def test_dependents(self, small_graph):
        assert small_graph.dependents_of(A) == {TOP}
        assert small_graph.dependents_of(TOP) == frozenset()

    def test_ground_bricks_lowest_first(self, small_graph):
        assert set(small_graph.ground_bricks()) == {A, SIDE}

    def test_len_iter_contains(self, small_graph):
        assert len(small_graph) == 3
        assert set(small_graph) == {A, TOP, SIDE}
        assert TOP in small_graph
        assert B("9,9,9~9,9,9") not in small_graph

    def test_unknown_brick(self, small_graph):
        with pytest.raises(KeyError):
            small_graph.supporters_of(B("9,9,9~9,9,9"))

    def test_supporter_must_be_settled(self):
        with pytest.raises(KeyError):
            SupportGraph({TOP: {A}})

    def test_equality(self, small_graph):
        same = SupportGraph({SIDE: set(), TOP: {A}, A: set()})
        assert same == small_graph
        assert hash(same) == hash(small_graph)

    def test_bricks_sorted_by_height(self, example_graph):
        zs = [b.z_min for b in example_graph.bricks]
        assert zs == sorted(zs)
