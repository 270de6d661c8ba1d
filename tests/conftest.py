import pytest

from slabs.slabs.data.snapshot import parse_snapshot
from slabs.slabs.settle.settler import settle


EXAMPLE = """\
1,0,1~1,2,1
0,0,2~2,0,2
0,2,3~2,2,3
0,0,4~0,2,4
2,0,5~2,2,5
0,1,6~2,1,6
1,1,8~1,1,9
"""


@pytest.fixture
def example_text():
    return EXAMPLE


@pytest.fixture
def example_bricks():
    """Canonical 7-brick stack, bricks A-G in input order."""
    return parse_snapshot(EXAMPLE)


@pytest.fixture
def example_graph(example_bricks):
    return settle(example_bricks)
