from vedo import Plotter, Box as VedoBox, Text3D

from typing import Any, Dict, List, Optional, Tuple

from slabs.slabs.models.geometry import Brick
from slabs.slabs.models.support import SupportGraph
from slabs.configurations import FLOOR_Z


palette = [
    'lightgray', 'yellowgreen', 'yellow', 'gold', 'orange', 'darkorange', 'tomato', 'indianred',
    'red', 'firebrick', 'darkred', 'darkviolet', 'indigo', 'midnightblue', 'black',
]


def chain_color(count: int) -> str:
    """Safe bricks (count 0) are gray; the more a brick brings down, the darker."""
    return palette[min(max(count, 0), len(palette) - 1)]


def brick_box_params(brick: Brick) -> Tuple[Tuple[float, float, float], float, float, float]:
    """Center and edge lengths of the cells a brick covers (cell i spans [i, i+1))."""
    L = float(brick.x_max - brick.x_min + 1)
    W = float(brick.y_max - brick.y_min + 1)
    H = float(brick.z_max - brick.z_min + 1)
    pos = (brick.x_min + L / 2, brick.y_min + W / 2, brick.z_min + H / 2)
    return pos, L, W, H


def _footprint(graph: SupportGraph) -> Tuple[int, int, int, int]:
    xs0 = [b.x_min for b in graph]
    ys0 = [b.y_min for b in graph]
    xs1 = [b.x_max + 1 for b in graph]
    ys1 = [b.y_max + 1 for b in graph]
    return min(xs0, default=0), min(ys0, default=0), max(xs1, default=1), max(ys1, default=1)


def build_stack_actors(
    graph: SupportGraph,
    chain_counts: Optional[Dict[Brick, int]] = None,
    show_labels: bool = False,
    alpha: float = 0.85,
    floor_z: int = FLOOR_Z,
) -> List[Any]:
    """
    One vedo box per settled brick plus a thin ground slab under the stack.
    Without chain counts every brick is drawn in the neutral color.
    """
    actors: List[Any] = []

    x0, y0, x1, y1 = _footprint(graph)
    actors.append(
        VedoBox(pos=((x0 + x1) / 2, (y0 + y1) / 2, floor_z + 0.5),
                length=x1 - x0, width=y1 - y0, height=1.0).alpha(0.25).c("sienna")
    )

    for idx, b in enumerate(graph.bricks):
        count = chain_counts.get(b, 0) if chain_counts else 0
        pos, L, W, H = brick_box_params(b)
        actors.append(VedoBox(pos=pos, length=L, width=W, height=H).alpha(alpha).c(chain_color(count)))

        if show_labels:
            actors.append(Text3D(f"B{idx}:{count}", pos=(pos[0], pos[1], b.z_max + 1.2), s=0.4, c="black"))

    return actors


def plot_stack_debug(
    graph: SupportGraph,
    chain_counts: Optional[Dict[Brick, int]] = None,
    title: str = "Slabs Debug View",
    show_labels: bool = True,
):
    """Interactive view of a settled stack, colored by chain-reaction count."""
    axes_opts = dict(
        xtitle='X', ytitle='Y', ztitle='Z (height)',
        xygrid=True, zxgrid=True, yzgrid=True,
        xyplane_color='lightgray', xygrid_color='gray', xyalpha=0.1,
        show_ticks=True, text_scale=1.2,
    )

    vp = Plotter(title=title, axes=axes_opts, bg="white")
    for actor in build_stack_actors(graph, chain_counts, show_labels=show_labels):
        vp += actor

    vp.show(interactive=True, viewup="z")
