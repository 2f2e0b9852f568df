"""Plain-text reports of clustering results."""

from typing import Optional, List
from torch import Tensor

from ..base.data_structures import KMeansResult


def _format_point(point: Tensor) -> str:
    return '(' + ', '.join(str(v) for v in point.tolist()) + ')'


def _format_points(points: List[Tensor]) -> str:
    return '[' + ', '.join(_format_point(p) for p in points) + ']'


def format_result(result: Optional[KMeansResult]) -> str:
    """Render every cluster as its centroid followed by its member points.

    Example output::

        Centroid: (0.0, 0.5)
        Satellites: [(0, 0), (0, 1)]

        Centroid: (10.0, 10.5)
        Satellites: [(10, 10), (10, 11)]

    A rejected request (None) renders as an empty string.
    """
    if result is None:
        return ''

    blocks = []
    for centroid, members in result:
        blocks.append(f"Centroid: {_format_point(centroid)}\n"
                      f"Satellites: {_format_points(list(members))}\n")
    return '\n'.join(blocks)


def print_result(result: Optional[KMeansResult]) -> None:
    """Print ``format_result(result)``; prints nothing for None."""
    if result is None:
        return
    print(format_result(result))
