"""Display order for status nodes."""
from __future__ import annotations

from typing import Iterable

from catmonitor.models import StatusNode
from catmonitor.status_vocabulary import Category, is_node_done


def sort_key(node: StatusNode) -> tuple[int, bool]:
    return Category.from_label(node.category).rank, is_node_done(node)


def sort_nodes(nodes: Iterable[StatusNode]) -> tuple[StatusNode, ...]:
    """Projects, then tasks, then skills, then the rest; open nodes before done ones.

    ``sorted`` is stable, so nodes with equal keys keep their declared order.
    """
    return tuple(sorted(nodes, key=sort_key))
