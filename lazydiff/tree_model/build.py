"""Build per-group directory trees from flat change records."""

from __future__ import annotations

from collections.abc import Iterable

from ..git.types import ChangeRecord
from .types import NODE_DIRECTORY, NODE_FILE, TreeNode


def build_change_tree(records: Iterable[ChangeRecord], group: str) -> list[TreeNode]:
    """Return top-level nodes for ``records`` with children in insertion order.

    Paths are split on ``/`` with empty segments dropped. Every unseen prefix
    becomes a node: a file node for the last segment of a path, a directory
    node otherwise. Ordering follows the order records are reported in.
    """
    nodes_by_path: dict[str, TreeNode] = {}
    roots: list[TreeNode] = []

    for record in records:
        segments = [segment for segment in record.path.split("/") if segment]
        running = ""
        parent: TreeNode | None = None
        for depth, segment in enumerate(segments):
            running = f"{running}/{segment}" if running else segment
            node = nodes_by_path.get(running)
            if node is None:
                is_leaf = depth == len(segments) - 1
                node = TreeNode(
                    name=segment,
                    path=running,
                    kind=NODE_FILE if is_leaf else NODE_DIRECTORY,
                    depth=depth,
                    record=record if is_leaf else None,
                    group=group if is_leaf else None,
                )
                nodes_by_path[running] = node
                if parent is None:
                    roots.append(node)
                else:
                    parent.children.append(node)
            parent = node

    return roots
