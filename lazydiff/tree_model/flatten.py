"""Flatten change trees into visible row order."""

from __future__ import annotations

from collections.abc import Iterable, Set

from .types import TreeNode


def flatten_tree(nodes: Iterable[TreeNode], collapsed: Set[str]) -> list[TreeNode]:
    """Return nodes in depth-first pre-order, skipping children of collapsed directories."""
    out: list[TreeNode] = []

    def visit(node: TreeNode) -> None:
        out.append(node)
        if node.is_dir and node.path not in collapsed:
            for child in node.children:
                visit(child)

    for node in nodes:
        visit(node)
    return out


def count_descendants(node: TreeNode) -> int:
    """Count every node below ``node`` regardless of collapse state."""
    return sum(1 + count_descendants(child) for child in node.children)
