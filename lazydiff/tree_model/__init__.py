"""Tree model helpers: node datatype, builder, and pre-order flattener."""

from .build import build_change_tree
from .flatten import count_descendants, flatten_tree
from .types import NODE_DIRECTORY, NODE_FILE, TreeNode

__all__ = [
    "NODE_DIRECTORY",
    "NODE_FILE",
    "TreeNode",
    "build_change_tree",
    "count_descendants",
    "flatten_tree",
]
