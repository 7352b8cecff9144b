"""Tree node datatype shared by the builder, flattener, and list model."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..git.types import ChangeRecord

NODE_DIRECTORY = "directory"
NODE_FILE = "file"


@dataclass(eq=False)
class TreeNode:
    """One directory or file in a per-group change tree.

    ``path`` is the ``/``-joined chain of segment names down to this node and
    ``depth`` the number of segments above it. File nodes carry the record
    they were built from; directories carry their children in first-seen order.
    """

    name: str
    path: str
    kind: str
    depth: int
    children: list[TreeNode] = field(default_factory=list)
    record: ChangeRecord | None = None
    group: str | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind == NODE_DIRECTORY
