"""Build a tree of comments from a flat list ordered newest first."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from practicum.comments_store import Comment


class EmptyCommentsError(ValueError):
    """No comments were given to build a tree from."""


@dataclass
class Node:
    """A comment with its replies."""

    comment: Comment = field(default_factory=Comment)
    childs: list[Node] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = self.comment.to_dict()
        data["Childs"] = [child.to_dict() for child in self.childs] or None
        return data


def build(comments: Iterable[Comment]) -> list[Node]:
    """Return the top-level nodes; replies seen before their parent are attached later."""
    comments = list(comments)
    if not comments:
        raise EmptyCommentsError("empty comment array")

    nodes: dict[str, Node] = {}
    roots: list[Node] = []
    for comment in comments:
        node = Node(comment)
        placeholder = nodes.get(comment.id)
        if placeholder is not None:
            node.childs = placeholder.childs
        nodes[comment.id] = node

        if not comment.parent_id:
            roots.append(node)
            continue

        parent = nodes.get(comment.parent_id)
        if parent is None:
            nodes[comment.parent_id] = Node(childs=[node])
            continue
        parent.childs.append(node)
    return roots