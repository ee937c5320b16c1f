"""
Tree reducer — post-order fold over a Figma node tree.

Nodes are the plain dicts returned by the Figma REST API. Parent links are
written into a side-table instead of onto the nodes, so the same document can
be traversed any number of times (once per page, once per variant) without
leaking state between passes.
"""

from typing import Callable, Optional

Reducer = Callable[[object, dict], object]
NodePredicate = Callable[[dict], bool]

# Only frames can be linked to from a Figma URL
LINKABLE_TYPES = ("FRAME",)


def node_key(node: dict):
    """Side-table key for a node: its id, or the object identity when it has none."""
    node_id = node.get("id")
    return node_id if node_id is not None else id(node)


def linearize(
    root: dict,
    include: Optional[NodePredicate] = None,
    prune: Optional[NodePredicate] = None,
    parents: Optional[dict] = None,
) -> list:
    """Return the visited nodes of ``root`` in post-order (children before parent)."""
    if parents is None:
        parents = {}
    visited: list = []

    def visit(node: dict) -> None:
        if prune and prune(node):
            return
        for child in node.get("children") or []:
            parents[node_key(child)] = node
            visit(child)
        if include is None or include(node):
            visited.append(node)

    visit(root)
    return visited


def reduce_tree(
    root: dict,
    reducer: Reducer,
    initial=None,
    include: Optional[NodePredicate] = None,
    prune: Optional[NodePredicate] = None,
    parents: Optional[dict] = None,
):
    """Fold ``reducer`` over every visited node, deepest first.

    A pruned node contributes nothing, neither itself nor its descendants.
    Since ancestors are folded after their descendants, a reducer writing into
    a dict lets the shallower node win when two nodes derive the same key.
    """
    acc = initial
    for node in linearize(root, include=include, prune=prune, parents=parents):
        acc = reducer(acc, node)
    return acc


def find_nearest_linkable_parent(node: dict, parents: dict) -> Optional[dict]:
    """Walk up ``parents`` until a linkable node is found (``node`` itself included)."""
    current: Optional[dict] = node
    while current is not None:
        if current.get("type") in LINKABLE_TYPES:
            return current
        current = parents.get(node_key(current))
    return None
