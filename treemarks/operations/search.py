"""Search filtering over the bookmark tree.

A query matches a bookmark when it is a case-insensitive substring of the
title or the description. Folders stay visible while any descendant
matches, and such folders are force-expanded so the match can be reached.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Set

from ..models.node import BookmarkNode
from ..models.tree import BookmarkTree
from ..utils.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class NodeVisibility:
    matches: bool
    visible: bool
    force_expanded: bool


@dataclass
class SearchResult:
    query: str
    nodes: Dict[int, NodeVisibility] = field(default_factory=dict)

    def __getitem__(self, node_id: int) -> NodeVisibility:
        return self.nodes[node_id]

    def is_visible(self, node_id: int) -> bool:
        state = self.nodes.get(node_id)
        return state is not None and state.visible

    @property
    def visible_ids(self) -> Set[int]:
        return {i for i, s in self.nodes.items() if s.visible}

    @property
    def matching_ids(self) -> Set[int]:
        return {i for i, s in self.nodes.items() if s.matches}

    @property
    def force_expanded_ids(self) -> Set[int]:
        return {i for i, s in self.nodes.items() if s.force_expanded}


def node_matches(node: BookmarkNode, needle: str) -> bool:
    """Case-insensitive substring test against title or description."""
    return needle in node.title.lower() or needle in node.description.lower()


class SearchFilter:
    """Computes which bookmarks are visible for the current query."""

    def __init__(self, tree: BookmarkTree):
        self.tree = tree
        self.query = ""

    def apply(self, query: str) -> SearchResult:
        """Filter the tree by ``query``. Does not touch the tree."""
        self.query = query
        result = SearchResult(query=query)
        needle = query.lower()

        if not needle:
            for node in self.tree.walk():
                result.nodes[node.id] = NodeVisibility(True, True, False)
            return result

        # Iterative post-order so deep trees don't hit the recursion limit
        has_match_below: Dict[int, bool] = {}
        stack: List[tuple] = [(child, False) for child in reversed(self.tree.root.children)]
        while stack:
            node, children_done = stack.pop()
            if not children_done:
                stack.append((node, True))
                stack.extend((child, False) for child in reversed(node.children))
                continue

            below = any(
                result.nodes[c.id].matches or has_match_below[c.id]
                for c in node.children
            )
            matches = node_matches(node, needle)
            has_match_below[node.id] = below
            result.nodes[node.id] = NodeVisibility(
                matches=matches,
                visible=matches or below,
                force_expanded=below,
            )

        logger.debug("Search %r matched %d bookmarks", query, len(result.matching_ids))
        return result

    def reveal(self, result: SearchResult) -> List[int]:
        """Expand every force-expanded folder in the tree.

        Expansion is sticky: clearing the search never collapses again.

        Returns:
            Ids of folders that were collapsed and are now expanded.
        """
        opened = []
        for node_id in result.force_expanded_ids:
            node = self.tree.find(node_id)
            if node is not None and node.collapsed:
                node.collapsed = False
                opened.append(node_id)
        return opened

    def clear(self) -> SearchResult:
        """Drop the active query and return the unfiltered view."""
        return self.apply("")
