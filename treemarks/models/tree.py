"""Bookmark tree: owns the node forest and enforces its structure.

All structural changes go through :class:`BookmarkTree`. Each mutation is
validated in full before any link is touched, so a failed call leaves the
tree exactly as it was.
"""

import itertools
from typing import Dict, Iterator, List, Optional

from .errors import InvalidMove, NotFound
from .node import ROOT_ID, BookmarkFields, BookmarkNode
from ..utils.log import get_logger

logger = get_logger(__name__)


class BookmarkTree:
    """Ordered forest of bookmarks hanging off an implicit root."""

    def __init__(self):
        self.root = BookmarkNode(id=ROOT_ID, title="")
        self._index: Dict[int, BookmarkNode] = {}
        self._ids = itertools.count(ROOT_ID + 1)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, node_id) -> bool:
        return node_id in self._index

    def __iter__(self) -> Iterator[BookmarkNode]:
        return self.walk()

    # Lookups

    def find(self, node_id: Optional[int]) -> Optional[BookmarkNode]:
        """Find a node by id. ``None`` and ``0`` both name the root."""
        if node_id is None or node_id == ROOT_ID:
            return self.root
        return self._index.get(node_id)

    def get(self, node_id: Optional[int]) -> BookmarkNode:
        """Like :meth:`find` but raises :class:`NotFound`."""
        node = self.find(node_id)
        if node is None:
            raise NotFound(node_id)
        return node

    def children_of(self, parent_id: Optional[int] = None) -> List[BookmarkNode]:
        return list(self.get(parent_id).children)

    def index_of(self, node_id: int) -> int:
        """Position of a node among its siblings."""
        node = self._get_bookmark(node_id)
        return node.parent.children.index(node)

    def walk(self, start: Optional[BookmarkNode] = None) -> Iterator[BookmarkNode]:
        """Pre-order traversal of every bookmark below ``start``."""
        start = start or self.root
        stack = list(reversed(start.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def subtree_ids(self, node_id: int) -> List[int]:
        """Ids of a node and everything below it, in pre-order."""
        node = self._get_bookmark(node_id)
        return [node.id] + [n.id for n in self.walk(node)]

    def ancestors_of(self, node_id: int) -> List[BookmarkNode]:
        """Ancestors of a node, nearest first, without the implicit root."""
        node = self._get_bookmark(node_id)
        ancestors = []
        current = node.parent
        while current is not None and not current.is_root:
            ancestors.append(current)
            current = current.parent
        return ancestors

    def is_descendant(self, node_id: Optional[int], ancestor_id: Optional[int]) -> bool:
        """Check whether ``node_id`` lies strictly below ``ancestor_id``."""
        node = self.get(node_id)
        ancestor = self.get(ancestor_id)
        current = node.parent
        while current is not None:
            if current is ancestor:
                return True
            current = current.parent
        return False

    # Mutations

    def insert(self, fields: BookmarkFields, parent_id: Optional[int] = None) -> int:
        """Create a bookmark as the last child of ``parent_id`` (root if None).

        Returns:
            The id of the new bookmark.
        """
        parent = self.get(parent_id)
        fields = fields.normalized()
        node = BookmarkNode(id=next(self._ids))
        node._apply(fields)
        self._attach(node, parent, len(parent.children))
        self._index[node.id] = node
        logger.debug("Inserted bookmark %s under %s", node.id, parent.id)
        return node.id

    def move(self, node_id: int, target_parent_id: Optional[int],
             before_sibling_id: Optional[int] = None) -> BookmarkNode:
        """Reparent a bookmark, placing it before a sibling or last.

        Raises:
            NotFound: If any of the ids is unknown.
            InvalidMove: If the target is the node itself or one of its
                descendants, or ``before_sibling_id`` is not a child of the
                target.
        """
        node = self._get_bookmark(node_id)
        target = self.get(target_parent_id)

        if target is node:
            raise InvalidMove(node_id, target_parent_id, "a bookmark cannot contain itself")
        current = target.parent
        while current is not None:
            if current is node:
                raise InvalidMove(node_id, target_parent_id,
                                  "target is inside the moved bookmark")
            current = current.parent

        before = None
        if before_sibling_id is not None:
            before = self.find(before_sibling_id)
            if before is None or before.is_root or before.parent is not target:
                raise InvalidMove(node_id, target_parent_id,
                                  f"{before_sibling_id} is not a child of the target")
            if before is node:
                # Dropped in front of itself
                return node

        old_parent = node.parent
        old_parent.children.remove(node)
        position = target.children.index(before) if before is not None else len(target.children)
        self._attach(node, target, position)
        logger.debug("Moved bookmark %s from %s to %s at %d",
                     node.id, old_parent.id, target.id, position)
        return node

    def remove(self, node_id: int) -> BookmarkNode:
        """Delete a bookmark together with its whole subtree.

        Confirmation is the caller's job; see
        :func:`treemarks.operations.drag.removal_prompt`.
        """
        if node_id == ROOT_ID:
            raise InvalidMove(node_id, None, "the root cannot be removed")
        node = self._get_bookmark(node_id)
        removed_ids = self.subtree_ids(node_id)

        node.parent.children.remove(node)
        node._set_parent(None)
        for removed_id in removed_ids:
            del self._index[removed_id]
        logger.debug("Removed bookmark %s (%d nodes)", node_id, len(removed_ids))
        return node

    def update(self, node_id: int, fields: BookmarkFields) -> BookmarkNode:
        """Replace the editable fields of a bookmark in place."""
        node = self._get_bookmark(node_id)
        node._apply(fields.normalized())
        logger.debug("Updated bookmark %s", node_id)
        return node

    def set_collapsed(self, node_id: int, collapsed: bool) -> BookmarkNode:
        node = self._get_bookmark(node_id)
        node.collapsed = collapsed
        return node

    def toggle_collapsed(self, node_id: int) -> bool:
        """Flip the collapsed state of a bookmark. Returns the new state."""
        node = self._get_bookmark(node_id)
        node.collapsed = not node.collapsed
        return node.collapsed

    def _get_bookmark(self, node_id) -> BookmarkNode:
        node = self._index.get(node_id)
        if node is None:
            raise NotFound(node_id)
        return node

    @staticmethod
    def _attach(node: BookmarkNode, parent: BookmarkNode, position: int) -> None:
        parent.children.insert(position, node)
        node._set_parent(parent)
