"""Drag-and-drop session over the bookmark tree.

A session tracks one dragged bookmark from drag start to drop or cancel.
Drops are validated by the tree itself; a rejected move is reported back
in the :class:`DropResult` instead of being raised.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..models.errors import InvalidMove, MalformedPayload, NotFound, TreeError
from ..models.node import BookmarkNode
from ..models.tree import BookmarkTree
from ..utils.log import get_logger
from .editing import EditController

logger = get_logger(__name__)

NODE_MIME_TYPE = "application/x-treemarks-node"

_HANDLE_RE = re.compile(r"^bookmark-(\d+)$")


def encode_handle(node_id: int) -> str:
    """Transferable handle for a dragged bookmark."""
    return f"bookmark-{node_id}"


def decode_handle(handle: str) -> Optional[int]:
    match = _HANDLE_RE.match(handle.strip())
    return int(match.group(1)) if match else None


def removal_prompt(node: BookmarkNode) -> str:
    """Confirmation message shown before deleting a bookmark."""
    message = "Delete this bookmark?"
    if node.has_children:
        message += " (all of its children will be deleted too)"
    return message


@dataclass(frozen=True)
class DragPayload:
    """What a drop event carried: a bookmark handle or plain text."""

    node_id: Optional[int] = None
    text: Optional[str] = None

    @property
    def is_node(self) -> bool:
        return self.node_id is not None

    @classmethod
    def from_mime(cls, handle: Optional[str] = None, text: Optional[str] = None) -> "DragPayload":
        if handle:
            node_id = decode_handle(handle)
            if node_id is not None:
                return cls(node_id=node_id)
        if text and text.strip():
            return cls(text=text.strip())
        raise MalformedPayload(handle or text)


class DragState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    DROPPED = "dropped"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class DropResult:
    accepted: bool
    node_id: Optional[int] = None
    target_id: Optional[int] = None
    error: Optional[TreeError] = None

    @property
    def message(self) -> str:
        if self.accepted:
            return ""
        if isinstance(self.error, NotFound):
            return "Bookmark not found"
        return "Move not allowed"


class DragSession:
    """State machine for one drag gesture at a time."""

    def __init__(self, tree: BookmarkTree):
        self.tree = tree
        self.state = DragState.IDLE
        self.source_id: Optional[int] = None
        self.last_outcome: Optional[DragState] = None

    @property
    def is_dragging(self) -> bool:
        return self.state == DragState.DRAGGING

    def begin(self, node_id: int, origin_id: Optional[int] = None) -> bool:
        """Start dragging ``node_id``.

        ``origin_id`` is the bookmark the gesture actually started on. A
        gesture that started on a nested row and bubbled up to an ancestor
        is not a drag of that ancestor.

        Returns:
            True if the session started.
        """
        if self.is_dragging:
            logger.info("Ignoring drag of %s: %s is already being dragged",
                        node_id, self.source_id)
            return False
        if origin_id is not None and origin_id != node_id:
            return False
        if node_id not in self.tree:
            logger.warning("Ignoring drag of unknown bookmark %s", node_id)
            return False
        self.state = DragState.DRAGGING
        self.source_id = node_id
        return True

    def over_target(self, target_id: Optional[int]) -> bool:
        """Whether dropping into ``target_id`` would be accepted."""
        if not self.is_dragging:
            return False
        if target_id is None:
            return True
        if target_id == self.source_id or target_id not in self.tree:
            return False
        if self.source_id not in self.tree:
            return False
        return not self.tree.is_descendant(target_id, self.source_id)

    def drop(self, target_id: Optional[int], before_sibling_id: Optional[int] = None) -> DropResult:
        """Move the dragged bookmark into ``target_id`` (None is the root)."""
        if not self.is_dragging:
            return DropResult(accepted=False, target_id=target_id)
        node_id = self.source_id
        try:
            self.tree.move(node_id, target_id, before_sibling_id)
        except (InvalidMove, NotFound) as e:
            logger.info("Rejected drop: %s", e)
            self._finish(DragState.DROPPED)
            return DropResult(accepted=False, node_id=node_id, target_id=target_id, error=e)
        self._finish(DragState.DROPPED)
        return DropResult(accepted=True, node_id=node_id, target_id=target_id)

    def drop_before(self, sibling_id: int) -> DropResult:
        """Drop the dragged bookmark just in front of ``sibling_id``."""
        sibling = self.tree.find(sibling_id)
        if sibling is None or sibling.is_root:
            node_id = self.source_id
            self._finish(DragState.DROPPED)
            return DropResult(accepted=False, node_id=node_id, error=NotFound(sibling_id))
        parent = sibling.parent
        return self.drop(None if parent.is_root else parent.id, sibling_id)

    def drop_on_editor(self, controller: EditController) -> bool:
        """Hand the dragged bookmark to the edit form. Leaves the tree alone."""
        if not self.is_dragging:
            return False
        node_id = self.source_id
        self._finish(DragState.DROPPED)
        try:
            controller.load(node_id)
        except NotFound as e:
            logger.warning("Cannot edit: %s", e)
            return False
        return True

    def drop_on_trash(self, confirm: Callable[[str], bool]) -> bool:
        """Delete the dragged bookmark after ``confirm`` approves.

        Returns:
            True if the bookmark was removed.
        """
        if not self.is_dragging:
            return False
        node_id = self.source_id
        node = self.tree.find(node_id)
        if node is None:
            self._finish(DragState.CANCELLED)
            return False
        if not confirm(removal_prompt(node)):
            self._finish(DragState.CANCELLED)
            return False
        self.tree.remove(node_id)
        self._finish(DragState.DROPPED)
        return True

    def cancel(self) -> None:
        """End the gesture without changing the tree."""
        if self.is_dragging:
            self._finish(DragState.CANCELLED)

    def _finish(self, outcome: DragState):
        self.last_outcome = outcome
        self.state = DragState.IDLE
        self.source_id = None
