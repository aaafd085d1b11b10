"""Errors raised by the bookmark tree and the drag/edit layers."""

from typing import Optional


class TreeError(Exception):
    """Base class for recoverable bookmark tree errors."""


class NotFound(TreeError):
    """An operation referenced an unknown or stale node id."""

    def __init__(self, node_id: Optional[int]):
        self.node_id = node_id
        super().__init__(f"Bookmark {node_id} not found")


class InvalidMove(TreeError):
    """A move would create a cycle or targets a malformed position."""

    def __init__(self, node_id: Optional[int], target_id: Optional[int], reason: str):
        self.node_id = node_id
        self.target_id = target_id
        self.reason = reason
        super().__init__(f"Cannot move {node_id} to {target_id}: {reason}")


class MalformedPayload(TreeError):
    """A drop carried neither a node handle nor usable text."""

    def __init__(self, payload):
        self.payload = payload
        super().__init__(f"Unrecognized drop payload: {payload!r}")
