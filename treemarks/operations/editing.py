"""Edit form controller: one form, used for both creating and editing."""

from dataclasses import replace
from enum import Enum
from typing import Optional

from ..models.node import BookmarkFields
from ..models.tree import BookmarkTree
from ..utils.colors import DEFAULT_COLOR
from ..utils.log import get_logger
from ..utils.urls import complete_url, interpret_text
from .search import SearchFilter

logger = get_logger(__name__)


class EditMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class EditController:
    """Binds the bookmark form to either a new bookmark or an existing one.

    Every submit, successful or not, clears the active search and puts the
    form back into create mode.
    """

    def __init__(self, tree: BookmarkTree, search: Optional[SearchFilter] = None,
                 default_color: str = DEFAULT_COLOR):
        self.tree = tree
        self.search = search
        self.default_color = default_color
        self.mode = EditMode.CREATE
        self.editing_id: Optional[int] = None
        self.buffer = self._blank()

    def _blank(self) -> BookmarkFields:
        return BookmarkFields(color=self.default_color)

    @property
    def is_editing(self) -> bool:
        return self.mode == EditMode.EDIT

    def load(self, node_id: int) -> BookmarkFields:
        """Copy a bookmark into the form buffer and switch to edit mode."""
        node = self.tree.get(node_id)
        self.buffer = node.fields
        self.editing_id = node.id
        self.mode = EditMode.EDIT
        logger.debug("Editing bookmark %s", node_id)
        return self.buffer

    def prefill_from_text(self, text: str) -> BookmarkFields:
        """Fill the URL or title field from text dropped from outside."""
        field_name, text = interpret_text(text)
        if text:
            self.buffer = replace(self.buffer, **{field_name: text})
        return self.buffer

    def submit(self, fields: BookmarkFields, parent_id: Optional[int] = None) -> int:
        """Create or update depending on the current mode."""
        if self.is_editing:
            return self.submit_edit(fields)
        return self.submit_create(fields, parent_id)

    def submit_create(self, fields: BookmarkFields, parent_id: Optional[int] = None) -> int:
        try:
            return self.tree.insert(self._prepare(fields), parent_id)
        finally:
            self._after_submit()

    def submit_edit(self, fields: BookmarkFields) -> int:
        if self.editing_id is None:
            self._after_submit()
            raise ValueError("No bookmark is loaded for editing")
        node_id = self.editing_id
        try:
            self.tree.update(node_id, self._prepare(fields))
        finally:
            self._after_submit()
        return node_id

    def cancel(self) -> None:
        """Discard the form without touching the tree."""
        self.reset()

    def reset(self) -> None:
        self.buffer = self._blank()
        self.editing_id = None
        self.mode = EditMode.CREATE

    @staticmethod
    def _prepare(fields: BookmarkFields) -> BookmarkFields:
        return replace(fields, url=complete_url(fields.url))

    def _after_submit(self):
        if self.search is not None:
            self.search.clear()
        self.reset()
