"""Bookmark node entity and its editable fields."""

import weakref
from dataclasses import dataclass, field, replace
from typing import Optional, List

from ..utils.colors import DEFAULT_COLOR, normalize_color

ROOT_ID = 0


def _safe_color(value) -> str:
    """Normalized colour, or the default row colour when unparseable."""
    try:
        return normalize_color(value)
    except (TypeError, ValueError):
        return DEFAULT_COLOR


@dataclass
class BookmarkFields:
    """The user-editable part of a bookmark, as carried by the form."""

    title: str = ""
    url: str = ""
    color: str = DEFAULT_COLOR
    description: str = ""

    def normalized(self) -> "BookmarkFields":
        """Return a copy with the colour normalized to lowercase hex."""
        return replace(
            self,
            title=self.title or "",
            url=(self.url or "").strip(),
            color=_safe_color(self.color),
            description=self.description or "",
        )

    @property
    def is_folder(self) -> bool:
        return not self.url


@dataclass(eq=False)
class BookmarkNode:
    id: int
    title: str = ""
    url: str = ""
    color: str = DEFAULT_COLOR
    description: str = ""
    collapsed: bool = False
    children: List["BookmarkNode"] = field(default_factory=list, repr=False)
    _parent_ref: Optional[weakref.ref] = field(default=None, repr=False, compare=False)

    @property
    def parent(self) -> Optional["BookmarkNode"]:
        """The owning node (the implicit root for top-level bookmarks)."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def _set_parent(self, parent: Optional["BookmarkNode"]) -> None:
        self._parent_ref = weakref.ref(parent) if parent is not None else None

    @property
    def is_root(self) -> bool:
        return self.id == ROOT_ID

    @property
    def is_folder(self) -> bool:
        """Folders are bookmarks without a URL."""
        return not self.url

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def fields(self) -> BookmarkFields:
        return BookmarkFields(
            title=self.title,
            url=self.url,
            color=self.color,
            description=self.description,
        )

    def _apply(self, fields: BookmarkFields) -> None:
        self.title = fields.title
        self.url = fields.url
        self.color = fields.color
        self.description = fields.description
