"""Bookmark Manager - tree view with drag-and-drop, edit form and search."""

from typing import Dict, Optional

from PyQt6.QtCore import Qt, QMimeData, pyqtSignal
from PyQt6.QtGui import QColor, QBrush, QDrag
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QFormLayout, QGroupBox,
    QTreeWidget, QTreeWidgetItem, QLineEdit, QPlainTextEdit, QPushButton,
    QColorDialog, QSplitter, QLabel, QMessageBox, QAbstractItemView,
)

from ..models.errors import MalformedPayload, NotFound
from ..models.node import BookmarkFields
from ..models.tree import BookmarkTree
from ..operations.debounce import SearchDebouncer
from ..operations.drag import (
    NODE_MIME_TYPE, DragPayload, DragSession, DropResult, encode_handle,
)
from ..operations.editing import EditController
from ..operations.search import SearchFilter, SearchResult
from ..utils.colors import is_dark
from ..utils.config import get_default_color, get_search_debounce_ms
from ..utils.log import get_logger
from ..utils.theme import ThemeManager, LIGHT_TEXT, DARK_TEXT
from ..utils.urls import complete_url

logger = get_logger(__name__)

NODE_ID_ROLE = Qt.ItemDataRole.UserRole

# Fraction of a row's height that counts as "drop before this row"
BEFORE_ZONE = 0.25


def _payload_from(mime: QMimeData) -> DragPayload:
    handle = None
    if mime.hasFormat(NODE_MIME_TYPE):
        handle = bytes(mime.data(NODE_MIME_TYPE).data()).decode("utf-8", "replace")
    text = mime.text() if mime.hasText() else None
    return DragPayload.from_mime(handle, text)


class BookmarkTreeWidget(QTreeWidget):
    """Tree view that routes drag gestures through a DragSession."""

    drop_finished = pyqtSignal(object)

    def __init__(self, session: DragSession, parent=None):
        super().__init__(parent)
        self.session = session
        self.setHeaderHidden(True)
        self.setDragEnabled(True)
        self.setAcceptDrops(True)
        self.setDropIndicatorShown(True)
        self.setDragDropMode(QAbstractItemView.DragDropMode.DragDrop)

    def startDrag(self, supported_actions):
        item = self.currentItem()
        if item is None:
            return
        node_id = item.data(0, NODE_ID_ROLE)
        if not self.session.begin(node_id, origin_id=node_id):
            return

        mime = QMimeData()
        mime.setData(NODE_MIME_TYPE, encode_handle(node_id).encode("utf-8"))
        drag = QDrag(self)
        drag.setMimeData(mime)
        drag.exec(Qt.DropAction.MoveAction)

        # Released outside any target that took the drop
        self.session.cancel()

    def _drop_target(self, pos):
        """Return (target_id, before_sibling_id) for a point in the viewport."""
        item = self.itemAt(pos)
        if item is None:
            return None, None
        node_id = item.data(0, NODE_ID_ROLE)
        rect = self.visualItemRect(item)
        if pos.y() < rect.top() + rect.height() * BEFORE_ZONE:
            parent_item = item.parent()
            parent_id = parent_item.data(0, NODE_ID_ROLE) if parent_item else None
            return parent_id, node_id
        return node_id, None

    def dragEnterEvent(self, event):
        if event.mimeData().hasFormat(NODE_MIME_TYPE) and self.session.is_dragging:
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if not self.session.is_dragging:
            event.ignore()
            return
        target_id, _ = self._drop_target(event.position().toPoint())
        if self.session.over_target(target_id):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        if not self.session.is_dragging:
            event.ignore()
            return
        target_id, before_id = self._drop_target(event.position().toPoint())
        # The model is rebuilt from the tree, so Qt must not move items itself
        event.setDropAction(Qt.DropAction.IgnoreAction)
        event.accept()
        self.drop_at(target_id, before_id)

    def drop_at(self, target_id, before_id=None) -> DropResult:
        """Finish the session: in front of ``before_id`` if given, else into ``target_id``."""
        if before_id is not None:
            result = self.session.drop_before(before_id)
        else:
            result = self.session.drop(target_id)
        self.drop_finished.emit(result)
        return result


class EditorPanel(QGroupBox):
    """Bookmark form. Accepts dragged bookmarks (edit) and dragged text."""

    bookmark_dropped = pyqtSignal()
    text_dropped = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__("Bookmark", parent)
        self.setAcceptDrops(True)
        self._color = get_default_color()

        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.title_edit = QLineEdit()
        form.addRow("Title:", self.title_edit)

        self.url_edit = QLineEdit()
        self.url_edit.setPlaceholderText("Leave empty for a folder")
        self.url_edit.editingFinished.connect(self._complete_url)
        form.addRow("URL:", self.url_edit)

        self.color_btn = QPushButton()
        self.color_btn.clicked.connect(self._pick_color)
        form.addRow("Color:", self.color_btn)

        self.description_edit = QPlainTextEdit()
        self.description_edit.setFixedHeight(80)
        form.addRow("Description:", self.description_edit)

        layout.addLayout(form)

        buttons = QHBoxLayout()
        self.save_btn = QPushButton("Save")
        buttons.addWidget(self.save_btn)
        self.cancel_btn = QPushButton("Cancel")
        buttons.addWidget(self.cancel_btn)
        layout.addLayout(buttons)

        self.hint_label = QLabel("Drag a bookmark here to edit it")
        layout.addWidget(self.hint_label)
        layout.addStretch()

        self.set_color(self._color)

    def fields(self) -> BookmarkFields:
        return BookmarkFields(
            title=self.title_edit.text(),
            url=self.url_edit.text(),
            color=self._color,
            description=self.description_edit.toPlainText(),
        )

    def show_fields(self, fields: BookmarkFields, editing: bool = False):
        self.title_edit.setText(fields.title)
        self.url_edit.setText(fields.url)
        self.description_edit.setPlainText(fields.description)
        self.set_color(fields.color)
        self.setProperty("editing", editing)
        self.setTitle("Edit bookmark" if editing else "Bookmark")
        self._refresh_style()

    def set_color(self, color: str):
        self._color = color
        text = LIGHT_TEXT if is_dark(color) else DARK_TEXT
        self.color_btn.setText(color)
        self.color_btn.setStyleSheet(f"background-color: {color}; color: {text};")

    def _pick_color(self):
        chosen = QColorDialog.getColor(QColor(self._color), self, "Bookmark color")
        if chosen.isValid():
            self.set_color(chosen.name())

    def _complete_url(self):
        self.url_edit.setText(complete_url(self.url_edit.text()))

    def _refresh_style(self):
        self.style().unpolish(self)
        self.style().polish(self)

    def _set_over(self, over: bool):
        self.setProperty("over", over)
        self._refresh_style()

    def dragEnterEvent(self, event):
        mime = event.mimeData()
        if mime.hasFormat(NODE_MIME_TYPE) or mime.hasText():
            self._set_over(True)
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event):
        self._set_over(False)
        super().dragLeaveEvent(event)

    def dropEvent(self, event):
        self._set_over(False)
        try:
            payload = _payload_from(event.mimeData())
        except MalformedPayload as e:
            logger.debug("Ignoring drop on form: %s", e)
            event.ignore()
            return
        event.acceptProposedAction()
        if payload.is_node:
            self.bookmark_dropped.emit()
        else:
            self.text_dropped.emit(payload.text)


class TrashButton(QPushButton):
    """Drop target that deletes the dragged bookmark after confirmation."""

    bookmark_dropped = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__("Delete", parent)
        self.setObjectName("trashButton")
        self.setAcceptDrops(True)

    def _set_over(self, over: bool):
        self.setProperty("over", over)
        self.style().unpolish(self)
        self.style().polish(self)

    def dragEnterEvent(self, event):
        if event.mimeData().hasFormat(NODE_MIME_TYPE):
            self._set_over(True)
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event):
        self._set_over(False)
        super().dragLeaveEvent(event)

    def dropEvent(self, event):
        self._set_over(False)
        event.setDropAction(Qt.DropAction.IgnoreAction)
        event.accept()
        self.bookmark_dropped.emit()


class BookmarkManagerWindow(QMainWindow):
    """Main window. The tree view is rebuilt from the model after every change."""

    tree_changed = pyqtSignal()

    def __init__(self, tree: Optional[BookmarkTree] = None, parent=None):
        super().__init__(parent)
        self.tree = tree if tree is not None else BookmarkTree()
        self.search = SearchFilter(self.tree)
        self.session = DragSession(self.tree)
        self.controller = EditController(self.tree, self.search, get_default_color())
        self._result: SearchResult = self.search.clear()
        self._items: Dict[int, QTreeWidgetItem] = {}

        self.debouncer = SearchDebouncer(self._apply_search, get_search_debounce_ms(), self)

        self.setWindowTitle("Bookmark Manager")
        self.setMinimumSize(800, 500)

        self._setup_ui()
        self._populate_tree()

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        # Left: search + tree
        left = QWidget()
        left_layout = QVBoxLayout(left)
        left_layout.setContentsMargins(0, 0, 0, 0)

        top_bar = QHBoxLayout()
        self._search_edit = QLineEdit()
        self._search_edit.setPlaceholderText("Search title or description")
        self._search_edit.textChanged.connect(self.debouncer.schedule)
        top_bar.addWidget(self._search_edit)

        self._trash_btn = TrashButton()
        self._trash_btn.bookmark_dropped.connect(self._on_trash_drop)
        self._trash_btn.clicked.connect(self._on_trash_clicked)
        top_bar.addWidget(self._trash_btn)
        left_layout.addLayout(top_bar)

        self._tree_widget = BookmarkTreeWidget(self.session)
        self._tree_widget.drop_finished.connect(self._on_drop_finished)
        self._tree_widget.itemExpanded.connect(lambda item: self._on_expand_changed(item, False))
        self._tree_widget.itemCollapsed.connect(lambda item: self._on_expand_changed(item, True))
        left_layout.addWidget(self._tree_widget)
        splitter.addWidget(left)

        # Right: edit form
        self._editor = EditorPanel()
        self._editor.save_btn.clicked.connect(self._submit)
        self._editor.cancel_btn.clicked.connect(self._cancel_edit)
        self._editor.bookmark_dropped.connect(self._on_editor_drop)
        self._editor.text_dropped.connect(self._on_text_drop)
        splitter.addWidget(self._editor)

        splitter.setSizes([480, 320])

        layout = QHBoxLayout(central)
        layout.addWidget(splitter)

    # Rendering

    def _populate_tree(self):
        """Project the model onto the tree widget."""
        self._tree_widget.blockSignals(True)
        self._tree_widget.clear()
        self._items = {}
        for child in self.tree.root.children:
            self._add_item(self._tree_widget.invisibleRootItem(), child)
        self._tree_widget.blockSignals(False)

    def _add_item(self, parent_item: QTreeWidgetItem, node):
        display = f"[F] {node.title}" if node.is_folder else node.title
        item = QTreeWidgetItem(parent_item, [display])
        item.setData(0, NODE_ID_ROLE, node.id)
        item.setToolTip(0, node.description or node.url)
        background, foreground = ThemeManager.row_colors(node.color)
        item.setBackground(0, QBrush(QColor(background)))
        item.setForeground(0, QBrush(QColor(foreground)))
        item.setHidden(not self._result.is_visible(node.id))
        self._items[node.id] = item

        for child in node.children:
            self._add_item(item, child)
        item.setExpanded(not node.collapsed)

    def refresh(self):
        """Re-run the active search and rebuild the view."""
        self._apply_search(self.search.query)

    def _apply_search(self, query: str):
        self._result = self.search.apply(query)
        self.search.reveal(self._result)
        self._populate_tree()

    def _on_expand_changed(self, item: QTreeWidgetItem, collapsed: bool):
        node_id = item.data(0, NODE_ID_ROLE)
        try:
            self.tree.set_collapsed(node_id, collapsed)
        except NotFound:
            self.refresh()

    # Drag and drop

    def _on_drop_finished(self, result: DropResult):
        if not result.accepted:
            QMessageBox.warning(self, "Move not allowed", result.message)
            return
        self.refresh()
        self.tree_changed.emit()

    def _on_editor_drop(self):
        if self.session.drop_on_editor(self.controller):
            self._editor.show_fields(self.controller.buffer, editing=True)
        else:
            QMessageBox.warning(self, "Bookmark not found",
                                "That bookmark no longer exists.")

    def _on_text_drop(self, text: str):
        self._editor.show_fields(self.controller.prefill_from_text(text),
                                 editing=self.controller.is_editing)

    def _on_trash_drop(self):
        def confirm(message: str) -> bool:
            reply = QMessageBox.question(
                self, "Delete Bookmark", message,
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            )
            return reply == QMessageBox.StandardButton.Yes

        editing_id = self.controller.editing_id
        if self.session.drop_on_trash(confirm):
            if editing_id is not None and editing_id not in self.tree:
                self._cancel_edit()
            self.refresh()
            self.tree_changed.emit()

    def _on_trash_clicked(self):
        QMessageBox.information(self, "Delete", "Drag a bookmark onto this button to delete it.")

    # Form

    def _submit(self):
        try:
            self.controller.submit(self._editor.fields())
        except NotFound:
            QMessageBox.warning(self, "Bookmark not found",
                                "The bookmark being edited no longer exists.")
        self._reset_form()
        self.tree_changed.emit()

    def _cancel_edit(self):
        self.controller.cancel()
        self._editor.show_fields(self.controller.buffer)

    def _reset_form(self):
        self.debouncer.cancel()
        self._search_edit.blockSignals(True)
        self._search_edit.clear()
        self._search_edit.blockSignals(False)
        self._editor.show_fields(self.controller.buffer)
        self.refresh()
