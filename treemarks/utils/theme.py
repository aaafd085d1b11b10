"""Centralized theme management for Treemarks."""

from typing import Dict, Tuple

from PyQt6.QtWidgets import QApplication

from .colors import is_dark, normalize_color

# Text colours used on top of a bookmark's own colour
LIGHT_TEXT = "#f5f5f5"
DARK_TEXT = "#1e1e1e"

DARK_PALETTE = {
    "bg": "#1e1e1e",
    "bg_alt": "#252526",
    "bg_input": "#3c3c3c",
    "bg_hover": "#4c4c4c",
    "border": "#3d3d3d",
    "fg": "#d4d4d4",
    "fg_dim": "#888888",
    "selection": "#264f78",
    "accent": "#0078d4",
    "danger": "#c62828",
}

LIGHT_PALETTE = {
    "bg": "#ffffff",
    "bg_alt": "#f9f9f9",
    "bg_input": "#ffffff",
    "bg_hover": "#e5e5e5",
    "border": "#d4d4d4",
    "fg": "#1e1e1e",
    "fg_dim": "#666666",
    "selection": "#cce8ff",
    "accent": "#0078d4",
    "danger": "#e53935",
}


def build_stylesheet(p: Dict[str, str]) -> str:
    """Render the application stylesheet for a palette."""
    return f"""
        QMainWindow, QWidget {{
            background-color: {p["bg"]};
            color: {p["fg"]};
        }}
        QPushButton {{
            background-color: {p["bg_alt"]};
            color: {p["fg"]};
            border: 1px solid {p["border"]};
            padding: 6px 16px;
            border-radius: 3px;
        }}
        QPushButton:hover {{
            background-color: {p["bg_hover"]};
        }}
        QPushButton#trashButton[over="true"] {{
            background-color: {p["danger"]};
            color: white;
        }}
        QLineEdit, QPlainTextEdit {{
            background-color: {p["bg_input"]};
            color: {p["fg"]};
            border: 1px solid {p["border"]};
            padding: 4px 8px;
            border-radius: 3px;
        }}
        QGroupBox[over="true"], QGroupBox[editing="true"] {{
            border: 2px dashed {p["accent"]};
        }}
        QTreeWidget {{
            background-color: {p["bg_input"]};
            border: 1px solid {p["border"]};
            selection-background-color: {p["selection"]};
        }}
        QTreeWidget::item {{
            padding: 3px;
        }}
        QLabel {{
            color: {p["fg_dim"]};
            background: transparent;
        }}
    """


class ThemeManager:
    """Single source of truth for all application theming."""

    _dark_mode: bool = False

    DARK_STYLESHEET = build_stylesheet(DARK_PALETTE)
    LIGHT_STYLESHEET = build_stylesheet(LIGHT_PALETTE)

    @classmethod
    def apply(cls, dark: bool) -> None:
        """Apply the theme globally and store the current mode."""
        cls._dark_mode = dark
        app = QApplication.instance()
        if app:
            app.setStyleSheet(cls.DARK_STYLESHEET if dark else cls.LIGHT_STYLESHEET)

    @classmethod
    def is_dark_mode(cls) -> bool:
        return cls._dark_mode

    @staticmethod
    def row_colors(color: str) -> Tuple[str, str]:
        """Background and text colour for a bookmark row."""
        background = normalize_color(color)
        return background, LIGHT_TEXT if is_dark(background) else DARK_TEXT
