"""Entry point for Treemarks."""

import sys

from PyQt6.QtWidgets import QApplication

from treemarks.ui.manager import BookmarkManagerWindow
from treemarks.utils.config import create_default_config, get_log_config, get_ui_config
from treemarks.utils.log import setup_logging
from treemarks.utils.theme import ThemeManager


def main():
    create_default_config()
    setup_logging(get_log_config())

    app = QApplication(sys.argv)
    ThemeManager.apply(get_ui_config().get("dark_mode", False))

    window = BookmarkManagerWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
