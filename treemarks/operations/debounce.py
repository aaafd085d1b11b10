"""Latest-wins debounce for search input."""

from typing import Callable, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..utils.config import DEFAULT_DEBOUNCE_MS


class SearchDebouncer(QObject):
    """Runs a search callback once typing has been quiet for a while.

    Every :meth:`schedule` restarts a single-shot timer, so only the last
    query of a burst is filtered.
    """

    filtered = pyqtSignal(str)

    def __init__(self, callback: Optional[Callable[[str], None]] = None,
                 delay_ms: int = DEFAULT_DEBOUNCE_MS, parent=None):
        super().__init__(parent)
        self._callback = callback
        self._pending_query: Optional[str] = None

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(delay_ms)
        self._timer.timeout.connect(self._fire)

    @property
    def delay_ms(self) -> int:
        return self._timer.interval()

    @property
    def pending(self) -> bool:
        return self._pending_query is not None

    def schedule(self, query: str) -> None:
        """Queue a filter pass, superseding any pending one."""
        self._pending_query = query
        self._timer.start()

    def flush(self) -> None:
        """Run the pending pass now, if there is one."""
        if self._pending_query is not None:
            self._timer.stop()
            self._fire()

    def cancel(self) -> None:
        self._timer.stop()
        self._pending_query = None

    def _fire(self):
        query = self._pending_query
        self._pending_query = None
        if query is None:
            return
        if self._callback is not None:
            self._callback(query)
        self.filtered.emit(query)
