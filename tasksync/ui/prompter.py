# Rev 0.1.0
# tasksync/ui/prompter.py
from __future__ import annotations
from typing import Optional, Protocol

from PySide6.QtWidgets import QMessageBox, QWidget


class Prompter(Protocol):
    """Blocking user interaction the sync layer needs: yes/no and notices."""

    def confirm(self, message: str) -> bool: ...

    def notify(self, message: str) -> None: ...


class MessageBoxPrompter:
    """Prompter backed by modal QMessageBox dialogs."""

    def __init__(self, parent: Optional[QWidget] = None, title: str = "tasksync"):
        self._parent = parent
        self._title = title

    def confirm(self, message: str) -> bool:
        answer = QMessageBox.question(
            self._parent, self._title, message,
            QMessageBox.Yes | QMessageBox.No, QMessageBox.No,
        )
        return answer == QMessageBox.Yes

    def notify(self, message: str) -> None:
        QMessageBox.warning(self._parent, self._title, message)
