"""Global exception handling for the application."""

from __future__ import annotations

import logging
import sys
import traceback
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger("mealy.exceptions")


def install_exception_hook(root=None, show_dialog: bool = True) -> "_ExceptionHook":
    """Install handlers for uncaught exceptions and Tk callback errors."""

    hook = _ExceptionHook(show_dialog=show_dialog)
    hook.install(root)
    return hook


@dataclass
class _ExceptionHook:
    show_dialog: bool = True
    _original_excepthook: Optional[Callable] = None

    def install(self, root=None) -> None:
        self._original_excepthook = sys.excepthook
        sys.excepthook = self._handle_exception

        if root is not None:
            # Tk swallows callback errors into report_callback_exception.
            root.report_callback_exception = self._handle_callback_exception
            self._root = root

    def _handle_exception(self, exc_type, exc_value, exc_traceback) -> None:
        logger.critical(
            "Unhandled exception: %s",
            exc_value,
            exc_info=(exc_type, exc_value, exc_traceback),
        )
        if self._original_excepthook:
            self._original_excepthook(exc_type, exc_value, exc_traceback)

    def _handle_callback_exception(self, exc_type, exc_value, exc_traceback) -> None:
        logger.critical(
            "Unhandled exception in Tk callback: %s",
            exc_value,
            exc_info=(exc_type, exc_value, exc_traceback),
        )
        self._show_dialog(exc_type, exc_value, exc_traceback)

    def _show_dialog(self, exc_type, exc_value, exc_traceback) -> None:  # pragma: no cover
        if not self.show_dialog:
            return

        from tkinter import TclError, messagebox

        details = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
        try:
            messagebox.showerror(
                "Erro inesperado",
                f"Ocorreu um erro inesperado:\n\n{exc_value}\n\nDetalhes:\n{details}",
                parent=getattr(self, "_root", None),
            )
        except TclError:
            logger.warning("Could not show error dialog; the main window is gone.")
