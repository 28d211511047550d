"""
Entry point for the Distribution Matcher.

Starts the PySide6 front-end: a config panel on the left, a board of
density / box / Q-Q cards on the right, and a first round generated
from the panel's default settings.  The statistical core in this
package does not need Qt; only this launcher and the ``gui_*``
modules do.

Usage:
    python -m distmatch
    distmatch                  (installed gui-script)
"""

import sys
import os
import importlib
import traceback

# (import name, distribution name) of everything a round needs on screen
_REQUIRED = (
    ("PySide6", "PySide6"),
    ("matplotlib", "matplotlib"),
    ("numpy", "numpy"),
    ("scipy", "scipy"),
)


def _check_dependencies():
    """Exit with an install hint if the GUI or numeric stack is missing."""
    missing = []
    for module, dist in _REQUIRED:
        try:
            importlib.import_module(module)
        except ImportError:
            missing.append(dist)

    if missing:
        print(
            f"Missing required packages: {', '.join(missing)}\n"
            f"Install with: pip install {' '.join(missing)}",
            file=sys.stderr,
        )
        sys.exit(1)


def _exception_hook(exc_type, exc_value, exc_tb):
    """Print uncaught errors and, once Qt is up, show them in a dialog.

    Also catches exceptions raised inside Qt slots such as round
    generation and card clicks.
    """
    msg = ''.join(traceback.format_exception(exc_type, exc_value, exc_tb))
    print(f"Unhandled exception:\n{msg}", file=sys.stderr)

    # Show a dialog if Qt is up
    try:
        from PySide6.QtWidgets import QMessageBox, QApplication
        app = QApplication.instance()
        if app is not None:
            QMessageBox.critical(
                None, "Unhandled Error",
                f"An unexpected error occurred:\n\n"
                f"{exc_type.__name__}: {exc_value}\n\n"
                f"See console for full traceback.",
            )
    except Exception as dialog_exc:
        print(f"Could not show error dialog: {dialog_exc}", file=sys.stderr)


def main():
    """Launch the Distribution Matcher window and run the Qt event loop."""
    _check_dependencies()

    # Set exception hook before anything else
    sys.excepthook = _exception_hook

    # Plot cards embed QtAgg canvases; pick the backend before any pyplot
    # or Qt widget import
    os.environ.setdefault("QT_API", "pyside6")
    import matplotlib
    matplotlib.use('QtAgg')

    from PySide6.QtWidgets import QApplication
    from PySide6.QtGui import QFont, QFontDatabase

    from .constants import FONT_FAMILIES
    from .theme import get_dark_stylesheet
    from .gui_main import MatcherMainWindow

    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    font = QFont()
    for family in FONT_FAMILIES:
        if QFontDatabase.hasFamily(family):
            font.setFamily(family)
            break
    font.setPointSize(10)
    app.setFont(font)

    app.setStyleSheet(get_dark_stylesheet())

    # The window generates its first round on construction
    window = MatcherMainWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
