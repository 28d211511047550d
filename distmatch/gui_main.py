"""
Main window for the Distribution Matcher.

Hosts the ConfigPanel (left) and PlotBoard (right) in a horizontal
splitter, with a menu bar and status bar.  Card clicks go straight to
the current round; once one card per category is chosen the window
evaluates the triple and reports the result.
"""

import sys

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QScrollArea,
    QMessageBox,
)
from PySide6.QtGui import QAction
from PySide6.QtCore import Qt

from . import APP_NAME, APP_VERSION
from .constants import (
    CATEGORIES, STATUS_CONFIRMED, STATUS_REJECTED, STATE_READY,
)
from .data_model import RoundConfig
from .distribution_set import generate_round
from .gui_config_panel import ConfigPanel
from .gui_plot_board import PlotBoard

# Result messages stay in the status bar this long (ms)
_MESSAGE_TIMEOUT = 2000


class MatcherMainWindow(QMainWindow):
    """Main window for the Distribution Matcher."""

    def __init__(self):
        super().__init__()
        self._round = None

        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(1200, 800)

        self._setup_ui()
        self._setup_menu()
        self._connect_signals()

        self._new_round()

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(4, 4, 4, 4)
        main_layout.setSpacing(4)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        # Left panel: config in scroll area
        self._config_panel = ConfigPanel()
        scroll = QScrollArea()
        scroll.setWidget(self._config_panel)
        scroll.setWidgetResizable(True)
        scroll.setMinimumWidth(280)
        scroll.setMaximumWidth(400)

        # Right panel: plot board
        self._board = PlotBoard()

        splitter.addWidget(scroll)
        splitter.addWidget(self._board)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([300, 900])

        main_layout.addWidget(splitter)

    def _setup_menu(self):
        menubar = self.menuBar()

        # ── Game menu ────────────────────────────────────────────────
        game_menu = menubar.addMenu("Game")

        act_new = QAction("New Round", self)
        act_new.setShortcut("Ctrl+N")
        act_new.triggered.connect(lambda *_: self._new_round())
        game_menu.addAction(act_new)

        act_clear = QAction("Clear Selection", self)
        act_clear.triggered.connect(lambda *_: self._clear_selection())
        game_menu.addAction(act_clear)

        game_menu.addSeparator()

        act_exit = QAction("Exit", self)
        act_exit.triggered.connect(self.close)
        game_menu.addAction(act_exit)

        # ── Help menu ────────────────────────────────────────────────
        help_menu = menubar.addMenu("Help")

        act_about = QAction("About", self)
        act_about.triggered.connect(lambda *_: self._show_about())
        help_menu.addAction(act_about)

    def _connect_signals(self):
        # Lambda wrappers absorb the bool argument from clicked(bool)
        self._config_panel.new_round_button.clicked.connect(
            lambda *_: self._new_round()
        )
        self._config_panel.clear_button.clicked.connect(
            lambda *_: self._clear_selection()
        )
        self._config_panel.config_changed.connect(
            lambda: self.statusBar().showMessage(
                "Settings apply from the next round", _MESSAGE_TIMEOUT
            )
        )
        self._config_panel.display_changed.connect(self._on_display_changed)
        self._board.card_clicked.connect(self._on_card_clicked)

    # ── Slots ────────────────────────────────────────────────────────

    def _new_round(self):
        """Slot: discard the current round and generate a new one."""
        try:
            config = RoundConfig.from_dict(self._config_panel.get_config())
            distribution_set = generate_round(config)
        except ValueError as exc:
            QMessageBox.critical(
                self, "Round Generation Error",
                f"Could not generate a new round:\n\n{exc}",
            )
            self.statusBar().showMessage("Round generation failed")
            return

        self._round = distribution_set
        self._board.show_round(distribution_set,
                               self._config_panel.density_style())
        self._config_panel.set_progress(distribution_set.progress())
        self._config_panel.set_status(
            "Pick one plot from each row that shows the same sample."
        )
        self.statusBar().showMessage("New round ready", _MESSAGE_TIMEOUT)

    def _clear_selection(self):
        if self._round is None:
            return
        self._round.clear_selection()
        self._board.refresh_states()

    def _on_display_changed(self):
        try:
            self._board.set_density_style(self._config_panel.density_style())
        except Exception as exc:
            # Re-render failures are cosmetic; keep the round playable.
            print(f"[distmatch] Density re-render warning: {exc}",
                  file=sys.stderr)

    def _on_card_clicked(self, category: str, label: str):
        """Slot: a plot card was clicked."""
        if self._round is None or self._round.is_complete:
            return
        if self._round.selection.get(category) == label:
            self._round.deselect(category)
        else:
            self._round.select(category, label)
        self._board.refresh_states()

        if self._round.state == STATE_READY:
            self._evaluate()

    def _evaluate(self):
        result = self._round.evaluate()
        if result.status == STATUS_CONFIRMED:
            family = self._round.sample(result.identity).family
            triple = " / ".join(result.triple)
            self.statusBar().showMessage(
                f"Match! {triple} is the {family} sample", _MESSAGE_TIMEOUT
            )
            self._config_panel.set_status(f"Matched {triple}: {family}",
                                          'green')
        elif result.status == STATUS_REJECTED:
            self.statusBar().showMessage(
                "Wrong combination, try again.", _MESSAGE_TIMEOUT
            )
            self._config_panel.set_status(
                f"{' / '.join(result.triple)} do not belong together.", 'red'
            )

        self._board.refresh_states()
        progress = self._round.progress()
        self._config_panel.set_progress(progress)
        if progress.complete:
            self._on_round_complete()

    def _on_round_complete(self):
        families = ", ".join(
            f"{'/'.join(self._round.identity_map[s.identity])} = {s.family}"
            for s in self._round.samples
        )
        self._config_panel.set_status("All distributions matched!", 'green')
        QMessageBox.information(
            self, "Round Complete",
            f"All {self._round.size} distributions matched.\n\n{families}",
        )

    def _show_about(self):
        QMessageBox.about(
            self,
            f"About {APP_NAME}",
            f"<h3>{APP_NAME} v{APP_VERSION}</h3>"
            f"<p>Match each generated sample's density curve, box plot "
            f"and normal Q-Q plot.</p>"
            f"<p>Plot categories: {', '.join(CATEGORIES)}.</p>",
        )
