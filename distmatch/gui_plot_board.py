"""
Plot board (right side) for the Distribution Matcher.

Three rows of clickable plot cards, one row per category, each card
hosting a small matplotlib FigureCanvas.  The board only displays a
round and reports clicks; all match logic stays in the round.
"""

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGridLayout, QFrame, QLabel,
)
from PySide6.QtCore import Qt, Signal

import matplotlib
matplotlib.use('QtAgg')
from matplotlib.figure import Figure
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas

from .constants import (
    CATEGORIES, CATEGORY_DENSITY, CATEGORY_BOX, CATEGORY_QQ,
    CATEGORY_TITLES, DARK_COLORS, PLOT_STYLE_DARK,
)
from .data_model import DerivedArtifact
from .theme import apply_plot_style, card_stylesheet
from .chart_density import render_density
from .chart_box import render_box
from .chart_qq import render_qq


def render_artifact(fig: Figure, artifact: DerivedArtifact, *,
                    density_style: str = "kde", compact: bool = True) -> None:
    """Dispatch *artifact* to the renderer for its category."""
    if artifact.category == CATEGORY_DENSITY:
        render_density(fig, artifact, style=density_style, compact=compact)
    elif artifact.category == CATEGORY_BOX:
        render_box(fig, artifact, compact=compact)
    elif artifact.category == CATEGORY_QQ:
        render_qq(fig, artifact, compact=compact)
    else:
        raise ValueError(f"Unknown plot category: {artifact.category!r}")


class _PlotCard(QFrame):
    """Single clickable card with a figure canvas."""

    clicked = Signal(str, str)  # category, label

    def __init__(self, category: str, parent=None):
        super().__init__(parent)
        self.setObjectName("PlotCard")
        self._category = category
        self._label = ""
        self._state = "idle"

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        self._fig = Figure(figsize=(3.2, 2.4))
        self._fig.set_facecolor(DARK_COLORS['bg_alt'])
        self._canvas = FigureCanvas(self._fig)
        # Let clicks on the canvas reach the card
        self._canvas.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        layout.addWidget(self._canvas)

        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.set_state("idle")

    @property
    def label(self) -> str:
        return self._label

    def show_artifact(self, artifact: DerivedArtifact, density_style: str):
        self._label = artifact.label
        render_artifact(self._fig, artifact, density_style=density_style)
        self._canvas.draw_idle()

    def set_state(self, state: str) -> None:
        """``"idle"``, ``"selected"`` or ``"matched"``."""
        self._state = state
        self.setStyleSheet(card_stylesheet(state))

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton and self._label:
            self.clicked.emit(self._category, self._label)
        super().mousePressEvent(event)


class PlotBoard(QWidget):
    """Grid of plot cards: one row per category, one column per label."""

    card_clicked = Signal(str, str)  # category, label

    def __init__(self, parent=None):
        super().__init__(parent)
        self._round = None
        self._density_style = "kde"
        self._cards = {cat: [] for cat in CATEGORIES}

        self._layout = QGridLayout(self)
        self._layout.setContentsMargins(4, 4, 4, 4)
        self._layout.setSpacing(6)

        for row, cat in enumerate(CATEGORIES):
            lbl = QLabel(CATEGORY_TITLES[cat])
            lbl.setStyleSheet(
                f"color: {DARK_COLORS['accent']}; font-weight: bold;"
            )
            lbl.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            self._layout.addWidget(lbl, row, 0)

        apply_plot_style(PLOT_STYLE_DARK)

    def _ensure_cards(self, n: int) -> None:
        for row, cat in enumerate(CATEGORIES):
            cards = self._cards[cat]
            while len(cards) < n:
                card = _PlotCard(cat)
                card.clicked.connect(self.card_clicked.emit)
                self._layout.addWidget(card, row, len(cards) + 1)
                cards.append(card)
            for idx, card in enumerate(cards):
                card.setVisible(idx < n)

    def show_round(self, distribution_set, density_style: str = "kde") -> None:
        """Render every artifact of *distribution_set*."""
        self._round = distribution_set
        self._density_style = density_style
        apply_plot_style(PLOT_STYLE_DARK)
        self._ensure_cards(distribution_set.size)
        for cat in CATEGORIES:
            for card, artifact in zip(self._cards[cat],
                                      distribution_set.artifacts(cat)):
                card.show_artifact(artifact, density_style)
        self.refresh_states()

    def set_density_style(self, density_style: str) -> None:
        if self._round is None or density_style == self._density_style:
            return
        self._density_style = density_style
        for card, artifact in zip(self._cards[CATEGORY_DENSITY],
                                  self._round.artifacts(CATEGORY_DENSITY)):
            card.show_artifact(artifact, density_style)

    def refresh_states(self) -> None:
        """Re-derive every card's frame from the round's match state."""
        if self._round is None:
            return
        selection = self._round.selection
        evaluator = self._round.evaluator
        for cat in CATEGORIES:
            for card in self._cards[cat]:
                if not card.label:
                    continue
                if evaluator.is_locked(cat, card.label):
                    card.set_state("matched")
                elif selection.get(cat) == card.label:
                    card.set_state("selected")
                else:
                    card.set_state("idle")
