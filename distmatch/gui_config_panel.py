"""
Configuration panel (left side) for the Distribution Matcher.

Seed, KDE bandwidth and method, density card style, Q-Q reference
line mode, progress, and the New Round button.
"""

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFormLayout, QGroupBox,
    QLabel, QPushButton, QComboBox, QCheckBox, QSpinBox,
    QDoubleSpinBox, QProgressBar,
)
from PySide6.QtCore import Signal

from .constants import (
    DARK_COLORS, DEFAULT_BANDWIDTH, DEFAULT_KDE_METHOD,
    DEFAULT_DENSITY_STYLE, DEFAULT_QQ_REFERENCE, QQ_REFERENCE_QUARTILE,
    DEFAULT_N_SAMPLES,
)
from .data_model import Progress


class ConfigPanel(QWidget):
    """Left-side panel with round settings and progress."""

    # Signals
    config_changed = Signal()
    display_changed = Signal()

    _KDE_METHODS = [
        ('exact', 'Exact (direct sum)'),
        ('binned', 'Binned (FFT)'),
    ]
    _DENSITY_STYLES = [
        ('kde', 'Density curve'),
        ('histogram', 'Histogram'),
    ]
    _QQ_REFERENCES = [
        ('identity', 'Identity line (fixed)'),
        (QQ_REFERENCE_QUARTILE, 'Quartile fit'),
    ]

    def __init__(self, parent=None):
        super().__init__(parent)
        self._setup_ui()
        self._connect_signals()

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(8)

        # ── Group 1: Randomness ──────────────────────────────────────
        grp_seed = QGroupBox("Randomness")
        seed_layout = QVBoxLayout(grp_seed)
        seed_layout.setSpacing(4)

        self._chk_fixed_seed = QCheckBox("Use fixed seed")
        self._chk_fixed_seed.setChecked(False)
        seed_layout.addWidget(self._chk_fixed_seed)

        seed_row = QHBoxLayout()
        self._lbl_seed = QLabel("Seed:")
        self._spn_seed = QSpinBox()
        self._spn_seed.setRange(0, 2_147_483_647)
        self._spn_seed.setValue(42)
        self._spn_seed.setVisible(False)
        self._lbl_seed.setVisible(False)
        seed_row.addWidget(self._lbl_seed)
        seed_row.addWidget(self._spn_seed)
        seed_row.addStretch()
        seed_layout.addLayout(seed_row)

        layout.addWidget(grp_seed)

        # ── Group 2: Density estimate ────────────────────────────────
        grp_kde = QGroupBox("Density Estimate")
        kde_layout = QFormLayout(grp_kde)
        kde_layout.setSpacing(4)

        self._spn_bandwidth = QDoubleSpinBox()
        self._spn_bandwidth.setRange(0.05, 10.0)
        self._spn_bandwidth.setSingleStep(0.05)
        self._spn_bandwidth.setDecimals(2)
        self._spn_bandwidth.setValue(DEFAULT_BANDWIDTH)
        kde_layout.addRow("Bandwidth:", self._spn_bandwidth)

        self._cmb_method = QComboBox()
        for key, label in self._KDE_METHODS:
            self._cmb_method.addItem(label, key)
        self._cmb_method.setCurrentIndex(
            [k for k, _ in self._KDE_METHODS].index(DEFAULT_KDE_METHOD)
        )
        kde_layout.addRow("Method:", self._cmb_method)

        self._cmb_style = QComboBox()
        for key, label in self._DENSITY_STYLES:
            self._cmb_style.addItem(label, key)
        self._cmb_style.setCurrentIndex(
            [k for k, _ in self._DENSITY_STYLES].index(DEFAULT_DENSITY_STYLE)
        )
        self._cmb_style.setToolTip(
            "How the density cards are drawn.  Changing this only\n"
            "re-renders the board; the round stays the same."
        )
        kde_layout.addRow("Cards show:", self._cmb_style)

        layout.addWidget(grp_kde)

        # ── Group 3: Q-Q reference ───────────────────────────────────
        grp_qq = QGroupBox("Q-Q Reference Line")
        qq_layout = QFormLayout(grp_qq)
        qq_layout.setSpacing(4)

        self._cmb_qq = QComboBox()
        for key, label in self._QQ_REFERENCES:
            self._cmb_qq.addItem(label, key)
        qq_layout.addRow("Line:", self._cmb_qq)

        layout.addWidget(grp_qq)

        # ── Group 4: Progress ────────────────────────────────────────
        grp_progress = QGroupBox("Progress")
        prog_layout = QVBoxLayout(grp_progress)
        prog_layout.setSpacing(4)

        self._progress = QProgressBar()
        self._progress.setRange(0, DEFAULT_N_SAMPLES)
        self._progress.setValue(0)
        self._progress.setFormat("%v / %m matched")
        prog_layout.addWidget(self._progress)

        self._lbl_status = QLabel("")
        self._lbl_status.setWordWrap(True)
        self._lbl_status.setStyleSheet(
            f"color: {DARK_COLORS['fg_dim']}; font-size: 11px;"
        )
        prog_layout.addWidget(self._lbl_status)

        layout.addWidget(grp_progress)

        # ── Actions ──────────────────────────────────────────────────
        c = DARK_COLORS
        self._btn_new_round = QPushButton("New Round")
        self._btn_new_round.setStyleSheet(
            f"QPushButton {{ background-color: {c['accent']}; "
            f"color: {c['bg']}; font-weight: bold; "
            f"font-size: 14px; padding: 10px; }}"
            f"QPushButton:hover {{ background-color: {c['accent_hover']}; }}"
        )
        layout.addWidget(self._btn_new_round)

        self._btn_clear = QPushButton("Clear Selection")
        layout.addWidget(self._btn_clear)

        layout.addStretch()

    # ── Signal connections ───────────────────────────────────────────

    def _connect_signals(self):
        self._chk_fixed_seed.toggled.connect(self._on_seed_toggled)

        # Lambdas absorb the argument each signal passes, since
        # config_changed / display_changed take none.
        self._chk_fixed_seed.toggled.connect(
            lambda *_: self.config_changed.emit()
        )
        self._spn_seed.valueChanged.connect(
            lambda *_: self.config_changed.emit()
        )
        self._spn_bandwidth.valueChanged.connect(
            lambda *_: self.config_changed.emit()
        )
        self._cmb_method.currentIndexChanged.connect(
            lambda *_: self.config_changed.emit()
        )
        self._cmb_qq.currentIndexChanged.connect(
            lambda *_: self.config_changed.emit()
        )
        self._cmb_style.currentIndexChanged.connect(
            lambda *_: self.display_changed.emit()
        )

    def _on_seed_toggled(self, checked):
        self._lbl_seed.setVisible(checked)
        self._spn_seed.setVisible(checked)

    # ── Public API ───────────────────────────────────────────────────

    def get_config(self) -> dict:
        """Return the round settings as a dict for ``RoundConfig.from_dict``."""
        qq_key = self._cmb_qq.currentData()
        return {
            'seed': self._spn_seed.value() if self._chk_fixed_seed.isChecked() else None,
            'bandwidth': self._spn_bandwidth.value(),
            'kde_method': self._cmb_method.currentData(),
            'qq_reference': (
                QQ_REFERENCE_QUARTILE if qq_key == QQ_REFERENCE_QUARTILE
                else DEFAULT_QQ_REFERENCE
            ),
        }

    def density_style(self) -> str:
        return self._cmb_style.currentData()

    def set_progress(self, progress: Progress) -> None:
        self._progress.setRange(0, max(progress.total, 1))
        self._progress.setValue(progress.confirmed_count)

    def set_status(self, text: str, color_key: str = 'fg_dim') -> None:
        self._lbl_status.setText(text)
        self._lbl_status.setStyleSheet(
            f"color: {DARK_COLORS[color_key]}; font-size: 11px;"
        )

    @property
    def new_round_button(self) -> QPushButton:
        """Access to the New Round button for external signal connection."""
        return self._btn_new_round

    @property
    def clear_button(self) -> QPushButton:
        """Access to the Clear Selection button for external signal connection."""
        return self._btn_clear
