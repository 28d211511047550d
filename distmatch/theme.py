"""
Theme and stylesheet for the Distribution Matcher.

Provides the dark Catppuccin GUI stylesheet, the frame styles used to
mark selected and matched plot cards, and a helper for applying the
dark matplotlib style.
"""

from .constants import DARK_COLORS


def get_dark_stylesheet() -> str:
    """Generate the dark mode stylesheet."""
    c = DARK_COLORS
    return f"""
    QMainWindow, QWidget {{
        background-color: {c['bg']};
        color: {c['fg']};
        font-size: 13px;
    }}
    QGroupBox {{
        border: 1px solid {c['border']};
        border-radius: 6px;
        margin-top: 12px;
        padding-top: 16px;
        font-weight: bold;
        color: {c['accent']};
    }}
    QGroupBox::title {{
        subcontrol-origin: margin;
        left: 12px;
        padding: 0 6px;
    }}
    QPushButton {{
        background-color: {c['bg_widget']};
        color: {c['fg']};
        border: 1px solid {c['border']};
        border-radius: 4px;
        padding: 6px 16px;
        min-height: 24px;
    }}
    QPushButton:hover {{
        background-color: {c['selection']};
        border-color: {c['accent']};
    }}
    QPushButton:pressed {{
        background-color: {c['accent']};
        color: {c['bg']};
    }}
    QPushButton:disabled {{
        color: {c['fg_dim']};
        background-color: {c['bg']};
    }}
    QLineEdit, QSpinBox, QDoubleSpinBox, QComboBox {{
        background-color: {c['bg_input']};
        color: {c['fg']};
        border: 1px solid {c['border']};
        border-radius: 4px;
        padding: 4px 8px;
        min-height: 22px;
    }}
    QLineEdit:focus, QSpinBox:focus, QDoubleSpinBox:focus, QComboBox:focus {{
        border-color: {c['accent']};
    }}
    QComboBox QAbstractItemView {{
        background-color: {c['bg_widget']};
        color: {c['fg']};
        border: 1px solid {c['border']};
        selection-background-color: {c['selection']};
    }}
    QProgressBar {{
        background-color: {c['bg_input']};
        border: 1px solid {c['border']};
        border-radius: 4px;
        text-align: center;
        color: {c['fg']};
    }}
    QProgressBar::chunk {{
        background-color: {c['green']};
        border-radius: 3px;
    }}
    QStatusBar {{
        background-color: {c['bg_alt']};
        color: {c['fg_dim']};
        border-top: 1px solid {c['border']};
    }}
    QMenuBar {{
        background-color: {c['bg_alt']};
        color: {c['fg']};
    }}
    QMenuBar::item:selected, QMenu::item:selected {{
        background-color: {c['selection']};
    }}
    QMenu {{
        background-color: {c['bg_widget']};
        color: {c['fg']};
        border: 1px solid {c['border']};
    }}
    QToolTip {{
        background-color: {c['bg_widget']};
        color: {c['fg']};
        border: 1px solid {c['accent']};
        padding: 6px;
        border-radius: 4px;
    }}
    QCheckBox {{
        color: {c['fg']};
        spacing: 8px;
    }}
    QLabel {{
        color: {c['fg']};
    }}
    """


def card_stylesheet(state: str) -> str:
    """Frame style for a plot card: ``"idle"``, ``"selected"`` or ``"matched"``."""
    c = DARK_COLORS
    border = {
        'idle': c['border'],
        'selected': c['accent'],
        'matched': c['green'],
    }.get(state, c['border'])
    width = 1 if state == 'idle' else 3
    return (
        f"QFrame#PlotCard {{ border: {width}px solid {border}; "
        f"border-radius: 6px; background-color: {c['bg_alt']}; }}"
    )


def apply_plot_style(style_dict: dict) -> None:
    """Apply a style dictionary to matplotlib rcParams.

    Parameters
    ----------
    style_dict : dict
        Usually ``PLOT_STYLE_DARK``.
    """
    import matplotlib as mpl
    for key, value in style_dict.items():
        mpl.rcParams[key] = value
