"""
Constants for the Distribution Matcher.

Centralises category names, label alphabets, statistical defaults,
the GUI colour palette and the matplotlib style dicts.
"""

# ── Plot categories (one artifact per sample in each) ───────────────────
CATEGORY_DENSITY = "density"
CATEGORY_BOX = "box"
CATEGORY_QQ = "qq"
CATEGORIES = (CATEGORY_DENSITY, CATEGORY_BOX, CATEGORY_QQ)

CATEGORY_TITLES = {
    CATEGORY_DENSITY: "Probability Density",
    CATEGORY_BOX: "Box Plot",
    CATEGORY_QQ: "Q-Q Plot",
}

# ── Evaluation outcomes ─────────────────────────────────────────────────
STATUS_CONFIRMED = "confirmed"
STATUS_REJECTED = "rejected"
STATUS_INCOMPLETE = "incomplete"

# ── Selection states ────────────────────────────────────────────────────
STATE_EMPTY = "empty"
STATE_PARTIAL = "partial"
STATE_READY = "ready"

# ── Round defaults ──────────────────────────────────────────────────────
DEFAULT_N_SAMPLES = 3
DEFAULT_BANDWIDTH = 0.5
KDE_POINTS = 200
DEFAULT_KDE_METHOD = "exact"      # "exact", "binned"
DEFAULT_DENSITY_STYLE = "kde"     # "kde", "histogram"
FENCE_FACTOR = 1.5

# Outliers land this far (min, max) beyond the sample range
OUTLIER_BAND = (2.0, 12.0)

# Identity line in quantile space, fixed rather than fit to data
DEFAULT_QQ_REFERENCE = ((-3.0, -3.0), (3.0, 3.0))
QQ_REFERENCE_QUARTILE = "quartile"

HISTOGRAM_MIN_BINS = 10
HISTOGRAM_MAX_BINS = 50

# Sample identities: 9 base-36 characters
IDENTITY_LENGTH = 9
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

# ── Font family fallback chain ──────────────────────────────────────────
FONT_FAMILIES = [
    "Segoe UI", "DejaVu Sans", "Liberation Sans", "Noto Sans",
    "Ubuntu", "Helvetica", "Arial", "sans-serif",
]

# ── Dark Catppuccin-inspired GUI colour palette ──────────────────────────
DARK_COLORS = {
    'bg':           '#1e1e2e',
    'bg_alt':       '#252536',
    'surface0':     '#313244',
    'bg_widget':    '#2a2a3c',
    'bg_input':     '#333348',
    'fg':           '#cdd6f4',
    'fg_dim':       '#9399b2',
    'fg_bright':    '#ffffff',
    'accent':       '#89b4fa',
    'accent_hover': '#74c7ec',
    'green':        '#a6e3a1',
    'yellow':       '#f9e2af',
    'red':          '#f38ba8',
    'orange':       '#fab387',
    'border':       '#45475a',
    'overlay0':     '#6c7086',
    'selection':    '#45475a',
}

# ── Plot palette, one colour family per category ────────────────────────
PLOT_PALETTE = {
    'density_line':   '#1f77b4',
    'density_fill':   '#4472C4',
    'box_face':       '#ff7f0e',
    'box_edge':       '#C55A11',
    'median_line':    '#333333',
    'fence_line':     '#999999',
    'outlier_marker': '#C00000',
    'qq_marker':      '#2ca02c',
    'reference_line': '#C00000',
}

# ── Matplotlib dark-theme style dict (GUI preview) ──────────────────────
PLOT_STYLE_DARK = {
    'figure.facecolor':  DARK_COLORS['bg_alt'],
    'axes.facecolor':    DARK_COLORS['bg_widget'],
    'axes.edgecolor':    DARK_COLORS['border'],
    'axes.labelcolor':   DARK_COLORS['fg'],
    'text.color':        DARK_COLORS['fg'],
    'xtick.color':       DARK_COLORS['fg_dim'],
    'ytick.color':       DARK_COLORS['fg_dim'],
    'xtick.labelsize':   7,
    'ytick.labelsize':   7,
    'axes.labelsize':    8,
    'axes.titlesize':    9,
    'grid.color':        DARK_COLORS['border'],
}


# ── Label alphabets ─────────────────────────────────────────────────────
def letter_label(index: int) -> str:
    """Convert 0-based index to a, b, …, z, aa, ab, …

    Examples
    --------
    >>> letter_label(0)
    'a'
    >>> letter_label(25)
    'z'
    >>> letter_label(26)
    'aa'
    """
    if index < 0:
        raise ValueError(f"letter_label requires non-negative index, got {index}")
    letters = ""
    while True:
        letters = chr(ord('a') + index % 26) + letters
        index = index // 26 - 1
        if index < 0:
            break
    return letters


def number_label(index: int) -> str:
    """Convert 0-based index to ``"1"``, ``"2"``, …"""
    if index < 0:
        raise ValueError(f"number_label requires non-negative index, got {index}")
    return str(index + 1)


_ROMAN = [
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
]


def roman_label(index: int) -> str:
    """Convert 0-based index to I, II, III, IV, …

    Examples
    --------
    >>> roman_label(0)
    'I'
    >>> roman_label(3)
    'IV'
    """
    if index < 0:
        raise ValueError(f"roman_label requires non-negative index, got {index}")
    value = index + 1
    out = ""
    for weight, symbol in _ROMAN:
        while value >= weight:
            out += symbol
            value -= weight
    return out


LABEL_FUNCTIONS = {
    CATEGORY_DENSITY: letter_label,
    CATEGORY_BOX: number_label,
    CATEGORY_QQ: roman_label,
}


def category_labels(category: str, n: int) -> list:
    """Return the first *n* display labels of *category*'s alphabet."""
    try:
        fn = LABEL_FUNCTIONS[category]
    except KeyError:
        raise ValueError(f"Unknown plot category: {category!r}") from None
    return [fn(i) for i in range(n)]


def base36(value: int, width: int = IDENTITY_LENGTH) -> str:
    """Encode a non-negative integer as a zero-padded base-36 string."""
    if value < 0:
        raise ValueError(f"base36 requires non-negative value, got {value}")
    digits = ""
    while value:
        value, rem = divmod(value, 36)
        digits = _BASE36[rem] + digits
    return digits.rjust(width, "0")
