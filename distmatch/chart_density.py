"""
Density / histogram card for the Distribution Matcher.

Draws a density-category artifact either as its KDE curve or as the
histogram of the raw sample (density-normalised, so both styles share
a y-axis scale).  The sample's family name is never drawn; the card
only shows the artifact label.
"""

import numpy as np
from matplotlib.figure import Figure

from .constants import PLOT_PALETTE, CATEGORY_DENSITY, CATEGORY_TITLES
from .data_model import DerivedArtifact


def render_density(
    fig: Figure,
    artifact: DerivedArtifact,
    *,
    style: str = "kde",
    compact: bool = False,
) -> None:
    """Render a density artifact on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared).
    artifact : DerivedArtifact
        Artifact of the ``"density"`` category.
    style : str
        ``"kde"`` for the density curve, ``"histogram"`` for bars.
    compact : bool
        If ``True``, drop axis labels for small board cards.
    """
    if artifact.category != CATEGORY_DENSITY:
        raise ValueError(
            f"render_density needs a density artifact, got {artifact.category!r}"
        )
    fig.clf()
    pal = PLOT_PALETTE
    payload = artifact.payload
    ax = fig.add_subplot(111)

    if payload.values.size == 0:
        ax.text(0.5, 0.5, 'No data',
                transform=ax.transAxes, ha='center', va='center')
        return

    if style == "histogram":
        edges = payload.bin_edges
        widths = np.diff(edges)
        total = payload.bin_counts.sum()
        heights = payload.bin_counts / (total * widths) if total else payload.bin_counts
        ax.bar(
            edges[:-1], heights, width=widths, align='edge',
            color=pal['density_fill'], edgecolor='white',
            linewidth=0.5, alpha=0.85, zorder=3,
        )
    elif style == "kde":
        ax.plot(payload.xs, payload.ys, color=pal['density_line'],
                linewidth=2, zorder=3)
        ax.fill_between(payload.xs, payload.ys, color=pal['density_line'],
                        alpha=0.15, zorder=2)
    else:
        raise ValueError(f"Unknown density style: {style!r}")

    ax.set_ylim(bottom=0)
    ax.grid(linewidth=0.4, alpha=0.5)
    ax.set_title(f"{CATEGORY_TITLES[CATEGORY_DENSITY]} — {artifact.label}",
                 fontsize=9, fontweight='bold')
    if not compact:
        ax.set_xlabel("Value", fontsize=8)
        ax.set_ylabel("Density", fontsize=8)

    fig.tight_layout(pad=0.8)
