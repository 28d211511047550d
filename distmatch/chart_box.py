"""
Box-plot card for the Distribution Matcher.

Draws from the precomputed ``BoxPayload`` via ``Axes.bxp`` rather than
letting matplotlib recompute quartiles, so the picture always agrees
with ``descriptive_stats``.  Fence positions are drawn as faint dashed
lines and outliers as red markers.
"""

from matplotlib.figure import Figure

from .constants import PLOT_PALETTE, CATEGORY_BOX, CATEGORY_TITLES
from .data_model import DerivedArtifact


def render_box(
    fig: Figure,
    artifact: DerivedArtifact,
    *,
    show_fences: bool = True,
    compact: bool = False,
) -> None:
    """Render a box artifact on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared).
    artifact : DerivedArtifact
        Artifact of the ``"box"`` category.
    show_fences : bool
        Draw the 1.5 IQR fences as horizontal lines.
    compact : bool
        If ``True``, drop axis labels for small board cards.
    """
    if artifact.category != CATEGORY_BOX:
        raise ValueError(
            f"render_box needs a box artifact, got {artifact.category!r}"
        )
    fig.clf()
    pal = PLOT_PALETTE
    box = artifact.payload
    ax = fig.add_subplot(111)

    if box.core.size == 0 and box.outliers.size == 0:
        ax.text(0.5, 0.5, 'No data',
                transform=ax.transAxes, ha='center', va='center')
        return

    stats = [{
        'med': box.median,
        'q1': box.q1,
        'q3': box.q3,
        'whislo': box.whisker_low,
        'whishi': box.whisker_high,
        'fliers': box.outliers,
        'label': artifact.label,
    }]
    ax.bxp(
        stats, showfliers=True, patch_artist=True, widths=0.5,
        boxprops=dict(facecolor=pal['box_face'], edgecolor=pal['box_edge'],
                      alpha=0.85),
        medianprops=dict(color=pal['median_line'], linewidth=2),
        flierprops=dict(marker='o', markersize=4,
                        markerfacecolor=pal['outlier_marker'],
                        markeredgecolor=pal['outlier_marker']),
    )

    if show_fences:
        for fence in (box.lower_fence, box.upper_fence):
            ax.axhline(fence, color=pal['fence_line'], linewidth=0.8,
                       linestyle='--', zorder=1)

    ax.set_xticks([])
    ax.grid(axis='y', linewidth=0.4, alpha=0.5)
    ax.set_title(f"{CATEGORY_TITLES[CATEGORY_BOX]} — {artifact.label}",
                 fontsize=9, fontweight='bold')
    if not compact:
        ax.set_ylabel("Value", fontsize=8)

    fig.tight_layout(pad=0.8)
