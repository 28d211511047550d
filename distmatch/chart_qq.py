"""
Q-Q card for the Distribution Matcher.

Theoretical normal quantiles on the x-axis, sorted sample on the
y-axis, with the artifact's reference line drawn dashed in red.  The
reference endpoints come from the payload (fixed identity segment by
default), not from the data range.
"""

from matplotlib.figure import Figure

from .constants import PLOT_PALETTE, CATEGORY_QQ, CATEGORY_TITLES
from .data_model import DerivedArtifact


def render_qq(
    fig: Figure,
    artifact: DerivedArtifact,
    *,
    compact: bool = False,
) -> None:
    """Render a Q-Q artifact on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared).
    artifact : DerivedArtifact
        Artifact of the ``"qq"`` category.
    compact : bool
        If ``True``, drop axis labels for small board cards.
    """
    if artifact.category != CATEGORY_QQ:
        raise ValueError(
            f"render_qq needs a qq artifact, got {artifact.category!r}"
        )
    fig.clf()
    pal = PLOT_PALETTE
    qq = artifact.payload
    ax = fig.add_subplot(111)

    if qq.empirical.size == 0:
        ax.text(0.5, 0.5, 'No data',
                transform=ax.transAxes, ha='center', va='center')
        return

    ax.scatter(qq.theoretical, qq.empirical, s=8, alpha=0.7,
               color=pal['qq_marker'], edgecolors='none', zorder=3)

    (x0, y0), (x1, y1) = qq.reference_line
    ax.plot([x0, x1], [y0, y1], color=pal['reference_line'],
            linewidth=1.2, linestyle='--', zorder=4)

    ax.grid(linewidth=0.4, alpha=0.5)
    ax.set_title(f"{CATEGORY_TITLES[CATEGORY_QQ]} — {artifact.label}",
                 fontsize=9, fontweight='bold')
    if not compact:
        ax.set_xlabel("Theoretical Quantiles (Normal)", fontsize=8)
        ax.set_ylabel("Sample Quantiles", fontsize=8)

    fig.tight_layout(pad=0.8)
