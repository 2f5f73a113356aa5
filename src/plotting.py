"""Drawing a fan chart render model with matplotlib."""

import math
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.patches import FancyBboxPatch, Wedge

from geometry import padded_angles
from models import RenderModel, RootCardGeometry, Sex

# Soft palette per generation
RING_FILLS = [
    "#fffffff2",
    "#f4f8fff2",
    "#f5fffaf2",
    "#fff9f4f2",
    "#faf5fff2",
    "#f5fcfff2",
    "#fff5f9f2",
]

SEX_COLORS = {
    Sex.MALE: "lightblue",
    Sex.FEMALE: "lightpink",
    Sex.UNKNOWN: "lightgray",
}


def _theta(angle: float) -> float:
    """Chart angle (0 = up, clockwise, radians) to matplotlib degrees."""
    return 90.0 - math.degrees(angle)


def card_text_rows(card: RootCardGeometry, has_subtitle: bool) -> tuple[float, float | None]:
    """Vertical centres (chart frame, y down) of the root card name and subtitle rows."""
    if not has_subtitle:
        return card.y + card.height / 2, None
    return card.y + card.height * 0.36, card.y + card.height * 0.72


def plot_fan_chart(model: RenderModel, output_path: Path | None = None):
    """
    Plot the fan chart described by `model`.

    Args:
        model: Render model from FanChartController.render_model()
        output_path: Path to save the output image. If None, displays interactively.
    """
    card = model.root_card.geometry
    w, h = card.viewport_width, card.viewport_height

    fig, ax = plt.subplots(figsize=(w / 100, h / 100), dpi=100)
    ax.set_xlim(-card.cx, w - card.cx)
    ax.set_ylim(-(h - card.cy), card.cy)
    ax.set_aspect("equal")
    ax.axis("off")

    for ring in model.rings:
        geom = ring.geometry
        fill = RING_FILLS[ring.generation % len(RING_FILLS)]
        mid_radius = (geom.inner_radius + geom.outer_radius) / 2
        band_radius = (geom.sex_band_inner + geom.sex_band_outer) / 2

        for view in ring.wedges:
            start, end = padded_angles(view.geometry, geom, mid_radius)
            ax.add_patch(
                Wedge(
                    (0, 0),
                    geom.outer_radius,
                    _theta(end),
                    _theta(start),
                    width=geom.outer_radius - geom.inner_radius,
                    facecolor=fill if view.occupied else "none",
                    hatch=None if view.occupied else "//",
                    edgecolor="#1f6feb" if view.selected else "#14233714",
                    linewidth=2 if view.selected else 1,
                )
            )

            if not view.occupied:
                continue

            band_start, band_end = padded_angles(view.geometry, geom, band_radius)
            ax.add_patch(
                Wedge(
                    (0, 0),
                    geom.sex_band_outer,
                    _theta(band_end),
                    _theta(band_start),
                    width=geom.sex_band_outer - geom.sex_band_inner,
                    facecolor=SEX_COLORS.get(view.slot.person.sex, "lightgray"),
                    edgecolor="none",
                    alpha=0.85,
                )
            )

            label = view.label
            text = label.name if not label.years else f"{label.name}\n{label.years}"
            ax.text(
                label.x,
                -label.y,
                text,
                rotation=-label.rotation_degrees,
                rotation_mode="anchor",
                ha="center",
                va="center",
                fontsize=max(4, 9 - ring.generation),
            )

    ax.add_patch(
        FancyBboxPatch(
            (card.x, -(card.y + card.height)),
            card.width,
            card.height,
            boxstyle=f"round,pad=0,rounding_size={card.corner_radius}",
            facecolor="white",
            edgecolor="#1f6feb" if model.selected and model.selected.generation == 0 else "gray",
        )
    )
    name_y, subtitle_y = card_text_rows(card, bool(model.root_card.subtitle))
    ax.text(0, -name_y, model.root_card.name, ha="center", va="center", fontsize=11, weight="bold")
    if subtitle_y is not None:
        ax.text(0, -subtitle_y, model.root_card.subtitle, ha="center", va="center", fontsize=8)

    fig.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
        print(f"Fan chart saved to {output_path}")
    else:
        plt.show()
    plt.close(fig)
