"""Polar geometry of the fan chart: root card, rings and wedges."""

import math

from config import DEFAULT_CONFIG, FanChartConfig
from models import FanGeometry, RingGeometry, RootCardGeometry, WedgeGeometry

# The fan opens upward through a half circle
FAN_START = -math.pi / 2
FAN_END = math.pi / 2

EPSILON = 1e-12


def polar_to_xy(angle: float, radius: float) -> tuple[float, float]:
    """Point at `radius` along `angle` (0 = up, clockwise), y pointing down."""
    return (radius * math.sin(angle), -radius * math.cos(angle))


def wedge_geometry(ring: RingGeometry, slot: int) -> WedgeGeometry:
    """Equal share of the half circle for `slot`, independent of occupancy."""
    count = 2**ring.generation
    span = FAN_END - FAN_START
    start = FAN_START + span * (slot / count)
    end = FAN_START + span * ((slot + 1) / count)
    radius = (ring.inner_radius + ring.outer_radius) / 2
    return WedgeGeometry(
        start_angle=start,
        end_angle=end,
        centroid=polar_to_xy((start + end) / 2, radius),
    )


def ring_wedges(ring: RingGeometry) -> list[WedgeGeometry]:
    return [wedge_geometry(ring, slot) for slot in range(2**ring.generation)]


def padded_angles(wedge: WedgeGeometry, ring: RingGeometry, radius: float) -> tuple[float, float]:
    """
    Angular extent of a wedge at `radius` once the ring padding is applied.

    The padding is a constant linear gap of pad_angle * outer_radius, so inner
    edges lose a larger angle than outer ones. A wedge narrower than its gap
    collapses onto its mid angle.
    """
    if radius <= EPSILON or ring.pad_angle <= 0:
        return wedge.start_angle, wedge.end_angle

    ratio = ring.outer_radius / radius * math.sin(ring.pad_angle / 2)
    half_pad = math.asin(min(1.0, ratio))
    if wedge.end_angle - wedge.start_angle - 2 * half_pad <= EPSILON:
        return wedge.mid_angle, wedge.mid_angle
    return wedge.start_angle + half_pad, wedge.end_angle - half_pad


class RadialGeometryPlanner:
    """Turns a viewport size and generation count into ring radii and padding."""

    def __init__(self, config: FanChartConfig = DEFAULT_CONFIG):
        self.config = config

    def plan(self, width: float, height: float, max_generation: int) -> FanGeometry:
        cfg = self.config
        w = max(cfg.min_width, width)
        h = max(cfg.min_height, height)

        max_radius = min(w * cfg.max_radius_width_ratio, h * cfg.max_radius_height_ratio)

        card_height = max(
            cfg.card_min_height, min(cfg.card_max_height, max_radius * cfg.card_height_ratio)
        )
        card_width = max(cfg.card_min_width, min(cfg.card_max_width, w * cfg.card_width_ratio))
        inner_start = card_height * cfg.inner_start_ratio

        root_card = RootCardGeometry(
            cx=w / 2,
            cy=h * cfg.origin_y_ratio,
            width=card_width,
            height=card_height,
            x=-card_width / 2,
            y=-card_height / 2 + cfg.card_offset_y,
            corner_radius=cfg.card_corner_radius,
            inner_start=inner_start,
            max_radius=max_radius,
            viewport_width=w,
            viewport_height=h,
        )

        ring_width = (max_radius - inner_start) / max(1, max_generation)
        rings = []
        for generation in range(1, max_generation + 1):
            inner = inner_start + (generation - 1) * ring_width
            rings.append(
                RingGeometry(
                    generation=generation,
                    inner_radius=inner,
                    outer_radius=inner + ring_width * cfg.ring_fill_ratio,
                    ring_width=ring_width,
                    pad_angle=cfg.pad_angle(generation),
                    corner_radius=max(cfg.min_corner_radius, ring_width * cfg.corner_ratio),
                    sex_band_inner=inner + 1,
                    sex_band_outer=inner + max(cfg.sex_band_min, ring_width * cfg.sex_band_ratio),
                )
            )

        return FanGeometry(root_card=root_card, rings=rings)


def hit_test(geometry: FanGeometry, x: float, y: float) -> tuple[int, int] | None:
    """
    Map a viewport point to the (generation, slot) under it.

    The root card answers (0, 0). Points in the padding between rings or
    between wedges, below the fan or outside the outermost ring answer None.
    """
    card = geometry.root_card
    dx = x - card.cx
    dy = y - card.cy

    if card.x <= dx <= card.x + card.width and card.y <= dy <= card.y + card.height:
        return (0, 0)

    radius = math.hypot(dx, dy)
    angle = math.atan2(dx, -dy)
    if angle < FAN_START or angle > FAN_END:
        return None

    for ring in geometry.rings:
        if ring.inner_radius <= radius <= ring.outer_radius:
            count = 2**ring.generation
            slot = min(int((angle - FAN_START) / (FAN_END - FAN_START) * count), count - 1)
            start, end = padded_angles(wedge_geometry(ring, slot), ring, radius)
            if not start <= angle <= end:
                return None
            return (ring.generation, slot)
    return None
