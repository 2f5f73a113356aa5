"""Tunable presentation constants for the fan chart."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FanChartConfig:
    # Generations
    default_generations: int = 4
    max_generations: int = 8

    # Viewport
    default_width: float = 900.0
    default_height: float = 700.0
    min_width: float = 600.0
    min_height: float = 520.0
    origin_y_ratio: float = 0.88
    max_radius_width_ratio: float = 0.48
    max_radius_height_ratio: float = 0.82

    # Root card
    card_min_height: float = 64.0
    card_max_height: float = 90.0
    card_height_ratio: float = 0.22  # of the max radius
    card_min_width: float = 240.0
    card_max_width: float = 340.0
    card_width_ratio: float = 0.42  # of the viewport width
    card_corner_radius: float = 16.0
    card_offset_y: float = 10.0
    inner_start_ratio: float = 0.62  # of the card height

    # Rings
    ring_fill_ratio: float = 0.96
    pad_base: float = 0.005
    pad_step: float = 0.002
    pad_max_extra: float = 0.01
    min_corner_radius: float = 4.0
    corner_ratio: float = 0.12
    sex_band_min: float = 3.0
    sex_band_ratio: float = 0.1

    # Labels
    name_limit: int = 22
    outer_name_limit: int = 18
    outer_name_from_generation: int = 4
    years_max_generation: int = 5
    max_rotation_degrees: float = 55.0
    ellipsis: str = "…"
    birth_prefix: str = "b. "
    death_prefix: str = "d. "
    unknown_name: str = "Unknown"

    def pad_angle(self, generation: int) -> float:
        return self.pad_base + min(self.pad_max_extra, self.pad_step * generation)

    def name_limit_for(self, generation: int) -> int:
        if generation >= self.outer_name_from_generation:
            return self.outer_name_limit
        return self.name_limit


DEFAULT_CONFIG = FanChartConfig()
