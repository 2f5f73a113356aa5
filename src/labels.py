"""Wedge label planning: truncation, years sub-label and rotation."""

import math
import re

from config import DEFAULT_CONFIG, FanChartConfig
from models import LabelPlan, Person, SlotNode, WedgeGeometry

YEAR_PATTERN = re.compile(r"\d{4}")


def safe_text(value) -> str:
    return ("" if value is None else str(value)).strip()


def last_year(text: str | None) -> str:
    """Return the last 4-digit run in a free text date, or ''."""
    matches = YEAR_PATTERN.findall(safe_text(text))
    return matches[-1] if matches else ""


def truncate(text: str | None, limit: int, ellipsis: str = "…") -> tuple[str, bool]:
    """Cut `text` to at most `limit` characters, the ellipsis included."""
    s = safe_text(text)
    if len(s) <= limit:
        return s, False
    return s[: max(0, limit - len(ellipsis))] + ellipsis, True


def format_years(person: Person | None, config: FanChartConfig = DEFAULT_CONFIG) -> str:
    """
    Build the years sub-label of a person.

    Returns "1850–1920" when both years are known, otherwise the birth or the
    death year with its prefix, or an empty string.
    """
    if person is None:
        return ""
    birth_year = last_year(person.birth)
    death_year = last_year(person.death)
    if birth_year and death_year:
        return f"{birth_year}–{death_year}"
    if birth_year:
        return f"{config.birth_prefix}{birth_year}"
    if death_year:
        return f"{config.death_prefix}{death_year}"
    return ""


def person_subtitle(person: Person | None, config: FanChartConfig = DEFAULT_CONFIG) -> str:
    """Years and birth place joined for the root card and the detail panel."""
    if person is None:
        return ""
    parts = [format_years(person, config), safe_text(person.birth_place)]
    return " · ".join(p for p in parts if p)


class LabelPlanner:
    def __init__(self, config: FanChartConfig = DEFAULT_CONFIG):
        self.config = config

    def plan_label(self, slot: SlotNode, wedge: WedgeGeometry, generation: int) -> LabelPlan | None:
        """Plan the label of an occupied slot; empty slots get None. Pure."""
        if not slot.occupied:
            return None
        cfg = self.config
        person = slot.person

        limit = cfg.name_limit_for(generation)
        source = safe_text(person.name)
        name, truncated = truncate(source, limit, cfg.ellipsis)

        years = None
        if generation <= cfg.years_max_generation:
            years = format_years(person, cfg) or None

        degrees = math.degrees(wedge.mid_angle)
        rotation = max(-cfg.max_rotation_degrees, min(cfg.max_rotation_degrees, degrees))

        x, y = wedge.centroid
        return LabelPlan(
            name=name,
            truncated=truncated,
            years=years,
            rotation_degrees=rotation,
            x=x,
            y=y,
        )
