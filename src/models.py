"""Data classes for fan chart entities."""

from dataclasses import dataclass, field
from enum import IntEnum


class Sex(IntEnum):
    # Project-wide numeric convention, shared with the data store
    MALE = 0
    FEMALE = 1
    UNKNOWN = 2


PersonId = int | str


@dataclass(frozen=True)
class Person:
    id: PersonId
    name: str
    sex: Sex = Sex.UNKNOWN
    birth: str | None = None  # free text date expression
    death: str | None = None
    birth_place: str | None = None
    death_place: str | None = None
    occupation: str | None = None
    hidden: bool = False


@dataclass(frozen=True)
class ParentLink:
    child: PersonId
    father: PersonId | None = None
    mother: PersonId | None = None


@dataclass(frozen=True)
class SlotNode:
    """A fixed (generation, slot) position in the ancestor tree."""

    generation: int
    slot: int
    person: Person | None = None

    @property
    def occupied(self) -> bool:
        return self.person is not None


@dataclass(frozen=True)
class RootCardGeometry:
    cx: float  # fan origin in viewport coordinates
    cy: float
    width: float
    height: float
    x: float  # card top-left, relative to the origin
    y: float
    corner_radius: float
    inner_start: float
    max_radius: float
    viewport_width: float
    viewport_height: float


@dataclass(frozen=True)
class RingGeometry:
    generation: int
    inner_radius: float
    outer_radius: float
    ring_width: float
    pad_angle: float
    corner_radius: float
    sex_band_inner: float
    sex_band_outer: float


@dataclass(frozen=True)
class WedgeGeometry:
    # Radians; 0 points straight up and angles grow clockwise
    start_angle: float
    end_angle: float
    centroid: tuple[float, float]  # relative to the origin, y pointing down

    @property
    def mid_angle(self) -> float:
        return (self.start_angle + self.end_angle) / 2


@dataclass(frozen=True)
class FanGeometry:
    root_card: RootCardGeometry
    rings: list[RingGeometry]


@dataclass(frozen=True)
class LabelPlan:
    name: str
    truncated: bool
    years: str | None
    rotation_degrees: float
    x: float
    y: float


@dataclass(frozen=True)
class RootCardView:
    person: Person
    geometry: RootCardGeometry
    name: str
    subtitle: str


@dataclass(frozen=True)
class WedgeView:
    slot: SlotNode
    occupied: bool
    geometry: WedgeGeometry
    label: LabelPlan | None = None
    selected: bool = False


@dataclass(frozen=True)
class RingView:
    generation: int
    geometry: RingGeometry
    wedges: list[WedgeView] = field(default_factory=list)


@dataclass(frozen=True)
class RenderModel:
    root_card: RootCardView
    rings: list[RingView]
    selected: SlotNode | None
    visible_count: int
    warnings: list = field(default_factory=list)
