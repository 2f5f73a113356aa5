"""Fan chart controller: rebuilds on root, depth and viewport changes."""

from collections.abc import Callable
from dataclasses import replace
from enum import Enum

from config import DEFAULT_CONFIG, FanChartConfig
from errors import ChartNotBuiltError, LabelOverflowWarning
from geometry import RadialGeometryPlanner, hit_test, ring_wedges
from indexes import ParentLinkIndex, PersonIndex
from labels import LabelPlanner, person_subtitle, safe_text
from models import (
    FanGeometry,
    Person,
    PersonId,
    RenderModel,
    RingView,
    RootCardView,
    SlotNode,
    WedgeView,
)
from slots import SlotTree, SlotTreeBuilder, find_person

SlotListener = Callable[[Person | None], None]


class ChartState(Enum):
    IDLE = "idle"
    BUILT = "built"


class FanChartController:
    """
    Owns one fan chart: its root, depth, viewport, slot tree and selection.

    Every rebuild computes the new tree, geometry and labels first and only then
    replaces the current ones, so a failing rebuild leaves the last built chart
    untouched. Nothing is shared between controller instances.
    """

    def __init__(
        self,
        persons: PersonIndex | None,
        links: ParentLinkIndex | None,
        config: FanChartConfig = DEFAULT_CONFIG,
        width: float | None = None,
        height: float | None = None,
        generations: int | None = None,
    ):
        self.config = config
        self.builder = SlotTreeBuilder(persons, links, config)
        self.geometry_planner = RadialGeometryPlanner(config)
        self.label_planner = LabelPlanner(config)

        self._width = config.default_width if width is None else width
        self._height = config.default_height if height is None else height
        self._generations = config.default_generations if generations is None else generations
        self._check_depth(self._generations)

        self._state = ChartState.IDLE
        self._root_id: PersonId | None = None
        self._tree: SlotTree | None = None
        self._geometry: FanGeometry | None = None
        self._rings: list[RingView] = []
        self._warnings: list[LabelOverflowWarning] = []
        self._selected: SlotNode | None = None
        self._listeners: list[SlotListener] = []

    @classmethod
    def from_store(cls, store, config: FanChartConfig = DEFAULT_CONFIG, **kwargs):
        """Load persons, links and the initial root from a data store and build."""
        persons = PersonIndex(store.list_persons())
        links = ParentLinkIndex(store.list_parent_links())
        controller = cls(persons, links, config, **kwargs)
        controller.set_root(store.get_root_id())
        return controller

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> ChartState:
        return self._state

    @property
    def root_id(self) -> PersonId | None:
        return self._root_id

    @property
    def generations(self) -> int:
        return self._generations

    @property
    def viewport(self) -> tuple[float, float]:
        return (self._width, self._height)

    @property
    def tree(self) -> SlotTree:
        """Visible generations 0..generations of the current slot tree."""
        if self._tree is None:
            return []
        return self._tree[: self._generations + 1]

    @property
    def geometry(self) -> FanGeometry | None:
        return self._geometry

    @property
    def selected(self) -> SlotNode | None:
        return self._selected

    @property
    def warnings(self) -> list[LabelOverflowWarning]:
        return list(self._warnings)

    def slot(self, generation: int, slot: int) -> SlotNode | None:
        tree = self.tree
        if not 0 <= generation < len(tree):
            return None
        level = tree[generation]
        if not 0 <= slot < len(level):
            return None
        return level[slot]

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def set_root(self, root_id: PersonId):
        """
        Re-root the chart on `root_id` and rebuild everything.

        The selection survives when the selected person appears somewhere in the
        new tree; otherwise it is cleared.

        Raises:
            RootNotFoundError: root_id is absent or hidden; the chart is unchanged
        """
        tree = self.builder.build(root_id, self._generations)
        geometry, rings, warnings = self._plan(tree, self._generations)

        self._root_id = root_id
        self._commit(tree, geometry, rings, warnings)
        self._set_selection(self._carry_selection(tree))

    def set_generation_depth(self, generations: int):
        """Change the depth, reusing the slot tree when it is already deep enough."""
        self._check_depth(generations)
        if self._state is ChartState.IDLE:
            self._generations = generations
            return

        tree = self._tree
        if len(tree) - 1 < generations:
            tree = self.builder.build(self._root_id, generations)
        geometry, rings, warnings = self._plan(tree, generations)

        self._generations = generations
        self._commit(tree, geometry, rings, warnings)

        # The selected slot stays put; only a slot beyond the new depth is dropped
        selected = self._selected
        if selected is not None:
            selected = self.slot(selected.generation, selected.slot)
        self._set_selection(selected)

    def resize(self, width: float, height: float):
        """Re-plan geometry and labels for a new viewport; the tree is kept."""
        self._width = width
        self._height = height
        if self._state is ChartState.IDLE:
            return
        geometry, rings, warnings = self._plan(self._tree, self._generations)
        self._commit(self._tree, geometry, rings, warnings)

    def select(self, target: SlotNode | None) -> SlotNode | None:
        """
        Select a slot (the root is generation 0, slot 0) or clear with None.

        Empty slots cannot be selected and are ignored. Returns the slot that
        was selected before the call.
        """
        previous = self._selected
        if target is None:
            self._set_selection(None)
            return previous

        if self._state is ChartState.IDLE:
            raise ChartNotBuiltError("Cannot select before the chart is built")

        node = self.slot(target.generation, target.slot)
        if node is None or not node.occupied:
            return previous
        self._set_selection(node)
        return previous

    def select_at(self, x: float, y: float) -> SlotNode | None:
        """Select whatever lies under a viewport point; returns the slot hit."""
        if self._geometry is None:
            raise ChartNotBuiltError("Cannot hit test before the chart is built")
        hit = hit_test(self._geometry, x, y)
        if hit is None:
            return None
        node = self.slot(*hit)
        if node is not None and node.occupied:
            self.select(node)
        return node

    def on_slot_activated(self, callback: SlotListener) -> SlotListener:
        """Register `callback(person_or_none)`; called whenever the selection changes."""
        self._listeners.append(callback)
        return callback

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def render_model(self) -> RenderModel:
        if self._state is ChartState.IDLE:
            raise ChartNotBuiltError("Chart has no root yet")

        root = self._tree[0][0].person
        root_card = RootCardView(
            person=root,
            geometry=self._geometry.root_card,
            name=safe_text(root.name) or self.config.unknown_name,
            subtitle=person_subtitle(root, self.config),
        )

        selected = self._selected
        rings = []
        for ring in self._rings:
            wedges = [
                replace(w, selected=w.slot == selected) if selected is not None else w
                for w in ring.wedges
            ]
            rings.append(RingView(generation=ring.generation, geometry=ring.geometry, wedges=wedges))

        visible_ids = {
            str(node.person.id) for level in self.tree for node in level if node.occupied
        }
        return RenderModel(
            root_card=root_card,
            rings=rings,
            selected=selected,
            visible_count=len(visible_ids),
            warnings=list(self._warnings),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_depth(self, generations: int):
        if not 0 <= generations <= self.config.max_generations:
            raise ValueError(
                f"Generation depth {generations} outside 0..{self.config.max_generations}"
            )

    def _plan(self, tree: SlotTree, generations: int):
        geometry = self.geometry_planner.plan(self._width, self._height, generations)
        rings: list[RingView] = []
        warnings: list[LabelOverflowWarning] = []

        for ring in geometry.rings:
            nodes = tree[ring.generation]
            wedges = []
            for node, wedge in zip(nodes, ring_wedges(ring)):
                label = self.label_planner.plan_label(node, wedge, ring.generation)
                if label is not None and label.truncated:
                    warnings.append(
                        LabelOverflowWarning(
                            node.person.id,
                            ring.generation,
                            safe_text(node.person.name),
                            self.config.name_limit_for(ring.generation),
                        )
                    )
                wedges.append(
                    WedgeView(slot=node, occupied=node.occupied, geometry=wedge, label=label)
                )
            rings.append(RingView(generation=ring.generation, geometry=ring, wedges=wedges))

        return geometry, rings, warnings

    def _commit(self, tree, geometry, rings, warnings):
        self._tree = tree
        self._geometry = geometry
        self._rings = rings
        self._warnings = warnings
        self._state = ChartState.BUILT

    def _carry_selection(self, tree: SlotTree) -> SlotNode | None:
        if self._selected is None:
            return None
        return find_person(tree, self._selected.person.id)

    def _set_selection(self, node: SlotNode | None):
        previous = self._selected
        self._selected = node

        previous_id = previous.person.id if previous is not None else None
        current_id = node.person.id if node is not None else None
        if previous is None and node is None:
            return
        if previous is not None and node is not None and previous_id == current_id:
            return

        person = node.person if node is not None else None
        for callback in list(self._listeners):
            callback(person)
