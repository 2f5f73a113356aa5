"""Ancestor slot tree construction."""

from config import DEFAULT_CONFIG, FanChartConfig
from errors import ConfigurationError, RootNotFoundError
from indexes import ParentLinkIndex, PersonIndex
from models import PersonId, SlotNode

SlotTree = list[list[SlotNode]]


def slot_count(generation: int) -> int:
    return 2**generation


def ancestor_number(generation: int, slot: int) -> int:
    """Sosa (Ahnentafel) number of a slot: root=1, father=2n, mother=2n+1."""
    return slot_count(generation) + slot


def find_person(tree: SlotTree, person_id: PersonId) -> SlotNode | None:
    """Return the first slot holding `person_id`, in generation then slot order."""
    for level in tree:
        for node in level:
            if node.person is not None and node.person.id == person_id:
                return node
    return None


class SlotTreeBuilder:
    """Derives the perfect binary ancestor tree rooted at one person."""

    def __init__(
        self,
        persons: PersonIndex | None,
        links: ParentLinkIndex | None,
        config: FanChartConfig = DEFAULT_CONFIG,
    ):
        if persons is None:
            raise ConfigurationError("Person index is not initialized")
        if links is None:
            raise ConfigurationError("Parent link index is not initialized")
        self.persons = persons
        self.links = links
        self.config = config

    def build(self, root_id: PersonId, max_generation: int) -> SlotTree:
        """
        Build generations 0..max_generation.

        Generation g always holds 2**g slots. Slot 2k is the father of slot k in
        generation g-1 and slot 2k+1 the mother. A missing link, a dangling id and
        a hidden person all leave the slot empty; empty slots are never expanded.

        Raises:
            RootNotFoundError: root_id is absent or hidden
            ValueError: max_generation is outside 0..config.max_generations
        """
        if not 0 <= max_generation <= self.config.max_generations:
            raise ValueError(
                f"Generation depth {max_generation} outside 0..{self.config.max_generations}"
            )

        root = self.persons.get_visible(root_id)
        if root is None:
            raise RootNotFoundError(root_id)

        levels: SlotTree = [[SlotNode(generation=0, slot=0, person=root)]]

        for generation in range(1, max_generation + 1):
            current: list[SlotNode] = []
            for node in levels[generation - 1]:
                father = mother = None
                if node.person is not None:
                    link = self.links.parents_of(node.person.id)
                    if link is not None:
                        father = self.persons.get_visible(link.father)
                        mother = self.persons.get_visible(link.mother)

                current.append(SlotNode(generation=generation, slot=node.slot * 2, person=father))
                current.append(
                    SlotNode(generation=generation, slot=node.slot * 2 + 1, person=mother)
                )
            levels.append(current)

        return levels
