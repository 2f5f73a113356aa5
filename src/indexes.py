"""In-memory lookups over the person and parent link data sets."""

from collections.abc import Iterable, Iterator

from models import ParentLink, Person, PersonId


def _present(value) -> bool:
    # The data store writes 0 or "" for a missing parent
    return value is not None and value != 0 and value != ""


class PersonIndex:
    """Person records keyed by id, built once from the data store listing."""

    def __init__(self, persons: Iterable[Person]):
        self._by_id: dict[PersonId, Person] = {}
        for person in persons:
            self._by_id[person.id] = person

    def get(self, person_id: PersonId | None) -> Person | None:
        if person_id is None:
            return None
        return self._by_id.get(person_id)

    def get_visible(self, person_id: PersonId | None) -> Person | None:
        """Return the person unless it is absent or hidden."""
        person = self.get(person_id)
        if person is None or person.hidden:
            return None
        return person

    def __contains__(self, person_id) -> bool:
        return person_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[Person]:
        return iter(self._by_id.values())


class ParentLinkIndex:
    """Child id -> (father, mother) lookup."""

    def __init__(self, links: Iterable[ParentLink]):
        self._by_child: dict[PersonId, ParentLink] = {}
        for link in links:
            self._by_child[link.child] = ParentLink(
                child=link.child,
                father=link.father if _present(link.father) else None,
                mother=link.mother if _present(link.mother) else None,
            )

    def parents_of(self, child_id: PersonId) -> ParentLink | None:
        return self._by_child.get(child_id)

    def __len__(self) -> int:
        return len(self._by_child)

    def __iter__(self) -> Iterator[ParentLink]:
        return iter(self._by_child.values())
