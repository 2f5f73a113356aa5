"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src/ is on path when running tests from a checkout
_src = Path(__file__).resolve().parents[1] / "src"
if str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from indexes import ParentLinkIndex, PersonIndex
from models import ParentLink, Person, Sex


class CountingLinkIndex(ParentLinkIndex):
    """Parent link index recording every child id it is asked about."""

    def __init__(self, links):
        super().__init__(links)
        self.calls = []

    def parents_of(self, child_id):
        self.calls.append(child_id)
        return super().parents_of(child_id)


@pytest.fixture
def family_persons():
    """
    Three generations above root 1:

        1 <- father 2, mother 3
        2 <- father 4, mother 5 (hidden)
        3 <- father 6, mother 99 (not recorded)
        5 <- father 8, mother 9
    """
    return [
        Person(id=1, name="Anna Puig", sex=Sex.FEMALE, birth="12 MAR 1980", birth_place="Girona"),
        Person(id=2, name="Joan Puig", sex=Sex.MALE, birth="1950", death="2010"),
        Person(id=3, name="Maria Serra", sex=Sex.FEMALE, death="ABT 2015"),
        Person(id=4, name="Pere Puig", sex=Sex.MALE),
        Person(id=5, name="Rosa Vidal", sex=Sex.FEMALE, hidden=True),
        Person(id=6, name="Josep Serra", sex=Sex.MALE),
        Person(id=8, name="Miquel Vidal", sex=Sex.MALE),
        Person(id=9, name="Teresa Roca", sex=Sex.FEMALE),
        Person(id=10, name="Lluís Ferrer", sex=Sex.UNKNOWN),
    ]


@pytest.fixture
def family_links():
    return [
        ParentLink(child=1, father=2, mother=3),
        ParentLink(child=2, father=4, mother=5),
        ParentLink(child=3, father=6, mother=99),
        ParentLink(child=5, father=8, mother=9),
    ]


@pytest.fixture
def person_index(family_persons):
    return PersonIndex(family_persons)


@pytest.fixture
def link_index(family_links):
    return CountingLinkIndex(family_links)
