"""Pytest fixtures for chart tests."""

from datetime import date
from typing import Optional

import pytest

from family_charts.graph import FamilyCharts, build_relationship_index
from family_charts.models import Person, Relationship, RelationType


class FamilyBuilder:
    """Builds persons and bidirectional relationship rows for tests."""

    def __init__(self):
        self.persons: list[Person] = []
        self.relationships: list[Relationship] = []

    def person(
        self,
        pid: str,
        gender: Optional[str] = None,
        last: str = "Doe",
        born: Optional[date] = None,
        died: Optional[date] = None,
        living: Optional[bool] = None,
        place: Optional[str] = None,
        first: Optional[str] = None,
    ) -> "FamilyBuilder":
        self.persons.append(Person(
            id=pid,
            first_name=first or pid.title(),
            last_name=last,
            gender=gender,
            date_of_birth=born,
            date_of_passing=died,
            is_living=(died is None) if living is None else living,
            birth_place=place,
        ))
        return self

    def _row(self, person_id: str, related_id: str, rel_type: RelationType, **extra) -> None:
        self.relationships.append(Relationship(
            id=f"r{len(self.relationships) + 1}",
            person_id=person_id,
            related_person_id=related_id,
            type=rel_type,
            **extra,
        ))

    def parent(self, parent_id: str, child_id: str) -> "FamilyBuilder":
        """Both rows of a parent/child fact."""
        self._row(child_id, parent_id, RelationType.PARENT)
        self._row(parent_id, child_id, RelationType.CHILD)
        return self

    def parents(self, father_id: str, mother_id: str, child_id: str) -> "FamilyBuilder":
        return self.parent(father_id, child_id).parent(mother_id, child_id)

    def spouse(self, a: str, b: str, divorce_date: Optional[date] = None) -> "FamilyBuilder":
        extra = {"divorce_date": divorce_date, "is_active": divorce_date is None}
        self._row(a, b, RelationType.SPOUSE, **extra)
        self._row(b, a, RelationType.SPOUSE, **extra)
        return self

    def sibling(self, a: str, b: str) -> "FamilyBuilder":
        self._row(a, b, RelationType.SIBLING)
        self._row(b, a, RelationType.SIBLING)
        return self

    @property
    def person_map(self) -> dict[str, Person]:
        return {p.id: p for p in self.persons}

    @property
    def index(self):
        return build_relationship_index(self.relationships)

    def charts(self) -> FamilyCharts:
        return FamilyCharts(self.persons, self.relationships)


@pytest.fixture
def family():
    """Empty family builder."""
    return FamilyBuilder()


@pytest.fixture
def three_generations(family):
    """
    Root with two generations of ancestors, a spouse, a child and a
    grandchild.

        ff + fm     mf + mm
           |           |
        father  +  mother
                |
              root + spouse
                |
              child
                |
            grandchild
    """
    (family
        .person("ff", "MALE", last="Smith", born=date(1900, 1, 1), died=date(1970, 1, 1))
        .person("fm", "FEMALE", last="Smith", born=date(1902, 5, 5), died=date(1980, 1, 1))
        .person("mf", "MALE", last="Jones", born=date(1898, 3, 3), died=date(1960, 3, 2))
        .person("mm", "FEMALE", last="Jones", born=date(1905, 7, 7), died=date(1990, 7, 8))
        .person("father", "MALE", last="Smith", born=date(1930, 2, 2))
        .person("mother", "FEMALE", last="Smith", born=date(1932, 4, 4))
        .person("root", "FEMALE", last="Smith", born=date(1960, 6, 15))
        .person("spouse", "MALE", last="Brown", born=date(1958, 8, 8))
        .person("child", "MALE", last="Brown", born=date(1990, 9, 9))
        .person("grandchild", "FEMALE", last="Brown", born=date(2020, 1, 1))
        .parents("ff", "fm", "father")
        .parents("mf", "mm", "mother")
        .parents("father", "mother", "root")
        .parents("spouse", "root", "child")
        .parent("child", "grandchild")
        .spouse("ff", "fm")
        .spouse("mf", "mm")
        .spouse("father", "mother")
        .spouse("root", "spouse"))
    return family


@pytest.fixture
def uneven_lines(family):
    """
    Shared ancestor ``x`` is a grandparent through the father and a
    great-grandparent through the mother; the mother's line sorts first.

          xp
          |
          x --------.
          |          |
        z_dad       a_gp
          |          |
          |        a_mom
           \\       /
              root
    """
    (family
        .person("root")
        .person("a_mom", "FEMALE")
        .person("z_dad", "MALE")
        .person("a_gp")
        .person("x")
        .person("xp")
        .parent("a_mom", "root")
        .parent("z_dad", "root")
        .parent("x", "z_dad")
        .parent("x", "a_gp")
        .parent("a_gp", "a_mom")
        .parent("xp", "x"))
    return family


@pytest.fixture
def cousin_marriage(family):
    """
    Two first cousins marry and have a child.

            gpa + gma
           /          \\
        aunt          uncle
          |             |
        cousin_a  +  cousin_b
                 |
               baby
    """
    (family
        .person("gpa", "MALE")
        .person("gma", "FEMALE")
        .person("aunt", "FEMALE")
        .person("uncle", "MALE")
        .person("cousin_a", "MALE")
        .person("cousin_b", "FEMALE")
        .person("baby", "FEMALE")
        .parents("gpa", "gma", "aunt")
        .parents("gpa", "gma", "uncle")
        .parent("aunt", "cousin_a")
        .parent("uncle", "cousin_b")
        .parents("cousin_a", "cousin_b", "baby")
        .spouse("gpa", "gma")
        .spouse("cousin_a", "cousin_b")
        .sibling("aunt", "uncle"))
    return family
