"""Pairwise relationship grid for a bounded set of people."""

from typing import Iterable, Optional, Sequence

from family_charts.graph.models import (
    MatrixCell,
    MatrixMetadata,
    MatrixPerson,
    RelationshipMatrixResult,
)
from family_charts.models import Person, Relationship


SELF = "SELF"


def select_matrix_people(
    persons: Sequence[Person],
    person_ids: Optional[Sequence[str]] = None,
    max_people: int = 20,
) -> list[Person]:
    """Requested people in store order, or the first ``max_people`` by surname."""
    if person_ids:
        wanted = set(person_ids)
        return [p for p in persons if p.id in wanted][:max_people]
    ordered = sorted(persons, key=lambda p: (p.last_name.lower(), p.first_name.lower()))
    return ordered[:max_people]


def build_relationship_matrix(
    persons: Sequence[Person],
    relationships: Iterable[Relationship],
    person_ids: Optional[Sequence[str]] = None,
    max_people: int = 20,
) -> RelationshipMatrixResult:
    people = select_matrix_people(persons, person_ids, max_people)
    selected = {p.id for p in people}

    # Keyed by ordered pair; each kinship fact fills both directions
    lookup: dict[tuple[str, str], str] = {}
    for rel in relationships:
        if rel.person_id in selected and rel.related_person_id in selected:
            lookup[(rel.person_id, rel.related_person_id)] = rel.type.value

    matrix = []
    matched = 0
    for person in people:
        for related in people:
            if person.id == related.id:
                matrix.append(MatrixCell(person.id, related.id, SELF, 1))
                continue
            rel_type = lookup.get((person.id, related.id))
            if rel_type:
                matched += 1
            matrix.append(MatrixCell(person.id, related.id, rel_type, 1 if rel_type else 0))

    return RelationshipMatrixResult(
        people=[MatrixPerson(p.id, p.first_name, p.last_name, p.gender) for p in people],
        matrix=matrix,
        metadata=MatrixMetadata(
            total_people=len(people),
            total_relationships=matched // 2,
        ),
    )
