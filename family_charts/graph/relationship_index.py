"""Adjacency maps built from directional relationship rows."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

from family_charts.models import Relationship, RelationType


logger = logging.getLogger(__name__)


def pair_key(a: str, b: str) -> str:
    """Order-independent key for an undirected pair."""
    return "-".join(sorted((a, b)))


@dataclass
class RelationshipIndex:
    """Parent, child and spouse lookups for one dataset.

    Both rows of a kinship fact land in the same set entry, so the
    maps hold each fact once no matter how many rows recorded it.
    """
    child_to_parents: dict[str, set[str]] = field(default_factory=dict)
    parent_to_children: dict[str, set[str]] = field(default_factory=dict)
    spouse_map: dict[str, set[str]] = field(default_factory=dict)
    divorced_pairs: set[str] = field(default_factory=set)

    def parents_of(self, person_id: str) -> set[str]:
        return self.child_to_parents.get(person_id, set())

    def children_of(self, person_id: str) -> set[str]:
        return self.parent_to_children.get(person_id, set())

    def spouses_of(self, person_id: str) -> set[str]:
        return self.spouse_map.get(person_id, set())

    def is_divorced(self, a: str, b: str) -> bool:
        return pair_key(a, b) in self.divorced_pairs


def build_relationship_index(relationships: Iterable[Relationship]) -> RelationshipIndex:
    """Route each row into the map its type implies.

    PARENT rows (related person is the parent) and CHILD rows (related
    person is the child) describe the same parent->child fact from either
    end, so both feed both parent/child maps. SIBLING rows are not used
    for generation traversal.
    """
    child_to_parents: dict[str, set[str]] = defaultdict(set)
    parent_to_children: dict[str, set[str]] = defaultdict(set)
    spouse_map: dict[str, set[str]] = defaultdict(set)
    divorced_pairs: set[str] = set()
    rows = 0

    for rel in relationships:
        rows += 1
        if rel.person_id == rel.related_person_id:
            continue

        if rel.type == RelationType.PARENT:
            child_id, parent_id = rel.person_id, rel.related_person_id
        elif rel.type == RelationType.CHILD:
            parent_id, child_id = rel.person_id, rel.related_person_id
        elif rel.type == RelationType.SPOUSE:
            spouse_map[rel.person_id].add(rel.related_person_id)
            spouse_map[rel.related_person_id].add(rel.person_id)
            if rel.is_divorced:
                divorced_pairs.add(pair_key(rel.person_id, rel.related_person_id))
            continue
        else:
            continue

        child_to_parents[child_id].add(parent_id)
        parent_to_children[parent_id].add(child_id)

    logger.debug(
        "Indexed %d relationship rows: %d children with parents, %d spouses",
        rows, len(child_to_parents), len(spouse_map),
    )
    return RelationshipIndex(
        child_to_parents=dict(child_to_parents),
        parent_to_children=dict(parent_to_children),
        spouse_map=dict(spouse_map),
        divorced_pairs=divorced_pairs,
    )
