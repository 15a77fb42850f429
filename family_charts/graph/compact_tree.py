"""Nested descendant tree plus a flattened list for virtualized views."""

import logging
from typing import Mapping, Optional

from family_charts.graph.models import (
    CompactTreeNode,
    FlatTreeEntry,
    SpouseSummary,
    iso_date,
)
from family_charts.graph.relationship_index import RelationshipIndex
from family_charts.models import Person


logger = logging.getLogger(__name__)


def _birth_sort_key(node: CompactTreeNode) -> tuple[bool, str]:
    # ISO dates sort chronologically as strings; undated children go last
    return (node.date_of_birth is None, node.date_of_birth or "")


def build_compact_tree(
    root_id: str,
    depth_limit: int,
    persons: Mapping[str, Person],
    index: RelationshipIndex,
) -> Optional[CompactTreeNode]:
    """Build the descendant tree of ``root_id`` down to ``depth_limit``.

    A person already placed in the tree (e.g. a child of two people who
    both appear in it) is not placed a second time.
    """
    placed: set[str] = set()

    def build(person_id: str, generation: int, parent_id: Optional[str]) -> Optional[CompactTreeNode]:
        person = persons.get(person_id)
        if person is None or generation > depth_limit or person_id in placed:
            return None
        placed.add(person_id)

        children = []
        for child_id in sorted(index.children_of(person_id)):
            child = build(child_id, generation + 1, person_id)
            if child is not None:
                children.append(child)
        children.sort(key=_birth_sort_key)

        spouses = [
            SpouseSummary(
                id=spouse.id,
                first_name=spouse.first_name,
                last_name=spouse.last_name,
                is_living=spouse.is_living,
            )
            for spouse in (persons.get(sid) for sid in sorted(index.spouses_of(person_id)))
            if spouse is not None
        ]

        return CompactTreeNode(
            id=person.id,
            first_name=person.first_name,
            last_name=person.last_name,
            date_of_birth=iso_date(person.date_of_birth),
            date_of_passing=iso_date(person.date_of_passing),
            is_living=person.is_living,
            gender=person.gender,
            photo_url=person.photo_url,
            generation=generation,
            parent_id=parent_id,
            children=children,
            spouses=spouses,
        )

    root = build(root_id, 0, None)
    logger.debug("Built compact tree of %d people under %s", len(placed), root_id)
    return root


def flatten_compact_tree(root: Optional[CompactTreeNode]) -> list[FlatTreeEntry]:
    """Pre-order walk of an already built tree."""
    flat: list[FlatTreeEntry] = []
    if root is None:
        return flat

    stack = [root]
    while stack:
        node = stack.pop()
        flat.append(FlatTreeEntry(
            id=node.id,
            first_name=node.first_name,
            last_name=node.last_name,
            date_of_birth=node.date_of_birth,
            date_of_passing=node.date_of_passing,
            is_living=node.is_living,
            gender=node.gender,
            photo_url=node.photo_url,
            generation=node.generation,
            parent_id=node.parent_id,
            has_children=bool(node.children),
            spouse_count=len(node.spouses),
        ))
        stack.extend(reversed(node.children))
    return flat
