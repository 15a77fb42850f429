"""Bounded generation traversal over the relationship index.

Generation numbering: 0 is the root and its spouses, ancestors are
negative (-1 parents, -2 grandparents), descendants positive.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from family_charts.graph.models import CENTER, MATERNAL, PARENT_CHILD, PATERNAL, SPOUSE
from family_charts.graph.relationship_index import RelationshipIndex, pair_key
from family_charts.models import Gender, Person


logger = logging.getLogger(__name__)


class Direction(str, Enum):
    """Which way a traversal walks from its root."""
    ANCESTORS = "ancestors"
    DESCENDANTS = "descendants"

    @property
    def step(self) -> int:
        return -1 if self is Direction.ANCESTORS else 1


@dataclass
class CollectedEdge:
    source: str
    target: str
    type: str


@dataclass
class CollectionState:
    """Accumulator owned by a single chart request.

    ``generations`` doubles as the ordered node set: a person is added
    once and keeps the generation of the shortest line that reached it.
    ``expanded`` maps (person, direction) to the smallest distance from
    the root at which that person was expanded. Sides are first-write.
    """
    generations: dict[str, int] = field(default_factory=dict)
    edges: dict[str, CollectedEdge] = field(default_factory=dict)
    sides: dict[str, str] = field(default_factory=dict)
    expanded: dict[tuple[str, Direction], int] = field(default_factory=dict)

    @property
    def node_ids(self) -> list[str]:
        return list(self.generations)

    def __contains__(self, person_id: str) -> bool:
        return person_id in self.generations

    def __len__(self) -> int:
        return len(self.generations)

    def add_node(self, person_id: str, generation: int, side: Optional[str] = None) -> bool:
        current = self.generations.get(person_id)
        if current is not None:
            if abs(generation) < abs(current):
                self.generations[person_id] = generation
            return False
        self.generations[person_id] = generation
        if side is not None:
            self.sides[person_id] = side
        return True

    def add_parent_child_edge(self, parent_id: str, child_id: str) -> None:
        self.edges.setdefault(
            f"{parent_id}-{child_id}", CollectedEdge(parent_id, child_id, PARENT_CHILD)
        )

    def add_spouse_edge(self, person_id: str, spouse_id: str) -> None:
        self.edges.setdefault(
            pair_key(person_id, spouse_id), CollectedEdge(person_id, spouse_id, SPOUSE)
        )


def _add_spouses(
    person_id: str,
    generation: int,
    persons: Mapping[str, Person],
    index: RelationshipIndex,
    state: CollectionState,
    side: Optional[str] = None,
) -> None:
    for spouse_id in sorted(index.spouses_of(person_id)):
        if spouse_id not in persons:
            continue
        state.add_node(spouse_id, generation, side)
        state.add_spouse_edge(person_id, spouse_id)


def collect_generations(
    person_id: str,
    generation: int,
    depth_limit: int,
    direction: Direction,
    persons: Mapping[str, Person],
    index: RelationshipIndex,
    state: CollectionState,
    side: Optional[str] = None,
    include_spouses: bool = True,
) -> None:
    """Walk one relationship hop at a time until ``depth_limit`` generations.

    A person is expanded again in the same direction only when reached
    closer to the root than before, so a shared ancestor first met along
    a longer line still gets its parents from the shorter one. Distances
    only shrink, which keeps remarriage and shared-ancestor loops finite.
    Persons that are not in ``persons`` are skipped.
    """
    if not person_id or person_id not in persons:
        return
    distance = abs(generation)
    if distance > depth_limit:
        return
    best = state.expanded.get((person_id, direction))
    if best is not None and best <= distance:
        return
    state.expanded[(person_id, direction)] = distance

    state.add_node(person_id, generation, side)
    # Re-expansion propagates the person's recorded side
    side = state.sides.get(person_id, side)
    if include_spouses:
        _add_spouses(person_id, generation, persons, index, state, side)

    if distance >= depth_limit:
        return

    if direction is Direction.ANCESTORS:
        relatives = index.parents_of(person_id)
    else:
        relatives = index.children_of(person_id)

    for relative_id in sorted(relatives):
        if relative_id not in persons:
            continue
        if direction is Direction.ANCESTORS:
            state.add_parent_child_edge(relative_id, person_id)
        else:
            state.add_parent_child_edge(person_id, relative_id)
        collect_generations(
            relative_id,
            generation + direction.step,
            depth_limit,
            direction,
            persons,
            index,
            state,
            side=side,
            include_spouses=include_spouses,
        )


def collect_ancestors(
    root_id: str,
    depth_limit: int,
    persons: Mapping[str, Person],
    index: RelationshipIndex,
    state: Optional[CollectionState] = None,
) -> CollectionState:
    state = state if state is not None else CollectionState()
    collect_generations(root_id, 0, depth_limit, Direction.ANCESTORS, persons, index, state)
    logger.debug("Collected %d ancestors of %s", len(state), root_id)
    return state


def collect_descendants(
    root_id: str,
    depth_limit: int,
    persons: Mapping[str, Person],
    index: RelationshipIndex,
    state: Optional[CollectionState] = None,
) -> CollectionState:
    state = state if state is not None else CollectionState()
    collect_generations(root_id, 0, depth_limit, Direction.DESCENDANTS, persons, index, state)
    logger.debug("Collected %d descendants of %s", len(state), root_id)
    return state


def collect_hourglass(
    root_id: str,
    ancestor_depth: int,
    descendant_depth: int,
    persons: Mapping[str, Person],
    index: RelationshipIndex,
) -> CollectionState:
    """Ancestor pass and descendant pass from the same root."""
    state = CollectionState()
    collect_ancestors(root_id, ancestor_depth, persons, index, state)
    collect_descendants(root_id, descendant_depth, persons, index, state)
    return state


def collect_tree(
    root_id: str,
    ancestor_depth: int,
    descendant_depth: int,
    persons: Mapping[str, Person],
    index: RelationshipIndex,
) -> CollectionState:
    """Full tree: hourglass plus the children of the root's spouses."""
    state = CollectionState()
    state.add_node(root_id, 0)
    _add_spouses(root_id, 0, persons, index, state)

    collect_generations(root_id, 0, ancestor_depth, Direction.ANCESTORS, persons, index, state)
    collect_generations(root_id, 0, descendant_depth, Direction.DESCENDANTS, persons, index, state)

    if descendant_depth >= 1:
        for spouse_id in sorted(index.spouses_of(root_id)):
            if spouse_id not in persons:
                continue
            for child_id in sorted(index.children_of(spouse_id)):
                if child_id not in persons:
                    continue
                state.add_parent_child_edge(spouse_id, child_id)
                collect_generations(
                    child_id, 1, descendant_depth, Direction.DESCENDANTS, persons, index, state
                )

    logger.debug("Collected %d tree members around %s", len(state), root_id)
    return state


def collect_bowtie(
    root_id: str,
    depth_limit: int,
    persons: Mapping[str, Person],
    index: RelationshipIndex,
) -> CollectionState:
    """Ancestors split into paternal and maternal halves.

    The father's line is paternal and the mother's maternal; a parent
    whose gender is not MALE counts as maternal. A person on both lines
    keeps the side of whichever parent reached it first.
    """
    state = CollectionState()
    state.add_node(root_id, 0, CENTER)
    state.expanded[(root_id, Direction.ANCESTORS)] = 0
    if depth_limit < 1:
        return state

    parents = [persons[pid] for pid in index.parents_of(root_id) if pid in persons]
    # Father's line first so it wins any shared ancestors
    parents.sort(key=lambda p: (p.gender != Gender.MALE, p.id))

    for parent in parents:
        parent_id = parent.id
        state.add_parent_child_edge(parent_id, root_id)
        side = PATERNAL if parent.gender == Gender.MALE else MATERNAL
        collect_generations(
            parent_id,
            -1,
            depth_limit,
            Direction.ANCESTORS,
            persons,
            index,
            state,
            side=side,
            include_spouses=False,
        )

    logger.debug("Collected %d bowtie members for %s", len(state), root_id)
    return state
