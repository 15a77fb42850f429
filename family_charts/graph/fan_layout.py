"""Angular positions for radial (fan) ancestor charts.

Angles are in degrees. The root owns the whole fan; every person's arc
is split between their parents, father first, so each generation ring
is a binary subdivision of the one below it.
"""

from collections import defaultdict, deque
from typing import Mapping

from family_charts.graph.collectors import CollectionState
from family_charts.graph.models import PARENT_CHILD, SPOUSE
from family_charts.models import Gender, Person


def _parent_slots(parent_ids: list[str], persons: Mapping[str, Person]) -> list:
    """Order parents into arc slots: father, mother, then anyone else."""
    slots = [None] * max(2, len(parent_ids))
    others = []
    for parent_id in sorted(parent_ids):
        person = persons.get(parent_id)
        gender = person.gender if person else None
        if gender == Gender.MALE and slots[0] is None:
            slots[0] = parent_id
        elif gender == Gender.FEMALE and slots[1] is None:
            slots[1] = parent_id
        else:
            others.append(parent_id)

    free = [i for i, slot in enumerate(slots) if slot is None]
    for i, parent_id in zip(free, others):
        slots[i] = parent_id
    return slots


def calculate_fan_arcs(
    root_id: str,
    state: CollectionState,
    persons: Mapping[str, Person],
    span_degrees: float = 360.0,
    start_degrees: float = 0.0,
) -> dict[str, tuple[float, float]]:
    """Map each lineage member to the (start, end) arc it owns.

    Uses only the collection's nodes and parent-child edges. A person
    reachable along two lines (pedigree collapse) keeps the arc of the
    shorter, then earlier, line.
    """
    if root_id not in state:
        return {}

    parents_of = defaultdict(list)
    for edge in state.edges.values():
        if edge.type == PARENT_CHILD and edge.source in state:
            parents_of[edge.target].append(edge.source)

    arcs = {root_id: (start_degrees, start_degrees + span_degrees)}
    queue = deque([root_id])
    while queue:
        person_id = queue.popleft()
        low, high = arcs[person_id]
        slots = _parent_slots(parents_of.get(person_id, []), persons)
        width = (high - low) / len(slots)
        for i, parent_id in enumerate(slots):
            if parent_id is None or parent_id in arcs:
                continue
            arcs[parent_id] = (low + i * width, low + (i + 1) * width)
            queue.append(parent_id)
    return arcs


def calculate_fan_layout(
    root_id: str,
    state: CollectionState,
    persons: Mapping[str, Person],
    span_degrees: float = 360.0,
    start_degrees: float = 0.0,
) -> dict[str, float]:
    """Angle in degrees for every collected node.

    Lineage members sit at the midpoint of their arc. Spouses that are
    not ancestors themselves share their partner's angle.
    """
    arcs = calculate_fan_arcs(root_id, state, persons, span_degrees, start_degrees)
    angles = {pid: (low + high) / 2 for pid, (low, high) in arcs.items()}

    center = start_degrees + span_degrees / 2
    for person_id in state.node_ids:
        if person_id in angles:
            continue
        partner_angle = center
        for edge in state.edges.values():
            if edge.type != SPOUSE or person_id not in (edge.source, edge.target):
                continue
            partner = edge.target if edge.source == person_id else edge.source
            if partner in angles:
                partner_angle = angles[partner]
                break
        angles[person_id] = partner_angle
    return angles
