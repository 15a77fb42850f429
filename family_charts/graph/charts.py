"""Main FamilyCharts facade combining all chart builders."""

import logging
import time
from typing import Iterable, Optional, Sequence

from family_charts.config import ChartSettings, settings
from family_charts.exceptions import PersonNotFoundError
from family_charts.metrics import record_chart_metrics
from family_charts.graph.analytics import FamilyAnalytics
from family_charts.graph.collectors import (
    CollectionState,
    collect_ancestors,
    collect_bowtie,
    collect_descendants,
    collect_hourglass,
    collect_tree,
)
from family_charts.graph.compact_tree import build_compact_tree, flatten_compact_tree
from family_charts.graph.fan_layout import calculate_fan_layout
from family_charts.graph.matrix import build_relationship_matrix
from family_charts.graph.models import (
    MATERNAL,
    PATERNAL,
    SPOUSE,
    ChartEdge,
    ChartLayoutResult,
    ChartMetadata,
    ChartNode,
    CompactTreeMetadata,
    CompactTreeResult,
    RelationshipMatrixResult,
    StatisticsResult,
    TimelineResult,
)
from family_charts.graph.relationship_index import build_relationship_index
from family_charts.graph.timeline import build_timeline
from family_charts.models import Person, Relationship


logger = logging.getLogger(__name__)


class FamilyCharts:
    """
    Chart engine over one loaded dataset.

    Holds the person and relationship collections and the relationship
    index built from them. Every chart call allocates its own traversal
    state, so one instance can serve concurrent requests.

    Usage:
        charts = FamilyCharts(persons, relationships)
        result = charts.hourglass_chart("p1", 2, 1)
        payload = result.to_dict()
    """

    def __init__(
        self,
        persons: Iterable[Person],
        relationships: Iterable[Relationship],
        config: Optional[ChartSettings] = None,
    ):
        self.config = config or settings.charts
        self.person_list = list(persons)
        self.relationships = list(relationships)
        self.persons = {p.id: p for p in self.person_list}
        self.index = build_relationship_index(self.relationships)

    # ─────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────

    def _require_person(self, person_id: str) -> Person:
        person = self.persons.get(person_id)
        if person is None:
            logger.warning("Root person not found: %s", person_id)
            raise PersonNotFoundError(person_id)
        return person

    def _edges(self, state: CollectionState) -> list[ChartEdge]:
        edges = []
        for key, edge in state.edges.items():
            divorced = None
            if edge.type == SPOUSE:
                divorced = self.index.is_divorced(edge.source, edge.target)
            edges.append(ChartEdge(
                id=key,
                source=edge.source,
                target=edge.target,
                type=edge.type,
                is_divorced=divorced,
            ))
        return edges

    def _layout(
        self,
        chart_type: str,
        root_id: str,
        state: CollectionState,
        total_generations: int,
        started: float,
        angles: Optional[dict[str, float]] = None,
    ) -> ChartLayoutResult:
        nodes = []
        for person_id, generation in state.generations.items():
            person = self.persons.get(person_id)
            if person is None:
                continue
            nodes.append(ChartNode.from_person(
                person,
                generation=generation,
                angle=angles.get(person_id) if angles is not None else None,
                side=state.sides.get(person_id) if state.sides else None,
            ))

        metadata = ChartMetadata(
            chart_type=chart_type,
            total_generations=total_generations,
            total_people=len(nodes),
            root_person_id=root_id,
        )
        if state.sides:
            metadata.paternal_count = sum(1 for n in nodes if n.side == PATERNAL)
            metadata.maternal_count = sum(1 for n in nodes if n.side == MATERNAL)

        self._log_chart(chart_type, len(nodes), started)
        return ChartLayoutResult(nodes=nodes, edges=self._edges(state), metadata=metadata)

    def _log_chart(self, chart_type: str, size: int, started: float) -> None:
        elapsed = time.perf_counter() - started
        record_chart_metrics(chart_type, size, elapsed)
        logger.info("Built %s chart: %d people in %.1fms", chart_type, size, elapsed * 1000)

    # ─────────────────────────────────────────
    # Node / edge charts
    # ─────────────────────────────────────────

    def ancestor_chart(self, person_id: str, generations: Optional[int] = None) -> ChartLayoutResult:
        """Ancestors going back ``generations`` generations."""
        started = time.perf_counter()
        generations = self.config.ancestor_generations if generations is None else generations
        self._require_person(person_id)
        state = collect_ancestors(person_id, generations, self.persons, self.index)
        return self._layout("ancestor", person_id, state, generations, started)

    def descendant_chart(self, person_id: str, generations: Optional[int] = None) -> ChartLayoutResult:
        """Descendants going forward ``generations`` generations."""
        started = time.perf_counter()
        generations = self.config.descendant_generations if generations is None else generations
        self._require_person(person_id)
        state = collect_descendants(person_id, generations, self.persons, self.index)
        return self._layout("descendant", person_id, state, generations, started)

    def hourglass_chart(
        self,
        person_id: str,
        ancestor_generations: Optional[int] = None,
        descendant_generations: Optional[int] = None,
    ) -> ChartLayoutResult:
        """Ancestors and descendants of one person."""
        started = time.perf_counter()
        up = self.config.hourglass_generations if ancestor_generations is None else ancestor_generations
        down = self.config.hourglass_generations if descendant_generations is None else descendant_generations
        self._require_person(person_id)
        state = collect_hourglass(person_id, up, down, self.persons, self.index)
        return self._layout("hourglass", person_id, state, up + down + 1, started)

    def fan_chart(self, person_id: str, generations: Optional[int] = None) -> ChartLayoutResult:
        """Ancestors with an angle (degrees) for radial rendering."""
        started = time.perf_counter()
        generations = self.config.fan_generations if generations is None else generations
        self._require_person(person_id)
        state = collect_ancestors(person_id, generations, self.persons, self.index)
        angles = calculate_fan_layout(
            person_id,
            state,
            self.persons,
            span_degrees=self.config.fan_span_degrees,
            start_degrees=self.config.fan_start_degrees,
        )
        return self._layout("fan", person_id, state, generations, started, angles=angles)

    def bowtie_chart(self, person_id: str, generations: Optional[int] = None) -> ChartLayoutResult:
        """Ancestors split into paternal and maternal sides."""
        started = time.perf_counter()
        generations = self.config.bowtie_generations if generations is None else generations
        self._require_person(person_id)
        state = collect_bowtie(person_id, generations, self.persons, self.index)
        return self._layout("bowtie", person_id, state, generations, started)

    def tree_chart(
        self,
        person_id: str,
        ancestor_generations: Optional[int] = None,
        descendant_generations: Optional[int] = None,
    ) -> ChartLayoutResult:
        """Full family tree around one person, including step-children."""
        started = time.perf_counter()
        up = self.config.hourglass_generations if ancestor_generations is None else ancestor_generations
        down = self.config.hourglass_generations if descendant_generations is None else descendant_generations
        self._require_person(person_id)
        state = collect_tree(person_id, up, down, self.persons, self.index)
        values = state.generations.values()
        total = max(values) - min(values) + 1
        return self._layout("tree", person_id, state, total, started)

    # ─────────────────────────────────────────
    # Other chart types
    # ─────────────────────────────────────────

    def compact_tree(self, person_id: str, generations: Optional[int] = None) -> CompactTreeResult:
        """Collapsible descendant tree with a flat list for virtual scrolling."""
        started = time.perf_counter()
        generations = self.config.compact_generations if generations is None else generations
        self._require_person(person_id)
        root = build_compact_tree(person_id, generations, self.persons, self.index)
        flat_list = flatten_compact_tree(root)
        deepest = max((entry.generation for entry in flat_list), default=0)
        self._log_chart("compact", len(flat_list), started)
        return CompactTreeResult(
            root=root,
            flat_list=flat_list,
            metadata=CompactTreeMetadata(
                total_people=len(flat_list),
                total_generations=deepest + 1,
                root_person_id=person_id,
            ),
        )

    def timeline(
        self,
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
        sort_by: str = "birth",
    ) -> TimelineResult:
        started = time.perf_counter()
        result = build_timeline(self.person_list, start_year, end_year, sort_by)
        self._log_chart("timeline", len(result.entries), started)
        return result

    def relationship_matrix(
        self,
        person_ids: Optional[Sequence[str]] = None,
        max_people: Optional[int] = None,
    ) -> RelationshipMatrixResult:
        started = time.perf_counter()
        max_people = self.config.matrix_max_people if max_people is None else max_people
        result = build_relationship_matrix(
            self.person_list, self.relationships, person_ids, max_people
        )
        self._log_chart("matrix", len(result.people), started)
        return result

    def statistics(self, include_deceased: bool = True) -> StatisticsResult:
        started = time.perf_counter()
        analytics = FamilyAnalytics(self.person_list, index=self.index, config=self.config)
        result = analytics.statistics(include_deceased)
        self._log_chart("statistics", result.metadata.total_people, started)
        return result

    # ─────────────────────────────────────────
    # Dispatch
    # ─────────────────────────────────────────

    def render(self, chart_type: str, **params):
        """Build a chart by name, e.g. ``render("fan", person_id="p1")``."""
        builders = {
            "ancestor": self.ancestor_chart,
            "descendant": self.descendant_chart,
            "hourglass": self.hourglass_chart,
            "fan": self.fan_chart,
            "bowtie": self.bowtie_chart,
            "tree": self.tree_chart,
            "compact": self.compact_tree,
            "timeline": self.timeline,
            "matrix": self.relationship_matrix,
            "statistics": self.statistics,
        }
        builder = builders.get(chart_type)
        if builder is None:
            raise ValueError(f"Unknown chart type: {chart_type}")
        return builder(**params)
