"""Chart output records."""

from dataclasses import dataclass, field, fields
from datetime import date
from typing import Optional

from family_charts.models import Person


PARENT_CHILD = "parent-child"
SPOUSE = "spouse"

PATERNAL = "paternal"
MATERNAL = "maternal"
CENTER = "center"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _serialize(value):
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(v) for v in value]
    return value


class Record:
    """Dataclass mixin producing camelCase dicts for JSON responses."""

    # Optional fields dropped from the dict when unset
    omit_if_none: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None and f.name in self.omit_if_none:
                continue
            result[_camel(f.name)] = _serialize(value)
        return result


def iso_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


# ─────────────────────────────────────────
# Node / edge charts
# ─────────────────────────────────────────

@dataclass
class ChartNode(Record):
    """Person placed on a chart."""
    id: str
    first_name: str
    last_name: str
    date_of_birth: Optional[str]
    date_of_passing: Optional[str]
    is_living: bool
    photo_url: Optional[str]
    gender: Optional[str]
    generation: Optional[int] = None
    angle: Optional[float] = None
    side: Optional[str] = None

    omit_if_none = ("generation", "angle", "side")

    @classmethod
    def from_person(cls, person: Person, **extra) -> "ChartNode":
        return cls(
            id=person.id,
            first_name=person.first_name,
            last_name=person.last_name,
            date_of_birth=iso_date(person.date_of_birth),
            date_of_passing=iso_date(person.date_of_passing),
            is_living=person.is_living,
            photo_url=person.photo_url,
            gender=person.gender,
            **extra,
        )


@dataclass
class ChartEdge(Record):
    """Connection between two chart nodes."""
    id: str
    source: str
    target: str
    type: str  # parent-child or spouse
    is_divorced: Optional[bool] = None

    omit_if_none = ("is_divorced",)


@dataclass
class ChartMetadata(Record):
    chart_type: str
    total_generations: int
    total_people: int
    root_person_id: str
    paternal_count: Optional[int] = None
    maternal_count: Optional[int] = None

    omit_if_none = ("paternal_count", "maternal_count")


@dataclass
class ChartLayoutResult(Record):
    nodes: list[ChartNode]
    edges: list[ChartEdge]
    metadata: ChartMetadata


# ─────────────────────────────────────────
# Timeline
# ─────────────────────────────────────────

@dataclass
class TimelineEntry(Record):
    id: str
    first_name: str
    last_name: str
    birth_year: Optional[int]
    death_year: Optional[int]
    is_living: bool
    gender: Optional[str]
    photo_url: Optional[str]


@dataclass
class TimelineMetadata(Record):
    min_year: int
    max_year: int
    total_people: int
    chart_type: str = "timeline"


@dataclass
class TimelineResult(Record):
    entries: list[TimelineEntry]
    metadata: TimelineMetadata


# ─────────────────────────────────────────
# Relationship matrix
# ─────────────────────────────────────────

@dataclass
class MatrixPerson(Record):
    id: str
    first_name: str
    last_name: str
    gender: Optional[str]


@dataclass
class MatrixCell(Record):
    person_id: str
    related_person_id: str
    relationship_type: Optional[str]
    strength: int


@dataclass
class MatrixMetadata(Record):
    total_people: int
    total_relationships: int
    chart_type: str = "matrix"


@dataclass
class RelationshipMatrixResult(Record):
    people: list[MatrixPerson]
    matrix: list[MatrixCell]
    metadata: MatrixMetadata


# ─────────────────────────────────────────
# Compact tree
# ─────────────────────────────────────────

@dataclass
class SpouseSummary(Record):
    id: str
    first_name: str
    last_name: str
    is_living: bool


@dataclass
class CompactTreeNode(Record):
    id: str
    first_name: str
    last_name: str
    date_of_birth: Optional[str]
    date_of_passing: Optional[str]
    is_living: bool
    gender: Optional[str]
    photo_url: Optional[str]
    generation: int
    parent_id: Optional[str]
    children: list["CompactTreeNode"] = field(default_factory=list)
    spouses: list[SpouseSummary] = field(default_factory=list)


@dataclass
class FlatTreeEntry(Record):
    """Compact tree node without nesting, for virtualized lists."""
    id: str
    first_name: str
    last_name: str
    date_of_birth: Optional[str]
    date_of_passing: Optional[str]
    is_living: bool
    gender: Optional[str]
    photo_url: Optional[str]
    generation: int
    parent_id: Optional[str]
    has_children: bool
    spouse_count: int


@dataclass
class CompactTreeMetadata(Record):
    total_people: int
    total_generations: int
    root_person_id: str
    chart_type: str = "compact"


@dataclass
class CompactTreeResult(Record):
    root: Optional[CompactTreeNode]
    flat_list: list[FlatTreeEntry]
    metadata: CompactTreeMetadata


# ─────────────────────────────────────────
# Statistics
# ─────────────────────────────────────────

@dataclass
class AgeDistribution(Record):
    bracket: str
    count: int
    percentage: int


@dataclass
class GenerationSize(Record):
    generation: int
    count: int
    living_count: int
    deceased_count: int


@dataclass
class GenderDistribution(Record):
    gender: str
    count: int
    percentage: int


@dataclass
class GeographicDistribution(Record):
    location: str
    count: int
    percentage: int


@dataclass
class SurnameFrequency(Record):
    surname: str
    count: int
    percentage: int


@dataclass
class LifespanTrend(Record):
    decade: str
    average_lifespan: int
    sample_size: int


@dataclass
class NotablePerson(Record):
    id: str
    name: str
    age: int


@dataclass
class StatisticsMetadata(Record):
    total_people: int
    living_count: int
    deceased_count: int
    oldest_person: Optional[NotablePerson]
    youngest_person: Optional[NotablePerson]
    chart_type: str = "statistics"


@dataclass
class StatisticsResult(Record):
    age_distribution: list[AgeDistribution]
    generation_sizes: list[GenerationSize]
    gender_distribution: list[GenderDistribution]
    geographic_distribution: list[GeographicDistribution]
    surname_frequency: list[SurnameFrequency]
    lifespan_trends: list[LifespanTrend]
    metadata: StatisticsMetadata
