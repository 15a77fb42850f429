"""Demographic statistics over the whole person set."""

import logging
import math
from collections import Counter, defaultdict, deque
from datetime import date
from typing import Iterable, Optional

from family_charts.config import ChartSettings, settings
from family_charts.graph.models import (
    AgeDistribution,
    GenderDistribution,
    GenerationSize,
    GeographicDistribution,
    LifespanTrend,
    NotablePerson,
    StatisticsMetadata,
    StatisticsResult,
    SurnameFrequency,
)
from family_charts.graph.relationship_index import RelationshipIndex, build_relationship_index
from family_charts.models import Person, Relationship


logger = logging.getLogger(__name__)


AGE_BRACKETS = [
    ("0-9", 0, 9),
    ("10-19", 10, 19),
    ("20-29", 20, 29),
    ("30-39", 30, 39),
    ("40-49", 40, 49),
    ("50-59", 50, 59),
    ("60-69", 60, 69),
    ("70-79", 70, 79),
    ("80-89", 80, 89),
    ("90+", 90, None),
]

GENDER_LABELS = {
    "MALE": "Male",
    "FEMALE": "Female",
    "OTHER": "Other",
    "PREFER_NOT_TO_SAY": "Not Specified",
}


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def percentage(count: int, total: int) -> int:
    return round_half_up(count * 100 / total) if total > 0 else 0


class FamilyAnalytics:
    """Aggregate statistics for a loaded dataset."""

    def __init__(
        self,
        persons: Iterable[Person],
        relationships: Iterable[Relationship] = (),
        index: Optional[RelationshipIndex] = None,
        today: Optional[date] = None,
        config: Optional[ChartSettings] = None,
    ):
        self.persons = list(persons)
        self.index = index or build_relationship_index(relationships)
        self.today = today or date.today()
        self.config = config or settings.charts

    def calculate_age(self, person: Person) -> Optional[int]:
        """Age today for the living, age at death otherwise."""
        end = self.today if person.is_living else person.date_of_passing
        if end is None:
            return None
        return person.age_on(end)

    def age_distribution(self, persons: list[Person]) -> list[AgeDistribution]:
        ages = [age for age in map(self.calculate_age, persons) if age is not None]
        total = len(persons)
        result = []
        for label, low, high in AGE_BRACKETS:
            count = sum(1 for age in ages if age >= low and (high is None or age <= high))
            result.append(AgeDistribution(label, count, percentage(count, total)))
        return result

    def assign_generations(self, persons: list[Person]) -> dict[str, int]:
        """Breadth-first layering from everyone without a recorded parent.

        A person reachable from several roots keeps the generation of
        the first visit.
        """
        queue = deque(
            (p.id, 0) for p in persons if not self.index.parents_of(p.id)
        )
        generations: dict[str, int] = {}
        while queue:
            person_id, generation = queue.popleft()
            if person_id in generations:
                continue
            generations[person_id] = generation
            for child_id in sorted(self.index.children_of(person_id)):
                if child_id not in generations:
                    queue.append((child_id, generation + 1))
        return generations

    def generation_sizes(self, persons: list[Person]) -> list[GenerationSize]:
        generations = self.assign_generations(persons)
        counts: dict[int, list[int]] = defaultdict(lambda: [0, 0])
        for person in persons:
            # People only reachable through a cycle have no root; count them first
            bucket = counts[generations.get(person.id, 0)]
            bucket[0 if person.is_living else 1] += 1

        return [
            GenerationSize(
                generation=generation + 1,
                count=living + deceased,
                living_count=living,
                deceased_count=deceased,
            )
            for generation, (living, deceased) in sorted(counts.items())
        ]

    def gender_distribution(self, persons: list[Person]) -> list[GenderDistribution]:
        total = len(persons)
        counts = Counter(GENDER_LABELS.get(p.gender or "", "Unknown") for p in persons)
        return [
            GenderDistribution(label, count, percentage(count, total))
            for label, count in counts.most_common()
        ]

    def geographic_distribution(self, persons: list[Person]) -> list[GeographicDistribution]:
        total = len(persons)
        counts = Counter(
            p.birth_place.strip() for p in persons if p.birth_place and p.birth_place.strip()
        )
        return [
            GeographicDistribution(location, count, percentage(count, total))
            for location, count in counts.most_common(self.config.geographic_top_n)
        ]

    def surname_frequency(self, persons: list[Person]) -> list[SurnameFrequency]:
        total = len(persons)
        counts = Counter(p.last_name.strip() for p in persons if p.last_name.strip())
        return [
            SurnameFrequency(surname, count, percentage(count, total))
            for surname, count in counts.most_common(self.config.surname_top_n)
        ]

    def lifespan_trends(self, persons: list[Person]) -> list[LifespanTrend]:
        by_decade: dict[int, list[int]] = defaultdict(list)
        for person in persons:
            if person.is_living or not person.date_of_birth or not person.date_of_passing:
                continue
            lifespan = person.age_on(person.date_of_passing)
            if lifespan is not None and lifespan > 0:
                by_decade[person.date_of_birth.year // 10 * 10].append(lifespan)

        return [
            LifespanTrend(
                decade=f"{decade}s",
                average_lifespan=round_half_up(sum(spans) / len(spans)),
                sample_size=len(spans),
            )
            for decade, spans in sorted(by_decade.items())
        ]

    def notable_living(self, persons: list[Person]) -> tuple[Optional[NotablePerson], Optional[NotablePerson]]:
        """Oldest and youngest living person with a known birth date."""
        living = [
            NotablePerson(p.id, p.full_name, p.age_on(self.today))
            for p in persons
            if p.is_living and p.date_of_birth
        ]
        if not living:
            return None, None
        living.sort(key=lambda n: n.age, reverse=True)
        return living[0], living[-1]

    def statistics(self, include_deceased: bool = True) -> StatisticsResult:
        persons = self.persons if include_deceased else [p for p in self.persons if p.is_living]
        oldest, youngest = self.notable_living(persons)
        living_count = sum(1 for p in persons if p.is_living)

        result = StatisticsResult(
            age_distribution=self.age_distribution(persons),
            generation_sizes=self.generation_sizes(persons),
            gender_distribution=self.gender_distribution(persons),
            geographic_distribution=self.geographic_distribution(persons),
            surname_frequency=self.surname_frequency(persons),
            lifespan_trends=self.lifespan_trends(persons),
            metadata=StatisticsMetadata(
                total_people=len(persons),
                living_count=living_count,
                deceased_count=len(persons) - living_count,
                oldest_person=oldest,
                youngest_person=youngest,
            ),
        )
        logger.debug("Computed statistics for %d people", len(persons))
        return result
