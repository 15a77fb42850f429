"""Genealogy chart engine."""

from family_charts.exceptions import DatasetError, PersonNotFoundError
from family_charts.graph import FamilyCharts
from family_charts.models import Person, Relationship, RelationType

__all__ = [
    "FamilyCharts",
    "Person",
    "Relationship",
    "RelationType",
    "PersonNotFoundError",
    "DatasetError",
]
