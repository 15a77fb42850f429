"""Graph package - relationship traversal and chart layouts."""

from family_charts.graph.charts import FamilyCharts
from family_charts.graph.collectors import CollectionState, Direction
from family_charts.graph.relationship_index import RelationshipIndex, build_relationship_index

__all__ = [
    "FamilyCharts",
    "CollectionState",
    "Direction",
    "RelationshipIndex",
    "build_relationship_index",
]
