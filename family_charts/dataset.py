"""Load person and relationship records from a JSON export."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from family_charts.exceptions import DatasetError
from family_charts.models import Person, Relationship


logger = logging.getLogger(__name__)


@dataclass
class Dataset:
    """All persons and relationships, loaded once per chart request."""
    persons: list[Person] = field(default_factory=list)
    relationships: list[Relationship] = field(default_factory=list)


def parse_dataset(data: dict) -> Dataset:
    """Validate a ``{"persons": [...], "relationships": [...]}`` document."""
    for section in ("persons", "relationships"):
        if not isinstance(data.get(section, []), list):
            raise DatasetError(f"Dataset section '{section}' must be a list")
    try:
        persons = [Person.model_validate(p) for p in data.get("persons", [])]
        relationships = [Relationship.model_validate(r) for r in data.get("relationships", [])]
    except ValidationError as e:
        raise DatasetError(f"Invalid dataset record: {e}") from e
    return Dataset(persons=persons, relationships=relationships)


def load_dataset(path: Union[str, Path]) -> Dataset:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise DatasetError(f"Dataset not found: {path}") from e
    except json.JSONDecodeError as e:
        raise DatasetError(f"Dataset is not valid JSON: {path}: {e}") from e

    if not isinstance(data, dict):
        raise DatasetError(f"Dataset must be a JSON object: {path}")

    dataset = parse_dataset(data)
    logger.info(
        "Loaded %d persons and %d relationships from %s",
        len(dataset.persons), len(dataset.relationships), path,
    )
    return dataset
