"""Tests for dataset loading."""

import json

import pytest

from family_charts import DatasetError
from family_charts.dataset import load_dataset, parse_dataset
from family_charts.models import RelationType
from seed_data import sample_dataset


class TestParseDataset:
    """Test validation of dataset documents."""

    def test_sample_dataset(self):
        """Sample dataset should validate from camelCase keys."""
        dataset = parse_dataset(sample_dataset())
        assert len(dataset.persons) == 14
        assert len(dataset.relationships) == 42
        root = next(p for p in dataset.persons if p.id == "root")
        assert root.first_name == "Anna"
        assert root.date_of_birth.year == 1980

    def test_divorce_fields(self):
        """Divorced spouse rows should be flagged."""
        dataset = parse_dataset(sample_dataset())
        divorced = [
            r for r in dataset.relationships
            if r.type == RelationType.SPOUSE and r.is_divorced
        ]
        assert {(r.person_id, r.related_person_id) for r in divorced} == {
            ("spouse", "ex-spouse"), ("ex-spouse", "spouse"),
        }

    def test_missing_sections(self):
        """Missing sections should give an empty dataset."""
        dataset = parse_dataset({})
        assert dataset.persons == []
        assert dataset.relationships == []

    @pytest.mark.parametrize("section", ["persons", "relationships"])
    @pytest.mark.parametrize("value", [None, {}, "p1"])
    def test_section_not_a_list(self, section, value):
        """Null or non-list sections should raise DatasetError."""
        with pytest.raises(DatasetError, match="must be a list"):
            parse_dataset({section: value})

    def test_invalid_record(self):
        """Invalid records should raise DatasetError."""
        with pytest.raises(DatasetError):
            parse_dataset({"relationships": [{"id": "r1", "type": "COUSIN"}]})


class TestLoadDataset:
    """Test reading dataset files."""

    def test_load(self, tmp_path):
        """Should read a JSON file written by the seed script."""
        path = tmp_path / "family.json"
        path.write_text(json.dumps(sample_dataset()), encoding="utf-8")
        dataset = load_dataset(path)
        assert len(dataset.persons) == 14

    def test_missing_file(self, tmp_path):
        """Missing file should raise DatasetError."""
        with pytest.raises(DatasetError, match="not found"):
            load_dataset(tmp_path / "missing.json")

    def test_bad_json(self, tmp_path):
        """Malformed JSON should raise DatasetError."""
        path = tmp_path / "family.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DatasetError, match="not valid JSON"):
            load_dataset(path)

    def test_not_an_object(self, tmp_path):
        """Top-level list should raise DatasetError."""
        path = tmp_path / "family.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(DatasetError, match="JSON object"):
            load_dataset(path)
