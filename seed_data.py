"""
Seed script for Family Charts - writes a sample dataset.

This script:
1. Builds a four-generation sample family with spouses, a remarriage
   and a step-child
2. Stores every kinship fact as two directional relationship rows
3. Writes the result to the configured dataset path

Run this script to start with sample data:
    python seed_data.py
"""

import json
from pathlib import Path

from family_charts.config import settings


PERSONS = [
    # id, first, last, gender, born, died, birth place
    ("gf-p", "Walter", "Hale", "MALE", "1920-03-14", "1991-11-02", "Leeds"),
    ("gm-p", "Edith", "Hale", "FEMALE", "1923-07-30", "2004-01-19", "York"),
    ("gf-m", "Arthur", "Price", "MALE", "1918-05-05", "1979-08-21", "Cardiff"),
    ("gm-m", "Nora", "Price", "FEMALE", "1925-12-01", None, "Cardiff"),
    ("father", "George", "Hale", "MALE", "1950-02-11", None, "Leeds"),
    ("mother", "Ruth", "Hale", "FEMALE", "1952-09-23", None, "Cardiff"),
    ("uncle", "Paul", "Price", "MALE", "1955-04-17", "2015-06-02", "Cardiff"),
    ("root", "Anna", "Hale", "FEMALE", "1980-06-15", None, "Leeds"),
    ("brother", "Tom", "Hale", "MALE", "1983-01-08", None, "Leeds"),
    ("spouse", "Daniel", "Moss", "MALE", "1978-10-10", None, "Bristol"),
    ("ex-spouse", "Clara", "Moss", "FEMALE", "1979-02-02", None, "Bristol"),
    ("child-1", "Lily", "Moss", "FEMALE", "2008-04-04", None, "Bristol"),
    ("child-2", "Sam", "Moss", "MALE", "2011-12-12", None, "Bristol"),
    ("step-child", "Max", "Moss", "MALE", "2003-03-03", None, "Bristol"),
]

PARENT_CHILD = [
    ("gf-p", "father"), ("gm-p", "father"),
    ("gf-m", "mother"), ("gm-m", "mother"),
    ("gf-m", "uncle"), ("gm-m", "uncle"),
    ("father", "root"), ("mother", "root"),
    ("father", "brother"), ("mother", "brother"),
    ("root", "child-1"), ("spouse", "child-1"),
    ("root", "child-2"), ("spouse", "child-2"),
    ("spouse", "step-child"), ("ex-spouse", "step-child"),
]

SPOUSES = [
    ("gf-p", "gm-p", None),
    ("gf-m", "gm-m", None),
    ("father", "mother", None),
    ("root", "spouse", None),
    ("spouse", "ex-spouse", "2005-09-01"),
]


def sample_dataset() -> dict:
    """Sample family as a JSON-ready document."""
    persons = [
        {
            "id": pid,
            "firstName": first,
            "lastName": last,
            "gender": gender,
            "dateOfBirth": born,
            "dateOfPassing": died,
            "isLiving": died is None,
            "birthPlace": place,
        }
        for pid, first, last, gender, born, died, place in PERSONS
    ]

    relationships = []
    for parent, child in PARENT_CHILD:
        relationships.append({"personId": child, "relatedPersonId": parent, "type": "PARENT"})
        relationships.append({"personId": parent, "relatedPersonId": child, "type": "CHILD"})
    for a, b, divorced in SPOUSES:
        for person, related in ((a, b), (b, a)):
            relationships.append({
                "personId": person,
                "relatedPersonId": related,
                "type": "SPOUSE",
                "divorceDate": divorced,
                "isActive": divorced is None,
            })
    for i, rel in enumerate(relationships, start=1):
        rel["id"] = f"rel-{i}"

    return {"persons": persons, "relationships": relationships}


def main():
    path = Path(settings.data.dataset_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = sample_dataset()
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    print(f"✅ Wrote {len(data['persons'])} persons and "
          f"{len(data['relationships'])} relationships to {path}")


if __name__ == "__main__":
    main()
