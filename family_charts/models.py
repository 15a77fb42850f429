"""Input records consumed by the chart engine."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Gender(str, Enum):
    """Recorded gender values."""
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"
    PREFER_NOT_TO_SAY = "PREFER_NOT_TO_SAY"


class RelationType(str, Enum):
    """What the related person is, relative to the person."""
    PARENT = "PARENT"
    CHILD = "CHILD"
    SPOUSE = "SPOUSE"
    SIBLING = "SIBLING"


class Person(BaseModel):
    """Person record as loaded from the record store."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    date_of_birth: Optional[date] = Field(default=None, alias="dateOfBirth")
    date_of_passing: Optional[date] = Field(default=None, alias="dateOfPassing")
    is_living: bool = Field(default=True, alias="isLiving")
    gender: Optional[str] = None
    photo_url: Optional[str] = Field(default=None, alias="photoUrl")
    birth_place: Optional[str] = Field(default=None, alias="birthPlace")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def age_on(self, end: date) -> Optional[int]:
        """Whole years between birth and ``end``."""
        if not self.date_of_birth:
            return None
        return end.year - self.date_of_birth.year - (
            (end.month, end.day) < (self.date_of_birth.month, self.date_of_birth.day)
        )


class Relationship(BaseModel):
    """One directional relationship row.

    Every kinship fact is stored twice, once per direction: PARENT/CHILD
    rows are inverses of each other, SPOUSE and SIBLING rows mirror.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    person_id: str = Field(alias="personId")
    related_person_id: str = Field(alias="relatedPersonId")
    type: RelationType
    marriage_date: Optional[date] = Field(default=None, alias="marriageDate")
    divorce_date: Optional[date] = Field(default=None, alias="divorceDate")
    is_active: bool = Field(default=True, alias="isActive")

    @property
    def is_divorced(self) -> bool:
        return self.divorce_date is not None or not self.is_active
