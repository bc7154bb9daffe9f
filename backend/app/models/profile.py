"""
Profile Models - Biographical and lifestyle snapshot for one user.
"""

from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Gender(str, Enum):
    """Gender as collected by the profile form. Informational only."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class Lifestyle(BaseModel):
    """Lifestyle flags feeding the estimator."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    smoker: bool = False
    drinker: bool = False
    regular_exercise: bool = False
    healthy_diet: bool = False


class Profile(BaseModel):
    """
    Stored profile. ``birthdate`` may be missing: a partial profile is valid,
    it just cannot be estimated.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    birthdate: Optional[date] = None
    gender: Optional[Gender] = None
    height: Optional[float] = Field(None, gt=0)  # cm
    weight: Optional[float] = Field(None, gt=0)  # kg
    nationality: Optional[str] = None
    lifestyle: Lifestyle = Field(default_factory=Lifestyle)


class LifestyleUpdate(BaseModel):
    """Partial lifestyle update - omitted flags keep their stored value."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    smoker: Optional[bool] = None
    drinker: Optional[bool] = None
    regular_exercise: Optional[bool] = None
    healthy_diet: Optional[bool] = None


class ProfileUpdate(BaseModel):
    """Partial profile update - omitted or null fields keep their stored value."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    birthdate: Optional[date] = None
    gender: Optional[Gender] = None
    height: Optional[float] = Field(None, gt=0)
    weight: Optional[float] = Field(None, gt=0)
    nationality: Optional[str] = None
    lifestyle: Optional[LifestyleUpdate] = None

    def merge_into(self, current: Optional[Profile]) -> Profile:
        """Return a new profile with this update applied on top of ``current``."""
        current = current or Profile()
        merged = current.model_dump()

        changes = self.model_dump(exclude_none=True, exclude={"lifestyle"})
        merged.update(changes)

        if self.lifestyle is not None:
            merged["lifestyle"].update(self.lifestyle.model_dump(exclude_none=True))

        return Profile.model_validate(merged)
