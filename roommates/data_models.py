# pydantic models for the roommate matching system
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PreferenceProfile(BaseModel):
    """
    A participant's answers to the lifestyle questionnaire.

    Values are free, non-empty strings so that answers outside the known
    categories still load; the scorer treats them as neutral.
    `roommate_count` is carried along but never scored.
    """

    model_config = ConfigDict(frozen=True, str_min_length=1)

    cleanliness: str
    sleep_schedule: str
    noise_tolerance: str
    guests: str
    lifestyle: str
    study_work: str
    ac_preference: str
    roommate_count: str


class Participant(BaseModel):
    """
    Represents a single participant in the roommate matching roster.
    """

    id: int
    name: str = Field(min_length=1)
    email: str
    phone: str = ""
    about: str = ""
    preferences: PreferenceProfile
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class CompatibilityResult(BaseModel):
    """Score of one ordered pair of profiles.

    Fields:
        total: Sum of the per-attribute scores (0-700).
        percentage: `total` normalised to 0-100 and rounded.
        breakdown: Per-attribute score in [0, 100], in attribute order.
    """

    total: int
    percentage: int
    breakdown: Dict[str, int]


class MatchRecord(BaseModel):
    """Canonical match record produced by the matcher.

    Fields:
        subject_id: Participant acting as the assignment row.
        partner_id: Participant assigned to the subject.
        compatibility_percentage: Pair compatibility in [0, 100].
        breakdown: Per-attribute scores behind the percentage.
    """

    model_config = ConfigDict(populate_by_name=True)

    subject_id: int = Field(alias="subjectId")
    partner_id: int = Field(alias="partnerId")
    compatibility_percentage: int = Field(
        alias="compatibilityPercentage",
        ge=0,
        le=100,
        description="Aggregate compatibility between 0 and 100",
    )
    breakdown: Dict[str, int] = Field(default_factory=dict)


class MatchingSummary(BaseModel):
    """Result of one global assignment run."""

    model_config = ConfigDict(populate_by_name=True)

    total_cost: float = Field(default=0.0, alias="totalCost")
    average_compatibility: int = Field(default=0, alias="averageCompatibility", ge=0, le=100)
    matches: List[MatchRecord] = Field(default_factory=list)
    unmatched: List[int] = Field(default_factory=list)


class CompatibilityStats(BaseModel):
    """Roster-level numbers derived from a global assignment run."""

    model_config = ConfigDict(populate_by_name=True)

    total_users: int = Field(alias="totalUsers")
    total_matches: int = Field(alias="totalMatches")
    average_compatibility: int = Field(alias="averageCompatibility")
    unmatched_count: int = Field(alias="unmatchedCount")
    total_cost: float = Field(alias="totalCost")


class ParticipantUpdate(BaseModel):
    """Partial update payload; unset fields are left untouched."""

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = None
    about: Optional[str] = None
    preferences: Optional[PreferenceProfile] = None
