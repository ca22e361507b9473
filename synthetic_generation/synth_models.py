#!/usr/bin/env python3
"""Pydantic models for synthetic roommate roster data.

These models pin every answer to the questionnaire's dropdown values so that
generated rosters only ever contain known categories.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


Cleanliness = Literal[
    "Very tidy",
    "Moderately clean",
    "Relaxed about mess",
    "Prefer organized chaos",
]

SleepSchedule = Literal[
    "Early bird (before 10 PM)",
    "Night owl (after midnight)",
    "Flexible",
    "Irregular schedule",
]

NoiseTolerance = Literal[
    "Prefer quiet environment",
    "Moderate noise is fine",
    "Don't mind louder spaces",
    "Music/TV lover",
]

Guests = Literal[
    "Rarely",
    "Occasionally (1-2 times/month)",
    "Frequently (weekly)",
    "Very often",
]

Lifestyle = Literal["Homebody", "Social butterfly", "Balanced", "Always out"]

StudyWork = Literal["Morning person", "Afternoon", "Evening", "Night shifts"]

ACPreference = Literal[
    "Cool (below 68°F)",
    "Moderate (68-72°F)",
    "Warm (above 72°F)",
    "No preference",
]

RoommateCount = Literal["1 roommate", "2 roommates", "3 roommates", "4+ roommates"]


class SyntheticParticipant(BaseModel):
    """Schema for a single synthetic roster row.

    Notes:
    - Names, emails and phones are fabricated from the id.
    - Column names match what `roommates.ingest` reads.
    """

    id: int = Field(..., ge=1, description="Participant id, unique within the roster")
    name: str = Field(..., min_length=1, description="Fabricated, non-PII name")
    email: str
    phone: Optional[str] = None
    about: Optional[str] = Field(default=None, description="Short self-summary")

    cleanliness: Cleanliness
    sleep_schedule: SleepSchedule
    noise_tolerance: NoiseTolerance
    guests: Guests
    lifestyle: Lifestyle
    study_work: StudyWork
    ac_preference: ACPreference
    roommate_count: RoommateCount


class SyntheticRoster(BaseModel):
    """Wrapper for a generated roster."""
    participants: List[SyntheticParticipant] = Field(..., description="List of synthetic participants")
