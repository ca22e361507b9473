"""Compatibility scoring for roommate matching.

Each scored attribute has a hand-tuned lookup table keyed by the two answers.
Tables encode domain semantics a plain distance would miss: an early bird and
a night owl clash badly, while "Flexible" gets along with almost anyone.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Sequence

import numpy as np

from .data_models import CompatibilityResult, PreferenceProfile

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50
MAX_ATTRIBUTE_SCORE = 100

ScoreTable = Dict[str, Dict[str, int]]


CLEANLINESS_SCORES: ScoreTable = {
    "Very tidy": {
        "Very tidy": 100,
        "Moderately clean": 80,
        "Relaxed about mess": 40,
        "Prefer organized chaos": 50,
    },
    "Moderately clean": {
        "Very tidy": 80,
        "Moderately clean": 100,
        "Relaxed about mess": 70,
        "Prefer organized chaos": 60,
    },
    "Relaxed about mess": {
        "Very tidy": 40,
        "Moderately clean": 70,
        "Relaxed about mess": 100,
        "Prefer organized chaos": 80,
    },
    "Prefer organized chaos": {
        "Very tidy": 50,
        "Moderately clean": 60,
        "Relaxed about mess": 80,
        "Prefer organized chaos": 100,
    },
}

SLEEP_SCHEDULE_SCORES: ScoreTable = {
    "Early bird (before 10 PM)": {
        "Early bird (before 10 PM)": 100,
        "Night owl (after midnight)": 30,
        "Flexible": 85,
        "Irregular schedule": 60,
    },
    "Night owl (after midnight)": {
        "Early bird (before 10 PM)": 30,
        "Night owl (after midnight)": 100,
        "Flexible": 85,
        "Irregular schedule": 60,
    },
    "Flexible": {
        "Early bird (before 10 PM)": 85,
        "Night owl (after midnight)": 85,
        "Flexible": 100,
        "Irregular schedule": 80,
    },
    "Irregular schedule": {
        "Early bird (before 10 PM)": 60,
        "Night owl (after midnight)": 60,
        "Flexible": 80,
        "Irregular schedule": 100,
    },
}

NOISE_TOLERANCE_SCORES: ScoreTable = {
    "Prefer quiet environment": {
        "Prefer quiet environment": 100,
        "Moderate noise is fine": 70,
        "Don't mind louder spaces": 40,
        "Music/TV lover": 20,
    },
    "Moderate noise is fine": {
        "Prefer quiet environment": 70,
        "Moderate noise is fine": 100,
        "Don't mind louder spaces": 80,
        "Music/TV lover": 50,
    },
    "Don't mind louder spaces": {
        "Prefer quiet environment": 40,
        "Moderate noise is fine": 80,
        "Don't mind louder spaces": 100,
        "Music/TV lover": 90,
    },
    "Music/TV lover": {
        "Prefer quiet environment": 20,
        "Moderate noise is fine": 50,
        "Don't mind louder spaces": 90,
        "Music/TV lover": 100,
    },
}

GUESTS_SCORES: ScoreTable = {
    "Rarely": {
        "Rarely": 100,
        "Occasionally (1-2 times/month)": 80,
        "Frequently (weekly)": 50,
        "Very often": 30,
    },
    "Occasionally (1-2 times/month)": {
        "Rarely": 80,
        "Occasionally (1-2 times/month)": 100,
        "Frequently (weekly)": 80,
        "Very often": 50,
    },
    "Frequently (weekly)": {
        "Rarely": 50,
        "Occasionally (1-2 times/month)": 80,
        "Frequently (weekly)": 100,
        "Very often": 85,
    },
    "Very often": {
        "Rarely": 30,
        "Occasionally (1-2 times/month)": 50,
        "Frequently (weekly)": 85,
        "Very often": 100,
    },
}

LIFESTYLE_SCORES: ScoreTable = {
    "Homebody": {
        "Homebody": 100,
        "Social butterfly": 50,
        "Balanced": 80,
        "Always out": 30,
    },
    "Social butterfly": {
        "Homebody": 50,
        "Social butterfly": 100,
        "Balanced": 80,
        "Always out": 85,
    },
    "Balanced": {
        "Homebody": 80,
        "Social butterfly": 80,
        "Balanced": 100,
        "Always out": 70,
    },
    "Always out": {
        "Homebody": 30,
        "Social butterfly": 85,
        "Balanced": 70,
        "Always out": 100,
    },
}

STUDY_WORK_SCORES: ScoreTable = {
    "Morning person": {
        "Morning person": 100,
        "Afternoon": 70,
        "Evening": 60,
        "Night shifts": 30,
    },
    "Afternoon": {
        "Morning person": 70,
        "Afternoon": 100,
        "Evening": 80,
        "Night shifts": 50,
    },
    "Evening": {
        "Morning person": 60,
        "Afternoon": 80,
        "Evening": 100,
        "Night shifts": 70,
    },
    "Night shifts": {
        "Morning person": 30,
        "Afternoon": 50,
        "Evening": 70,
        "Night shifts": 100,
    },
}

AC_PREFERENCE_SCORES: ScoreTable = {
    "Cool (below 68°F)": {
        "Cool (below 68°F)": 100,
        "Moderate (68-72°F)": 70,
        "Warm (above 72°F)": 40,
        "No preference": 80,
    },
    "Moderate (68-72°F)": {
        "Cool (below 68°F)": 70,
        "Moderate (68-72°F)": 100,
        "Warm (above 72°F)": 70,
        "No preference": 90,
    },
    "Warm (above 72°F)": {
        "Cool (below 68°F)": 40,
        "Moderate (68-72°F)": 70,
        "Warm (above 72°F)": 100,
        "No preference": 80,
    },
    "No preference": {
        "Cool (below 68°F)": 80,
        "Moderate (68-72°F)": 90,
        "Warm (above 72°F)": 80,
        "No preference": 100,
    },
}

# Order here is the breakdown order.
COMPATIBILITY_TABLES: Dict[str, ScoreTable] = {
    "cleanliness": CLEANLINESS_SCORES,
    "sleep_schedule": SLEEP_SCHEDULE_SCORES,
    "noise_tolerance": NOISE_TOLERANCE_SCORES,
    "guests": GUESTS_SCORES,
    "lifestyle": LIFESTYLE_SCORES,
    "study_work": STUDY_WORK_SCORES,
    "ac_preference": AC_PREFERENCE_SCORES,
}

SCORED_ATTRIBUTES: List[str] = list(COMPATIBILITY_TABLES)

ROOMMATE_COUNT_OPTIONS: List[str] = ["1 roommate", "2 roommates", "3 roommates", "4+ roommates"]


def attribute_domain(attribute: str) -> List[str]:
    """Known answers for `attribute`, in questionnaire order."""
    if attribute == "roommate_count":
        return list(ROOMMATE_COUNT_OPTIONS)
    return list(COMPATIBILITY_TABLES[attribute])


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score(attribute: str, value_a: str, value_b: str) -> int:
    """Score two answers for one attribute (0-100).

    Unknown attributes or answers fall back to NEUTRAL_SCORE. Unknown
    attributes log a warning, unknown answers a debug message.
    """
    table = COMPATIBILITY_TABLES.get(attribute)
    if table is None:
        logger.warning("No compatibility table for %r; using neutral score", attribute)
        return NEUTRAL_SCORE
    row = table.get(value_a)
    if row is None or value_b not in row:
        logger.debug("No %s entry for (%r, %r); using neutral score", attribute, value_a, value_b)
        return NEUTRAL_SCORE
    return row[value_b]


def score_pair(profile_a: PreferenceProfile, profile_b: PreferenceProfile) -> CompatibilityResult:
    """Score every scored attribute for the ordered pair and aggregate."""
    breakdown = {
        attribute: score(attribute, getattr(profile_a, attribute), getattr(profile_b, attribute))
        for attribute in SCORED_ATTRIBUTES
    }
    total = sum(breakdown.values())
    percentage = round_half_up(total / (len(breakdown) * MAX_ATTRIBUTE_SCORE) * 100)
    return CompatibilityResult(total=total, percentage=percentage, breakdown=breakdown)


def compatibility_to_cost(percentage: float) -> float:
    # 100% compatible costs nothing, 0% costs 100
    return float(100 - percentage)


def build_cost_matrix(profiles: Sequence[PreferenceProfile]) -> np.ndarray:
    """Build the N x N assignment cost matrix for `profiles`.

    Row i holds the cost of giving participant i each candidate roommate j.
    The diagonal is +inf so nobody is assigned to themselves. Both directions
    are scored separately; the matrix is symmetric only because the tables
    are.
    """
    n = len(profiles)
    cost = np.full((n, n), np.inf, dtype=float)
    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            cost[i, j] = compatibility_to_cost(score_pair(profiles[i], profiles[j]).percentage)
    return cost
