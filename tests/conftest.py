import pandas as pd
import pytest

from roommates.data_models import PreferenceProfile
from roommates.repository import ParticipantRepository


BASE_ANSWERS = {
    "cleanliness": "Very tidy",
    "sleep_schedule": "Early bird (before 10 PM)",
    "noise_tolerance": "Prefer quiet environment",
    "guests": "Rarely",
    "lifestyle": "Homebody",
    "study_work": "Morning person",
    "ac_preference": "Moderate (68-72°F)",
    "roommate_count": "1 roommate",
}

ROSTER_ANSWERS = [
    dict(BASE_ANSWERS),
    {
        "cleanliness": "Moderately clean",
        "sleep_schedule": "Flexible",
        "noise_tolerance": "Moderate noise is fine",
        "guests": "Occasionally (1-2 times/month)",
        "lifestyle": "Balanced",
        "study_work": "Afternoon",
        "ac_preference": "Moderate (68-72°F)",
        "roommate_count": "2 roommates",
    },
    {
        "cleanliness": "Relaxed about mess",
        "sleep_schedule": "Night owl (after midnight)",
        "noise_tolerance": "Music/TV lover",
        "guests": "Very often",
        "lifestyle": "Always out",
        "study_work": "Night shifts",
        "ac_preference": "Cool (below 68°F)",
        "roommate_count": "1 roommate",
    },
    {
        "cleanliness": "Prefer organized chaos",
        "sleep_schedule": "Irregular schedule",
        "noise_tolerance": "Don't mind louder spaces",
        "guests": "Frequently (weekly)",
        "lifestyle": "Social butterfly",
        "study_work": "Evening",
        "ac_preference": "No preference",
        "roommate_count": "3 roommates",
    },
    {
        "cleanliness": "Very tidy",
        "sleep_schedule": "Flexible",
        "noise_tolerance": "Prefer quiet environment",
        "guests": "Occasionally (1-2 times/month)",
        "lifestyle": "Homebody",
        "study_work": "Morning person",
        "ac_preference": "Warm (above 72°F)",
        "roommate_count": "1 roommate",
    },
]


@pytest.fixture
def make_profile():
    def _make(**overrides) -> PreferenceProfile:
        return PreferenceProfile(**{**BASE_ANSWERS, **overrides})

    return _make


@pytest.fixture
def repository():
    repo = ParticipantRepository()
    for i, answers in enumerate(ROSTER_ANSWERS, start=1):
        repo.create(
            name=f"Person {i}",
            email=f"person{i}@example.com",
            phone=f"555-000{i}",
            about=f"Bio {i}",
            preferences=PreferenceProfile(**answers),
        )
    return repo


@pytest.fixture
def roster_csv(tmp_path):
    """Roster CSV using the questionnaire's question texts as headers."""
    headers = {
        "cleanliness": "How would you describe your cleanliness habits?",
        "sleep_schedule": "What's your typical sleep schedule?",
        "noise_tolerance": "How do you feel about noise levels?",
        "guests": "How often do you have guests over?",
        "lifestyle": "What best describes your lifestyle?",
        "study_work": "When do you typically study or work from home?",
        "ac_preference": "What's your AC/temperature preference?",
        "roommate_count": "How many roommates are you looking for?",
    }
    rows = []
    for i, answers in enumerate(ROSTER_ANSWERS, start=1):
        row = {"id": i * 10, "Your name": f"Person {i}", "Your email address": f"person{i}@example.com", "bio": f"Bio {i}"}
        row.update({headers[k]: v for k, v in answers.items()})
        rows.append(row)
    path = tmp_path / "roster.csv"
    pd.DataFrame(rows).to_csv(path, index=False)
    return path
