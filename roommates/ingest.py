from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from .data_models import MatchingSummary, MatchRecord, Participant, PreferenceProfile
from .repository import ParticipantRepository

logger = logging.getLogger(__name__)


PREFERENCE_FIELDS: List[str] = list(PreferenceProfile.model_fields)

FIELD_ALIASES: Dict[str, List[str]] = {
    "id": ["id", "participant_id", "user_id", "Participant ID"],
    "name": ["name", "Your name", "Name"],
    "email": ["email", "Your email address", "Email"],
    "phone": ["phone", "Phone number", "Phone"],
    "about": ["about", "bio", "Tell us about yourself"],
    "cleanliness": ["cleanliness", "How would you describe your cleanliness habits?"],
    "sleep_schedule": ["sleep_schedule", "What's your typical sleep schedule?"],
    "noise_tolerance": ["noise_tolerance", "How do you feel about noise levels?"],
    "guests": ["guests", "How often do you have guests over?"],
    "lifestyle": ["lifestyle", "What best describes your lifestyle?"],
    "study_work": ["study_work", "When do you typically study or work from home?"],
    "ac_preference": ["ac_preference", "What's your AC/temperature preference?"],
    "roommate_count": ["roommate_count", "How many roommates are you looking for?"],
}


def get_alias_column(df: pd.DataFrame, key: str) -> Optional[str]:
    for candidate in FIELD_ALIASES.get(key, []):
        if candidate in df.columns:
            return candidate
    return None


def resolve_aliases(df: pd.DataFrame) -> Dict[str, Optional[str]]:
    return {key: get_alias_column(df, key) for key in FIELD_ALIASES}


def clean_roster_df(df: pd.DataFrame) -> pd.DataFrame:
    """Strip headers and string cells, rename aliased columns to canonical names.

    Raises:
        KeyError: If any preference column is missing under every alias.
    """
    out = df.copy()
    out.columns = [col.strip() if isinstance(col, str) else col for col in out.columns]
    for col in out.columns:
        if pd.api.types.is_object_dtype(out[col]) or pd.api.types.is_string_dtype(out[col]):
            out[col] = (
                out[col]
                .astype(str)
                .str.replace("\n", " ")
                .str.replace(r"\s+", " ", regex=True)
                .str.strip()
                .replace({"nan": None, "None": None, "": None})
            )

    alias_map = resolve_aliases(out)
    missing = [field for field in PREFERENCE_FIELDS if alias_map.get(field) is None]
    if missing:
        raise KeyError(f"Missing required columns: {sorted(missing)}")

    renames = {col: key for key, col in alias_map.items() if col is not None and col != key}
    return out.rename(columns=renames)


def read_participants(csv_path: Path) -> pd.DataFrame:
    """Read and clean a roster CSV."""
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Roster CSV not found: {csv_path}")
    return clean_roster_df(pd.read_csv(csv_path, dtype=str))


def _text(row: pd.Series, key: str) -> str:
    value = row.get(key)
    if value is None or pd.isna(value):
        return ""
    return str(value).strip()


def participants_from_df(df: pd.DataFrame) -> List[Participant]:
    """Convert a cleaned roster DataFrame into participants.

    Rows with any blank preference are skipped with a warning, as are rows
    repeating an id or email already seen; the first occurrence wins. Without
    an `id` column participants are numbered from 1 in row order.
    """
    participants: List[Participant] = []
    seen_ids = set()
    seen_emails = set()
    has_id = "id" in df.columns
    for position, (_, row) in enumerate(df.iterrows(), start=1):
        pid = int(row["id"]) if has_id and not pd.isna(row["id"]) else position
        answers = {field: _text(row, field) for field in PREFERENCE_FIELDS}
        blank = [field for field, value in answers.items() if not value]
        if blank:
            logger.warning("Skipping participant %d: missing %s", pid, ", ".join(blank))
            continue
        email = _text(row, "email")
        if pid in seen_ids:
            logger.warning("Skipping row %d: participant id %d already loaded", position, pid)
            continue
        if email and email.lower() in seen_emails:
            logger.warning("Skipping participant %d: email %r already loaded", pid, email)
            continue
        seen_ids.add(pid)
        if email:
            seen_emails.add(email.lower())
        participants.append(
            Participant(
                id=pid,
                name=_text(row, "name") or f"participant_{pid}",
                email=email,
                phone=_text(row, "phone"),
                about=_text(row, "about"),
                preferences=PreferenceProfile(**answers),
            )
        )
    return participants


def load_repository(csv_path: Path) -> ParticipantRepository:
    participants = participants_from_df(read_participants(csv_path))
    logger.info("Loaded %d participants from %s", len(participants), csv_path)
    return ParticipantRepository(participants)


def records_to_df(records: List[MatchRecord], repository: ParticipantRepository) -> pd.DataFrame:
    """Flatten match records into rows enriched with names and bios."""
    rows = []
    for i, record in enumerate(records, start=1):
        subject = repository.get_by_id(record.subject_id)
        partner = repository.get_by_id(record.partner_id)
        row = {
            "match_index": i,
            "subject_id": record.subject_id,
            "subject_name": subject.name if subject else "",
            "partner_id": record.partner_id,
            "partner_name": partner.name if partner else "",
            "partner_about": partner.about if partner else "",
            "compatibility_percentage": record.compatibility_percentage,
        }
        for attribute, value in record.breakdown.items():
            row[f"score_{attribute}"] = value
        rows.append(row)
    return pd.DataFrame(rows)


def matches_to_df(summary: MatchingSummary, repository: ParticipantRepository) -> pd.DataFrame:
    return records_to_df(summary.matches, repository)
