"""In-memory participant roster.

The roster is owned by whoever creates it and handed to the matcher entry
points explicitly; there is no module-level instance.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from .data_models import Participant, ParticipantUpdate, PreferenceProfile

logger = logging.getLogger(__name__)


class DuplicateEmailError(ValueError):
    """Raised when a participant is created with an email already on the roster."""


class ParticipantRepository:
    """Keeps participants keyed by id, in insertion order. Ids start at 1."""

    def __init__(self, participants: Optional[Iterable[Participant]] = None):
        self._participants: Dict[int, Participant] = {}
        self._next_id = 1
        for participant in participants or []:
            self.add(participant)

    def __len__(self) -> int:
        return len(self._participants)

    def __contains__(self, participant_id: object) -> bool:
        return participant_id in self._participants

    def create(
        self,
        name: str,
        email: str,
        preferences: PreferenceProfile,
        phone: str = "",
        about: str = "",
    ) -> Participant:
        """Assign the next id and store a new participant.

        Raises:
            ValueError: If `name` or `email` is blank.
            DuplicateEmailError: If `email` is already on the roster.
        """
        if not name.strip() or not email.strip():
            raise ValueError("Participant name and email are required")
        if self.find_by_email(email) is not None:
            raise DuplicateEmailError(f"Participant with email {email!r} already exists")
        participant = Participant(
            id=self._next_id,
            name=name,
            email=email,
            phone=phone,
            about=about,
            preferences=preferences,
        )
        self._participants[participant.id] = participant
        self._next_id += 1
        logger.debug("Created participant %d", participant.id)
        return participant

    def add(self, participant: Participant) -> Participant:
        """Store a participant that already carries an id (e.g. loaded from CSV)."""
        if participant.id in self._participants:
            raise ValueError(f"Participant id {participant.id} already exists")
        if self.find_by_email(participant.email) is not None:
            raise DuplicateEmailError(f"Participant with email {participant.email!r} already exists")
        self._participants[participant.id] = participant
        self._next_id = max(self._next_id, participant.id + 1)
        return participant

    def get_by_id(self, participant_id: int) -> Optional[Participant]:
        return self._participants.get(participant_id)

    def get_all(self) -> List[Participant]:
        return list(self._participants.values())

    def get_by_ids(self, participant_ids: Iterable[int]) -> List[Participant]:
        return [self._participants[i] for i in participant_ids if i in self._participants]

    def find_by_email(self, email: str) -> Optional[Participant]:
        if not email:
            return None
        return next((p for p in self._participants.values() if p.email == email), None)

    def update(self, participant_id: int, changes: ParticipantUpdate) -> Optional[Participant]:
        """Apply the fields set on `changes`; returns None for an unknown id."""
        current = self._participants.get(participant_id)
        if current is None:
            return None
        data = {k: v for k, v in changes.model_dump(exclude_unset=True).items() if v is not None}
        new_email = data.get("email")
        if new_email and new_email != current.email and self.find_by_email(new_email) is not None:
            raise DuplicateEmailError(f"Participant with email {new_email!r} already exists")
        if "preferences" in data:
            data["preferences"] = changes.preferences
        updated = current.model_copy(update={**data, "updated_at": datetime.now()})
        self._participants[participant_id] = updated
        return updated

    def delete(self, participant_id: int) -> bool:
        return self._participants.pop(participant_id, None) is not None
