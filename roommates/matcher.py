"""
Roommate matching over a roster of preference profiles.

Two query shapes:

- Global assignment (`find_optimal_matches`): scores every ordered pair,
  builds the cost matrix and runs the Hungarian solver, producing one match
  record per participant acting as the assignment row. The solver returns a
  permutation, not a set of mutual pairs: with three participants the result
  can be A -> B, B -> C, C -> A, and with two it is A -> B plus B -> A.
- Per-subject ranking (`find_top_matches`): scores one participant against
  everybody else and sorts by compatibility. No solver involved.

Repository-bound wrappers read a snapshot of the roster and delegate.
"""
from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from .compatibility import build_cost_matrix, round_half_up, score_pair
from .data_models import (
    CompatibilityStats,
    MatchingSummary,
    MatchRecord,
    Participant,
    PreferenceProfile,
)
from .hungarian import assignment_cost, solve
from .repository import ParticipantRepository

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 10

Roster = Union[Sequence[Participant], Mapping[int, PreferenceProfile]]


def _as_roster(participants: Roster) -> List[Tuple[int, PreferenceProfile]]:
    """Normalize either input shape to an ordered list of (id, profile)."""
    if isinstance(participants, Mapping):
        return [(int(pid), profile) for pid, profile in participants.items()]
    return [(p.id, p.preferences) for p in participants]


def _match_record(subject_id: int, subject: PreferenceProfile, partner_id: int, partner: PreferenceProfile) -> MatchRecord:
    result = score_pair(subject, partner)
    return MatchRecord(
        subject_id=subject_id,
        partner_id=partner_id,
        compatibility_percentage=result.percentage,
        breakdown=result.breakdown,
    )


def find_optimal_matches(participants: Roster) -> MatchingSummary:
    """Compute the population-optimal assignment.

    Args:
        participants: Either `Participant` objects or a mapping of participant
            id to profile. Order defines matrix rows and therefore tie-breaks.

    Returns:
        MatchingSummary with one record per assignment row, the total cost
        of the assignment, the rounded mean compatibility and the ids that
        appear in no record.
    """
    roster = _as_roster(participants)
    ids = [pid for pid, _ in roster]

    # Fewer than two people: nothing to assign and the solver is never run
    if len(roster) < 2:
        return MatchingSummary(total_cost=0.0, average_compatibility=0, matches=[], unmatched=ids)

    profiles = [profile for _, profile in roster]
    cost_matrix = build_cost_matrix(profiles)
    assignments = solve(cost_matrix)

    matches: List[MatchRecord] = []
    matched_ids = set()
    for row, col in assignments:
        subject_id, subject = roster[row]
        partner_id, partner = roster[col]
        # breakdown is recomputed, not read back from the cost matrix
        matches.append(_match_record(subject_id, subject, partner_id, partner))
        matched_ids.add(subject_id)
        matched_ids.add(partner_id)

    unmatched = [pid for pid in ids if pid not in matched_ids]
    total_cost = assignment_cost(cost_matrix, assignments)
    average = (
        round_half_up(sum(m.compatibility_percentage for m in matches) / len(matches))
        if matches
        else 0
    )

    logger.info(
        "Matched %d participants: total cost %.1f, average compatibility %d%%",
        len(roster),
        total_cost,
        average,
    )
    return MatchingSummary(
        total_cost=total_cost,
        average_compatibility=average,
        matches=matches,
        unmatched=unmatched,
    )


def find_user_matches(participants: Roster, user_id: int) -> List[MatchRecord]:
    """Score `user_id` against every other participant, best first.

    Returns an empty list when the subject is unknown or alone.
    """
    roster = _as_roster(participants)
    subject = next((profile for pid, profile in roster if pid == user_id), None)
    if subject is None:
        logger.info("No participant with id %s; returning no matches", user_id)
        return []

    matches = [
        _match_record(user_id, subject, pid, profile)
        for pid, profile in roster
        if pid != user_id
    ]
    # stable sort keeps roster order among equal percentages
    matches.sort(key=lambda m: m.compatibility_percentage, reverse=True)
    return matches


def find_top_matches(participants: Roster, user_id: int, limit: int = DEFAULT_TOP_K) -> List[MatchRecord]:
    """Return the `limit` best-ranked candidates for `user_id`."""
    if limit <= 0:
        return []
    return find_user_matches(participants, user_id)[:limit]


def find_all_matches(repository: ParticipantRepository) -> MatchingSummary:
    return find_optimal_matches(repository.get_all())


def find_top_matches_in(
    repository: ParticipantRepository, user_id: int, limit: Optional[int] = None
) -> List[MatchRecord]:
    if repository.get_by_id(user_id) is None:
        return []
    return find_top_matches(repository.get_all(), user_id, DEFAULT_TOP_K if limit is None else limit)


def compatibility_stats(repository: ParticipantRepository) -> CompatibilityStats:
    """Roster statistics backed by one global assignment run."""
    participants = repository.get_all()
    summary = find_optimal_matches(participants)
    return CompatibilityStats(
        total_users=len(participants),
        total_matches=len(summary.matches),
        average_compatibility=summary.average_compatibility,
        unmatched_count=len(summary.unmatched),
        total_cost=summary.total_cost,
    )
