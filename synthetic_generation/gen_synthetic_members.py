#!/usr/bin/env python3
"""Generate a synthetic roommate roster CSV."""

import argparse
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

# Ensure project root (parent of synthetic_generation/) is on sys.path for package imports
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from roommates.compatibility import attribute_domain
from roommates.ingest import PREFERENCE_FIELDS
from synthetic_generation.synth_models import SyntheticParticipant, SyntheticRoster


FIRST_NAMES = ["Alex", "Sam", "Jordan", "Taylor", "Riley", "Casey", "Morgan", "Jamie", "Avery", "Quinn"]
LAST_NAMES = ["Lee", "Patel", "Garcia", "Kim", "Nguyen", "Okafor", "Rossi", "Silva", "Cohen", "Sharma"]
ABOUT_SNIPPETS = [
    "Grad student, into climbing and board games",
    "Works remotely, loves cooking",
    "Nurse on rotating shifts",
    "Undergrad, plays guitar",
    "Software developer, early runner",
]


def generate_timestamped_filename(prefix: str, extension: str) -> str:
    """Generate a timestamped filename, e.g. "synthetic_roster_20241220_143022.csv"."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}.{extension}"


def generate_participant(rng: np.random.Generator, participant_id: int) -> SyntheticParticipant:
    """Draw one participant with answers uniform over each attribute's domain."""
    answers: Dict[str, Any] = {
        field: str(rng.choice(attribute_domain(field))) for field in PREFERENCE_FIELDS
    }
    first = str(rng.choice(FIRST_NAMES))
    last = str(rng.choice(LAST_NAMES))
    return SyntheticParticipant(
        id=participant_id,
        name=f"{first} {last}",
        email=f"{first.lower()}.{last.lower()}.{participant_id}@example.com",
        phone=f"555-{participant_id:04d}",
        about=str(rng.choice(ABOUT_SNIPPETS)),
        **answers,
    )


def generate_roster(total: int, seed: Optional[int] = None) -> SyntheticRoster:
    if total < 0:
        raise ValueError(f"total must be non-negative, got {total}")
    rng = np.random.default_rng(seed)
    return SyntheticRoster(participants=[generate_participant(rng, i) for i in range(1, total + 1)])


def roster_to_df(roster: SyntheticRoster) -> pd.DataFrame:
    records: List[Dict[str, Any]] = [p.model_dump() for p in roster.participants]
    return pd.DataFrame(records)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(description="Generate a synthetic roommate roster.")
    parser.add_argument("--total", type=int, required=True, help="Number of participants to generate")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible rosters")
    parser.add_argument("--out-dir", type=Path, default=Path("data"), help="Directory for the CSV")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> Path:
    """Entry point for CLI execution."""
    args = parse_args(argv)

    args.out_dir.mkdir(parents=True, exist_ok=True)
    output_path = args.out_dir / generate_timestamped_filename("synthetic_roster", "csv")

    print(f"Generating {args.total} synthetic participants...")
    roster = generate_roster(args.total, seed=args.seed)
    roster_to_df(roster).to_csv(output_path, index=False)
    print(f"Saved {len(roster.participants)} synthetic participants to {output_path}")
    return output_path


if __name__ == "__main__":
    main()
