"""Run the roommate matching pipeline on a roster CSV.

Pseudocode:
1) Configure input CSV path (edit INPUT_CSV or pass a path argument)
2) Load participants via roommates.ingest.load_repository
3) Run roommates.matcher.find_all_matches for the optimal assignment
4) Save match records to OUTPUT_CSV and print a brief summary

Notes:
- The roster needs one column per questionnaire attribute, either under the
  snake_case names or the full question texts.
"""

from __future__ import annotations

from pathlib import Path
import logging
import sys

# Ensure project root (parent of scripts/) is on sys.path for package imports
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from roommates.config import Settings
from roommates.ingest import load_repository, matches_to_df
from roommates.matcher import find_all_matches


# Edit this path to point at the roster you want to match on
INPUT_CSV = Path("data/roster.csv")
OUTPUT_CSV = Path("data/roster_matches.csv")


def main(input_csv: Path = INPUT_CSV, output_csv: Path = OUTPUT_CSV) -> None:
    """Entry point to run the matching pipeline on `input_csv`.

    Raises:
        FileNotFoundError: If the input CSV does not exist.
        KeyError: If required preference columns are missing.
    """
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")

    # 1) Load participants
    print(f"[1/3] Loading participants from {input_csv}...")
    repo = load_repository(input_csv)
    print(f"       Loaded {len(repo)} participants.")

    # 2) Run the global assignment
    print(f"[2/3] Solving the assignment for {len(repo)} participants...")
    summary = find_all_matches(repo)
    print(
        f"       Total cost {summary.total_cost:g}, "
        f"average compatibility {summary.average_compatibility}%."
    )
    if summary.unmatched:
        print(f"       Unmatched ids: {summary.unmatched}")

    # 3) Save results
    print(f"[3/3] Saving results to {output_csv}...")
    output_csv.parent.mkdir(parents=True, exist_ok=True)
    matches_to_df(summary, repo).to_csv(output_csv, index=False)
    print(f"Done. Wrote {len(summary.matches)} matches to {output_csv}")


if __name__ == "__main__":
    try:
        if len(sys.argv) > 1:
            in_path = Path(sys.argv[1])
            out_path = Path(sys.argv[2]) if len(sys.argv) > 2 else in_path.with_name(f"{in_path.stem}_matches.csv")
            main(in_path, out_path)
        else:
            main()
    except Exception as exc:
        print(f"Error: {exc}")
        sys.exit(1)
