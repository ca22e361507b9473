from roommates.compatibility import attribute_domain
from roommates.ingest import PREFERENCE_FIELDS, clean_roster_df, load_repository, participants_from_df
from roommates.matcher import find_optimal_matches
from synthetic_generation.gen_synthetic_members import generate_roster, main, roster_to_df


def test_generated_answers_stay_in_domain():
    roster = generate_roster(20, seed=11)
    assert [p.id for p in roster.participants] == list(range(1, 21))
    for participant in roster.participants:
        for field in PREFERENCE_FIELDS:
            assert getattr(participant, field) in attribute_domain(field)


def test_seed_is_reproducible():
    assert generate_roster(5, seed=3) == generate_roster(5, seed=3)


def test_generated_roster_feeds_the_matcher():
    df = roster_to_df(generate_roster(8, seed=5))
    participants = participants_from_df(clean_roster_df(df))
    summary = find_optimal_matches(participants)
    assert len(summary.matches) == 8
    assert summary.unmatched == []


def test_main_writes_csv(tmp_path):
    path = main(["--total", "4", "--seed", "1", "--out-dir", str(tmp_path)])
    assert path.exists()
    assert len(load_repository(path)) == 4
