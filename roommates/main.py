from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich import print
from rich.logging import RichHandler
from rich.table import Table

from .compatibility import SCORED_ATTRIBUTES, score_pair
from .config import Settings
from .data_models import MatchRecord
from .ingest import load_repository, matches_to_df, records_to_df
from .matcher import compatibility_stats, find_all_matches, find_top_matches_in
from .repository import ParticipantRepository


app = typer.Typer(help="Roommate Match CLI")


def _configure_logging(level: str) -> None:
	package_logger = logging.getLogger("roommates")
	package_logger.setLevel(level)
	package_logger.handlers.clear()
	package_logger.addHandler(RichHandler(level=level, rich_tracebacks=True, show_path=False))


@app.callback()
def main(
	ctx: typer.Context,
	verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
	env_file: Optional[Path] = typer.Option(None, help="Load settings from this .env file"),
):
	"""Optimal roommate assignment from questionnaire answers."""
	# settings may warn while loading, so a handler has to exist first
	_configure_logging("WARNING")
	settings = Settings.from_env(str(env_file) if env_file else None)
	_configure_logging("DEBUG" if verbose else settings.log_level)
	ctx.obj = settings


def _load(csv_path: Path) -> ParticipantRepository:
	try:
		return load_repository(csv_path)
	except (FileNotFoundError, KeyError, ValueError) as e:
		print(f"[red]Could not load roster:[/red] {e}")
		raise typer.Exit(code=1)


def _name(repo: ParticipantRepository, participant_id: int) -> str:
	participant = repo.get_by_id(participant_id)
	return participant.name if participant else f"#{participant_id}"


def _records_table(repo: ParticipantRepository, records: List[MatchRecord], title: str) -> Table:
	table = Table("subject", "partner", "compatibility", *SCORED_ATTRIBUTES, title=title)
	for r in records:
		table.add_row(
			_name(repo, r.subject_id),
			_name(repo, r.partner_id),
			f"{r.compatibility_percentage}%",
			*(str(r.breakdown.get(a, "")) for a in SCORED_ATTRIBUTES),
		)
	return table


@app.command()
def match(
	csv_path: Path = typer.Argument(..., help="Roster CSV with questionnaire answers"),
	out_path: Optional[Path] = typer.Option(None, help="Write match records to this CSV"),
	as_json: bool = typer.Option(False, "--json", help="Print the summary as JSON"),
):
	"""Compute the population-optimal assignment for every participant."""
	repo = _load(csv_path)
	summary = find_all_matches(repo)
	if as_json:
		typer.echo(json.dumps(summary.model_dump(by_alias=True)))
	else:
		print(_records_table(repo, summary.matches, title="Optimal assignment"))
		print(
			f"[bold]{len(summary.matches)} matches[/bold]  "
			f"total cost={summary.total_cost:g}  average compatibility={summary.average_compatibility}%"
		)
		if summary.unmatched:
			print(f"[yellow]Unmatched:[/yellow] {', '.join(_name(repo, i) for i in summary.unmatched)}")
	if out_path:
		matches_to_df(summary, repo).to_csv(out_path, index=False)
		if not as_json:
			print(f"[green]Saved matches to[/green] {out_path}")


@app.command()
def recommend(
	ctx: typer.Context,
	csv_path: Path = typer.Argument(..., help="Roster CSV with questionnaire answers"),
	who: int = typer.Option(..., help="Participant id to rank candidates for"),
	top_k: Optional[int] = typer.Option(None, help="Number of candidates to show"),
	out_path: Optional[Path] = typer.Option(None, help="Write the ranking to this CSV"),
):
	"""Rank the best roommates for one participant."""
	repo = _load(csv_path)
	if repo.get_by_id(who) is None:
		print(f"[red]No participant with id {who}[/red]")
		raise typer.Exit(code=1)
	limit = top_k if top_k is not None else ctx.obj.top_k
	recs = find_top_matches_in(repo, who, limit)
	print(_records_table(repo, recs, title=f"Top {limit} for {_name(repo, who)}"))
	if out_path:
		records_to_df(recs, repo).to_csv(out_path, index=False)
		print(f"[green]Saved ranking to[/green] {out_path}")


@app.command()
def compare(
	csv_path: Path = typer.Argument(..., help="Roster CSV with questionnaire answers"),
	a: int = typer.Argument(..., help="First participant id"),
	b: int = typer.Argument(..., help="Second participant id"),
):
	"""Show the per-attribute breakdown for two participants."""
	repo = _load(csv_path)
	pa, pb = repo.get_by_id(a), repo.get_by_id(b)
	if pa is None or pb is None:
		missing = a if pa is None else b
		print(f"[red]No participant with id {missing}[/red]")
		raise typer.Exit(code=1)
	result = score_pair(pa.preferences, pb.preferences)
	table = Table("attribute", pa.name, pb.name, "score", title=f"{pa.name} vs {pb.name}")
	for attribute in SCORED_ATTRIBUTES:
		table.add_row(
			attribute,
			getattr(pa.preferences, attribute),
			getattr(pb.preferences, attribute),
			str(result.breakdown[attribute]),
		)
	print(table)
	print(f"[bold]Compatibility: {result.percentage}%[/bold] (total {result.total}/{len(SCORED_ATTRIBUTES) * 100})")


@app.command()
def stats(
	csv_path: Path = typer.Argument(..., help="Roster CSV with questionnaire answers"),
):
	"""Roster statistics from one global assignment run."""
	repo = _load(csv_path)
	s = compatibility_stats(repo)
	table = Table("metric", "value")
	for key, value in s.model_dump(by_alias=True).items():
		table.add_row(key, f"{value:g}" if isinstance(value, float) else str(value))
	print(table)


if __name__ == "__main__":
	app()
