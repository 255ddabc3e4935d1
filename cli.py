#!/usr/bin/env python3
"""
CLI for scoring matches with Crease Live
"""
import logging
import re

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from app.config import settings
from app.database import init_db, get_session
from app.engine import ScoringError
from app.engine.state import BallEvent, ExtraType, Match
from app.models.player import PlayerRole
from app.repositories import SqlMatchRepository, SqlRosterProvider
from app.services import ScoringService

console = Console()

# "4", "W", "wd", "wd2", "nb4", "b1", "lb2"
BALL_PATTERN = re.compile(r"(?P<extra>wd|nb|lb|b)?(?P<runs>[0-6])?")

EXTRA_CODES = {
    "wd": ExtraType.WIDE,
    "nb": ExtraType.NO_BALL,
    "b": ExtraType.BYE,
    "lb": ExtraType.LEG_BYE,
}


def parse_ball(code: str) -> BallEvent:
    """Turn scorer shorthand into a ball event"""
    code = code.strip().lower()
    if code == "w":
        return BallEvent(is_wicket=True)
    m = BALL_PATTERN.fullmatch(code)
    if not code or not m:
        raise click.BadParameter(f"Unrecognised ball '{code}'")
    extra = EXTRA_CODES.get(m.group("extra"), ExtraType.NONE)
    runs = m.group("runs")
    if runs is None and extra in (ExtraType.NONE, ExtraType.BYE, ExtraType.LEG_BYE):
        raise click.BadParameter(f"Ball '{code}' needs a run count")
    return BallEvent(runs=int(runs or 0), extra_type=extra)


def _service(session) -> ScoringService:
    return ScoringService(SqlMatchRepository(session), SqlRosterProvider(session))


@click.group()
@click.option("--verbose", is_flag=True, help="Log every ball")
def cli(verbose: bool):
    """Crease Live - ball-by-ball cricket scoring"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
def init():
    """Initialize the database"""
    console.print("[yellow]Initializing database...[/yellow]")
    init_db()
    console.print("[green]Database initialized successfully![/green]")


@cli.command()
@click.argument("name")
@click.argument("short_name")
def add_team(name: str, short_name: str):
    """Register a team"""
    session = get_session()
    try:
        team = SqlRosterProvider(session).add_team(name, short_name)
        console.print(f"[green]Team {team.name} registered with id {team.id}[/green]")
    finally:
        session.close()


@cli.command()
@click.argument("team_id", type=int)
@click.argument("name")
@click.option("--role", type=click.Choice([r.value for r in PlayerRole]), default=None)
def add_player(team_id: int, name: str, role: str):
    """Add a player to a team's squad"""
    session = get_session()
    try:
        player = SqlRosterProvider(session).add_player(team_id, name, PlayerRole(role) if role else None)
        console.print(f"[green]{player.name} added with id {player.id}[/green]")
    except ScoringError as e:
        console.print(f"[red]{e}[/red]")
    finally:
        session.close()


@cli.command()
def list_teams():
    """List teams and their squads"""
    session = get_session()
    roster = SqlRosterProvider(session)
    teams = roster.list_teams()

    if not teams:
        console.print("[red]No teams found. Run 'add-team' first.[/red]")
        session.close()
        return

    table = Table(title=f"Teams ({len(teams)} total)")
    table.add_column("ID")
    table.add_column("Name", style="cyan")
    table.add_column("Short")
    table.add_column("Squad", style="magenta")

    for team in teams:
        squad = ", ".join(f"{p.name} ({p.id})" for p in roster.list_players(team.id))
        table.add_row(str(team.id), team.name, team.short_name, squad)

    console.print(table)
    session.close()


@cli.command()
@click.argument("team_a_id", type=int)
@click.argument("team_b_id", type=int)
@click.option("--overs", default=None, type=int, help="Innings length in overs")
@click.option("--venue", default="", help="Ground name")
def schedule(team_a_id: int, team_b_id: int, overs: int, venue: str):
    """Schedule a match between two teams"""
    session = get_session()
    try:
        match = _service(session).schedule_match(team_a_id, team_b_id, max_overs=overs, venue=venue)
        console.print(f"[green]Match {match.id} scheduled: {match.team_a.name} vs {match.team_b.name}[/green]")
    except ScoringError as e:
        console.print(f"[red]{e}[/red]")
    finally:
        session.close()


@cli.command()
def matches():
    """List scheduled, live and completed matches"""
    session = get_session()
    all_matches = _service(session).list_matches()

    table = Table(title="Matches")
    table.add_column("ID")
    table.add_column("Fixture", style="cyan")
    table.add_column("Status", style="magenta")
    table.add_column("Score")
    table.add_column("Result")

    for match in all_matches:
        table.add_row(
            str(match.id),
            f"{match.team_a.short_name} vs {match.team_b.short_name}",
            match.status.value,
            " | ".join(f"{i.runs}/{i.wickets} ({i.overs_display})" for i in match.innings),
            match.result_summary or "",
        )

    console.print(table)
    session.close()


@cli.command()
@click.argument("match_id", type=int)
@click.argument("batting_team_id", type=int)
def start(match_id: int, batting_team_id: int):
    """Open the first innings"""
    session = get_session()
    try:
        _service(session).start_match(match_id, batting_team_id)
        console.print(f"[green]Match {match_id} is live[/green]")
    except ScoringError as e:
        console.print(f"[red]{e}[/red]")
    finally:
        session.close()


@cli.command()
@click.argument("match_id", type=int)
@click.option("--striker", type=int, default=None)
@click.option("--non-striker", type=int, default=None)
@click.option("--bowler", type=int, default=None)
def assign(match_id: int, striker: int, non_striker: int, bowler: int):
    """Set the batters at the crease and the bowler"""
    session = get_session()
    try:
        match = _service(session).assign_players(
            match_id, striker_id=striker, non_striker_id=non_striker, current_bowler_id=bowler,
        )
        _print_live(match)
    except ScoringError as e:
        console.print(f"[red]{e}[/red]")
    finally:
        session.close()


@cli.command()
@click.argument("match_id", type=int)
@click.argument("balls", nargs=-1, required=True)
def score(match_id: int, balls: tuple):
    """
    Record one or more balls in scorer shorthand.

    0-6 runs, W wicket, wd/wd2 wide, nb/nb4 no-ball, b1 bye, lb2 leg-bye.
    """
    session = get_session()
    service = _service(session)
    try:
        events = [parse_ball(code) for code in balls]
        for event in events:
            match = service.record_ball(match_id, event)
        _print_live(match)
    except ScoringError as e:
        console.print(f"[red]{e}[/red]")
    finally:
        session.close()


@cli.command()
@click.argument("match_id", type=int)
def end_innings(match_id: int):
    """Close the first innings"""
    session = get_session()
    try:
        match = _service(session).end_innings(match_id)
        console.print(f"[green]Innings closed. Target: {match.current.target}[/green]")
    except ScoringError as e:
        console.print(f"[red]{e}[/red]")
    finally:
        session.close()


@cli.command()
@click.argument("match_id", type=int)
def complete(match_id: int):
    """Complete the match and show the result"""
    session = get_session()
    try:
        match = _service(session).complete_match(match_id)
        console.print(Panel(f"[bold green]{match.result_summary}[/bold green]"))
    except ScoringError as e:
        console.print(f"[red]{e}[/red]")
    finally:
        session.close()


@cli.command()
@click.argument("match_id", type=int)
def scorecard(match_id: int):
    """Print both innings scorecards"""
    session = get_session()
    try:
        match = _service(session).get_match(match_id)
    except ScoringError as e:
        console.print(f"[red]{e}[/red]")
        session.close()
        return

    console.print(Panel(f"[bold]{match.team_a.name} vs {match.team_b.name}[/bold] ({match.status.value})"))
    for number, innings in enumerate(match.innings, start=1):
        team = match.team(innings.batting_team_id)
        console.print(
            f"\n[bold]Innings {number}: {team.name} {innings.runs}/{innings.wickets} "
            f"({innings.overs_display} ov, extras {innings.extras})[/bold]"
        )
        _print_scorecard(innings)
    if match.result_summary:
        console.print(f"\n[bold green]{match.result_summary}[/bold green]")
    session.close()


def _print_live(match: Match):
    """Print the score line and the current over"""
    innings = match.current
    this_over = " ".join(b.label for b in innings.this_over.balls) if innings.this_over else ""
    line = f"{innings.runs}/{innings.wickets} ({innings.overs_display})"
    if innings.target:
        line += f" - target {innings.target}"
    console.print(f"[bold]{line}[/bold]  this over: {this_over}")
    striker = innings.batsman(innings.striker_id) if innings.striker_id else None
    if striker:
        console.print(f"  * {striker.name} {striker.runs} ({striker.balls})")
    non_striker = innings.batsman(innings.non_striker_id) if innings.non_striker_id else None
    if non_striker:
        console.print(f"    {non_striker.name} {non_striker.runs} ({non_striker.balls})")


def _print_scorecard(innings):
    """Print innings scorecard"""
    # Batting
    bat_table = Table(title="Batting")
    bat_table.add_column("Batter", style="cyan")
    bat_table.add_column("Dismissal")
    bat_table.add_column("R", justify="right")
    bat_table.add_column("B", justify="right")
    bat_table.add_column("4s", justify="right")
    bat_table.add_column("6s", justify="right")
    bat_table.add_column("SR", justify="right")

    for bi in innings.batsmen_stats:
        dismissal = bi.dismissal if bi.is_out else "not out"
        bat_table.add_row(
            bi.name,
            dismissal,
            str(bi.runs),
            str(bi.balls),
            str(bi.fours),
            str(bi.sixes),
            f"{bi.strike_rate:.1f}",
        )

    console.print(bat_table)

    # Bowling
    bowl_table = Table(title="Bowling")
    bowl_table.add_column("Bowler", style="magenta")
    bowl_table.add_column("O", justify="right")
    bowl_table.add_column("R", justify="right")
    bowl_table.add_column("W", justify="right")
    bowl_table.add_column("Econ", justify="right")

    for spell in innings.bowler_stats:
        bowl_table.add_row(
            spell.name,
            spell.overs_display,
            str(spell.runs),
            str(spell.wickets),
            f"{spell.economy:.1f}",
        )

    console.print(bowl_table)


if __name__ == "__main__":
    cli()
