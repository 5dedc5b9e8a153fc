"""
Click-based CLI for the Grand Prix scraper.

Usage:
    f1scraper latest --session-type Race --output data/latest-gp.json
    f1scraper grand-prix 1257 --year 2025 --laps --stints
    f1scraper season 2025 --session-type Race --output data/season-2025.json
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

import click

from f1scraper._logging import configure_logging
from f1scraper.client import OpenF1Client
from f1scraper.config import ScraperSettings
from f1scraper.envelope import ScraperResult
from f1scraper.output import generate_gp_filename, json_stats, save_json
from f1scraper.scraper import SESSION_TYPES, GrandPrixScraper, ScrapeConfig

logger = logging.getLogger("f1scraper.cli")

Job = Callable[[GrandPrixScraper], Awaitable[ScraperResult[Any]]]


def _scrape_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    options = [
        click.option(
            "--session-type", "session_types", multiple=True,
            type=click.Choice(SESSION_TYPES),
            help="Only scrape sessions with this name (repeatable). Default: all.",
        ),
        click.option("--laps", "include_laps", is_flag=True, help="Include lap timing."),
        click.option("--stints", "include_stints", is_flag=True, help="Include tyre stints."),
        click.option("--pits", "include_pits", is_flag=True, help="Include pit stops."),
        click.option("--race-control", "include_race_control", is_flag=True,
                     help="Include race control messages."),
        click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
                     help="Where to write the JSON document."),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


def _build_config(session_types: tuple[str, ...], **flags: bool) -> ScrapeConfig:
    return ScrapeConfig(session_types=session_types or None, **flags)


async def _run(settings: ScraperSettings, job: Job) -> ScraperResult[Any]:
    async with OpenF1Client.from_settings(settings) as f1:
        return await job(GrandPrixScraper(f1))


def _finish(result: ScraperResult[Any], output: str) -> None:
    if not result.success:
        raise click.ClickException(f"Scrape failed: {result.error}")
    save_json(result.data, output)
    stats = json_stats(result.data)
    click.echo(f"Saved {output} ({stats['size_formatted']}, {stats.get('keys', 0)} keys, depth {stats.get('depth', 0)})")


@click.group()
@click.option("--log-level", default=None, help="Override OPENF1_LOG_LEVEL.")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Also log to this file.")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, log_file: str | None) -> None:
    """F1 Grand Prix data scraper for the OpenF1 API."""
    settings = ScraperSettings()
    configure_logging(level=(log_level or settings.log_level).upper(), log_file=log_file)
    ctx.obj = settings


@cli.command()
@_scrape_options
@click.pass_obj
def latest(settings: ScraperSettings, session_types: tuple[str, ...], output: str | None, **flags: bool) -> None:
    """Scrape the most recent Grand Prix."""
    config = _build_config(session_types, **flags)
    result = asyncio.run(_run(settings, lambda s: s.scrape_latest_grand_prix(config)))
    if result.success and output is None:
        meeting = result.data.meeting
        output = generate_gp_filename(meeting.meeting_name or str(meeting.meeting_key), meeting.year)
    _finish(result, output or "latest-gp.json")


@cli.command("grand-prix")
@click.argument("meeting_key", type=int)
@click.option("--year", type=int, default=None, help="Season to look the meeting up in.")
@_scrape_options
@click.pass_obj
def grand_prix(
    settings: ScraperSettings,
    meeting_key: int,
    year: int | None,
    session_types: tuple[str, ...],
    output: str | None,
    **flags: bool,
) -> None:
    """Scrape one Grand Prix by meeting key."""
    config = _build_config(session_types, **flags)
    result = asyncio.run(_run(settings, lambda s: s.scrape_grand_prix(meeting_key, config, year=year)))
    _finish(result, output or f"gp-{meeting_key}.json")


@cli.command()
@click.argument("year", type=int)
@_scrape_options
@click.pass_obj
def season(settings: ScraperSettings, year: int, session_types: tuple[str, ...], output: str | None, **flags: bool) -> None:
    """Scrape every Grand Prix of a season (slow)."""
    config = _build_config(session_types, **flags)
    result = asyncio.run(_run(settings, lambda s: s.scrape_season(year, config)))
    if result.success:
        click.echo(f"Scraped {len(result.data)} Grands Prix")
    _finish(result, output or f"season-{year}.json")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
