"""Main CLI interface for wikilookup."""

import json
import logging
from datetime import date, datetime
from typing import Any, Optional, Tuple

import click

from ..core.config import Config
from ..core.models import CalendarDate, LookupResult, LookupStatus
from ..lookups import Lookups

DATE_FORMATS = ["%Y%m%d", "%Y-%m-%d"]


def _json_default(value: Any) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Cannot serialize {type(value).__name__}")


def _cell(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def render_tsv(data: Any) -> str:
    """Render a table, column or mapping as tab-separated lines."""
    if isinstance(data, dict):
        rows = []
        for key, value in data.items():
            values = value if isinstance(value, list) else [value]
            rows.append([key] + values)
    else:
        rows = [row if isinstance(row, list) else [row] for row in data]
    return "\n".join("\t".join(_cell(v) for v in row) for row in rows)


def _to_date(value: Optional[datetime]) -> Optional[CalendarDate]:
    return CalendarDate(value.date()) if value else None


def _emit(result: LookupResult) -> None:
    ctx = click.get_current_context()
    if result.data:
        if ctx.obj["format"] == "json":
            click.echo(json.dumps(result.data, indent=2, ensure_ascii=False,
                                  default=_json_default))
        else:
            click.echo(render_tsv(result.data))

    if result.status in (LookupStatus.FAILED, LookupStatus.INVALID_INPUT):
        click.echo(f"Error: {result.error}", err=True)
        if ctx.obj["strict"]:
            ctx.exit(1)


@click.group()
@click.version_option()
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
              help="YAML configuration file")
@click.option("--format", "output_format", default="tsv",
              type=click.Choice(["tsv", "json"]), help="Output format")
@click.option("--strict", is_flag=True, help="Exit with status 1 when a lookup fails")
@click.option("-v", "--verbose", is_flag=True, help="Log requests and failures")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], output_format: str,
        strict: bool, verbose: bool) -> None:
    """Look up Wikipedia, Wikidata and Google Suggest data.

    Articles and categories are given as LANGUAGE:TITLE, e.g. de:Berlin.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = Config.from_file(config_path) if config_path else Config()
    lookups = ctx.with_resource(Lookups(config))
    ctx.obj = {"lookups": lookups, "format": output_format, "strict": strict}


def _lookups() -> Lookups:
    return click.get_current_context().obj["lookups"]


@cli.command()
@click.argument("article")
def synonyms(article: str) -> None:
    """Redirects to ARTICLE."""
    _emit(_lookups().synonyms(article))


@cli.command()
@click.argument("article")
@click.option("-l", "--language", "languages", multiple=True,
              help="Limit to this target language (repeatable)")
@click.option("--skip-header", is_flag=True, help="Print titles only")
@click.option("--as-object", is_flag=True, help="Map each language to its title")
def translate(article: str, languages: Tuple[str, ...], skip_header: bool,
              as_object: bool) -> None:
    """Titles of ARTICLE in other languages."""
    _emit(_lookups().translate(article, list(languages), as_object=as_object,
                               skip_header=skip_header))


@cli.command()
@click.argument("article")
@click.option("-l", "--language", "languages", multiple=True,
              help="Limit to this target language (repeatable)")
@click.option("--as-object", is_flag=True, help="Map each language to its titles")
def expand(article: str, languages: Tuple[str, ...], as_object: bool) -> None:
    """Translations of ARTICLE with their synonyms."""
    _emit(_lookups().expand(article, list(languages), as_object=as_object))


@cli.command("category-members")
@click.argument("category")
def category_members(category: str) -> None:
    """Articles in CATEGORY."""
    _emit(_lookups().category_members(category))


@cli.command()
@click.argument("category")
def subcategories(category: str) -> None:
    """Subcategories of CATEGORY."""
    _emit(_lookups().subcategories(category))


@cli.command("inbound-links")
@click.argument("article")
def inbound_links(article: str) -> None:
    """Articles linking to ARTICLE."""
    _emit(_lookups().inbound_links(article))


@cli.command("outbound-links")
@click.argument("article")
def outbound_links(article: str) -> None:
    """Articles ARTICLE links to."""
    _emit(_lookups().outbound_links(article))


@cli.command("mutual-links")
@click.argument("article")
def mutual_links(article: str) -> None:
    """Articles linking to and linked from ARTICLE."""
    _emit(_lookups().mutual_links(article))


@cli.command()
@click.argument("article")
def geocoordinates(article: str) -> None:
    """Latitude and longitude of ARTICLE."""
    _emit(_lookups().geocoordinates(article))


@cli.command()
@click.argument("article")
@click.option("--mode", type=click.Choice(["first", "all"], case_sensitive=False),
              help="Include multi-valued properties")
def facts(article: str, mode: Optional[str]) -> None:
    """Wikidata facts about ARTICLE."""
    _emit(_lookups().facts(article, mode))


@cli.command()
@click.argument("article")
@click.option("--start", type=click.DateTime(formats=DATE_FORMATS), help="First day")
@click.option("--end", type=click.DateTime(formats=DATE_FORMATS), help="Last day")
def pageviews(article: str, start: Optional[datetime], end: Optional[datetime]) -> None:
    """Daily pageviews of ARTICLE, newest first."""
    _emit(_lookups().pageviews(article, _to_date(start), _to_date(end)))


@cli.command()
@click.argument("article")
@click.option("--start", type=click.DateTime(formats=DATE_FORMATS), help="First day")
@click.option("--end", type=click.DateTime(formats=DATE_FORMATS), help="Last day")
def pageedits(article: str, start: Optional[datetime], end: Optional[datetime]) -> None:
    """Size change of each edit to ARTICLE, newest first."""
    _emit(_lookups().pageedits(article, _to_date(start), _to_date(end)))


@cli.command()
@click.argument("keyword")
@click.option("--language", default=None, help="Suggestion language (default: en)")
def suggest(keyword: str, language: Optional[str]) -> None:
    """Google Suggest completions for KEYWORD."""
    _emit(_lookups().suggest(keyword, language))


if __name__ == "__main__":  # pragma: no cover
    cli()
