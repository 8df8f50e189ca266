"""Paperdesk CLI - paperwork tracker."""

import json
import logging
import sys
from datetime import date, datetime

import click

from . import views
from .adapters.paperwork_api import PaperworkAPIAdapter, submitted_record
from .config import Tokens, load_config
from .core.calendar import month_start
from .core.dates import try_parse_date
from .core.display import completion_label
from .core.paperwork import NewPaperwork, PaperSource, PaperType, Priority, Status
from .core.query import PaperworkQuery, SortDirection, SortKey, apply_query
from .debounce import SearchDebouncer
from .errors import PaperdeskError

PRIORITY_CHOICES = [p.value for p in Priority]
STATUS_CHOICES = [s.value for s in Status]
SORT_CHOICES = [k.value for k in SortKey]


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _parse_day(value: str) -> date:
    parsed = try_parse_date(value)
    if parsed is None:
        raise click.BadParameter(f"expected dd-MM-yyyy, got {value!r}")
    return parsed


@click.group()
@click.version_option(package_name="paperdesk")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Paperdesk - paperwork tracker CLI."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.WARNING,
    )


@main.command()
@click.option("--username", "-u", default=None, help="Username (defaults to USERNAME in config)")
@click.password_option(confirmation_prompt=False)
def login(username: str | None, password: str):
    """Sign in to the paperwork API."""
    config = load_config()
    username = username or config.username or click.prompt("Username")
    try:
        user = PaperworkAPIAdapter(config).login(username, password)
    except PaperdeskError as e:
        _fail(e)
    name = user.get("full_name") or username
    click.echo(f"Signed in as {name}.")


@main.command()
def logout():
    """Sign out and forget the stored session."""
    PaperworkAPIAdapter(load_config(), Tokens.load()).logout()
    click.echo("Signed out.")


@main.command("list")
@click.option("--search", "-s", default="", help="Match id, title or description")
@click.option("--priority", "-p", "priorities", multiple=True,
              type=click.Choice(PRIORITY_CHOICES, case_sensitive=False), help="Priority filter (repeatable)")
@click.option("--status", "statuses", multiple=True,
              type=click.Choice(STATUS_CHOICES, case_sensitive=False), help="Status filter (repeatable)")
@click.option("--sort", "sort_by", default=None,
              type=click.Choice(SORT_CHOICES, case_sensitive=False), help="Sort key")
@click.option("--desc/--asc", "descending", default=None, help="Sort direction")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_paperwork(search, priorities, statuses, sort_by, descending, as_json):
    """List paperwork, filtered and sorted."""
    config = load_config()
    defaults = views.default_query(config)
    query = PaperworkQuery(
        search=search,
        priorities=frozenset(Priority.parse(p) for p in priorities),
        statuses=frozenset(Status.parse(s) for s in statuses),
        sort_by=SortKey(sort_by.lower()) if sort_by else defaults.sort_by,
        direction=(
            defaults.direction
            if descending is None
            else (SortDirection.DESC if descending else SortDirection.ASC)
        ),
    )

    try:
        paperwork = views.listing(PaperworkAPIAdapter(config), query)
    except PaperdeskError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([views.paperwork_to_dict(p) for p in paperwork], indent=2))
    else:
        click.echo(views.render_listing(paperwork, query))


@main.command()
@click.option("--month", "-m", "target_month", default=None,
              help="Month to show (YYYY-MM), defaults to this month")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def calendar(target_month: str | None, as_json: bool):
    """Show a month calendar of due paperwork."""
    config = load_config()
    if target_month:
        try:
            target = datetime.strptime(target_month, "%Y-%m").date()
        except ValueError:
            raise click.BadParameter(f"expected YYYY-MM, got {target_month!r}", param_hint="--month")
    else:
        target = month_start(date.today())

    try:
        view = views.month(PaperworkAPIAdapter(config), target, config)
    except PaperdeskError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps(views.month_to_dict(view), indent=2))
    else:
        click.echo(views.render_month(view))


@main.command()
@click.argument("target_day")
def day(target_day: str):
    """List paperwork due on a day (dd-MM-yyyy)."""
    target = _parse_day(target_day)
    try:
        paperwork = views.day(PaperworkAPIAdapter(load_config()), target)
    except PaperdeskError as e:
        _fail(e)
    click.echo(views.render_day(target, paperwork))


@main.command()
def search():
    """Interactive search: each input line refines the query.

    Rapid input is debounced so only the latest query is evaluated.
    """
    config = load_config()
    try:
        paperwork = PaperworkAPIAdapter(config).fetch_all()
    except PaperdeskError as e:
        _fail(e)

    base = views.default_query(config)

    def show(text: str) -> None:
        query = base.with_search(text)
        results = apply_query(paperwork, query)
        click.echo(f"\n> {text}")
        click.echo(views.render_listing(results, query))

    debouncer = SearchDebouncer(show, delay=config.search_debounce_ms / 1000)
    try:
        for line in click.get_text_stream("stdin"):
            debouncer.submit(line.rstrip("\n"))
        debouncer.flush()
    finally:
        debouncer.shutdown()


@main.command()
@click.option("--title", "-t", prompt=True, help="Paper title")
@click.option("--description", "-d", prompt=True, help="Paper description")
@click.option("--type", "paper_type", prompt=True, default=PaperType.PHYSICAL.value,
              type=click.Choice([t.value for t in PaperType]), help="Paper type")
@click.option("--source", "paper_source", prompt=True, default=PaperSource.INTERNAL.value,
              type=click.Choice([s.value for s in PaperSource]), help="Paper source")
@click.option("--priority", "-p", prompt=True, default=Priority.MEDIUM.value,
              type=click.Choice(PRIORITY_CHOICES, case_sensitive=False), help="Processing priority")
@click.option("--due", prompt="Target completion date (dd-MM-yyyy)", help="Due date (dd-MM-yyyy)")
def submit(title, description, paper_type, paper_source, priority, due):
    """Submit new paperwork."""
    new = NewPaperwork(
        title=title,
        description=description,
        paper_type=PaperType(paper_type),
        paper_source=PaperSource(paper_source),
        priority=Priority.parse(priority),
        target_completion_date=_parse_day(due),
    )
    try:
        response = PaperworkAPIAdapter(load_config()).submit(new)
    except PaperdeskError as e:
        _fail(e)

    record = submitted_record(new, response)
    click.echo(f"✓ Submitted {record.title} [{record.id}] ({completion_label(record)})")


if __name__ == "__main__":
    main()
