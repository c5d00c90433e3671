"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands to their
respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click

from StudySearch.cli.runner import CommandRunner
from StudySearch.config import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    SavedQuery,
    load_config,
    load_config_with_defaults,
)
from StudySearch.core.tokenizer import parse_query


@click.group(help="StudySearch: filter cancer studies with search queries.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    envvar="STUDYSEARCH_CONFIG",
    show_default=True,
    help="Path to YAML config file, merged over config/default.yml.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    The config file is deep-merged over ``config/default.yml`` when that file
    exists, so an override only needs the keys it changes.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    if DEFAULT_CONFIG_PATH.is_file():
        ctx.obj = load_config_with_defaults(config_path, default_path=DEFAULT_CONFIG_PATH)
    else:
        ctx.obj = load_config(config_path)


@cli.command("search")
@click.argument("query", required=False)
@click.option("--exclude", "-x", "excludes", multiple=True, help="Phrases to exclude from the results.")
@click.option("--drop", "-d", "drops", multiple=True, help="Phrases to remove from the query.")
@click.pass_context
def search_cmd(ctx: click.Context, query: str | None, excludes: tuple[str, ...], drops: tuple[str, ...]) -> None:
    """Search the catalogue with QUERY, or with the queries saved in the config.

    Args:
        ctx: Click context.
        query: Search box text.
        excludes: Phrases negated in the query.
        drops: Phrases removed from the query.

    Raises:
        click.UsageError: When there is no query to run.
        click.Abort: When the search fails.
    """
    cfg: AppConfig = ctx.obj
    queries = (SavedQuery(name=None, text=query),) if query else cfg.search.queries
    if not queries:
        raise click.UsageError("Provide a QUERY or configure queries in the config file")
    runner = CommandRunner(cfg)
    runner.run_search(ctx.command.name, queries, excludes=excludes, drops=drops)


@cli.command("explain")
@click.argument("query")
@click.pass_context
def explain_cmd(ctx: click.Context, query: str) -> None:
    """Print the clauses QUERY is parsed into, one per line."""
    cfg: AppConfig = ctx.obj
    clauses = parse_query(query, cfg.search.default_fields)
    if not clauses:
        click.echo("<empty query>")
        return
    for clause in clauses:
        if clause.is_not():
            (phrase,) = clause.get_phrases()
            click.echo(f"NOT {phrase}")
        else:
            click.echo(f"AND {clause}")
