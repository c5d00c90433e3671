"""Command runner for coordinating CLI execution.

Manages component creation, logging configuration and error handling for
command execution.
"""

from __future__ import annotations

from typing import Sequence

import click

from StudySearch.cli.commands import SearchCommand
from StudySearch.config import AppConfig, SavedQuery
from StudySearch.renderers import create_output_writer
from StudySearch.services import create_search_service
from StudySearch.storage import create_catalogue
from StudySearch.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with logging and error handling."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
        """
        self.config = config

    def run_search(
        self,
        action: str,
        queries: Sequence[SavedQuery],
        *,
        excludes: Sequence[str] = (),
        drops: Sequence[str] = (),
    ) -> SearchCommand:
        """Execute the search command.

        Args:
            action: The CLI command name (e.g., 'search').
            queries: Queries to run.
            excludes: Phrases negated in every query.
            drops: Phrases removed from every query.

        Returns:
            The executed command, holding per-query results.

        Raises:
            click.Abort: When the search fails.
        """
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            catalogue = create_catalogue(self.config)
            command = SearchCommand(
                config=self.config,
                search_service=create_search_service(self.config, catalogue),
                output_writer=create_output_writer(self.config),
                queries=queries,
                excludes=excludes,
                drops=drops,
            )
            command.execute()
            command.output_writer.finalize(action)
            return command
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Search failed: %s", e)
            raise click.Abort from e
