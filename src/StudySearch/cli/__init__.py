"""CLI package for StudySearch command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from dotenv import load_dotenv

from StudySearch.cli.runner import CommandRunner
from StudySearch.cli.ui import cli


def main() -> None:
    """Run StudySearch CLI.

    Loads environment variables from a ``.env`` file first so that
    ``STUDYSEARCH_CONFIG`` can be set there. Entry point referenced by the
    console script in pyproject.toml.
    """
    load_dotenv()
    cli()
