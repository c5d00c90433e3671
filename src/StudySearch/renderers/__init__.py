"""Output renderers for command results.

Exports the OutputWriter base for new output formats and a factory that
instantiates writers based on configuration.
"""

from __future__ import annotations

from StudySearch.config import AppConfig
from StudySearch.renderers.base import MultiOutputWriter, OutputWriter
from StudySearch.renderers.console import ConsoleOutputWriter, render_text
from StudySearch.renderers.json import JsonFileWriter, render_json, render_query


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Create output writer based on config.

    Args:
        config: Application configuration.

    Returns:
        Writer delegating to every configured format.
    """
    writers: list[OutputWriter] = []
    if "console" in config.output.formats:
        writers.append(ConsoleOutputWriter())
    if "json" in config.output.formats:
        writers.append(JsonFileWriter(config.output.base_dir))

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "OutputWriter",
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "render_json",
    "render_query",
    "render_text",
    "create_output_writer",
]
