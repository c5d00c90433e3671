"""Base classes for output writers.

Separates query execution from output logic for better testability.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from StudySearch.core.models import CancerTreeNode
from StudySearch.core.query import Query


class OutputWriter(ABC):
    """Abstract base class for command output writers."""

    @abstractmethod
    def write_query_result(
        self,
        studies: list[CancerTreeNode],
        query: Query,
        name: str | None,
    ) -> None:
        """Write results from a single query.

        Args:
            studies: Matching studies.
            query: The query that produced these results.
            name: Optional query name for display.
        """

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Finalize output (e.g., write accumulated results to file).

        Args:
            action: The CLI command name (e.g., 'search').
        """


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Delegate output to multiple writers."""

    writers: Sequence[OutputWriter]

    def write_query_result(
        self,
        studies: list[CancerTreeNode],
        query: Query,
        name: str | None,
    ) -> None:
        for writer in self.writers:
            writer.write_query_result(studies, query, name)

    def finalize(self, action: str) -> None:
        for writer in self.writers:
            writer.finalize(action)
