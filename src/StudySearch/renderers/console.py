"""Console text output renderers."""

from __future__ import annotations

from typing import Iterable

from StudySearch.core.models import CancerTreeNode
from StudySearch.core.query import Query, to_query_string
from StudySearch.renderers.base import OutputWriter
from StudySearch.utils.log import log


def render_text(studies: Iterable[CancerTreeNode]) -> str:
    """Render studies into a human-readable text block.

    Args:
        studies: Iterable of studies.

    Returns:
        A formatted string ready to be printed, "No matching studies." when
        nothing matched.
    """
    lines: list[str] = []
    for idx, study in enumerate(studies, start=1):
        lines.append(f"{idx}. {study.name}")
        lines.append(f"   Study: {study.study_id}")
        cancer_type = study.cancer_type or study.cancer_type_id
        if cancer_type:
            lines.append(f"   Cancer type: {cancer_type}")
        if study.reference_genome:
            lines.append(f"   Reference genome: {study.reference_genome}")
        if study.pmid:
            lines.append(f"   PMID: {study.pmid}")
        lines.append("")
    if not lines:
        return "No matching studies.\n"
    return "\n".join(lines).rstrip() + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def write_query_result(
        self,
        studies: list[CancerTreeNode],
        query: Query,
        name: str | None,
    ) -> None:
        if name:
            log.info("name=%s", name)
        log.info("query=%s matched=%d", to_query_string(query) or "<empty>", len(studies))
        for line in render_text(studies).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""
