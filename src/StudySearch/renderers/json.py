"""JSON output renderers.

Renders matched studies and the query that produced them into
JSON-serializable objects, and accumulates them into one file per run.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Iterable

from StudySearch.core.models import CancerTreeNode
from StudySearch.core.query import Query, to_query_string
from StudySearch.renderers.base import OutputWriter
from StudySearch.utils.log import log


def render_json(studies: Iterable[CancerTreeNode]) -> list[dict]:
    """Render studies into JSON-serializable dicts keyed by field name."""
    return [
        {
            "studyId": study.study_id,
            "name": study.name,
            "description": study.description,
            "cancerTypeId": study.cancer_type_id,
            "cancerType": study.cancer_type,
            "referenceGenome": study.reference_genome,
            "pmid": study.pmid,
        }
        for study in studies
    ]


def render_query(query: Query) -> list[dict]:
    """Render query clauses as ``{"type", "phrases"}`` objects."""
    return [
        {
            "type": "not" if clause.is_not() else "and",
            "phrases": [str(phrase) for phrase in clause.get_phrases() if phrase is not None],
        }
        for clause in query
    ]


class JsonFileWriter(OutputWriter):
    """Accumulate results and write to JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        """Initialize JSON writer.

        Args:
            base_dir: Base output directory.
        """
        self.output_dir = Path(base_dir) / "json"
        self.all_results: list[dict] = []
        self.output_path: Path | None = None

    def write_query_result(
        self,
        studies: list[CancerTreeNode],
        query: Query,
        name: str | None,
    ) -> None:
        self.all_results.append(
            {
                "name": name,
                "query": to_query_string(query),
                "clauses": render_query(query),
                "count": len(studies),
                "studies": render_json(studies),
            }
        )

    def finalize(self, action: str) -> None:
        """Write accumulated results to ``<base_dir>/json/<action>_<timestamp>.json``."""
        payload = json.dumps(self.all_results, ensure_ascii=False, indent=2)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.output_path = self.output_dir / f"{action}_{timestamp}.json"
        self.output_path.write_text(payload, encoding="utf-8")
        log.info("JSON saved to %s", self.output_path)
