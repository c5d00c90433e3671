"""Study catalogue loading from JSON or YAML files.

A catalogue file holds either a list of study objects or an object with a
``studies`` list. Study keys are the searchable field names (``studyId``,
``name``, ``description``, ``cancerTypeId``, ``cancerType``,
``referenceGenome``, ``pmid``).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import yaml

from StudySearch.config.common import expect_optional_str, expect_str, get_required_value
from StudySearch.core.models import CancerTreeNode, StudyField
from StudySearch.utils.log import log

_KNOWN_KEYS = frozenset(item.value for item in StudyField)


class StudyCatalogue:
    """Read-only collection of study records loaded from a file."""

    def __init__(self, path: Path) -> None:
        """Initialize catalogue.

        Args:
            path: Catalogue file (``.json``, ``.yml`` or ``.yaml``).
        """
        self.path = path
        self._studies: tuple[CancerTreeNode, ...] | None = None

    @property
    def studies(self) -> tuple[CancerTreeNode, ...]:
        """Studies of the catalogue, loaded on first access."""
        if self._studies is None:
            self._studies = load_catalogue(self.path)
        return self._studies


def load_catalogue(path: Path) -> tuple[CancerTreeNode, ...]:
    """Load study records from a catalogue file.

    Args:
        path: Catalogue file path.

    Returns:
        Studies in file order.

    Raises:
        TypeError: If the file content has invalid types.
        ValueError: If the format is unsupported, required keys are missing,
            or study ids are duplicated.
    """
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix == ".json":
        data = json.loads(text)
    elif suffix in (".yml", ".yaml"):
        data = yaml.safe_load(text)
    else:
        raise ValueError(f"Unsupported catalogue format: {path.suffix or path.name}")

    studies = parse_catalogue(data)
    log.debug("Loaded %d studies from %s", len(studies), path)
    return studies


def parse_catalogue(data: Any) -> tuple[CancerTreeNode, ...]:
    """Parse decoded catalogue content into study records."""
    if isinstance(data, Mapping):
        data = get_required_value(data, "studies", "studies")
    if data is None:
        return ()
    if not isinstance(data, list):
        raise TypeError("studies must be a list")

    studies: list[CancerTreeNode] = []
    seen: set[str] = set()
    for idx, item in enumerate(data):
        study = parse_study(item, f"studies[{idx}]")
        if study.study_id in seen:
            raise ValueError(f"studies[{idx}].studyId is duplicated: {study.study_id}")
        seen.add(study.study_id)
        studies.append(study)
    return tuple(studies)


def parse_study(value: Any, key: str) -> CancerTreeNode:
    """Parse one study mapping.

    Args:
        value: Study mapping.
        key: Full key path used in error messages.
    """
    if not isinstance(value, Mapping):
        raise TypeError(f"{key} must be an object")

    unknown = {str(k) for k in value.keys()} - _KNOWN_KEYS
    if unknown:
        log.warning("%s has unknown keys (ignored): %s", key, sorted(unknown))

    study_id = expect_str(get_required_value(value, "studyId", f"{key}.studyId"), f"{key}.studyId").strip()
    if not study_id:
        raise ValueError(f"{key}.studyId must not be empty")

    return CancerTreeNode(
        study_id=study_id,
        name=expect_str(get_required_value(value, "name", f"{key}.name"), f"{key}.name"),
        description=expect_optional_str(value.get("description"), f"{key}.description") or "",
        cancer_type_id=expect_optional_str(value.get("cancerTypeId"), f"{key}.cancerTypeId") or "",
        cancer_type=expect_optional_str(value.get("cancerType"), f"{key}.cancerType"),
        reference_genome=expect_optional_str(value.get("referenceGenome"), f"{key}.referenceGenome"),
        pmid=expect_optional_str(value.get("pmid"), f"{key}.pmid"),
    )
