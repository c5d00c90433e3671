from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional


class StudyField(str, Enum):
    """Searchable fields of a study record.

    Values are the field names used in catalogue files and accepted by
    `CancerTreeNode.get_field`.
    """

    STUDY_ID = "studyId"
    NAME = "name"
    DESCRIPTION = "description"
    CANCER_TYPE_ID = "cancerTypeId"
    CANCER_TYPE = "cancerType"
    REFERENCE_GENOME = "referenceGenome"
    PMID = "pmid"

    @classmethod
    def parse(cls, value: str) -> "StudyField":
        """Return the field for a catalogue field name.

        Raises:
            ValueError: If the name is not a known field.
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown study field: {value}") from None


DEFAULT_FIELDS: Final[tuple[StudyField, ...]] = (
    StudyField.NAME,
    StudyField.DESCRIPTION,
    StudyField.STUDY_ID,
    StudyField.CANCER_TYPE_ID,
    StudyField.CANCER_TYPE,
)

_ATTRIBUTES: Final[dict[StudyField, str]] = {
    StudyField.STUDY_ID: "study_id",
    StudyField.NAME: "name",
    StudyField.DESCRIPTION: "description",
    StudyField.CANCER_TYPE_ID: "cancer_type_id",
    StudyField.CANCER_TYPE: "cancer_type",
    StudyField.REFERENCE_GENOME: "reference_genome",
    StudyField.PMID: "pmid",
}


@dataclass(frozen=True, slots=True)
class CancerTreeNode:
    """A study record in the cancer study tree.

    Attributes:
        study_id: Unique study identifier (e.g. "brca_tcga").
        name: Display name of the study.
        description: Free-text description.
        cancer_type_id: Short cancer type code (e.g. "brca").
        cancer_type: Cancer type display name if known.
        reference_genome: Reference genome build (e.g. "hg19").
        pmid: PubMed identifier of the publication if any.
    """

    study_id: str
    name: str
    description: str = ""
    cancer_type_id: str = ""
    cancer_type: Optional[str] = None
    reference_genome: Optional[str] = None
    pmid: Optional[str] = None

    def get_field(self, field: StudyField | str) -> str | None:
        """Look up a field value by name.

        Unknown names and unset fields both return None.
        """
        if not isinstance(field, StudyField):
            try:
                field = StudyField.parse(field)
            except ValueError:
                return None
        return getattr(self, _ATTRIBUTES[field])
