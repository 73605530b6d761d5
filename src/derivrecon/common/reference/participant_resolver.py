"""Participant lookup from file references."""

from typing import Any, Iterable, Mapping, Optional, Union
import logging

from pydantic import BaseModel, Field, ConfigDict, field_validator

from ..utils import normalize_participant_id, safe_str
from ..validation import UnresolvedParticipant, ReconciliationInputError

logger = logging.getLogger(__name__)


class ParticipantMapping(BaseModel):
    """One row of the file reference to participant table."""

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
    )

    file_reference: str = Field(..., min_length=1, description="Internal file reference")
    participant_id: str = Field(..., min_length=1, description="Clearing participant identifier")

    @field_validator("file_reference", mode="before")
    @classmethod
    def _coerce_reference(cls, value: Any) -> Any:
        return safe_str(value, default="")

    @field_validator("participant_id", mode="before")
    @classmethod
    def _coerce_participant(cls, value: Any) -> str:
        return normalize_participant_id(value)


class ParticipantResolver:
    """Resolves file references to participant identifiers.

    Reference data is read-only for the lifetime of the resolver, so a
    single instance can be shared between concurrently running adapters.
    """

    def __init__(
        self,
        mappings: Union[Iterable[ParticipantMapping], Mapping[str, Any]],
    ):
        """Build the lookup table.

        Args:
            mappings: Either ParticipantMapping rows or a plain
                {file_reference: participant_id} dict

        Raises:
            ReconciliationInputError: If a file reference is mapped twice
        """
        if isinstance(mappings, Mapping):
            rows = [
                ParticipantMapping(file_reference=ref, participant_id=pid)
                for ref, pid in mappings.items()
            ]
        else:
            rows = list(mappings)

        self._lookup: dict[str, str] = {}
        for row in rows:
            if row.file_reference in self._lookup:
                raise ReconciliationInputError(
                    "Duplicate participant mapping",
                    field="file_reference",
                    value=row.file_reference,
                )
            self._lookup[row.file_reference] = row.participant_id

        logger.info(f"Loaded {len(self._lookup)} participant mappings")

    def resolve(self, file_reference: Optional[str]) -> str:
        """Resolve a file reference to its participant identifier.

        Args:
            file_reference: File reference carried on a raw record

        Returns:
            Normalized participant identifier (e.g. "0250")

        Raises:
            UnresolvedParticipant: If no mapping exists for the reference
        """
        key = safe_str(file_reference, default="")
        participant_id = self._lookup.get(key)
        if participant_id is None:
            raise UnresolvedParticipant(key)

        logger.debug(f"Resolved file reference '{key}' -> participant {participant_id}")
        return participant_id

    def __len__(self) -> int:
        return len(self._lookup)

    def __contains__(self, file_reference: object) -> bool:
        return file_reference in self._lookup
