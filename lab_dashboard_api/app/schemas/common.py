"""
Shared schema building blocks.

``CamelModel`` maps snake_case attributes to the camelCase names used
on the wire and in stored records, and provides the two dumps the
services need: the full record for a create and the supplied-fields
diff for a partial update.  Fields listed in ``selector_fields`` (the
``id``/``machineId``/``itemId`` a PUT body uses to pick its target)
are never part of the stored data.
"""

from typing import Annotated, Any, ClassVar, Dict, FrozenSet, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

NonEmptyStr = Annotated[str, Field(min_length=1)]
NonNegativeNumber = Annotated[float, Field(ge=0)]

TestStatus = Literal["ordenada", "en_proceso", "completada", "enviada"]
ParameterStatus = Literal["normal", "high", "low"]


class CamelModel(BaseModel):
    """Base model with camelCase aliases; accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    selector_fields: ClassVar[FrozenSet[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        # Omitting a field is how a partial update leaves it unchanged.
        if value is None:
            raise ValueError("No puede ser nulo")
        return value

    def to_record(self) -> Dict[str, Any]:
        """Full camelCase dict for a create; unset optional fields are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude=set(self.selector_fields))

    def changes(self) -> Dict[str, Any]:
        """Only the fields the caller supplied, for a partial-merge update."""
        return self.model_dump(
            by_alias=True,
            exclude_unset=True,
            exclude_none=True,
            exclude=set(self.selector_fields),
        )


class Parameter(CamelModel):
    """One measured value of a test.

    ``status`` is asserted by the operator; it is not derived from the
    value and the reference range.
    """

    name: str
    value: str
    unit: str
    reference_min: float
    reference_max: float
    status: ParameterStatus
