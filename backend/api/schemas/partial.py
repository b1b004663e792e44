"""
Base class for PATCH/PUT bodies where omitted fields are left unchanged.
"""

from typing import ClassVar

from pydantic import BaseModel, model_validator


class PartialUpdate(BaseModel):
    """
    Partial update body.

    Fields listed in ``non_nullable`` may be omitted but not sent as null,
    since they map to NOT NULL columns.
    """

    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} may not be null")
        return self
