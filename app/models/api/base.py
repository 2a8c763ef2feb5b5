from typing import ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.utils.errors import ValidationError


class ApiModel(BaseModel):
    """Request body base: camelCase on the wire, unknown fields rejected."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    # Patch fields that may be sent as null to clear the stored value
    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    def changes(self) -> dict:
        """
        Fields the caller actually sent, keyed by Python name.

        Raises:
            ValidationError: If a field that must keep a value was sent as null
        """
        fields = self.model_dump(exclude_unset=True)
        rejected = sorted(
            name for name, value in fields.items() if value is None and name not in self.nullable_fields
        )
        if rejected:
            raise ValidationError(
                "Fields cannot be null",
                details=[{"field": to_camel(name), "message": "Field cannot be null"} for name in rejected],
            )
        return fields
