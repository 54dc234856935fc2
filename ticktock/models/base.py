"""Base model for all data models in ticktock.

This module provides a base Pydantic model with common configuration.
Field names are snake_case in Python and camelCase on the wire, so the
JSON shapes match what the browser client sends and expects.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration for:
    - Validation with type checking
    - camelCase aliases for serialization (``hours_worked`` <-> ``hoursWorked``)
    - Population by either the field name or its alias

    Example:
        >>> class Item(BaseDataModel):
        ...     week_number: int
        >>> Item(weekNumber=27).model_dump(by_alias=True)
        {'weekNumber': 27}
        >>> Item(week_number=27).week_number
        27
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        # Validate on assignment to catch errors early
        validate_assignment=True,
        strict=False,
        extra="forbid",
        frozen=False,
    )

    def to_json_dict(self) -> dict:
        """Serialize to a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
