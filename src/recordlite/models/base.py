"""Base model for recordlite."""

from typing import Any
from pydantic import BaseModel, ConfigDict, model_validator


class RecordliteBaseModel(BaseModel):
    """Base model for schema descriptions.

    JSON keys are matched against field names case-insensitively, so both
    ``"Name"`` and ``"name"`` populate ``name``. Unknown keys are ignored.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        """Map differently-cased keys onto the declared field names."""
        if not isinstance(data, dict):
            return data

        fields = {name.lower(): name for name in cls.model_fields}
        normalized = {}
        for key, value in data.items():
            if isinstance(key, str) and key.lower() in fields:
                field = fields[key.lower()]
                # An exact match wins over a differently-cased duplicate
                if field in normalized and key != field:
                    continue
                normalized[field] = value
            else:
                normalized[key] = value
        return normalized
