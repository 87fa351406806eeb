"""Pydantic models describing the vPIC VIN-decode payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class VpicBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class DecodedVariable(VpicBaseModel):
    """One row of ``DecodeVin``: a spaced variable name and its decoded value."""

    variable: str = Field(alias="Variable")
    value: str | None = Field(default=None, alias="Value")
    value_id: str | None = Field(default=None, alias="ValueId")
    variable_id: int | None = Field(default=None, alias="VariableId")

    _normalize_value = field_validator("value", mode="before")(_blank_to_none)

    @field_validator("value_id", mode="before")
    @classmethod
    def _normalize_value_id(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return _blank_to_none(value)


class DecodeVinResponse(VpicBaseModel):
    count: int = Field(alias="Count")
    message: str | None = Field(default=None, alias="Message")
    search_criteria: str | None = Field(default=None, alias="SearchCriteria")
    results: list[DecodedVariable] = Field(default_factory=list["DecodedVariable"], alias="Results")


class DecodeVinValuesResponse(VpicBaseModel):
    """``DecodeVinValues``: ``Results`` holds a single flat camel-case object."""

    count: int = Field(alias="Count")
    message: str | None = Field(default=None, alias="Message")
    search_criteria: str | None = Field(default=None, alias="SearchCriteria")
    results: list[dict[str, object]] = Field(
        default_factory=list[dict[str, object]], alias="Results"
    )
