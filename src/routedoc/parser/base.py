"""Data models for routes recovered from route source files.

The extractor turns every recognized ``router.<method>(...)`` call site into a
RouteDescriptor; the document assembler consumes them to build OpenAPI paths.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

NO_SCHEMA = "none"
UNKNOWN_CONTROLLER = "unknown"
DEFAULT_DESCRIPTION = "No description available"
DEFAULT_SUMMARY = "No summary available"


class ParameterDescriptor(BaseModel):
    """A single path or query parameter derived from a validation schema."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    location: str = Field(alias="in")  # path / query
    required: bool = False
    description: str = ""
    field_schema: dict = Field(default_factory=dict, alias="schema")
    example: Any = None
    default: Any = None


class ResponseOverride(BaseModel):
    """User supplied documentation for one path, or the document-wide "200" default."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    description: str | None = None
    summary: str | None = None
    response_data: dict | None = Field(default=None, alias="responseData")
    response: dict | None = None  # legacy spelling used by the "200" entry

    @classmethod
    def from_value(cls, value: Any) -> "ResponseOverride":
        """Build an override, dropping only the fields that are malformed."""
        if not isinstance(value, dict):
            return cls()
        try:
            return cls.model_validate(value)
        except ValidationError:
            pass

        kept = {}
        for key, item in value.items():
            try:
                cls.model_validate({key: item})
            except ValidationError:
                continue
            kept[key] = item
        return cls.model_validate(kept)

    @property
    def payload(self) -> dict:
        if self.response_data is not None:
            return self.response_data
        return self.response or {}


class RouteDescriptor(BaseModel):
    """One discovered HTTP route with its documentation fields."""

    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    schema_ref: str = NO_SCHEMA
    controller_ref: str = UNKNOWN_CONTROLLER
    tag: str | list[str]
    request_body_schema: dict = Field(default_factory=dict)
    parameters: tuple[ParameterDescriptor, ...] = ()
    description: str = DEFAULT_DESCRIPTION
    summary: str = DEFAULT_SUMMARY
    response_schema: dict = Field(default_factory=dict)
    file_path: str = ""
    line_number: int | None = None


class FileFailure(BaseModel):
    """A route file that could not be processed."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    error: str
    line: int | None = None


class ExtractionResult(BaseModel):
    """Routes extracted from a set of files, alongside the files that failed."""

    model_config = ConfigDict(frozen=True)

    routes: tuple[RouteDescriptor, ...] = ()
    failures: tuple[FileFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures
