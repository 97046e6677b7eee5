"""Extractor configuration: which names mark routers, validators and controllers."""

from pathlib import Path

from pydantic import BaseModel, ValidationError

from routedoc.errors import SchemaDefinitionError
from routedoc.loader import load_document
from routedoc.parser.recognizers import (
    ControllerRecognizer,
    Recognizers,
    RouterCallRecognizer,
    ValidatorRecognizer,
)


class ExtractorConfig(BaseModel):
    """Naming conventions of the route files being scanned."""

    file_suffix: str = ".route.js"
    router_identifiers: list[str] = ["router"]
    # None accepts every method called on the router object
    router_methods: list[str] | None = None
    validator_identifier: str = "Validation"
    validator_method: str = "validate"
    controller_suffix: str = "Controller"
    # route groups whose paths are already absolute and skip the file prefix
    absolute_prefixes: list[str] = ["/dashboard"]

    def recognizers(self) -> Recognizers:
        return Recognizers(
            router=RouterCallRecognizer(self.router_identifiers, self.router_methods),
            validator=ValidatorRecognizer(self.validator_identifier, self.validator_method),
            controller=ControllerRecognizer(self.controller_suffix),
        )


def load_config(file_path: Path | None) -> ExtractorConfig:
    """Load a YAML config file; ``None`` gives the defaults."""
    if file_path is None:
        return ExtractorConfig()
    data = load_document(file_path) or {}
    if not isinstance(data, dict):
        raise SchemaDefinitionError(f"{file_path}: config must be a mapping")
    try:
        return ExtractorConfig(**data)
    except ValidationError as e:
        raise SchemaDefinitionError(f"{file_path}: {e}") from e
