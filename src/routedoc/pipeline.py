"""End-to-end documentation generation: route files -> OpenAPI paths."""

import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict

from routedoc.config import ExtractorConfig
from routedoc.generator.document import assemble_paths
from routedoc.parser.base import FileFailure, RouteDescriptor
from routedoc.parser.discover import discover_route_files
from routedoc.parser.javascript import extract_routes
from routedoc.schema.registry import build_registry

logger = logging.getLogger("routedoc.pipeline")


class GenerationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    paths: dict
    routes: tuple[RouteDescriptor, ...] = ()
    failures: tuple[FileFailure, ...] = ()


def generate_documentation(
    routes_dir: Path,
    schemas: Mapping[str, Any] | None = None,
    responses: Mapping[str, Any] | None = None,
    config: ExtractorConfig | None = None,
    strict: bool = False,
) -> GenerationResult:
    """Scan ``routes_dir`` and build the OpenAPI ``paths`` object.

    ``schemas`` may be a registry or the plain mapping it is built from.
    Files that fail to parse are listed in ``failures`` unless ``strict``,
    in which case the first failure is raised.
    """
    config = config or ExtractorConfig()
    files = discover_route_files(Path(routes_dir), config.file_suffix)
    logger.debug("Found %d route files in %s", len(files), routes_dir)

    extraction = extract_routes(files, build_registry(schemas), responses, config, strict=strict)
    return GenerationResult(
        paths=assemble_paths(extraction.routes),
        routes=extraction.routes,
        failures=extraction.failures,
    )


def get_openapi_paths(
    routes_dir: Path,
    schemas: Mapping[str, Any] | None = None,
    responses: Mapping[str, Any] | None = None,
    config: ExtractorConfig | None = None,
) -> dict:
    """Only the ``paths`` object; any unparsable route file is raised."""
    return generate_documentation(routes_dir, schemas, responses, config, strict=True).paths
