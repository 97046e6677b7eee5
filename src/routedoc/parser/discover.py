"""Route file discovery."""

from pathlib import Path

from routedoc.errors import RoutesDirectoryError


def discover_route_files(routes_dir: Path, suffix: str = ".route.js") -> list[Path]:
    """List route modules directly inside ``routes_dir``, sorted by name.

    The sort fixes the order in which routes overwrite each other when two
    files document the same path and method.
    """
    if not routes_dir.is_dir():
        raise RoutesDirectoryError(f"Routes directory not found: {routes_dir}")
    return sorted(
        (p for p in routes_dir.iterdir() if p.is_file() and p.name.endswith(suffix)),
        key=lambda p: p.name,
    )
