"""Express-style route path templating."""


def transform_route_path(route_path: str | None) -> str:
    """Rewrite ``:name`` segments into OpenAPI ``{name}`` placeholders.

    ``/users/:id/profile`` becomes ``/users/{id}/profile``. Anything that is
    not a string (e.g. a computed path argument) yields an empty string.
    """
    if not route_path or not isinstance(route_path, str):
        return ""
    segments = [
        f"{{{segment[1:]}}}" if segment.startswith(":") else segment
        for segment in route_path.split("/")
    ]
    return "/".join(segments)
