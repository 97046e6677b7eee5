from routedoc.generator.document import assemble_paths, build_operation
from routedoc.parser.base import ParameterDescriptor, RouteDescriptor


def _route(method: str = "get", path: str = "/user", **kwargs) -> RouteDescriptor:
    return RouteDescriptor(method=method, path=path, tag=kwargs.pop("tag", "user"), **kwargs)


class TestBuildOperation:
    def test_minimal_operation(self):
        op = build_operation(_route())
        assert op["summary"] == "No summary available"
        assert op["description"] == "No description available"
        assert op["tags"] == ["user"]
        assert op["security"] == [{"BearerAuth": []}]
        assert "parameters" not in op
        assert "requestBody" not in op
        assert set(op["responses"]) == {"200", "400", "500"}
        assert op["responses"]["400"] == {"description": "Bad request, invalid parameters"}
        assert op["responses"]["500"] == {"description": "Internal server error"}

    def test_list_tags_kept(self):
        assert build_operation(_route(tag=["user", "admin"]))["tags"] == ["user", "admin"]

    def test_parameters(self):
        params = (
            ParameterDescriptor(name="id", location="path", required=True, field_schema={"type": "number"}),
            ParameterDescriptor(name="q", location="query", description="Search"),
        )
        op = build_operation(_route(parameters=params))
        path_param, query_param = op["parameters"]
        assert path_param == {"name": "id", "in": "path", "required": True, "description": "", "schema": {"type": "number"}}
        assert "allowEmptyValue" not in path_param
        assert query_param["allowEmptyValue"] is True
        assert query_param["description"] == "Search"

    def test_request_body_for_non_get(self):
        body = {"name": {"type": "string", "example": "John Doe"}}
        op = build_operation(_route(method="post", request_body_schema=body))
        schema = op["requestBody"]["content"]["application/json"]["schema"]
        assert op["requestBody"]["required"] is True
        assert schema == {"type": "object", "properties": {"name": {"type": "string", "example": "John Doe"}}}

    def test_no_request_body_for_get(self):
        op = build_operation(_route(method="GET", request_body_schema={"name": {"type": "string"}}))
        assert "requestBody" not in op

    def test_no_request_body_when_empty(self):
        assert "requestBody" not in build_operation(_route(method="post"))

    def test_response_schema(self):
        op = build_operation(_route(response_schema={"data": None}))
        schema = op["responses"]["200"]["content"]["application/json"]["schema"]
        assert schema["properties"]["data"] == {"type": "null"}


class TestAssemblePaths:
    def test_methods_lower_cased_and_grouped(self):
        paths = assemble_paths([_route("GET", "/user"), _route("post", "/user"), _route("get", "/user/{id}")])
        assert set(paths) == {"/user", "/user/{id}"}
        assert set(paths["/user"]) == {"get", "post"}

    def test_last_write_wins(self):
        first = _route("get", "/user", summary="first")
        second = _route("get", "/user", summary="second")
        assert assemble_paths([first, second])["/user"]["get"]["summary"] == "second"

    def test_empty(self):
        assert assemble_paths([]) == {}
