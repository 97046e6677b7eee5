import json
from pathlib import Path

import pytest

from routedoc.config import ExtractorConfig
from routedoc.errors import RouteParseError, RoutesDirectoryError
from routedoc.loader import load_responses
from routedoc.parser.discover import discover_route_files
from routedoc.pipeline import generate_documentation, get_openapi_paths
from routedoc.schema.registry import load_registry

FIXTURES = Path(__file__).parent / "fixtures"
ROUTES = FIXTURES / "routes"


@pytest.fixture
def registry():
    return load_registry(FIXTURES / "schemas.yaml")


@pytest.fixture
def responses():
    return load_responses(FIXTURES / "responses.yaml")


class TestDiscoverRouteFiles:
    def test_only_suffixed_files_sorted(self):
        files = discover_route_files(ROUTES)
        assert [f.name for f in files] == ["dashboard.route.js", "user.route.js"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RoutesDirectoryError):
            discover_route_files(tmp_path / "nope")


class TestGenerateDocumentation:
    def test_user_by_id_scenario(self, tmp_path):
        (tmp_path / "user.route.js").write_text(
            "router.get('/:id', Validation.validate(UserSchema.getById), UserController.getById);\n"
        )
        schemas = {"UserSchema": {"getById": {"params": {"id": {"type": "number", "required": True}}}}}

        paths = generate_documentation(tmp_path, schemas).paths

        op = paths["/user/{id}"]["get"]
        assert len(op["parameters"]) == 1
        assert op["parameters"][0]["name"] == "id"
        assert op["parameters"][0]["in"] == "path"
        assert op["parameters"][0]["required"] is True
        assert set(op["responses"]) == {"200", "400", "500"}

    def test_fixture_document(self, registry, responses):
        result = generate_documentation(ROUTES, registry, responses)
        assert result.failures == ()
        assert set(result.paths) == {
            "/dashboard/stats",
            "/reports/{reportId}",
            "/user/{id}",
            "/user/",
            "/user/{id}/status",
        }
        assert set(result.paths["/user/{id}"]) == {"get", "delete"}
        assert set(result.paths["/user/"]) == {"get", "post"}

    def test_fixture_overrides_applied(self, registry, responses):
        paths = generate_documentation(ROUTES, registry, responses).paths
        get_user = paths["/user/{id}"]["get"]
        assert get_user["summary"] == "Get a user"
        data = get_user["responses"]["200"]["content"]["application/json"]["schema"]["properties"]["data"]
        assert data["properties"]["name"] == {"type": "string", "example": "Jane"}

        listing = paths["/user/"]["get"]["responses"]["200"]["content"]["application/json"]["schema"]
        assert listing["properties"]["data"] == {"type": "null"}

    def test_fixture_request_body(self, registry, responses):
        paths = generate_documentation(ROUTES, registry, responses).paths
        body = paths["/user/"]["post"]["requestBody"]["content"]["application/json"]["schema"]
        assert list(body["properties"]) == ["name", "email", "tags", "address"]
        assert body["properties"]["tags"]["type"] == "array"
        assert "requestBody" not in paths["/user/"]["get"]

    def test_idempotent(self, registry, responses):
        first = generate_documentation(ROUTES, registry, responses).paths
        second = generate_documentation(ROUTES, registry, responses).paths
        assert json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)

    def test_later_call_site_overwrites_same_route(self, tmp_path):
        (tmp_path / "item.route.js").write_text(
            "router.get('/', Validation.validate(ItemSchema.old), ItemController.list);\n"
            "router.get('/', Validation.validate(ItemSchema.new), ItemController.list);\n"
        )
        schemas = {"ItemSchema": {
            "old": {"query": {"page": "integer"}},
            "new": {"query": {"cursor": "string"}},
        }}
        result = generate_documentation(tmp_path, schemas)
        assert len(result.routes) == 2
        assert list(result.paths["/item/"]) == ["get"]
        assert [p["name"] for p in result.paths["/item/"]["get"]["parameters"]] == ["cursor"]

    def test_later_file_overwrites_earlier_file(self, tmp_path):
        (tmp_path / "b.route.js").write_text("router.get('/ping', BController.ping);")
        (tmp_path / "a.route.js").write_text("router.get('/ping', AController.ping);")
        config = ExtractorConfig(absolute_prefixes=["/a", "/b"])
        result = generate_documentation(tmp_path, config=config)
        assert [r.tag for r in result.routes] == ["a", "b"]
        assert result.paths["/ping"]["get"]["tags"] == ["b"]

    def test_partial_results_on_parse_failure(self, tmp_path):
        (tmp_path / "bad.route.js").write_text("router.get('/', {")
        (tmp_path / "good.route.js").write_text("router.get('/ok', GoodController.ok);")
        result = generate_documentation(tmp_path)
        assert "/good/ok" in result.paths
        assert [Path(f.file_path).name for f in result.failures] == ["bad.route.js"]

    def test_strict_mode(self, tmp_path):
        (tmp_path / "bad.route.js").write_text("router.get('/', {")
        with pytest.raises(RouteParseError):
            generate_documentation(tmp_path, strict=True)
        with pytest.raises(RouteParseError):
            get_openapi_paths(tmp_path)

    def test_get_openapi_paths(self, registry):
        paths = get_openapi_paths(ROUTES, registry)
        assert "/dashboard/stats" in paths
