from __future__ import annotations


def test_critical_paths_present(openapi_spec) -> None:
    paths = set(openapi_spec.get("paths", {}).keys())
    expected = {
        "/api/v1/weather/",
        "/api/v1/weather/day/{day}",
        "/api/v1/weather/years/{years}",
        "/api/v1/weather/days",
        "/api/v1/health/live",
        "/api/v1/health/ready",
        "/metrics",
    }
    missing = expected - paths
    assert not missing, f"Missing expected paths in OpenAPI: {sorted(missing)}"


def test_weather_routes_document_error_responses(openapi_spec) -> None:
    op = openapi_spec["paths"]["/api/v1/weather/years/{years}"]["get"]
    responses = op.get("responses", {})
    # Router-level defaults apply
    assert "400" in responses
    assert "422" in responses


def test_tags_are_normalized(openapi_spec) -> None:
    allowed = {"weather", "health"}
    for path, methods in openapi_spec.get("paths", {}).items():
        for method, op in methods.items():
            if not isinstance(op, dict):
                continue
            tags = set(op.get("tags", []))
            assert tags, f"Missing tags for {path} {method}"
            assert tags <= allowed, f"Unexpected tags {tags - allowed} on {path} {method}"
