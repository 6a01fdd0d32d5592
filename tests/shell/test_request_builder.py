"""Unit tests for the request builder - no network involved."""

import json
from datetime import date, datetime, timedelta, timezone

import pytest

from fitpro.core.errors import CLIENT_ERROR_STATUS, EncodingError, UrlError
from fitpro.core.models import CreateExercisePayload
from fitpro.shell.request_builder import (
    APIRequest,
    HTTPMethod,
    build_request,
    build_url,
    encode_body,
    join_url,
)


BASE = "http://host:4000"


class TestJoinUrl:
    """Tests for path joining."""

    @pytest.mark.parametrize("base", ["http://host:4000", "http://host:4000/"])
    @pytest.mark.parametrize("path", ["/api/x", "api/x"])
    def test_exactly_one_separator(self, base, path):
        """Leading and trailing slashes never double up or go missing."""
        assert join_url(base, path) == "http://host:4000/api/x"
        assert str(build_url(base, path)) == "http://host:4000/api/x"

    def test_base_with_path_prefix(self):
        assert join_url("http://host/v1/", "/api/x") == "http://host/v1/api/x"


class TestBuildUrl:
    """Tests for build_url."""

    def test_canonical_query(self):
        """Query parameters are appended in sorted order."""
        url = build_url(BASE, "/api/exercises", {"to": "2026-10-19", "from": "2026-10-13"})
        assert str(url) == "http://host:4000/api/exercises?from=2026-10-13&to=2026-10-19"

    def test_query_order_insensitive(self):
        first = build_url(BASE, "/x", {"a": "1", "b": "2"})
        second = build_url(BASE, "/x", {"b": "2", "a": "1"})
        assert first == second

    def test_query_values_encoded(self):
        url = build_url(BASE, "/api/exercises/last", {"name": "Bench Press"})
        assert url.params["name"] == "Bench Press"

    def test_empty_query_omitted(self):
        assert str(build_url(BASE, "/x", {})) == "http://host:4000/x"

    @pytest.mark.parametrize("base", ["not a url", "ftp://host", "http://"])
    def test_invalid_address(self, base):
        """Anything but an absolute http(s) address is a UrlError."""
        with pytest.raises(UrlError) as exc:
            build_url(base, "/api/x")
        assert exc.value.status == CLIENT_ERROR_STATUS
        assert exc.value.message == "Invalid URL"


class TestEncodeBody:
    """Tests for body serialization."""

    def test_model_by_alias_without_none(self):
        payload = CreateExercisePayload(name="Run", duration_min=30)
        assert json.loads(encode_body(payload)) == {"name": "Run", "durationMin": 30}

    def test_datetime_as_utc_iso(self):
        """Timestamps go out as ISO-8601 in UTC."""
        moment = datetime(2026, 10, 19, 8, 30, tzinfo=timezone(timedelta(hours=2)))
        payload = CreateExercisePayload(name="Run", performed_at=moment)
        assert json.loads(encode_body(payload))["performedAt"] == "2026-10-19T06:30:00Z"

    def test_plain_values(self):
        """Dicts with dates and nested models are accepted."""
        body = {"day": date(2026, 10, 19), "exercise": CreateExercisePayload(name="Row")}
        assert json.loads(encode_body(body)) == {"day": "2026-10-19", "exercise": {"name": "Row"}}

    def test_unknown_type_rejected(self):
        """Values JSON cannot represent fail as a client-side error."""
        with pytest.raises(EncodingError) as exc:
            encode_body({"x": object()})
        assert exc.value.status == CLIENT_ERROR_STATUS
        assert "not JSON serializable" in exc.value.message

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_numbers_rejected(self, value):
        """NaN and infinities have no JSON form and are never sent."""
        with pytest.raises(EncodingError) as exc:
            encode_body(CreateExercisePayload(name="Run", weight_kg=value))
        assert exc.value.status == CLIENT_ERROR_STATUS


class TestBuildRequest:
    """Tests for build_request."""

    def test_defaults(self):
        """GET with a JSON content type and no body."""
        request = build_request(BASE, APIRequest(path="/api/users/me"))

        assert request.method == "GET"
        assert str(request.url) == "http://host:4000/api/users/me"
        assert request.headers["Content-Type"] == "application/json"
        assert request.content == b""

    def test_caller_headers_win(self):
        """A caller header replaces the default regardless of case."""
        request = build_request(
            BASE,
            APIRequest(path="/x", headers={"content-type": "text/plain", "X-Trace": "1"}),
        )
        assert request.headers.get_list("content-type") == ["text/plain"]
        assert request.headers["x-trace"] == "1"

    def test_body_and_method(self):
        request = build_request(
            BASE,
            APIRequest(path="/api/exercises", method=HTTPMethod.POST, body=CreateExercisePayload(name="Run")),
        )
        assert request.method == "POST"
        assert json.loads(request.content) == {"name": "Run"}

    def test_method_as_string(self):
        request = build_request(BASE, APIRequest(path="/x", method="PATCH"))
        assert request.method == "PATCH"

    def test_no_authorization(self):
        """The builder never attaches credentials."""
        request = build_request(BASE, APIRequest(path="/x"))
        assert "authorization" not in request.headers
