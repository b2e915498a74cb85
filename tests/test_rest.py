import logging

import httpx
import pytest
import respx
from httpx import Response
from pivotal_tracker.core.errors import ConfigurationError, TransportError
from pivotal_tracker.core.rest import RestClient, normalize_server_url

BASE = "https://mock-pt.com/services/v3"


@pytest.fixture
def rest():
    with RestClient(BASE) as client:
        yield client


@pytest.mark.parametrize(
    "server_url, expected",
    [
        ("https://mock-pt.com/services/v3", "https://mock-pt.com/services/v3"),
        ("https://mock-pt.com/services/v3/", "https://mock-pt.com/services/v3"),
        ("https://mock-pt.com:8443/api/", "https://mock-pt.com:8443/api"),
        ("http://mock-pt.com:8080", "http://mock-pt.com:8080"),
        ("https://mock-pt.com/", "https://mock-pt.com"),
        ("mock-pt.com/services", "http://mock-pt.com/services"),
        ("mock-pt.com:81", "http://mock-pt.com:81"),
        ("http://[::1]:8080/services/v3/", "http://[::1]:8080/services/v3"),
        ("https://[2001:db8::7]/api", "https://[2001:db8::7]/api"),
        ("http://127.0.0.1:9000/", "http://127.0.0.1:9000"),
    ],
)
def test_normalize_server_url(server_url, expected):
    assert normalize_server_url(server_url) == expected
    assert RestClient(server_url).base_url == expected


@pytest.mark.parametrize("server_url", ["", "   ", "http://", "file:///tmp/x"])
def test_missing_host_raises_configuration_error(server_url):
    with pytest.raises(ConfigurationError):
        RestClient(server_url)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        normalize_server_url("https:///no-host")


def test_add_header_overwrites_same_name(rest):
    rest.add_header("X-TrackerToken", "first")
    rest.add_header("Accept", "application/xml")
    rest.add_header("X-TrackerToken", "second")

    assert rest.headers == {
        "X-TrackerToken": "X-TrackerToken: second",
        "Accept": "Accept: application/xml",
    }


def test_headers_property_is_a_copy(rest):
    rest.headers["Injected"] = "Injected: yes"
    assert "Injected" not in rest.headers


@respx.mock
def test_get_without_query_has_no_query_string(rest):
    route = respx.get(f"{BASE}/projects").mock(
        return_value=Response(200, text="<projects/>")
    )

    assert rest.get("/projects") == "<projects/>"
    assert route.calls[0].request.url.query == b""


@respx.mock
def test_get_appends_urlencoded_query(rest):
    route = respx.get(f"{BASE}/projects/7/stories").mock(
        return_value=Response(200, text="<stories/>")
    )

    rest.get("/projects/7/stories", {"filter": "state:started label:bug"})

    request = route.calls[0].request
    assert request.url.params["filter"] == "state:started label:bug"
    assert b"filter=state%3Astarted+label%3Abug" in request.url.raw_path


@respx.mock
def test_empty_query_is_ignored(rest):
    route = respx.get(f"{BASE}/projects").mock(return_value=Response(200, text="x"))

    rest.get("/projects", {})

    assert str(route.calls[0].request.url) == f"{BASE}/projects"


@respx.mock
def test_post_sends_headers_and_encoded_mapping(rest):
    route = respx.post(f"{BASE}/tokens/active").mock(
        return_value=Response(200, text="<token/>")
    )
    rest.add_header("Content-type", "application/x-www-form-urlencoded")

    rest.post("/tokens/active", {"username": "alice", "password": "s3cret!"})

    request = route.calls[0].request
    assert request.method == "POST"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert request.content == b"username=alice&password=s3cret%21"


@respx.mock
def test_put_passes_string_body_through(rest):
    route = respx.put(f"{BASE}/projects/7/stories/42").mock(
        return_value=Response(200, text="<story/>")
    )

    rest.put("/projects/7/stories/42", "story%5Blabels%5D=bug")

    request = route.calls[0].request
    assert request.method == "PUT"
    assert request.content == b"story%5Blabels%5D=bug"


@respx.mock
def test_request_uppercases_method(rest):
    route = respx.get(f"{BASE}/projects").mock(return_value=Response(200, text="ok"))

    assert rest.request("get", "/projects") == "ok"
    assert route.calls[0].request.method == "GET"


@pytest.mark.parametrize("status", [401, 404, 422, 500])
@respx.mock
def test_error_status_returns_body(rest, status):
    body = "<errors><error>Not allowed</error></errors>"
    respx.get(f"{BASE}/projects").mock(return_value=Response(status, text=body))

    assert rest.get("/projects") == body


@respx.mock
def test_error_status_is_logged_as_warning(rest, caplog):
    respx.get(f"{BASE}/projects").mock(return_value=Response(503, text="down"))

    with caplog.at_level(logging.WARNING, logger="pivotal_tracker.rest"):
        rest.get("/projects")

    record = next(r for r in caplog.records if r.getMessage() == "pt.request.error_status")
    assert record.status == 503
    assert record.method == "GET"


@respx.mock
def test_request_is_logged_at_debug(rest, caplog):
    respx.post(f"{BASE}/projects/7/stories").mock(
        return_value=Response(200, text="<story/>")
    )

    with caplog.at_level(logging.DEBUG, logger="pivotal_tracker.rest"):
        rest.post("/projects/7/stories", "a=b")

    record = next(r for r in caplog.records if r.getMessage() == "pt.request")
    assert record.url == f"{BASE}/projects/7/stories"
    assert record.status == 200
    assert record.duration_ms >= 0


@pytest.mark.parametrize(
    "exc",
    [
        httpx.ConnectError("connection refused"),
        httpx.ConnectTimeout("timed out"),
        httpx.ReadTimeout("timed out"),
    ],
)
@respx.mock
def test_network_failure_raises_transport_error(rest, exc):
    route = respx.get(f"{BASE}/projects").mock(side_effect=exc)

    with pytest.raises(TransportError) as err:
        rest.get("/projects")

    assert err.value.cause is exc
    assert err.value.__cause__ is exc
    assert err.value.method == "GET"
    assert err.value.url == f"{BASE}/projects"
    # no retries
    assert route.call_count == 1


@respx.mock
def test_identical_gets_yield_identical_bodies(rest):
    route = respx.get(f"{BASE}/projects").mock(
        return_value=Response(200, text="<projects><project/></projects>")
    )

    first = rest.get("/projects")
    second = rest.get("/projects")

    assert first == second
    assert route.call_count == 2


def test_close_leaves_injected_http_client_open():
    http = httpx.Client()
    with RestClient(BASE, http=http):
        pass
    assert not http.is_closed
    http.close()


def test_close_closes_owned_http_client():
    rest = RestClient(BASE, timeout_seconds=2.5)
    assert rest.http.timeout.read == 2.5
    rest.close()
    assert rest.http.is_closed
