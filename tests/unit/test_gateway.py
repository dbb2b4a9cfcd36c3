"""Element gateway tests."""

import json

import httpx
import pytest

from tagsteps.errors import ElementNotFoundError, GatewayError
from tagsteps.gateway import ColumnFilter, InMemoryElement, InMemoryGateway
from tagsteps.gateway.http import HttpGateway


def test_inmemory_query_uses_pid_offset():
    element = InMemoryElement("TAG")
    row = ["key-1"] + [""] * 6 + ["News*"]
    element.tables[240] = [row, ["key-2"] + [""] * 6 + ["Sports*"]]

    rows = element.query_table(240, [ColumnFilter(pid=248, value="News*")])
    assert rows == [tuple(row)]
    assert len(element.query_table(240, [ColumnFilter(pid=248, value="News*", operator="notequal")])) == 1


def test_inmemory_query_with_explicit_columns():
    element = InMemoryElement("TAG", columns={500: [501, 510]})
    element.tables[500] = [["a", "x"], ["b", "y"]]

    assert element.query_table(500, [ColumnFilter(pid=510, value="y")]) == [("b", "y")]


def test_inmemory_empty_table_is_none():
    element = InMemoryElement("TAG")
    assert element.get_table_rows(1310) is None


def test_inmemory_records_writes():
    element = InMemoryElement("TAG")
    element.set_parameter(3, "{}")
    element.set_parameter_by_key(356, "key-1", 1)

    assert element.get_parameter(3) == "{}"
    assert element.keyed_parameters[356] == {"key-1": 1}
    assert element.writes == [(3, None, "{}"), (356, "key-1", 1)]


def test_inmemory_gateway_unknown_element():
    with pytest.raises(ElementNotFoundError):
        InMemoryGateway().get_element("nope")


def _http_gateway(handler):
    return HttpGateway("http://platform/api", token="secret", transport=httpx.MockTransport(handler))


def test_http_gateway_requests():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        path = request.url.path
        if path == "/api/elements/TAG":
            return httpx.Response(200, json={"name": "TAG"})
        if path == "/api/elements/TAG/tables/240/rows":
            return httpx.Response(200, json={"rows": [["key-1", "News"]]})
        if path == "/api/elements/TAG/tables/1310/rows":
            return httpx.Response(200, json={"rows": []})
        if request.method == "PUT":
            return httpx.Response(204)
        return httpx.Response(404)

    element = _http_gateway(handler).get_element("TAG")
    assert element.query_table(240, [ColumnFilter(pid=248, value="News")]) == [("key-1", "News")]
    assert element.get_table_rows(1310) is None
    element.set_parameter(3, "payload")
    element.set_parameter_by_key(356, "key-1", 1)

    assert seen[0].headers["Authorization"] == "Bearer secret"
    assert seen[1].url.params.get_list("filter") == ["248:equal:News"]
    assert seen[3].url.path == "/api/elements/TAG/parameters/3"
    assert json.loads(seen[3].content) == {"value": "payload"}
    assert seen[4].url.path == "/api/elements/TAG/parameters/356/keys/key-1"


def test_http_gateway_missing_element():
    gateway = _http_gateway(lambda request: httpx.Response(404))
    with pytest.raises(ElementNotFoundError):
        gateway.get_element("TAG")


def test_http_gateway_error_status():
    def handler(request):
        if request.url.path == "/api/elements/TAG":
            return httpx.Response(200, json={})
        return httpx.Response(500, text="boom")

    element = _http_gateway(handler).get_element("TAG")
    with pytest.raises(GatewayError):
        element.set_parameter(3, "x")
