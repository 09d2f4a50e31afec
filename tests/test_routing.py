"""AppRoute: success envelope and per-route action logging."""

from __future__ import annotations

import logging
from typing import Iterator, List

import pytest
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient

from app.common.envelope import ApiResult
from app.common.errors import NotFoundError
from app.common.exception_handlers import register_exception_handlers
from app.common.logging import VERBOSE
from app.common.middlewares import TraceIdMiddleware
from app.common.routing import AppRouter, LogAction, RouteOptions, get_route_options


def create_item():
    return {"name": "a"}


def get_item():
    return {"name": "a"}


def accepted_item():
    return {"queued": True}


def custom_result():
    return ApiResult.custom("Queued", 202, {"id": 1})


def failing_item():
    raise NotFoundError(message="Item with ID 1 not found")


def plain_text():
    return PlainTextResponse("pong")


def quiet_item():
    return [1, 2, 3]


def crashing_item():
    raise RuntimeError("db driver exploded")


router = AppRouter(prefix="/items")
router.add_api_route(
    "",
    create_item,
    methods=["POST"],
    status_code=201,
    options=RouteOptions(logging=LogAction("Create item", "log"), response_message="Item created successfully"),
)
router.add_api_route("/one", get_item, methods=["GET"], options=RouteOptions(logging=LogAction("Get item", "debug")))
router.add_api_route("/accepted", accepted_item, methods=["GET"], options=RouteOptions(response_code=202))
router.add_api_route("/custom", custom_result, methods=["GET"])
router.add_api_route("/fail", failing_item, methods=["GET"], options=RouteOptions(logging=LogAction("Fail item", "log")))
router.add_api_route("/text", plain_text, methods=["GET"])
router.add_api_route("/quiet", quiet_item, methods=["GET"])
router.add_api_route("/crash", crashing_item, methods=["GET"])


@pytest.fixture
def client() -> Iterator[TestClient]:
    app = FastAPI()
    app.add_middleware(TraceIdMiddleware)
    register_exception_handlers(app)
    app.include_router(router, prefix="/api/v1")
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


def _app_records(caplog: pytest.LogCaptureFixture) -> List[logging.LogRecord]:
    return [r for r in caplog.records if r.name == "app"]


class TestRouteOptions:
    def test_registry(self) -> None:
        assert get_route_options(create_item).response_message == "Item created successfully"
        assert get_route_options(quiet_item) == RouteOptions()


class TestSuccessEnvelope:
    def test_created(self, client: TestClient) -> None:
        res = client.post("/api/v1/items")
        body = res.json()

        assert res.status_code == 201
        assert body["statusCode"] == 201
        assert body["message"] == "Item created successfully"
        assert body["data"] == {"name": "a"}
        assert body["path"] == "/api/v1/items"
        assert body["timestamp"].endswith("Z")

    def test_default_message(self, client: TestClient) -> None:
        body = client.get("/api/v1/items/quiet").json()
        assert (body["statusCode"], body["message"], body["data"]) == (200, "Success", [1, 2, 3])

    def test_path_keeps_query(self, client: TestClient) -> None:
        assert client.get("/api/v1/items/quiet?page=2").json()["path"] == "/api/v1/items/quiet?page=2"

    def test_response_code_override(self, client: TestClient) -> None:
        res = client.get("/api/v1/items/accepted")
        assert res.status_code == 200
        assert res.json()["statusCode"] == 202

    def test_api_result_verbatim(self, client: TestClient) -> None:
        body = client.get("/api/v1/items/custom").json()
        assert (body["statusCode"], body["message"], body["data"]) == (202, "Queued", {"id": 1})

    def test_non_json_passes_through(self, client: TestClient) -> None:
        res = client.get("/api/v1/items/text")
        assert res.status_code == 200
        assert res.text == "pong"


class TestActionLogging:
    def test_enter_and_exit(self, client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(VERBOSE, logger="app")
        client.post("/api/v1/items", headers={"X-Request-Id": "rid-42"})

        enter, exit_ = _app_records(caplog)
        assert enter.getMessage() == "[ENTER] POST /api/v1/items - Create item"
        assert enter.levelno == logging.INFO
        assert exit_.getMessage().startswith("[EXIT] POST /api/v1/items 201 - Create item (+")
        assert exit_.getMessage().endswith("ms)")
        assert exit_.levelno == logging.INFO
        assert {enter.trace_id, exit_.trace_id} == {"rid-42"}
        assert enter.context == "create_item"

    def test_configured_level(self, client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(VERBOSE, logger="app")
        client.get("/api/v1/items/one")

        assert [r.levelno for r in _app_records(caplog)] == [logging.DEBUG, logging.DEBUG]

    def test_failure_exit_is_error(self, client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(VERBOSE, logger="app")
        res = client.get("/api/v1/items/fail")

        assert res.status_code == 404
        assert res.json()["message"] == "Item with ID 1 not found"

        records = _app_records(caplog)
        enters = [r for r in records if r.getMessage().startswith("[ENTER]")]
        exits = [r for r in records if r.getMessage().startswith("[EXIT]")]
        assert len(enters) == 1 and len(exits) == 1
        assert exits[0].levelno == logging.ERROR
        assert exits[0].getMessage().endswith("- Error: Item with ID 1 not found")
        assert "NotFoundError" in exits[0].trace
        assert not [r for r in exits if r.levelno == logging.INFO]

    def test_routes_without_logging_are_silent(self, client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(VERBOSE, logger="app")
        client.get("/api/v1/items/quiet")
        assert _app_records(caplog) == []


class TestUnhandledError:
    def test_keeps_request_id(self, client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(VERBOSE, logger="app")
        res = client.get("/api/v1/items/crash", headers={"X-Request-Id": "rid-500"})

        assert res.status_code == 500
        assert res.headers["X-Request-Id"] == "rid-500"
        assert res.json()["message"] == "Internal server error"
        assert res.json()["path"] == "/api/v1/items/crash"
        assert "db driver exploded" not in res.text

        (record,) = [r for r in _app_records(caplog) if r.getMessage().startswith("Unhandled error")]
        assert record.levelno == logging.ERROR
        assert record.trace_id == "rid-500"
        assert record.context == "TraceIdMiddleware"
        assert "RuntimeError: db driver exploded" in record.trace

    def test_generates_request_id(self, client: TestClient) -> None:
        res = client.get("/api/v1/items/crash")
        assert res.status_code == 500
        assert res.headers["X-Request-Id"]
