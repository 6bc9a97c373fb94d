"""测试夹具：隔离配置缓存，并提供挂载统一响应处理的 FastAPI 客户端。"""

from typing import Generator

import pytest
from fastapi import FastAPI, Query
from fastapi.testclient import TestClient

from cland_share.core.codes import parse_code
from cland_share.core.config import get_settings
from cland_share.core.exceptions import AppException, register_exception_handlers
from cland_share.core.logger import get_request_id
from cland_share.middleware import RequestIdMiddleware
from cland_share.schemas.common import Pagination, ResponseEnvelope


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path) -> Generator[None, None, None]:
    """每个用例使用独立的日志目录与干净的配置缓存。"""
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "log"))
    monkeypatch.delenv("RESPONSE_CODE_AS_STRING", raising=False)
    monkeypatch.delenv("TIMEZONE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _build_app() -> FastAPI:
    app = FastAPI(title="cland-share test app")
    app.add_middleware(RequestIdMiddleware)
    register_exception_handlers(app)

    @app.get("/items", response_model=ResponseEnvelope[Pagination[int]])
    async def list_items(page: int = Query(1), size: int = Query(10)):
        items = list(range((page - 1) * size, min(page * size, 25)))
        return ResponseEnvelope.success(Pagination.new(25, page, size, items))

    @app.get("/ping", response_model=ResponseEnvelope[dict])
    async def ping():
        return ResponseEnvelope.ok()

    @app.get("/fail/{code}")
    async def fail(code: int):
        raise AppException("业务处理失败", code=code, data={"code": code})

    @app.get("/codes/{code}")
    async def decode(code: int):
        structured = parse_code(code)
        return ResponseEnvelope.success(
            {"category": structured.category, "system": structured.system, "detail": structured.detail}
        )

    @app.get("/boom")
    async def boom():
        raise RuntimeError("unexpected")

    @app.get("/request-id")
    async def request_id():
        return ResponseEnvelope.success(get_request_id())

    return app


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    """构建 TestClient；未捕获异常交由兜底处理器转换而不是直接抛出。"""
    with TestClient(_build_app(), raise_server_exceptions=False) as test_client:
        yield test_client
