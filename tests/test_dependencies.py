"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_dependencies.py
@DateTime: 2026-02-09
@Docs: Tests for dependencies.py and Validator.from_request against a FastAPI app.
dependencies.py 与 Validator.from_request 的 FastAPI 集成测试。
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from httpx import ASGITransport, AsyncClient

from fastapi_request_validator.config import resolve_config
from fastapi_request_validator.dependencies import configured_validator, request_validator
from fastapi_request_validator.exceptions import RequestValidatorError
from fastapi_request_validator.validator import Validator


def _create_app() -> FastAPI:
    app = FastAPI()
    lenient = configured_validator(resolve_config(apply_defaults=True, status_code=422))

    @app.exception_handler(RequestValidatorError)
    async def _handler(request: Request, exc: RequestValidatorError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message, "error_code": exc.error_code, "details": exc.details},
        )

    @app.post("/teams/{team}/people")
    async def create_person(v: Validator = Depends(request_validator)) -> dict[str, Any]:
        team = v.param("team").required().string()
        name = v.form("name").required().string()
        age = v.form("age").required().int32()
        page = v.query("page").optional().int32()
        err = v.done()
        if err is not None:
            raise err
        return {"team": team, "name": name, "age": age, "page": page}

    @app.post("/upload")
    async def upload(v: Validator = Depends(request_validator)) -> dict[str, Any]:
        title = v.form_data("title").required().string()
        doc = v.multipart("doc").required().file()
        err = v.done()
        if err is not None:
            raise err
        assert doc is not None
        assert doc.content is not None
        return {"title": title, "name": doc.name, "extension": doc.extension, "size": len(doc.content.read())}

    @app.get("/search")
    async def search(v: Validator = Depends(lenient)) -> dict[str, Any]:
        limit = v.query("limit").default("20").required().int32()
        err = v.done()
        if err is not None:
            raise err
        return {"limit": limit}

    @app.post("/raw")
    async def raw(request: Request) -> dict[str, Any]:
        v = await Validator.from_request(request)
        err = v.done()
        return {"empty": v.check_if_empty(), "error": None if err is None else err.message}

    return app


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient for the test app.
    提供测试应用的 httpx AsyncClient。
    """
    transport = ASGITransport(app=_create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
class TestRequestValidatorDependency:
    """End-to-end tests through FastAPI.
    经由 FastAPI 的端到端测试。
    """

    async def test_urlencoded_valid(self, client: AsyncClient) -> None:
        resp = await client.post("/teams/core/people?page=3", data={"name": "alice", "age": "30"})
        assert resp.status_code == 200
        assert resp.json() == {"team": "core", "name": "alice", "age": 30, "page": 3}

    async def test_urlencoded_missing_age(self, client: AsyncClient) -> None:
        resp = await client.post("/teams/core/people", data={"name": "alice"})
        assert resp.status_code == 400
        body = resp.json()
        assert body["message"] == "age must be specified in form-urlencoded and the value must be int"
        assert body["error_code"] == "invalid_field"
        assert body["details"] == {"field": "age", "source": "form-urlencoded"}

    async def test_optional_bad_query_tolerated(self, client: AsyncClient) -> None:
        resp = await client.post("/teams/core/people?page=abc", data={"name": "bob", "age": "41"})
        assert resp.status_code == 200
        assert resp.json()["page"] == 0

    async def test_multipart_upload(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/upload",
            data={"title": "Q1"},
            files={"doc": ("Report.Final.PDF", b"%PDF-1.7 body", "application/pdf")},
        )
        assert resp.status_code == 200
        assert resp.json() == {"title": "Q1", "name": "Report.Final.PDF", "extension": "pdf", "size": 13}

    async def test_multipart_missing_file(self, client: AsyncClient) -> None:
        resp = await client.post("/upload", data={"title": "Q1"}, files={"other": ("a.txt", b"x", "text/plain")})
        assert resp.status_code == 400
        assert resp.json()["message"] == "doc must be specified in multipart-file and the value must be file"

    async def test_configured_dependency_applies_default(self, client: AsyncClient) -> None:
        resp = await client.get("/search")
        assert resp.status_code == 200
        assert resp.json() == {"limit": 20}

    async def test_configured_dependency_status_code(self, client: AsyncClient) -> None:
        resp = await client.get("/search?limit=many")
        assert resp.status_code == 422
        assert resp.json()["message"] == "limit must be int"

    @pytest.mark.parametrize(
        "content_type",
        ["Application/X-WWW-Form-Urlencoded", "APPLICATION/X-WWW-FORM-URLENCODED; Charset=UTF-8"],
    )
    async def test_mixed_case_content_type_parsed(self, client: AsyncClient, content_type: str) -> None:
        """Media types match case-insensitively / 媒体类型不区分大小写。"""
        resp = await client.post(
            "/teams/core/people",
            content=b"name=alice&age=30",
            headers={"content-type": content_type},
        )
        assert resp.status_code == 200
        assert resp.json()["name"] == "alice"
        assert resp.json()["age"] == 30

    async def test_repeated_names_first_value_wins(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/teams/core/people?page=1&page=2",
            content=b"name=first&name=second&age=30",
            headers={"content-type": "application/x-www-form-urlencoded"},
        )
        assert resp.status_code == 200
        assert resp.json() == {"team": "core", "name": "first", "age": 30, "page": 1}

    async def test_json_body_not_parsed_as_form(self, client: AsyncClient) -> None:
        resp = await client.post("/raw", json={"a": 1})
        assert resp.status_code == 200
        assert resp.json() == {"empty": True, "error": "all inputs cannot be empty"}
