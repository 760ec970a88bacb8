"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: conftest.py
@DateTime: 2026-02-09
@Docs: Shared test fixtures for the fastapi-request-validator test suite.
测试套件的公共 fixtures。
"""

import io
from collections.abc import Callable
from typing import Any, BinaryIO

import pytest
from fastapi import UploadFile
from starlette.datastructures import FormData, Headers
from starlette.requests import Request

from fastapi_request_validator.sources import MappingRequestSource, StarletteRequestSource, StarletteUpload
from fastapi_request_validator.validator import Validator


class BrokenUpload:
    """Upload handle whose content cannot be opened.
    内容无法打开的上传句柄。
    """

    def __init__(self, filename: str = "broken.bin") -> None:
        self.filename = filename

    def open(self) -> BinaryIO:
        raise OSError("disk gone")


def make_upload_file(filename: str, content: bytes, content_type: str = "application/octet-stream") -> UploadFile:
    """Create an UploadFile from bytes.
    从字节内容创建 UploadFile。

    Args:
        filename: File name / 文件名。
        content: File content bytes / 文件内容字节。
        content_type: MIME type / MIME 类型。

    Returns:
        UploadFile: Upload file / 上传文件。
    """
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        size=len(content),
        headers=Headers({"content-type": content_type}),
    )


def make_request(
    *,
    query_string: bytes = b"",
    path_params: dict[str, Any] | None = None,
) -> Request:
    """Build a bare Starlette request from an ASGI scope.
    基于 ASGI scope 构建 Starlette 请求。
    """
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/",
        "headers": [],
        "query_string": query_string,
        "path_params": path_params or {},
    }
    return Request(scope)


@pytest.fixture
def upload_factory() -> Callable[..., StarletteUpload]:
    """Factory for StarletteUpload handles.
    StarletteUpload 句柄工厂。
    """

    def _make(filename: str = "report.PDF", content: bytes = b"%PDF-1.7") -> StarletteUpload:
        return StarletteUpload(make_upload_file(filename, content))

    return _make


@pytest.fixture
def validator_factory() -> Callable[..., Validator]:
    """Factory for validators over a MappingRequestSource.
    基于 MappingRequestSource 的校验器工厂。
    """

    def _make(**kwargs: Any) -> Validator:
        config = kwargs.pop("config", None)
        return Validator(MappingRequestSource(**kwargs), config=config)

    return _make


@pytest.fixture
def starlette_source() -> StarletteRequestSource:
    """A StarletteRequestSource with query, path and form data.
    带查询、路径与表单数据的 StarletteRequestSource。
    """
    request = make_request(query_string=b"page=2&q=", path_params={"team": "core", "id": 7})
    form = FormData(
        [
            ("name", "alice"),
            ("avatar", make_upload_file("me.JPG", b"\xff\xd8\xff")),
        ]
    )
    return StarletteRequestSource(request, form)


@pytest.fixture
def broken_upload() -> BrokenUpload:
    """An upload handle that fails to open.
    打开失败的上传句柄。
    """
    return BrokenUpload()


@pytest.fixture
def repeated_source() -> StarletteRequestSource:
    """A StarletteRequestSource where names repeat.
    字段名重复出现的 StarletteRequestSource。
    """
    request = make_request(query_string=b"q=first&q=second")
    form = FormData(
        [
            ("doc", "not-a-file"),
            ("name", "first"),
            ("name", "second"),
            ("doc", make_upload_file("one.txt", b"1")),
            ("doc", make_upload_file("two.txt", b"2")),
        ]
    )
    return StarletteRequestSource(request, form)
