"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: sources.py
@DateTime: 2026-02-09
@Docs: Request data sources consumed by the validator.
校验器使用的请求数据源。

The validator never talks to the web framework directly. It reads through a
``RequestSource``, which exposes four lookups with default-value fallback.
校验器从不直接访问 Web 框架，而是通过 ``RequestSource`` 读取数据，
其提供四种带默认值回退的查找操作。
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Protocol, runtime_checkable

from starlette.datastructures import FormData, UploadFile
from starlette.requests import Request

from fastapi_request_validator.exceptions import MissingUploadError

logger = logging.getLogger(__name__)


@runtime_checkable
class UploadHandle(Protocol):
    """
    Uploaded file handle protocol.
    上传文件句柄协议。

    Attributes:
        filename: Client-supplied file name.
        filename: 客户端提供的文件名。
    """

    @property
    def filename(self) -> str | None: ...

    def open(self) -> BinaryIO:
        """Open the file content. May raise OSError/ValueError.
        打开文件内容，可能抛出 OSError/ValueError。
        """
        ...


class RequestSource(Protocol):
    """
    Request data source protocol.
    请求数据源协议。
    """

    def get_query_param(self, name: str, default: str) -> str: ...

    def get_path_param(self, name: str) -> str: ...

    def get_form_value(self, name: str, default: str) -> str: ...

    def get_uploaded_file(self, name: str) -> UploadHandle:
        """Return the upload for ``name`` or raise MissingUploadError.
        返回 ``name`` 对应的上传文件，不存在时抛出 MissingUploadError。
        """
        ...


def _missing_upload(name: str) -> MissingUploadError:
    return MissingUploadError(
        message=f"No uploaded file for field {name} / 字段 {name} 没有上传文件",
        details={"field": name},
        error_code="missing_upload",
    )


class StarletteUpload:
    """Adapt a Starlette/FastAPI ``UploadFile`` to ``UploadHandle``.
    将 Starlette/FastAPI 的 ``UploadFile`` 适配为 ``UploadHandle``。
    """

    __slots__ = ("_upload",)

    def __init__(self, upload: UploadFile) -> None:
        self._upload = upload

    @property
    def filename(self) -> str | None:
        return self._upload.filename

    @property
    def upload(self) -> UploadFile:
        return self._upload

    def open(self) -> BinaryIO:
        """Rewind and return the spooled file object.
        回到开头并返回缓冲文件对象。

        Raises:
            ValueError: The underlying file is already closed.
                底层文件已关闭。
        """
        f = self._upload.file
        f.seek(0)
        return f


@dataclass(slots=True)
class MappingRequestSource:
    """Request source backed by plain mappings.
    基于普通映射的请求数据源。

    Useful outside a live request, e.g. for background jobs or tests.
    适用于无实时请求的场景，例如后台任务或测试。
    """

    query: Mapping[str, str] = field(default_factory=dict)
    path: Mapping[str, str] = field(default_factory=dict)
    form: Mapping[str, str] = field(default_factory=dict)
    files: Mapping[str, UploadHandle] = field(default_factory=dict)

    def get_query_param(self, name: str, default: str) -> str:
        return self.query.get(name, default)

    def get_path_param(self, name: str) -> str:
        return self.path.get(name, "")

    def get_form_value(self, name: str, default: str) -> str:
        return self.form.get(name, default)

    def get_uploaded_file(self, name: str) -> UploadHandle:
        upload = self.files.get(name)
        if upload is None:
            raise _missing_upload(name)
        return upload


class StarletteRequestSource:
    """Request source over a Starlette/FastAPI ``Request``.
    基于 Starlette/FastAPI ``Request`` 的请求数据源。

    The form body is parsed once up front (``from_request``) so that every
    lookup afterwards is synchronous.
    表单体在 ``from_request`` 中一次性解析，之后的查找均为同步操作。
    """

    __slots__ = ("_request", "_form")

    def __init__(self, request: Request, form: FormData | None = None) -> None:
        self._request = request
        self._form = form if form is not None else FormData()

    @classmethod
    async def from_request(cls, request: Request) -> "StarletteRequestSource":
        """
        Build a source, parsing the form body when present.
        构建数据源，并在存在表单体时解析它。

        Args:
            request: Incoming request.
                传入请求。

        Returns:
            StarletteRequestSource: Ready-to-use source.
            StarletteRequestSource: 可直接使用的数据源。
        """
        form: FormData | None = None
        media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
        if media_type in ("multipart/form-data", "application/x-www-form-urlencoded"):
            form = await request.form()
            logger.debug("Parsed %s form with %d entries", media_type, len(form))
        return cls(request, form)

    @property
    def form(self) -> FormData:
        return self._form

    # repeated names resolve to the first occurrence

    def get_query_param(self, name: str, default: str) -> str:
        values = self._request.query_params.getlist(name)
        return values[0] if values else default

    def get_path_param(self, name: str) -> str:
        v: Any = self._request.path_params.get(name, "")
        return "" if v is None else str(v)

    def get_form_value(self, name: str, default: str) -> str:
        for v in self._form.getlist(name):
            if isinstance(v, str):
                return v
        return default

    def get_uploaded_file(self, name: str) -> UploadHandle:
        for v in self._form.getlist(name):
            if isinstance(v, UploadFile):
                return StarletteUpload(v)
        raise _missing_upload(name)
