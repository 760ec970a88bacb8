"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: validator.py
@DateTime: 2026-02-09
@Docs: Fluent request-field validator.
链式请求字段校验器。

A ``Validator`` is a per-request session. Each extraction call (``query``,
``param``, ``form``, ``form_data``, ``multipart``) registers a field and moves the
cursor to it; modifiers and coercions then act on that field only.
``Validator`` 是单请求会话。每次提取调用都会注册字段并将游标移动到该字段；
之后的修饰方法与类型转换只作用于该字段。

Examples:
        >>> from fastapi_request_validator import MappingRequestSource, Validator
        >>> v = Validator(MappingRequestSource(form={"age": "30"}))
        >>> v.form("age").required().int32()
        30
        >>> v.done() is None
        True
"""

import logging
import re
import struct
from typing import Self

from starlette.requests import Request

from fastapi_request_validator.config import ValidatorConfig
from fastapi_request_validator.exceptions import MissingUploadError, NoCurrentFieldError, ValidationError
from fastapi_request_validator.fields import (
    DEFAULT_DATA_TYPE,
    DataType,
    Field,
    SourceKind,
    UploadedFile,
    get_file_extension,
)
from fastapi_request_validator.sources import RequestSource, StarletteRequestSource, UploadHandle

logger = logging.getLogger(__name__)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity)|nan",
    re.IGNORECASE,
)


def _parse_int32(raw: str) -> int | None:
    if _INT_RE.fullmatch(raw) is None:
        return None
    value = int(raw)
    if value < INT32_MIN or value > INT32_MAX:
        return None
    return value


def _parse_float32(raw: str) -> float | None:
    if _FLOAT_RE.fullmatch(raw) is None:
        return None
    try:
        # standard-size packing rounds to single precision and raises on finite overflow
        return struct.unpack("<f", struct.pack("<f", float(raw)))[0]
    except OverflowError:
        return None


class Validator:
    """Per-request fluent validator.
    单请求链式校验器。

    Attributes:
        source: Request data source.
            请求数据源。
        config: Validator configuration.
            校验器配置。
        fields: Registered fields, in declaration order.
            已注册字段（按声明顺序）。
        current_field: Name of the field targeted by modifiers.
            修饰方法作用的字段名。
    """

    def __init__(self, source: RequestSource, *, config: ValidatorConfig | None = None) -> None:
        self.source = source
        self.config = config or ValidatorConfig()
        self.fields: dict[str, Field] = {}
        self.current_field: str | None = None

    @classmethod
    async def from_request(cls, request: Request, *, config: ValidatorConfig | None = None) -> Self:
        """
        Create a validator over a Starlette/FastAPI request.
        基于 Starlette/FastAPI 请求创建校验器。

        Args:
            request: Incoming request.
                传入请求。
            config: Optional configuration.
                可选配置。

        Returns:
            Validator: Empty validator bound to the request.
            Validator: 绑定到请求的空校验器。
        """
        source = await StarletteRequestSource.from_request(request)
        return cls(source, config=config)

    def _current(self) -> Field:
        if self.current_field is None:
            raise NoCurrentFieldError(
                message="No field selected; call an extraction method first / 未选择字段，请先调用提取方法",
                status_code=500,
                error_code="no_current_field",
            )
        return self.fields[self.current_field]

    def field(self, name: str) -> Field:
        """Return the recorded field for ``name`` (KeyError when undeclared).
        返回 ``name`` 对应的字段记录（未声明时抛出 KeyError）。
        """
        return self.fields[name]

    # ------------------------------------------------------------------
    # Registration / 注册
    # ------------------------------------------------------------------

    def add_field(self, name: str, source_kind: SourceKind | str) -> Self:
        """
        Extract ``name`` from the given source and make it the current field.
        从指定来源提取 ``name`` 并设为当前字段。

        A field of the same name is replaced.
        同名字段会被替换。

        Args:
            name: Field name.
                字段名。
            source_kind: Request channel to read from. Unknown kinds read the form.
                读取的请求通道；未知类型按表单读取。

        Returns:
            Validator: self, for chaining.
            Validator: 自身，便于链式调用。
        """
        new_field = Field(name=name, source_kind=source_kind)

        if source_kind == SourceKind.QUERY_STRING:
            new_field.value = self.source.get_query_param(name, "")
        elif source_kind == SourceKind.URL_PARAM:
            new_field.value = self.source.get_path_param(name)
        elif source_kind == SourceKind.MULTIPART_FILE:
            self._extract_upload(new_field)
        else:
            new_field.value = self.source.get_form_value(name, "")

        self.fields[name] = new_field
        self.current_field = name
        logger.debug("Registered field %s from %s", name, source_kind)
        return self

    def _extract_upload(self, f: Field) -> None:
        upload: UploadHandle | None
        try:
            upload = self.source.get_uploaded_file(f.name)
        except MissingUploadError:
            logger.debug("Upload missing for field %s", f.name)
            f.upload = None
            f.file_name = ""
            f.file_extension = ""
            f.data_type = DEFAULT_DATA_TYPE
            f.error_message = self.config.file_not_found_message
            return
        f.upload = upload
        f.file_name = upload.filename or ""
        f.file_extension = get_file_extension(f.file_name)

    def query(self, name: str) -> Self:
        """Register a query-string field / 注册查询字符串字段。"""
        return self.add_field(name, SourceKind.QUERY_STRING)

    def param(self, name: str) -> Self:
        """Register a URL path parameter / 注册 URL 路径参数。"""
        return self.add_field(name, SourceKind.URL_PARAM)

    def form(self, name: str) -> Self:
        """Register a form-urlencoded field / 注册 form-urlencoded 字段。"""
        return self.add_field(name, SourceKind.FORM_URLENCODED)

    def form_data(self, name: str) -> Self:
        """Register a multipart form-data text field / 注册 multipart 表单文本字段。"""
        return self.add_field(name, SourceKind.FORM_DATA)

    def multipart(self, name: str) -> Self:
        """Register a multipart file field / 注册 multipart 文件字段。"""
        return self.add_field(name, SourceKind.MULTIPART_FILE)

    # ------------------------------------------------------------------
    # Modifiers / 修饰方法
    # ------------------------------------------------------------------

    def required(self) -> Self:
        """
        Mark the current field required and check presence now.
        将当前字段标记为必填并立即检查是否存在。

        A blank field overwrites any earlier error message.
        空字段会覆盖之前的错误消息。
        """
        f = self._current()
        f.required = True
        if f.is_blank:
            f.error_message = f"{f.name} must be specified in {f.source_kind}"
        return self

    def optional(self) -> Self:
        """Mark the current field optional / 将当前字段标记为可选。"""
        self._current().required = False
        return self

    def default(self, value: str) -> Self:
        """
        Record a fallback value for the current field.
        为当前字段记录回退值。

        The value is only substituted when ``config.apply_defaults`` is enabled
        and the field holds no text; otherwise it is kept for reference only.
        仅当启用 ``config.apply_defaults`` 且字段无文本时才替换；否则仅作记录。

        Args:
            value: Fallback value.
                回退值。
        """
        f = self._current()
        f.default_value = str(value)
        if self.config.apply_defaults and f.source_kind != SourceKind.MULTIPART_FILE and f.value in (None, ""):
            f.value = f.default_value
        return self

    def error(self, message: str) -> Self:
        """Overwrite the current field's error message / 覆盖当前字段的错误消息。"""
        self._current().error_message = message
        return self

    # ------------------------------------------------------------------
    # Coercions / 类型转换
    # ------------------------------------------------------------------

    def string(self) -> str:
        """
        Return the current value as text.
        以文本形式返回当前值。

        Returns:
            str: The value, or an empty string when it is not text.
            str: 字段值；非文本时返回空字符串。
        """
        f = self._current()
        f.data_type = DataType.STRING
        if not isinstance(f.value, str):
            f.append_error(f"must be {f.data_type}")
            return ""
        return f.value

    def int32(self) -> int:
        """
        Parse the current value as a base-10 32-bit signed integer.
        将当前值解析为十进制 32 位有符号整数。

        Returns:
            int: Parsed value, or 0 on failure.
            int: 解析值；失败时返回 0。
        """
        f = self._current()
        f.data_type = DataType.INT
        value = _parse_int32(f.value) if isinstance(f.value, str) else None
        if value is None:
            f.append_error(f"must be {f.data_type}")
            return 0
        f.value = value
        return value

    def float32(self) -> float:
        """
        Parse the current value as a single-precision float.
        将当前值解析为单精度浮点数。

        Returns:
            float: Parsed value rounded to single precision, or 0.0 on failure.
            float: 按单精度舍入的解析值；失败时返回 0.0。
        """
        f = self._current()
        f.data_type = DataType.FLOAT
        value = _parse_float32(f.value) if isinstance(f.value, str) else None
        if value is None:
            f.append_error(f"must be {f.data_type}")
            return 0.0
        f.value = value
        return value

    def file(self) -> UploadedFile | None:
        """
        Open the current field's upload.
        打开当前字段的上传文件。

        Open failures leave ``content`` as None unless ``config.surface_open_errors``
        is set, in which case the failure is recorded and None is returned.
        打开失败时 ``content`` 为 None；若启用 ``config.surface_open_errors``，
        则记录错误并返回 None。

        Returns:
            UploadedFile | None: The opened upload, or None when there is none.
            UploadedFile | None: 已打开的上传文件；无上传时返回 None。
        """
        f = self._current()
        f.data_type = DataType.FILE
        if f.upload is None:
            f.append_error(f"must be {f.data_type}")
            return None

        try:
            content = f.upload.open()
        except (OSError, ValueError) as exc:
            logger.debug("Failed to open upload for field %s: %s", f.name, exc)
            if self.config.surface_open_errors:
                f.append_error("could not be opened")
                return None
            content = None

        return UploadedFile(content=content, name=f.file_name, extension=f.file_extension)

    # ------------------------------------------------------------------
    # Finalization / 收尾
    # ------------------------------------------------------------------

    def check_if_empty(self) -> bool:
        """Return True when no field holds a value or an upload.
        当没有任何字段持有值或上传文件时返回 True。
        """
        return all(f.is_absent for f in self.fields.values())

    def done(self) -> ValidationError | None:
        """
        Finish the session and return its error, if any.
        结束会话并返回错误（如有）。

        The first required field with an error, in declaration order, wins.
        Optional fields never fail the session.
        按声明顺序，第一个带错误的必填字段胜出；可选字段不会导致会话失败。

        File fields hold no text, so a session whose only fields are missing
        uploads reports the empty-inputs error rather than a field error.
        文件字段不持有文本，因此仅包含缺失上传的会话会返回"全部输入为空"错误，而非字段错误。

        Returns:
            ValidationError | None: The session error, or None.
            ValidationError | None: 会话错误；无错误时为 None。
        """
        if self.check_if_empty():
            logger.debug("Validation failed: all %d inputs empty", len(self.fields))
            return ValidationError(
                message=self.config.empty_inputs_message,
                status_code=self.config.status_code,
                error_code="empty_inputs",
            )

        for f in self.fields.values():
            if f.required and f.has_error:
                logger.debug("Validation failed on field %s: %s", f.name, f.error_message)
                return ValidationError(
                    message=f.error_message,
                    status_code=self.config.status_code,
                    details={"field": f.name, "source": str(f.source_kind)},
                    error_code="invalid_field",
                )
        return None
