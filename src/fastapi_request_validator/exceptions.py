"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: exceptions.py
@DateTime: 2026-02-08
@Docs: Request validator error hierarchy.
请求校验器异常体系。
"""

from typing import Any


class RequestValidatorError(Exception):
    """
    Request validator errors.
    请求校验器异常。

    Attributes:
        message: Error message.
        message: 错误消息。
        status_code: HTTP status code suggested to the caller.
        status_code: 建议调用方使用的 HTTP 状态码。
        details: Error details.
        details: 错误详情。
        error_code: Stable error code.
        error_code: 稳定错误码。
    """

    def __init__(
        self,
        *,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
        error_code: str = "request_validator_error",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details
        self.error_code = error_code


class ValidationError(RequestValidatorError):
    """
    Session-level validation failure returned by ``Validator.done()``.
    由 ``Validator.done()`` 返回的会话级校验失败。
    """


class MissingUploadError(RequestValidatorError):
    """
    No uploaded file exists for the requested form field.
    请求的表单字段没有上传文件。
    """


class NoCurrentFieldError(RequestValidatorError):
    """
    A modifier or coercion was called before any field was extracted.
    在提取任何字段之前调用了修饰方法或类型转换。
    """
