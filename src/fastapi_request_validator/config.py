"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: config.py
@DateTime: 2026-02-08
@Docs: Validator configuration helpers.
校验器配置助手。

Configuration helpers for the request validator.
请求校验器配置助手。

The validator reads no environment variables; everything is passed in by the
application that owns the request.
校验器不读取任何环境变量；所有配置均由持有请求的应用传入。

Examples:
        Use defaults / 使用默认值:

        >>> from fastapi_request_validator.config import resolve_config
        >>> cfg = resolve_config()
        >>> cfg.empty_inputs_message
        'all inputs cannot be empty'

        Opt in to default substitution / 启用默认值替换:

        >>> cfg = resolve_config(apply_defaults=True)
        >>> cfg.apply_defaults
        True
"""

from dataclasses import dataclass

DEFAULT_EMPTY_INPUTS_MESSAGE = "all inputs cannot be empty"
DEFAULT_FILE_NOT_FOUND_MESSAGE = "file not found"
DEFAULT_STATUS_CODE = 400


@dataclass(frozen=True, slots=True)
class ValidatorConfig:
    """Request validator configuration.

    请求校验器配置。

    Attributes:
        empty_inputs_message: Error returned by ``done()`` when every field is absent.
            所有字段均缺失时 ``done()`` 返回的错误。
        file_not_found_message: Error recorded when a multipart file is missing.
            multipart 文件缺失时记录的错误。
        apply_defaults: Substitute ``default()`` values into blank fields.
            是否将 ``default()`` 的值替换到空字段中。
        surface_open_errors: Record file open failures on the field.
            是否将文件打开失败记录到字段错误中。
        status_code: HTTP status code attached to returned errors.
            返回错误附带的 HTTP 状态码。
    """

    empty_inputs_message: str = DEFAULT_EMPTY_INPUTS_MESSAGE
    file_not_found_message: str = DEFAULT_FILE_NOT_FOUND_MESSAGE
    apply_defaults: bool = False
    surface_open_errors: bool = False
    status_code: int = DEFAULT_STATUS_CODE


def _message_or_default(value: str | None, default: str) -> str:
    """
    Return a stripped message, or the default when blank.
    返回去除空白后的消息；为空时返回默认值。

    Args:
        value: Candidate message.
            候选消息。
        default: Fallback message.
            回退消息。

    Returns:
        str: Resolved message.
        str: 解析后的消息。
    """
    if value is None:
        return default
    v = str(value).strip()
    return v or default


def resolve_config(
    *,
    empty_inputs_message: str | None = None,
    file_not_found_message: str | None = None,
    apply_defaults: bool = False,
    surface_open_errors: bool = False,
    status_code: int = DEFAULT_STATUS_CODE,
) -> ValidatorConfig:
    """Resolve configuration from parameters.

    从参数解析配置。

    Blank messages fall back to the built-in defaults.
    空消息会回退到内置默认值。

    Args:
        empty_inputs_message: Error for an all-empty session.
            全部输入为空时的错误消息。
        file_not_found_message: Error for a missing multipart file.
            multipart 文件缺失时的错误消息。
        apply_defaults: Substitute default values into blank fields.
            是否替换空字段为默认值。
        surface_open_errors: Record file open failures.
            是否记录文件打开失败。
        status_code: HTTP status code for returned errors.
            返回错误的 HTTP 状态码。

    Returns:
        A ValidatorConfig instance.
            返回 ValidatorConfig 配置实例。
    """
    if not 400 <= int(status_code) <= 599:
        raise ValueError(f"status_code must be an HTTP error status, got {status_code}")
    return ValidatorConfig(
        empty_inputs_message=_message_or_default(empty_inputs_message, DEFAULT_EMPTY_INPUTS_MESSAGE),
        file_not_found_message=_message_or_default(file_not_found_message, DEFAULT_FILE_NOT_FOUND_MESSAGE),
        apply_defaults=bool(apply_defaults),
        surface_open_errors=bool(surface_open_errors),
        status_code=int(status_code),
    )
