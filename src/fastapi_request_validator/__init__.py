"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: __init__.py
@DateTime: 2026-02-09
@Docs: Package exports for fastapi_request_validator.
fastapi_request_validator 包导出定义。
"""

from fastapi_request_validator.config import ValidatorConfig, resolve_config
from fastapi_request_validator.dependencies import configured_validator, request_validator
from fastapi_request_validator.exceptions import (
    MissingUploadError,
    NoCurrentFieldError,
    RequestValidatorError,
    ValidationError,
)
from fastapi_request_validator.fields import DataType, Field, SourceKind, UploadedFile, get_file_extension
from fastapi_request_validator.sources import (
    MappingRequestSource,
    RequestSource,
    StarletteRequestSource,
    StarletteUpload,
    UploadHandle,
)
from fastapi_request_validator.validator import Validator

__all__ = [
    "Validator",
    "Field",
    "SourceKind",
    "DataType",
    "UploadedFile",
    "get_file_extension",
    "RequestSource",
    "UploadHandle",
    "MappingRequestSource",
    "StarletteRequestSource",
    "StarletteUpload",
    "request_validator",
    "configured_validator",
    "ValidatorConfig",
    "resolve_config",
    "RequestValidatorError",
    "ValidationError",
    "MissingUploadError",
    "NoCurrentFieldError",
]
