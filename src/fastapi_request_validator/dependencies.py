"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: dependencies.py
@DateTime: 2026-02-09
@Docs: FastAPI dependencies for the request validator.
请求校验器的 FastAPI 依赖。

Examples:
        >>> from fastapi import Depends, FastAPI
        >>> from fastapi_request_validator import Validator, request_validator
        >>> app = FastAPI()
        >>> @app.post("/people")
        ... async def create(v: Validator = Depends(request_validator)) -> dict:
        ...     age = v.form("age").required().int32()
        ...     err = v.done()
        ...     if err is not None:
        ...         raise err
        ...     return {"age": age}
"""

from collections.abc import Awaitable, Callable

from fastapi import Request

from fastapi_request_validator.config import ValidatorConfig
from fastapi_request_validator.validator import Validator


async def request_validator(request: Request) -> Validator:
    """
    Provide a fresh validator bound to the current request.
    为当前请求提供一个全新的校验器。

    Args:
        request: Incoming request (injected by FastAPI).
            传入请求（由 FastAPI 注入）。

    Returns:
        Validator: Empty validator.
        Validator: 空校验器。
    """
    return await Validator.from_request(request)


def configured_validator(config: ValidatorConfig) -> Callable[[Request], Awaitable[Validator]]:
    """
    Build a dependency that creates validators with ``config``.
    构建使用 ``config`` 创建校验器的依赖。

    Args:
        config: Validator configuration.
            校验器配置。

    Returns:
        Callable: FastAPI dependency.
        Callable: FastAPI 依赖。
    """

    async def _dependency(request: Request) -> Validator:
        return await Validator.from_request(request, config=config)

    return _dependency
