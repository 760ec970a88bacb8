"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: app.py
@DateTime: 2026-02-09
@Docs: FastAPI app validating query, path, form and upload fields.
校验查询、路径、表单与上传字段的 FastAPI 示例应用。
"""

from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from fastapi_request_validator import RequestValidatorError, Validator, request_validator

ALLOWED_AVATAR_EXTENSIONS = {"png", "jpg", "jpeg"}


def create_app() -> FastAPI:
    """Create the example app.
    创建示例应用。

    Returns:
        FastAPI app instance / FastAPI 应用实例。
    """
    app = FastAPI(title="Request Validator Example")

    @app.exception_handler(RequestValidatorError)
    async def _request_validator_error_handler(request: Request, exc: RequestValidatorError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message, "error_code": exc.error_code, "details": exc.details},
        )

    @app.get("/products/{product_id}")
    async def get_product(v: Validator = Depends(request_validator)) -> dict[str, Any]:
        """Path id plus optional query filters / 路径 id 与可选查询过滤。"""
        product_id = v.param("product_id").required().int32()
        currency = v.query("currency").optional().string()
        err = v.done()
        if err is not None:
            raise err
        return {"id": product_id, "currency": currency or "USD"}

    @app.post("/products")
    async def create_product(v: Validator = Depends(request_validator)) -> dict[str, Any]:
        """urlencoded form / urlencoded 表单。"""
        name = v.form("name").required().string()
        price = v.form("price").required().float32()
        stock = v.form("stock").optional().int32()
        err = v.done()
        if err is not None:
            raise err
        return {"name": name, "price": price, "stock": stock}

    @app.post("/profiles")
    async def create_profile(v: Validator = Depends(request_validator)) -> dict[str, Any]:
        """multipart form with an avatar upload / 带头像上传的 multipart 表单。"""
        nickname = v.form_data("nickname").required().string()
        avatar = v.multipart("avatar").required().file()
        if avatar is not None and avatar.extension not in ALLOWED_AVATAR_EXTENSIONS:
            v.error(f"avatar must be one of {', '.join(sorted(ALLOWED_AVATAR_EXTENSIONS))}")
        err = v.done()
        if err is not None:
            raise err
        assert avatar is not None
        return {"nickname": nickname, "avatar": avatar.name, "extension": avatar.extension}

    return app


app = create_app()
