"""异常处理模块：定义统一的业务异常，并将其转换为标准响应结构。"""

from typing import Any, Union

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cland_share.core.codes import CodeError, parse_code
from cland_share.core.enums import ErrorCode
from cland_share.core.logger import get_request_id, logger
from cland_share.core.responses import create_response, param_error, system_error
from cland_share.middleware.request_id import REQUEST_ID_HEADER


class AppException(HTTPException):
    """携带结构化状态码的业务异常，HTTP 状态取状态码的类别部分。

    ``code`` 非法时直接抛出 :class:`CodeError`，避免把错误码带到响应里。
    """

    def __init__(self, msg: str, code: Union[int, ErrorCode] = ErrorCode.BAD_REQUEST, data: Any = None) -> None:
        structured = parse_code(int(code))
        super().__init__(status_code=structured.category, detail=msg)
        self.code = int(code)
        self.msg = msg
        self.data = data


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    logger.info(
        "%s %s -> %s %s",
        request.method,
        request.url.path,
        exc.code,
        exc.msg,
        extra={"response_code": exc.code},
    )
    return JSONResponse(status_code=exc.status_code, content=create_response(exc.msg, exc.data, exc.code))


async def code_error_handler(request: Request, exc: CodeError) -> JSONResponse:
    """未被业务代码处理的状态码校验失败，统一视为参数错误。"""
    logger.warning("%s %s -> invalid code: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=param_error(str(exc)))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """将框架抛出的 ``HTTPException``（含路由 404、405）转换为统一响应格式。"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_response(str(exc.detail), getattr(exc, "data", None), exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """统一处理请求体验证失败的场景。"""

    def _serialize(obj: Any) -> Any:
        if isinstance(obj, Exception):
            return str(obj)
        if isinstance(obj, dict):
            return {key: _serialize(value) for key, value in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [_serialize(item) for item in obj]
        return obj

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=create_response(
            "请求参数验证失败",
            _serialize(exc.errors()),
            ErrorCode.BAD_REQUEST.value,
        ),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """兜底处理：将未捕获异常转换为标准的 500 响应结构。"""
    logger.error("Unhandled exception in %s %s", request.method, request.url.path, exc_info=exc)
    # 该响应由最外层中间件发出，不经过 RequestIdMiddleware 的响应头注入
    request_id = get_request_id()
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=system_error("服务器内部错误"),
        headers={REQUEST_ID_HEADER: request_id} if request_id else None,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """在 FastAPI 应用上注册全部统一响应处理器。"""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(CodeError, code_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
