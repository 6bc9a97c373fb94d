"""响应封装：构建统一的 ``code`` / ``msg`` / ``data`` 返回结构。"""

from typing import Any, Union

from cland_share.core.config import get_settings
from cland_share.core.enums import ErrorCode
from cland_share.schemas.common import SUCCESS_MESSAGE, ResponseEnvelope

Code = Union[int, str]


def create_response(msg: str, data: Any = None, code: Code = ErrorCode.OK.value) -> dict[str, Any]:
    """按照 ``msg``、``data``、``code`` 组合出统一响应体，``data`` 为空时省略。"""
    if get_settings().response_code_as_string:
        code = str(int(code)) if isinstance(code, int) else str(code)
    envelope: ResponseEnvelope[Any] = ResponseEnvelope(code=code, msg=msg, data=data)
    return envelope.model_dump(mode="json")


def success(data: Any) -> dict[str, Any]:
    return create_response(SUCCESS_MESSAGE, data)


def ok() -> dict[str, Any]:
    return create_response(SUCCESS_MESSAGE)


def error(code: Code, msg: str) -> dict[str, Any]:
    return create_response(msg, code=code)


def error_data(code: Code, msg: str, data: Any) -> dict[str, Any]:
    return create_response(msg, data, code)


def param_error(msg: str) -> dict[str, Any]:
    """参数错误，使用 400 类别的简写码。"""
    return create_response(msg, code=ErrorCode.BAD_REQUEST.value)


def system_error(msg: str) -> dict[str, Any]:
    """系统错误，使用 500 类别的简写码。"""
    return create_response(msg, code=ErrorCode.INTERNAL.value)
