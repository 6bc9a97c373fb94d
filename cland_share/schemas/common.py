"""通用响应封装模型。"""

from __future__ import annotations

from typing import Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, computed_field, model_serializer

from cland_share.core.codes import InvalidNumberError, StructuredCode, parse_code
from cland_share.core.enums import ErrorCode

T = TypeVar("T")

SUCCESS_MESSAGE = "Success"


class ResponseEnvelope(BaseModel, Generic[T]):
    """系统统一的响应外层结构。

    ``data`` 为 ``None`` 时序列化结果中不包含该字段，而不是输出 ``null``。
    """

    code: Union[int, str]
    msg: str
    data: Optional[T] = None

    @model_serializer(mode="wrap")
    def serialize_envelope(self, handler: SerializerFunctionWrapHandler):
        payload = handler(self)
        if self.data is None:
            payload.pop("data", None)
        return payload

    @classmethod
    def success(cls, data: T) -> "ResponseEnvelope[T]":
        return cls(code=ErrorCode.OK.value, msg=SUCCESS_MESSAGE, data=data)

    @classmethod
    def ok(cls) -> "ResponseEnvelope[T]":
        """无数据的成功响应。"""
        return cls(code=ErrorCode.OK.value, msg=SUCCESS_MESSAGE)

    @classmethod
    def error(cls, code: Union[int, str], msg: str) -> "ResponseEnvelope[T]":
        return cls(code=code, msg=msg)

    @classmethod
    def error_with_data(cls, code: Union[int, str], msg: str, data: T) -> "ResponseEnvelope[T]":
        return cls(code=code, msg=msg, data=data)

    def parsed_code(self) -> StructuredCode:
        """解析 ``code`` 字段，兼容字符串形式的状态码。"""
        code = self.code
        if isinstance(code, str):
            if not code.isdecimal():
                raise InvalidNumberError()
            code = int(code)
        return parse_code(code)


class Pagination(BaseModel, Generic[T]):
    """分页结果。``pages`` 始终由 ``total`` 与 ``size`` 推导，不接受外部赋值。"""

    total: int = Field(ge=0)
    page: int
    size: int = Field(ge=0)
    list: List[T] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def pages(self) -> int:
        if self.size == 0:
            return 0
        return (self.total + self.size - 1) // self.size

    @classmethod
    def new(cls, total: int, page: int, size: int, items: Optional[List[T]] = None) -> "Pagination[T]":
        return cls(total=total, page=page, size=size, list=items if items is not None else [])
