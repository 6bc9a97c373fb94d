"""枚举定义：约束状态码类别的可选值。"""

from enum import IntEnum

from .codes import InvalidCategoryError, StructuredCode


class ErrorCode(IntEnum):
    """常用的简写状态码，取值即结构化状态码的类别。"""

    OK = 200
    BAD_REQUEST = 400
    INTERNAL = 500

    def as_structured(self) -> StructuredCode:
        return StructuredCode(category=int(self), system=0, detail=0)

    @classmethod
    def from_category(cls, category: int) -> "ErrorCode":
        try:
            return cls(category)
        except ValueError as exc:
            raise InvalidCategoryError(category) from exc
