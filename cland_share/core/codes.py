"""结构化状态码：在 11 位十进制整数中编码 类别/子系统/明细 三段信息。

布局为 ``CCCSSSSDDDD``：

* ``CCC``  类别，只允许 200 / 400 / 500；
* ``SSSS`` 子系统编号，0-9999；
* ``DDDD`` 明细编号，0-9999。

例如 ``40010010001`` 表示 category=400、system=1001、detail=1。
裸的 200 / 400 / 500 作为简写同样合法，等价于 system、detail 均为 0。
"""

from __future__ import annotations

from dataclasses import dataclass

CATEGORIES = frozenset({200, 400, 500})

CATEGORY_MULTIPLIER = 100_000_000
SYSTEM_MULTIPLIER = 10_000
PART_MAX = 9999


class CodeError(ValueError):
    """结构化状态码的编解码错误基类。"""


class InvalidLengthError(CodeError):
    """位数不是 3、4 或 11 位。目前的解析路径不会触发。"""

    def __init__(self) -> None:
        super().__init__("invalid length: expected 3,4 or 11 digits")


class InvalidNumberError(CodeError):
    def __init__(self) -> None:
        super().__init__("invalid numeric value")


class InvalidCategoryError(CodeError):
    def __init__(self, value: object) -> None:
        super().__init__(f"invalid category: {value}")
        self.value = value


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_parts(category: object, system: object, detail: object) -> None:
    if not _is_int(category) or category not in CATEGORIES:
        raise InvalidCategoryError(category)
    for part in (system, detail):
        if not _is_int(part) or not 0 <= part <= PART_MAX:
            raise InvalidNumberError()


@dataclass(frozen=True)
class StructuredCode:
    """拆分后的状态码三段值。"""

    category: int
    system: int
    detail: int

    def __post_init__(self) -> None:
        _check_parts(self.category, self.system, self.detail)

    @property
    def code(self) -> int:
        return self.category * CATEGORY_MULTIPLIER + self.system * SYSTEM_MULTIPLIER + self.detail

    @classmethod
    def from_code(cls, code: int) -> "StructuredCode":
        return parse_code(code)

    def __str__(self) -> str:
        return f"{self.category:03}{self.system:04}{self.detail:04}"


def make_code(category: int, system: int, detail: int) -> int:
    """由三段值生成 11 位状态码。

    :raises InvalidCategoryError: 类别不在 200 / 400 / 500 之中。
    :raises InvalidNumberError: ``system`` 或 ``detail`` 超出 0-9999。
    """
    return StructuredCode(category=category, system=system, detail=detail).code


def parse_code(code: int) -> StructuredCode:
    """把整数状态码还原为 :class:`StructuredCode`，支持简写与完整 11 位两种形式。"""
    if not _is_int(code):
        raise InvalidNumberError()
    if code in CATEGORIES:
        return StructuredCode(category=code, system=0, detail=0)
    if code < 0:
        raise InvalidNumberError()

    category = code // CATEGORY_MULTIPLIER
    system = (code // SYSTEM_MULTIPLIER) % SYSTEM_MULTIPLIER
    detail = code % SYSTEM_MULTIPLIER
    # 超过 11 位的输入只会体现在类别上，由白名单拦截
    if category not in CATEGORIES:
        raise InvalidCategoryError(category)
    return StructuredCode(category=category, system=system, detail=detail)


def is_valid_code(code: int) -> bool:
    try:
        parse_code(code)
    except CodeError:
        return False
    return True


encode = make_code
decode = parse_code
is_valid = is_valid_code

__all__ = [
    "CATEGORIES",
    "CodeError",
    "InvalidCategoryError",
    "InvalidLengthError",
    "InvalidNumberError",
    "StructuredCode",
    "decode",
    "encode",
    "is_valid",
    "is_valid_code",
    "make_code",
    "parse_code",
]
