"""团队内部共享库：结构化状态码与统一响应结构。"""

from cland_share.core.codes import (
    CodeError,
    InvalidCategoryError,
    InvalidLengthError,
    InvalidNumberError,
    StructuredCode,
    is_valid_code,
    make_code,
    parse_code,
)
from cland_share.core.config import Settings, get_settings
from cland_share.core.enums import ErrorCode
from cland_share.schemas.common import Pagination, ResponseEnvelope

__version__ = "0.1.0"

__all__ = [
    "CodeError",
    "ErrorCode",
    "InvalidCategoryError",
    "InvalidLengthError",
    "InvalidNumberError",
    "Pagination",
    "ResponseEnvelope",
    "Settings",
    "StructuredCode",
    "get_settings",
    "is_valid_code",
    "make_code",
    "parse_code",
]
