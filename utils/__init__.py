"""
Utils layer
工具函数层
"""

from .auth import verify_api_token
from .exceptions import (
    AppException,
    NotFoundError,
    ConflictError,
    InvalidInputError,
    InfrastructureError
)

__all__ = [
    "verify_api_token",
    "AppException",
    "NotFoundError",
    "ConflictError",
    "InvalidInputError",
    "InfrastructureError",
]
