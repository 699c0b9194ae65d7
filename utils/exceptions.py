"""
应用异常定义

所有业务异常继承自AppException，由main.py中注册的异常处理器统一转换为JSON响应：
- NotFoundError: 目标ID不存在（404）
- ConflictError: 唯一约束冲突，key+locale 或标签名称（422，带字段级错误信息）
- InvalidInputError: 边界层校验失败，如引用了不存在的标签（422）
- InfrastructureError: 数据库不可用或超时（503），不自动重试
"""
# 标准库导包
from typing import Any, Dict, Optional


class AppException(Exception):
    """应用异常基类"""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为响应体"""
        return {
            "success": False,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(AppException):
    """资源不存在"""

    def __init__(self, resource: str, identifier: Any = None):
        msg = f"{resource} not found."
        details: Dict[str, Any] = {"resource": resource}
        if identifier is not None:
            details["id"] = identifier
        super().__init__(
            msg,
            f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            404,
            details
        )


class ConflictError(AppException):
    """唯一约束冲突"""

    def __init__(self, resource: str, field: str, message: str):
        self.field = field
        super().__init__(
            message,
            f"{resource.upper().replace(' ', '_')}_CONFLICT",
            422,
            {"resource": resource, "field": field}
        )

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["errors"] = {self.field: [self.message]}
        return result


class InvalidInputError(AppException):
    """请求参数校验失败（Pydantic自动校验之外的部分）"""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(
            message,
            "VALIDATION_ERROR",
            422,
            {"field": field}
        )

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["errors"] = {self.field: [self.message]}
        return result


class InfrastructureError(AppException):
    """存储不可用"""

    def __init__(self, message: str = "Storage is unavailable."):
        super().__init__(
            message,
            "INFRASTRUCTURE_ERROR",
            503
        )
