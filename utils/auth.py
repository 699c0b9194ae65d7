"""
认证工具
校验调用方携带的API令牌
"""
# 标准库导包
import hmac
import logging
from typing import Optional

# 第三方库导包
from fastapi import Header, HTTPException, status

# 项目内部导包
from config import settings

# 配置日志
logger = logging.getLogger(__name__)


def _extract_token(authorization: Optional[str], x_api_token: Optional[str]) -> Optional[str]:
    """从 Authorization: Bearer 或 X-Api-Token 中取出令牌"""
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            return credentials.strip()
    if x_api_token:
        return x_api_token.strip()
    return None


async def verify_api_token(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    x_api_token: Optional[str] = Header(None, alias="X-Api-Token")
) -> Optional[str]:
    """
    校验API令牌

    未配置API_TOKEN时（开发阶段）直接放行

    Args:
        authorization: Authorization header值
        x_api_token: X-Api-Token header值

    Returns:
        通过校验的令牌，未启用校验时为None
    """
    if not settings.API_TOKEN:
        return None

    token = _extract_token(authorization, x_api_token)
    if not token or not hmac.compare_digest(token, settings.API_TOKEN):
        logger.warning("API令牌校验失败")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthenticated.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return token
