"""
Routers layer
接口路由层
"""
