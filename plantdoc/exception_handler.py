"""
统一异常处理器。

挂到 DRF 的 EXCEPTION_HANDLER setting 上。
所有失败响应前端都能用同一套逻辑判断：
  response.success === false  → 出问题了，展示 response.error
  没有 success 字段 / success === true → 成功

统一错误响应格式：
{
    "success": false,
    "type":    "validation_error" | "upstream_error",
    "code":    "REGION_REQUIRED",
    "message": "Region is required",
    "error":   "Region is required",   // 与 message 相同，前端直接展示
    "detail":  { ... }                 // 可选
}
"""

from django.http import JsonResponse
from rest_framework.views import exception_handler as drf_default_handler

from .exceptions import BaseAppException


def build_error_body(exc):
    """BaseAppException → 统一格式的 dict。"""
    body = {
        'success': False,
        'type': exc.type,
        'code': exc.code,
        'message': exc.message,
        'error': exc.message,
    }
    if exc.detail is not None:
        body['detail'] = exc.detail
    return body


def unified_exception_handler(exc, context):
    """
    DRF exception handler entry point.

    优先级：
    1. BaseAppException 及其子类 → 统一格式
    2. 其他异常（ParseError 等 DRF 自带异常）→ 交给 DRF 默认处理
    """

    # --- 1. 我们自己的异常体系 ---
    if isinstance(exc, BaseAppException):
        return JsonResponse(build_error_body(exc), status=exc.http_status)

    # --- 2. 其他的交给 DRF 默认处理 ---
    return drf_default_handler(exc, context)
