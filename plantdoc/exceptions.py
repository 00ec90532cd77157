"""
统一异常体系。

所有业务异常继承 BaseAppException，包含：
- type:        错误类型标识（validation_error / upstream_error）
- code:        业务错误码（IMAGE_REQUIRED / REGION_REQUIRED / ...）
- message:     人类可读的描述
- detail:      可选的附加信息（dict / list / None）
- http_status: HTTP 状态码

View 层只需 raise，exception_handler 统一捕获并格式化响应。

注意：/api/disease 和 /api/identify 的上游失败不走异常，
而是在 services.py 里降级成 error-shaped record（HTTP 200）。
"""


class BaseAppException(Exception):
    """所有业务异常的基类。"""

    type = 'error'
    code = 'UNKNOWN_ERROR'
    http_status = 500

    def __init__(self, message, code=None, detail=None, http_status=None):
        self.message = message
        if code is not None:
            self.code = code
        if http_status is not None:
            self.http_status = http_status
        self.detail = detail
        super().__init__(message)


class ValidationError(BaseAppException):
    """输入验证失败（缺 image / region 等）。400。"""

    type = 'validation_error'
    code = 'VALIDATION_ERROR'
    http_status = 400


class UpstreamError(BaseAppException):
    """
    模型服务调用失败，或返回的内容无法解析成结构化数据。

    只用于需要以失败 envelope 返回给前端的路径（/api/suggestions），500。
    """

    type = 'upstream_error'
    code = 'UPSTREAM_ERROR'
    http_status = 500
