"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在 Actor 边界或 API 层做统一捕获与用户提示。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "STORE_READ_ERROR"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 session_id、provider 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class ValidationError(BusinessError):
    """输入为空或格式错误，在访问存储和生成服务之前被拒绝。"""


class StorageError(BusinessError):
    """持久化层不可用或读写失败，当前操作中止。"""

    def __init__(self, code: str, message: str, http_status: int = 500, **extra):
        super().__init__(code, message, http_status, **extra)


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、超时等。"""


class ApiError(BusinessError):
    """生成服务返回非 2xx 或 success=false 时抛出。"""


class QuotaExceededError(BusinessError):
    """生成服务的用量配额已耗尽。"""


class ConfigurationError(BusinessError):
    """配置缺失，例如未设置 API token。"""
