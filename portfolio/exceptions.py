class PortfolioException(Exception):
    """作品集系统基础异常类"""
    def __init__(self, message, code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['error'] = self.message
        rv['code'] = self.code
        rv['success'] = False
        return rv

class ValidationError(PortfolioException):
    """数据校验错误 (不会发送到后端)"""
    def __init__(self, message="Invalid data", payload=None):
        super().__init__(message, code=400, payload=payload)

class PermissionDenied(PortfolioException):
    """未登录或权限不足"""
    def __init__(self, message="Access denied", payload=None):
        super().__init__(message, code=403, payload=payload)

class NotFound(PortfolioException):
    """记录不存在"""
    def __init__(self, message="Not found", payload=None):
        super().__init__(message, code=404, payload=payload)

class BackendConfigError(PortfolioException):
    """后端环境变量缺失，在创建客户端时同步抛出"""
    def __init__(self, message="Backend is not configured", payload=None):
        super().__init__(message, code=500, payload=payload)

class UploadError(PortfolioException):
    """图片上传失败 (本地校验或存储错误)"""
    def __init__(self, message="Failed to upload image", payload=None):
        super().__init__(message, code=400, payload=payload)

class AuthenticationRequired(PortfolioException):
    """后台路由需要先登录"""
    def __init__(self, message="Authentication required", payload=None):
        super().__init__(message, code=401, payload=payload)
