class PortalError(Exception):
    """门户系统基础异常类，to_dict() 即 API 错误信封"""
    def __init__(self, message, code=500, error='Internal Server Error', payload=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.error = error
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['success'] = False
        rv['error'] = self.error
        rv['message'] = self.message
        return rv


class ValidationError(PortalError):
    """请求参数校验失败"""
    def __init__(self, message="Invalid input", error='Invalid input', payload=None):
        super().__init__(message, code=400, error=error, payload=payload)


class UnauthorizedError(PortalError):
    """未登录"""
    def __init__(self, message="Unauthorized", payload=None):
        super().__init__(message, code=401, error='Unauthorized', payload=payload)


class PermissionDenied(PortalError):
    """权限不足"""
    def __init__(self, message="Access denied", payload=None):
        super().__init__(message, code=403, error='Forbidden', payload=payload)


class NotFoundError(PortalError):
    """资源不存在"""
    def __init__(self, message="Not found", error='Not found', payload=None):
        super().__init__(message, code=404, error=error, payload=payload)


class ConflictError(PortalError):
    """唯一性冲突（slug、邮箱）"""
    def __init__(self, message="Conflict", error='Conflict', payload=None):
        super().__init__(message, code=409, error=error, payload=payload)


class CategoryInUseError(PortalError):
    """分类下仍有文章，禁止删除"""
    def __init__(self, message, article_count):
        super().__init__(message, code=400, error='Category has articles',
                         payload={'articleCount': article_count})
        self.article_count = article_count
