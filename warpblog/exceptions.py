class ApiError(Exception):
    """API 基础异常类，由全局错误处理器转换为 JSON 响应"""
    def __init__(self, message, code=500, error='internal:error', data=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.error = error
        self.data = data

    def to_dict(self):
        return {
            'error': self.error,
            'data': self.data,
            'message': self.message,
            'code': self.code,
            'success': False
        }

class NotFound(ApiError):
    """资源不存在 (或对当前用户不可见)"""
    def __init__(self, entity, message=None):
        super().__init__(message or f'{entity} not found.', code=404,
                         error='resource:notfound', data=entity)

class InvalidParameter(ApiError):
    """参数缺失或非法"""
    def __init__(self, name, message=None):
        super().__init__(message or f'Invalid parameter: {name}', code=400,
                         error='parameter:invalid', data=name)

class PermissionDenied(ApiError):
    """权限不足"""
    def __init__(self, message="Permission denied.", data=None):
        super().__init__(message, code=403, error='permission:denied', data=data)

class ResourceConflict(ApiError):
    """资源仍被引用，无法操作"""
    def __init__(self, entity, message=None):
        super().__init__(message or f'{entity} is in use.', code=409,
                         error='resource:conflict', data=entity)

class InternalError(ApiError):
    """存储或其他未预期的内部错误"""
    def __init__(self, message="Internal server error.", data=None):
        super().__init__(message, code=500, error='internal:error', data=data)
