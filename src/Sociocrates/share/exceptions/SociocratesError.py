class SociocratesError(Exception):
    """
    所有业务异常的基类。

    每个子类对应一种可由调用方恢复的错误类型，
    HTTP 层通过 `kind` 和 `status_code` 将其映射为响应。
    """

    kind: str = "error"
    status_code: int = 500
    default_message: str = "发生了一个未知错误。"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(SociocratesError):
    """缺少或无法验证身份凭据。"""

    kind = "unauthenticated"
    status_code = 401
    default_message = "需要有效的访问令牌。"


class Forbidden(SociocratesError):
    """调用者身份有效，但无权执行此操作。"""

    kind = "forbidden"
    status_code = 403
    default_message = "抱歉，你没有权限执行此操作。"


class NotFound(SociocratesError):
    kind = "not_found"
    status_code = 404
    default_message = "未找到请求的资源。"


class InvalidState(SociocratesError):
    """提案状态不允许执行请求的操作。"""

    kind = "invalid_state"
    status_code = 409
    default_message = "提案当前状态不允许此操作。"


class InvalidStep(SociocratesError):
    """请求的步骤不存在，或与提案当前步骤不符。"""

    kind = "invalid_step"
    status_code = 400
    default_message = "提案当前不处于该步骤。"


class ValidationError(SociocratesError):
    kind = "validation_error"
    status_code = 400
    default_message = "提交的内容格式不正确。"


class DuplicateSubmission(SociocratesError):
    kind = "duplicate_submission"
    status_code = 409
    default_message = "你已经在此步骤提交过内容。"


class CapacityExceeded(SociocratesError):
    kind = "capacity_exceeded"
    status_code = 409
    default_message = "此步骤的提交数量已达上限。"


class IncompleteData(SociocratesError):
    """在同意轮结束之前请求结果分类。"""

    kind = "incomplete_data"
    status_code = 409
    default_message = "提案尚未进入记录结果步骤，无法计算结果。"


class Conflict(SociocratesError):
    """并发修改导致比较并交换失败。"""

    kind = "conflict"
    status_code = 409
    default_message = "提案状态已被其他操作修改，请刷新后重试。"
