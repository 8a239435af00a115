from pydantic import Field

from Sociocrates.share.BaseDto import BaseDto


class RegisterQo(BaseDto):
    """
    注册新用户的查询对象
    """

    email: str = Field(..., description="登录邮箱")
    name: str = Field(..., description="显示名称")
    password: str = Field(..., description="登录密码")
