from Sociocrates.dto.UserDto import UserDto
from Sociocrates.share.BaseDto import BaseDto


class AuthResultDto(BaseDto):
    """
    注册或登录成功后返回的用户信息与访问令牌
    """

    user: UserDto
    token: str
