from Sociocrates.share.BaseDto import BaseDto


class LoginQo(BaseDto):
    email: str
    password: str
