from app.models.api.base import ApiModel


class RegisterRequest(ApiModel):
    email: str
    password: str
    name: str
    timezone: str = "UTC"


class LoginRequest(ApiModel):
    email: str
    password: str


class RefreshRequest(ApiModel):
    refresh_token: str
