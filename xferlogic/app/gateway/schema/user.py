from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RegisterParam(BaseModel):
    """注册参数"""

    email: str = Field(description='Login email')
    password: str = Field(min_length=1, description='Plain text password')

    @field_validator('email')
    @classmethod
    def check_email(cls, v: str) -> str:
        """邮箱去除首尾空白后不能为空"""
        v = v.strip()
        if not v:
            raise ValueError('email must not be empty')
        return v


class LoginParam(BaseModel):
    """登录参数"""

    email: str = Field(description='Login email')
    password: str = Field(description='Plain text password')


class RegisterResult(BaseModel):
    success: bool = True


class LoginResult(BaseModel):
    token: str = Field(description='Bearer access token')


class UserProfile(BaseModel):
    """User profile without the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    created_time: datetime
