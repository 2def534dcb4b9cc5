from pydantic import BaseModel


class UserSummary(BaseModel):
    """Public part of a user returned on login"""
    email: str
    role: str
    name: str


class LoginResponse(BaseModel):
    """Login response"""
    message: str
    user: UserSummary
