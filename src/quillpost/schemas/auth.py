"""Account and login schemas."""

from pydantic import BaseModel, ConfigDict, Field


class AuthRequest(BaseModel):
    """Credentials submitted to register or log in."""

    username: str = Field(..., min_length=1, description="Account name, 3-20 characters once trimmed")
    password: str = Field(..., min_length=1, max_length=100, description="Plaintext password")


class UserResponse(BaseModel):
    """Public view of an account. Never includes the password digest."""

    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    token: str = Field(..., description="Signed bearer token")
    user: UserResponse
