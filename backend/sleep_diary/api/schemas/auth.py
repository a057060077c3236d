from pydantic import BaseModel, Field
from typing import List


class RegisterRequest(BaseModel):
    """Request model for user registration"""
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    sec_q: int = Field(..., alias="secQ", description="Index of the chosen security question")
    sec_a: str = Field(..., alias="secA", description="Answer to the security question")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "username": "alice",
                "password": "pass1",
                "secQ": 0,
                "secA": "Rex"
            }
        }


class LoginRequest(BaseModel):
    """Request model for user login"""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    """Returned by register and login"""
    token: str
    username: str
    is_admin: bool = Field(..., alias="isAdmin")

    class Config:
        populate_by_name = True


class RecoverQuestionRequest(BaseModel):
    username: str = Field(..., min_length=1)


class RecoverQuestionResponse(BaseModel):
    question: str


class RecoverVerifyRequest(BaseModel):
    """Answer the security question and set a new password"""
    username: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    new_password: str = Field(..., alias="newPassword", min_length=1)

    class Config:
        populate_by_name = True


class ChangePasswordRequest(BaseModel):
    """Request model for changing password"""
    current_password: str = Field(..., alias="currentPassword", min_length=1)
    new_password: str = Field(..., alias="newPassword", min_length=1)

    class Config:
        populate_by_name = True


class AdminResetPasswordRequest(BaseModel):
    username: str = Field(..., min_length=1)
    new_password: str = Field(..., alias="newPassword", min_length=1)

    class Config:
        populate_by_name = True


class SecurityQuestionsResponse(BaseModel):
    questions: List[str]
