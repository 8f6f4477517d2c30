"""
Profile Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel


class UpdateProfileCommand(BaseModel):
    """Fields left as None are not changed"""

    name: Optional[str] = None
    email: Optional[str] = None


class ChangePasswordResponse(BaseModel):
    """Response for change password use case"""

    status: str
    message: str
    revoked_count: int
