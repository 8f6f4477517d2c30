"""
PasswordResetTicket Entity

Single-use password reset tickets, keyed by email.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class PasswordResetTicket(SQLModel, table=True):
    """
    PasswordResetTicket entity - proves control of an email address.

    Business Rules:
    - Bound to an email, not a user row (no enumeration on request)
    - Token is SHA-256 hash of a secure random string
    - Expires after 60 minutes by default
    - Deleted when redeemed; a newer request deletes older tickets
    """

    __tablename__ = "password_reset_tickets"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: str = Field(max_length=255, index=True)
    token_hash: str = Field(max_length=64)  # SHA-256 output

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_password_reset_ticket_expires_at", "expires_at"),)
