from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Identity, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from nulltask.db.base import Base


class Task(Base):
    """Schema only: no endpoint reads or writes tasks yet."""
    __tablename__ = "tasks"

    id = Column(BigInteger, Identity(), primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(32), nullable=False, server_default="pending")
    due_date = Column(DateTime(timezone=True), nullable=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(BigInteger, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    reminder = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    owner = relationship("User", back_populates="tasks")
