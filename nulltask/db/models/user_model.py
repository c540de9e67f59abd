import uuid

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    DateTime,
    Identity,
    Index,
    SmallInteger,
    String,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from nulltask.db.base import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("age >= 0", name="ck_users_age_non_negative"),
        UniqueConstraint("member_number", name="uq_users_member_number"),
        # one live row per email; soft-deleted rows release the address
        Index(
            "ix_users_email_live",
            "email",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False)
    password = Column(String(255), nullable=False, doc="bcrypt hash")
    age = Column(SmallInteger, nullable=False)
    member_number = Column(BigInteger, Identity(always=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    tasks = relationship("Task", back_populates="owner")

    def __repr__(self):
        return f"<User(email={self.email}, member_number={self.member_number})>"
