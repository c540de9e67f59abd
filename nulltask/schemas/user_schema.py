from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

# bounded by the users columns: name varchar(255), age smallint
NAME_MAX_LENGTH = 255
MIN_AGE = 18
MAX_AGE = 255


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    email: EmailStr
    age: int = Field(..., ge=MIN_AGE, le=MAX_AGE)


class UserCreate(UserBase):
    password: str = Field(..., min_length=6)


class UserUpdate(BaseModel):
    """Partial payload: only the fields sent are applied."""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    age: Optional[int] = None


class UserCandidate(UserBase):
    # set only when the update carries a new plaintext password
    password: Optional[str] = Field(None, min_length=6)


class UserOut(BaseModel):
    id: UUID
    name: str
    email: str
    age: int
    member_number: int
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class MessageOut(BaseModel):
    message: str
