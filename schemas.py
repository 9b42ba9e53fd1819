from pydantic import AfterValidator, BaseModel, ConfigDict, Field, confloat, constr
from datetime import date, datetime
from typing import Annotated, Optional

from security import BCRYPT_MAX_BYTES, password_too_long


def check_password_length(password: str) -> str:
    if password_too_long(password):
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    return password


Password = Annotated[constr(min_length=1), AfterValidator(check_password_length)]


class UserCreate(BaseModel):
    name: constr(strip_whitespace=True, min_length=1)
    email: constr(strip_whitespace=True, min_length=3)
    password: Password


class UserLogin(BaseModel):
    email: constr(strip_whitespace=True, min_length=1)
    password: constr(min_length=1)


class UserUpdate(BaseModel):
    name: Optional[constr(strip_whitespace=True, min_length=1)] = None
    email: Optional[constr(strip_whitespace=True, min_length=3)] = None
    password: Optional[Password] = None


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    access_token: str = Field(alias="accessToken")

    model_config = ConfigDict(populate_by_name=True)


class CurrentUser(BaseModel):
    id: str
    email: Optional[str] = None


class ExpenseCreate(BaseModel):
    title: constr(strip_whitespace=True, min_length=1)
    amount: confloat(allow_inf_nan=False)
    date: date
    category: Optional[str] = None
    receipt_image: Optional[str] = Field(default=None, alias="receiptImage")

    model_config = ConfigDict(populate_by_name=True)


class ExpenseResponse(BaseModel):
    id: str
    title: str
    amount: float
    date: date
    category: Optional[str] = None
    receipt_image: Optional[str] = Field(default=None, alias="receiptImage")
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class HealthStatus(BaseModel):
    status: str
    timestamp: datetime
    message: str
    version: str
