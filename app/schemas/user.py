from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    email: EmailStr
    name: str


class UserCreate(UserBase):
    password: str = Field(min_length=1)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserOut(UserBase):
    id: str
    isAdmin: bool = False


class SessionOut(BaseModel):
    token: str
    user: UserOut
