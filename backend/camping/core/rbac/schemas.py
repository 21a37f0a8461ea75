from pydantic import BaseModel, EmailStr, Field

from camping.core.rbac.models import Department, Role


class UserCreate(BaseModel):
    name: str = Field(..., max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1)
    department: Department
    role: Role = Role.USER


class UserRead(BaseModel):
    model_config = {"from_attributes": True}
    name: str
    email: str
    department: Department
    role: Role


class RoleUpdate(BaseModel):
    role: Role


class UserMutationRead(BaseModel):
    user: UserRead
    warning: str | None = None
