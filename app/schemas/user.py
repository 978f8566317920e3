from typing import Optional
from pydantic import BaseModel


class UserOut(BaseModel):
    id: str
    name: str
    email: str


class MeOut(UserOut):
    profession: str


class UserSummary(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    profession: Optional[str] = None
