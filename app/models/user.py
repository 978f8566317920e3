from sqlmodel import Field, SQLModel
from app.models.base import IDModel, TimestampModel


class User(IDModel, TimestampModel, SQLModel, table=True):
    __tablename__ = 'users'

    name: str
    email: str = Field(index=True, unique=True)
    hashed_password: str
    mobile: str = ''
    age: int = 0
    profession: str = ''
    is_active: bool = True
