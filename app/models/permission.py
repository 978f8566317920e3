from sqlmodel import Field, SQLModel
from app.models.base import CreatedModel


class Permission(CreatedModel, SQLModel, table=True):
    __tablename__ = 'permissions'

    user_id: str = Field(primary_key=True)
    skill_id: str = Field(primary_key=True, index=True)
