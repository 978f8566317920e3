from typing import Optional
import sqlalchemy as sa
from sqlmodel import Field, SQLModel
from app.models.base import CreatedModel, IDModel


class Skill(IDModel, CreatedModel, SQLModel, table=True):
    __tablename__ = 'skills'

    title: str
    description: Optional[str] = Field(default=None, sa_column=sa.Column(sa.Text()))
    video_path: str
    owner_id: str = Field(index=True)
