from typing import Optional
from datetime import datetime
from pydantic import BaseModel
from app.models.enums import RequestStatus
from app.schemas.skill import SkillOut
from app.schemas.user import UserSummary


class RequestOut(BaseModel):
    id: str
    from_id: str
    to_id: str
    skill_id: str
    status: RequestStatus
    created_at: datetime
    updated_at: datetime


class RequestDetail(RequestOut):
    from_user: Optional[UserSummary] = None
    to_user: Optional[UserSummary] = None
    skill: Optional[SkillOut] = None
