from typing import Optional
from datetime import datetime
from pydantic import BaseModel
from app.schemas.user import UserSummary


class SkillOut(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    video_path: str
    owner_id: str
    created_at: datetime
    owner: Optional[UserSummary] = None
