from typing import Optional
from datetime import datetime
from pydantic import BaseModel


class WantCreate(BaseModel):
    title: str
    description: Optional[str] = None


class WantOut(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    owner_id: str
    created_at: datetime
