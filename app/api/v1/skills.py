from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlmodel import Session
from app.db.session import get_session
from app.models.user import User
from app.schemas.skill import SkillOut
from app.services.auth_service import get_current_user
from app.services.media_store import MediaStore, get_media_store
from app.services.skill_service import create_skill, list_skills, to_skill_out

router = APIRouter(prefix='/skills', tags=['skills'])


@router.post('', response_model=SkillOut, status_code=status.HTTP_201_CREATED)
def create_skill_endpoint(
    title: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    video: Optional[UploadFile] = File(default=None),
    session: Session = Depends(get_session),
    media_store: MediaStore = Depends(get_media_store),
    user: User = Depends(get_current_user),
) -> SkillOut:
    skill = create_skill(
        session,
        media_store,
        user.id,
        title=title,
        description=description,
        video_name=video.filename if video else None,
        video=video.file if video else None,
    )
    return to_skill_out(skill, user)


@router.get('', response_model=list[SkillOut])
def list_skills_endpoint(session: Session = Depends(get_session)) -> list[SkillOut]:
    return [to_skill_out(skill, owner) for skill, owner in list_skills(session)]
