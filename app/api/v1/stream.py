from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from sqlmodel import Session
from app.db.session import get_session
from app.models.user import User
from app.schemas.skill import SkillOut
from app.services.auth_service import get_current_user, get_stream_user
from app.services.media_store import MediaStore, get_media_store
from app.services.request_service import list_authorized_skills
from app.services.skill_service import to_skill_out
from app.services.stream_service import open_skill_media

router = APIRouter(tags=['stream'])


@router.get('/authorized', response_model=list[SkillOut])
def list_authorized_endpoint(
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> list[SkillOut]:
    return [to_skill_out(skill, owner) for skill, owner in list_authorized_skills(session, user.id)]


@router.get('/stream/{skill_id}')
def stream_skill_endpoint(
    skill_id: str,
    session: Session = Depends(get_session),
    media_store: MediaStore = Depends(get_media_store),
    user: User = Depends(get_stream_user),
) -> FileResponse:
    path = open_skill_media(session, media_store, user.id, skill_id)
    return FileResponse(path)
