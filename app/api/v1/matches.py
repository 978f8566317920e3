from fastapi import APIRouter, Depends
from sqlmodel import Session
from app.db.session import get_session
from app.models.user import User
from app.schemas.skill import SkillOut
from app.services.auth_service import get_current_user
from app.services.match_service import list_matches
from app.services.skill_service import to_skill_out

router = APIRouter(prefix='/matches', tags=['matches'])


@router.get('', response_model=list[SkillOut])
def list_matches_endpoint(
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> list[SkillOut]:
    return [to_skill_out(skill, owner) for skill, owner in list_matches(session, user.id)]
