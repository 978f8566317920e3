from fastapi import APIRouter, Depends
from app.models.user import User
from app.schemas.user import MeOut
from app.services.auth_service import get_current_user
from app.services.user_service import to_me_out

router = APIRouter(prefix='/me', tags=['me'])


@router.get('', response_model=MeOut)
def get_me(user: User = Depends(get_current_user)) -> MeOut:
    return to_me_out(user)
