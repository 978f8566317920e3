from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from app.db.session import get_session
from app.models.user import User
from app.schemas.want import WantCreate, WantOut
from app.services.auth_service import get_current_user
from app.services.want_service import create_want, list_wants

router = APIRouter(prefix='/wants', tags=['wants'])


def _to_want_out(record) -> WantOut:
    return WantOut(
        id=record.id,
        title=record.title,
        description=record.description,
        owner_id=record.owner_id,
        created_at=record.created_at,
    )


@router.post('', response_model=WantOut, status_code=status.HTTP_201_CREATED)
def create_want_endpoint(
    payload: WantCreate,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> WantOut:
    return _to_want_out(create_want(session, user.id, payload))


@router.get('/me', response_model=list[WantOut])
def list_my_wants(
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> list[WantOut]:
    return [_to_want_out(record) for record in list_wants(session, user.id)]
