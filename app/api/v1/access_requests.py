from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from app.core.config import settings
from app.db.session import get_session
from app.models.enums import RequestDirection
from app.models.user import User
from app.schemas.access_request import RequestDetail, RequestOut
from app.services.auth_service import get_current_user
from app.services.request_service import (
    accept_request,
    create_request,
    decline_request,
    get_request_skills,
    list_requests,
)
from app.services.skill_service import to_skill_out
from app.services.user_service import get_users_by_id, to_user_summary

router = APIRouter(prefix='/requests', tags=['requests'])


def _to_request_out(record) -> RequestOut:
    return RequestOut(
        id=record.id,
        from_id=record.from_id,
        to_id=record.to_id,
        skill_id=record.skill_id,
        status=record.status,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


@router.get('', response_model=list[RequestDetail])
def list_requests_endpoint(
    direction: RequestDirection = Query(default=RequestDirection.INCOMING, alias='type'),
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> list[RequestDetail]:
    records = list_requests(session, user.id, direction)
    users = get_users_by_id(session, [r.from_id for r in records] + [r.to_id for r in records])
    skills = get_request_skills(session, records)
    items: list[RequestDetail] = []
    for record in records:
        skill = skills.get(record.skill_id)
        items.append(
            RequestDetail(
                **_to_request_out(record).model_dump(),
                from_user=to_user_summary(users.get(record.from_id)),
                to_user=to_user_summary(users.get(record.to_id)),
                skill=to_skill_out(skill, users.get(skill.owner_id)) if skill else None,
            )
        )
    return items


@router.post('/{skill_id}', response_model=RequestOut)
def create_request_endpoint(
    skill_id: str,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> RequestOut:
    return _to_request_out(create_request(session, user.id, skill_id))


@router.post('/{request_id}/accept', response_model=RequestOut)
def accept_request_endpoint(
    request_id: str,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> RequestOut:
    record = accept_request(session, request_id, user.id, strict=settings.STRICT_REQUEST_TRANSITIONS)
    return _to_request_out(record)


@router.post('/{request_id}/decline', response_model=RequestOut)
def decline_request_endpoint(
    request_id: str,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> RequestOut:
    record = decline_request(session, request_id, user.id, strict=settings.STRICT_REQUEST_TRANSITIONS)
    return _to_request_out(record)
