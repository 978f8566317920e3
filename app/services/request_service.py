"""Access requests between users and the permissions they grant.

A request starts ``pending`` and is resolved by the skill owner to
``accepted`` or ``declined``. Accepting upserts a ``Permission`` row keyed by
(requester, skill), so accepting the same request again never duplicates it.

Resolving a request that is already resolved is allowed unless ``strict`` is
set, in which case it raises ``ConflictError``.
"""
from typing import Iterable, Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.core.errors import ConflictError, ForbiddenError, InvalidOperationError, NotFoundError
from app.models.access_request import AccessRequest
from app.models.enums import RequestDirection, RequestStatus
from app.models.permission import Permission
from app.models.skill import Skill
from app.models.user import User
from app.services.skill_service import get_skill


def get_request(session: Session, request_id: str) -> Optional[AccessRequest]:
    return session.exec(select(AccessRequest).where(AccessRequest.id == request_id)).first()


def get_pending_request(session: Session, requester_id: str, skill_id: str) -> Optional[AccessRequest]:
    statement = select(AccessRequest).where(
        (AccessRequest.from_id == requester_id)
        & (AccessRequest.skill_id == skill_id)
        & (AccessRequest.status == RequestStatus.PENDING)
    )
    return session.exec(statement).first()


def create_request(session: Session, requester_id: str, skill_id: str) -> AccessRequest:
    skill = get_skill(session, skill_id)
    if not skill:
        raise NotFoundError('Video not found')
    if skill.owner_id == requester_id:
        raise InvalidOperationError('Cannot request your own video')
    if get_pending_request(session, requester_id, skill_id):
        raise ConflictError('Request already pending')

    record = AccessRequest(from_id=requester_id, to_id=skill.owner_id, skill_id=skill.id)
    session.add(record)
    try:
        session.commit()
    except IntegrityError:
        # A concurrent create won the pending (requester, skill) slot.
        session.rollback()
        raise ConflictError('Request already pending')
    session.refresh(record)
    logger.info('request.created', request_id=record.id, from_id=requester_id, skill_id=skill.id)
    return record


def _set_status(
    session: Session,
    request_id: str,
    acting_user_id: str,
    status: RequestStatus,
    strict: bool,
) -> AccessRequest:
    """Checks ownership and stages the new status; the caller commits."""
    record = get_request(session, request_id)
    if not record:
        raise NotFoundError('Request not found')
    if record.to_id != acting_user_id:
        raise ForbiddenError('Not your request')
    if strict and record.status != RequestStatus.PENDING:
        raise ConflictError(f"Request already {record.status.value}")
    if record.status != RequestStatus.PENDING:
        logger.warning('request.re_resolved', request_id=record.id, previous=record.status.value, status=status.value)

    record.status = status
    session.add(record)
    return record


def accept_request(
    session: Session,
    request_id: str,
    acting_user_id: str,
    strict: bool = False,
) -> AccessRequest:
    record = _set_status(session, request_id, acting_user_id, RequestStatus.ACCEPTED, strict)
    user_id, skill_id = record.from_id, record.skill_id
    granted = add_permission(session, user_id, skill_id)
    try:
        session.commit()
    except IntegrityError:
        # Another accept inserted the same permission first; keep the status change.
        session.rollback()
        if get_permission(session, user_id, skill_id) is None:
            raise
        record = get_request(session, request_id)
        record.status = RequestStatus.ACCEPTED
        session.add(record)
        session.commit()
        granted = False
    session.refresh(record)
    if granted:
        logger.info('permission.granted', user_id=user_id, skill_id=skill_id)
    logger.info('request.accepted', request_id=record.id, user_id=acting_user_id)
    return record


def decline_request(
    session: Session,
    request_id: str,
    acting_user_id: str,
    strict: bool = False,
) -> AccessRequest:
    record = _set_status(session, request_id, acting_user_id, RequestStatus.DECLINED, strict)
    session.commit()
    session.refresh(record)
    logger.info('request.declined', request_id=record.id, user_id=acting_user_id)
    return record


def list_requests(
    session: Session,
    user_id: str,
    direction: RequestDirection = RequestDirection.INCOMING,
) -> list[AccessRequest]:
    if direction == RequestDirection.OUTGOING:
        condition = AccessRequest.from_id == user_id
    else:
        condition = AccessRequest.to_id == user_id
    statement = select(AccessRequest).where(condition).order_by(AccessRequest.created_at.desc())
    return list(session.exec(statement).all())


def get_request_skills(session: Session, records: Iterable[AccessRequest]) -> dict[str, Skill]:
    ids = {record.skill_id for record in records}
    if not ids:
        return {}
    skills = session.exec(select(Skill).where(Skill.id.in_(list(ids)))).all()
    return {skill.id: skill for skill in skills}


def get_permission(session: Session, user_id: str, skill_id: str) -> Optional[Permission]:
    return session.get(Permission, (user_id, skill_id))


def add_permission(session: Session, user_id: str, skill_id: str) -> bool:
    """Stages a Permission row unless one exists. Returns whether one was added."""
    if get_permission(session, user_id, skill_id):
        return False
    session.add(Permission(user_id=user_id, skill_id=skill_id))
    return True


def can_view(session: Session, user_id: str, skill: Skill) -> bool:
    if skill.owner_id == user_id:
        return True
    return get_permission(session, user_id, skill.id) is not None


def list_authorized_skills(session: Session, user_id: str) -> list[tuple[Skill, Optional[User]]]:
    statement = (
        select(Skill, User)
        .join(Permission, Permission.skill_id == Skill.id)
        .join(User, User.id == Skill.owner_id, isouter=True)
        .where(Permission.user_id == user_id)
        .order_by(Permission.created_at.desc())
    )
    return list(session.exec(statement).all())
