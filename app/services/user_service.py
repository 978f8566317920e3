from typing import Iterable, Optional

from sqlmodel import Session, select

from app.models.user import User
from app.schemas.user import MeOut, UserOut, UserSummary


def to_user_out(user: User) -> UserOut:
    return UserOut(id=user.id, name=user.name, email=user.email)


def to_me_out(user: User) -> MeOut:
    return MeOut(id=user.id, name=user.name, email=user.email, profession=user.profession)


def to_user_summary(user: Optional[User]) -> Optional[UserSummary]:
    if user is None:
        return None
    return UserSummary(id=user.id, name=user.name, email=user.email, profession=user.profession)


def get_users_by_id(session: Session, user_ids: Iterable[str]) -> dict[str, User]:
    ids = set(user_ids)
    if not ids:
        return {}
    users = session.exec(select(User).where(User.id.in_(list(ids)))).all()
    return {user.id: user for user in users}
