from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel
from app.models.base import IDModel, TimestampModel
from app.models.enums import RequestStatus, enum_column

PENDING_ONLY = text("status = 'pending'")


class AccessRequest(IDModel, TimestampModel, SQLModel, table=True):
    """A request from ``from_id`` to view the video of a skill owned by ``to_id``."""

    __tablename__ = 'requests'
    # One pending request per (requester, skill). MySQL has no partial
    # indexes, so there the service-level check is the only guard.
    __table_args__ = (
        Index(
            'ux_requests_pending_pair',
            'from_id',
            'skill_id',
            unique=True,
            sqlite_where=PENDING_ONLY,
            postgresql_where=PENDING_ONLY,
        ).ddl_if(dialect=('sqlite', 'postgresql')),
    )

    from_id: str = Field(index=True)
    to_id: str = Field(index=True)
    skill_id: str = Field(index=True)
    status: RequestStatus = Field(
        default=RequestStatus.PENDING,
        sa_column=enum_column(RequestStatus, 'request_status'),
    )
