from enum import Enum
import sqlalchemy as sa
from sqlalchemy import Column


class RequestStatus(str, Enum):
    PENDING = 'pending'
    ACCEPTED = 'accepted'
    DECLINED = 'declined'


class RequestDirection(str, Enum):
    INCOMING = 'incoming'
    OUTGOING = 'outgoing'


def enum_column(enum_cls: type[Enum], name: str) -> Column:
    return Column(
        sa.Enum(
            enum_cls,
            values_callable=lambda enum: [item.value for item in enum],
            name=name,
        ),
        nullable=False,
    )
