from datetime import datetime
from typing import Annotated

import sqlalchemy as sa

from sqlalchemy.orm import DeclarativeBase, Mapped, MappedAsDataclass, declared_attr, mapped_column

from xferlogic.utils.timezone import timezone

# 通用主键：BIGINT on PostgreSQL, INTEGER on SQLite so rowid autoincrement still applies
id_key = Annotated[
    int,
    mapped_column(
        sa.BigInteger().with_variant(sa.Integer(), 'sqlite'),
        primary_key=True,
        unique=True,
        index=True,
        autoincrement=True,
        sort_order=-999,
        comment='主键 ID',
    ),
]

TimeZone = sa.DateTime(timezone=True)


class DateTimeMixin(MappedAsDataclass):
    """创建时间 Mixin"""

    created_time: Mapped[datetime] = mapped_column(
        TimeZone, init=False, default_factory=timezone.now, sort_order=999, comment='创建时间'
    )


class Base(MappedAsDataclass, DeclarativeBase):
    """
    声明式数据类基础模型

    Models are dataclasses: columns declared with ``init=False`` are filled by
    the database or by their default factory.
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()
