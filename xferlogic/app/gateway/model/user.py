import sqlalchemy as sa

from sqlalchemy.orm import Mapped, mapped_column

from xferlogic.common.model import Base, DateTimeMixin, id_key


class User(Base, DateTimeMixin):
    """Registered account. Created on registration, never updated or deleted."""

    __tablename__ = 'xfer_user'

    id: Mapped[id_key] = mapped_column(init=False)

    email: Mapped[str] = mapped_column(sa.String(255), unique=True, index=True, comment='Login email (normalised)')

    # bcrypt hash, salt embedded
    password: Mapped[str] = mapped_column(sa.String(255), comment='Password hash')
