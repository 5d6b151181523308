import sqlalchemy as sa

from sqlalchemy.orm import Mapped, mapped_column

from xferlogic.common.model import Base, DateTimeMixin, id_key


class UsageRecord(Base, DateTimeMixin):
    """One accounting entry per billable call. Append-only."""

    __tablename__ = 'xfer_usage_record'

    id: Mapped[id_key] = mapped_column(init=False)

    # Link to the user who made the call
    user_id: Mapped[int] = mapped_column(
        sa.BigInteger().with_variant(sa.Integer(), 'sqlite'),
        sa.ForeignKey('xfer_user.id'),
        index=True,
        comment='Calling user',
    )

    endpoint: Mapped[str] = mapped_column(sa.String(32), index=True, comment='Billable endpoint key (text, image, pdf, ...)')

    token_count: Mapped[int] = mapped_column(sa.Integer, default=0, comment='Tokens consumed')

    estimated_cost: Mapped[float] = mapped_column(sa.Float, default=0.0, comment='Estimated cost in USD')
