"""Usage recording service.

Appends one UsageRecord per billable call. A failed write is logged and
dropped: accounting never fails the caller's request.
"""

import logging

from fastapi import BackgroundTasks
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from xferlogic.app.gateway.model.usage_record import UsageRecord
from xferlogic.core.conf import settings
from xferlogic.database.db import async_db_session

logger = logging.getLogger(__name__)


async def record_usage(
    *,
    db_session: AsyncSession,
    user_id: int,
    endpoint: str,
    token_count: int = 0,
    cost: float = 0.0,
) -> bool:
    """Append a usage record for a billable call.

    Args:
        db_session: Database session
        user_id: Calling user
        endpoint: Billable endpoint key (text, image, pdf, docx, excel, svg)
        token_count: Tokens consumed by the call
        cost: Estimated cost in USD

    Returns:
        True if the record was written, False otherwise
    """
    try:
        record = UsageRecord(
            user_id=user_id,
            endpoint=endpoint,
            token_count=token_count,
            estimated_cost=cost,
        )
        db_session.add(record)
        await db_session.flush()

        logger.info(
            f"Recorded usage for user {user_id}: endpoint={endpoint}, "
            f"tokens={token_count}, cost={cost:.6f}"
        )
        return True

    except SQLAlchemyError as e:
        logger.error(f"Database error recording usage for user {user_id} on {endpoint}: {e}", exc_info=True)
        await db_session.rollback()
        return False


async def record_usage_in_new_session(
    *, user_id: int, endpoint: str, token_count: int = 0, cost: float = 0.0
) -> bool:
    """Record usage in a session of its own, committed independently of any request."""
    try:
        async with async_db_session() as db:
            success = await record_usage(
                db_session=db,
                user_id=user_id,
                endpoint=endpoint,
                token_count=token_count,
                cost=cost,
            )
            if success:
                await db.commit()
            return success
    except Exception as e:
        logger.error(f"Failed to record usage for user {user_id} on {endpoint}: {e}", exc_info=True)
        return False


async def apply_usage(
    *,
    db_session: AsyncSession,
    background_tasks: BackgroundTasks,
    user_id: int,
    endpoint: str,
    token_count: int = 0,
    cost: float = 0.0,
) -> None:
    """Record usage according to ``USAGE_RECORD_MODE``.

    - ``sync``: write inside the request session before the response is sent
    - ``background``: write in a fresh session after the response is sent
    """
    if settings.USAGE_RECORD_MODE == 'background':
        background_tasks.add_task(
            record_usage_in_new_session,
            user_id=user_id,
            endpoint=endpoint,
            token_count=token_count,
            cost=cost,
        )
        return

    await record_usage(
        db_session=db_session,
        user_id=user_id,
        endpoint=endpoint,
        token_count=token_count,
        cost=cost,
    )
