from fastapi import APIRouter

from xferlogic.app.gateway.api.router import v1 as gateway_v1
from xferlogic.core.conf import settings

router = APIRouter(prefix=settings.FASTAPI_API_PATH)

router.include_router(gateway_v1)


@router.get('/health', tags=['Health'])
async def health() -> dict:
    return {'status': 'ok'}
