"""Document conversion API endpoints.

Each endpoint returns the complete file as the response body.
"""

from fastapi import APIRouter, BackgroundTasks
from fastapi.responses import Response

from xferlogic.app.gateway.schema.document import SpreadsheetParam, SvgParam, TextDocumentParam
from xferlogic.app.gateway.service import document_service
from xferlogic.app.gateway.service.usage_service import apply_usage
from xferlogic.core.security.jwt import CurrentIdentity
from xferlogic.database.db import CurrentSession
from xferlogic.src.services.documents import MEDIA_TYPE_DOCX, MEDIA_TYPE_PDF, MEDIA_TYPE_SVG, MEDIA_TYPE_XLSX

router = APIRouter(tags=['Documents'])


def _attachment(content: bytes, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={'Content-Disposition': f'attachment; filename={filename}'},
    )


@router.post('/pdf', response_class=Response)
async def create_pdf(
    obj: TextDocumentParam,
    identity: CurrentIdentity,
    db: CurrentSession,
    background_tasks: BackgroundTasks,
) -> Response:
    content = await document_service.create_pdf(obj.text)
    await apply_usage(db_session=db, background_tasks=background_tasks, user_id=identity.user_id, endpoint='pdf')
    return _attachment(content, MEDIA_TYPE_PDF, 'document.pdf')


@router.post('/docx', response_class=Response)
async def create_docx(
    obj: TextDocumentParam,
    identity: CurrentIdentity,
    db: CurrentSession,
    background_tasks: BackgroundTasks,
) -> Response:
    content = await document_service.create_docx(obj.text)
    await apply_usage(db_session=db, background_tasks=background_tasks, user_id=identity.user_id, endpoint='docx')
    return _attachment(content, MEDIA_TYPE_DOCX, 'document.docx')


@router.post('/excel', response_class=Response)
async def create_excel(
    obj: SpreadsheetParam,
    identity: CurrentIdentity,
    db: CurrentSession,
    background_tasks: BackgroundTasks,
) -> Response:
    """Rows are written in order, one worksheet, no header row added."""
    content = await document_service.create_xlsx(obj.rows)
    await apply_usage(db_session=db, background_tasks=background_tasks, user_id=identity.user_id, endpoint='excel')
    return _attachment(content, MEDIA_TYPE_XLSX, 'document.xlsx')


@router.post('/svg', response_class=Response)
async def create_svg(
    obj: SvgParam,
    identity: CurrentIdentity,
    db: CurrentSession,
    background_tasks: BackgroundTasks,
) -> Response:
    """Return the submitted markup unchanged as image/svg+xml."""
    content = await document_service.create_svg(obj.svg)
    await apply_usage(db_session=db, background_tasks=background_tasks, user_id=identity.user_id, endpoint='svg')
    return Response(content=content, media_type=MEDIA_TYPE_SVG)
