"""Integration tests for the generation and document endpoints.

The generation gateway is replaced by a fake; usage records are read back
from the in-memory database.
"""

import io
import json

import pytest

from sqlalchemy import select

PROTECTED_ENDPOINTS = [
    ('/api/text', {'prompt': 'hi', 'model': 'openai'}),
    ('/api/image', {'prompt': 'a cat'}),
    ('/api/pdf', {'text': 'hello'}),
    ('/api/docx', {'text': 'hello'}),
    ('/api/excel', {'rows': [['a', 1]]}),
    ('/api/svg', {'svg': '<svg/>'}),
]


async def _usage_records(session_factory):
    from xferlogic.app.gateway.model import UsageRecord

    async with session_factory() as db:
        return (await db.execute(select(UsageRecord).order_by(UsageRecord.id))).scalars().all()


class TestAuthGuard:
    """Every gateway endpoint requires a valid bearer token."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize('path, body', PROTECTED_ENDPOINTS)
    async def test_missing_token(self, client, fake_gateway, session_factory, path, body):
        """Test no token answers 401 and nothing is called or recorded."""
        response = await client.post(path, json=body)

        assert response.status_code == 401
        assert response.json() == {'error': 'Missing token'}
        assert fake_gateway.text_calls == fake_gateway.image_calls == []
        assert await _usage_records(session_factory) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize('path, body', PROTECTED_ENDPOINTS)
    async def test_invalid_token(self, client, path, body):
        """Test a bad token answers 401."""
        response = await client.post(path, json=body, headers={'Authorization': 'Bearer x.y.z'})

        assert response.status_code == 401
        assert response.json() == {'error': 'Invalid token'}


class TestGenerationAPI:
    """Tests for POST /api/text and POST /api/image."""

    @pytest.mark.asyncio
    async def test_text(self, client, auth_headers, fake_gateway, session_factory):
        """Test text generation answers {result} and records tokens and cost."""
        response = await client.post('/api/text', json={'prompt': 'hi', 'model': 'openai'}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {'result': 'echo: hi'}
        assert fake_gateway.text_calls == [('hi', 'openai')]

        records = await _usage_records(session_factory)
        assert len(records) == 1
        assert records[0].endpoint == 'text'
        assert records[0].token_count == 42
        assert records[0].estimated_cost == pytest.approx(0.00042)

    @pytest.mark.asyncio
    async def test_text_without_model_or_prompt(self, client, auth_headers, fake_gateway):
        """Test an empty body is accepted and forwarded with defaults."""
        response = await client.post('/api/text', json={}, headers=auth_headers)

        assert response.status_code == 200
        assert fake_gateway.text_calls == [('', None)]

    @pytest.mark.asyncio
    async def test_image(self, client, auth_headers, session_factory):
        """Test image generation answers {image} and records the flat cost."""
        response = await client.post('/api/image', json={'prompt': 'a cat'}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {'image': 'https://images.example.com/1.png'}

        records = await _usage_records(session_factory)
        assert [(r.endpoint, r.token_count, r.estimated_cost) for r in records] == [('image', 0, 0.04)]

    @pytest.mark.asyncio
    async def test_provider_failure(self, client, auth_headers, fake_gateway, session_factory):
        """Test a provider failure answers 500 with the upstream message and records nothing."""
        fake_gateway.fail_with = 'Incorrect API key provided'

        text = await client.post('/api/text', json={'prompt': 'hi', 'model': 'openai'}, headers=auth_headers)
        image = await client.post('/api/image', json={'prompt': 'a cat'}, headers=auth_headers)

        assert text.status_code == image.status_code == 500
        assert text.json() == image.json() == {'error': 'Incorrect API key provided'}
        assert await _usage_records(session_factory) == []


class TestDocumentAPI:
    """Tests for the document endpoints."""

    @pytest.mark.asyncio
    async def test_pdf(self, client, auth_headers):
        """Test the PDF endpoint returns a PDF attachment."""
        from pypdf import PdfReader

        response = await client.post('/api/pdf', json={'text': 'Hello'}, headers=auth_headers)

        assert response.status_code == 200
        assert response.headers['content-type'] == 'application/pdf'
        assert response.headers['content-disposition'] == 'attachment; filename=document.pdf'
        assert len(PdfReader(io.BytesIO(response.content)).pages) == 1

    @pytest.mark.asyncio
    async def test_docx(self, client, auth_headers):
        """Test the DOCX endpoint returns a Word document."""
        from docx import Document

        response = await client.post('/api/docx', json={'text': 'Hello, Word'}, headers=auth_headers)

        assert response.status_code == 200
        assert response.headers['content-type'].startswith(
            'application/vnd.openxmlformats-officedocument.wordprocessingml.document'
        )
        assert Document(io.BytesIO(response.content)).paragraphs[0].text == 'Hello, Word'

    @pytest.mark.asyncio
    async def test_excel(self, client, auth_headers):
        """Test the Excel endpoint returns the rows in order."""
        from openpyxl import load_workbook

        response = await client.post('/api/excel', json={'rows': [['a', 1], ['b', 2]]}, headers=auth_headers)

        assert response.status_code == 200
        assert response.headers['content-disposition'] == 'attachment; filename=document.xlsx'
        rows = list(load_workbook(io.BytesIO(response.content)).active.iter_rows(values_only=True))
        assert rows == [('a', 1), ('b', 2)]

    @pytest.mark.asyncio
    async def test_excel_invalid_rows(self, client, auth_headers, session_factory):
        """Test rows that are not lists fail validation and record nothing."""
        response = await client.post('/api/excel', json={'rows': 'not rows'}, headers=auth_headers)

        assert response.status_code == 422
        assert await _usage_records(session_factory) == []

    @pytest.mark.asyncio
    async def test_svg(self, client, auth_headers):
        """Test the SVG endpoint returns the markup unchanged."""
        svg = '<svg xmlns="http://www.w3.org/2000/svg"><circle r="5"/></svg>'

        response = await client.post('/api/svg', json={'svg': svg}, headers=auth_headers)

        assert response.status_code == 200
        assert response.headers['content-type'].startswith('image/svg+xml')
        assert response.text == svg


class TestUsageAccounting:
    """Each successful billable call writes exactly one usage record."""

    @pytest.mark.asyncio
    async def test_one_record_per_call(self, client, auth_headers, session_factory):
        """Test a call to every endpoint leaves one record each, for the caller."""
        me = await client.get('/api/me', headers=auth_headers)

        for path, body in PROTECTED_ENDPOINTS:
            response = await client.post(path, json=body, headers=auth_headers)
            assert response.status_code == 200, path

        records = await _usage_records(session_factory)
        assert [r.endpoint for r in records] == ['text', 'image', 'pdf', 'docx', 'excel', 'svg']
        assert {r.user_id for r in records} == {me.json()['id']}
        assert all(r.token_count == 0 and r.estimated_cost == 0 for r in records[2:])

    @pytest.mark.asyncio
    async def test_background_mode(self, client, auth_headers, session_factory, monkeypatch):
        """Test background recording writes the record after the response."""
        from xferlogic.core.conf import settings

        monkeypatch.setattr(settings, 'USAGE_RECORD_MODE', 'background')
        monkeypatch.setattr('xferlogic.app.gateway.service.usage_service.async_db_session', session_factory)

        response = await client.post('/api/svg', json={'svg': '<svg/>'}, headers=auth_headers)

        assert response.status_code == 200
        assert [r.endpoint for r in await _usage_records(session_factory)] == ['svg']


class TestRequestLimits:
    """Tests for the request body size limit."""

    @pytest.mark.asyncio
    async def test_body_too_large(self, client, auth_headers, monkeypatch):
        """Test a body over the limit answers 413 before reaching the handler."""
        from xferlogic.core.conf import settings

        monkeypatch.setattr(settings, 'REQUEST_BODY_MAX_SIZE', 1024)

        response = await client.post('/api/pdf', json={'text': 'x' * 2048}, headers=auth_headers)

        assert response.status_code == 413
        assert 'error' in response.json()

    @pytest.mark.asyncio
    async def test_chunked_body_too_large(self, client, auth_headers, monkeypatch):
        """Test a chunked body without Content-Length is still held to the limit."""
        from xferlogic.core.conf import settings

        monkeypatch.setattr(settings, 'REQUEST_BODY_MAX_SIZE', 1024)
        payload = json.dumps({'svg': 'x' * 4096}).encode()

        async def chunks():
            for i in range(0, len(payload), 512):
                yield payload[i:i + 512]

        response = await client.post(
            '/api/svg',
            content=chunks(),
            headers={**auth_headers, 'Content-Type': 'application/json'},
        )

        assert response.status_code == 413
        assert 'error' in response.json()

    @pytest.mark.asyncio
    async def test_chunked_body_within_limit(self, client, auth_headers, session_factory):
        """Test a chunked body under the limit is accepted."""
        payload = json.dumps({'svg': '<svg/>'}).encode()

        async def chunks():
            yield payload[:5]
            yield payload[5:]

        response = await client.post(
            '/api/svg',
            content=chunks(),
            headers={**auth_headers, 'Content-Type': 'application/json'},
        )

        assert response.status_code == 200
        assert response.text == '<svg/>'


class TestIllegalCharacters:
    """Text that the document formats cannot carry is rejected with 400."""

    @pytest.mark.asyncio
    async def test_excel_control_character(self, client, auth_headers, session_factory):
        """Test a control character in a cell answers 400 and records nothing."""
        response = await client.post('/api/excel', json={'rows': [['a\x01b']]}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()['error'].startswith('Invalid cell value')
        assert await _usage_records(session_factory) == []

    @pytest.mark.asyncio
    async def test_docx_control_character(self, client, auth_headers, session_factory):
        """Test a control character in the text answers 400 and records nothing."""
        response = await client.post('/api/docx', json={'text': 'a\x01b'}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()['error'].startswith('Invalid text')
        assert await _usage_records(session_factory) == []
