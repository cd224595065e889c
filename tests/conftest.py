"""Pytest fixtures and shared test configuration.

Fixtures:
    - clean_env: Strips provider settings from the environment (autouse)
    - api_key: Sets a dummy Google credential
    - fake_relay: RelayService whose provider stream is scripted
    - app_with_fake_relay: FastAPI app using ``fake_relay``
    - async_client: HTTPX client bound to that app
    - make_pdf: Builds small text PDFs in memory
"""

from collections.abc import AsyncGenerator, Callable, Sequence

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from pdfchat.agent.relay import get_relay_service
from pdfchat.api.app import create_app
from tests.fakes import FakeRelayService

PROVIDER_ENV_VARS = (
    "LLM_PROVIDER",
    "LLM_MODEL",
    "LLM_BASE_URL",
    "LLM_API_KEY",
    "OPENAI_API_KEY",
    "GOOGLE_GENERATIVE_AI_API_KEY",
    "LLM_TEMPERATURE",
    "LLM_MAX_TOKENS",
    "CHAT_REQUEST_TIMEOUT",
    "CHAT_HISTORY_LIMIT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test without provider settings from the host."""
    for name in PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    """Set a dummy Google credential.

    Returns:
        The credential value.
    """
    monkeypatch.setenv("GOOGLE_GENERATIVE_AI_API_KEY", "test-google-key")
    return "test-google-key"


@pytest.fixture
def fake_relay() -> FakeRelayService:
    return FakeRelayService()


@pytest.fixture
def app_with_fake_relay(fake_relay: FakeRelayService) -> FastAPI:
    """App whose relay dependency returns ``fake_relay``."""
    application = create_app()
    application.dependency_overrides[get_relay_service] = lambda: fake_relay
    return application


@pytest.fixture
async def async_client(app_with_fake_relay: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app_with_fake_relay)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def build_pdf(pages: Sequence[str]) -> bytes:
    """Build a minimal PDF with one line of Helvetica text per page."""
    page_ids = [4 + 2 * i for i in range(len(pages))]
    kids = " ".join(f"{page_id} 0 R" for page_id in page_ids)
    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(pages)} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for page_id, text in zip(page_ids, pages, strict=True):
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                "/Resources << /Font << /F1 3 0 R >> >> "
                f"/Contents {page_id + 1} 0 R >>"
            ).encode()
        )
        stream = f"BT /F1 24 Tf 72 720 Td ({text}) Tj ET".encode()
        objects.append(
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode()
    return bytes(out)


@pytest.fixture
def make_pdf() -> Callable[[Sequence[str]], bytes]:
    return build_pdf
