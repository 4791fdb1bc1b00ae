import io
import base64

import httpx
from PIL import Image

from app.constants.constants import UserRole
from app.schemas.reportSchema import ReportDraft


def make_png_data_url(size=(4, 4), color=(200, 30, 30)) -> str:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def make_draft(**overrides) -> ReportDraft:
    fields = {
        "name": "Udin Pelapor",
        "user_identifier": "u1",
        "location": "Kantin",
        "category": "Kebersihan",
        "description": "Meja kotor dan penuh sampah.",
    }
    fields.update(overrides)
    return ReportDraft(**fields)


async def login(client: httpx.AsyncClient, identifier: str, password: str) -> httpx.Response:
    return await client.post(
        "/api/v1/auth/login",
        json={"user_identifier": identifier, "password": password},
    )


async def register(client: httpx.AsyncClient, identifier: str, password: str = "rahasia123", **extra) -> httpx.Response:
    body = {
        "name": "Udin Pelapor",
        "user_identifier": identifier,
        "password": password,
        "confirm_password": password,
        "role": UserRole.mahasiswa.value,
    }
    body.update(extra)
    return await client.post("/api/v1/auth/register", json=body)
