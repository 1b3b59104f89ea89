import io

import pytest
from openpyxl import Workbook

from app import create_app
from app.extensions import db
from app.machines.completion import CompletionBackend

HEADER = ["Customs", "Reference", "Machine", "PN", "ETB", "ETA Port", "ETA Destination",
          "Ship", "Division", "Status", "BL"]


class FakeBackend(CompletionBackend):
    """Replays queued replies; queue an Exception instance to make a call fail."""

    def __init__(self, name="fake", replies=None):
        self.name = name
        self.replies = list(replies or [])
        self.prompts = []

    def queue(self, *replies):
        self.replies.extend(replies)

    def complete(self, prompt):
        self.prompts.append(prompt)
        if not self.replies:
            raise RuntimeError("no reply queued")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def make_xlsx(rows, extra_sheet_rows=None):
    wb = Workbook()
    ws = wb.active
    ws.title = "Machines"
    for r in rows:
        ws.append(r)
    if extra_sheet_rows:
        other = wb.create_sheet("Other")
        for r in extra_sheet_rows:
            other.append(r)
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)
    return buf


@pytest.fixture
def gemini():
    return FakeBackend("gemini")


@pytest.fixture
def zai():
    return FakeBackend("zai")


@pytest.fixture
def app(tmp_path, gemini, zai):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "COMPLETION_BACKENDS": {"gemini": gemini, "zai": zai},
        "DEFAULT_MODEL": "gemini",
    })
    yield app
    with app.app_context():
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def engine(app):
    with app.app_context():
        yield db.engine


def upload(client, buf, filename="machines.xlsx"):
    return client.post(
        "/api/admin/upload",
        data={"file": (buf, filename)},
        content_type="multipart/form-data",
    )
