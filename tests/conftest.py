import asyncio
import io

import httpx
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from gridfs.errors import NoFile
from unittest.mock import MagicMock

from jobportal.api.deps import (
    get_app_settings,
    get_file_store,
    get_mailer,
    get_news_client,
    get_user_service,
)
from jobportal.core.config import Settings
from jobportal.main import create_app
from jobportal.services.file_storage import FileStore
from jobportal.services.mailer import ResendMailer
from jobportal.services.news_client import NewsClient
from jobportal.services.user_service import UserService


# ============================================================
# In-memory GridFS bucket
# ============================================================

class FakeGridIn:
    def __init__(self, bucket, filename, metadata, fail_on_write=False):
        self._bucket = bucket
        self._id = ObjectId()
        self.filename = filename
        self.metadata = metadata
        self._buffer = io.BytesIO()
        self._fail_on_write = fail_on_write
        self.aborted = False

    def write(self, data):
        if self._fail_on_write:
            raise OSError("disk full")
        self._buffer.write(data)

    def close(self):
        self._bucket.files[self._id] = {
            "filename": self.filename,
            "metadata": self.metadata,
            "data": self._buffer.getvalue(),
        }

    def abort(self):
        self.aborted = True


class FakeGridOut:
    def __init__(self, file_id, doc):
        self._id = file_id
        self.filename = doc["filename"]
        self.metadata = doc["metadata"]
        self.length = len(doc["data"])
        self._stream = io.BytesIO(doc["data"])
        self.closed = False

    def read(self, size=-1):
        return self._stream.read(size)

    def close(self):
        self.closed = True


class FakeBucket:
    def __init__(self):
        self.files = {}
        self.upload_streams = []
        self.fail_on_write = False

    def open_upload_stream(self, filename, metadata=None):
        grid_in = FakeGridIn(self, filename, metadata, fail_on_write=self.fail_on_write)
        self.upload_streams.append(grid_in)
        return grid_in

    def open_download_stream(self, file_id):
        if file_id not in self.files:
            raise NoFile(f"no file in gridfs collection with _id {file_id!r}")
        return FakeGridOut(file_id, self.files[file_id])


# ============================================================
# In-memory users collection
# ============================================================

class FakeUsersCollection:
    def __init__(self):
        self.docs = {}

    def insert(self, **doc):
        doc.setdefault("_id", ObjectId())
        self.docs[doc["_id"]] = doc
        return str(doc["_id"])

    def find_one(self, query, projection=None):
        return self.docs.get(query.get("_id"))


# ============================================================
# Fixtures
# ============================================================

@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        news_api_key="test-news-key",
        email_api_key="re_test_key",
        admin_email="admin@example.com",
        log_json=False,
    )


@pytest.fixture
def bucket():
    return FakeBucket()


@pytest.fixture
def file_store(bucket, settings):
    return FileStore(bucket, url_prefix=settings.api_prefix, chunk_size=64 * 1024)


@pytest.fixture
def users_collection():
    return FakeUsersCollection()


@pytest.fixture
def news_requests():
    """Every request the news client sends; tests set status_code, body (bytes for a raw body) or error."""
    class Recorder:
        def __init__(self):
            self.calls = []
            self.status_code = 200
            self.body = {"status": "ok", "totalResults": 0, "articles": []}
            self.error = None

        def __call__(self, request):
            self.calls.append(request)
            if self.error is not None:
                raise self.error
            if isinstance(self.body, bytes):
                return httpx.Response(self.status_code, content=self.body)
            return httpx.Response(self.status_code, json=self.body)

    return Recorder()


@pytest.fixture
def mail_requests():
    """Every request the mailer sends; tests set status_code, body (bytes for a raw body) or error."""
    class Recorder:
        def __init__(self):
            self.calls = []
            self.status_code = 200
            self.body = {"id": "email_123"}
            self.error = None

        def __call__(self, request):
            self.calls.append(request)
            if self.error is not None:
                raise self.error
            if isinstance(self.body, bytes):
                return httpx.Response(self.status_code, content=self.body)
            return httpx.Response(self.status_code, json=self.body)

    return Recorder()


@pytest.fixture
def make_client(settings, file_store, users_collection, news_requests, mail_requests):
    """Build a TestClient; keyword args override settings fields."""
    created = []
    http_clients = []

    def _make(**overrides):
        app_settings = settings.model_copy(update=overrides)
        app = create_app(app_settings)
        app.state.mongo_client = MagicMock()

        news_http = httpx.AsyncClient(transport=httpx.MockTransport(news_requests))
        mail_http = httpx.AsyncClient(transport=httpx.MockTransport(mail_requests))
        http_clients.extend([news_http, mail_http])

        app.dependency_overrides[get_app_settings] = lambda: app_settings
        app.dependency_overrides[get_file_store] = lambda: file_store
        app.dependency_overrides[get_user_service] = lambda: UserService(users_collection)
        app.dependency_overrides[get_news_client] = lambda: NewsClient(news_http, app_settings)
        app.dependency_overrides[get_mailer] = lambda: ResendMailer(mail_http, app_settings)

        client = TestClient(app)
        created.append(app)
        return client

    yield _make

    for app in created:
        app.dependency_overrides.clear()
    for http in http_clients:
        asyncio.run(http.aclose())


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def pdf_bytes():
    return b"%PDF-1.4\n" + b"0" * 2048 + b"\n%%EOF"


@pytest.fixture
def png_bytes():
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 512
