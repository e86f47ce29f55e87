import io

import pytest
from bson import ObjectId

from jobportal.utils.file_upload import UploadRequest


def store_file(file_store, data, filename="cv.pdf", mime_type="application/pdf", field_name="resume"):
    return file_store.save(UploadRequest(
        field_name=field_name,
        original_filename=filename,
        mime_type=mime_type,
        size_bytes=len(data),
        content=io.BytesIO(data),
    ))


def test_get_file_streams_content(client, file_store):
    data = bytes(range(256)) * 1024  # several 64KB chunks
    stored = store_file(file_store, data)

    response = client.get(f"/files/{stored.file_id}")

    assert response.status_code == 200
    assert response.content == data
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == "inline"
    assert response.headers["content-length"] == str(len(data))


def test_get_image_keeps_stored_content_type(client, file_store, png_bytes):
    stored = store_file(
        file_store, png_bytes, filename="me.png", mime_type="image/png", field_name="profilePhoto"
    )

    response = client.get(stored.url)

    assert response.headers["content-type"] == "image/png"
    assert response.content == png_bytes


def test_get_unknown_file_404(client):
    response = client.get(f"/files/{ObjectId()}")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "File not found"}


@pytest.mark.parametrize("file_id", ["abc", "not-a-valid-object-id-at-all", "0" * 23])
def test_get_malformed_id_404(client, file_id):
    response = client.get(f"/files/{file_id}")

    assert response.status_code == 404
