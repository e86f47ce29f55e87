import io

import pytest

from jobportal.core.exceptions import (
    FileTooLargeError,
    InvalidExtensionError,
    InvalidFieldError,
    InvalidMimeTypeError,
    TooManyFilesError,
    ValidationError,
)
from jobportal.utils.file_upload import (
    UploadRequest,
    get_file_extension,
    get_supported_formats,
    measure,
    validate_file,
    validate_uploads,
)

MB = 1024 * 1024


def make_upload(field_name="resume", filename="cv.pdf", mime_type="application/pdf", size=1024):
    return UploadRequest(
        field_name=field_name,
        original_filename=filename,
        mime_type=mime_type,
        size_bytes=size,
        content=io.BytesIO(b"x" * min(size, 16)),
    )


def test_valid_resume_passes(settings):
    validate_file(make_upload(), settings)


@pytest.mark.parametrize("filename,mime_type", [
    ("cv.pdf", "application/pdf"),
    ("cv.doc", "application/msword"),
    ("cv.docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
    ("CV.PDF", "application/pdf"),
])
def test_resume_formats_accepted(settings, filename, mime_type):
    validate_file(make_upload(filename=filename, mime_type=mime_type), settings)


@pytest.mark.parametrize("filename,mime_type", [
    ("me.jpg", "image/jpeg"),
    ("me.jpeg", "image/jpeg"),
    ("me.png", "image/png"),
    ("ME.JPG", "image/jpg"),
])
def test_profile_photo_formats_accepted(settings, filename, mime_type):
    validate_file(
        make_upload(field_name="profilePhoto", filename=filename, mime_type=mime_type),
        settings,
    )


@pytest.mark.parametrize("mime_type", [
    "image/png",
    "text/plain",
    "application/zip",
    "application/octet-stream",
    "",
])
def test_resume_with_wrong_mime_type_rejected(settings, mime_type):
    with pytest.raises(InvalidMimeTypeError) as exc_info:
        validate_file(make_upload(mime_type=mime_type), settings)

    assert "PDF, DOC, DOCX" in exc_info.value.message
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("filename", ["me.gif", "me.pdf", "me.bmp", "me.png.exe", "me"])
@pytest.mark.parametrize("mime_type", ["image/png", "image/jpeg"])
def test_profile_photo_with_wrong_extension_rejected(settings, filename, mime_type):
    """Extension is checked even when the declared MIME type is fine."""
    with pytest.raises(InvalidExtensionError):
        validate_file(
            make_upload(field_name="profilePhoto", filename=filename, mime_type=mime_type),
            settings,
        )


def test_resume_pdf_mime_with_exe_extension_rejected(settings):
    with pytest.raises(InvalidExtensionError) as exc_info:
        validate_file(make_upload(filename="cv.exe"), settings)

    assert exc_info.value.message == "Invalid file extension: .exe"


def test_unknown_field_rejected(settings):
    with pytest.raises(InvalidFieldError) as exc_info:
        validate_file(make_upload(field_name="avatar"), settings)

    assert exc_info.value.message == "Invalid file field name"


def test_resume_over_limit_rejected(settings):
    with pytest.raises(FileTooLargeError):
        validate_file(make_upload(size=settings.max_resume_size + 1), settings)


def test_profile_photo_limit_is_smaller_than_resume_limit(settings):
    upload = make_upload(
        field_name="profilePhoto",
        filename="me.png",
        mime_type="image/png",
        size=3 * MB,
    )
    with pytest.raises(FileTooLargeError):
        validate_file(upload, settings)


def test_resume_at_exact_limit_passes(settings):
    validate_file(make_upload(size=settings.max_resume_size), settings)


def test_no_uploads_rejected(settings):
    with pytest.raises(ValidationError):
        validate_uploads([], settings)


def test_more_than_two_files_rejected(settings):
    uploads = [make_upload(), make_upload(), make_upload()]

    with pytest.raises(TooManyFilesError) as exc_info:
        validate_uploads(uploads, settings)

    assert exc_info.value.limit == 2


def test_aggregate_size_limit(settings):
    tight = settings.model_copy(update={"max_upload_size": 3 * MB})
    uploads = [
        make_upload(size=2 * MB),
        make_upload(field_name="profilePhoto", filename="me.png", mime_type="image/png", size=2 * MB),
    ]

    with pytest.raises(FileTooLargeError) as exc_info:
        validate_uploads(uploads, tight)

    assert exc_info.value.size_bytes == 4 * MB
    assert exc_info.value.field_name is None


def test_one_bad_file_fails_whole_request(settings):
    uploads = [
        make_upload(),
        make_upload(field_name="profilePhoto", filename="me.gif", mime_type="image/gif"),
    ]

    with pytest.raises(InvalidMimeTypeError):
        validate_uploads(uploads, settings)


@pytest.mark.parametrize("filename,expected", [
    ("cv.pdf", ".pdf"),
    ("CV.PDF", ".pdf"),
    ("archive.tar.gz", ".gz"),
    ("noext", ""),
    ("", ""),
])
def test_get_file_extension(filename, expected):
    assert get_file_extension(filename) == expected


def test_measure_rewinds_stream():
    stream = io.BytesIO(b"12345")
    stream.read(2)

    assert measure(stream) == 5
    assert stream.tell() == 0


def test_supported_formats(settings):
    formats = get_supported_formats(settings)

    assert ".docx" in formats["resume"]["extensions"]
    assert "image/png" in formats["profilePhoto"]["mime_types"]
    assert formats["max_files_per_request"] == 2
