"""
Resume Routes

GET /resume/{user_id} - Serve a user's resume

Resumes stored in our GridFS bucket are streamed with a filename built
from the user's name; external ones (e.g. a Cloudinary URL) get a redirect.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from jobportal.api.deps import get_file_store, get_user_service
from jobportal.api.routes.file_routes import stream_stored_object
from jobportal.core.exceptions import NotFoundError
from jobportal.services.file_storage import FileStore
from jobportal.services.user_service import UserService
from jobportal.utils.file_upload import get_file_extension
from jobportal.schemas.schemas import error_responses

router = APIRouter(prefix="/resume", tags=["Resume"], responses=error_responses(404, 500))


@router.get("/{user_id}")
def get_resume(
    user_id: str,
    users: UserService = Depends(get_user_service),
    store: FileStore = Depends(get_file_store),
):
    """Stream or redirect to the resume of the given user."""
    resume = users.get_resume(user_id)

    file_id = resume.stored_file_id
    if file_id is None:
        return RedirectResponse(resume.location, status_code=302)

    try:
        obj = store.open(file_id)
    except NotFoundError:
        raise NotFoundError("Resume not found")

    filename = resume.download_filename(get_file_extension(obj.filename))
    return stream_stored_object(obj, filename=filename)
