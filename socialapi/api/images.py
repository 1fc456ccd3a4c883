"""Standalone image upload, used by GraphQL clients before createPost/updatePost."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from socialapi.api.dependencies import get_current_user_id
from socialapi.schemas.post import UploadResponse
from socialapi.services.images import clear_image, save_image

router = APIRouter(tags=["images"])


@router.put(
    "/post-image",
    response_model=UploadResponse,
    dependencies=[Depends(get_current_user_id)],
)
def upload_post_image(
    response: Response,
    image: Annotated[UploadFile | None, File()] = None,
    old_path: Annotated[str | None, Form(alias="oldPath")] = None,
):
    """Store an image and return its path; optionally remove the one it replaces."""
    if image is None or not image.filename:
        return UploadResponse(message="No file provided!")

    file_path = save_image(image.file, image.filename)
    if old_path:
        clear_image(old_path)

    response.status_code = status.HTTP_201_CREATED
    return UploadResponse(message="File stored.", file_path=file_path)
