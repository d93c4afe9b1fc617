"""
Request body parsing for category write endpoints.

Writes arrive either as JSON or as multipart forms carrying image files. In a
form, each file's field name is the image type it is stored as
(``thumbnail``, ``banner``, ``mobile`` or ``gallery``) and an optional
``alt_text`` field applies to all of them.
"""

import json
from typing import List, Optional, Tuple, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile

from catalog.exceptions import ValidationFailure
from catalog.models.category import ImageType
from catalog.services.media_store import MediaStore, StoredMedia

SchemaT = TypeVar("SchemaT", bound=BaseModel)

# Form fields that may repeat and are always read as lists
LIST_FIELDS = {"ancestors"}

FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")

IMAGE_FIELDS = {image_type.value for image_type in ImageType}


async def read_category_request(
    request: Request,
    schema: Type[SchemaT],
    media_store: MediaStore
) -> Tuple[SchemaT, List[StoredMedia], Optional[str]]:
    """Validate the body against ``schema`` and store any uploaded files."""
    content_type = request.headers.get("content-type", "")
    files: List[Tuple[str, UploadFile]] = []

    if content_type.startswith(FORM_TYPES):
        form = await request.form()
        data = {}
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                files.append((key, value))
            elif key in LIST_FIELDS:
                data.setdefault(key, []).append(value)
            else:
                data[key] = value
    else:
        body = await request.body()
        try:
            data = json.loads(body) if body else {}
        except ValueError as e:
            raise ValidationFailure("Request body is not valid JSON") from e
        if not isinstance(data, dict):
            raise ValidationFailure("Request body must be a JSON object")

    alt_text = data.pop("alt_text", None)

    try:
        payload = schema.model_validate(data)
    except ValidationError as e:
        raise ValidationFailure.from_pydantic(e) from e

    # Nothing is stored unless every file field names an image type
    unknown = [field_name for field_name, _ in files if field_name not in IMAGE_FIELDS]
    if unknown:
        raise ValidationFailure(
            "Unknown image field",
            [
                {"field": name, "message": f"must be one of: {', '.join(sorted(IMAGE_FIELDS))}"}
                for name in unknown
            ]
        )

    uploads = []
    for field_name, upload in files:
        content = await upload.read()
        uploads.append(media_store.save(content, upload.filename, field_name))

    return payload, uploads, alt_text
