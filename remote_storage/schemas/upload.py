from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UploadOutcome(BaseModel):
    """
    Backend-agnostic record of a stored file.

    Normalizers only pass the fields a backend actually reported, so
    ``model_fields_set`` tells "not provided" apart from an empty value.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    filename: str
    path: str | None = None
    bucket: str | None = None
    folder: str | None = None
    content_type: str | None = None
    etag: str | None = None
    metadata: dict[str, str] | None = None
    size: int | None = None
    storage_class: str | None = None
    time_created: datetime | str | None = None
    version_id: str | None = None
    encryption: str | None = None
    height: int | None = None
    width: int | None = None
    signature: str | None = None


def build_outcome(**fields) -> UploadOutcome:
    """Create an outcome from the fields that are not None."""
    return UploadOutcome(**{k: v for k, v in fields.items() if v is not None})


REJECTED_FILENAME = "/"


def rejected_outcome() -> UploadOutcome:
    """Synthetic outcome reported for an upload the validator refused."""
    return UploadOutcome(path=None, size=0, filename=REJECTED_FILENAME)
