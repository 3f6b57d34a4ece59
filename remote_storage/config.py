from typing import Any

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Backend selection
    STORAGE_TARGET: str | None = None  # CLOUDINARY | GCS | AWS_S3
    # Static parameter bag, e.g. {"bucket": "uploads"} or {"Bucket": "uploads"}
    STORAGE_PARAMS: dict[str, Any] = {}

    # Upload behavior
    UPLOAD_CHUNK_SIZE: int | None = None
    UPLOAD_PUBLIC_ID: str | None = None
    UPLOAD_TRASH_DIR: str | None = None  # system temp dir when unset
    S3_QUEUE_SIZE: int | None = None
    S3_LEAVE_PARTS_ON_ERROR: bool = False

    # Cloudinary credentials
    CLOUDINARY_CLOUD_NAME: str | None = None
    CLOUDINARY_API_KEY: str | None = None
    CLOUDINARY_API_SECRET: str | None = None

    # Google Cloud Storage
    GCS_PROJECT: str | None = None

    # AWS S3 (or any S3-compatible endpoint)
    AWS_REGION: str | None = None
    AWS_ENDPOINT_URL: str | None = None
    AWS_ACCESS_KEY_ID: str | None = None
    AWS_SECRET_ACCESS_KEY: str | None = None

    LOG_LEVEL: str = "INFO"

    # Read from .env as well; variables not declared here are ignored
    model_config = {"env_file": ".env", "extra": "ignore"}

    def client_config(self) -> dict[str, Any]:
        """SDK client configuration for the selected target, without unset values."""
        target = (self.STORAGE_TARGET or "").upper()
        if target == "CLOUDINARY":
            config = {
                "cloud_name": self.CLOUDINARY_CLOUD_NAME,
                "api_key": self.CLOUDINARY_API_KEY,
                "api_secret": self.CLOUDINARY_API_SECRET,
                "secure": True,
            }
        elif target == "GCS":
            config = {"project": self.GCS_PROJECT}
        elif target == "AWS_S3":
            config = {
                "region_name": self.AWS_REGION,
                "endpoint_url": self.AWS_ENDPOINT_URL,
                "aws_access_key_id": self.AWS_ACCESS_KEY_ID,
                "aws_secret_access_key": self.AWS_SECRET_ACCESS_KEY,
            }
        else:
            config = {}
        return {key: value for key, value in config.items() if value is not None}

    def upload_options(self) -> dict[str, Any]:
        """Behavioral upload options, without unset values."""
        options = {
            "chunk_size": self.UPLOAD_CHUNK_SIZE,
            "public_id": self.UPLOAD_PUBLIC_ID,
            "trash": self.UPLOAD_TRASH_DIR,
            "queue_size": self.S3_QUEUE_SIZE,
            "leave_parts_on_error": self.S3_LEAVE_PARTS_ON_ERROR,
        }
        return {key: value for key, value in options.items() if value is not None}


settings = Settings()
