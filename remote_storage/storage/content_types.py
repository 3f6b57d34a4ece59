"""
Filename extension to MIME type lookup used when uploading to the object store.
"""

DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES: dict[str, str] = {
    "txt": "text/plain",
    "css": "text/css",
    "csv": "text/csv",
    "html": "text/html",
    "htm": "text/html",
    "ics": "text/calendar",
    "js": "text/javascript",
    "mjs": "text/javascript",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "apng": "image/apng",
    "avif": "image/avif",
    "bmp": "image/bmp",
    "tiff": "image/tiff",
    "tif": "image/tiff",
    "webp": "image/webp",
    "ico": "image/vnd.microsoft.icon",
    "svg": "image/svg+xml",
    "json": "application/json",
    "pdf": "application/pdf",
    "rtf": "application/rtf",
    "zip": "application/zip",
    "gz": "application/gzip",
    "rar": "application/vnd.rar",
    "jar": "application/java-archive",
    "php": "application/x-httpd-php",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "ppt": "application/vnd.ms-powerpoint",
    "avi": "video/x-msvideo",
    "mp4": "video/mp4",
    "mpeg": "video/mpeg",
    "webm": "video/webm",
    "ts": "video/mp2t",
    "aac": "audio/aac",
    "midi": "audio/midi",
    "opus": "audio/opus",
    "wav": "audio/wav",
    "mp3": "audio/mpeg",
}


def resolve_content_type(filename: str) -> str:
    """
    Resolve a MIME type from the last extension of a filename.

    Args:
        filename: Original filename, e.g. "report.pdf" or "archive.tar.gz"

    Returns:
        The MIME type, or application/octet-stream for unknown extensions
    """
    if "." not in filename:
        return DEFAULT_CONTENT_TYPE
    ext = filename.rsplit(".", 1)[1].lower()
    return CONTENT_TYPES.get(ext, DEFAULT_CONTENT_TYPE)
