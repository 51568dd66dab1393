"""File Storage — video uploads under the public directory.

Invariants:
    - Uploads land in <public_dir>/temp as "<uuid4>_<epoch_ms>.<ext>"
      (ext must be 1-8 alphanumerics, otherwise mp4)
    - Only video/mp4 is accepted, at most max_upload_bytes; oversized partial files are removed
    - A movie's file is moved temp -> <public_dir>/movie when the movie is saved;
      the stored path is the URL path "public/movie/<name>"
    - A temp file is orphaned when its embedded timestamp is older than the max age,
      or when its name does not carry a parseable timestamp

Design Decisions:
    - Directories are created lazily on first write (no dependency on app startup)
    - is_writable backs the readiness probe
"""

import logging
import os
import re
import uuid
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from movie_catalog.config import get_settings
from movie_catalog.core.errors import BadRequestError

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPE = "video/mp4"
DEFAULT_EXTENSION = "mp4"
MOVIE_URL_PREFIX = "public/movie"
_CHUNK_SIZE = 1024 * 1024
_EXTENSION_RE = re.compile(r"[A-Za-z0-9]{1,8}")


def generate_file_name(original_name: str | None, now_ms: int) -> str:
    parts = (original_name or "").split(".")
    extension = parts[-1] if len(parts) > 1 else ""
    if not _EXTENSION_RE.fullmatch(extension):
        extension = DEFAULT_EXTENSION
    return f"{uuid.uuid4()}_{now_ms}.{extension}"


def parse_upload_timestamp(file_name: str) -> int | None:
    """Epoch-ms embedded in an upload name, or None if the name is foreign."""
    stem = file_name.split(".")[0]
    parts = stem.split("_")
    if len(parts) != 2:
        return None
    try:
        return int(parts[1])
    except ValueError:
        return None


class FileStorage:
    """Temp/movie directories under a public root."""

    def __init__(self, public_dir: str | Path, max_upload_bytes: int):
        self.public_dir = Path(public_dir)
        self.temp_dir = self.public_dir / "temp"
        self.movie_dir = self.public_dir / "movie"
        self.max_upload_bytes = max_upload_bytes

    def ensure_dirs(self) -> None:
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        self.movie_dir.mkdir(parents=True, exist_ok=True)

    def is_writable(self) -> bool:
        """Both directories exist (created if needed) and accept new files."""
        try:
            self.ensure_dirs()
        except OSError as e:
            logger.error(f"Upload directories unavailable: {e}")
            return False
        return all(os.access(d, os.W_OK) for d in (self.temp_dir, self.movie_dir))

    async def save_upload(self, upload: UploadFile, now_ms: int) -> str:
        if upload.content_type != ALLOWED_CONTENT_TYPE:
            raise BadRequestError(
                "Only MP4 video files can be uploaded", "INVALID_FILE_TYPE",
            )
        self.ensure_dirs()
        file_name = generate_file_name(upload.filename, now_ms)
        target = self.temp_dir / file_name

        written = 0
        with target.open("wb") as out:
            while chunk := await upload.read(_CHUNK_SIZE):
                written += len(chunk)
                if written > self.max_upload_bytes:
                    break
                await run_in_threadpool(out.write, chunk)

        if written > self.max_upload_bytes:
            target.unlink(missing_ok=True)
            raise BadRequestError(
                f"File exceeds the {self.max_upload_bytes} byte limit",
                "FILE_TOO_LARGE",
            )
        logger.info("Upload stored", extra={"file_name": file_name})
        return file_name

    def check_upload(self, file_name: str) -> str:
        """Validate a pending upload and return the URL path it will be served from."""
        if not file_name or Path(file_name).name != file_name:
            raise BadRequestError("Invalid movie file name", "INVALID_FILE_NAME")
        if not (self.temp_dir / file_name).is_file():
            raise BadRequestError(
                f"Uploaded file '{file_name}' not found", "FILE_NOT_FOUND",
            )
        return f"{MOVIE_URL_PREFIX}/{file_name}"

    def move_to_movie_dir(self, file_name: str) -> str:
        url_path = self.check_upload(file_name)
        self.movie_dir.mkdir(parents=True, exist_ok=True)
        (self.temp_dir / file_name).rename(self.movie_dir / file_name)
        return url_path

    def restore_to_temp(self, file_name: str) -> None:
        """Undo move_to_movie_dir after the movie row failed to persist."""
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        (self.movie_dir / file_name).rename(self.temp_dir / file_name)
        logger.warning("Upload returned to temp", extra={"file_name": file_name})

    def find_orphans(self, now_ms: int, max_age_ms: int) -> list[Path]:
        if not self.temp_dir.is_dir():
            return []
        orphans = []
        for path in sorted(self.temp_dir.iterdir()):
            if not path.is_file():
                continue
            uploaded_at = parse_upload_timestamp(path.name)
            if uploaded_at is None or now_ms - uploaded_at > max_age_ms:
                orphans.append(path)
        return orphans

    def delete_files(self, paths: list[Path]) -> int:
        deleted = 0
        for path in paths:
            try:
                path.unlink()
                deleted += 1
            except FileNotFoundError:
                continue
        return deleted


def get_file_storage() -> FileStorage:
    """FastAPI dependency — storage rooted at settings.public_dir."""
    settings = get_settings()
    return FileStorage(settings.public_dir, settings.max_upload_bytes)
