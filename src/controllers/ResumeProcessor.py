import logging
from fastapi import UploadFile
from .BaseController import BaseController
from utils.constants import MIME_MAP
from utils.file_loader import extract_text

logger = logging.getLogger(__name__)


class ResumeProcessor(BaseController):
    """Validates uploaded resumes and turns them into plain text."""

    def __init__(self, capabilities=None):
        super().__init__(capabilities)

    @staticmethod
    def resolve_media_type(file: UploadFile) -> str:
        media_type = (file.content_type or "").split(";")[0].strip().lower()
        if media_type and media_type != "application/octet-stream":
            return media_type
        # some clients send every file as octet-stream
        if file.filename and "." in file.filename:
            return MIME_MAP.get(file.filename.rsplit(".", 1)[-1].lower(), media_type)
        return media_type

    def validate_file_type(self, media_type: str) -> bool:
        return media_type in self.app_settings.FILE_ALLOWED_TYPES

    def validate_file_size(self, file_size: int) -> bool:
        return file_size <= self.app_settings.FILE_MAX_SIZE_MB * self.app_settings.FILE_BYTES_TO_MB

    async def validate_uploads(self, job_description: str, files: list[UploadFile]) -> tuple[bool, str]:
        """Check the whole batch before anything is sent to an external service."""
        if not job_description or not job_description.strip():
            return False, "Job description is required"
        if not files:
            return False, "At least one resume file is required"
        max_files = self.app_settings.UPLOAD_MAX_FILES
        if len(files) > max_files:
            return False, f"Too many files! Max limit is {max_files}."

        for file in files:
            media_type = self.resolve_media_type(file)
            if not self.validate_file_type(media_type):
                return False, f"File type not allowed: {file.filename} ({media_type or 'unknown'})"
            size = file.size
            if size is None:
                file.file.seek(0, 2)
                size = file.file.tell()
                file.file.seek(0)
            if not self.validate_file_size(size):
                return False, f"File {file.filename} exceeds the {self.app_settings.FILE_MAX_SIZE_MB}MB limit"
        return True, ""

    async def extract(self, file: UploadFile) -> str:
        content = await file.read()
        text = await extract_text(content, self.resolve_media_type(file), file.filename)
        logger.info(f"Extracted {len(text)} characters from {file.filename}")
        return text.strip()
