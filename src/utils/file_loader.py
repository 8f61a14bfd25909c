import os
import asyncio
import logging
import tempfile
import aiofiles
from langchain_pymupdf4llm import PyMuPDF4LLMLoader
from langchain_community.document_loaders import (
    Docx2txtLoader,
    UnstructuredWordDocumentLoader,
)
from utils.constants import LOADER_BY_MIME

logger = logging.getLogger(__name__)


def get_loader(file_path: str, loader_key: str):
    if loader_key == "pdf":
        return PyMuPDF4LLMLoader(file_path)
    elif loader_key == "docx":
        return Docx2txtLoader(file_path)
    elif loader_key == "doc":
        return UnstructuredWordDocumentLoader(file_path, mode="single")
    raise ValueError(f"Unsupported loader: {loader_key}")


def load_document(file_path: str, loader_key: str) -> str:
    """Load text content from a file with the loader matching its type."""
    loader = get_loader(file_path, loader_key)
    parts = []
    try:
        for doc in loader.lazy_load():
            parts.append(doc.page_content)
    except Exception as e:
        if not parts:
            raise
        # keep the pages read before the failure
        logger.warning(f"Partial extraction from {file_path}: {e}")
    return "\n\n".join(parts)


def resolve_loader_key(media_type: str, file_name: str = None) -> str:
    key = LOADER_BY_MIME.get((media_type or "").split(";")[0].strip().lower())
    if key:
        return key
    if file_name and "." in file_name:
        ext = file_name.rsplit(".", 1)[-1].lower()
        if ext in {"pdf", "docx", "doc", "txt"}:
            return ext
    return "txt"


async def extract_text(content: bytes, media_type: str, file_name: str = None) -> str:
    """
    Convert an uploaded document into plain text.

    Never raises: failures are logged and whatever text was recovered
    (possibly an empty string) is returned.
    """
    if not content:
        return ""

    loader_key = resolve_loader_key(media_type, file_name)
    if loader_key == "txt":
        return content.decode("utf-8", errors="replace")

    fd, tmp_path = tempfile.mkstemp(suffix=f".{loader_key}")
    os.close(fd)
    try:
        async with aiofiles.open(tmp_path, "wb") as out_file:
            await out_file.write(content)
        return await asyncio.to_thread(load_document, tmp_path, loader_key)
    except Exception as e:
        logger.error(f"Error extracting text from {file_name} ({media_type}): {e}")
        return ""
    finally:
        try:
            os.remove(tmp_path)
        except OSError as e:
            logger.warning(f"Failed to delete temporary file {tmp_path}: {e}")
