"""
Upload staging helpers.

Uploaded files are written to a temporary file under UPLOAD_DIR for the
duration of a request and removed on every exit path.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator
import asyncio
import logging
import os
import tempfile

from fastapi import Request, UploadFile

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
DISCONNECT_POLL_INTERVAL = 0.5


class ClientDisconnected(Exception):
    """The client went away before the analysis finished."""


@asynccontextmanager
async def staged_upload(upload: UploadFile, upload_dir: str, max_bytes: int) -> AsyncIterator[str]:
    """
    Stage an upload on disk.

    Yields:
        Path of the staged file

    Raises:
        ValidationError: If the upload is larger than max_bytes
    """
    os.makedirs(upload_dir, exist_ok=True)
    suffix = os.path.splitext(upload.filename or "")[1]
    fd, path = tempfile.mkstemp(prefix="upload-", suffix=suffix, dir=upload_dir)
    try:
        written = 0
        with os.fdopen(fd, "wb") as staged:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_bytes:
                    raise ValidationError(
                        f"File too large (limit {max_bytes // (1024 * 1024)} MB)", field="file"
                    )
                staged.write(chunk)
        logger.info(f"Staged upload {upload.filename} ({written} bytes)")
        yield path
    finally:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass


async def run_until_disconnected(request: Request, coro):
    """
    Run a coroutine as a task, cancelling it if the client disconnects.

    Raises:
        ClientDisconnected: If the client went away first
    """
    task = asyncio.ensure_future(coro)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_INTERVAL)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info("Client disconnected, cancelling analysis")
                task.cancel()
                raise ClientDisconnected()
    finally:
        if not task.done():
            task.cancel()
