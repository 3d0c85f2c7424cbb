"""Local filesystem storage: the managed PDF library and the upload cache."""

from __future__ import annotations

import os
import shutil
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Sequence

import structlog

from pdfdesk.errors import DestinationExists, InvalidFileName, RenameError
from pdfdesk.schemas.common import ManagedFile, OutputKind
from pdfdesk.services.formatting import sanitize_file_name

logger = structlog.get_logger(__name__)

PDF_EXTENSION = ".pdf"


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class LibraryDirectory:
    """The single flat directory holding every generated PDF.

    The directory itself is the source of truth: nothing is indexed, entries
    are enumerated on demand.
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    # ------------------------------------------------------------------
    # Directory
    # ------------------------------------------------------------------

    def ensure_directory(self) -> Path:
        """Return the managed directory, creating it (with parents) if absent."""
        if not self.root.is_dir():
            self.root.mkdir(parents=True, exist_ok=True)
            logger.info("library_created", path=str(self.root))
        return self.root

    def resolve(self, name: str) -> Path:
        """Map a base name to a path inside the managed directory."""
        if not name or name in (".", "..") or Path(name).name != name or "\\" in name:
            raise InvalidFileName(f"Not a library file name: {name!r}")
        return self.ensure_directory() / name

    def output_path(self, kind: OutputKind, timestamp: int | None = None) -> Path:
        """Return ``<kind>_<epochMillis>.pdf`` inside the managed directory."""
        ts = epoch_millis() if timestamp is None else timestamp
        return self.ensure_directory() / f"{kind.value}_{ts}{PDF_EXTENSION}"

    def split_output_path(self, index: int, timestamp: int) -> Path:
        """Return ``split_<index>_<timestamp>.pdf``; ``index`` is 1-based."""
        return self.ensure_directory() / f"{OutputKind.SPLIT.value}_{index}_{timestamp}{PDF_EXTENSION}"

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list_files(self) -> list[ManagedFile]:
        """List the PDFs of the library, most recently modified first."""
        root = self.ensure_directory()
        files: list[ManagedFile] = []

        with os.scandir(root) as entries:
            for entry in entries:
                if not entry.name.lower().endswith(PDF_EXTENSION):
                    continue
                if not entry.is_file():
                    continue
                try:
                    stat = entry.stat()
                except FileNotFoundError:
                    # removed after the directory was read
                    continue
                files.append(ManagedFile(
                    name=entry.name,
                    path=entry.path,
                    size=stat.st_size,
                    modification_time=stat.st_mtime,
                ))

        # sorted() is stable, so ties keep directory order
        files = sorted(files, key=lambda f: f.modification_time, reverse=True)
        logger.debug("library_listed", count=len(files))
        return files

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def delete_file(self, identifier: str | Path) -> None:
        """Remove an entry. Deleting a missing entry is not an error."""
        path = Path(identifier)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug("file_already_absent", path=str(path))
            return
        logger.info("file_deleted", path=str(path))

    def rename_file(self, identifier: str | Path, new_base_name: str) -> str:
        """Rename an entry within its directory and return the new identifier.

        Raises:
            RenameError: The name is empty after sanitization or the
                destination already exists. The original is left untouched.
            FileNotFoundError: The source entry does not exist.
        """
        source = Path(identifier)
        base = sanitize_file_name(new_base_name)
        if not base:
            raise RenameError("File name cannot be empty.")

        destination = source.parent / f"{base}{PDF_EXTENSION}"
        if destination == source:
            return str(source)
        if destination.exists():
            raise DestinationExists(f'A file named "{destination.name}" already exists.')
        if not source.exists():
            raise FileNotFoundError(f"File not found: {source}")

        os.rename(source, destination)
        logger.info("file_renamed", source=source.name, destination=destination.name)
        return str(destination)


# ---------------------------------------------------------------------------
# Upload cache
# ---------------------------------------------------------------------------

def uploads_dir(cache_root: Path | str) -> Path:
    d = Path(cache_root)
    d.mkdir(parents=True, exist_ok=True)
    return d


def save_upload(cache_root: Path | str, stream: BinaryIO, filename: str | None) -> Path:
    """Copy a picked file into the cache, keeping its extension."""
    suffix = Path(filename or "").suffix.lower()
    path = uploads_dir(cache_root) / f"{uuid.uuid4().hex}{suffix}"
    with path.open("wb") as out:
        shutil.copyfileobj(stream, out)
    return path


def discard_upload(path: Path | str) -> None:
    """Remove a cached upload; missing files are ignored."""
    Path(path).unlink(missing_ok=True)


@contextmanager
def cached_uploads(cache_root: Path | str, uploads: Sequence) -> Iterator[list[Path]]:
    """Cache uploaded files for the duration of a transform.

    ``uploads`` are objects with ``file`` and ``filename`` attributes, such as
    FastAPI's ``UploadFile``. The cached copies are removed on exit.
    """
    paths: list[Path] = []
    try:
        for upload in uploads:
            paths.append(save_upload(cache_root, upload.file, upload.filename))
        yield paths
    finally:
        for path in paths:
            discard_upload(path)
