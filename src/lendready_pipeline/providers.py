"""Candidate file sources.

Cloud drive listings arrive as raw dictionaries in the drive API's casing
({id, name, mimeType, size, lastModified, webViewLink}); they are converted
with candidate_from_provider_file(). LocalDirectoryProvider lists files
from a folder on disk.
"""

import asyncio
import mimetypes
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Union

import structlog

from lendready_core.models import CandidateDocument

logger = structlog.get_logger()


def candidate_from_provider_file(raw: Mapping[str, Any]) -> CandidateDocument:
    """Convert one provider listing entry to a CandidateDocument.

    Missing size defaults to 0 and missing lastModified to the current time.

    Args:
        raw: Provider entry with id, name and mimeType keys

    Raises:
        KeyError: If id or name is missing
    """
    data: dict[str, Any] = {
        "id": str(raw["id"]),
        "name": raw["name"],
        "mime_type": raw.get("mimeType") or "application/octet-stream",
        "size": raw.get("size") or 0,
        "web_view_link": raw.get("webViewLink"),
    }
    if raw.get("lastModified"):
        data["last_modified"] = raw["lastModified"]
    return CandidateDocument(**data)


class LocalDirectoryProvider:
    """
    File provider over a local directory.

    Hidden files are skipped. Files are listed in name order, with the
    absolute path as both id and source path.
    """

    def __init__(self, directory: Union[str, Path], *, recursive: bool = False):
        """
        Initialize the provider.

        Args:
            directory: Folder to list
            recursive: Include files in subfolders
        """
        self.directory = Path(directory)
        self.recursive = recursive

    async def list_files(self) -> list[CandidateDocument]:
        """List files in the directory as candidate documents.

        Raises:
            FileNotFoundError: If the directory does not exist
        """
        return await asyncio.to_thread(self._scan)

    def _scan(self) -> list[CandidateDocument]:
        if not self.directory.is_dir():
            raise FileNotFoundError(f"Directory not found: {self.directory}")

        pattern = "**/*" if self.recursive else "*"
        candidates = []
        for path in sorted(self.directory.glob(pattern)):
            if not path.is_file() or path.name.startswith("."):
                continue
            candidates.append(self._to_candidate(path))

        logger.info(
            "local_files_listed",
            directory=str(self.directory),
            files=len(candidates),
        )
        return candidates

    @staticmethod
    def _to_candidate(path: Path) -> CandidateDocument:
        stat = path.stat()
        mime_type, _ = mimetypes.guess_type(path.name)
        resolved = str(path.resolve())
        return CandidateDocument(
            id=resolved,
            name=path.name,
            mime_type=mime_type or "application/octet-stream",
            size=stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            source_path=resolved,
        )
