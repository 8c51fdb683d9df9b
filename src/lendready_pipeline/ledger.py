"""In-process document ledger.

InMemoryLedgerStore is the reference LedgerStore. Entries are content
addressed: the hash covers the document bytes (or its identity when the
bytes are not available locally) together with the intake metadata, and
an entry is never overwritten once stored.
"""

import asyncio
import hashlib
import json
from pathlib import Path
from typing import Any, Mapping, Optional

import structlog

from lendready_core.exceptions import LedgerStorageError
from lendready_core.models import CandidateDocument, LedgerReceipt

logger = structlog.get_logger()


DEFAULT_LEDGER_BASE_URL = "https://shield-ledger.example.com/documents"


class InMemoryLedgerStore:
    """Content-addressed ledger kept in memory."""

    def __init__(self, base_url: str = DEFAULT_LEDGER_BASE_URL):
        self.base_url = base_url.rstrip("/")
        self._entries: dict[str, dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, ledger_hash: object) -> bool:
        return ledger_hash in self._entries

    def get(self, ledger_hash: str) -> Optional[dict[str, Any]]:
        """Return a stored entry, or None if the hash is unknown."""
        entry = self._entries.get(ledger_hash)
        return dict(entry) if entry is not None else None

    async def store(
        self,
        candidate: CandidateDocument,
        metadata: Mapping[str, Any],
    ) -> LedgerReceipt:
        """Store a document and return its receipt.

        Storing the same content and metadata again returns the same receipt.

        Raises:
            LedgerStorageError: If the local file cannot be read or the
                metadata cannot be serialized
        """
        content = await asyncio.to_thread(self._read_content, candidate)
        try:
            encoded_metadata = json.dumps(dict(metadata), sort_keys=True, default=str)
        except (TypeError, ValueError) as e:
            raise LedgerStorageError(
                f"Metadata is not serializable: {e}",
                document_id=candidate.id,
                recoverable=False,
            ) from e

        digest = hashlib.sha256()
        digest.update(content)
        digest.update(encoded_metadata.encode("utf-8"))
        ledger_hash = digest.hexdigest()

        if ledger_hash not in self._entries:
            self._entries[ledger_hash] = {
                "document_id": candidate.id,
                "name": candidate.name,
                "metadata": json.loads(encoded_metadata),
            }
            logger.info(
                "ledger_entry_stored",
                document_id=candidate.id,
                ledger_hash=ledger_hash,
            )

        return LedgerReceipt(hash=ledger_hash, url=f"{self.base_url}/{ledger_hash}")

    @staticmethod
    def _read_content(candidate: CandidateDocument) -> bytes:
        if candidate.source_path:
            try:
                return Path(candidate.source_path).read_bytes()
            except OSError as e:
                raise LedgerStorageError(
                    f"Failed to read document: {e}",
                    document_id=candidate.id,
                    details={"source": candidate.source_path},
                ) from e
        identity = "\n".join([candidate.id, candidate.name, str(candidate.size)])
        return identity.encode("utf-8")
