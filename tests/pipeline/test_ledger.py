"""Tests for the in-memory ledger."""

import asyncio
import hashlib
import json

import pytest

from lendready_core.exceptions import LedgerStorageError
from lendready_core.models import CandidateDocument
from lendready_pipeline.interfaces import LedgerStore
from lendready_pipeline.ledger import DEFAULT_LEDGER_BASE_URL, InMemoryLedgerStore


METADATA = {"category": "primary", "verified": True}


@pytest.fixture
def local_pdf(tmp_path) -> CandidateDocument:
    path = tmp_path / "articles.pdf"
    path.write_bytes(b"%PDF-1.4 articles")
    return CandidateDocument(
        id="doc-1",
        name="articles.pdf",
        mime_type="application/pdf",
        size=17,
        source_path=str(path),
    )


class TestInMemoryLedgerStore:
    """Tests for InMemoryLedgerStore."""

    def test_hash_covers_content_and_metadata(self, local_pdf):
        """The hash is sha256 over the file bytes and sorted metadata JSON."""
        ledger = InMemoryLedgerStore()

        receipt = asyncio.run(ledger.store(local_pdf, METADATA))

        expected = hashlib.sha256(
            b"%PDF-1.4 articles" + json.dumps(METADATA, sort_keys=True).encode("utf-8")
        ).hexdigest()
        assert receipt.hash == expected
        assert receipt.url == f"{DEFAULT_LEDGER_BASE_URL}/{expected}"

    def test_entry_recorded(self, local_pdf):
        """Stored entries can be looked up by hash."""
        ledger = InMemoryLedgerStore("https://ledger.test/docs/")

        receipt = asyncio.run(ledger.store(local_pdf, METADATA))

        assert receipt.url.startswith("https://ledger.test/docs/")
        assert receipt.hash in ledger
        assert ledger.get(receipt.hash) == {
            "document_id": "doc-1",
            "name": "articles.pdf",
            "metadata": METADATA,
        }
        assert ledger.get("unknown") is None

    def test_store_is_idempotent(self, local_pdf):
        """Storing the same document twice yields one entry."""
        ledger = InMemoryLedgerStore()

        first = asyncio.run(ledger.store(local_pdf, METADATA))
        second = asyncio.run(ledger.store(local_pdf, METADATA))

        assert first == second
        assert len(ledger) == 1

    def test_metadata_changes_hash(self, local_pdf):
        """Different metadata gives a different entry."""
        ledger = InMemoryLedgerStore()

        first = asyncio.run(ledger.store(local_pdf, METADATA))
        second = asyncio.run(ledger.store(local_pdf, {**METADATA, "verified": False}))

        assert first.hash != second.hash
        assert len(ledger) == 2

    def test_remote_document_hashed_by_identity(self):
        """Documents without a local file are hashed by id, name and size."""
        ledger = InMemoryLedgerStore()
        remote = CandidateDocument(id="1AbC", name="scan.pdf", size=10)

        receipt = asyncio.run(ledger.store(remote, {}))

        expected = hashlib.sha256(b"1AbC\nscan.pdf\n10" + b"{}").hexdigest()
        assert receipt.hash == expected

    def test_unreadable_file(self, tmp_path):
        """A missing local file raises LedgerStorageError."""
        ledger = InMemoryLedgerStore()
        candidate = CandidateDocument(
            id="doc-2",
            name="gone.pdf",
            source_path=str(tmp_path / "gone.pdf"),
        )

        with pytest.raises(LedgerStorageError) as exc_info:
            asyncio.run(ledger.store(candidate, METADATA))
        assert exc_info.value.recoverable is True
        assert exc_info.value.details["document_id"] == "doc-2"
        assert len(ledger) == 0

    def test_satisfies_protocol(self):
        """InMemoryLedgerStore is a LedgerStore."""
        assert isinstance(InMemoryLedgerStore(), LedgerStore)
