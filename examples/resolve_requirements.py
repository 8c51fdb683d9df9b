#!/usr/bin/env python3
"""
Resolve a Loan Document Checklist and Run Intake on a Folder

This script resolves the document checklist for a business entity and,
when a folder is given, suggests matching files and runs them through the
intake pipeline (text recognition, field extraction, verification and
ledger storage).

Usage:
    python examples/resolve_requirements.py llc --state Delaware
    python examples/resolve_requirements.py s_corp --amount 750000 --instrument sba_loan
    python examples/resolve_requirements.py llc --state Delaware --folder ./uploads --hint primary

Settings are read from LENDREADY_* environment variables (see
lendready_pipeline.config).
"""

import argparse
import asyncio
import json
import sys
from datetime import date
from pathlib import Path

from lendready_core import (
    ApplicationProfile,
    DocumentHint,
    EntityType,
    FinancialInstrument,
    TransactionProfile,
    build_document_checklist,
)
from lendready_pipeline import (
    DocumentIntakePipeline,
    InMemoryLedgerStore,
    LendReadyConfig,
    LocalDirectoryProvider,
    PdfTextRecognizer,
    configure_logging,
)


def print_checklist(checklist) -> None:
    """Print the resolved checklist section by section."""
    entity = checklist.entity
    print(f"Entity:    {entity.entity_type.display_name}")
    print(f"Primary:   {entity.primary_document_type}")
    if entity.jurisdiction:
        print(f"State:     {entity.jurisdiction}")
    print()

    print("Required documents:")
    for document in entity.required_documents:
        print(f"  - {document}")
    for regulation in entity.regulations:
        print(f"  * {regulation}")
    if entity.filing_fees:
        print(f"  Filing fees: {entity.filing_fees}")
    if entity.special_notes:
        print(f"  Note: {entity.special_notes}")
    print()

    if checklist.tax is not None:
        tax = checklist.tax
        years = ", ".join(str(year) for year in checklist.tax_years)
        print(f"Tax returns ({tax.business_tax_years} years: {years}):")
        print(f"  Personal returns:  {'required' if tax.personal_tax_required else 'not required'}")
        print(f"  IRS transcript:    {'required' if tax.irs_transcript_required else 'not required'}")
        print(f"  Audited financials: {'required' if tax.audited_financials_required else 'not required'}")
        for schedule in tax.schedules_required:
            print(f"  - {schedule}")
        for document in tax.additional_documents:
            print(f"  + {document}")
        print()


async def run_intake(folder: Path, requirements, hint, config: LendReadyConfig) -> int:
    """Suggest files from a folder and run them through intake."""
    provider = LocalDirectoryProvider(folder)
    candidates = await provider.list_files()
    if not candidates:
        print("  No files found.")
        return 0

    pipeline = DocumentIntakePipeline(
        recognizer=PdfTextRecognizer(),
        ledger=InMemoryLedgerStore(config.intake.ledger_base_url),
        config=config,
    )

    suggestions = pipeline.suggest(candidates, requirements, hint)
    by_id = {candidate.id: candidate for candidate in candidates}
    print("Suggested files:")
    if not suggestions:
        print("  (none)")
    for suggestion in suggestions:
        name = by_id[suggestion.document_id].name
        print(f"  {suggestion.match_percent:3d}%  {name}  [{', '.join(suggestion.matched_keywords)}]")
    print()

    selected = [by_id[s.document_id] for s in suggestions] or candidates
    uploaded = await pipeline.process_batch(selected, requirements, hint)

    print("Intake results:")
    for document in uploaded.values():
        status = "VERIFIED" if document.verified else "unverified"
        confidence = (
            f"{document.verification_result.confidence:.0f}%"
            if document.verification_result is not None
            else "n/a"
        )
        print(f"  {status:<10} {confidence:>5}  {document.name}")
        if document.recognition_error:
            print(f"             recognition failed: {document.recognition_error}")
        if document.extracted_fields:
            print(f"             fields: {json.dumps(document.extracted_fields)}")
        print(f"             ledger: {document.url}")
    return len(uploaded)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Resolve loan document requirements and run intake on a folder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "entity_type",
        choices=[entity.value for entity in EntityType],
        help="Business entity type",
    )
    parser.add_argument(
        "--state",
        type=str,
        default=None,
        help="Jurisdiction of formation (e.g. Delaware)",
    )
    parser.add_argument(
        "--amount",
        type=str,
        default=None,
        help="Requested loan amount; enables tax requirements",
    )
    parser.add_argument(
        "--instrument",
        choices=[instrument.value for instrument in FinancialInstrument],
        default=None,
        help="Financial instrument requested",
    )
    parser.add_argument(
        "--folder", "-f",
        type=str,
        default=None,
        help="Folder of uploaded files to suggest and process",
    )
    parser.add_argument(
        "--hint",
        choices=[hint.value for hint in DocumentHint],
        default=DocumentHint.PRIMARY.value,
        help="Kind of document being uploaded (default: primary)",
    )
    parser.add_argument(
        "--json-only",
        action="store_true",
        help="Print the checklist as JSON and exit",
    )

    args = parser.parse_args()

    config = LendReadyConfig()
    configure_logging(config)

    entity_type = EntityType(args.entity_type)
    transaction = None
    if args.amount is not None:
        transaction = TransactionProfile(
            amount=args.amount,
            instrument=args.instrument,
            entity_type=entity_type,
        )

    application = ApplicationProfile(
        entity_type=entity_type,
        jurisdiction=args.state,
        transaction=transaction,
    )
    checklist = build_document_checklist(
        application,
        current_year=date.today().year,
        deduplicate=config.resolution.deduplicate,
    )

    if args.json_only:
        print(checklist.model_dump_json(indent=2))
        return

    print("=" * 70)
    print("LENDREADY - Document Checklist")
    print("=" * 70)
    print()
    print_checklist(checklist)

    if args.folder is None:
        return

    folder = Path(args.folder)
    if not folder.is_dir():
        print(f"Error: Folder not found: {folder}")
        sys.exit(1)

    print("=" * 70)
    print(f"Intake: {folder}")
    print("=" * 70)
    print()
    hint = DocumentHint(args.hint)
    requirements = checklist.entity.required_documents
    if hint is DocumentHint.TAX and checklist.tax is not None:
        requirements = checklist.tax.schedules_required + checklist.tax.additional_documents
    asyncio.run(run_intake(folder, requirements, hint, config))


if __name__ == "__main__":
    main()
