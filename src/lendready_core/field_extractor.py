"""Structured field extraction from recognized document text.

Pulls the KYB fields an intake form is prefilled with out of OCR or PDF text:

- taxId: federal EIN, digits only
- dunsNumber: D-U-N-S number, digits only
- legalBusinessName: text following a name label
- dateEstablished: formation date, normalized to YYYY-MM-DD
- businessAddressStreet: text following an address label

Every extractor is independent and the first match in the text wins. A field
that is not found, or whose value cannot be parsed, is left out of the result.
"""

import re
from datetime import date, datetime
from typing import Optional

import structlog

from .models.documents import ExtractedFields

logger = structlog.get_logger()


TAX_ID = "taxId"
DUNS_NUMBER = "dunsNumber"
LEGAL_BUSINESS_NAME = "legalBusinessName"
DATE_ESTABLISHED = "dateEstablished"
BUSINESS_ADDRESS_STREET = "businessAddressStreet"

FIELD_VOCABULARY = (
    TAX_ID,
    DUNS_NUMBER,
    LEGAL_BUSINESS_NAME,
    DATE_ESTABLISHED,
    BUSINESS_ADDRESS_STREET,
)


class FieldExtractor:
    """
    Regular-expression extractor for business identity fields.

    Labels may be followed by a colon or by whitespace. Captures never run
    past the end of the line they start on.
    """

    # Label/value separator: a colon or plain spacing, on the same line
    _SEP = r'(?:[^\S\r\n]*:[^\S\r\n]*|[^\S\r\n]+)'

    FIELD_PATTERNS = {
        TAX_ID: r'\b(\d{2}-?\d{7})\b',
        DUNS_NUMBER: (
            r'\bD-?U-?N-?S[^\S\r\n]*:?[^\S\r\n]*'
            r'(?:No|Number|#)?\.?[^\S\r\n]*:?[^\S\r\n]*'
            r'(\d{2}-?\d{3}-?\d{4})\b'
        ),
        LEGAL_BUSINESS_NAME: (
            r'(?:Legal[^\S\r\n]?Name|Business[^\S\r\n]?Name|Company[^\S\r\n]?Name)'
            + _SEP + r'([^\r\n]+)'
        ),
        DATE_ESTABLISHED: (
            r'Date[^\S\r\n]?(?:of(?:[^\S\r\n]+(?:Formation|Incorporation|Organization|Establishment))?'
            r'|Formation|Established|Incorporated|Formed)'
            + _SEP + r'([^\r\n]+)'
        ),
        BUSINESS_ADDRESS_STREET: (
            r'(?:Address|Location|Place[^\S\r\n]?of[^\S\r\n]?Business)'
            + _SEP + r'([^\r\n]+)'
        ),
    }

    DATE_FORMATS = [
        '%m/%d/%Y',
        '%m-%d-%Y',
        '%Y-%m-%d',
        '%B %d, %Y',
        '%B %d %Y',
        '%b %d, %Y',
        '%b %d %Y',
        '%d %B %Y',
        '%B %Y',
    ]

    def __init__(self):
        """Compile the field patterns."""
        self._compiled = {
            name: re.compile(pattern, re.IGNORECASE)
            for name, pattern in self.FIELD_PATTERNS.items()
        }

    def extract(self, text: Optional[str]) -> ExtractedFields:
        """Extract every field found in the text.

        Args:
            text: Recognized document text (None or blank yields no fields)

        Returns:
            Mapping of field name to normalized value
        """
        fields: ExtractedFields = {}
        if not text or not text.strip():
            return fields

        for name, pattern in self._compiled.items():
            match = pattern.search(text)
            if not match:
                continue
            value = self._normalize(name, match.group(1))
            if value:
                fields[name] = value

        logger.debug("fields_extracted", fields=sorted(fields))
        return fields

    def _normalize(self, name: str, raw_value: str) -> Optional[str]:
        """Normalize a captured value for its field."""
        if name in (TAX_ID, DUNS_NUMBER):
            return raw_value.replace("-", "")
        if name == DATE_ESTABLISHED:
            parsed = self._parse_date(raw_value)
            if parsed is None:
                logger.debug("date_unparseable", raw_value=raw_value.strip())
                return None
            return parsed.isoformat()
        return raw_value.strip() or None

    def _parse_date(self, value: str) -> Optional[date]:
        """Parse a date string into a date object."""
        value = " ".join(value.split()).rstrip(".,")
        for fmt in self.DATE_FORMATS:
            try:
                return datetime.strptime(value, fmt).date()
            except ValueError:
                continue

        return None


_default_extractor = FieldExtractor()


def extract_fields(text: Optional[str]) -> ExtractedFields:
    """Extract structured fields from recognized text.

    Example:
        >>> extract_fields("EIN: 12-3456789")
        {'taxId': '123456789'}
    """
    return _default_extractor.extract(text)
