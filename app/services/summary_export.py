from __future__ import annotations

from io import BytesIO
from typing import Any, Iterable, List, Sequence

from openpyxl import Workbook
from openpyxl.utils.exceptions import IllegalCharacterError

from app.core.exceptions import SerializationFailure
from app.core.logging_config import logger
from app.domain.submission import Submission
from app.schemas.onboarding import FilePayload
from app.services.s3_keys import XLSX_CONTENT_TYPE, Section, build_summary_key
from app.services.storage import Storage

BUSINESS_HEADERS = [
    "Business Name",
    "Entity",
    "Industry",
    "Business Age(in Years)",
    "Registered Address",
    "Head Office Address",
]
BUSINESS_FIELDS = ["businessName", "entity", "industry", "businessAge", "registeredOffice", "headOffice"]

DOCUMENT_HEADERS = ["Document Name", "YES / NO"]

CLIENT_HEADERS = [
    "Client Name",
    "Client Type",
    "Last Invoice Amount",
    "Payment Cycle (in Days)",
    "Project Start Date",
    "Work Order Valid till",
]
CLIENT_FIELDS = ["clientName", "clientType", "invoiceSize", "paymentCycle", "startDate", "endDate"]


def build_workbook_bytes(sheet_name: str, headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> bytes:
    """Eén worksheet: header + rijen, in-memory geserialiseerd naar xlsx."""
    try:
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name

        ws.append(list(headers))
        for row in rows:
            ws.append(list(row))

        buf = BytesIO()
        wb.save(buf)
        return buf.getvalue()
    except (ValueError, TypeError, IllegalCharacterError) as e:
        raise SerializationFailure(f"Could not build '{sheet_name}' spreadsheet: {e}") from e


def _presence(value: Any) -> str:
    return "YES" if FilePayload.from_value(value) is not None else "NO"


def business_rows(submission: Submission) -> List[List[Any]]:
    return [[submission.business.get(f) for f in BUSINESS_FIELDS]]


def kyc_rows(submission: Submission) -> List[List[Any]]:
    return [[label, _presence(value)] for label, value in submission.kyc.items()]


def financial_rows(submission: Submission) -> List[List[Any]]:
    # zelfde nummering als de upload-prefix: {category}_{index}
    rows = []
    for category, items in submission.financial.items():
        for i, item in enumerate(items):
            rows.append([f"{category}_{i}", _presence(item)])
    return rows


def client_rows(submission: Submission) -> List[List[Any]]:
    return [[client.get(f) for f in CLIENT_FIELDS] for client in submission.clients]


SUMMARIES = (
    (Section.BUSINESS, "Business Details", BUSINESS_HEADERS, business_rows),
    (Section.KYC, "KYC Details", DOCUMENT_HEADERS, kyc_rows),
    (Section.FINANCIAL, "Financial Details", DOCUMENT_HEADERS, financial_rows),
    (Section.CLIENT, "Client Details", CLIENT_HEADERS, client_rows),
)


class SummaryGenerator:
    """
    Bouwt de vier overzichten uit de oorspronkelijke inzending (niet uit het
    upload-manifest) en schrijft ze weg: business, KYC, financial, client.
    """

    def __init__(self, storage: Storage, submission: Submission, root: str):
        self.storage = storage
        self.submission = submission
        self.root = root

    def run(self) -> List[str]:
        keys = []
        for section, sheet_name, headers, rows_fn in SUMMARIES:
            data = build_workbook_bytes(sheet_name, headers, rows_fn(self.submission))
            key = build_summary_key(self.root, self.submission.business_name, section)
            self.storage.put_object(key, data, XLSX_CONTENT_TYPE)
            logger.info("summary_uploaded", key=key, section=section.value)
            keys.append(key)
        return keys
