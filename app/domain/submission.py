from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.core.exceptions import MissingRequiredField
from app.schemas.onboarding import FilePayload

# Client-velden met een optionele upload, in vaste uploadvolgorde
CLIENT_DOCUMENTS = (
    ("payrollListUpload", "payroll"),
    ("workOrderUpload", "workorder"),
    ("invoiceUpload", "invoice"),
)


@dataclass
class BusinessProfile:
    business_name: str
    fields: Dict[str, Any]

    def get(self, key: str) -> Any:
        return self.fields.get(key)

    def file_fields(self) -> List[tuple[str, FilePayload]]:
        out = []
        for key, value in self.fields.items():
            payload = FilePayload.from_value(value)
            if payload is not None:
                out.append((key, payload))
        return out


@dataclass
class Client:
    fields: Dict[str, Any]

    @property
    def name(self) -> Any:
        return self.fields.get("clientName")

    def get(self, key: str) -> Any:
        return self.fields.get(key)

    def document(self, field_name: str) -> Optional[FilePayload]:
        return FilePayload.from_value(self.fields.get(field_name))


@dataclass
class Submission:
    business: BusinessProfile
    submitted_at: datetime
    clients: List[Client] = field(default_factory=list)
    kyc: Dict[str, Any] = field(default_factory=dict)
    financial: Dict[str, List[Any]] = field(default_factory=dict)

    @property
    def business_name(self) -> str:
        return self.business.business_name


def _business_name(value: Any) -> Optional[str]:
    # naam wordt de storage-root: alleen tekst, of een positief getal
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value) if value > 0 else None
    if isinstance(value, str) and value.strip():
        return value
    return None


def normalize_submission(body: Any, submitted_at: datetime) -> Submission:
    """
    Haal de vier secties uit de request body.

    Alleen businessData.businessName is verplicht; al het andere dat ontbreekt
    of een onverwachte vorm heeft telt als "niet aangeleverd".
    """
    if not isinstance(body, dict):
        raise MissingRequiredField("Missing business name")

    business_data = body.get("businessData")
    if not isinstance(business_data, dict):
        raise MissingRequiredField("Missing business name")

    business_name = _business_name(business_data.get("businessName"))
    if business_name is None:
        raise MissingRequiredField("Missing business name")

    kyc_data = body.get("kycData")
    if not isinstance(kyc_data, dict):
        kyc_data = {}

    financial: Dict[str, List[Any]] = {}
    financial_files = body.get("financialFiles")
    if isinstance(financial_files, dict):
        for category, items in financial_files.items():
            financial[category] = list(items) if isinstance(items, list) else []

    client_data = body.get("clientData")
    if not isinstance(client_data, list):
        client_data = []

    return Submission(
        business=BusinessProfile(business_name=business_name, fields=dict(business_data)),
        submitted_at=submitted_at,
        clients=[Client(fields=dict(c)) for c in client_data if isinstance(c, dict)],
        kyc=dict(kyc_data),
        financial=financial,
    )
