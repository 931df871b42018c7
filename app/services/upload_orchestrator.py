# app/services/upload_orchestrator.py
from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from typing import List, Optional

from app.core.exceptions import InvalidFilePayload
from app.core.logging_config import logger
from app.domain.submission import CLIENT_DOCUMENTS, Submission
from app.schemas.onboarding import FilePayload
from app.services.s3_keys import Section, build_file_key
from app.services.storage import Storage

_DATA_URL_PREFIX = re.compile(r"^data:[^,]*;base64,", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


@dataclass
class PlannedUpload:
    section: Section
    label: str
    prefix: str
    payload: FilePayload
    index: Optional[int] = None


@dataclass
class ManifestEntry:
    section: Section
    label: str
    file_name: str
    key: str
    size: int
    index: Optional[int] = None


def plan_uploads(submission: Submission) -> List[PlannedUpload]:
    """
    Alle uploads van een inzending in vaste volgorde:
    business-velden, KYC-labels, financiële categorieën (per index), clients.
    """
    plan: List[PlannedUpload] = []

    for field_name, payload in submission.business.file_fields():
        plan.append(PlannedUpload(Section.BUSINESS, field_name, field_name, payload))

    for label, value in submission.kyc.items():
        payload = FilePayload.from_value(value)
        if payload is not None:
            plan.append(PlannedUpload(Section.KYC, label, label, payload))

    for category, items in submission.financial.items():
        for i, item in enumerate(items):
            payload = FilePayload.from_value(item)
            if payload is not None:
                plan.append(PlannedUpload(Section.FINANCIAL, category, f"{category}_{i}", payload, index=i))

    for i, client in enumerate(submission.clients):
        client_name = client.name if client.name is not None else f"client{i}"
        for field_name, kind in CLIENT_DOCUMENTS:
            payload = client.document(field_name)
            if payload is not None:
                prefix = f"{client_name}_{kind}"
                plan.append(PlannedUpload(Section.CLIENT, prefix, prefix, payload))

    return plan


def validate_payload(payload: FilePayload, where: str) -> None:
    missing = [attr for attr in ("data", "name", "type") if not (getattr(payload, attr) or "").strip()]
    if missing:
        raise InvalidFilePayload(
            f"Invalid file input for '{where}': missing {', '.join(missing)}"
        )


def decode_payload(payload: FilePayload, where: str) -> bytes:
    raw = _DATA_URL_PREFIX.sub("", payload.data or "", count=1)
    raw = _WHITESPACE.sub("", raw)
    raw += "=" * (-len(raw) % 4)
    try:
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidFilePayload(f"Invalid file input for '{where}': data is not valid base64") from e


class UploadOrchestrator:
    """Schrijft alle aangeleverde bestanden van één inzending weg, één voor één."""

    def __init__(self, storage: Storage, submission: Submission, root: str):
        self.storage = storage
        self.submission = submission
        self.root = root
        self.manifest: List[ManifestEntry] = []

    def store_file(
        self,
        payload: FilePayload,
        section: Section,
        prefix: str,
        label: Optional[str] = None,
        index: Optional[int] = None,
    ) -> ManifestEntry:
        validate_payload(payload, prefix)
        data = decode_payload(payload, prefix)

        key = build_file_key(
            self.root, self.submission.business_name, section, prefix, payload.name
        )
        self.storage.put_object(key, data, payload.type)
        logger.info("file_uploaded", key=key, section=section.value, size=len(data))

        entry = ManifestEntry(
            section=section,
            label=label if label is not None else prefix,
            file_name=payload.name,
            key=key,
            size=len(data),
            index=index,
        )
        self.manifest.append(entry)
        return entry

    def run(self) -> List[ManifestEntry]:
        plan = plan_uploads(self.submission)

        # Eerst alles valideren: een ongeldig bestand mag geen halve upload achterlaten
        for item in plan:
            validate_payload(item.payload, item.prefix)
            # decoderen en weggooien: alleen één payload tegelijk in het geheugen
            decode_payload(item.payload, item.prefix)

        for item in plan:
            self.store_file(item.payload, item.section, item.prefix, label=item.label, index=item.index)

        logger.info("uploads_completed", count=len(self.manifest))
        return self.manifest
