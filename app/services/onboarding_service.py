# app/services/onboarding_service.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional

from app.core.logging_config import bind_submission, logger
from app.core.settings import Settings
from app.domain.submission import normalize_submission
from app.services.s3_keys import build_root, new_root_token
from app.services.storage import Storage
from app.services.summary_export import SummaryGenerator
from app.services.upload_orchestrator import ManifestEntry, UploadOrchestrator

SUCCESS_MESSAGE = "Data submitted and stored successfully"


@dataclass
class SubmissionResult:
    root: str
    folder: str
    manifest: List[ManifestEntry] = field(default_factory=list)
    summary_keys: List[str] = field(default_factory=list)

    @property
    def uploaded_keys(self) -> List[str]:
        return [m.key for m in self.manifest]


def process_submission(
    body: Any,
    storage: Storage,
    settings: Settings,
    now: Optional[datetime] = None,
) -> SubmissionResult:
    """
    Normalize -> uploads -> overzichten, strikt na elkaar.
    De eerste fout breekt alles af; wat al in storage staat blijft staan.
    """
    submitted_at = now or datetime.now(timezone.utc)
    submission = normalize_submission(body, submitted_at)

    if settings.ROOT_TIMESTAMP_SUFFIX:
        # timestamp + random token: root is uniek per inzending
        root = build_root(submission.business_name, submitted_at, new_root_token())
    else:
        root = build_root(submission.business_name)
    bind_submission(submission.business_name, root)
    logger.info(
        "submission_received",
        clients=len(submission.clients),
        kyc_labels=len(submission.kyc),
        financial_categories=len(submission.financial),
    )

    manifest = UploadOrchestrator(storage, submission, root).run()
    summary_keys = SummaryGenerator(storage, submission, root).run()

    result = SubmissionResult(
        root=root,
        folder=storage.folder_url(root),
        manifest=manifest,
        summary_keys=summary_keys,
    )
    logger.info("submission_stored", files=len(manifest), summaries=len(summary_keys), folder=result.folder)
    return result
