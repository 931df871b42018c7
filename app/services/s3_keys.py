# app/services/s3_keys.py
from datetime import datetime
from enum import Enum
from typing import Optional
import uuid

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class Section(str, Enum):
    BUSINESS = "business"
    KYC = "kyc"
    FINANCIAL = "financial"
    CLIENT = "client"


# section -> (folder-suffix, summary-bestandsnaam-suffix)
_SECTION_NAMES = {
    Section.BUSINESS: ("BusinessDetails", "Business_Details"),
    Section.KYC: ("KYCDetails", "KYC_Details"),
    Section.FINANCIAL: ("FinancialDetails", "Financial_Details"),
    Section.CLIENT: ("ClientDetails", "Client_Details"),
}


def s3_key_join(*parts: str) -> str:
    cleaned = [str(p).strip("/ ") for p in parts if p is not None and str(p).strip("/ ")]
    return "/".join(cleaned)


def safe_segment(value: object) -> str:
    """Eén key-segment: geen slashes en geen traversal, zodat de key drie delen houdt."""
    text = str(value).strip()
    text = text.replace("..", "")
    text = text.replace("/", "_").replace("\\", "_")
    return text.strip() or "_"


def new_root_token() -> str:
    return uuid.uuid4().hex[:6]


def build_root(business_name: str, submitted_at: Optional[datetime] = None, token: Optional[str] = None) -> str:
    # {businessName} of {businessName}_{YYYYmmddTHHMMSSZ}_{token}
    root = safe_segment(business_name)
    if submitted_at is not None:
        root = f"{root}_{submitted_at.strftime('%Y%m%dT%H%M%SZ')}"
    if token:
        root = f"{root}_{safe_segment(token)}"
    return root


def section_folder(business_name: str, section: Section) -> str:
    folder, _ = _SECTION_NAMES[section]
    return f"{safe_segment(business_name)}_{folder}"


def build_file_key(root: str, business_name: str, section: Section, prefix: str, filename: str) -> str:
    # {root}/{businessName}_{Section}Details/{businessName}_{prefix}_{filename}
    name = safe_segment(f"{business_name}_{prefix}_{filename}")
    return s3_key_join(root, section_folder(business_name, section), name)


def build_summary_key(root: str, business_name: str, section: Section) -> str:
    # {root}/{businessName}_{Section}Details/{businessName}_{Section}_Details.xlsx
    _, summary = _SECTION_NAMES[section]
    name = safe_segment(f"{business_name}_{summary}.xlsx")
    return s3_key_join(root, section_folder(business_name, section), name)
