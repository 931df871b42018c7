# app/aws/s3_errors.py
from typing import Any, Dict, Optional

from botocore.exceptions import ClientError


def describe_s3_error(e: Exception) -> Dict[str, Any]:
    """Haal code/message/request-id uit een botocore-fout voor logging en foutmelding."""
    if isinstance(e, ClientError):
        err = e.response.get("Error", {}) or {}
        meta = e.response.get("ResponseMetadata", {}) or {}

        code: str = err.get("Code", "")
        msg: str = err.get("Message", "") or str(e)
        aws_request_id: Optional[str] = meta.get("RequestId")
        http_status: Optional[int] = meta.get("HTTPStatusCode")

        hint = None
        if code in {"AccessDenied", "InvalidAccessKeyId"}:
            hint = "Controleer IAM/bucket policy (s3:PutObject)."
        elif code in {"SignatureDoesNotMatch"}:
            hint = "Controleer S3_REGION vs bucket-regio en de secret key."
        elif code in {"NoSuchBucket"}:
            hint = "Bucket bestaat niet; controleer S3_BUCKET."

        return {
            "code": code,
            "message": msg,
            "hint": hint,
            "aws_request_id": aws_request_id,
            "aws_http": http_status,
        }

    # BotoCoreError (netwerk, credentials) heeft geen response
    return {"code": type(e).__name__, "message": str(e), "hint": None}


def s3_error_message(e: Exception) -> str:
    info = describe_s3_error(e)
    if info["code"] and info["message"]:
        return f"{info['code']}: {info['message']}"
    return info["message"] or str(e)
