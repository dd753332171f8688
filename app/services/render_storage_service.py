from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional
from urllib.parse import quote, urlencode

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.core.exceptions import ConfigurationError, PersistenceError
from app.schemas.generation import RenderMetadata
from app.services.render_audit_service import AuditRecord, RenderAuditLog
from app.utils.render_keys import strip_diacritics, tag_safe
from app.core.logging_config import logger

METADATA_VALUE_MAX_LENGTH = 256
# S3 allows 2 KB of user metadata (keys plus values); keep some headroom
METADATA_TOTAL_MAX_BYTES = 1900


@dataclass
class StoreResult:
    url: str
    key: str
    audit_logged: bool
    audit_error: Optional[str] = None


def metadata_safe(value) -> str:
    """S3 user metadata travels as HTTP headers, so keep it ASCII."""
    text = strip_diacritics(str(value))
    text = text.encode("ascii", "ignore").decode("ascii")
    return " ".join(text.split())[:METADATA_VALUE_MAX_LENGTH]


def fit_metadata(fields: Dict[str, str], max_bytes: int = METADATA_TOTAL_MAX_BYTES) -> Dict[str, str]:
    """
    Trim ASCII metadata to fit the total size limit. Fields are kept in
    order, so callers put the ones staff cannot lose first.
    """
    fitted = {}
    budget = max_bytes
    for key, value in fields.items():
        room = budget - len(key)
        if room <= 0:
            break
        fitted[key] = value[:room]
        budget -= len(key) + len(fitted[key])
    return fitted


class RenderStorageService:
    """
    S3 storage for chosen renders

    Writes the PNG with queryable tags and a fuller metadata map, then
    appends a best-effort audit row. Tags are limited to 10 per object and to
    the S3 tag character set; email goes to metadata only.
    """

    def __init__(self, settings, s3_client=None, audit_log: Optional[RenderAuditLog] = None):
        self.bucket_name = settings.S3_BUCKET
        self.region = settings.AWS_REGION
        self.public_base_url = (settings.S3_PUBLIC_BASE_URL or "").rstrip("/")
        self.app_tag = settings.APP_TAG
        self.credentials = settings.aws_credentials
        # Shared by every threadpool worker that stores a render
        if s3_client is None and self.bucket_name and self.region:
            s3_client = boto3.client("s3", region_name=self.region, **self.credentials)
            logger.info(f"S3 client initialized for bucket: {self.bucket_name} ({self.region})")
        self._s3_client = s3_client
        self.audit_log = audit_log or RenderAuditLog(
            table_name=settings.AUDIT_TABLE_NAME,
            region=settings.AWS_REGION,
            credentials=self.credentials,
        )

    def _require_config(self):
        if not self.bucket_name or not self.region:
            raise ConfigurationError("Missing AWS_REGION or S3_BUCKET environment variables")

    @property
    def s3_client(self):
        self._require_config()
        return self._s3_client

    def build_tags(self, metadata: RenderMetadata) -> Dict[str, str]:
        raw = {
            "app": self.app_tag,
            "kind": "render",
            "name": metadata.name,
            "theme": metadata.theme,
            "color": metadata.color,
            "lang": metadata.lang,
            "country": metadata.country,
            "timeOfDay": metadata.time_of_day,
            "bagType": metadata.bag_type,
            "orderId": metadata.order_id,
        }
        return {key: tag_safe(value) or "na" for key, value in raw.items()}

    def build_metadata(self, metadata: RenderMetadata, extra: Optional[Dict[str, object]] = None) -> Dict[str, str]:
        # Short identifying fields first, free text last
        fields = {
            "app": self.app_tag,
            "kind": "render",
            "orderid": metadata.order_id,
            "jobid": metadata.job_id,
            "chosenindex": metadata.chosen_index,
            "country": metadata.country,
            "timeofday": metadata.time_of_day,
            "bagtype": metadata.bag_type,
            "bagcolor": metadata.bag_color,
            "color": metadata.color or "na",
            "lang": metadata.lang or "na",
        }
        if extra:
            fields.update(extra)
        fields["theme"] = metadata.theme or "na"
        if metadata.email:
            fields["email"] = metadata.email
        fields["name"] = metadata.name or "na"
        safe = {key: metadata_safe(value) for key, value in fields.items() if value != ""}
        return fit_metadata(safe)

    def object_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"

    def store(
        self,
        image_bytes: bytes,
        key: str,
        metadata: RenderMetadata,
        image_info: Optional[Dict[str, object]] = None,
    ) -> StoreResult:
        """
        Upload the render and log it.

        Raises ConfigurationError when the bucket/region is not set and
        PersistenceError when S3 rejects the write. A failed audit write is
        only reported through StoreResult and the logs.
        """
        self._require_config()
        extra = {}
        if image_info:
            extra = {"width": image_info.get("width", ""), "height": image_info.get("height", "")}

        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=image_bytes,
                ContentType="image/png",
                Tagging=urlencode(self.build_tags(metadata), quote_via=quote),
                Metadata=self.build_metadata(metadata, extra),
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"S3 upload failed for {key}: {str(e)}")
            raise PersistenceError(f"Upload failed: {str(e)}")

        url = self.object_url(key)
        logger.info(f"Successfully uploaded render to S3: {key} ({len(image_bytes)} bytes)")

        record = AuditRecord(metadata=metadata, s3_key=key, s3_url=url, written_at=datetime.now(timezone.utc))
        try:
            self.audit_log.log_render(record)
        except Exception as e:
            logger.error(f"DynamoDB logging failed for {key}: {str(e)}")
            return StoreResult(url=url, key=key, audit_logged=False, audit_error=str(e))

        return StoreResult(url=url, key=key, audit_logged=True)

    def check_bucket(self) -> None:
        """Raises if the bucket is not reachable with the current credentials."""
        self._require_config()
        self.s3_client.head_bucket(Bucket=self.bucket_name)
