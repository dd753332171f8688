"""
Day-partitioned render log in DynamoDB.

pk = "day#YYYY-MM-DD" (UTC), sk = epoch millis of the write, strictly
increasing within the process so two renders never share a row. Rows are
only ever appended; staff query a day partition to see what was produced.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import boto3
from boto3.dynamodb.types import TypeSerializer

from app.core.exceptions import ConfigurationError
from app.schemas.generation import RenderMetadata
from app.utils.render_keys import next_key_millis
import logging

logger = logging.getLogger(__name__)

_serializer = TypeSerializer()


@dataclass
class AuditRecord:
    metadata: RenderMetadata
    s3_key: str
    s3_url: str
    written_at: datetime
    sort_key: int = field(default=0)

    def __post_init__(self):
        if not self.sort_key:
            self.sort_key = next_key_millis(int(self.written_at.timestamp() * 1000))

    @property
    def partition_key(self) -> str:
        return f"day#{self.written_at.astimezone(timezone.utc):%Y-%m-%d}"

    def to_item(self) -> Dict[str, Any]:
        meta = self.metadata
        item = {
            "pk": self.partition_key,
            "sk": self.sort_key,
            "name": meta.name or "na",
            "theme": meta.theme or "na",
            "color": meta.color or "na",
            "lang": meta.lang or "na",
            "country": meta.country,
            "time_of_day": meta.time_of_day,
            "bag_type": meta.bag_type,
            "bag_color": meta.bag_color,
            "order_id": meta.order_id,
            "job_id": meta.job_id,
            "chosen_index": meta.chosen_index,
            "s3_key": self.s3_key,
            "s3_url": self.s3_url,
        }
        if meta.email:
            item["email"] = meta.email
        return item


def to_attribute_values(item: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Plain item -> DynamoDB wire format ({"S": ...}, {"N": ...})"""
    return {key: _serializer.serialize(value) for key, value in item.items()}


class RenderAuditLog:
    """
    Uses the low-level DynamoDB client rather than a Table resource: clients
    are safe to share across the threadpool workers that call log_render.
    """

    def __init__(self, table_name: str, region: str = "", credentials: Optional[dict] = None, client=None):
        self.table_name = table_name
        self.region = region
        self.credentials = credentials or {}
        if client is None and table_name and region:
            client = boto3.client("dynamodb", region_name=region, **self.credentials)
        self._client = client

    @property
    def client(self):
        if not self.table_name:
            raise ConfigurationError("Missing AUDIT_TABLE_NAME")
        if self._client is None:
            raise ConfigurationError("Missing AWS_REGION")
        return self._client

    def log_render(self, record: AuditRecord) -> None:
        """Append one row. Raises on failure; the caller decides whether that matters."""
        item = record.to_item()
        self.client.put_item(TableName=self.table_name, Item=to_attribute_values(item))
        logger.info(f"Logged render to DynamoDB table {self.table_name}: {item['pk']}/{item['sk']}")

    def check_table(self) -> None:
        """Raises if the table is not visible with the current credentials."""
        self.client.describe_table(TableName=self.table_name)
