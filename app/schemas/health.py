from typing import Dict, Optional
from pydantic import BaseModel, Field


class DeepCheckResult(BaseModel):
    ok: bool
    bucket: Optional[str] = None
    table: Optional[str] = None
    error: Optional[str] = None


class DeepChecks(BaseModel):
    performed: bool = False
    s3: Optional[DeepCheckResult] = None
    dynamodb: Optional[DeepCheckResult] = None


class HealthResponse(BaseModel):
    """Configuration presence only; never carries secret values"""
    status: str = "ok"
    env: Dict[str, bool]
    providers: Dict[str, bool]
    deep_checks: DeepChecks = Field(..., alias="deepChecks")
    notes: str = "Add ?deep=1 to verify S3 bucket access and DynamoDB table visibility."

    class Config:
        populate_by_name = True
