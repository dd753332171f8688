import asyncio
import io
import random
from typing import List, Optional

import pytest
from boto3.dynamodb.types import TypeDeserializer
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient
from PIL import Image

from app.core.config import Settings
from app.core.context import AppContext, get_app_context
from app.services.generation_orchestrator import GenerationOrchestrator
from app.services.image_providers.base import ImageProvider
from app.services.render_audit_service import RenderAuditLog
from app.services.render_storage_service import RenderStorageService


_deserializer = TypeDeserializer()


def make_settings(**overrides) -> Settings:
    values = {
        "STABILITY_API_KEY": "sk-stability-test",
        "OPENAI_API_KEY": "",
        "PRIMARY_IMAGE_PROVIDER": "stability",
        "SECONDARY_IMAGE_PROVIDER": "",
        "AWS_REGION": "us-east-1",
        "AWS_ACCESS_KEY_ID": "AKIATEST",
        "AWS_SECRET_ACCESS_KEY": "secret-test-value",
        "S3_BUCKET": "tote-renders",
        "S3_PUBLIC_BASE_URL": "",
        "AUDIT_TABLE_NAME": "fiddeen_renders",
        "APP_TAG": "fiddeen",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def png_bytes(color=(200, 120, 40), size=(8, 8)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def run(coro):
    return asyncio.run(coro)


class FakeProvider(ImageProvider):
    """Pops one outcome per call; an Exception outcome is raised."""

    def __init__(self, name: str, outcomes: Optional[list] = None, configured: bool = True,
                 delays: Optional[List[float]] = None):
        self.name = name
        self.outcomes = list(outcomes or [])
        self.delays = list(delays or [])
        self.configured = configured
        self.prompts: List[str] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    @property
    def missing_setting(self) -> str:
        return f"{self.name.upper()}_API_KEY"

    async def generate(self, prompt, negative_prompt, options=None):
        self.prompts.append(prompt)
        outcome = self.outcomes.pop(0) if self.outcomes else png_bytes()
        delay = self.delays.pop(0) if self.delays else 0
        if delay:
            await asyncio.sleep(delay)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeS3Client:
    def __init__(self, fail_put: bool = False, fail_head: bool = False):
        self.fail_put = fail_put
        self.fail_head = fail_head
        self.objects = {}

    def put_object(self, **kwargs):
        if self.fail_put:
            raise ClientError({"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "PutObject")
        self.objects[kwargs["Key"]] = kwargs
        return {"ETag": '"abc"'}

    def head_bucket(self, Bucket):
        if self.fail_head:
            raise ClientError({"Error": {"Code": "404", "Message": "Not Found"}}, "HeadBucket")
        return {}


class FakeDynamoClient:
    """Stores put_item rows decoded back to plain values for easy asserts."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.items = []
        self.raw_items = []
        self.described = []

    def put_item(self, TableName, Item):
        if self.fail:
            raise RuntimeError("ProvisionedThroughputExceededException")
        self.raw_items.append(Item)
        self.items.append({key: _deserializer.deserialize(value) for key, value in Item.items()})

    def describe_table(self, TableName):
        if self.fail:
            raise RuntimeError("ResourceNotFoundException: table not found")
        self.described.append(TableName)
        return {"Table": {"TableName": TableName, "TableStatus": "ACTIVE"}}


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def s3_client():
    return FakeS3Client()


@pytest.fixture
def audit_table():
    return FakeDynamoClient()


@pytest.fixture
def render_storage(settings, s3_client, audit_table):
    audit_log = RenderAuditLog(settings.AUDIT_TABLE_NAME, settings.AWS_REGION, client=audit_table)
    return RenderStorageService(settings, s3_client=s3_client, audit_log=audit_log)


def build_context(settings, providers, render_storage, secondary: str = "") -> AppContext:
    orchestrator = GenerationOrchestrator(
        providers=providers,
        primary=settings.PRIMARY_IMAGE_PROVIDER,
        secondary=secondary or settings.SECONDARY_IMAGE_PROVIDER,
        rng=random.Random(7),
    )
    return AppContext(
        settings=settings,
        providers=providers,
        orchestrator=orchestrator,
        render_storage=render_storage,
    )


@pytest.fixture
def make_client():
    from main import app

    def _make(context: AppContext) -> TestClient:
        app.dependency_overrides[get_app_context] = lambda: context
        return TestClient(app, raise_server_exceptions=False)

    yield _make
    app.dependency_overrides.clear()
