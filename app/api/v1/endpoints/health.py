from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool

from app.core.context import AppContext, get_app_context
from app.schemas.health import DeepCheckResult, DeepChecks, HealthResponse
from app.core.logging_config import logger

router = APIRouter()


def _present(value) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


@router.get("", response_model=HealthResponse, response_model_by_alias=True)
async def health_check(
    deep: str = Query(default="0", description="Set to 1 to probe S3 and DynamoDB"),
    context: AppContext = Depends(get_app_context),
):
    """Report which settings are present and, with deep=1, probe the AWS resources."""
    settings = context.settings
    run_deep = deep == "1"
    logger.info(f"Health check endpoint accessed (deep={run_deep})")

    env = {
        "AWS_REGION": _present(settings.AWS_REGION),
        "S3_BUCKET": _present(settings.S3_BUCKET),
        "AUDIT_TABLE_NAME": _present(settings.AUDIT_TABLE_NAME),
        "STABILITY_API_KEY": _present(settings.STABILITY_API_KEY),
        "OPENAI_API_KEY": _present(settings.OPENAI_API_KEY),
        "AWS_ACCESS_KEY_ID": _present(settings.AWS_ACCESS_KEY_ID),
        "AWS_SECRET_ACCESS_KEY": _present(settings.AWS_SECRET_ACCESS_KEY),
    }
    providers = {name: provider.is_configured for name, provider in context.providers.items()}
    deep_checks = DeepChecks(performed=run_deep)

    if run_deep:
        storage = context.render_storage
        try:
            await run_in_threadpool(storage.check_bucket)
            deep_checks.s3 = DeepCheckResult(ok=True, bucket=storage.bucket_name)
        except Exception as e:
            logger.error(f"S3 health check failed: {str(e)}")
            deep_checks.s3 = DeepCheckResult(ok=False, error=str(e))

        try:
            await run_in_threadpool(storage.audit_log.check_table)
            deep_checks.dynamodb = DeepCheckResult(ok=True, table=storage.audit_log.table_name)
        except Exception as e:
            logger.error(f"DynamoDB health check failed: {str(e)}")
            deep_checks.dynamodb = DeepCheckResult(ok=False, error=str(e))

    return HealthResponse(env=env, providers=providers, deep_checks=deep_checks)
