from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from app.core.context import AppContext, get_app_context
from app.core.exceptions import ValidationError
from app.schemas.generation import (
    ChooseRequest,
    ChooseResponse,
    GenerateRequest,
    GenerateResponse,
)
from app.utils.image_utils import data_url_to_bytes, inspect_image, to_png_data_url
from app.utils.render_keys import build_render_key, make_order_id
from app.core.logging_config import logger

router = APIRouter()


@router.post(
    "",
    response_model=GenerateResponse,
    response_model_by_alias=True,
    summary="Generate tote previews",
    description="Generate up to three preview artworks for the submitted tote configuration",
)
async def generate_previews(
    body: GenerateRequest,
    context: AppContext = Depends(get_app_context),
):
    """
    Returns the previews as PNG data URLs in slot order (A, B, C).

    Partial success is still a 200 with fewer images; a 502 is returned only
    when every slot failed.
    """
    result = await context.orchestrator.generate_previews(body)
    images = [to_png_data_url(image) for image in result.images]
    return GenerateResponse(images=images, job_id=result.job_id)


@router.post(
    "/choose",
    response_model=ChooseResponse,
    response_model_by_alias=True,
    summary="Save the chosen preview",
    description="Persist the selected preview to S3 and log it for staff",
)
async def choose_preview(
    body: ChooseRequest,
    context: AppContext = Depends(get_app_context),
):
    if not body.image_data_url:
        raise ValidationError("Missing imageDataUrl")

    image_bytes = data_url_to_bytes(body.image_data_url)
    image_info = inspect_image(image_bytes)

    meta = body.meta
    meta.order_id = make_order_id()
    key = build_render_key(
        name=meta.name,
        theme=meta.theme,
        time_of_day=meta.time_of_day,
        country=meta.country,
    )

    logger.info(f"Storing chosen render {key} (order {meta.order_id}, job {meta.job_id or '-'})")
    result = await run_in_threadpool(context.render_storage.store, image_bytes, key, meta, image_info)

    if not result.audit_logged:
        logger.warning(f"Render {key} stored but audit row missing: {result.audit_error}")

    return ChooseResponse(s3_url=result.url, filename=key, order_id=meta.order_id)
