import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.schemas.forms import FormSubmissionResponse
from app.services.forms.submissions import FormValidationError, submit_form
from app.services.store.base import DocumentStore, StoreError
from app.services.store.factory import get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["forms"])


def _failure(status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=FormSubmissionResponse(success=False).model_dump())


@router.post("/submit-form", response_model=FormSubmissionResponse)
async def submit(request: Request, store: DocumentStore = Depends(get_store)):
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/x-www-form-urlencoded"):
            # plain HTML contact forms post url-encoded fields
            payload = dict(await request.form())
        else:
            payload = await request.json()
    except ValueError:
        logger.info("Rejecting form submission with unparseable body")
        return _failure(400)

    logger.info(f"Handling Form Request: {payload}")
    try:
        await run_in_threadpool(submit_form, payload, store, settings.FORMS_COLLECTION)
    except FormValidationError as e:
        logger.info(f"Rejecting form submission: {e}")
        return _failure(400)
    except StoreError as e:
        logger.error(f"Submit Form Error: {e}")
        return _failure(500)
    return FormSubmissionResponse(success=True)
