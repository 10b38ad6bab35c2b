"""Resume check endpoint."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from ..config import AppConfig
from ..domain.extractor import is_supported_media_type
from ..errors import ModelCallFailed, ResumeCheckError
from ..observability import CheckObserver
from ..service import ResumeChecker
from .deps import get_checker, get_config
from .errors import ANALYSIS_FAILED, JOB_TITLE_REQUIRED, RESUME_REQUIRED, APIError
from .upload import TemporaryUpload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["resume"])


@router.post("/check-resume")
async def check_resume(
    resume: Optional[UploadFile] = File(None),
    job_title: Optional[str] = Form(None, alias="jobTitle"),
    checker: ResumeChecker = Depends(get_checker),
    config: AppConfig = Depends(get_config),
) -> JSONResponse:
    """Score an uploaded PDF/DOCX resume against a job title."""
    request_id = f"chk_{uuid.uuid4().hex[:10]}"
    logger.info("[%s] New /check-resume request received.", request_id)

    if not job_title or not job_title.strip():
        raise APIError(400, "JOB_TITLE_REQUIRED", JOB_TITLE_REQUIRED)
    if resume is None or not resume.filename:
        raise APIError(400, "RESUME_REQUIRED", RESUME_REQUIRED)
    if not is_supported_media_type(resume.content_type):
        logger.warning("[%s] Rejected upload with media type %r", request_id, resume.content_type)
        raise APIError(400, "UNSUPPORTED_TYPE", RESUME_REQUIRED, {"media_type": resume.content_type})

    observer = CheckObserver(request_id=request_id)
    try:
        async with TemporaryUpload(resume, config.upload_dir, config.max_upload_bytes) as document:
            try:
                result = await checker.check(document.path, document.media_type, job_title, observer)
            except ResumeCheckError as e:
                observer.log_error(e.code, e.message)
                logger.error("[%s] Resume analysis failed", request_id, exc_info=e)
                if isinstance(e, ModelCallFailed) and e.provider_payload is not None:
                    logger.error("[%s] Provider payload: %r", request_id, e.provider_payload)
                raise APIError(500, e.code, ANALYSIS_FAILED) from e
            except Exception as e:
                logger.exception("[%s] Error in /check-resume", request_id)
                raise APIError(500, "INTERNAL_ERROR", ANALYSIS_FAILED) from e
    except OSError as e:
        logger.exception("[%s] Could not store upload in %s", request_id, config.upload_dir)
        raise APIError(500, "UPLOAD_FAILED", ANALYSIS_FAILED) from e
    finally:
        observer.log_summary()

    return JSONResponse(content=result)
