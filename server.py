# server.py
import logging
import traceback
from pathlib import Path
from typing import List

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

import config
from core.analysis import LLMFactory, analyze_image, get_llm
from core.errors import ClientInputError
from core.image_utils import ImageBlob
from core.utils import log_elapsed

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ----------------------------------------------------
# FastAPI setup + CORS
# ----------------------------------------------------
app = FastAPI(title="Food Ingredient Identifier", version="1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class AnalyzeResponse(BaseModel):
    ingredients: str
    analysis: str
    foundUnhealthy: List[str]


# ----------------------------------------------------
# Dependencies (overridden in tests)
# ----------------------------------------------------
def get_llm_factory() -> LLMFactory:
    return get_llm


def get_terms_path() -> Path:
    return config.UNHEALTHY_LIST_PATH


def _api_key_status() -> str:
    return "API key is set" if config.GOOGLE_API_KEY else "API key is not set"


# ----------------------------------------------------
# Endpoints
# ----------------------------------------------------
@app.get("/health")
def health():
    return {"ok": True, "model": config.GEMINI_MODEL}


@app.post("/api/analyze", response_model=AnalyzeResponse)
async def analyze(
    request: Request,
    llm_factory: LLMFactory = Depends(get_llm_factory),
    terms_path: Path = Depends(get_terms_path),
):
    logger.info("Received POST request to /api/analyze")
    try:
        form = await request.form()
    except Exception as e:
        logger.error("Could not parse form body: %s", e)
        form = {}

    # Plain-text "image" fields count as missing, same as no field at all
    image = form.get("image")
    if not isinstance(image, UploadFile):
        logger.error("No file uploaded")
        return JSONResponse(status_code=400, content={"error": "No file uploaded"})

    with log_elapsed(logger, "Total API Processing Time"):
        try:
            blob = ImageBlob(
                data=await image.read(),
                mime_type=image.content_type or "application/octet-stream",
                filename=image.filename or "",
            )
            return await run_in_threadpool(
                analyze_image, blob, llm_factory=llm_factory, terms_path=terms_path
            )
        except ClientInputError as e:
            logger.error("Rejected upload: %s", e)
            return JSONResponse(status_code=400, content={"error": str(e)})
        except Exception as e:
            logger.exception("Detailed error: %s", e)
            # Diagnostic detail goes back to the caller as-is; redact before exposing publicly.
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Error processing image",
                    "details": str(e),
                    "stack": "".join(traceback.format_exception(type(e), e, e.__traceback__)),
                    "apiKey": _api_key_status(),
                },
            )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
