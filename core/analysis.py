# core/analysis.py
import base64
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import PromptTemplate
from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI

from config import GEMINI_MODEL, GEMINI_TEMPERATURE, GOOGLE_API_KEY, UNHEALTHY_LIST_PATH
from .errors import ClientInputError, ExternalServiceError
from .image_utils import ImageBlob
from .matcher import check_unhealthy_ingredients, load_unhealthy_ingredients
from .prompts import ANALYSIS_PROMPT_TMPL, EXTRACTION_PROMPT
from .utils import log_elapsed

logger = logging.getLogger(__name__)

LLMFactory = Callable[[], Union[BaseChatModel, Runnable]]


def get_llm(temp: float = GEMINI_TEMPERATURE, google_api_key: Optional[str] = None):
    """
    Gemini chat model used for both extraction and analysis.
    """
    return ChatGoogleGenerativeAI(
        model=GEMINI_MODEL,
        temperature=temp,
        google_api_key=google_api_key or GOOGLE_API_KEY,
    )


def extract_ingredients(llm, blob: ImageBlob) -> str:
    """
    Sends the label photo to the model and returns its free-text ingredient list.
    """
    b64 = base64.b64encode(blob.data).decode()
    message = HumanMessage(content=[
        {"type": "text", "text": EXTRACTION_PROMPT},
        {"type": "image_url", "image_url": {"url": f"data:{blob.mime_type};base64,{b64}"}},
    ])
    return (llm | StrOutputParser()).invoke([message])


def analyze_ingredients(llm, ingredients: str, unhealthy_list: List[str]) -> str:
    prompt = PromptTemplate(
        template=ANALYSIS_PROMPT_TMPL,
        input_variables=["ingredients", "unhealthy_list"],
        template_format="jinja2",
    )
    chain = prompt | llm | StrOutputParser()
    return chain.invoke({
        "ingredients": ingredients,
        "unhealthy_list": ", ".join(unhealthy_list),
    })


def analyze_image(
    blob: Optional[ImageBlob],
    llm_factory: LLMFactory = get_llm,
    terms_path: Optional[Union[str, Path]] = None,
) -> Dict:
    """
    Extraction -> term lookup -> analysis, in that order.

    Raises ClientInputError when no image was provided (before any model call)
    and ExternalServiceError when building or calling the model fails.
    """
    if blob is None or not blob.data:
        raise ClientInputError("No file uploaded")

    logger.info("File received: %s %s Size: %d bytes", blob.filename, blob.mime_type, blob.size)

    with log_elapsed(logger, "Gemini AI Processing Time"):
        try:
            llm = llm_factory()
            logger.info("Calling Gemini AI for ingredient extraction")
            ingredients = extract_ingredients(llm, blob)
        except Exception as e:
            raise ExternalServiceError(f"Ingredient extraction failed: {e}") from e
        logger.info("Extracted ingredients: %s", ingredients)

        with log_elapsed(logger, "Unhealthy Ingredients Check"):
            unhealthy_list = load_unhealthy_ingredients(terms_path or UNHEALTHY_LIST_PATH)
            found_unhealthy = check_unhealthy_ingredients(ingredients, unhealthy_list)
        logger.info("Found unhealthy ingredients: %s", found_unhealthy)

        try:
            logger.info("Calling Gemini AI for analysis")
            analysis = analyze_ingredients(llm, ingredients, unhealthy_list)
        except Exception as e:
            raise ExternalServiceError(f"Ingredient analysis failed: {e}") from e
        logger.info("Analysis result: %s", analysis)

    return {
        "ingredients": ingredients,
        "analysis": analysis,
        "foundUnhealthy": found_unhealthy,
    }
