# core/client.py
import json
import logging
from typing import Dict

import requests

from config import API_TIMEOUT, API_URL
from .image_utils import ImageBlob

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred"


def post_image(blob: ImageBlob, api_url: str = API_URL, timeout: int = API_TIMEOUT) -> Dict:
    """
    Posts the image as the multipart "image" field and returns the decoded JSON body.
    Raises requests.HTTPError on non-2xx responses.
    """
    logger.info("Sending %s (%d bytes) to %s", blob.filename, blob.size, api_url)
    resp = requests.post(
        api_url,
        files={"image": (blob.filename, blob.data, blob.mime_type)},
        timeout=timeout,
    )
    resp.raise_for_status()
    return resp.json()


def describe_error(exc: Exception) -> str:
    """
    Error panel text: the server's error body pretty-printed when there is one,
    a generic message otherwise.
    """
    response = getattr(exc, "response", None)
    if isinstance(exc, requests.RequestException) and response is not None:
        try:
            body = response.json()
        except ValueError:
            body = response.text
        return json.dumps(body, indent=2)
    return UNEXPECTED_ERROR
