# core/utils.py
from contextlib import contextmanager
from typing import Dict, Iterator, Tuple
import json
import logging
import time


@contextmanager
def log_elapsed(logger: logging.Logger, label: str) -> Iterator[None]:
    """
    Logs how long the wrapped block took, whether or not it raised.
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        logger.info("%s: %.1f ms", label, (time.perf_counter() - start) * 1000)


def make_downloads(result: Dict) -> Tuple[bytes, bytes]:
    """
    Returns (json_bytes, txt_bytes) for an analysis result.
    """
    found = list(result.get("foundUnhealthy") or [])
    report = {
        "ingredients": result.get("ingredients", ""),
        "foundUnhealthy": found,
        "analysis": result.get("analysis", ""),
    }
    json_bytes = json.dumps(report, ensure_ascii=False, indent=2).encode("utf-8")

    lines = ["Ingredients:", report["ingredients"], ""]
    lines.append("Unhealthy Ingredients Found (Predefined List):")
    lines.extend(f"- {item}" for item in found)
    if not found:
        lines.append("(none)")
    lines.extend(["", "Analysis:", report["analysis"]])
    txt_bytes = ("\n".join(lines) + "\n").encode("utf-8")

    return json_bytes, txt_bytes
