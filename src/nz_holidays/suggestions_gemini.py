from __future__ import annotations

import logging
import os
import re
from typing import Optional

import requests
from dotenv import load_dotenv, find_dotenv

logger = logging.getLogger(__name__)

load_dotenv(find_dotenv(), override=False)

GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
REQUEST_TIMEOUT = 20

MSG_UNAVAILABLE = "AI services unavailable. Please configure API Key."
MSG_FAILED = "Unable to load suggestions. Please try again later."
MSG_EMPTY = "No suggestions available at the moment."

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")


def _api_key() -> Optional[str]:
    # Read at call time so a key added to the environment after import is picked up
    return os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")


def build_prompt(holiday_name: str, region_name: str) -> str:
    return (
        f"Suggest 3 specific, fun, and family-friendly activities to do during {holiday_name} "
        f"in the {region_name} region of New Zealand.\n"
        "Format the output as a simple HTML unordered list (<ul><li>...</li></ul>) "
        "without markdown code blocks.\n"
        "Keep it brief and inspiring."
    )


def _strip_code_fence(text: str) -> str:
    """Models sometimes wrap the HTML in ``` fences despite being asked not to."""
    return _FENCE_RE.sub("", text.strip()).strip()


def _call_gemini(prompt: str, api_key: str) -> str:
    url = GEMINI_URL.format(model=GEMINI_MODEL)
    payload = {"contents": [{"parts": [{"text": prompt}]}]}
    resp = requests.post(
        url,
        params={"key": api_key},
        json=payload,
        timeout=REQUEST_TIMEOUT,
    )
    resp.raise_for_status()
    data = resp.json()
    if not isinstance(data, dict):
        raise ValueError(f"Unexpected Gemini reply: {type(data).__name__}")

    candidates = data.get("candidates") or []
    if not candidates:
        feedback = data.get("promptFeedback")
        block = feedback.get("blockReason") if isinstance(feedback, dict) else None
        if block:
            raise ValueError(f"Generation blocked: {block}")
        return ""

    first = candidates[0] if isinstance(candidates, list) else None
    content = first.get("content") if isinstance(first, dict) else None
    if not isinstance(content, dict):
        raise ValueError("Unexpected Gemini reply: candidate has no content")

    parts = content.get("parts") or []
    if not isinstance(parts, list) or not all(isinstance(p, dict) for p in parts):
        raise ValueError("Unexpected Gemini reply: malformed parts")
    return "".join(p.get("text") or "" for p in parts)


def get_holiday_activities(holiday_name: str, region_name: str) -> str:
    """
    Ask Gemini for activity ideas for a holiday in a region.

    Never raises: a missing key or any request failure comes back as one of
    the MSG_* strings so the UI can show it as-is.
    """
    api_key = _api_key()
    if not api_key:
        logger.warning("GEMINI_API_KEY not found in environment variables")
        return MSG_UNAVAILABLE

    try:
        text = _call_gemini(build_prompt(holiday_name, region_name), api_key)
    except (requests.RequestException, ValueError) as e:
        logger.error("Gemini API error for %r in %s: %s", holiday_name, region_name, e)
        return MSG_FAILED

    text = _strip_code_fence(text)
    return text or MSG_EMPTY
