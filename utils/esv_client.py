# utils/esv_client.py
import logging
from dataclasses import dataclass
from typing import Optional

import requests

logger = logging.getLogger(__name__)

ESV_API_URL = "https://api.esv.org/v3/passage/text/"


class EsvError(Exception):
    """Base class for failures talking to the ESV API"""


class EsvUnavailableError(EsvError):
    """No API key is configured, so the ESV API cannot be called"""


class EsvUpstreamError(EsvError):
    def __init__(self, status_code=None):
        self.status_code = status_code
        if status_code is None:
            super().__init__("ESV upstream error")
        else:
            super().__init__(f"ESV upstream error ({status_code})")


class EsvPassageError(EsvError):
    """The ESV API answered, but without a usable passage"""


@dataclass
class EsvPassage:
    passage: str
    canonical: Optional[str] = None
    copyright: Optional[str] = None


def build_chapter_params(book, chapter):
    """Query parameters for a plain-text chapter with headings and [N] verse numbers"""
    return {
        "q": f"{book} {chapter}",
        "include-headings": "true",
        "include-footnotes": "false",
        "include-short-copyright": "true",
        "include-passage-references": "false",
        "include-verse-numbers": "true",
        "include-first-verse-numbers": "true",
        "include-footnote-body": "false",
        "line-length": "0",
    }


def fetch_chapter_passage(book, chapter, api_key, api_url=ESV_API_URL, timeout=15):
    """Fetch one chapter of plain text from the ESV API.

    Raises EsvUnavailableError when no key is given, EsvUpstreamError when the
    request fails or returns a non-success status, and EsvPassageError when the
    response carries no passage string.
    """
    if not api_key:
        raise EsvUnavailableError("ESV API unavailable")

    logger.info(f"Fetching ESV passage for {book} {chapter}")
    try:
        response = requests.get(
            api_url,
            params=build_chapter_params(book, chapter),
            headers={"Authorization": f"Token {api_key}"},
            timeout=timeout
        )
    except requests.RequestException as e:
        logger.error(f"ESV request failed for {book} {chapter}: {e}")
        raise EsvUpstreamError() from e

    if not response.ok:
        logger.error(f"ESV API error: {response.status_code}, {response.text[:200]}")
        raise EsvUpstreamError(response.status_code)

    try:
        payload = response.json()
    except ValueError as e:
        raise EsvPassageError("Unable to parse ESV passage") from e

    if not isinstance(payload, dict):
        raise EsvPassageError("Unable to parse ESV passage")

    passages = payload.get("passages")
    raw_passage = passages[0] if isinstance(passages, list) and passages else None
    if not raw_passage or not isinstance(raw_passage, str):
        raise EsvPassageError("Unable to parse ESV passage")

    canonical = payload.get("canonical")
    copyright_notice = payload.get("copyright")
    return EsvPassage(
        passage=raw_passage,
        canonical=canonical if isinstance(canonical, str) else None,
        copyright=copyright_notice if isinstance(copyright_notice, str) else None
    )
