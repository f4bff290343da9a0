from __future__ import annotations
import re

from .config import DEFAULT_CONFIG, EngineConfig

# ---------------------------
# Fixed patterns (configuration-independent)
# ---------------------------
_tags = re.compile(r"<[^<>]+>")
_ws = re.compile(r"[\n\r\s]+")
# runs of dots, hyphens or commas touching whitespace
_trailing_special = re.compile(r"[.,-]*\s+")
_leading_special = re.compile(r"\s+[.,-]*")


def _strip_tags(text: str) -> str:
    # removing one tag can join brackets into another, e.g. "<<b>>"
    n = 1
    while n:
        text, n = _tags.subn(" ", text)
    return text


def preprocess(raw_text: str, config: EngineConfig = DEFAULT_CONFIG) -> str:
    """Normalize raw text into a single-spaced, lowercase token string.

    Steps: pad with spaces, lowercase, drop HTML-like tags, apply the character
    filter, strip punctuation remnants next to whitespace, remove stop words,
    collapse whitespace. Total over all strings; running it on its own output
    returns the same text.
    """
    if not raw_text:
        return ""
    # padding lets stop words at either end match as whole words
    text = " " + raw_text + " "
    text = _strip_tags(text.lower())
    text = config.char_filter.sub(" ", text)

    text = _trailing_special.sub(" ", text)
    text = _leading_special.sub(" ", text)

    if config.stop_pattern is not None:
        text = _ws.sub(" ", text)
        text = config.stop_pattern.sub("", text)
    return _ws.sub(" ", text).strip(" ")
