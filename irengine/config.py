"""Engine configuration.

Configuration is fixed when an engine is created: a stop-word set and a character filter.
Both are validated up front and compiled once, then passed by reference into every
preprocessing call.
"""
from __future__ import annotations
import os
import re
from re import Pattern
from typing import Any, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError, field_validator

from .errors import InvalidConfiguration
from .stopwords import canonical_language, stop_words_for

DEFAULT_CHAR_FILTER = "[^a-z]"
_DEFAULT_FILTER = re.compile(DEFAULT_CHAR_FILTER)


class EngineConfig(BaseModel):
    """Immutable preprocessing settings.

    ``stop_words`` is a language tag: ``none``, ``english``/``en`` or ``portuguese``/``pt``
    (case-insensitive). Any other value, the empty string included, is rejected.
    ``char_filter`` is a regular expression; each match in the lowercased text is replaced
    by a space, so the default ``[^a-z]`` keeps only ASCII letters. Portuguese text usually
    wants something like ``[^a-zà-ÿ]`` so accented stop words survive the filter.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    stop_words: str = "none"
    char_filter: Pattern[str] = _DEFAULT_FILTER
    extra_stop_words: Tuple[str, ...] = ()

    _words: Tuple[str, ...] = PrivateAttr(default=())
    _stop_pattern: Optional[Pattern[str]] = PrivateAttr(default=None)

    @field_validator("stop_words", mode="before")
    @classmethod
    def _canonical_stop_words(cls, v: Any) -> str:
        if v is not None and not isinstance(v, str):
            raise ValueError(f"stop_words must be a language tag, got {type(v).__name__}")
        lang = canonical_language(v)
        if lang is None:
            raise ValueError(f"unknown stop-word language {v!r}")
        return lang

    @field_validator("char_filter", mode="before")
    @classmethod
    def _compile_filter(cls, v: Any) -> Any:
        if v is None:
            return _DEFAULT_FILTER
        if isinstance(v, str):
            try:
                return re.compile(v)
            except re.error as e:
                raise ValueError(f"invalid char_filter {v!r}: {e}") from e
        return v

    @field_validator("extra_stop_words", mode="before")
    @classmethod
    def _clean_extra(cls, v: Any) -> Tuple[str, ...]:
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        seen, out = set(), []
        for w in v:
            t = str(w).strip().lower()
            if t and t not in seen:
                seen.add(t)
                out.append(t)
        return tuple(out)

    def model_post_init(self, __context: Any) -> None:
        words = list(stop_words_for(self.stop_words))
        known = set(words)
        words += [w for w in self.extra_stop_words if w not in known]
        self._words = tuple(words)
        if words:
            # longest first so a stop word never shadows a longer one sharing its prefix
            alternatives = "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))
            self._stop_pattern = re.compile(rf"(?<= )(?:{alternatives})(?= )")
        else:
            self._stop_pattern = None

    @property
    def words(self) -> Tuple[str, ...]:
        """Active stop words in configuration order."""
        return self._words

    @property
    def stop_pattern(self) -> Optional[Pattern[str]]:
        return self._stop_pattern


def _describe(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", ())) or "config"
        parts.append(f"{loc}: {e.get('msg')}")
    return "; ".join(parts)


def make_config(**options: Any) -> EngineConfig:
    """Build an ``EngineConfig``; validation failures become ``InvalidConfiguration``."""
    try:
        return EngineConfig(**options)
    except ValidationError as e:
        raise InvalidConfiguration(_describe(e)) from e


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> EngineConfig:
    env = os.environ if environ is None else environ
    options = {}
    if env.get("IRENGINE_STOP_WORDS"):
        options["stop_words"] = env["IRENGINE_STOP_WORDS"]
    if env.get("IRENGINE_CHAR_FILTER"):
        options["char_filter"] = env["IRENGINE_CHAR_FILTER"]
    if env.get("IRENGINE_EXTRA_STOP_WORDS"):
        options["extra_stop_words"] = [w for w in env["IRENGINE_EXTRA_STOP_WORDS"].split(",") if w.strip()]
    return make_config(**options)


DEFAULT_CONFIG = EngineConfig()
