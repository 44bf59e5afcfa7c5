from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class SearchConfig:
    """Tunable strength/latency knobs for the search engine.

    ``limits`` maps a minimum remaining depth to the maximum number of ordered
    candidates expanded at that depth, checked from the first entry down.
    """

    depth: int = 6
    limits: Tuple[Tuple[int, int], ...] = ((5, 6), (3, 10), (1, 15))
    critical_threshold: int = 10000
    good_threshold: int = 1000
    fallback_radius: int = 3
    time_limit_s: Optional[float] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SearchConfig":
        env = os.environ if environ is None else environ
        kwargs = {}
        depth = env.get("GOMOKU_SEARCH_DEPTH")
        if depth:
            kwargs["depth"] = _parse(int, "GOMOKU_SEARCH_DEPTH", depth)
            if kwargs["depth"] < 1:
                raise ValueError("GOMOKU_SEARCH_DEPTH must be at least 1")
        time_limit = env.get("GOMOKU_TIME_LIMIT")
        if time_limit:
            kwargs["time_limit_s"] = _parse(float, "GOMOKU_TIME_LIMIT", time_limit)
        return cls(**kwargs)


@dataclass(frozen=True)
class WebConfig:
    """Server settings. ``ai_time_limit_s`` of None derives a budget from the search depth."""

    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False
    ai_time_limit_s: Optional[float] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WebConfig":
        env = os.environ if environ is None else environ
        time_limit = env.get("GOMOKU_AI_TIME_LIMIT")
        return cls(
            host=env.get("GOMOKU_HOST", cls.host),
            port=_parse(int, "PORT", env.get("PORT", str(cls.port))),
            debug=env.get("GOMOKU_DEBUG", "").lower() in ("1", "true", "yes"),
            ai_time_limit_s=_parse(float, "GOMOKU_AI_TIME_LIMIT", time_limit) if time_limit else None,
        )


def _parse(kind, name: str, raw: str):
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from None
