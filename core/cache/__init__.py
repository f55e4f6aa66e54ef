"""Pattern cache and request-in-flight guard."""

from __future__ import annotations

from core.cache.inflight_manager import InFlightGuard
from core.cache.pattern_cache import PatternCache, generate_pattern_key

__all__: list[str] = ["InFlightGuard", "PatternCache", "generate_pattern_key"]
