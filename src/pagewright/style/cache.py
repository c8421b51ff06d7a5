"""Memoization of compiled component styles."""

from dataclasses import dataclass
from typing import Any, Callable

from pagewright.core import BoundedCache, Stats, fingerprint
from pagewright.models import ComponentNode, StyleRule
from pagewright.monitoring import MetricsCollector, metrics_collector

CACHE_TYPE = "style"


@dataclass(frozen=True)
class CompiledStyle:
    """Stylesheet text for one node plus the rules it was rendered from."""

    text: str
    rules: tuple[StyleRule, ...]


class StyleCache:
    """
    Compiled style cache keyed by node id and style fingerprint.

    Values are pure functions of their key, so concurrent writers racing on
    the same key are harmless.
    """

    def __init__(
        self,
        max_size: int = 1000,
        ttl_seconds: float | None = 3600,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._cache: BoundedCache[CompiledStyle] = BoundedCache(max_size, ttl_seconds)
        self.metrics = metrics or metrics_collector

    @staticmethod
    def make_key(node: ComponentNode, options: dict[str, Any] | None = None) -> str:
        content = fingerprint(
            {
                "style": node.style,
                "responsive": node.responsive,
                "name": node.name,
                "type": node.type,
            }
        )
        return f"{node.id}:{content}:{fingerprint(options or {})}"

    def get(self, key: str) -> CompiledStyle | None:
        value = self._cache.get(key)
        if value is None:
            self.metrics.record_cache_miss(CACHE_TYPE)
        else:
            self.metrics.record_cache_hit(CACHE_TYPE)
        return value

    def set(self, key: str, value: CompiledStyle) -> None:
        self._cache.set(key, value)
        self.metrics.set_cache_size(CACHE_TYPE, len(self._cache))

    def get_or_compile(
        self,
        node: ComponentNode,
        options: dict[str, Any] | None,
        compile_fn: Callable[[ComponentNode], CompiledStyle],
    ) -> CompiledStyle:
        key = self.make_key(node, options)
        cached = self.get(key)
        if cached is not None:
            return cached
        compiled = compile_fn(node)
        self.set(key, compiled)
        return compiled

    def clear(self) -> None:
        self._cache.clear()
        self.metrics.set_cache_size(CACHE_TYPE, 0)

    @property
    def stats(self) -> Stats:
        return self._cache.stats

    def __len__(self) -> int:
        return len(self._cache)


__all__ = ["CompiledStyle", "StyleCache", "CACHE_TYPE"]
