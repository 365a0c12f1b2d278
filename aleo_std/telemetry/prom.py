"""Prometheus integration for aggregate profiles.

Metrics are cached per registry and name so constructing a wrapper twice
(tests, re-initialisation) does not trip duplicate registration.
"""
from __future__ import annotations

import weakref
from typing import Dict, Optional

from prometheus_client import REGISTRY, CollectorRegistry
from prometheus_client import Counter as _PCounter, Gauge as _PGauge

_CACHE: "weakref.WeakKeyDictionary[CollectorRegistry, Dict[str, object]]" = weakref.WeakKeyDictionary()


def registry_or_default(registry: Optional[CollectorRegistry]) -> CollectorRegistry:
    return REGISTRY if registry is None else registry


def _cached(registry: CollectorRegistry, name: str, factory):  # noqa: ANN001, ANN202
    per_reg = _CACHE.setdefault(registry, {})
    if name not in per_reg:
        per_reg[name] = factory()
    return per_reg[name]


class Counter:
    def __init__(
        self,
        name: str,
        desc: str = "",
        labelnames: list[str] | None = None,
        registry: Optional[CollectorRegistry] = None,
    ) -> None:
        self._name = name
        self._labelnames = list(labelnames) if labelnames else []
        reg = registry_or_default(registry)
        self._c = _cached(reg, name, lambda: _PCounter(name, desc or name, self._labelnames, registry=reg))

    def inc(self, amt: float = 1.0, **labels: str) -> None:
        if amt <= 0:
            return
        if self._labelnames:
            self._c.labels(**labels).inc(amt)
        else:
            self._c.inc(amt)


class Gauge:
    def __init__(
        self,
        name: str,
        desc: str = "",
        labelnames: list[str] | None = None,
        registry: Optional[CollectorRegistry] = None,
    ) -> None:
        self._name = name
        self._labelnames = list(labelnames) if labelnames else []
        reg = registry_or_default(registry)
        self._g = _cached(reg, name, lambda: _PGauge(name, desc or name, self._labelnames, registry=reg))

    def set(self, val: float, **labels: str) -> None:
        if self._labelnames:
            self._g.labels(**labels).set(val)
        else:
            self._g.set(val)
