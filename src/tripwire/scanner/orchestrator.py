"""Check evaluation and end-to-end run orchestration.

``Orchestrator.evaluate`` is the single decision point for one descriptor:
cache lookup, dispatch to the matching checker on a miss, cache write for
resolved verdicts, and a verdict plus message for the caller. It never
raises. ``run_checks`` is the build-step entry point used by the CLI.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from types import TracebackType

import httpx

from tripwire.cache import CacheStore
from tripwire.checkers import Checker, build_checkers
from tripwire.config import TripwireConfig, load_config
from tripwire.exceptions import ConfigError
from tripwire.http import HttpClient
from tripwire.model import CheckDescriptor, CheckOutcome, Declaration, RunResult, Verdict
from tripwire.scanner.discovery import collect_declarations

logger = logging.getLogger(__name__)


class Orchestrator:
    """Evaluates descriptors for one build invocation.

    Owns the cache store and the HTTP client for its lifetime; checkers get
    the client passed in per call.
    """

    def __init__(self, *, cache: CacheStore, http: HttpClient, checkers: Mapping[str, Checker]) -> None:
        self.cache = cache
        self._http = http
        self._checkers = dict(checkers)
        self._stats_lock = threading.Lock()
        self.cache_hits = 0
        self.cache_misses = 0

    @classmethod
    def from_config(
        cls,
        config: TripwireConfig,
        *,
        cache_path: Path | None,
        transport: httpx.BaseTransport | None = None,
    ) -> Orchestrator:
        """Build an orchestrator with the checkers, cache and client described by ``config``."""
        return cls(
            cache=CacheStore.open(cache_path),
            http=HttpClient(timeout_seconds=config.http_timeout_seconds, transport=transport),
            checkers=build_checkers(config),
        )

    def evaluate(self, descriptor: CheckDescriptor, *, declaration: Declaration | None = None) -> CheckOutcome:
        """Resolve one descriptor to a verdict and a diagnostic message."""
        if declaration is None:
            declaration = Declaration(descriptor=descriptor)
        try:
            verdict, cached = self._resolve(descriptor)
        except Exception as exc:
            logger.exception("Unexpected error while evaluating %r", descriptor)
            verdict, cached = Verdict.indeterminate(f"internal error: {type(exc).__name__}: {exc}"), False
        return CheckOutcome(
            declaration=declaration,
            verdict=verdict,
            message=build_message(descriptor, verdict),
            cached=cached,
        )

    def evaluate_all(self, declarations: Sequence[Declaration], *, workers: int = 1) -> list[CheckOutcome]:
        """Evaluate independent declarations on a bounded pool, keeping input order.

        Identical descriptors declared in several places are resolved once and
        share the first outcome, including whether it came from the cache.
        """
        unique: dict[CheckDescriptor, Declaration] = {}
        for declaration in declarations:
            unique.setdefault(declaration.descriptor, declaration)

        pending = list(unique.values())
        pool_size = max(1, min(workers, len(pending)))
        if pool_size == 1:
            resolved = [self.evaluate(item.descriptor, declaration=item) for item in pending]
        else:
            with ThreadPoolExecutor(max_workers=pool_size, thread_name_prefix="tripwire") as executor:
                resolved = list(executor.map(lambda item: self.evaluate(item.descriptor, declaration=item), pending))

        by_descriptor = {outcome.descriptor: outcome for outcome in resolved}
        outcomes: list[CheckOutcome] = []
        for declaration in declarations:
            first = by_descriptor[declaration.descriptor]
            if first.declaration is declaration:
                outcomes.append(first)
                continue
            outcomes.append(
                CheckOutcome(
                    declaration=declaration,
                    verdict=first.verdict,
                    message=first.message,
                    cached=first.cached,
                )
            )
        return outcomes

    def _resolve(self, descriptor: CheckDescriptor) -> tuple[Verdict, bool]:
        kind = getattr(descriptor, "kind", None)
        checker = self._checkers.get(kind) if isinstance(kind, str) else None
        if checker is None or not isinstance(descriptor, checker.descriptor_type):
            return Verdict.indeterminate(f"no checker is registered for {type(descriptor).__name__}"), False

        ttl = checker.ttl(descriptor)
        fingerprint = descriptor.fingerprint() if ttl is not None else None
        if fingerprint is not None:
            entry = self.cache.get(fingerprint)
            if entry is not None:
                self._count(hit=True)
                logger.debug("Cache hit for %s (%s)", descriptor.describe(), entry.verdict)
                return entry.to_verdict(), True
            self._count(hit=False)

        verdict = checker.evaluate(descriptor, http=self._http)
        if not isinstance(verdict, Verdict):
            return Verdict.indeterminate(f"{type(checker).__name__} returned {verdict!r} instead of a verdict"), False

        if fingerprint is not None and ttl is not None and verdict.cacheable:
            self.cache.put(fingerprint, verdict, ttl, kind=descriptor.kind)
        return verdict, False

    def _count(self, *, hit: bool) -> None:
        with self._stats_lock:
            if hit:
                self.cache_hits += 1
            else:
                self.cache_misses += 1

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> Orchestrator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


def build_message(descriptor: CheckDescriptor, verdict: Verdict) -> str:
    """Render the message the build surfaces for a verdict; empty on pass."""
    if verdict.is_pass:
        return ""
    try:
        label = f"{descriptor.kind} check {descriptor.describe()}"
    except Exception:
        label = repr(descriptor)
    if verdict.is_fail:
        return verdict.reason or f"{label} no longer holds"
    return (
        f"Could not resolve {label}: {verdict.reason}. "
        "This is not a failed condition; the check is retried on the next build."
    )


def run_checks(
    *,
    root: Path,
    config_path: Path | None = None,
    no_cache: bool = False,
    workers: int | None = None,
    environ: Mapping[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> RunResult:
    """Discover declarations under ``root``, evaluate them, and aggregate the outcome."""
    started_at = time.perf_counter()
    root = root.resolve()
    if not root.is_dir():
        raise ConfigError(f"Project root does not exist or is not a directory: {root}")

    config = load_config(root, config_path, environ=environ)
    discovery = collect_declarations(root, config)
    logger.info(
        "Found %d declared checks in %d files and the manifest",
        len(discovery.declarations),
        discovery.scanned_files,
    )

    cache_path = None if (no_cache or not config.cache_enabled) else config.cache_path
    with Orchestrator.from_config(config, cache_path=cache_path, transport=transport) as orchestrator:
        outcomes = orchestrator.evaluate_all(
            discovery.declarations,
            workers=workers if workers is not None else config.workers,
        )

    return RunResult(
        outcomes=tuple(outcomes),
        duration_seconds=time.perf_counter() - started_at,
        warnings=tuple(discovery.warnings + orchestrator.cache.warnings),
        declaration_errors=tuple(discovery.errors),
        cache_hits=orchestrator.cache_hits,
        cache_misses=orchestrator.cache_misses,
    )
