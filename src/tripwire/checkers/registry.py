"""Latest-published-version checks against package registries."""

from __future__ import annotations

import logging
from urllib.parse import quote

from tripwire.checkers.base import NetworkChecker
from tripwire.constants.checks import CHECK_KIND_REGISTRY, REGISTRY_CRATES, REGISTRY_GENERIC
from tripwire.constants.http import CRATES_API_URL, DEFAULT_GENERIC_REGISTRY_URL
from tripwire.exceptions import NetworkError
from tripwire.http import HttpClient
from tripwire.model import CheckDescriptor, RegistryConstraint, Verdict
from tripwire.utils import parse_constraint, parse_version, satisfies

logger = logging.getLogger(__name__)


class RegistryVersionChecker(NetworkChecker):
    """Pass while the latest published version still satisfies the constraint."""

    kind = CHECK_KIND_REGISTRY
    descriptor_type = RegistryConstraint

    def __init__(
        self,
        *,
        ttl_seconds: int,
        crates_url: str = CRATES_API_URL,
        generic_url: str = DEFAULT_GENERIC_REGISTRY_URL,
    ) -> None:
        super().__init__(ttl_seconds=ttl_seconds)
        self._urls = {
            REGISTRY_CRATES: crates_url,
            REGISTRY_GENERIC: generic_url,
        }

    def evaluate(self, descriptor: CheckDescriptor, *, http: HttpClient) -> Verdict:
        assert isinstance(descriptor, RegistryConstraint)
        name = descriptor.package_name
        try:
            constraint = parse_constraint(descriptor.constraint)
        except ValueError as exc:
            return Verdict.indeterminate(str(exc))

        url = self._urls[descriptor.registry].format(package=quote(name, safe=""))
        try:
            response = http.get(url)
        except NetworkError as exc:
            return Verdict.indeterminate(f"{descriptor.registry} registry request failed ({exc})")

        if response.status_code == 404:
            return Verdict.indeterminate(f"package {name} was not found on the {descriptor.registry} registry")
        if not response.ok:
            return Verdict.indeterminate(
                f"{descriptor.registry} registry returned status {response.status_code} for {url}: "
                f"{response.body_excerpt()!r}"
            )

        try:
            payload = response.json()
        except ValueError:
            return Verdict.indeterminate(f"{descriptor.registry} registry returned invalid JSON for {url}")

        if descriptor.registry == REGISTRY_CRATES:
            raw_version = _latest_crate_version(payload)
        else:
            raw_version = _latest_generic_version(payload)
        if raw_version is None:
            return Verdict.indeterminate(f"{descriptor.registry} registry response for {name} lists no versions")

        try:
            latest = parse_version(raw_version)
        except ValueError:
            return Verdict.indeterminate(
                f"latest version {raw_version!r} of {name} is not a valid semantic version"
            )

        logger.debug("Latest %s version of %s is %s", descriptor.registry, name, latest)
        if satisfies(latest, constraint):
            return Verdict.passed()
        return Verdict.failed(
            f"latest version of {name} on {descriptor.registry} is {latest}, "
            f"which no longer satisfies {descriptor.constraint}"
        )


def _latest_crate_version(payload: object) -> str | None:
    """Return the newest non-yanked stable version from a crates.io crate document.

    Prereleases are skipped the way Cargo skips them when resolving a
    requirement that does not name one.
    """
    if not isinstance(payload, dict):
        return None

    versions = payload.get("versions")
    if isinstance(versions, list):
        for entry in versions:
            if not isinstance(entry, dict) or entry.get("yanked") is True:
                continue
            num = entry.get("num")
            if isinstance(num, str) and num.strip() and not _is_prerelease(num):
                return num

    crate = payload.get("crate")
    if isinstance(crate, dict):
        for key in ("max_stable_version", "max_version"):
            candidate = crate.get(key)
            if isinstance(candidate, str) and candidate.strip():
                return candidate
    return None


def _latest_generic_version(payload: object) -> str | None:
    """Return the advertised latest version from a JSON metadata document."""
    if not isinstance(payload, dict):
        return None

    info = payload.get("info")
    candidates = [info.get("version") if isinstance(info, dict) else None, payload.get("version"), payload.get("latest")]
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate
    return None


def _is_prerelease(raw_version: str) -> bool:
    return "-" in raw_version.partition("+")[0]
