"""Issue and pull-request state checks against the GitHub REST API."""

from __future__ import annotations

import logging

from tripwire.checkers.base import NetworkChecker
from tripwire.constants.checks import CHECK_KIND_ISSUE, CHECK_KIND_PULL_REQUEST
from tripwire.constants.http import GITHUB_ACCEPT_HEADER, GITHUB_API_URL
from tripwire.exceptions import NetworkError
from tripwire.http import HttpClient
from tripwire.model import CheckDescriptor, IssueRef, PullRequestRef, Verdict
from tripwire.model.descriptors import _TrackerRef

logger = logging.getLogger(__name__)


class _TrackerItemChecker(NetworkChecker):
    """Shared request and state mapping for issues and pull requests."""

    endpoint: str
    label: str

    def __init__(self, *, ttl_seconds: int, api_url: str = GITHUB_API_URL, token: str | None = None) -> None:
        super().__init__(ttl_seconds=ttl_seconds)
        self._api_url = api_url.rstrip("/")
        self._token = token

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": GITHUB_ACCEPT_HEADER}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def evaluate(self, descriptor: CheckDescriptor, *, http: HttpClient) -> Verdict:
        assert isinstance(descriptor, _TrackerRef)
        url = f"{self._api_url}/repos/{descriptor.owner}/{descriptor.repo}/{self.endpoint}/{descriptor.number}"
        try:
            response = http.get(url, headers=self._headers())
        except NetworkError as exc:
            return Verdict.indeterminate(f"GitHub API request failed ({exc})")

        if response.status_code == 404:
            return Verdict.indeterminate(
                f"{self.label} #{descriptor.number} on {descriptor.slug} was not found "
                "(check the reference, or set a token for private repositories)"
            )
        if not response.ok:
            return Verdict.indeterminate(
                f"GitHub API returned status {response.status_code} for {url}: {response.body_excerpt()!r}"
            )

        try:
            payload = response.json()
        except ValueError:
            return Verdict.indeterminate(f"GitHub API returned a response for {url} that is not valid JSON")

        state = payload.get("state") if isinstance(payload, dict) else None
        if state == "open":
            return Verdict.passed()
        if state == "closed":
            return Verdict.failed(f"{self.label} #{descriptor.number} on {descriptor.slug} is closed")

        logger.debug("Unexpected %s state %r from %s", self.label, state, url)
        return Verdict.indeterminate(f"GitHub API response for {url} has no usable `state` field (got {state!r})")


class IssueChecker(_TrackerItemChecker):
    """Pass while the issue is open, fail once it is closed."""

    kind = CHECK_KIND_ISSUE
    descriptor_type = IssueRef
    endpoint = "issues"
    label = "issue"


class PullRequestChecker(_TrackerItemChecker):
    """Pass while the pull request is open, fail once it is closed or merged."""

    kind = CHECK_KIND_PULL_REQUEST
    descriptor_type = PullRequestRef
    endpoint = "pulls"
    label = "pull request"
