"""Conversation sharing.

Publishes a chat session either to a paste-bin style share service or as an
issue in a GitHub repository. Issue publishing follows a create-or-update
protocol: a caller that remembers the issue number of an earlier share updates
that issue; otherwise a new one is created, labelled with the session id so a
forgotten number can be recovered with :meth:`ShareApi.find_open_issue_by_label`.

None of the network operations raise. Failures are logged and reported as a
``None`` result; nothing is retried.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import requests

from .client_config import ClientConfig
from .constants import (
    GITHUB_API_BASE,
    GITHUB_API_VERSION,
    SHAREGPT_API_URL,
    SHAREGPT_PUBLIC_BASE,
    ApiPath,
)
from .logging import LogEvent, log_debug, log_error, log_info
from .models import Endpoint, GithubParams, ShareGPTParams, ShareProvider, now_ms
from .session import ROLE_USER, ChatMessage, ChatSession

UNKNOWN_PROVIDER = "Unknown"

# Model-name substrings and the provider label they suggest
_PROVIDER_HINTS = (
    ("gpt", "OpenAI"),
    ("gemini", "Google"),
    ("claude", "Anthropic"),
)


def infer_provider(model: Optional[str]) -> str:
    """Guess a provider label from a model name.

    This is a best-effort label for display, not a lookup against provider
    metadata.

    Args:
        model: Model name, e.g. ``"gpt-4o"``

    Returns:
        Provider label, or ``"Unknown"``
    """
    name = (model or "").lower()
    for hint, label in _PROVIDER_HINTS:
        if hint in name:
            return label
    return UNKNOWN_PROVIDER


def format_system_info(session: ChatSession, endpoint: Optional[Endpoint] = None) -> str:
    """Describe which endpoint, provider and model produced a conversation.

    The endpoint's provider is used when known; otherwise the provider is
    inferred from the model name.
    """
    if endpoint is not None and endpoint.provider is not None:
        provider = endpoint.provider.value
    else:
        provider = infer_provider(session.model)
    endpoint_name = endpoint.name if endpoint is not None and endpoint.name else UNKNOWN_PROVIDER
    return (
        "## system info\n"
        f"- Endpoint: {endpoint_name}\n"
        f"- Provider: {provider}\n"
        f"- Model: {session.model or UNKNOWN_PROVIDER}\n"
    )


def format_issue_body(session: ChatSession, endpoint: Optional[Endpoint] = None) -> str:
    """Render a session as a markdown issue body."""
    messages = "\n".join(f"## {m.role}\n{m.content.strip()}\n" for m in session.messages)
    return f"{format_system_info(session, endpoint)}\n{messages}"


@dataclass(frozen=True)
class IssueRef:
    """An issue found by label lookup."""

    number: int
    url: str


@dataclass
class ShareResult:
    """Outcome of :meth:`ShareApi.share`.

    Attributes:
        success: Whether a share URL was obtained
        url: Public URL of the shared conversation
        issue_number: Issue number to remember for later updates (GitHub only)
        error: Reason for failure
    """

    success: bool
    url: Optional[str] = None
    issue_number: str = ""
    error: Optional[str] = None


class ShareApi:
    """Client for the share destinations.

    Args:
        client_config: Deployment configuration. In app mode requests go
            straight to the external services; otherwise through the backing
            server's relay paths.
    """

    def __init__(self, client_config: Optional[ClientConfig] = None) -> None:
        self.client_config = client_config or ClientConfig()

    def _timeout(self) -> float:
        return self.client_config.request_timeout

    # GitHub issues

    def issues_url(self, owner: str, repo: str) -> str:
        """Base URL of a repository's issues, direct or relayed."""
        if self.client_config.is_app:
            return f"{GITHUB_API_BASE}/repos/{owner}/{repo}/issues"
        return self.client_config.server_path(f"{ApiPath.SHARE_GITHUB.value}/{owner}/{repo}")

    @staticmethod
    def github_headers(token: str) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }

    def _publish_issue(
        self,
        owner: str,
        repo: str,
        token: str,
        existing_issue_number: Optional[str],
        session: ChatSession,
        endpoint: Optional[Endpoint] = None,
    ) -> Optional[Dict[str, Any]]:
        url = self.issues_url(owner, repo)
        payload = {
            "title": session.topic,
            "body": format_issue_body(session, endpoint),
            "labels": [session.id],
        }
        headers = self.github_headers(token)
        try:
            if existing_issue_number:
                url = f"{url}/{existing_issue_number}"
                log_debug(LogEvent.SHARE, "Updating issue", url=url)
                response = requests.patch(url, json=payload, headers=headers, timeout=self._timeout())
            else:
                log_debug(LogEvent.SHARE, "Creating issue", url=url)
                response = requests.post(url, json=payload, headers=headers, timeout=self._timeout())
            try:
                response.raise_for_status()
                data = response.json()
            finally:
                response.close()
        except (requests.RequestException, ValueError) as e:
            log_error(LogEvent.SHARE, f"Failed to publish issue: {e}", url=url)
            return None

        if not isinstance(data, dict) or not data.get("html_url"):
            log_error(LogEvent.SHARE, "Issue response has no html_url", url=url)
            return None
        return data

    def create_or_update_issue(
        self,
        owner: str,
        repo: str,
        token: str,
        existing_issue_number: Optional[str],
        session: ChatSession,
        endpoint: Optional[Endpoint] = None,
    ) -> Optional[str]:
        """Publish a session as a new issue, or update a previously created one.

        Args:
            owner: Repository owner
            repo: Repository name
            token: GitHub token
            existing_issue_number: Number of the issue from an earlier share;
                empty to create a new issue
            session: Conversation to publish
            endpoint: Endpoint the conversation used, for the system info block

        Returns:
            The issue's ``html_url``, or None on any failure
        """
        data = self._publish_issue(owner, repo, token, existing_issue_number, session, endpoint)
        return str(data["html_url"]) if data is not None else None

    def find_open_issue_by_label(self, owner: str, repo: str, token: str, label: str) -> Optional[IssueRef]:
        """Find the first open issue carrying a label.

        Args:
            owner: Repository owner
            repo: Repository name
            token: GitHub token
            label: Label to search for, normally a session id

        Returns:
            The first matching issue, or None when there is none or the lookup fails
        """
        url = self.issues_url(owner, repo)
        params = {"labels": label, "state": "open", "ts": str(now_ms())}
        try:
            response = requests.get(url, params=params, headers=self.github_headers(token), timeout=self._timeout())
            try:
                response.raise_for_status()
                data = response.json()
            finally:
                response.close()
        except (requests.RequestException, ValueError) as e:
            log_error(LogEvent.SHARE, f"Failed to look up issue: {e}", url=url, label=label)
            return None

        if not isinstance(data, list) or not data or not isinstance(data[0], dict):
            log_debug(LogEvent.SHARE, "No open issue with label", label=label)
            return None
        first = data[0]
        try:
            return IssueRef(number=int(first["number"]), url=str(first.get("html_url") or ""))
        except (KeyError, TypeError, ValueError):
            log_error(LogEvent.SHARE, "Issue lookup returned an unexpected item", label=label)
            return None

    # Paste-bin share

    def share_to_sharegpt(self, messages: Sequence[ChatMessage], avatar_url: Optional[str] = None) -> Optional[str]:
        """Post messages to the paste-bin share service.

        Args:
            messages: Conversation messages
            avatar_url: Optional avatar shown next to user messages

        Returns:
            Public share URL, or None on failure
        """
        url = SHAREGPT_API_URL if self.client_config.is_app else self.client_config.server_path(ApiPath.SHAREGPT.value)
        items: List[Dict[str, str]] = [
            {"from": "human" if m.role == ROLE_USER else "gpt", "value": m.content} for m in messages
        ]
        try:
            response = requests.post(
                url,
                json={"avatarUrl": avatar_url, "items": items},
                headers={"Content-Type": "application/json"},
                timeout=self._timeout(),
            )
            try:
                response.raise_for_status()
                data = response.json()
            finally:
                response.close()
        except (requests.RequestException, ValueError) as e:
            log_error(LogEvent.SHARE, f"Failed to share conversation: {e}", url=url)
            return None

        share_id = data.get("id") if isinstance(data, dict) else None
        if not share_id:
            log_error(LogEvent.SHARE, "Share response has no id", url=url)
            return None
        return f"{SHAREGPT_PUBLIC_BASE}/{share_id}"

    # Dispatch

    def share(
        self,
        session: ChatSession,
        provider: ShareProvider,
        issue_number: str = "",
        endpoint: Optional[Endpoint] = None,
    ) -> ShareResult:
        """Share a session through a configured provider.

        For GitHub providers with no remembered issue number, an open issue
        labelled with the session id is looked up first so the share updates
        it instead of creating a duplicate.

        Args:
            session: Conversation to share
            provider: Destination
            issue_number: Issue number remembered from an earlier share
            endpoint: Endpoint the conversation used

        Returns:
            ShareResult describing the outcome
        """
        params = provider.params
        if isinstance(params, ShareGPTParams):
            url = self.share_to_sharegpt(session.messages)
            if url is None:
                return ShareResult(success=False, error="Share service did not return a URL")
            log_info(LogEvent.SHARE, "Shared conversation", provider=provider.id, url=url)
            return ShareResult(success=True, url=url)

        if isinstance(params, GithubParams):
            if not issue_number:
                existing = self.find_open_issue_by_label(params.owner, params.repo, params.token, session.id)
                if existing is not None:
                    issue_number = str(existing.number)
            data = self._publish_issue(params.owner, params.repo, params.token, issue_number, session, endpoint)
            if data is None:
                return ShareResult(success=False, issue_number=issue_number, error="Issue could not be published")
            number = data.get("number")
            if number is not None:
                issue_number = str(number)
            log_info(LogEvent.SHARE, "Published conversation issue", provider=provider.id, issue=issue_number)
            return ShareResult(success=True, url=str(data["html_url"]), issue_number=issue_number)

        log_error(LogEvent.SHARE, "Unsupported share provider type", provider=provider.id, type=provider.type)
        return ShareResult(success=False, error=f"Unsupported share provider type '{provider.type}'")
