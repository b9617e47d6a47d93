"""GitHub profile client with connection reuse and retry logic."""

import logging
import re
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import requests
from tenacity import (
    retry,
    stop_after_attempt,
    wait_fixed,
    retry_if_exception,
    before_sleep_log
)

logger = logging.getLogger(__name__)

_USERNAME_RE = re.compile(r'^[a-zA-Z0-9](?:[a-zA-Z0-9]|-(?=[a-zA-Z0-9])){0,38}$')
_GITHUB_PATH_RE = re.compile(r'(?:www\.)?github\.com[/:]([a-zA-Z0-9](?:[a-zA-Z0-9]|-(?=[a-zA-Z0-9])){0,38})', re.I)
_GITHUB_HOSTS = ('github.com', 'www.github.com')


def _is_retryable_error(exc: Exception) -> bool:
    """Retry on timeouts, connection errors and 5xx; never on 4xx."""
    if isinstance(exc, requests.Timeout):
        return True
    if isinstance(exc, requests.RequestException):
        response = getattr(exc, 'response', None)
        if response is not None:
            return response.status_code >= 500
        return True
    return False


def extract_github_username(url: Optional[str]) -> Optional[str]:
    """
    Extract the username from a GitHub URL.

    Accepts ``https://github.com/user``, ``github.com/user/repo`` or a bare
    ``user``. Returns None for anything that is not a GitHub profile.
    """
    if not url:
        return None
    url = url.strip()

    if '/' not in url and '.' not in url and 'http' not in url:
        return url if _USERNAME_RE.match(url) else None

    normalized = url if url.startswith(('http://', 'https://')) else f"https://{url}"
    try:
        parsed = urlparse(normalized)
    except ValueError:
        match = _GITHUB_PATH_RE.search(url)
        return match.group(1) if match else None

    if (parsed.hostname or '').lower() not in _GITHUB_HOSTS:
        return None

    parts = [p for p in parsed.path.split('/') if p]
    return parts[0] if parts else None


class GitHubProfileFetcher:
    """
    Fetches a GitHub user's profile and most recently updated repositories.

    ``fetch`` never raises: any failure comes back as ``{"error": str}`` so
    profile scoring can degrade to "no data".
    """

    def __init__(
        self,
        api_url: str = "https://api.github.com",
        token: Optional[str] = None,
        timeout_seconds: int = 10,
        max_repos: int = 10
    ):
        self.api_url = api_url.rstrip('/')
        self.timeout_seconds = timeout_seconds
        self.max_repos = max_repos

        self.session = requests.Session()
        self.session.headers.update({
            'Accept': 'application/vnd.github+json',
            'X-GitHub-Api-Version': '2022-11-28',
        })
        if token:
            self.session.headers['Authorization'] = f"Bearer {token}"
        else:
            logger.warning("GitHub token not configured; API requests may be rate-limited")

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_fixed(1),
        retry=retry_if_exception(_is_retryable_error),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True
    )
    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        response = self.session.get(f"{self.api_url}{path}", params=params, timeout=self.timeout_seconds)
        if response.status_code >= 500:
            response.raise_for_status()
        return response

    def fetch(self, url: Optional[str]) -> Dict[str, Any]:
        if not url or not isinstance(url, str):
            return {'error': 'GitHub URL is required'}

        username = extract_github_username(url)
        if not username:
            logger.warning(f"Could not extract GitHub username from: {url}")
            return {'error': f"Invalid GitHub URL: {url}"}

        try:
            profile_response = self._get(f"/users/{username}")
            if profile_response.status_code == 404:
                return {'error': 'GitHub user not found'}
            if profile_response.status_code in (401, 403):
                return {'error': 'GitHub API authentication failed or rate limited'}
            if not profile_response.ok:
                return {'error': f"GitHub API error: {profile_response.status_code}"}
            profile = profile_response.json()

            repos_response = self._get(
                f"/users/{username}/repos",
                params={'sort': 'updated', 'per_page': self.max_repos, 'type': 'all'},
            )
            repos = repos_response.json() if repos_response.ok else []
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"GitHub fetch failed for {username}: {e}")
            return {'error': str(e) or 'Failed to fetch GitHub data'}

        return {
            'username': profile.get('login') or username,
            'name': profile.get('name') or '',
            'bio': profile.get('bio') or '',
            'company': profile.get('company') or '',
            'location': profile.get('location') or '',
            'blog': profile.get('blog') or '',
            'public_repos': profile.get('public_repos') or 0,
            'followers': profile.get('followers') or 0,
            'following': profile.get('following') or 0,
            'created_at': profile.get('created_at'),
            'repositories': [
                {
                    'name': repo.get('name'),
                    'description': repo.get('description') or '',
                    'language': repo.get('language') or '',
                    'stars': repo.get('stargazers_count') or 0,
                    'forks': repo.get('forks_count') or 0,
                    'updated_at': repo.get('updated_at'),
                    'topics': repo.get('topics') or [],
                    'homepage': repo.get('homepage') or '',
                    'html_url': repo.get('html_url'),
                }
                for repo in repos[:self.max_repos]
            ],
        }


def format_for_llm(data: Optional[Dict[str, Any]]) -> str:
    """Render fetched GitHub data as plain text for a scoring prompt."""
    if not data:
        return "No GitHub data available"
    if data.get('error'):
        return f"GitHub Error: {data['error']}"

    lines = [f"GitHub Profile: {data.get('username')}"]
    for label, key in (('Name', 'name'), ('Bio', 'bio'), ('Company', 'company'),
                       ('Location', 'location'), ('Website', 'blog')):
        if data.get(key):
            lines.append(f"{label}: {data[key]}")
    lines.append(f"Public Repositories: {data.get('public_repos', 0)}")
    lines.append(f"Followers: {data.get('followers', 0)}, Following: {data.get('following', 0)}")
    lines.append(f"Account Created: {data.get('created_at')}")

    repos = data.get('repositories') or []
    if not repos:
        lines.append("")
        lines.append("No public repositories found.")
        return "\n".join(lines)

    lines.append("")
    lines.append(f"Repositories ({len(repos)} most recent):")
    for index, repo in enumerate(repos, start=1):
        header = f"{index}. {repo.get('name')}"
        if repo.get('description'):
            header += f" - {repo['description']}"
        details = f"   Language: {repo.get('language') or 'N/A'} | Stars: {repo.get('stars', 0)} | Forks: {repo.get('forks', 0)}"
        if repo.get('topics'):
            details += f" | Topics: {', '.join(repo['topics'])}"
        lines.extend([header, details, f"   URL: {repo.get('html_url')}"])
    return "\n".join(lines)
