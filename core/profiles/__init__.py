"""External candidate profiles (GitHub)."""
from core.profiles.github import GitHubProfileFetcher, extract_github_username, format_for_llm

__all__ = ['GitHubProfileFetcher', 'extract_github_username', 'format_for_llm']
