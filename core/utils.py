import json
import logging
import re
import secrets
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

_JSON_BLOCK_RE = re.compile(r'\{[\s\S]*\}')
_TRAILING_COMMA_RE = re.compile(r',(\s*[}\]])')
_EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
_SMART_DOUBLE_QUOTES = str.maketrans({'“': '"', '”': '"'})
_SMART_SINGLE_QUOTES = str.maketrans({'‘': "'", '’': "'"})


def parse_json_safely(raw: Any) -> Dict[str, Any]:
    """Parse JSON out of an LLM response that may carry extra text.

    Tries a direct parse first, then the first ``{...}`` block with smart
    quotes straightened and trailing commas removed.

    Returns:
        Dict with keys ``ok``, ``json``, ``raw`` and ``error``
    """
    if not raw or not isinstance(raw, str):
        return {'ok': False, 'json': None, 'raw': raw, 'error': 'Input must be a string'}

    try:
        return {'ok': True, 'json': json.loads(raw), 'raw': raw, 'error': None}
    except json.JSONDecodeError:
        pass

    match = _JSON_BLOCK_RE.search(raw)
    if match:
        cleaned = match.group(0)
        cleaned = cleaned.translate(_SMART_DOUBLE_QUOTES).translate(_SMART_SINGLE_QUOTES)
        cleaned = _TRAILING_COMMA_RE.sub(r'\1', cleaned)
        try:
            return {'ok': True, 'json': json.loads(cleaned), 'raw': raw, 'error': None}
        except json.JSONDecodeError:
            pass

    return {'ok': False, 'json': None, 'raw': raw, 'error': 'Could not parse JSON from response'}


def mask_email(email: Optional[str]) -> str:
    """Mask an email address for log output: ``jane@x.com`` -> ``j***@x.com``."""
    if not email or '@' not in email:
        return '***'
    local, domain = email.split('@', 1)
    return f"{local[:1]}***@{domain}"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and bool(_EMAIL_RE.match(email.strip()))


def generate_screening_token(nbytes: int = 16) -> str:
    return secrets.token_urlsafe(nbytes)


def build_screening_link(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/screening/{token}"
