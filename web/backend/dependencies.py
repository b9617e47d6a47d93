#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

import threading
from typing import Optional

from core.app_context import AppContext
from core.config_loader import load_config

_context: Optional[AppContext] = None
_context_lock = threading.Lock()


def get_context() -> AppContext:
    """
    FastAPI dependency returning the process-wide AppContext.

    Built on first use from config.yaml and environment overrides.
    Tests replace it through ``app.dependency_overrides``.

    Usage:
        @router.get("/endpoint")
        def my_endpoint(ctx: AppContext = Depends(get_context)):
            ...
    """
    global _context
    with _context_lock:
        if _context is None:
            _context = AppContext.build(load_config())
        return _context
