"""API route handlers."""

from .jobs import router as jobs_router
from .applications import router as applications_router
from .matches import router as matches_router
from .screenings import router as screenings_router
from .users import router as users_router
from .email import router as email_router
