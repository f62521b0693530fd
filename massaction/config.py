"""
Centralized configuration for the mass-action service.

All settings come from environment variables. `.env` / `.env.local` are
loaded by main.py (and by the root conftest.py for tests).
"""

import os

# Stock `maxsections` site setting of the LMS
DEFAULT_MAX_SECTIONS = 52


def is_dev_mode() -> bool:
    """Check if running in development mode (DEV_MODE env)."""
    return os.getenv("DEV_MODE", "").lower() in ("true", "1", "yes")


def get_environment() -> str:
    """Deployment environment name from MASSACTION_ENV (default "development")."""
    return os.getenv("MASSACTION_ENV", "development").strip().lower()


def is_production() -> bool:
    return get_environment() == "production"


def get_api_port() -> int:
    """Get API server port from env or default."""
    return int(os.getenv("API_PORT", "8000"))


def get_frontend_url() -> str:
    """Get the URL of the frontend that renders the section select form."""
    return os.environ.get(
        "FRONTEND_URL", f"http://localhost:{get_api_port()}"
    ).rstrip("/")


def get_allowed_origins() -> list[str]:
    """Get list of allowed CORS origins."""
    hosts = ["localhost", "127.0.0.1"]
    ports = [get_api_port(), 5173]
    origins = [f"http://{host}:{port}" for host in hosts for port in ports]

    frontend_url = get_frontend_url()
    if frontend_url not in origins:
        origins.append(frontend_url)

    return origins


def get_default_max_sections() -> int:
    """
    Site-wide ceiling on the number of sections in a course.

    Course formats without their own ceiling use this value.
    """
    value = os.getenv("MASSACTION_MAX_SECTIONS")
    if not value:
        return DEFAULT_MAX_SECTIONS
    return int(value)


def get_selection_token_ttl_minutes() -> int:
    """How long a rendered section selection stays valid for submission."""
    return int(os.getenv("SELECTION_TOKEN_TTL_MINUTES", "60"))


def get_sentry_dsn() -> str | None:
    """Sentry DSN, or None when error reporting is disabled."""
    return os.environ.get("SENTRY_DSN") or None


# Required environment variables
# Format: (name, description, required_in_dev)
REQUIRED_ENV_VARS = [
    ("DATABASE_URL", "PostgreSQL connection string", True),
    ("JWT_SECRET", "Secret key for session and selection tokens", True),
    ("SENTRY_DSN", "Sentry DSN for error reporting", False),
]


def check_required_env_vars() -> tuple[bool, list[str]]:
    """
    Check that required environment variables are set.

    Returns:
        (all_ok, warnings): Tuple of success flag and list of warning messages
    """
    warnings = []
    errors = []
    in_dev = is_dev_mode()

    for name, description, required_in_dev in REQUIRED_ENV_VARS:
        value = os.environ.get(name)

        if not value:
            if is_production() and required_in_dev:
                errors.append(f"  ✗ {name}: Not set ({description})")
            elif required_in_dev or not in_dev:
                warnings.append(f"  ⚠ {name}: Not set ({description})")

    if errors:
        for error in errors:
            print(error)
        return False, warnings

    return True, warnings
