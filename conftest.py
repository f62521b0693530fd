"""Root pytest configuration."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from massaction.formats import clear_section_filters

_root = Path(__file__).parent
load_dotenv(_root / ".env")
load_dotenv(_root / ".env.local", override=True)


@pytest.fixture
def clean_section_filters():
    """Registered section filters are module-level; start and end with none."""
    clear_section_filters()
    yield
    clear_section_filters()
