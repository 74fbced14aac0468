"""
Pytest configuration and shared fixtures for the instruction stream tests.
"""
import sys
import pytest
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import Settings
from core.stream import (
    Color,
    DocumentBuilder,
    Font,
    ImageRef,
    InstructionStream,
)


# ============================================================================
# Fixtures: Configuration & Settings
# ============================================================================

@pytest.fixture
def test_settings():
    """Settings pinned to the documented defaults (ignores environment)."""
    return Settings(
        default_font_family="Helvetica",
        default_font_size=14.0,
        default_text_color="000000",
        image_row_spacing=5.0,
        text_line_spacing=1.0,
        line_style_width=0.25,
    )


# ============================================================================
# Fixtures: Builder & Stream
# ============================================================================

@pytest.fixture
def builder(test_settings):
    """Fresh builder for one document session."""
    return DocumentBuilder(settings=test_settings)


@pytest.fixture
def stream():
    """Empty instruction stream."""
    return InstructionStream()


# ============================================================================
# Fixtures: Sample Payloads
# ============================================================================

@pytest.fixture
def default_font():
    return Font(family="Helvetica", size_pt=14.0)


@pytest.fixture
def bold_font():
    return Font(family="Helvetica-Bold", size_pt=14.0, bold=True)


@pytest.fixture
def red():
    return Color("FF0000")


@pytest.fixture
def sample_image():
    return ImageRef(source="assets/logo.png", caption="Logo", width=120.0)
