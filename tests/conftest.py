"""Pytest configuration and shared fixtures for the google-fonts-downloader test suite."""

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that require external services (network)"
    )


# ---------------------------------------------------------------------------
# Sample CSS fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def google_fonts_css():
    """Stylesheet in the shape fonts.googleapis.com/css2 serves to Chrome."""
    return """\
/* cyrillic-ext */
@font-face {
  font-family: 'Fira Sans';
  font-style: italic;
  font-weight: 400;
  font-display: swap;
  src: url(https://fonts.gstatic.com/s/firasans/v17/va9C4kDNxMZdWfMOD5VvkrjEYTLHdQ.woff2) format('woff2');
  unicode-range: U+0460-052F, U+1C80-1C88, U+20B4, U+2DE0-2DFF, U+A640-A69F, U+FE2E-FE2F;
}
/* latin */
@font-face {
  font-family: 'Fira Sans';
  font-style: italic;
  font-weight: 600;
  font-display: swap;
  src: url(https://fonts.gstatic.com/s/firasans/v17/va9f4kDNxMZdWfMOD5VvkrByRCf4VFk.woff2) format('woff2');
  unicode-range: U+0000-00FF, U+0131, U+0152-0153, U+02BB-02BC, U+02C6, U+02DA, U+02DC;
}
/* latin-ext */
@font-face {
  font-family: 'Fira Sans';
  font-style: normal;
  font-weight: 400;
  font-display: swap;
  src: url(https://fonts.gstatic.com/s/firasans/v17/va9E4kDNxMZdWfMOD5VvmojLeTY.woff2) format('woff2');
  unicode-range: U+0100-02AF, U+0304, U+0308, U+0329, U+1E00-1E9F, U+1EF2-1EFF;
}
/* latin */
@font-face {
  font-family: 'Fira Sans';
  font-style: normal;
  font-weight: 400;
  font-display: swap;
  src: url(https://fonts.gstatic.com/s/firasans/v17/va9E4kDNxMZdWfMOD5Vvl4jL.woff2) format('woff2');
  unicode-range: U+0000-00FF, U+0131, U+0152-0153, U+02BB-02BC, U+02C6, U+02DA, U+02DC;
}
"""


@pytest.fixture
def two_face_css():
    """Two compact font-face blocks followed by a generic body rule."""
    return (
        "/* latin */ @font-face { font-family: 'Fira Sans'; font-style: normal; "
        "font-weight: 400; src: url(https://x/a.woff2); }\n"
        "/* latin-ext */ @font-face { font-family: 'Fira Sans'; font-style: italic; "
        "font-weight: 600; src: url(https://x/b.woff2); }\n"
        "body { font-family: 'Fira Sans'; }\n"
    )


@pytest.fixture
def css_missing_url():
    """A font-face block whose src has no url(...) token."""
    return """\
/* latin */
@font-face {
  font-family: 'Broken Sans';
  font-style: normal;
  font-weight: 400;
  src: local('Broken Sans');
}
"""


# ---------------------------------------------------------------------------
# Temporary directory fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def target_dir(tmp_path):
    """A not-yet-existing target directory inside tmp_path."""
    return tmp_path / "public"


@pytest.fixture
def non_empty_target_dir(tmp_path):
    """A target directory that already holds a file."""
    path = tmp_path / "existing"
    path.mkdir()
    (path / "keep.txt").write_text("keep", encoding="utf-8")
    return path
