#!/usr/bin/env python3
"""
Self-host the fonts of a Google Fonts stylesheet.

Fetches the CSS served for a Google Fonts embed URL, downloads every font file
it references into <target>/fonts/ under a readable name, and writes
<target>/fonts.css pointing at the local copies.

Usage:
    python scripts/download-google-fonts.py \\
        "https://fonts.googleapis.com/css2?family=Fira+Sans:ital,wght@0,400;0,600;1,400&display=swap" \\
        ./public/

Output:
    <target>/fonts.css
    <target>/fonts/<family>[-<subset>][-<style>][-<weight>].woff2

Requirements:
    pip install requests httpx
"""

from __future__ import annotations

import argparse
import asyncio
import re
import sys
from pathlib import Path
from typing import NamedTuple

try:
    import requests
except ImportError:
    print("Error: requests is required. Install with: pip install requests")
    sys.exit(1)

try:
    import httpx
except ImportError:
    print("Error: httpx is required. Install with: pip install httpx")
    sys.exit(1)


__version__ = "1.0.0"

# Google only serves woff2 sources to a modern desktop browser
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/114.0.0.0 Safari/537.36"
)

FONTS_SUBDIR = "fonts"
CSS_FILENAME = "fonts.css"
REST_MARKER = "body {"
DEFAULT_FAMILY = "font"
REQUEST_TIMEOUT = 30.0

FONT_FACE_PATTERN = re.compile(r'/\*([^*]+)\*/\s*@font-face\s*\{\s*([^}]+)\s*\}')
URL_PATTERN = re.compile(r'url\(([^)]+)\)')


class FontFaceParseError(ValueError):
    """Raised when an @font-face block cannot be turned into a download."""


class FontFace(NamedTuple):
    """One @font-face block of the source stylesheet."""

    comment: str
    font_family: str
    font_style: str | None
    font_weight: str | None
    font_stretch: str | None
    font_display: str | None
    unicode_range: str | None
    font_file_url: str
    local_file_name: str


class DownloadResult(NamedTuple):
    name: str
    path: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def print_step(msg: str):
    """Print a progress step."""
    print(f"  -> {msg}")


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------

def to_kebab_case(text: str) -> str:
    """Convert 'FiraSans', 'Fira Sans' or 'Fira_Sans' to 'fira-sans'."""
    text = re.sub(r'([a-z])([A-Z])', r'\1-\2', text)
    text = re.sub(r'[\s_]+', '-', text)
    return text.lower()


def build_local_file_name(font_family, font_style, font_weight, comment):
    """Derive the local woff2 filename for a font face.

    Normal style, weight 400 and the latin subset are the defaults and are
    left out of the name, so the plain regular face is just <family>.woff2.
    """
    family_name = to_kebab_case(font_family)
    style_name = "" if font_style in (None, "normal") else f"-{font_style}"
    weight_name = "" if font_weight in (None, "400") else f"-{to_kebab_case(font_weight)}"
    comment_name = "" if comment == "latin" else f"-{comment}"

    return f"{family_name}{comment_name}{style_name}{weight_name}.woff2"


# ---------------------------------------------------------------------------
# Stylesheet parsing
# ---------------------------------------------------------------------------

def _property(declarations: str, name: str) -> str | None:
    match = re.search(re.escape(name) + r':\s*([^;]+);', declarations)
    return match.group(1) if match else None


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == "'":
        return value[1:-1]
    return value


def parse_font_faces(css_text: str) -> list[FontFace]:
    """Parse the commented @font-face blocks of a Google Fonts stylesheet.

    Blocks are returned in source order. A block without a url(...) source
    raises FontFaceParseError.
    """
    faces = []

    for match in FONT_FACE_PATTERN.finditer(css_text):
        comment = match.group(1).strip()
        declarations = match.group(2).strip()

        family = _property(declarations, "font-family")
        font_family = _unquote(family) if family else DEFAULT_FAMILY
        font_style = _property(declarations, "font-style")
        font_weight = _property(declarations, "font-weight")

        url_match = URL_PATTERN.search(declarations)
        if not url_match:
            raise FontFaceParseError(
                f"@font-face block '{comment}' for family '{font_family}' has no url(...) source"
            )

        faces.append(FontFace(
            comment=comment,
            font_family=font_family,
            font_style=font_style,
            font_weight=font_weight,
            font_stretch=_property(declarations, "font-stretch"),
            font_display=_property(declarations, "font-display"),
            unicode_range=_property(declarations, "unicode-range"),
            font_file_url=url_match.group(1),
            local_file_name=build_local_file_name(font_family, font_style, font_weight, comment),
        ))

    return faces


def extract_rest(css_text: str) -> str:
    """Return the non-font-face tail of the stylesheet, starting at 'body {'."""
    start = css_text.find(REST_MARKER)
    return css_text[start:] if start != -1 else ""


# ---------------------------------------------------------------------------
# Stylesheet rebuild
# ---------------------------------------------------------------------------

def build_font_face_block(face: FontFace) -> str:
    lines = [
        f"/* {face.comment} */",
        "@font-face {",
        f"  font-family: '{face.font_family}';",
    ]
    if face.font_style:
        lines.append(f"  font-style: {face.font_style};")
    if face.font_weight:
        lines.append(f"  font-weight: {face.font_weight};")
    if face.font_stretch:
        lines.append(f"  font-stretch: {face.font_stretch};")
    if face.font_display:
        lines.append(f"  font-display: {face.font_display};")
    lines.append(f"  src: url(./{FONTS_SUBDIR}/{face.local_file_name}) format('woff2');")
    if face.unicode_range:
        lines.append(f"  unicode-range: {face.unicode_range};")
    lines.append("}")

    return "\n".join(lines) + "\n"


def build_stylesheet(faces: list[FontFace], rest: str) -> str:
    """Rebuild the stylesheet with local sources, followed by the untouched rest."""
    return "".join(build_font_face_block(face) for face in faces) + rest


def write_stylesheet(target_dir: Path, faces: list[FontFace], rest: str) -> Path:
    css_path = Path(target_dir) / CSS_FILENAME
    css_path.write_text(build_stylesheet(faces, rest), encoding="utf-8")
    return css_path


# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------

def fetch_stylesheet(url: str, timeout=REQUEST_TIMEOUT) -> str:
    """Fetch the stylesheet text. Raises requests.RequestException on failure."""
    resp = requests.get(url, timeout=timeout, headers={"User-Agent": USER_AGENT})
    resp.raise_for_status()

    content_type = resp.headers.get("Content-Type", "")
    if content_type and not content_type.startswith("text/"):
        raise requests.HTTPError(
            f"Expected a text stylesheet from {url}, got '{content_type}'",
            response=resp,
        )
    return resp.text


async def download_font(client: httpx.AsyncClient, face: FontFace, fonts_dir: Path) -> DownloadResult:
    """Download one font file to fonts_dir, capturing any failure in the result."""
    dest = Path(fonts_dir) / face.local_file_name
    try:
        response = await client.get(face.font_file_url)
        response.raise_for_status()
        dest.write_bytes(response.content)
    except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
        return DownloadResult(face.local_file_name, error=str(e) or e.__class__.__name__)

    print(f"Downloaded {face.local_file_name}")
    return DownloadResult(face.local_file_name, path=dest)


async def download_fonts(faces: list[FontFace], fonts_dir: Path, transport=None) -> list[DownloadResult]:
    """Download all font files concurrently and wait for every one to settle.

    Results come back in the same order as faces.
    """
    async with httpx.AsyncClient(
        follow_redirects=True,
        timeout=REQUEST_TIMEOUT,
        headers={"User-Agent": USER_AGENT},
        transport=transport,
    ) as client:
        return await asyncio.gather(
            *(download_font(client, face, fonts_dir) for face in faces)
        )


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def prepare_target_dir(target_dir: Path, assume_yes: bool = False) -> bool:
    """Confirm overwriting a non-empty target, then create it and its fonts/ dir.

    Returns False if the user declined.
    """
    target_dir = Path(target_dir)
    if target_dir.is_dir() and any(target_dir.iterdir()) and not assume_yes:
        answer = input("The target directory is not empty. Do you want to continue? (y/n) ")
        if answer.strip().lower() != "y":
            print("Aborted.")
            return False

    (target_dir / FONTS_SUBDIR).mkdir(parents=True, exist_ok=True)
    return True


def run(url: str, target_dir: Path, transport=None) -> int:
    """Fetch, parse, download and rewrite. Returns the process exit status."""
    target_dir = Path(target_dir)

    print_step(f"Fetching {url}")
    try:
        css_text = fetch_stylesheet(url)
    except requests.RequestException as e:
        print(f"Error: Could not fetch stylesheet: {e}", file=sys.stderr)
        return 1

    try:
        faces = parse_font_faces(css_text)
    except FontFaceParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print_step(f"Found {len(faces)} @font-face declaration(s)")

    results = asyncio.run(download_fonts(faces, target_dir / FONTS_SUBDIR, transport=transport))

    css_path = write_stylesheet(target_dir, faces, extract_rest(css_text))
    print_step(f"Wrote {css_path}")

    failures = [r for r in results if not r.ok]
    print()
    print("=" * 60)
    print(f"  Faces:      {len(faces)}")
    print(f"  Downloaded: {len(results) - len(failures)}")
    print(f"  Failed:     {len(failures)}")
    for failure in failures:
        print(f"    {failure.name}: {failure.error}")
    print("=" * 60)

    return 1 if failures else 0


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """Report usage errors with exit status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def main(argv=None):
    parser = _ArgumentParser(
        description="Download the fonts of a Google Fonts stylesheet and rewrite it to use local copies.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "url",
        help="Embed URL, e.g. https://fonts.googleapis.com/css2?family=Fira+Sans:wght@400;600&display=swap",
    )
    parser.add_argument("target_dir", help="Directory to write fonts.css and fonts/ into")
    parser.add_argument(
        "-y", "--yes", action="store_true",
        help="Do not ask before writing into a non-empty target directory",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    print(f"Google Font Downloader {__version__}")

    target_dir = Path(args.target_dir)
    if not prepare_target_dir(target_dir, assume_yes=args.yes):
        return 0

    return run(args.url, target_dir)


if __name__ == "__main__":
    sys.exit(main())
