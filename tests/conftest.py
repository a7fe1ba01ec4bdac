"""Shared fixtures: a fake figlet executable and a font directory to scan."""

import os
import stat
import tempfile
from pathlib import Path
from typing import Callable, Optional

import pytest

# Keep log files out of the user's home directory during tests
os.environ.setdefault("FONTLET_LOG_DIR", tempfile.mkdtemp(prefix="fontlet-test-logs-"))

from fontlet.figlet.runner import FigletTool  # noqa: E402

FAKE_FIGLET = """#!/bin/sh
echo "$*" >> "{calls}"
font=""
width=""
info=""
text=""
while [ $# -gt 0 ]; do
  case "$1" in
    -f) font="$2"; shift 2 ;;
    -w) width="$2"; shift 2 ;;
    -I) info="$2"; shift 2 ;;
    *) text="$1"; shift ;;
  esac
done
if [ -n "$info" ]; then
  {info_action}
fi
case "$(basename "$font")" in
  {fail_pattern}) echo "cannot load font $font" >&2; exit 1 ;;
esac
if [ -n "$width" ] && [ "{reject_width}" = "1" ]; then
  echo "figlet: invalid option -w" >&2
  exit 2
fi
printf 'font:%s\\n' "$(basename "$font")"
printf 'text:%s\\n' "$text"
printf 'width:%s\\n' "${{width:-none}}"
printf '\\n\\n'
"""


class FakeFiglet:
    """Handle on a generated figlet stand-in and the calls made to it."""

    def __init__(self, path: Path, calls: Path) -> None:
        self.path = path
        self.calls_file = calls

    @property
    def tool(self) -> FigletTool:
        return FigletTool(path=str(self.path), timeout=5.0)

    @property
    def calls(self) -> list[str]:
        if not self.calls_file.exists():
            return []
        return self.calls_file.read_text().splitlines()


@pytest.fixture
def make_figlet(tmp_path: Path) -> Callable[..., FakeFiglet]:
    """
    Build a fake figlet script.

    Args:
        info_dir: what ``-I 2`` prints (None makes ``-I`` fail)
        reject_width: fail every call that passes ``-w``
        fail_fonts: shell glob of font file names that always fail
    """
    counter = {"n": 0}

    def _make(
        info_dir: Optional[Path] = None,
        reject_width: bool = False,
        fail_fonts: str = "__never__",
    ) -> FakeFiglet:
        counter["n"] += 1
        bin_dir = tmp_path / f"bin{counter['n']}"
        bin_dir.mkdir()
        calls = bin_dir / "calls.log"
        if info_dir is None:
            info_action = "exit 1"
        else:
            info_action = f'echo "{info_dir}"; exit 0'
        script = bin_dir / "figlet"
        script.write_text(FAKE_FIGLET.format(
            calls=calls,
            info_action=info_action,
            fail_pattern=fail_fonts,
            reject_width="1" if reject_width else "0",
        ))
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return FakeFiglet(script, calls)

    return _make


@pytest.fixture
def fake_figlet(make_figlet: Callable[..., FakeFiglet]) -> FakeFiglet:
    """A fake figlet that renders everything and has no info directory."""
    return make_figlet()


@pytest.fixture
def font_dir(tmp_path: Path) -> Path:
    """A font directory with five fonts (one nested) and some non-font files."""
    root = tmp_path / "fonts"
    (root / "contrib").mkdir(parents=True)
    for name in ("standard.flf", "slant.flf", "banner.flf", "Big.FLF"):
        (root / name).write_text("flf2a$ 1 1 10 0 0\n")
    (root / "contrib" / "mini.flf").write_text("flf2a$ 1 1 10 0 0\n")
    (root / "README.txt").write_text("not a font\n")
    (root / "ascii9.tlf").write_text("toilet font\n")
    return root
