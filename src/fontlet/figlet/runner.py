"""Invoke figlet to render text in a given font."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from typing import Optional

from fontlet.core.constants import RENDER_TIMEOUT
from fontlet.errors import RenderError, ToolNotFoundError
from fontlet.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FigletTool:
    """
    A located figlet executable.

    Rendering asks figlet for a specific wrap width first; some figlet
    builds and fonts reject ``-w``, so a failed call is retried once
    without it before giving up.
    """
    path: str
    timeout: float = RENDER_TIMEOUT

    @classmethod
    def locate(cls, name: str = "figlet", timeout: float = RENDER_TIMEOUT) -> FigletTool:
        """Find ``name`` on PATH (or accept an explicit path)."""
        path = shutil.which(name)
        if path is None:
            raise ToolNotFoundError(
                f"{name} command not found. Please install figlet to use fontlet."
            )
        return cls(path=path, timeout=timeout)

    def render(self, font_path: str, text: str, width: Optional[int] = None) -> str:
        """
        Render ``text`` with the font at ``font_path``.

        Returns figlet's standard output verbatim.

        Raises:
            RenderError: if both the width-specified and the plain call fail
        """
        if width is not None:
            try:
                return self._run(["-f", font_path, "-w", str(width), text])
            except RenderError as e:
                logger.info("figlet rejected -w %d for %s, retrying without: %s", width, font_path, e)

        try:
            return self._run(["-f", font_path, text])
        except RenderError as e:
            raise RenderError(
                f"figlet failed (path: {font_path}, text: {text}, width: {width}): {e}"
            ) from e

    def info_directory(self) -> Optional[str]:
        """Ask figlet for its default font directory (``figlet -I 2``)."""
        try:
            output = self._run(["-I", "2"]).strip()
        except RenderError as e:
            logger.info("figlet -I 2 failed: %s", e)
            return None
        return output or None

    def _run(self, args: list[str]) -> str:
        try:
            result = subprocess.run(
                [self.path, *args],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
            raise RenderError(detail) from e
        except subprocess.TimeoutExpired as e:
            raise RenderError(f"timed out after {self.timeout:g}s") from e
        except OSError as e:
            raise RenderError(str(e)) from e
        return result.stdout
