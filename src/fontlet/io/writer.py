"""Save rendered figlet output."""

from pathlib import Path

from fontlet.errors import SaveError


def save_text(path: str | Path, content: str) -> Path:
    """
    Write ``content`` to ``path`` exactly as rendered, overwriting any file there.

    Returns the path written.

    Raises:
        SaveError: if the file cannot be written
    """
    path = Path(path).expanduser()
    data = content.encode("utf-8")

    try:
        with open(path, 'wb') as f:
            f.write(data)
    except OSError as e:
        raise SaveError(f"failed to save file '{path}': {e}") from e

    return path
