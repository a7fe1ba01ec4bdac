"""Exception types raised by fontlet's library layer."""


class FontletError(Exception):
    """Base class for all fontlet failures."""


class ToolNotFoundError(FontletError):
    """The figlet executable could not be located."""


class FontDiscoveryError(FontletError):
    """No font directory, or no font files inside it, could be found."""


class RenderError(FontletError):
    """figlet failed to render text, even after the no-width retry."""


class SaveError(FontletError):
    """Rendered output could not be written to disk."""
