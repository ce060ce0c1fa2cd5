from . import containers, misc, numeric, structs  # noqa: F401
from .colors import ColorPreference, ColorToken, ConfigurationError
from .config import CONFIG
from .context import OutputContext
from .file import FileWrapper
from .format import pformat, pprint
from .render import register, render

__all__ = [
    "CONFIG",
    "ColorPreference",
    "ColorToken",
    "ConfigurationError",
    "FileWrapper",
    "OutputContext",
    "pformat",
    "pprint",
    "register",
    "render",
]
