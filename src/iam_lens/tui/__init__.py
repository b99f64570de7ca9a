"""Terminal host runtime built on textual."""

from .app import RoleBrowserApp
from .theme import DEFAULT_THEME, Theme

__all__ = ["DEFAULT_THEME", "RoleBrowserApp", "Theme"]
