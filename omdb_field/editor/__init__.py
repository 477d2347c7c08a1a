"""
Screens rendered by the OMDb field app: the configuration form and the field editor.
"""

from omdb_field.editor.config_screen import ConfigScreen
from omdb_field.editor.field_editor import OmdbFieldEditor

__all__ = [
    "ConfigScreen",
    "OmdbFieldEditor",
]
