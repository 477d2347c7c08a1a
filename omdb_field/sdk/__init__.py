"""
Host platform SDK: the contract screens use plus the in-memory and Supabase hosts.
"""

from omdb_field.sdk.base import (
    LOCATION_APP_CONFIG,
    LOCATION_ENTRY_FIELD,
    AppApi,
    CollectingNotifier,
    EntryApi,
    EntryField,
    ExtensionContext,
    HostApi,
    NotifierApi,
    SpaceApi,
    WindowApi,
)

__all__ = [
    "LOCATION_APP_CONFIG",
    "LOCATION_ENTRY_FIELD",
    "AppApi",
    "CollectingNotifier",
    "EntryApi",
    "EntryField",
    "ExtensionContext",
    "HostApi",
    "NotifierApi",
    "SpaceApi",
    "WindowApi",
]
