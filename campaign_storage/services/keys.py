"""Object key naming for campaign folders.

Segments are joined verbatim; callers are responsible for path-safe names.
"""


def folder_prefix(account_name: str, campaign_name: str) -> str:
    return f"{account_name}/{campaign_name}/"


def object_key(account_name: str, campaign_name: str, file_name: str) -> str:
    return f"{folder_prefix(account_name, campaign_name)}{file_name}"


def strip_prefix(key: str, prefix: str) -> str:
    """Return key with every occurrence of prefix removed."""
    return key.replace(prefix, "")
