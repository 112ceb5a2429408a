"""Google Drive storage adapter for the syncmarx bookmark sync client."""

__version__ = "0.1.0"
