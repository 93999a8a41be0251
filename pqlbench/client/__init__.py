from .http import HTTPClient, format_rfc3339, get_scheme

__all__ = ["HTTPClient", "format_rfc3339", "get_scheme"]
