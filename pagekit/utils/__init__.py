from .url_helpers import determine_request_scheme, normalize_origin

__all__ = ["determine_request_scheme", "normalize_origin"]
