"""Project-wide constants (media types, pod layout, defaults)."""

TURTLE_CONTENT_TYPE: str = "text/turtle"
DEFAULT_FILE_CONTENT_TYPE: str = "application/octet-stream"

# Pod layout
WEBID_PROFILE_PATH: str = "profile/card#me"
METADATA_EXTENSION: str = "ttl"
METADATA_SLUG: str = "metadata.ttl"

DEFAULT_IDENTITY_PROVIDER: str = "https://opencommons.net"
DEFAULT_POD_SCHEME: str = "https"
DEFAULT_TIMEOUT_SECONDS: int = 30

FETCH_SELF: str = "self-fetch"
FETCH_CROSS: str = "cross-fetch"

ACCESS_GIVE: str = "Give"
ACCESS_REVOKE: str = "Revoke"
