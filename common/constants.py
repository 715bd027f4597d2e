"""Project-wide constants shared by the server and the CLI."""

DEFAULT_SERVER_PORT: int = 8000

API_KEY_PREFIX: str = "sn_"

SHARE_URL_PREFIX: str = "/share/"
