"""Configuration settings for the ShareNote server."""

import os

from common.constants import API_KEY_PREFIX, DEFAULT_SERVER_PORT


DATABASE_PATH = os.environ.get("SHARENOTE_DATABASE_PATH", "/app/data/sharenote.db")

SERVER_HOST = os.environ.get("SHARENOTE_HOST", "0.0.0.0")

SERVER_PORT = int(os.environ.get("SHARENOTE_PORT", str(DEFAULT_SERVER_PORT)))

# Kept below REQUEST_TIMEOUT_SECONDS so a locked database surfaces before the request deadline
DB_BUSY_TIMEOUT_SECONDS = float(os.environ.get("SHARENOTE_DB_BUSY_TIMEOUT", "5"))

REQUEST_TIMEOUT_SECONDS = float(os.environ.get("SHARENOTE_REQUEST_TIMEOUT", "10"))

# Moderation is disabled unless moderators are configured
ADMIN_USERNAMES = frozenset(
    name.strip()
    for name in os.environ.get("SHARENOTE_ADMIN_USERNAMES", "").split(",")
    if name.strip()
)

KEY_PREFIX = API_KEY_PREFIX

# Identifier generation
SHARE_CODE_BYTES = 16
SLUG_MAX_LENGTH = 80
SLUG_MAX_ATTEMPTS = 5

# Discovery listing
EXPLORE_DEFAULT_LIMIT = 50
EXPLORE_MAX_LIMIT = 100
