"""Configuration and shared settings for the feed article sanitizer."""

import os
from dotenv import load_dotenv

load_dotenv()

# Logging
SANITIZER_LOG_LEVEL = os.getenv("SANITIZER_LOG_LEVEL", "INFO").strip().upper()

# Number of per-base-URL sanitizers kept alive between calls
SANITIZER_CACHE_SIZE = int(os.getenv("SANITIZER_CACHE_SIZE", "128"))

# Used by the HTTP endpoint when a request does not carry its own base URL
SANITIZER_DEFAULT_BASE_URL = os.getenv("SANITIZER_DEFAULT_BASE_URL", "").strip()

# Optional shared secret expected in the X-Verify-Token header
CLOUD_RUN_VERIFY_TOKEN = os.getenv("CLOUD_RUN_VERIFY_TOKEN")
