"""
Default configuration values for ytcaptions.

Note: Values are resolved by config/loader.py which supports environment
variables (YTCAPTIONS_*), project config, and user config.
"""

# Caption language used when a caller does not pass one (CLI only)
DEFAULT_LANGUAGE = "en"

# Timeout for a single yt-dlp invocation (seconds)
CLIENT_TIMEOUT = 30

# Cache store
CACHE_ENABLED = True
CACHE_DEFAULT_TTL = 3600
CACHE_MAX_KEYS = 1000
CACHE_CHECK_PERIOD = 600
