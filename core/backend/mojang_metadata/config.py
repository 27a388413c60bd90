"""
Configuration for Mojang Metadata Client

Defines endpoints, timeouts and client-identifier defaults.
"""

from pathlib import Path

# User config directory (config.yaml lives here unless overridden)
USER_CONFIG_DIR = Path.home() / ".config" / "mojang-metadata"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"

# API Endpoints
MOJANG_API = "https://api.mojang.com"
SESSION_SERVER = "https://sessionserver.mojang.com"

ENDPOINTS = {
    "lookup": f"{MOJANG_API}/users/profiles/minecraft",
    "profile": f"{SESSION_SERVER}/session/minecraft/profile",
    "history": f"{MOJANG_API}/user/profiles",
    "blocked_servers": f"{SESSION_SERVER}/blockedservers",
}

# Connect timeout used when the caller does not pass one
DEFAULT_TIMEOUT_MS = 5000

DEFAULT_PROGRAM_NAME = "mojang-metadata"

# Worker count of the library-wide default executor
DEFAULT_MAX_WORKERS = 4

# User-Agent is "<program name><suffix>"
USER_AGENT_SUFFIXES = {
    "unique_id": "-UUIDFetcher",
    "skin_info": "-SkinFetcher",
    "name_history": "-NameHistoryFetcher",
    "blocked_servers": "-BlockedServersFetcher",
}

# Timestamp recorded for a name with no "changedToAt" (the account's first name)
NO_TIMESTAMP = -1
