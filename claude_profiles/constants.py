"""Shared constants for the claude_profiles package."""

# Directory and file names
DEFAULT_PROFILES_DIRNAME = ".claude-profiles"
CLAUDE_DIRNAME = ".claude"
CREDENTIALS_FILENAME = ".credentials.json"
SETTINGS_FILENAME = "settings.json"
ACTIVE_MARKER_FILENAME = ".active-profile"
LOCK_FILENAME = ".lock"
SANDBOX_SUFFIX = "-home"

# Environment variables
ROOT_ENV_VAR = "CLAUDE_PROFILES_DIR"
LAUNCH_CMD_ENV_VAR = "CLAUDE_PROFILES_LAUNCH_CMD"
SESSION_ENV_VAR = "CLAUDE_PROFILE"
DEFAULT_LAUNCH_COMMAND = ("claude",)
HOST_PROCESS_NAMES = ("claude", "claude.exe")

# OAuth
OAUTH_ENDPOINT = "https://console.anthropic.com/v1/oauth/token"
OAUTH_CLIENT_ID = "9d1c250a-e61b-44d9-88ed-5944d1962f5e"
OAUTH_TIMEOUT_SECONDS = 10

IDENTITY_SUFFIX_LEN = 8  # trailing refresh-token chars shown as identity hint
FINGERPRINT_LEN = 12
LOCK_TIMEOUT_SECONDS = 30
