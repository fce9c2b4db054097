from pathlib import Path

# Flags configuration
DEFAULT_FLAGS_CONFIG_FILE = Path("/etc/communicatord/flags.yaml")
FLAGS_CONFIG_ENV_VAR = "COMMUNICATORD_FLAGS_CONFIG"
DEFAULT_FLAGS_PATH = "/var/lib/communicatord/flags"

# Flag records
FLAG_FILE_EXTENSION = ".flag"
BACKUP_EXTENSION = ".bak"
FLAGS_LIMIT = 100  # bulk load ceiling, the overflow sentinel takes the last slot

# Priorities
DEFAULT_PRIORITY = 5
MIN_PRIORITY = 0
MAX_PRIORITY = 100
TOO_MANY_FLAGS_PRIORITY = 97

# Used when the installed distribution metadata is not available
FALLBACK_VERSION = "1.0.0"
DISTRIBUTION_NAME = "communicatord"

# Message cache
DEFAULT_CACHE_TTL = 60
