"""Fixed endpoints and defaults for the cdnjs lookup tool."""

PACKAGES_URL = "https://cdnjs.com/packages.json"
BASE_URL = "//cdnjs.cloudflare.com/ajax/libs/"

# Catalog is refetched once the cached copy is older than this
CACHE_TTL_HOURS = 24

# Seconds to wait on the catalog endpoint
REQUEST_TIMEOUT = 15

USER_AGENT = "cdnjs-cli (+https://cdnjs.com)"

CONFIG_FILENAME = "cdnjs_config.json"

# Fields the search command can match against
SEARCH_FIELDS = ["name", "filename", "description"]
