"""Constants for Quire application"""

# ==================== File Paths ====================
DATABASE_PATH = "data/quire.db"
LOG_FILE_DEFAULT = "data/quire.log"

# ==================== Editor Layout ====================
META_TAB = "meta"
PROPERTIES_KEY = "properties"
MULTILINGUAL_FLAG = "_multilingual"
FROM_PARENT = "fromParent"
EDITOR_SUFFIX = "Editor"

# Content schemas shipped with the application that cannot be referenced
# as child schemas by editors
NATIVE_CONTENT_SCHEMAS = ("contentBase", "page")

# ==================== Routing ====================
API_PREFIX = "/api"
JSON_EDITOR_ROUTE = "/content/json/{content_id}"
CONTENT_EDITOR_ROUTE = "/content/{content_id}/{tab_id}"
PROJECT_ROUTE_PATTERN = r"^/(?P<root>[^/]+)/(?P<project>[^/]+)(?:/(?P<environment>[^/]+))?(?:/.*)?$"

# ==================== Authentication ====================
TOKEN_COOKIE = "token"

# ==================== Timeouts (seconds) ====================
TIMEOUT_HTTP_REQUEST = 30  # 30 seconds - API client requests

# ==================== Template Names ====================
TEMPLATE_FIELD = "field.html.j2"
TEMPLATE_KEY_ACTIONS = "key_actions.html.j2"

# ==================== Database Configuration ====================
DB_MAX_CONNECTIONS = 20
DB_STALE_TIMEOUT = 300  # 5 minutes
DB_JOURNAL_MODE = "wal"
DB_SYNCHRONOUS = "NORMAL"
DB_BUSY_TIMEOUT = 5000  # 5 seconds
DB_CACHE_SIZE = -64 * 1000  # 64MB

# ==================== Database Pragmas ====================
DB_PRAGMAS = {
    "journal_mode": DB_JOURNAL_MODE,
    "synchronous": DB_SYNCHRONOUS,
    "busy_timeout": DB_BUSY_TIMEOUT,
    "foreign_keys": 1,
    "cache_size": DB_CACHE_SIZE,
}
