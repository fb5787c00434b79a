"""
Constants for the Memex export tool.
"""

DEFAULT_DOMAIN = "memex.social"

# API endpoints
SPACE_LIST_PATH = "/api/personal/space/list"
CONTENT_LIST_PATH = "/api/personal/content/list"

# Authentication headers
KEY_ID_HEADER = "X-Memex-Personal-Key-ID"
KEY_SECRET_HEADER = "X-Memex-Personal-Key-Secret"

# The API refuses larger pages
MAX_PAGE_SIZE = 50

DEFAULT_REQUEST_TIMEOUT_SECONDS = 60

# Ordering keys used to advance the cursor
SPACE_ORDERING_KEY = "createdWhen"
CONTENT_ORDERING_KEY = "updatedWhen"

# Cache layout
DEFAULT_CACHE_FILENAME = "index.json"

# Output layout
SPACES_FOLDER = "spaces"
ANNOTATIONS_FILENAME = "annotations.json"

# Filename sanitization
MAX_FILENAME_LENGTH = 100
# File systems cap a name at 255 bytes; leave room for the extension
MAX_FILENAME_BYTES = 250
