"""API Constants

Centralized limits and defaults shared by services, repositories and routers.
"""

# Sentinel used for missing links and cover URLs
ABOUT_BLANK = "about:blank"

# Article field limits
TITLE_MAX_LENGTH = 256
CONTENT_MAX_BYTES = 3 << 20  # 3 MiB of UTF-8
SUMMARY_MIN_LENGTH = 100
SUMMARY_MAX_LENGTH = 512
CAPTION_MAX_LENGTH = 256

# Tag and topic names double as identifiers once kebab-cased
LABEL_NAME_MAX_LENGTH = 32

# Reading speed used by read-time estimation
WORDS_PER_MINUTE = 183

# Shareable links expire after this many days
SHARE_LINK_TTL_DAYS = 7
SHARE_LINK_PREFIX = "/archive/s/"

# Pagination defaults for article listings
DEFAULT_PAGE = 1
DEFAULT_RECORDS_PER_PAGE = 20
MAX_RECORDS_PER_PAGE = 100

# Upper bound for existence checks issued before writes
EXISTENCE_CHECK_TIMEOUT_SECONDS = 5.0

# Markers that start non-prose lines in Markdown
NON_WORD_PREFIXES: tuple[str, ...] = ("#", "-", "=", ">")
