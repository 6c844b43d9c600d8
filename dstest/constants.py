"""DSTest constants and configuration values."""

# Configuration service
DEFAULT_RUNS_API_URL = "http://localhost:8000/dstestapi/testruns/"
USER_AGENT = "DSTest-Collector"

# Persistence
DEFAULT_DB_PATH = ".dstest/dstest.db"

# Templated URL patterns
PATH_PARAM_MARKER = ":"
PATH_WILDCARD = "*"

# Report verdicts
VERDICT_SUCCESS = "success"
VERDICT_FAILURE = "failure"
VERDICT_NOT_FOUND = "no transaction found"
