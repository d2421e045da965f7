# Environment variables
ENV_BASE_URL = "GEARWORKS_BASE_URL"
ENV_PROXY = "GEARWORKS_PROXY"
ENV_TIMEOUT = "GEARWORKS_TIMEOUT"

# Headers
HEADER_CONTENT_TYPE = "Content-Type"

# Content types
CONTENT_TYPE_JSON = "application/json"

# Errors
DEFAULT_ERROR_MESSAGE = "Something went wrong and your request could not be completed."
NETWORK_ERROR_STATUS = 503
NETWORK_ERROR_STATUS_TEXT = "Service Unavailable"

# Logging
LOGGER_NAME = "gearworks_http"

# Streaming
UPLOAD_CHUNK_SIZE = 64 * 1024
