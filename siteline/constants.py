"""Built-in defaults and field limits for the Siteline SDK."""

DEFAULT_ENDPOINT = "https://siteline.ai/v1/intake/pageview"
DEFAULT_SDK_NAME = "siteline-python"
DEFAULT_SDK_VERSION = "1.0.1"
DEFAULT_INTEGRATION_TYPE = "custom"

WEBSITE_KEY_PATTERN = r"^siteline_secret_[a-f0-9]{32}$"

URL_MAX_LENGTH = 2048
METHOD_MAX_LENGTH = 10
USER_AGENT_MAX_LENGTH = 512
REF_MAX_LENGTH = 2048
IP_MAX_LENGTH = 45
INTEGRATION_TYPE_MAX_LENGTH = 50
SDK_MAX_LENGTH = 50
SDK_VERSION_MAX_LENGTH = 20
STATUS_MIN = 0
STATUS_MAX = 999
DURATION_MIN = 0
DURATION_MAX = 300000  # ms

TIMEOUT_MS = 5000

# Read only by the framework middleware, never by the core client.
ENV_WEBSITE_KEY = "SITELINE_WEBSITE_KEY"
ENV_ENDPOINT = "SITELINE_ENDPOINT"
ENV_DEBUG = "SITELINE_DEBUG"
