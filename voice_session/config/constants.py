"""
Constants and configuration values used throughout the application.

This module keeps event names, default messages and endpoint paths in one
place so the controller, the endpoint and the tests agree on them.
"""

# Logger name used throughout the application
LOGGER_NAME = "voice_session"

# Retell REST API
DEFAULT_RETELL_BASE_URL = "https://api.retellai.com"
RETELL_CREATE_WEB_CALL_PATH = "/v2/create-web-call"

# Token issuance endpoint served by this application
CREATE_WEB_CALL_PATH = "/api/create-web-call"
DEFAULT_TOKEN_ENDPOINT_URL = "http://localhost:8000" + CREATE_WEB_CALL_PATH

# Timeouts (seconds)
REQUEST_TIMEOUT = 30
CONNECT_TIMEOUT = 30

# Calling client event names
EVENT_CALL_STARTED = "call_started"
EVENT_CALL_READY = "call_ready"
EVENT_CALL_ENDED = "call_ended"
EVENT_AGENT_START_TALKING = "agent_start_talking"
EVENT_AGENT_STOP_TALKING = "agent_stop_talking"
EVENT_UPDATE = "update"
EVENT_ERROR = "error"

# Default error messages
MISSING_CREDENTIALS_MESSAGE = "Missing RETELL_API_KEY or RETELL_AGENT_ID"
CREATE_CALL_FAILED_MESSAGE = "Failed to create call"
CREATE_WEB_CALL_FAILED_MESSAGE = "Failed to create web call"
START_CALL_FAILED_MESSAGE = "Failed to start call"
CALL_ERROR_MESSAGE = "Call error"
CONNECT_TIMEOUT_MESSAGE = "Timed out waiting for call to start"
