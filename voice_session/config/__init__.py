"""
Configuration module for the voice session application.

Key components:
- constants: Logger name, call event names, default messages and timeouts.
- settings: Typed settings loaded from environment variables and injected
  into the services that need them.
- logging_config: Console and rotating file logging setup.

Usage examples:
```python
from voice_session.config.constants import LOGGER_NAME, EVENT_CALL_STARTED
from voice_session.config.logging_config import configure_logging
from voice_session.config.settings import RetellSettings

logger = configure_logging()
settings = RetellSettings.load_from_env()
```
"""
