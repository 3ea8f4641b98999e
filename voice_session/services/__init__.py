"""
Services module for HTTP integrations.

Key components:
- token_client: Client side of the token issuance endpoint. The session
  controller awaits it to obtain single-use call credentials.
- web_call_issuer: Server side of the token issuance endpoint. Creates a web
  call with the Retell API using injected credentials.

Usage examples:
```python
from voice_session.config.settings import RetellSettings
from voice_session.services.token_client import HttpTokenProvider
from voice_session.services.web_call_issuer import WebCallIssuer

provider = HttpTokenProvider("http://localhost:8000/api/create-web-call")
credentials = await provider.create_web_call()

issuer = WebCallIssuer(RetellSettings.load_from_env())
credentials = await issuer.create_web_call()
```
"""
