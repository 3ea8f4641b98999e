"""
Voice Session - browser-style live voice calls with a Retell conversational agent

This package lets a person start and stop a live voice session with a remote
conversational agent, follow the status of the call and read a running
transcript.

Architecture Overview:
- FastAPI server exposing the token issuance endpoint that creates web calls
  with the Retell API
- A session lifecycle controller that requests a token, binds event handlers
  to a calling client, starts the call and reduces call events into
  observable state
- A transcript formatter turning update payloads into display text

Key Components:
- calling: Capability interface for the real-time calling client
- config: Application-wide constants, settings and logging setup
- models: Session state and wire payload models
- services: Token client and Retell web call issuer
- session: Lifecycle controller, transcript formatting and status labels

Getting Started:
1. Set up environment variables:
   - RETELL_API_KEY: Your Retell API key
   - RETELL_AGENT_ID: The agent to talk to
   - PORT: Port to run the server on (default 8000)
   - LOG_LEVEL: Logging level (default INFO)

2. Start the server:
   ```bash
   python run.py
   ```

3. Drive a session from Python:
   ```python
   controller = SessionController(HttpTokenProvider(url), MyCallingClient)
   await controller.start()
   ```
"""

__version__ = "1.0.0"
