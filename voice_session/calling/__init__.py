"""
Calling module: the capability interface of the real-time calling client.

The audio and transport engine behind a live call is not part of this
package. The session controller only needs something that can start and stop
a call and that emits named events; ``CallingClient`` describes exactly that.
"""

from voice_session.calling.client import CallingClient

__all__ = ["CallingClient"]
