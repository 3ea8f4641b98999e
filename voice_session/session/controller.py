"""
Lifecycle controller for a single live voice session.

The controller sequences the steps of a call: it requests single-use
credentials from a token provider, binds its event handlers to the calling
client, starts the call, and reduces the events coming back into an
observable ``SessionSnapshot`` of status, error message and transcript.

All work happens on one event loop. The two suspension points are the token
request and ``start_call``; a stop issued while either is in flight takes
effect immediately and the in-flight step is abandoned once it resolves.
Each start attempt gets a number, and handlers bound for an older attempt
ignore whatever they still receive.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from voice_session.calling.client import CallingClient
from voice_session.config.constants import (
    CALL_ERROR_MESSAGE,
    CONNECT_TIMEOUT_MESSAGE,
    EVENT_AGENT_START_TALKING,
    EVENT_AGENT_STOP_TALKING,
    EVENT_CALL_ENDED,
    EVENT_CALL_READY,
    EVENT_CALL_STARTED,
    EVENT_ERROR,
    EVENT_UPDATE,
    LOGGER_NAME,
    START_CALL_FAILED_MESSAGE,
)
from voice_session.config.settings import SessionSettings
from voice_session.models.call_schemas import CallErrorPayload, UpdatePayload
from voice_session.models.session_state import (
    ACTIVE_STATUSES,
    SessionSnapshot,
    SessionStatus,
)
from voice_session.services.token_client import HttpTokenProvider, TokenProvider
from voice_session.session.transcript import format_transcript

logger = logging.getLogger(LOGGER_NAME)

Listener = Callable[[SessionSnapshot], None]
ClientFactory = Callable[[], CallingClient]
EventHandler = Callable[..., None]


class SessionController:
    """
    Owns the session state and the single calling client of one view.

    Typical use:

    ```python
    controller = SessionController(provider, MyCallingClient)
    unsubscribe = controller.subscribe(render)
    await controller.start()
    ...
    await controller.stop()
    await controller.dispose()
    ```

    The calling client is created on the first start and reused for every
    later session; it is never handed out.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        client_factory: ClientFactory,
        connect_timeout: Optional[float] = None,
    ):
        """
        Initialize an idle controller.

        Args:
            token_provider: Source of single-use call credentials
            client_factory: Builds the calling client on the first start
            connect_timeout: Seconds to wait for call_started or call_ready
                after start_call returns; None waits indefinitely
        """
        self._token_provider = token_provider
        self._client_factory = client_factory
        self._connect_timeout = connect_timeout

        self._snapshot = SessionSnapshot()
        self._client: Optional[CallingClient] = None
        self._bindings: List[Tuple[str, EventHandler]] = []
        self._listeners: List[Listener] = []
        self._attempt = 0
        self._watchdog: Optional[asyncio.Task] = None
        self._disposed = False

        self._event_handlers: Dict[str, Callable[[Any], None]] = {
            EVENT_CALL_STARTED: self._on_call_started,
            EVENT_CALL_READY: self._on_call_ready,
            EVENT_CALL_ENDED: self._on_call_ended,
            EVENT_AGENT_START_TALKING: self._on_agent_talking,
            EVENT_AGENT_STOP_TALKING: self._on_agent_talking,
            EVENT_UPDATE: self._on_update,
            EVENT_ERROR: self._on_error,
        }

    @classmethod
    def from_settings(
        cls, settings: SessionSettings, client_factory: ClientFactory
    ) -> "SessionController":
        """Build a controller talking to the HTTP token issuance endpoint."""
        return cls(
            HttpTokenProvider(settings.token_url, timeout=settings.request_timeout),
            client_factory,
            connect_timeout=settings.connect_timeout,
        )

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def status(self) -> SessionStatus:
        return self._snapshot.status

    @property
    def error_message(self) -> str:
        return self._snapshot.error_message

    @property
    def transcript(self) -> str:
        return self._snapshot.transcript

    @property
    def is_call_active(self) -> bool:
        return self._snapshot.is_call_active

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with every new snapshot.

        Returns:
            A function removing the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _update(self, **changes: Any) -> None:
        values = {**self._snapshot.model_dump(), **changes}
        if values["status"] != SessionStatus.ERROR:
            values["error_message"] = ""
        snapshot = SessionSnapshot(**values)
        if snapshot == self._snapshot:
            return

        if snapshot.status != self._snapshot.status:
            logger.info(
                f"Session status: {self._snapshot.status.value} -> {snapshot.status.value}"
            )
        self._snapshot = snapshot

        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Error in session listener: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """
        Start a new session.

        Ignored while a session is connecting, ready or active, and after
        the controller has been disposed. Failures are reported through the
        ``error`` status, never raised.
        """
        if self._disposed:
            logger.warning("Start ignored: controller has been disposed")
            return
        if self.is_call_active:
            logger.info(f"Start ignored: session is already {self.status.value}")
            return

        self._attempt += 1
        attempt = self._attempt
        client = self._ensure_client()
        self._update(status=SessionStatus.CONNECTING, error_message="", transcript="")

        try:
            credentials = await self._token_provider.create_web_call()
        except Exception as e:
            self._fail(attempt, e)
            return

        if attempt != self._attempt:
            logger.info("Session stopped while requesting a token, not starting the call")
            return

        # Bind right before starting so no event can be missed
        self._bind(client, attempt)
        try:
            logger.info(f"Starting call: {credentials.call_id}")
            await client.start_call(credentials.access_token)
        except Exception as e:
            self._fail(attempt, e)
            return

        if attempt != self._attempt:
            # Nothing newer is in flight, so the call we just started must go
            if self._disposed or not self.is_call_active:
                logger.info("Session stopped while the call was starting, stopping it")
                await self._stop_client()
            return

        self._arm_watchdog(attempt)

    async def stop(self) -> None:
        """
        Stop the current session and return to ``idle``.

        Safe to call at any time; a no-op while already idle.
        """
        if self.status == SessionStatus.IDLE:
            logger.debug("Stop ignored: no session to stop")
            return

        self._attempt += 1
        self._cancel_watchdog()
        self._unbind()
        self._update(status=SessionStatus.IDLE)

        if self._client is not None:
            try:
                await self._client.stop_call()
            except Exception as e:
                logger.error(f"Failed to stop call: {e}", exc_info=True)
                self._update(
                    status=SessionStatus.ERROR,
                    error_message=str(e) or "Failed to stop call",
                )

    async def toggle(self) -> None:
        """Stop an active session, otherwise start one."""
        if self.is_call_active:
            await self.stop()
        else:
            await self.start()

    async def dispose(self) -> None:
        """
        Tear the controller down.

        Stops the calling client unconditionally if one exists, whatever the
        status, so no audio session outlives the controller. Never raises.
        """
        if self._disposed:
            return
        self._disposed = True
        self._attempt += 1
        self._cancel_watchdog()
        self._unbind()
        self._listeners.clear()
        await self._stop_client()
        logger.info("Session controller disposed")

    async def __aenter__(self) -> "SessionController":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.dispose()

    # ------------------------------------------------------------------
    # Calling client management
    # ------------------------------------------------------------------

    def _ensure_client(self) -> CallingClient:
        if self._client is None:
            self._client = self._client_factory()
            logger.debug(f"Created calling client: {type(self._client).__name__}")
        return self._client

    async def _stop_client(self) -> None:
        if self._client is None:
            return
        try:
            await self._client.stop_call()
        except Exception as e:
            logger.error(f"Failed to stop call: {e}", exc_info=True)

    def _bind(self, client: CallingClient, attempt: int) -> None:
        self._unbind()
        for event in self._event_handlers:
            handler = self._make_handler(event, attempt)
            client.on(event, handler)
            self._bindings.append((event, handler))
        logger.debug(f"Bound {len(self._bindings)} call event handlers")

    def _unbind(self) -> None:
        if self._client is not None:
            for event, handler in self._bindings:
                self._client.off(event, handler)
        self._bindings.clear()

    def _make_handler(self, event: str, attempt: int) -> EventHandler:
        def handler(payload: Any = None, *args: Any) -> None:
            self._handle_event(attempt, event, payload)

        return handler

    def _fail(self, attempt: int, error: BaseException) -> None:
        if attempt != self._attempt:
            logger.warning(f"Ignoring failure of an abandoned call start: {error}")
            return
        message = str(error) or START_CALL_FAILED_MESSAGE
        logger.error(f"Call start failed: {message}")
        self._cancel_watchdog()
        self._update(status=SessionStatus.ERROR, error_message=message)

    # ------------------------------------------------------------------
    # Connect watchdog
    # ------------------------------------------------------------------

    def _arm_watchdog(self, attempt: int) -> None:
        if self._connect_timeout is None or self.status != SessionStatus.CONNECTING:
            return
        self._cancel_watchdog()
        self._watchdog = asyncio.create_task(self._watch_connect(attempt))

    def _cancel_watchdog(self) -> None:
        if self._watchdog is not None and not self._watchdog.done():
            self._watchdog.cancel()
        self._watchdog = None

    async def _watch_connect(self, attempt: int) -> None:
        await asyncio.sleep(self._connect_timeout)
        if attempt != self._attempt or self.status != SessionStatus.CONNECTING:
            return

        logger.error(
            f"No {EVENT_CALL_STARTED} or {EVENT_CALL_READY} within {self._connect_timeout}s"
        )
        self._attempt += 1
        self._unbind()
        self._update(status=SessionStatus.ERROR, error_message=CONNECT_TIMEOUT_MESSAGE)
        await self._stop_client()

    # ------------------------------------------------------------------
    # Call events
    # ------------------------------------------------------------------

    def _handle_event(self, attempt: int, event: str, payload: Any) -> None:
        if attempt != self._attempt:
            logger.debug(f"Ignoring {event} from a previous session")
            return
        logger.debug(f"Received call event: {event}")
        self._event_handlers[event](payload)

    def _on_call_started(self, payload: Any) -> None:
        if self.status == SessionStatus.CONNECTING:
            self._cancel_watchdog()
            self._update(status=SessionStatus.ACTIVE)

    def _on_call_ready(self, payload: Any) -> None:
        if self.status in (SessionStatus.CONNECTING, SessionStatus.ACTIVE):
            self._cancel_watchdog()
            self._update(status=SessionStatus.READY)

    def _on_call_ended(self, payload: Any) -> None:
        self._cancel_watchdog()
        self._unbind()
        remove_all_listeners = getattr(self._client, "remove_all_listeners", None)
        if callable(remove_all_listeners):
            remove_all_listeners()

        if self.status in ACTIVE_STATUSES:
            self._update(status=SessionStatus.IDLE)
        else:
            logger.info(f"Call ended while {self.status.value}, keeping status")

    def _on_error(self, payload: Any) -> None:
        message = CallErrorPayload.from_event(payload).message or CALL_ERROR_MESSAGE
        if self.status not in ACTIVE_STATUSES:
            logger.warning(f"Call error while {self.status.value}: {message}")
            return
        logger.error(f"Call error: {message}")
        self._cancel_watchdog()
        self._update(status=SessionStatus.ERROR, error_message=message)

    def _on_update(self, payload: Any) -> None:
        transcript = UpdatePayload.from_event(payload).transcript
        if transcript is not None:
            self._update(transcript=format_transcript(transcript))

    def _on_agent_talking(self, payload: Any) -> None:
        """Talking events change nothing observable yet."""
