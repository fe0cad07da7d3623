"""
Painting Worker
===============

One autonomous agent holding one connection to the canvas service.

State Machine:
    CONNECTING → ACTIVE → (RECONNECTING ⇄ ACTIVE) → TERMINATED

    - A new worker is CONNECTING. connect() (or Worker.create()) performs
      the handshake. Failure raises HandshakeError and the worker never
      leaves CONNECTING.
    - run() starts two duties on the same ConnectionSlot:

      Inbound duty:
          Receives frames forever. A closed connection triggers ONE
          reconnection attempt; if it fails the worker terminates.
          Any other transport error terminates the worker.

      Paint duty:
          Pulls the next pixel from the shared source, sends it with
          a bounded number of attempts, then waits a jittered delay.
          An exhausted source terminates the worker (normal end).

    - Whichever duty finishes first decides the termination reason;
      the other duty is cancelled and the connection closed.

Isolation:
    A worker never raises its own transport failures to the caller.
    Sibling workers are unaffected by anything that happens here.
"""

import asyncio
import logging
from typing import Optional

from pixel_brush.canvas.encoder import encode
from pixel_brush.canvas.pixel_source import SharedPixelSource
from pixel_brush.errors import HandshakeError, SendError, TransportClosed, TransportFatal
from pixel_brush.models.pixel import PixelRecord
from pixel_brush.models.state import TerminationReason, WorkerReport, WorkerState
from pixel_brush.stream.connection import ConnectionSlot, Connector, open_connection
from pixel_brush.worker.metrics import WorkerMetrics
from pixel_brush.worker.pacing import JitterSleeper, SleepFunc


logger = logging.getLogger(__name__)


class Worker:
    """
    Painting worker bound to one canvas endpoint.

    Attributes:
        worker_id: Identity used in logs and reports
        url: Endpoint used for the initial connection and every reconnect
        metrics: Operational counters

    Example:
        worker = await Worker.create(0, "wss://canvas.example/ws", shared, pacing)
        report = await worker.run()
    """

    def __init__(
        self,
        worker_id: int,
        url: str,
        source: SharedPixelSource,
        pacing: JitterSleeper,
        connector: Connector = open_connection,
        max_send_attempts: int = 5,
        retry_delay: float = 5.0,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """
        Initialize a worker in the CONNECTING state.

        No connection is opened until connect() is awaited.

        Args:
            worker_id: Identity used in logs and reports
            url: Endpoint used for the handshake and every reconnect
            source: Pixel source shared with the other workers
            pacing: Jittered delay between two pixels
            connector: Handshake function
            max_send_attempts: Attempts per pixel before it is dropped
            retry_delay: Seconds between two send attempts
            sleep: Coroutine used for the retry delay
        """
        if max_send_attempts < 1:
            raise ValueError("max_send_attempts must be >= 1")

        self.worker_id = worker_id
        self.url = url
        self.metrics = WorkerMetrics()

        self._connector = connector
        self._slot: Optional[ConnectionSlot] = None
        self._source = source
        self._pacing = pacing
        self._max_send_attempts = max_send_attempts
        self._retry_delay = retry_delay
        self._sleep = sleep

        self._state = WorkerState.CONNECTING
        self._reason: Optional[TerminationReason] = None

    @classmethod
    async def create(
        cls,
        worker_id: int,
        url: str,
        source: SharedPixelSource,
        pacing: JitterSleeper,
        connector: Connector = open_connection,
        max_send_attempts: int = 5,
        retry_delay: float = 5.0,
        sleep: SleepFunc = asyncio.sleep,
    ) -> "Worker":
        """
        Build a worker and perform its handshake.

        Raises:
            HandshakeError: If the initial handshake fails (not retried)
        """
        worker = cls(
            worker_id,
            url,
            source,
            pacing,
            connector=connector,
            max_send_attempts=max_send_attempts,
            retry_delay=retry_delay,
            sleep=sleep,
        )
        await worker.connect()
        return worker

    async def connect(self) -> None:
        """
        Perform the initial handshake: CONNECTING → ACTIVE.

        Raises:
            HandshakeError: If the handshake fails; the worker stays
                CONNECTING and never runs
        """
        if self._slot is not None:
            raise RuntimeError(f"Worker #{self.worker_id} is already connected")

        logger.debug(f"Worker #{self.worker_id} connecting to {self.url}")
        connection = await self._connector(self.url)
        self._slot = ConnectionSlot(self.url, connection, self._connector)
        self._set_state(WorkerState.ACTIVE)

    @property
    def state(self) -> WorkerState:
        return self._state

    @property
    def reason(self) -> Optional[TerminationReason]:
        return self._reason

    def _set_state(self, state: WorkerState) -> None:
        if self._state == WorkerState.TERMINATED:
            return
        logger.debug(f"Worker #{self.worker_id}: {self._state.value} -> {state.value}")
        self._state = state

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def run(self) -> WorkerReport:
        """
        Run both duties until the worker terminates.

        Returns:
            Final WorkerReport
        """
        if self._slot is None:
            raise RuntimeError(f"Worker #{self.worker_id} is not connected")

        logger.info(f"Worker #{self.worker_id} started.")

        inbound = asyncio.create_task(
            self._inbound_duty(),
            name=f"worker-{self.worker_id}-inbound",
        )
        paint = asyncio.create_task(
            self._paint_duty(),
            name=f"worker-{self.worker_id}-paint",
        )

        try:
            done, pending = await asyncio.wait(
                {inbound, paint},
                return_when=asyncio.FIRST_COMPLETED,
            )
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

            # Paint takes precedence if both ended in the same iteration
            finished = paint if paint in done else inbound
            reason = finished.result()
        finally:
            for task in (inbound, paint):
                if not task.done():
                    task.cancel()
            await self._slot.close()

        self._reason = reason
        self._set_state(WorkerState.TERMINATED)
        logger.info(
            f"Worker #{self.worker_id} terminated ({reason.value}): "
            f"{self.metrics.to_dict()}"
        )
        return self.report()

    def report(self) -> WorkerReport:
        """Snapshot of the worker's identity, state and counters."""
        return WorkerReport(
            worker_id=self.worker_id,
            url=self.url,
            state=self._state,
            reason=self._reason,
            metrics=self.metrics.to_dict(),
        )

    # =========================================================================
    # Inbound duty
    # =========================================================================

    async def _inbound_duty(self) -> TerminationReason:
        """Receive frames forever; reconnect once per close."""
        while True:
            try:
                await self._slot.recv()
                self.metrics.frames_received += 1
            except TransportClosed:
                logger.info(
                    f"Worker #{self.worker_id} connection was closed; trying to reconnect."
                )
                if not await self._reconnect():
                    return TerminationReason.RECONNECT_FAILED
            except TransportFatal as e:
                logger.error(
                    f"Worker #{self.worker_id} received unexpected error: {e}; exiting."
                )
                return TerminationReason.TRANSPORT_FATAL

    async def _reconnect(self) -> bool:
        """
        Replace the connection with exactly one handshake attempt.

        Returns:
            True if the worker is ACTIVE again, False if reconnect failed
        """
        self._set_state(WorkerState.RECONNECTING)
        try:
            await self._slot.reconnect()
        except HandshakeError as e:
            logger.error(f"Worker #{self.worker_id} could not reconnect: {e}; exiting.")
            return False

        self.metrics.reconnect_count += 1
        self._set_state(WorkerState.ACTIVE)
        logger.info(f"Worker #{self.worker_id} successfully reconnected")
        return True

    # =========================================================================
    # Paint duty
    # =========================================================================

    async def _paint_duty(self) -> TerminationReason:
        """Pull, send, pause; until the shared source runs dry."""
        while True:
            record = await self._source.pull()
            if record is None:
                logger.info(f"Worker #{self.worker_id} has nothing left to paint")
                return TerminationReason.SOURCE_EXHAUSTED

            await self._paint(record)
            await self._pacing.pause()

    async def _paint(self, record: PixelRecord) -> bool:
        """
        Send one pixel with bounded retries.

        Every attempt goes through the slot, so an attempt made after a
        reconnect uses the new connection.

        Returns:
            True if sent, False if every attempt failed and the pixel
            was dropped
        """
        logger.info(
            f"Worker #{self.worker_id} painting {{{record.x}:{record.y}}} to {record.color_id}"
        )
        command = encode(record)

        for attempt in range(1, self._max_send_attempts + 1):
            try:
                await self._slot.send(command)
            except SendError as e:
                logger.error(
                    f"Worker #{self.worker_id} cannot send data: {e}; "
                    f"attempt {attempt}/{self._max_send_attempts}"
                )
                if attempt < self._max_send_attempts:
                    self.metrics.send_retries += 1
                    await self._sleep(self._retry_delay)
            else:
                self.metrics.pixels_painted += 1
                return True

        self.metrics.pixels_dropped += 1
        logger.warning(f"Worker #{self.worker_id} dropped pixel {record!r}")
        return False
