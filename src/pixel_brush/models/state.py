"""
Worker State Models
===================

Lifecycle states of a painting worker and the report it leaves behind.

Transitions:
    CONNECTING → ACTIVE:        handshake succeeded
    ACTIVE → RECONNECTING:      peer closed the connection
    RECONNECTING → ACTIVE:      the single reconnection attempt succeeded
    RECONNECTING → TERMINATED:  the reconnection attempt failed
    ACTIVE → TERMINATED:        source exhausted or fatal transport error

TERMINATED is final. A worker never leaves it.
"""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field


class WorkerState(str, Enum):
    """
    Connection lifecycle state of a worker.

    Attributes:
        CONNECTING: Initial handshake in progress
        ACTIVE: Connected; inbound and paint duties running
        RECONNECTING: Replacing a closed connection
        TERMINATED: Worker has stopped for good
    """

    CONNECTING = "CONNECTING"
    ACTIVE = "ACTIVE"
    RECONNECTING = "RECONNECTING"
    TERMINATED = "TERMINATED"


class TerminationReason(str, Enum):
    """
    Machine-readable reason a worker reached TERMINATED.

    Attributes:
        SOURCE_EXHAUSTED: Every pixel has been handed out (normal completion)
        RECONNECT_FAILED: The connection closed and the single reconnect failed
        TRANSPORT_FATAL: Unrecoverable transport error
    """

    SOURCE_EXHAUSTED = "SOURCE_EXHAUSTED"
    RECONNECT_FAILED = "RECONNECT_FAILED"
    TRANSPORT_FATAL = "TRANSPORT_FATAL"


class WorkerReport(BaseModel):
    """Final snapshot of a worker once it has terminated."""

    worker_id: int = Field(..., ge=0, description="Worker identity")
    url: str = Field(..., description="Endpoint the worker was connected to")
    state: WorkerState = Field(..., description="State at the time of the report")
    reason: Optional[TerminationReason] = Field(
        default=None,
        description="Why the worker terminated (None while still running)",
    )
    metrics: Dict[str, int] = Field(
        default_factory=dict,
        description="Worker counters, see WorkerMetrics",
    )
