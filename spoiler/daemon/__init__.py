"""Daemon-facing layer: job records, the RPC gateway, and command dispatch."""

from .commands import CommandDispatcher, CommandFailure
from .gateway import ConnectionSettings, DaemonGateway, TransmissionGateway
from .types import EMPTY_STATS, FilePriority, Job, JobAction, JobFile, JobStatus, SessionStats

__all__ = [
    "CommandDispatcher",
    "CommandFailure",
    "ConnectionSettings",
    "DaemonGateway",
    "EMPTY_STATS",
    "FilePriority",
    "Job",
    "JobAction",
    "JobFile",
    "JobStatus",
    "SessionStats",
    "TransmissionGateway",
]
