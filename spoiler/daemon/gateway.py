"""Daemon gateway contract and the Transmission-backed implementation.

The core only depends on ``DaemonGateway``; ``TransmissionGateway`` is the
production binding. Each calling thread gets its own RPC client so the sync
loop and concurrently running commands never share a connection.
"""

from __future__ import annotations

import contextlib
import logging
import math
import threading
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from transmission_rpc import Client
from transmission_rpc.error import TransmissionError

from ..errors import GatewayError
from .types import FilePriority, Job, JobAction, JobFile, JobStatus, SessionStats

logger = logging.getLogger(__name__)

JOB_FIELDS: tuple[str, ...] = (
    "id",
    "name",
    "status",
    "percentDone",
    "eta",
    "rateDownload",
    "rateUpload",
    "uploadRatio",
    "totalSize",
    "downloadedEver",
    "uploadedEver",
    "doneDate",
    "addedDate",
    "downloadDir",
    "files",
    "fileStats",
    "peersConnected",
    "errorString",
)

_STATUS_NAMES: dict[str, JobStatus] = {
    "stopped": JobStatus.STOPPED,
    "check pending": JobStatus.CHECK_PENDING,
    "checking": JobStatus.CHECKING,
    "download pending": JobStatus.DOWNLOAD_PENDING,
    "downloading": JobStatus.DOWNLOADING,
    "seed pending": JobStatus.SEED_PENDING,
    "seeding": JobStatus.SEEDING,
}

# Transmission encodes "not available" and "infinite" ratios as negatives.
_RATIO_NOT_AVAILABLE = -1
_RATIO_INFINITE = -2


class DaemonGateway(Protocol):
    """Blocking RPC surface consumed by the sync loop and command dispatcher."""

    def list_jobs(self) -> list[Job]: ...

    def session_stats(self) -> SessionStats: ...

    def apply(self, action: JobAction, job_ids: Sequence[int]) -> None: ...

    def rename(self, job_id: int, new_root_name: str) -> None: ...

    def add(self, file_path: str, paused: bool) -> None: ...

    def remove(self, job_id: int, delete_files: bool) -> None: ...

    def set_file_priority(self, job_id: int, file_indices: Sequence[int], priority: FilePriority) -> None: ...


@dataclass(frozen=True)
class ConnectionSettings:
    host: str = "127.0.0.1"
    port: int = 9091
    username: str | None = None
    password: str | None = None
    rpc_path: str = "/transmission/rpc"


def _raw_fields(obj: object) -> Mapping[str, Any]:
    """Return the raw RPC field mapping of a library container (or a plain dict)."""
    if isinstance(obj, Mapping):
        return obj
    fields = getattr(obj, "fields", None)
    if isinstance(fields, Mapping):
        return fields
    raise GatewayError(f"unexpected RPC payload: {type(obj).__name__}")


def _as_int(value: object, default: int = 0) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)) and not (isinstance(value, float) and math.isnan(value)):
        return int(value)
    return default


def _as_float(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return math.nan
    return float(value)


def _status_from_raw(value: object) -> JobStatus:
    if isinstance(value, str):
        status = _STATUS_NAMES.get(value.strip().lower())
        if status is None:
            raise GatewayError(f"unknown job status {value!r}")
        return status
    try:
        return JobStatus(_as_int(value, -1))
    except ValueError as exc:
        raise GatewayError(f"unknown job status {value!r}") from exc


def _ratio_from_raw(value: object) -> float:
    ratio = _as_float(value)
    if ratio == _RATIO_INFINITE:
        return math.inf
    if ratio == _RATIO_NOT_AVAILABLE or ratio < 0:
        return math.nan
    return ratio


def _priority_from_raw(value: object) -> FilePriority:
    try:
        return FilePriority(_as_int(value, 0))
    except ValueError:
        return FilePriority.NORMAL


def files_from_raw(files: object, file_stats: object) -> tuple[JobFile, ...]:
    """Zip the ``files`` and ``fileStats`` arrays into ``JobFile`` records."""
    if not isinstance(files, list):
        return ()
    stats = file_stats if isinstance(file_stats, list) else []
    out: list[JobFile] = []
    for index, raw_file in enumerate(files):
        if not isinstance(raw_file, Mapping):
            continue
        name = raw_file.get("name")
        if not isinstance(name, str) or not name:
            continue
        stat = stats[index] if index < len(stats) and isinstance(stats[index], Mapping) else {}
        out.append(
            JobFile(
                index=index,
                name=name,
                size=_as_int(raw_file.get("length")),
                bytes_completed=_as_int(stat.get("bytesCompleted", raw_file.get("bytesCompleted"))),
                priority=_priority_from_raw(stat.get("priority", 0)),
                wanted=bool(stat.get("wanted", True)),
            )
        )
    return tuple(out)


def job_from_fields(fields: Mapping[str, Any]) -> Job:
    """Convert one torrent's raw RPC fields into a ``Job``.

    Missing numeric fields fall back to zero; a missing id or name is treated
    as a malformed payload and raises ``GatewayError``.
    """
    job_id = fields.get("id")
    name = fields.get("name")
    if isinstance(job_id, bool) or not isinstance(job_id, int) or not isinstance(name, str):
        raise GatewayError(f"torrent payload without id/name: {dict(fields)!r}")

    eta = _as_int(fields.get("eta"), -1)
    progress = _as_float(fields.get("percentDone"))
    if math.isnan(progress):
        progress = 0.0
    return Job(
        id=job_id,
        name=name,
        status=_status_from_raw(fields.get("status", 0)),
        progress=max(0.0, min(1.0, progress)),
        eta=eta if eta >= 0 else None,
        download_rate=_as_int(fields.get("rateDownload")),
        upload_rate=_as_int(fields.get("rateUpload")),
        ratio=_ratio_from_raw(fields.get("uploadRatio")),
        size=_as_int(fields.get("totalSize")),
        downloaded=_as_int(fields.get("downloadedEver")),
        uploaded=_as_int(fields.get("uploadedEver")),
        done_date=_as_int(fields.get("doneDate")),
        added_date=_as_int(fields.get("addedDate")),
        download_dir=str(fields.get("downloadDir") or ""),
        files=files_from_raw(fields.get("files"), fields.get("fileStats")),
        peers_connected=_as_int(fields.get("peersConnected")),
        error_string=str(fields.get("errorString") or ""),
    )


def stats_from_fields(fields: Mapping[str, Any]) -> SessionStats:
    cumulative = fields.get("cumulative-stats") or fields.get("cumulative_stats") or {}
    if not isinstance(cumulative, Mapping):
        cumulative = {}
    return SessionStats(
        download_rate=_as_int(fields.get("downloadSpeed")),
        upload_rate=_as_int(fields.get("uploadSpeed")),
        active_count=_as_int(fields.get("activeTorrentCount")),
        paused_count=_as_int(fields.get("pausedTorrentCount")),
        job_count=_as_int(fields.get("torrentCount")),
        downloaded_total=_as_int(cumulative.get("downloadedBytes")),
        uploaded_total=_as_int(cumulative.get("uploadedBytes")),
    )


@contextlib.contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    """Re-raise library and socket failures as ``GatewayError``."""
    try:
        yield
    except GatewayError:
        raise
    except (TransmissionError, OSError, ValueError, KeyError, TypeError) as exc:
        raise GatewayError(f"{operation} failed: {exc}") from exc


class TransmissionGateway:
    """``DaemonGateway`` over ``transmission_rpc`` with one client per thread."""

    def __init__(self, settings: ConnectionSettings, client_factory=None) -> None:
        self.settings = settings
        self._client_factory = client_factory if client_factory is not None else self._default_client
        self._local = threading.local()

    def _default_client(self) -> Client:
        settings = self.settings
        return Client(
            host=settings.host,
            port=settings.port,
            username=settings.username,
            password=settings.password,
            path=settings.rpc_path,
        )

    def _client(self) -> Client:
        client = getattr(self._local, "client", None)
        if client is None:
            with _translate_errors("connect"):
                client = self._client_factory()
            self._local.client = client
        return client

    def _drop_client(self) -> None:
        logger.debug("dropping RPC client on thread %s", threading.current_thread().name)
        self._local.client = None

    @contextlib.contextmanager
    def _call(self, operation: str) -> Iterator[Client]:
        """Yield this thread's client; a failed call forces a reconnect next time."""
        client = self._client()
        try:
            with _translate_errors(operation):
                yield client
        except GatewayError:
            self._drop_client()
            raise

    def list_jobs(self) -> list[Job]:
        with self._call("list jobs") as client:
            torrents = client.get_torrents(arguments=list(JOB_FIELDS))
            return [job_from_fields(_raw_fields(torrent)) for torrent in torrents]

    def session_stats(self) -> SessionStats:
        with self._call("session stats") as client:
            return stats_from_fields(_raw_fields(client.session_stats()))

    def apply(self, action: JobAction, job_ids: Sequence[int]) -> None:
        ids = list(job_ids)
        if not ids:
            return
        with self._call(f"{action.value} {ids}") as client:
            if action is JobAction.START:
                client.start_torrent(ids)
            elif action is JobAction.STOP:
                client.stop_torrent(ids)
            elif action is JobAction.VERIFY:
                client.verify_torrent(ids)
            else:
                raise GatewayError(f"unsupported action {action!r}")

    def rename(self, job_id: int, new_root_name: str) -> None:
        with self._call(f"rename {job_id}") as client:
            torrent = client.get_torrent(job_id, arguments=["id", "name"])
            current_name = _raw_fields(torrent).get("name")
            if not isinstance(current_name, str) or not current_name:
                raise GatewayError(f"torrent {job_id} has no name to rename")
            client.rename_torrent_path(job_id, location=current_name, name=new_root_name)

    def add(self, file_path: str, paused: bool) -> None:
        with self._call(f"add {file_path}") as client:
            with open(file_path, "rb") as handle:
                client.add_torrent(handle, paused=paused)

    def remove(self, job_id: int, delete_files: bool) -> None:
        with self._call(f"remove {job_id}") as client:
            client.remove_torrent(job_id, delete_data=delete_files)

    def set_file_priority(self, job_id: int, file_indices: Sequence[int], priority: FilePriority) -> None:
        indices = list(file_indices)
        if not indices:
            return
        keyword = {
            FilePriority.HIGH: "priority_high",
            FilePriority.NORMAL: "priority_normal",
            FilePriority.LOW: "priority_low",
        }[priority]
        with self._call(f"set priority {job_id}") as client:
            client.change_torrent(job_id, **{keyword: indices})


__all__ = [
    "ConnectionSettings",
    "DaemonGateway",
    "JOB_FIELDS",
    "TransmissionGateway",
    "files_from_raw",
    "job_from_fields",
    "stats_from_fields",
]
