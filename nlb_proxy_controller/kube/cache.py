"""
Locally cached view of the Services in one namespace.

The cache is filled by a list-then-watch loop running in a background thread
and read by the reconciliation loop. Readers always get a point-in-time copy
taken under the lock; writers replace records instead of mutating them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional
import logging
import threading
from kubernetes import watch
from kubernetes.client.rest import ApiException

logger = logging.getLogger(__name__)

DEFAULT_RESYNC_DELAY = 5  # seconds to wait before re-listing after a watch failure
WATCH_EVENT_TYPES = ('ADDED', 'MODIFIED', 'DELETED')


class SnapshotUnavailableError(Exception):
    """Raised when no complete listing of services has been received yet."""


@dataclass(frozen=True)
class ServiceRecord:
    name: str
    namespace: str
    annotations: Dict[str, str] = field(default_factory=dict)

    @property
    def key(self) -> str:
        return f"{self.namespace}/{self.name}"

    @classmethod
    def from_v1(cls, service: Any) -> "ServiceRecord":
        """Build a record from a kubernetes.client.V1Service."""
        metadata = service.metadata
        return cls(
            name=metadata.name,
            namespace=metadata.namespace,
            annotations=dict(metadata.annotations or {}),
        )


class ServiceCache:
    def __init__(self, core_v1: Any, namespace: str, watch_timeout: int = 300,
                 resync_delay: float = DEFAULT_RESYNC_DELAY):
        self.namespace = namespace
        self.watch_timeout = watch_timeout
        self.resync_delay = resync_delay
        self._core_v1 = core_v1
        self._lock = threading.Lock()
        self._services: Dict[str, ServiceRecord] = {}
        self._synced = False
        self._stop = threading.Event()
        self._watcher: Optional[watch.Watch] = None
        self._thread: Optional[threading.Thread] = None

    def current_snapshot(self) -> List[ServiceRecord]:
        """
        Return every known service as of now.

        Raises:
            SnapshotUnavailableError: If the initial listing has not completed
        """
        with self._lock:
            if not self._synced:
                raise SnapshotUnavailableError(
                    f"Services in namespace {self.namespace} have not been listed yet")
            return list(self._services.values())

    def replace(self, records: Iterable[ServiceRecord]) -> None:
        services = {record.name: record for record in records}
        with self._lock:
            self._services = services
            self._synced = True

    def apply_event(self, event_type: str, service: Any) -> None:
        record = ServiceRecord.from_v1(service)
        with self._lock:
            if event_type == 'DELETED':
                self._services.pop(record.name, None)
            else:
                self._services[record.name] = record

    def _list(self) -> Optional[str]:
        response = self._core_v1.list_namespaced_service(namespace=self.namespace)
        self.replace(ServiceRecord.from_v1(item) for item in response.items)
        logger.info(f"Listed {len(response.items)} service(s) in namespace {self.namespace}")
        return response.metadata.resource_version

    def _watch(self, resource_version: Optional[str]) -> Optional[str]:
        watcher = watch.Watch()
        self._watcher = watcher
        try:
            stream = watcher.stream(
                self._core_v1.list_namespaced_service,
                namespace=self.namespace,
                resource_version=resource_version,
                timeout_seconds=self.watch_timeout
            )
            for event in stream:
                if self._stop.is_set():
                    break
                event_type = event.get('type')
                service = event.get('object')
                if event_type not in WATCH_EVENT_TYPES or service is None:
                    logger.warning(f"Ignoring unexpected watch event of type {event_type}")
                    continue
                self.apply_event(event_type, service)
                if service.metadata.resource_version:
                    resource_version = service.metadata.resource_version
        finally:
            watcher.stop()
            self._watcher = None
        return resource_version

    def run(self) -> None:
        """List and watch services until stop() is called."""
        resource_version = None
        while not self._stop.is_set():
            try:
                if resource_version is None:
                    resource_version = self._list()
                resource_version = self._watch(resource_version)
            except ApiException as e:
                resource_version = None
                if e.status == 410:
                    logger.warning("Service watch resource version expired, re-listing")
                    continue
                logger.error(f"Failed to poll services: {str(e)}")
                self._stop.wait(self.resync_delay)
            except Exception as e:
                resource_version = None
                logger.error(f"Failed to poll services: {str(e)}", exc_info=True)
                self._stop.wait(self.resync_delay)

    def start(self) -> threading.Thread:
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, name="service-cache", daemon=True)
        self._thread.start()
        logger.info(f"Started service cache for namespace {self.namespace}")
        return self._thread

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        watcher = self._watcher
        if watcher is not None:
            watcher.stop()
        if self._thread is not None:
            self._thread.join(timeout)
