"""
Periodic reconciliation of PROXY protocol settings for cached Services.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import enum
import logging
import threading
import time
from .annotations import Classification, classify
from .aws.tagging import resolve_target_groups
from .aws.target_group import SyncOutcome, sync_proxy_protocol
from .kube.cache import ServiceCache, ServiceRecord
from .kube.client import annotate_service

logger = logging.getLogger(__name__)


class ServiceOutcome(enum.Enum):
    IGNORED = "ignored"
    NO_TARGET_GROUPS = "no-target-groups"
    UNCHANGED = "unchanged"
    MODIFIED = "modified"
    FAILED = "failed"


@dataclass
class ServiceResult:
    service: str
    classification: Classification
    outcome: ServiceOutcome
    target_groups: int = 0
    modified: int = 0


@dataclass
class PassReport:
    started_at: float
    finished_at: Optional[float] = None
    listed: bool = False
    counts: Dict[str, int] = field(default_factory=lambda: {outcome.value: 0 for outcome in ServiceOutcome})

    def record(self, result: ServiceResult) -> None:
        self.counts[result.outcome.value] += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'startedAt': self.started_at,
            'finishedAt': self.finished_at,
            'listed': self.listed,
            'services': dict(self.counts),
        }


class Reconciler:
    def __init__(self, cache: ServiceCache, core_v1: Any, elbv2: Any, tagging: Any,
                 interval: int = 10, workers: int = 1):
        self.cache = cache
        self.core_v1 = core_v1
        self.elbv2 = elbv2
        self.tagging = tagging
        self.interval = interval
        self.workers = workers
        self.last_report: Optional[PassReport] = None

    def reconcile_service(self, record: ServiceRecord) -> ServiceResult:
        """
        Synchronize the target groups of one service with its annotations.

        Errors are not caught here: the first failing target group abandons the
        rest of the work for this service, and the marker annotation is only
        written once every target group has been synchronized.

        Args:
            record: Service to reconcile

        Returns:
            ServiceResult: What was done for the service
        """
        classification = classify(record.annotations)
        if classification is Classification.IGNORE:
            return ServiceResult(record.key, classification, ServiceOutcome.IGNORED)

        desired_enabled = classification.desired_state
        logger.info(f"Turning {'on' if desired_enabled else 'off'} PROXY protocol for service {record.key}")

        target_group_arns = resolve_target_groups(self.tagging, record.namespace, record.name)
        if not target_group_arns:
            logger.warning(f"Did not find any target groups for service {record.key}")
            return ServiceResult(record.key, classification, ServiceOutcome.NO_TARGET_GROUPS)

        modified = 0
        for target_group_arn in target_group_arns:
            if sync_proxy_protocol(self.elbv2, target_group_arn, desired_enabled) is SyncOutcome.MODIFIED:
                modified += 1

        annotate_service(self.core_v1, record.namespace, record.name, desired_enabled)

        return ServiceResult(
            record.key,
            classification,
            ServiceOutcome.MODIFIED if modified else ServiceOutcome.UNCHANGED,
            target_groups=len(target_group_arns),
            modified=modified,
        )

    def _reconcile_safely(self, record: ServiceRecord) -> ServiceResult:
        try:
            return self.reconcile_service(record)
        except Exception as e:
            logger.error(f"Failed to reconcile service {record.key}: {str(e)}", exc_info=True)
            return ServiceResult(record.key, classify(record.annotations), ServiceOutcome.FAILED)

    def run_pass(self) -> PassReport:
        """
        Run one reconciliation pass over the current service snapshot.

        A failure to read the snapshot skips the pass. A failure for one
        service is logged and does not affect the others.
        """
        report = PassReport(started_at=time.time())
        try:
            services = self.cache.current_snapshot()
        except Exception as e:
            logger.error(f"An error occurred while scanning services: {str(e)}")
            report.finished_at = time.time()
            self.last_report = report
            return report

        report.listed = True
        results: List[ServiceResult]
        if self.workers > 1 and len(services) > 1:
            with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="reconcile") as pool:
                results = list(pool.map(self._reconcile_safely, services))
        else:
            results = [self._reconcile_safely(service) for service in services]

        for result in results:
            report.record(result)
        report.finished_at = time.time()
        self.last_report = report

        logger.debug(f"Reconciliation pass finished: {report.counts}")
        return report

    def run_forever(self, stop_event: threading.Event) -> None:
        """Run passes every interval until stop_event is set; an in-flight pass always completes."""
        logger.info(f"Starting reconciliation loop with interval of {self.interval} seconds")
        while not stop_event.is_set():
            self.run_pass()
            stop_event.wait(self.interval)
        logger.info("Reconciliation loop stopped")
