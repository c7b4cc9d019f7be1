"""
Per-client workflow registry.
"""

import logging
import time
from threading import Lock
from typing import Callable, Dict, List, Optional, Tuple

from .services import SubmissionWorkflow

logger = logging.getLogger(__name__)

DEFAULT_MAX_IDLE_SECONDS = 3600
DEFAULT_MAX_WORKFLOWS = 1000


class WorkflowRegistry:
    """Keeps one started SubmissionWorkflow per client scope.

    Workflows are built and started outside the registry lock, so a slow
    remote list only delays the client that triggered it. Entries idle for
    longer than ``max_idle`` seconds are dropped, and the oldest entries are
    dropped once more than ``max_workflows`` are held. A workflow with a
    submit in flight is never dropped. A dropped client gets a fresh workflow
    on its next request; its quota is reloaded from storage.
    """

    def __init__(self,
                 workflow_factory: Callable[[str], SubmissionWorkflow],
                 transient_factory: Optional[Callable[[str], SubmissionWorkflow]] = None,
                 max_idle: float = DEFAULT_MAX_IDLE_SECONDS,
                 max_workflows: int = DEFAULT_MAX_WORKFLOWS,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize WorkflowRegistry.

        Args:
            workflow_factory: Builds the persistent workflow for a client id
            transient_factory: Builds a workflow that keeps nothing on disk,
                used for clients that have not sent their cookie back yet
            max_idle: Seconds after which an unused workflow is dropped
            max_workflows: Upper bound on registered workflows
            clock: Monotonic time source
        """
        self.workflow_factory = workflow_factory
        self.transient_factory = transient_factory
        self.max_idle = max_idle
        self.max_workflows = max_workflows
        self._clock = clock
        # Key: client id, Value: (workflow, last used); insertion order is use order
        self._workflows: Dict[str, Tuple[SubmissionWorkflow, float]] = {}
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._workflows)

    def __contains__(self, client_id: str) -> bool:
        with self._lock:
            return client_id in self._workflows

    def get(self, client_id: str) -> SubmissionWorkflow:
        """Return the client's workflow, creating and starting it on first use."""
        with self._lock:
            entry = self._workflows.pop(client_id, None)
            if entry is not None:
                self._workflows[client_id] = (entry[0], self._clock())
                return entry[0]

        workflow = self.workflow_factory(client_id)
        workflow.start()

        with self._lock:
            entry = self._workflows.pop(client_id, None)
            if entry is not None:
                # Another request for the same client finished first
                workflow = entry[0]
            else:
                logger.info(f"Started workflow for client {client_id}")
            self._workflows[client_id] = (workflow, self._clock())
            self._evict()
        return workflow

    def transient(self, client_id: str) -> SubmissionWorkflow:
        """Build and start a workflow that is neither registered nor persisted."""
        factory = self.transient_factory or self.workflow_factory
        workflow = factory(client_id)
        workflow.start()
        return workflow

    def cleanup_idle(self) -> int:
        """Drop idle workflows. Returns how many were removed."""
        with self._lock:
            return self._evict()

    def _evict(self) -> int:
        """Drop idle and overflow entries. Caller holds the lock."""
        now = self._clock()
        to_remove: List[str] = []
        for cid, (workflow, last_used) in self._workflows.items():
            if workflow.in_flight:
                continue
            if now - last_used > self.max_idle:
                to_remove.append(cid)

        overflow = len(self._workflows) - len(to_remove) - self.max_workflows
        if overflow > 0:
            for cid, (workflow, _) in self._workflows.items():
                if overflow <= 0:
                    break
                if cid in to_remove or workflow.in_flight:
                    continue
                to_remove.append(cid)
                overflow -= 1

        for cid in to_remove:
            del self._workflows[cid]

        if to_remove:
            logger.info(f"Dropped {len(to_remove)} idle client workflows")
        return len(to_remove)
