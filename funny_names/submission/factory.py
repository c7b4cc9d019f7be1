from pathlib import Path
from typing import Any, Dict

from ..quota import InMemoryStore, QuotaConfig, QuotaManager
from ..quota.factory import create_quota_module
from ..roster import StudentsClient
from .registry import DEFAULT_MAX_IDLE_SECONDS, DEFAULT_MAX_WORKFLOWS, WorkflowRegistry
from .routes import create_submission_routes
from .services import SubmissionWorkflow


def create_submission_module(
    data_dir: Path,
    client: StudentsClient,
    form_config,
    quota_settings,
    index_template: str,
    default_theme: str = "dark",
    client_idle_seconds: float = DEFAULT_MAX_IDLE_SECONDS,
    max_clients: int = DEFAULT_MAX_WORKFLOWS
) -> Dict[str, Any]:
    """Create and configure the submission workflow components.

    Each client scope gets its own quota file under ``data_dir/clients``.
    Clients that have not returned their cookie yet are served from memory.
    """
    clients_dir = data_dir / "clients"
    clients_dir.mkdir(parents=True, exist_ok=True)

    def _workflow(quota_manager: QuotaManager) -> SubmissionWorkflow:
        return SubmissionWorkflow(
            client=client,
            quota_manager=quota_manager,
            require_username=form_config.require_username,
            max_name_length=form_config.max_name_length,
            max_username_length=form_config.max_username_length
        )

    def build_workflow(client_id: str) -> SubmissionWorkflow:
        quota_module = create_quota_module(
            store_file=clients_dir / f"{client_id}.json",
            initial_chances=quota_settings.initial_chances,
            storage_key=quota_settings.storage_key
        )
        return _workflow(quota_module["manager"])

    def build_transient_workflow(client_id: str) -> SubmissionWorkflow:
        config = QuotaConfig(
            initial_chances=quota_settings.initial_chances,
            storage_key=quota_settings.storage_key
        )
        return _workflow(QuotaManager(config, InMemoryStore()))

    registry = WorkflowRegistry(
        build_workflow,
        transient_factory=build_transient_workflow,
        max_idle=client_idle_seconds,
        max_workflows=max_clients
    )

    submission_bp = create_submission_routes(registry, index_template, default_theme)

    return {
        "blueprint": submission_bp,
        "registry": registry
    }
