from pathlib import Path
from typing import Optional

import requests
from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from config_manager import ConfigManager
from .logging_config import get_logger
from .roster.factory import create_roster_module
from .submission.factory import create_submission_module

logger = get_logger(__name__)

ROOT_DIR = Path(__file__).parent.parent
UI_DIR = ROOT_DIR / "ui"


def load_index_template() -> str:
    """Load the page template from the UI directory."""
    return (UI_DIR / "index.html").read_text(encoding="utf-8")


def create_app(
    config_manager: Optional[ConfigManager] = None,
    session: Optional[requests.Session] = None,
    data_dir: Optional[Path] = None,
) -> Flask:
    """Build the Flask application.

    Args:
        config_manager: Configuration source; a fresh ConfigManager if omitted
        session: requests session for the remote list (tests pass a mock)
        data_dir: Override for the directory holding per-client quota files
    """
    config_manager = config_manager or ConfigManager()
    app_config = config_manager.get_app_config()
    remote_config = config_manager.get_remote_config()
    form_config = config_manager.get_form_config()
    quota_settings = config_manager.get_quota_config()
    paths_config = config_manager.get_paths_config()

    if data_dir is None:
        data_dir = Path(paths_config.data_dir)
        if not data_dir.is_absolute():
            data_dir = ROOT_DIR / data_dir
    data_dir.mkdir(parents=True, exist_ok=True)

    app = Flask(__name__)
    app.wsgi_app = ProxyFix(
        app.wsgi_app,
        x_proto=1,    # trust 1 hop for X-Forwarded-Proto
        x_host=1,     # trust 1 hop for X-Forwarded-Host
        x_prefix=1)   # trust 1 hop for X-Forwarded-Prefix

    roster_module = create_roster_module(remote_config, session=session)

    submission_module = create_submission_module(
        data_dir=data_dir,
        client=roster_module["client"],
        form_config=form_config,
        quota_settings=quota_settings,
        index_template=load_index_template(),
        default_theme=app_config.default_theme,
        client_idle_seconds=app_config.client_idle_seconds,
        max_clients=app_config.max_clients
    )

    app.register_blueprint(submission_module["blueprint"])
    app.extensions["funny_names"] = {
        "registry": submission_module["registry"],
        "client": roster_module["client"],
    }

    logger.info(f"Remote list: {roster_module['client'].url}, data dir: {data_dir}")
    return app
