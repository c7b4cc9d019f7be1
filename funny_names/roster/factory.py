"""
Factory for creating the remote list client.
"""

from typing import Optional

import requests

from .client import StudentsClient, build_session


def create_roster_module(remote_config, session: Optional[requests.Session] = None) -> dict:
    """Create the remote list client from a RemoteConfig.

    Args:
        remote_config: RemoteConfig with base URL, path, timeout and bypass header
        session: Optional pre-built requests session (tests pass a mock)

    Returns:
        Dictionary containing the client and the session it uses
    """
    session = session or build_session(remote_config.bypass_header, remote_config.bypass_value)

    client = StudentsClient(
        base_url=remote_config.base_url,
        session=session,
        students_path=remote_config.students_path,
        timeout=remote_config.timeout
    )

    return {
        "client": client,
        "session": session
    }
