"""Workflow for pushing HTTP tasks using the nimbus config."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from google.cloud import tasks_v2

from ...config.credentials import get_location, get_project_id
from ...errors import ConfigError
from ..domains.gcp_client import GCPCloudTasks
from ..domains.helper import CloudTaskHelper, oidc_token

logger = logging.getLogger(__name__)


def resolve_queue(queue: str, project_id: Optional[str] = None, location: Optional[str] = None) -> str:
    """
    Expand a short queue ID to its full name.

    Names already containing "/" are returned as given.

    Raises:
        ConfigError: If the project or location cannot be resolved
    """
    if "/" in queue:
        return queue

    project_id = project_id or get_project_id()
    location = location or get_location()
    if not project_id:
        raise ConfigError("Project ID not found. Set GCP_PROJECT or gcp.project_id in the config file")
    if not location:
        raise ConfigError("Location not found. Set GCP_LOCATION or gcp.location in the config file")
    return CloudTaskHelper.queue_path(project_id, location, queue)


def push_http_task(
    queue: str,
    url: str,
    method: str = "POST",
    body: Optional[bytes] = None,
    headers: Optional[Dict[str, str]] = None,
    task_id: Optional[str] = None,
    schedule_in: Optional[float] = None,
    oidc_email: Optional[str] = None,
    audience: Optional[str] = None,
    view: Optional[str] = None,
    project_id: Optional[str] = None,
    location: Optional[str] = None,
) -> tasks_v2.Task:
    """
    Push an HTTP task.

    Args:
        queue: Queue ID or full queue name
        url: Target URL
        method: HTTP method
        body: Request body
        headers: Request headers
        task_id: Task ID, expanded to a full task name under the queue
        schedule_in: Delay in seconds before the task is delivered
        oidc_email: Service account whose OIDC token authenticates the request
        audience: OIDC audience; defaults to the target URL on the service side
        view: "BASIC" or "FULL" response view
        project_id: GCP project (auto-detected if omitted)
        location: Queue location (auto-detected if omitted)

    Returns:
        The created task
    """
    queue_name = resolve_queue(queue, project_id, location)
    name = f"{queue_name}/tasks/{task_id}" if task_id else None
    schedule_time = None
    if schedule_in is not None:
        schedule_time = datetime.now(timezone.utc) + timedelta(seconds=schedule_in)
    token = oidc_token(oidc_email, audience) if oidc_email else None

    logger.debug(f"Pushing {method} {url} to {queue_name}")
    client = GCPCloudTasks.from_config()
    return client.push(queue_name, url, method, body, headers, name, schedule_time, token, view)
