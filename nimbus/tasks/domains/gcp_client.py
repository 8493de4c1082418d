"""GCP Cloud Tasks client wrapper."""
import logging
from typing import Optional

from google.api_core.exceptions import GoogleAPIError
from google.cloud import tasks_v2

from ...config.credentials import apply_credentials
from ...errors import TasksError
from .helper import CloudTaskHelper

logger = logging.getLogger(__name__)


def _response_view(res_view: str) -> tasks_v2.Task.View:
    name = res_view.upper()
    if name not in ("BASIC", "FULL"):
        raise TasksError(f"Unsupported response view: {res_view}")
    return tasks_v2.Task.View[name]


class GCPCloudTasks(CloudTaskHelper):
    """Wrapper around ``tasks_v2.CloudTasksClient``."""

    def __init__(self, client: Optional[tasks_v2.CloudTasksClient] = None):
        self._client = client

    @classmethod
    def from_config(cls) -> "GCPCloudTasks":
        apply_credentials()
        return cls()

    @property
    def client(self) -> tasks_v2.CloudTasksClient:
        """Lazy-initialize client."""
        if self._client is None:
            self._client = tasks_v2.CloudTasksClient()
        return self._client

    def push_task(self, queue: str, task: tasks_v2.Task, res_view: Optional[str] = None) -> tasks_v2.Task:
        request = {"parent": queue, "task": task}
        if res_view:
            request["response_view"] = _response_view(res_view)

        try:
            created = self.client.create_task(request=tasks_v2.CreateTaskRequest(**request))
        except GoogleAPIError as e:
            raise TasksError(f"CloudTasks error: {e}") from e

        logger.info(f"Created task {created.name} on {queue}")
        return created
