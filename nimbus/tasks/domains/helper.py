"""Building and pushing HTTP tasks."""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Optional

from google.cloud import tasks_v2

from ...errors import TasksError


def oidc_token(service_account_email: str, audience: Optional[str] = None) -> tasks_v2.OidcToken:
    """OIDC identity token attached to the task's HTTP request."""
    if audience:
        return tasks_v2.OidcToken(service_account_email=service_account_email, audience=audience)
    return tasks_v2.OidcToken(service_account_email=service_account_email)


def _http_method(method: str) -> tasks_v2.HttpMethod:
    name = method.upper()
    if name == "HTTP_METHOD_UNSPECIFIED" or name not in tasks_v2.HttpMethod.__members__:
        raise TasksError(f"Unsupported HTTP method: {method}")
    return tasks_v2.HttpMethod[name]


class TaskHelper:
    """Composes ``tasks_v2.Task`` objects describing an HTTP request."""

    @staticmethod
    def new_task(
        service: str,
        method: str,
        body: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
        name: Optional[str] = None,
        schedule_time: Optional[datetime] = None,
        oidc_token: Optional[tasks_v2.OidcToken] = None,
    ) -> tasks_v2.Task:
        """
        Build an HTTP task.

        Args:
            service: Target URL
            method: HTTP method name, case-insensitive
            body: Request body
            headers: Request headers
            name: Full task name (projects/.../queues/.../tasks/ID); generated by the service if omitted
            schedule_time: Earliest delivery time
            oidc_token: Identity token for authenticated targets

        Raises:
            TasksError: If ``method`` is not an HTTP method Cloud Tasks supports
        """
        request = {"url": service, "http_method": _http_method(method)}
        if body is not None:
            request["body"] = body
        if headers:
            request["headers"] = dict(headers)
        if oidc_token is not None:
            request["oidc_token"] = oidc_token

        task = {"http_request": tasks_v2.HttpRequest(**request)}
        if name:
            task["name"] = name
        if schedule_time is not None:
            task["schedule_time"] = schedule_time
        return tasks_v2.Task(**task)


class CloudTaskHelper(TaskHelper, ABC):
    """Pushes tasks onto a queue."""

    @staticmethod
    def queue_path(project: str, location: str, queue: str) -> str:
        return f"projects/{project}/locations/{location}/queues/{queue}"

    @abstractmethod
    def push_task(self, queue: str, task: tasks_v2.Task, res_view: Optional[str] = None) -> tasks_v2.Task:
        """
        Submit ``task`` to ``queue``.

        Args:
            queue: Full queue name, projects/{p}/locations/{l}/queues/{q}
            task: Task to create
            res_view: "BASIC" or "FULL"; which task fields the response carries

        Returns:
            The task as created by the service
        """

    def push(
        self,
        queue: str,
        service: str,
        method: str,
        body: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
        name: Optional[str] = None,
        schedule_time: Optional[datetime] = None,
        oidc_token: Optional[tasks_v2.OidcToken] = None,
        res_view: Optional[str] = None,
    ) -> tasks_v2.Task:
        """Build an HTTP task with ``new_task`` and push it to ``queue``."""
        task = self.new_task(service, method, body, headers, name, schedule_time, oidc_token)
        return self.push_task(queue, task, res_view)
