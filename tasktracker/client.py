"""Python client for the task RPC surface.

``TaskRpcClient`` is a thin ``requests`` wrapper returning the server's
canonical rows as dicts. ``TaskListState`` is the client-side task list: it
only ever changes by taking rows the server returned, and a failed call
leaves it exactly as it was.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

import requests

from tasktracker.errors import TaskTrackerError
from tasktracker.timeutil import to_iso

logger = logging.getLogger(__name__)

_DATE_FIELDS = ("due_date", "reminder_date")


class TaskRpcError(TaskTrackerError):
    def __init__(self, code: str, message: str, status: int | None = None, issues: list | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.status = status
        self.issues = issues or []

    def __str__(self) -> str:
        return f"{self.code}: {self.args[0]}"


def _encode_dates(payload: dict[str, Any]) -> dict[str, Any]:
    out = dict(payload)
    for key in _DATE_FIELDS:
        if isinstance(out.get(key), datetime):
            out[key] = to_iso(out[key])
    return out


class TaskRpcClient:
    def __init__(self, base_url: str, session: requests.Session | None = None, timeout: float | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout

    def _url(self, procedure: str) -> str:
        return f"{self._base_url}/rpc/{procedure}"

    def _query(self, procedure: str, payload: dict[str, Any] | None = None) -> Any:
        params = {"input": json.dumps(payload)} if payload is not None else None
        resp = self._session.get(self._url(procedure), params=params, timeout=self._timeout)
        return self._unwrap(resp)

    def _mutate(self, procedure: str, payload: dict[str, Any]) -> Any:
        resp = self._session.post(self._url(procedure), json=_encode_dates(payload), timeout=self._timeout)
        return self._unwrap(resp)

    @staticmethod
    def _unwrap(resp) -> Any:
        try:
            body = resp.json()
        except ValueError as exc:
            raise TaskRpcError("INTERNAL_SERVER_ERROR", f"Non-JSON response (HTTP {resp.status_code})", resp.status_code) from exc

        error = body.get("error")
        if error is not None:
            raise TaskRpcError(error.get("code", "INTERNAL_SERVER_ERROR"), error.get("message", ""), resp.status_code, error.get("issues"))
        return body["result"]["data"]

    # ---- procedures ----

    def healthcheck(self) -> dict[str, Any]:
        return self._query("healthcheck")

    def get_tasks(self) -> list[dict[str, Any]]:
        return self._query("getTasks")

    def get_task_by_id(self, task_id: int) -> dict[str, Any] | None:
        return self._query("getTaskById", {"id": task_id})

    def create_task(self, title: str, description: str | None = None, due_date=None, reminder_date=None) -> dict[str, Any]:
        return self._mutate(
            "createTask",
            {"title": title, "description": description, "due_date": due_date, "reminder_date": reminder_date},
        )

    def update_task(self, task_id: int, **changes: Any) -> dict[str, Any]:
        """Only keys passed in ``changes`` are sent; an explicit None clears the field."""
        return self._mutate("updateTask", {"id": task_id, **changes})

    def toggle_task(self, task_id: int) -> dict[str, Any]:
        return self._mutate("toggleTask", {"id": task_id})

    def delete_task(self, task_id: int) -> dict[str, Any]:
        return self._mutate("deleteTask", {"id": task_id})


class TaskListState:
    """Locally cached task list, newest first."""

    def __init__(self, client: TaskRpcClient) -> None:
        self._client = client
        self.tasks: list[dict[str, Any]] = []

    def get(self, task_id: int) -> dict[str, Any] | None:
        return next((t for t in self.tasks if t["id"] == task_id), None)

    def load(self) -> bool:
        try:
            rows = self._client.get_tasks()
        except (TaskRpcError, requests.RequestException):
            logger.exception("Failed to load tasks")
            return False
        self.tasks = list(rows)
        return True

    def create(self, title: str, **fields: Any) -> dict[str, Any] | None:
        try:
            row = self._client.create_task(title, **fields)
        except (TaskRpcError, requests.RequestException):
            logger.exception("Failed to create task")
            return None
        self.tasks = [row, *self.tasks]
        return row

    def update(self, task_id: int, **changes: Any) -> dict[str, Any] | None:
        try:
            row = self._client.update_task(task_id, **changes)
        except (TaskRpcError, requests.RequestException):
            logger.exception("Failed to update task id=%s", task_id)
            return None
        self._replace(row)
        return row

    def toggle(self, task_id: int) -> dict[str, Any] | None:
        try:
            row = self._client.toggle_task(task_id)
        except (TaskRpcError, requests.RequestException):
            logger.exception("Failed to toggle task id=%s", task_id)
            return None
        self._replace(row)
        return row

    def delete(self, task_id: int) -> bool:
        try:
            self._client.delete_task(task_id)
        except (TaskRpcError, requests.RequestException):
            logger.exception("Failed to delete task id=%s", task_id)
            return False
        self.tasks = [t for t in self.tasks if t["id"] != task_id]
        return True

    def _replace(self, row: dict[str, Any]) -> None:
        self.tasks = [row if t["id"] == row["id"] else t for t in self.tasks]
