"""Async client for the planner's procedure surface."""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class ProcedureError(Exception):
    """A procedure call that came back with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class PlannerClient:
    """
    Thin wrapper around an httpx.AsyncClient carrying the session cookie.

    Responses are returned as the decoded JSON (camelCase keys), exactly as
    the API sends them.
    """

    def __init__(self, http: httpx.AsyncClient, prefix: str = "/api/v1"):
        self.http = http
        self.prefix = prefix

    async def _call(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self.http.request(method, f"{self.prefix}{path}", **kwargs)
        except httpx.HTTPError as e:
            raise ProcedureError(0, f"Network error: {e}") from e

        if response.is_success:
            return response.json()

        raise ProcedureError(response.status_code, self._error_message(response))

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            detail = response.json().get("detail")
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(detail, list) and detail:
            return detail[0].get("msg", "Invalid input")
        return str(detail or response.reason_phrase)

    # auth
    async def me(self) -> Optional[Dict[str, Any]]:
        return await self._call("GET", "/auth/me")

    async def logout(self) -> Dict[str, Any]:
        return await self._call("POST", "/auth/logout")

    # task
    async def create_task(
        self, name: str, due_date: str, due_time: str, description: Optional[str] = None
    ) -> Dict[str, Any]:
        body = {"name": name, "dueDate": due_date, "dueTime": due_time}
        if description is not None:
            body["description"] = description
        return await self._call("POST", "/task/create", json=body)

    async def list_by_date(self, date: str) -> List[Dict[str, Any]]:
        return await self._call("GET", "/task/listByDate", params={"date": date})

    async def list_all(self) -> List[Dict[str, Any]]:
        return await self._call("GET", "/task/listAll")

    async def update_task(
        self, task_id: int, completed: Optional[int] = None, notification_sent: Optional[int] = None
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"id": task_id}
        if completed is not None:
            body["completed"] = completed
        if notification_sent is not None:
            body["notificationSent"] = notification_sent
        return await self._call("POST", "/task/update", json=body)

    async def delete_task(self, task_id: int) -> Dict[str, Any]:
        return await self._call("POST", "/task/delete", json={"id": task_id})

    # feedback
    async def submit_feedback(self, rating: int, comment: Optional[str] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {"rating": rating}
        if comment:
            body["comment"] = comment
        return await self._call("POST", "/feedback/submit", json=body)
