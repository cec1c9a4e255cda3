# =============================================================================
# lib/notifications.py - Novu Notification Client
# =============================================================================
# Thin async wrapper around the Novu REST API. It only knows how to trigger a
# workflow; which workflows exist and what they send is configured in Novu.
#
# The client does not own its HTTP connection: it is given the shared,
# instrumented httpx client (see lib/http_client.py), so every call to Novu
# shows up in the outbound request log.
#
# Usage:
#   novu = NovuClient(http_client, secret_key=settings.NOVU_SECRET_KEY)
#   result = await novu.trigger(
#       "test-workflow-1234",
#       to={"subscriberId": "user-1", "email": "user@mando.cx"},
#       payload={"now": "2024-01-15T10:30:00Z"},
#   )
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_NOVU_SERVER_URL = "https://eu.api.novu.co"
TRIGGER_PATH = "/v1/events/trigger"


class NotificationError(Exception):
    """
    Error while talking to the notification provider.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "NOTIFICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class NovuClient:
    """
    Triggers Novu workflows over an injected httpx.AsyncClient.

    Raises:
        NotificationError: NOVU_NOT_CONFIGURED when no secret key is given
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        secret_key: str | None,
        server_url: str = DEFAULT_NOVU_SERVER_URL,
    ):
        if not secret_key:
            raise NotificationError(
                message="NOVU_SECRET_KEY is not set",
                code="NOVU_NOT_CONFIGURED",
                suggestion="Set NOVU_SECRET_KEY in the environment or .env file",
            )
        self._http = http_client
        self._secret_key = secret_key
        self.server_url = server_url.rstrip("/")

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"ApiKey {self._secret_key}",
            "Content-Type": "application/json",
        }

    async def trigger(
        self,
        workflow_id: str,
        to: dict[str, Any],
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Trigger a workflow for one subscriber.

        Args:
            workflow_id: Workflow identifier as configured in Novu
            to: Subscriber ({"subscriberId": ..., "email": ..., ...})
            payload: Data made available to the workflow templates

        Returns:
            The decoded JSON response from Novu

        Raises:
            NotificationError: On transport failure or a non-2xx response
        """
        url = f"{self.server_url}{TRIGGER_PATH}"
        body = {"name": workflow_id, "to": to, "payload": payload or {}}

        try:
            response = await self._http.post(url, json=body, headers=self.headers)
        except httpx.HTTPError as e:
            raise NotificationError(
                message=f"Could not reach Novu: {e}",
                code="NOVU_UNREACHABLE",
                suggestion="Check NOVU_SERVER_URL and network connectivity",
                details={"workflow_id": workflow_id},
            ) from e

        if response.is_error:
            raise NotificationError(
                message=f"Novu rejected trigger for '{workflow_id}' with status {response.status_code}",
                code="NOVU_REQUEST_FAILED",
                suggestion="Check that the workflow exists and the secret key is valid",
                details={
                    "workflow_id": workflow_id,
                    "status": response.status_code,
                    "body": response.text[:500],
                },
            )

        logger.info(f"Triggered Novu workflow '{workflow_id}'")
        try:
            return response.json()
        except ValueError:
            return {"raw": response.text}
