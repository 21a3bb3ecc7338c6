"""
Remote Generation Client - HTTP access to the website generation service.

Protocol:
=========
    POST {GENERATION_API_URL}
    {"spec": {...camelCase Specification...}}

    2xx -> {"html": "<!DOCTYPE html>...", "downloadUrl": "https://..."?}

Any status is returned to the caller as a RemoteGenerationResponse; the
orchestrator decides what counts as success. Only transport errors and a
2xx body that is not JSON raise RemoteServiceError. There are no retries.

Usage:
======
    client = RemoteGenerationClient("http://localhost:8080/api/generate")
    response = await client.generate(spec)
    if response.html: ...
"""

import json
import logging
from typing import Optional

import httpx

from webmaker.core.config import settings
from webmaker.core.exceptions import RemoteServiceError
from webmaker.generation.contracts import RemoteGenerationResponse
from webmaker.schemas.spec import Specification


logger = logging.getLogger("webmaker.generation.client")


class RemoteGenerationClient:
    """
    Single-shot client for the generation endpoint.

    Args:
        api_url: Full URL of the generate endpoint
        timeout: Seconds; None keeps the httpx default
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url or settings.GENERATION_API_URL
        self.timeout = timeout if timeout is not None else settings.GENERATION_TIMEOUT
        self._transport = transport

    def _client_kwargs(self) -> dict:
        kwargs = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return kwargs

    async def generate(self, spec: Specification) -> RemoteGenerationResponse:
        """
        Send the spec to the service.

        Returns:
            RemoteGenerationResponse with the status and, for 2xx, the
            decoded JSON body

        Raises:
            RemoteServiceError: Network failure or non-JSON 2xx body
        """
        async with httpx.AsyncClient(**self._client_kwargs()) as client:
            try:
                response = await client.post(
                    self.api_url,
                    json={"spec": spec.to_payload()},
                    headers={"Accept": "application/json"},
                )
            except httpx.RequestError as e:
                logger.error(f"Network error calling generation service: {e}")
                raise RemoteServiceError(f"Network error: {e}")

        if not 200 <= response.status_code < 300:
            logger.warning(f"Generation service answered {response.status_code}")
            return RemoteGenerationResponse(status_code=response.status_code)

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Generation service returned a non-JSON body: {e}")
            raise RemoteServiceError(
                "Malformed response body",
                status_code=response.status_code,
                response=response.text[:500],
            )

        return RemoteGenerationResponse(status_code=response.status_code, payload=payload)
