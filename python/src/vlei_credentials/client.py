# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""HttpDigestService: HTTP client for a remote SAID computation service.

Use this when SAIDs must be produced by a designated service (for example an
issuance agent that owns the canonicalization rules) instead of the local
:class:`~said.Blake3Saider`. The class satisfies the
:class:`~said.DigestService` protocol, so credential records accept it
directly.

Wire contract
-------------
``POST {base_url}/v1/saidify`` with body ``{"label": "d", "data": {...}}``.
The service answers ``{"fields": [...], "data": {...}}`` where ``data`` is
the completed mapping carrying the SAID under ``label``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from .said import DEFAULT_LABEL
from .types import DigestServiceError

log = logging.getLogger(__name__)

_SAIDIFY_PATH = "/v1/saidify"


class HttpDigestService:
    """Synchronous client for a remote digest service.

    Parameters
    ----------
    base_url:
        Root URL of the digest service, e.g. ``"https://agent.example.com"``.
        A trailing slash is stripped automatically.
    timeout:
        Per-request timeout in seconds. Defaults to 10.
    http_client:
        Optional pre-configured :class:`httpx.Client`. Useful for injecting
        test transports or custom SSL contexts. A client passed in here is
        never closed by this instance.

    Examples
    --------
    >>> with HttpDigestService("https://agent.example.com") as service:
    ...     data = LegalEntityCredentialData(
    ...         issuee="EAbc...", timestamp=ts, lei=lei, digest_service=service
    ...     )
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owned_client = http_client is None
        self._http = http_client or httpx.Client(
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # Context manager support
    # ------------------------------------------------------------------

    def __enter__(self) -> "HttpDigestService":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if it was created internally."""
        if self._owned_client:
            self._http.close()

    # ------------------------------------------------------------------
    # DigestService protocol
    # ------------------------------------------------------------------

    def saidify(
        self, data: Mapping[str, Any], label: str = DEFAULT_LABEL
    ) -> tuple[list[str], dict[str, Any]]:
        """Ask the remote service to saidify *data*.

        Returns
        -------
        tuple[list[str], dict[str, Any]]
            The ordered field names and the completed mapping.

        Raises
        ------
        DigestServiceError
            On transport failures, non-2xx responses, or a response body that
            does not carry a SAID under *label*.
        """
        url = f"{self._base_url}{_SAIDIFY_PATH}"
        raw = self._post(url, {"label": label, "data": dict(data)})
        fields, completed = _parse_saidify_response(raw, label, url)
        log.debug("saidify via %s -> %s", url, completed[label])
        return fields, completed

    # ------------------------------------------------------------------
    # Private HTTP helpers
    # ------------------------------------------------------------------

    def _post(self, url: str, payload: dict[str, Any]) -> Any:
        try:
            content = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise DigestServiceError(
                status_code=0, endpoint=url, message=f"request body not encodable: {exc}"
            ) from exc

        try:
            response = self._http.post(
                url,
                content=content,
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                },
            )
        except httpx.TimeoutException as exc:
            raise DigestServiceError(
                status_code=0, endpoint=url, message=f"request timed out: {exc}"
            ) from exc
        except httpx.TransportError as exc:
            raise DigestServiceError(
                status_code=0, endpoint=url, message=f"request failed: {exc}"
            ) from exc

        _raise_for_status(response, url)
        try:
            return response.json()
        except ValueError as exc:
            raise DigestServiceError(
                status_code=response.status_code,
                endpoint=url,
                message="response body is not valid JSON",
            ) from exc


# ------------------------------------------------------------------
# Module-level parsing helpers
# ------------------------------------------------------------------


def _raise_for_status(response: httpx.Response, url: str) -> None:
    if response.is_success:
        return
    message = response.reason_phrase or "unknown error"
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        message = body["error"]
    raise DigestServiceError(
        status_code=response.status_code,
        endpoint=url,
        message=message,
    )


def _parse_saidify_response(
    raw: Any, label: str, url: str
) -> tuple[list[str], dict[str, Any]]:
    """Validate a saidify response body and return ``(fields, completed)``."""

    def malformed(reason: str) -> DigestServiceError:
        return DigestServiceError(status_code=200, endpoint=url, message=reason)

    if not isinstance(raw, dict):
        raise malformed(f"expected JSON object, got {type(raw).__name__}")

    completed = raw.get("data")
    if not isinstance(completed, dict):
        raise malformed('"data" must be an object')

    said = completed.get(label)
    if not isinstance(said, str) or not said:
        raise malformed(f"missing SAID under {label!r}")

    fields = raw.get("fields")
    if fields is None:
        fields = list(completed)
    elif not isinstance(fields, list) or not all(isinstance(f, str) for f in fields):
        raise malformed('"fields" must be a list of strings')

    return list(fields), completed
