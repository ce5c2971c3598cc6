# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""SAID derivation for credential attribute blocks.

A Self-Addressing Identifier is a digest embedded in the very mapping it was
computed over. To derive it, the digest field (label ``d`` by default) is
replaced by a fixed-size placeholder, the mapping is serialized, and the
digest of those bytes becomes the field's final value. Anyone holding the
completed mapping can repeat the procedure and check the result.

Credential records never hash anything themselves. They hand their mapping to
a :class:`DigestService` and adopt the SAID it returns. Two implementations
ship with the SDK:

``Blake3Saider``
    Local, offline. Insertion-order compact JSON, Blake3-256, CESR code
    ``E``. Matches keripy ``Saider.saidify`` for plain dicts.

:class:`~client.HttpDigestService`
    Delegates to a remote service over HTTP.
"""

from __future__ import annotations

import base64
import json
import logging
import secrets
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Protocol, runtime_checkable

import blake3

from .types import SAID, SAIDComputationError

log = logging.getLogger(__name__)

# Default digest field label of an ACDC attribute block.
DEFAULT_LABEL = "d"

# CESR derivation codes.
_BLAKE3_256_CODE = "E"
_SALT_128_CODE = "0A"

# Placeholder size equals the full qb64 length of a Blake3-256 SAID.
_PLACEHOLDER = "#" * 44


@runtime_checkable
class DigestService(Protocol):
    """Anything that can saidify a mapping.

    ``saidify`` returns the ordered field names together with a *new* mapping
    whose ``label`` entry holds the computed SAID. The input mapping must
    contain ``label``; its value is ignored.
    """

    def saidify(
        self, data: Mapping[str, Any], label: str = DEFAULT_LABEL
    ) -> tuple[list[str], dict[str, Any]]:
        ...


class Blake3Saider:
    """Local digest service: insertion-order JSON, Blake3-256, CESR ``E`` code."""

    def saidify(
        self, data: Mapping[str, Any], label: str = DEFAULT_LABEL
    ) -> tuple[list[str], dict[str, Any]]:
        """Compute the SAID of *data* and return ``(fields, completed)``.

        Raises
        ------
        SAIDComputationError
            If *label* is missing or the mapping cannot be serialized.
        """
        if label not in data:
            raise SAIDComputationError(f"saidify: missing digest field {label!r}")

        completed = dict(data)
        said = compute_said(completed, label)
        completed[label] = said
        log.debug("saidify: %d fields -> %s", len(completed), said)
        return list(completed), completed


def compute_said(data: Mapping[str, Any], label: str = DEFAULT_LABEL) -> SAID:
    """Return the Blake3-256 SAID of *data* with *label* held at the placeholder.

    Key order is preserved, not sorted: the SAID of an attribute block depends
    on the order its schema lists the fields.
    """
    dummied = dict(data)
    dummied[label] = _PLACEHOLDER
    try:
        serialized = json.dumps(dummied, separators=(",", ":"), ensure_ascii=False)
        digest = blake3.blake3(serialized.encode("utf-8")).digest()
    except (TypeError, ValueError) as exc:
        # UnicodeEncodeError is a ValueError: lone surrogates cannot be UTF-8.
        raise SAIDComputationError(f"SAID computation failed: {exc}") from exc

    return _cesr_encode(digest, _BLAKE3_256_CODE)


def verify_said(
    data: Mapping[str, Any],
    label: str = DEFAULT_LABEL,
    digest_service: DigestService | None = None,
) -> bool:
    """Return True if the SAID stored under *label* matches *data*.

    The completed mapping is re-submitted to *digest_service* (a local
    :class:`Blake3Saider` when ``None``) and the two values compared.
    """
    stored = data.get(label)
    if not isinstance(stored, str) or not stored:
        return False
    service = Blake3Saider() if digest_service is None else digest_service
    _, recomputed = service.saidify(data, label)
    return recomputed[label] == stored


def generate_nonce() -> str:
    """Return a random 128-bit salt in CESR qb64 form (24 characters).

    This is the shape issuers use for the ``u`` attribute of the ECR and OOR
    credentials.
    """
    return _cesr_encode(secrets.token_bytes(16), _SALT_128_CODE)


def format_timestamp(dt: datetime | None = None) -> str:
    """Format *dt* (default: now) as a KERI ISO-8601 timestamp.

    The result always carries microseconds and an explicit ``+00:00``
    offset, e.g. ``2024-01-01T00:00:00.000000+00:00``.
    """
    if dt is None:
        dt = datetime.now(tz=timezone.utc)
    elif dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _cesr_encode(raw: bytes, code: str) -> str:
    """Encode *raw* as qb64 with a fixed-size derivation *code*.

    The raw bytes are prepadded with zero bytes to a multiple of three, so the
    base64url text starts with as many pad characters as the code replaces.
    """
    ps = (3 - (len(raw) % 3)) % 3
    b64 = base64.urlsafe_b64encode(bytes(ps) + raw).decode("ascii")
    return code + b64[len(code):]
