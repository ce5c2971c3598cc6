# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Credential data verification: SAID self-consistency checks.

This module is the *consumption* counterpart to :mod:`credential`. It
provides two entry points:

``verify_credential_data``
    Re-submits a record's completed attribute block, digest included, to a
    digest service and checks that the SAID it yields is the one the record
    stores.

``parse_credential_data``
    Rebuilds a record of a given variant from a serialized attribute block,
    rejecting blocks whose shape or SAID does not match.

Neither function contacts a network unless the configured digest service
does.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .config import get_digest_service
from .credential import CREDENTIAL_TYPES, _CredentialData
from .said import DEFAULT_LABEL, DigestService
from .types import CredentialVariant, VerificationResult

log = logging.getLogger(__name__)


def verify_credential_data(
    record: _CredentialData,
    *,
    digest_service: DigestService | None = None,
) -> VerificationResult:
    """Check that *record*'s digest is bound to its own content.

    Parameters
    ----------
    record:
        Any credential attribute block from :mod:`credential`.
    digest_service:
        Service used for the independent recomputation. Defaults to the
        configured service.

    Returns
    -------
    VerificationResult
        This function never raises on a digest mismatch; mismatches are
        returned as ``VerificationResult(valid=False, reason=...)``.
        Failures of the digest service itself propagate.
    """
    service = get_digest_service() if digest_service is None else digest_service
    _, recomputed = service.saidify(record.attributes(), DEFAULT_LABEL)
    computed = recomputed[DEFAULT_LABEL]

    if computed != record.digest:
        log.warning(
            "SAID mismatch for %s: stored=%s computed=%s",
            record.variant.value,
            record.digest,
            computed,
        )
        return VerificationResult(
            valid=False,
            variant=record.variant,
            digest=record.digest,
            computed_digest=computed,
            reason="stored SAID does not match attribute content",
        )

    return VerificationResult(
        valid=True,
        variant=record.variant,
        digest=record.digest,
        computed_digest=computed,
    )


def parse_credential_data(
    variant: CredentialVariant | str,
    raw: Mapping[str, Any],
    *,
    digest_service: DigestService | None = None,
) -> _CredentialData:
    """Parse a serialized attribute block as a record of *variant*.

    Raises
    ------
    ValueError
        If *variant* is not a known credential variant.
    CredentialDataError
        If the block's labels do not match the variant's schema.
    SAIDVerificationError
        If the stored SAID does not match the block's content.
    """
    cls = CREDENTIAL_TYPES[CredentialVariant(variant)]
    return cls.from_attributes(raw, digest_service=digest_service)
