# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""vlei-credentials configuration.

Defaults may be overridden via environment variables, read once at import.
"""

from __future__ import annotations

import logging
import os

from .client import HttpDigestService
from .said import Blake3Saider, DigestService

log = logging.getLogger(__name__)

# Empty means SAIDs are computed locally with Blake3Saider.
DIGEST_SERVICE_URL: str = os.getenv("VLEI_DIGEST_SERVICE_URL", "").strip()
DIGEST_SERVICE_TIMEOUT: float = float(os.getenv("VLEI_DIGEST_SERVICE_TIMEOUT", "10"))


# Module-level singleton
_digest_service: DigestService | None = None


def get_digest_service() -> DigestService:
    """Get or create the process-wide digest service."""
    global _digest_service
    if _digest_service is None:
        if DIGEST_SERVICE_URL:
            log.info("Using remote digest service at %s", DIGEST_SERVICE_URL)
            _digest_service = HttpDigestService(
                DIGEST_SERVICE_URL, timeout=DIGEST_SERVICE_TIMEOUT
            )
        else:
            _digest_service = Blake3Saider()
    return _digest_service


def set_digest_service(service: DigestService) -> None:
    """Install *service* as the process-wide digest service."""
    global _digest_service
    _digest_service = service


def reset_digest_service() -> None:
    """Reset the singleton (for testing)."""
    global _digest_service
    _digest_service = None
