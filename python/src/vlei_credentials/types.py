# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Shared value types for the vlei-credentials Python SDK."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Autonomic Identifier of an issuer or issuee. Opaque to this package.
AID = str

# Self-Addressing Identifier: a CESR-encoded digest embedded in the record
# it was computed over.
SAID = str


class CredentialVariant(str, Enum):
    """The five credential attribute blocks of the vLEI trust chain."""

    LE = "legal-entity"
    ECR = "engagement-context-role"
    ECR_AUTH = "ecr-authorization"
    OOR = "official-organizational-role"
    OOR_AUTH = "oor-authorization"


@dataclass(frozen=True)
class CredentialSchema:
    """Upstream vLEI ACDC schema a credential variant mirrors."""

    said: SAID
    title: str
    url: str


@dataclass(frozen=True)
class VerificationResult:
    """Result returned by verify_credential_data."""

    valid: bool
    variant: CredentialVariant
    digest: SAID
    computed_digest: SAID
    # Populated when valid is False.
    reason: str | None = None


class CredentialDataError(ValueError):
    """Raised when credential attributes are malformed."""


class SAIDComputationError(Exception):
    """Raised when a mapping cannot be canonicalized and digested."""


class SAIDVerificationError(Exception):
    """Raised when a stored SAID does not match the content it labels."""


class DigestServiceError(Exception):
    """Raised when the remote digest service fails or returns a non-2xx response."""

    def __init__(self, status_code: int, endpoint: str, message: str) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(
            f"DigestService [{status_code}] {endpoint}: {message}"
        )
