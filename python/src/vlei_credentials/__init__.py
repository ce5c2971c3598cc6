# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""vlei-credentials: self-addressing attribute blocks for vLEI credentials.

Quickstart
----------
>>> from vlei_credentials import LegalEntityCredentialData
>>> data = LegalEntityCredentialData(
...     issuee="EAbc123",
...     timestamp="2024-01-01T00:00:00.000000+00:00",
...     lei="254900OPPU84GM83MG36",
... )
>>> data.digest[:1], len(data.digest)
('E', 44)

To check a block received from elsewhere:

>>> from vlei_credentials import parse_credential_data, verify_credential_data
>>> record = parse_credential_data("legal-entity", data.attributes())
>>> verify_credential_data(record).valid
True
"""

from .client import HttpDigestService
from .config import get_digest_service, reset_digest_service, set_digest_service
from .credential import (
    CREDENTIAL_TYPES,
    EngagementContextRoleAuthorizationCredentialData,
    EngagementContextRoleAuthorizationCredentialDataArgs,
    EngagementContextRoleCredentialData,
    EngagementContextRoleCredentialDataArgs,
    LegalEntityCredentialData,
    LegalEntityCredentialDataArgs,
    OfficialOrganizationalRoleAuthorizationCredentialData,
    OfficialOrganizationalRoleAuthorizationCredentialDataArgs,
    OfficialOrganizationalRoleCredentialData,
    OfficialOrganizationalRoleCredentialDataArgs,
)
from .said import (
    Blake3Saider,
    DigestService,
    format_timestamp,
    generate_nonce,
    verify_said,
)
from .types import (
    AID,
    SAID,
    CredentialDataError,
    CredentialSchema,
    CredentialVariant,
    DigestServiceError,
    SAIDComputationError,
    SAIDVerificationError,
    VerificationResult,
)
from .verification import parse_credential_data, verify_credential_data

__all__ = [
    # Credential attribute blocks
    "LegalEntityCredentialData",
    "EngagementContextRoleCredentialData",
    "EngagementContextRoleAuthorizationCredentialData",
    "OfficialOrganizationalRoleCredentialData",
    "OfficialOrganizationalRoleAuthorizationCredentialData",
    "CREDENTIAL_TYPES",
    # Construction arguments
    "LegalEntityCredentialDataArgs",
    "EngagementContextRoleCredentialDataArgs",
    "EngagementContextRoleAuthorizationCredentialDataArgs",
    "OfficialOrganizationalRoleCredentialDataArgs",
    "OfficialOrganizationalRoleAuthorizationCredentialDataArgs",
    # Core types
    "AID",
    "SAID",
    "CredentialSchema",
    "CredentialVariant",
    "VerificationResult",
    # Digest services
    "DigestService",
    "Blake3Saider",
    "HttpDigestService",
    "get_digest_service",
    "set_digest_service",
    "reset_digest_service",
    # Helpers
    "verify_said",
    "generate_nonce",
    "format_timestamp",
    "verify_credential_data",
    "parse_credential_data",
    # Exceptions
    "CredentialDataError",
    "DigestServiceError",
    "SAIDComputationError",
    "SAIDVerificationError",
]
