# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""vLEI credential attribute blocks and their SAID derivation.

Each class in this module is the attribute block (``a`` section) of one vLEI
ACDC credential. A block carries a ``d`` field holding the SAID of the block
itself: the record assembles its schema-ordered mapping with ``d`` left
empty, submits it to a :class:`~said.DigestService`, and keeps the SAID the
service returns. The digest is fixed last, after every other attribute.

Field labels and their order are schema contracts, declared once per class in
``_LABELS`` as ``(label, attribute)`` pairs. They mirror the upstream vLEI
schema documents and must not be reordered or renamed: a verifier recomputing
the SAID from the published schema would get a different value.

Note the authorization blocks. The ECR authorization schema carries the
requested engagement context role under ``officialOrganizationalRole``, the
same label the OOR authorization uses. The record still exposes it as
``engagement_context_role``.

Records are frozen. ``dataclasses.replace`` yields a new record with a
freshly computed digest; the digest itself can never be passed in.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import InitVar, dataclass, field, fields
from typing import Any, ClassVar, TypeVar

from .config import get_digest_service
from .said import DEFAULT_LABEL, DigestService
from .types import (
    AID,
    SAID,
    CredentialDataError,
    CredentialSchema,
    CredentialVariant,
    SAIDVerificationError,
)

_SCHEMA_BASE_URL = "https://raw.githubusercontent.com/WebOfTrust/vLEI/dev/schema/acdc"

LEGAL_ENTITY_SCHEMA = CredentialSchema(
    said="ENPXp1vQzRF6JwIuS-mp2U8Uf1MoADoP_GqQ62VsDZWY",
    title="Legal Entity vLEI Credential",
    url=f"{_SCHEMA_BASE_URL}/legal-entity-vLEI-credential.json",
)
ECR_SCHEMA = CredentialSchema(
    said="EEy9PkikFcANV1l7EHukCeXqrzT1hNZjGlUk7wuMO5jw",
    title="Legal Entity Engagement Context Role vLEI Credential",
    url=f"{_SCHEMA_BASE_URL}/legal-entity-engagement-context-role-vLEI-credential.json",
)
ECR_AUTH_SCHEMA = CredentialSchema(
    said="EH6ekLjSr8V32WyFbGe1zXjTzFs9PkTYmupJ9H65O14g",
    title="ECR Authorization vLEI Credential",
    url=f"{_SCHEMA_BASE_URL}/ecr-authorization-vlei-credential.json",
)
OOR_SCHEMA = CredentialSchema(
    said="EBNaNu-M9P5cgrnfl2Fvymy4E_jvxxyjb70PRtiANlJy",
    title="Legal Entity Official Organizational Role vLEI Credential",
    url=f"{_SCHEMA_BASE_URL}/legal-entity-official-organizational-role-vLEI-credential.json",
)
OOR_AUTH_SCHEMA = CredentialSchema(
    said="EKA57bKBKxr_kN7iN5i7lMUxpMG-s19dRcmov1iDxz-E",
    title="OOR Authorization vLEI Credential",
    url=f"{_SCHEMA_BASE_URL}/oor-authorization-vlei-credential.json",
)


# ------------------------------------------------------------------
# Construction arguments
# ------------------------------------------------------------------


@dataclass(frozen=True)
class LegalEntityCredentialDataArgs:
    """Parameters for :class:`LegalEntityCredentialData`."""

    issuee: AID
    timestamp: str
    lei: str


@dataclass(frozen=True)
class EngagementContextRoleCredentialDataArgs:
    """Parameters for :class:`EngagementContextRoleCredentialData`."""

    nonce: str
    issuee: AID
    timestamp: str
    lei: str
    person_legal_name: str
    engagement_context_role: str


@dataclass(frozen=True)
class EngagementContextRoleAuthorizationCredentialDataArgs:
    """Parameters for :class:`EngagementContextRoleAuthorizationCredentialData`."""

    qvi_aid: AID
    timestamp: str
    issuee: AID
    lei: str
    person_legal_name: str
    engagement_context_role: str


@dataclass(frozen=True)
class OfficialOrganizationalRoleCredentialDataArgs:
    """Parameters for :class:`OfficialOrganizationalRoleCredentialData`."""

    nonce: str
    issuee: AID
    timestamp: str
    lei: str
    person_legal_name: str
    official_organizational_role: str


@dataclass(frozen=True)
class OfficialOrganizationalRoleAuthorizationCredentialDataArgs:
    """Parameters for :class:`OfficialOrganizationalRoleAuthorizationCredentialData`."""

    qvi_aid: AID
    timestamp: str
    issuee: AID
    lei: str
    person_legal_name: str
    official_organizational_role: str


# ------------------------------------------------------------------
# Shared derivation
# ------------------------------------------------------------------


_T = TypeVar("_T", bound="_CredentialData")


class _CredentialData:
    """Behaviour shared by every attribute block.

    Subclasses are frozen dataclasses declaring ``digest`` as a non-init
    field, one field per schema attribute, and a trailing
    ``digest_service`` init-only argument.
    """

    variant: ClassVar[CredentialVariant]
    schema: ClassVar[CredentialSchema]
    args_type: ClassVar[type]
    _LABELS: ClassVar[tuple[tuple[str, str], ...]]

    digest: SAID

    def __post_init__(self, digest_service: DigestService | None) -> None:
        for label, attr in self._LABELS:
            value = getattr(self, attr)
            if not isinstance(value, str):
                raise CredentialDataError(
                    f"{type(self).__name__}: {attr!r} ({label}) must be a string, "
                    f"got {type(value).__name__}"
                )

        service = get_digest_service() if digest_service is None else digest_service
        _, completed = service.saidify(self._block(""), DEFAULT_LABEL)
        object.__setattr__(self, "digest", completed[DEFAULT_LABEL])

    @classmethod
    def create(
        cls: type[_T], args: Any, *, digest_service: DigestService | None = None
    ) -> _T:
        """Build a record from its ``...Args`` parameter object.

        Raises
        ------
        TypeError
            If *args* is not this variant's parameter type.
        CredentialDataError
            If any argument is not a string.
        """
        if not isinstance(args, cls.args_type):
            raise TypeError(
                f"{cls.__name__}.create: expected {cls.args_type.__name__}, "
                f"got {type(args).__name__}"
            )
        kwargs = {f.name: getattr(args, f.name) for f in fields(args)}
        return cls(**kwargs, digest_service=digest_service)

    @classmethod
    def schema_fields(cls) -> tuple[str, ...]:
        """Return the schema labels of this block in canonical order."""
        return (DEFAULT_LABEL,) + tuple(label for label, _ in cls._LABELS)

    @classmethod
    def from_attributes(
        cls: type[_T],
        raw: Mapping[str, Any],
        *,
        digest_service: DigestService | None = None,
    ) -> _T:
        """Rebuild a record from a serialized attribute block.

        The block must carry exactly the schema's labels. The digest is
        recomputed from the other attributes and compared with ``raw["d"]``.

        Raises
        ------
        CredentialDataError
            If *raw* is not a mapping, has missing or unexpected labels, or
            holds non-string values.
        SAIDVerificationError
            If the recomputed digest differs from the stored one.
        """
        if not isinstance(raw, Mapping):
            raise CredentialDataError(
                f"{cls.__name__}.from_attributes: expected mapping, "
                f"got {type(raw).__name__}"
            )

        expected = set(cls.schema_fields())
        missing = expected - raw.keys()
        unexpected = raw.keys() - expected
        if missing or unexpected:
            raise CredentialDataError(
                f"{cls.__name__}.from_attributes: missing labels {sorted(missing)}, "
                f"unexpected labels {sorted(unexpected)}"
            )

        record = cls(
            **{attr: raw[label] for label, attr in cls._LABELS},
            digest_service=digest_service,
        )
        if record.digest != raw[DEFAULT_LABEL]:
            raise SAIDVerificationError(
                f"{cls.__name__}: stored SAID {raw[DEFAULT_LABEL]!r} does not match "
                f"computed SAID {record.digest!r}"
            )
        return record

    def attributes(self) -> dict[str, str]:
        """Return the attribute block as it is serialized, digest included."""
        return self._block(self.digest)

    def _block(self, digest: str) -> dict[str, str]:
        block = {DEFAULT_LABEL: digest}
        for label, attr in self._LABELS:
            block[label] = getattr(self, attr)
        return block


# ------------------------------------------------------------------
# Credential variants
# ------------------------------------------------------------------


@dataclass(frozen=True)
class LegalEntityCredentialData(_CredentialData):
    """Attribute block of the Legal Entity vLEI credential.

    Base identity assertion for a legal entity, issued by a QVI.

    Attributes
    ----------
    digest:
        SAID of this block (``d``).
    issuee:
        AID of the legal entity (``i``).
    timestamp:
        Issuance date-time (``dt``), carried verbatim.
    lei:
        ISO 17442 Legal Entity Identifier (``LEI``).
    """

    variant = CredentialVariant.LE
    schema = LEGAL_ENTITY_SCHEMA
    args_type = LegalEntityCredentialDataArgs
    _LABELS = (
        ("i", "issuee"),
        ("dt", "timestamp"),
        ("LEI", "lei"),
    )

    digest: SAID = field(init=False)
    issuee: AID
    timestamp: str
    lei: str
    digest_service: InitVar[DigestService | None] = None


@dataclass(frozen=True)
class EngagementContextRoleCredentialData(_CredentialData):
    """Attribute block of the Engagement Context Role (ECR) vLEI credential.

    Asserts a person's contextual role at a legal entity, e.g.
    ``"Head of Standards"``. The ``u`` nonce salts the block so that its SAID
    cannot be guessed from the public attributes.

    Attributes
    ----------
    digest:
        SAID of this block (``d``).
    nonce:
        Salty nonce (``u``); see :func:`~said.generate_nonce`.
    issuee:
        AID of the person (``i``).
    timestamp:
        Issuance date-time (``dt``).
    lei:
        LEI of the legal entity (``LEI``).
    person_legal_name:
        Recipient name as provided during identity assurance.
    engagement_context_role:
        Role description.
    """

    variant = CredentialVariant.ECR
    schema = ECR_SCHEMA
    args_type = EngagementContextRoleCredentialDataArgs
    _LABELS = (
        ("u", "nonce"),
        ("i", "issuee"),
        ("dt", "timestamp"),
        ("LEI", "lei"),
        ("personLegalName", "person_legal_name"),
        ("engagementContextRole", "engagement_context_role"),
    )

    digest: SAID = field(init=False)
    nonce: str
    issuee: AID
    timestamp: str
    lei: str
    person_legal_name: str
    engagement_context_role: str
    digest_service: InitVar[DigestService | None] = None


@dataclass(frozen=True)
class EngagementContextRoleAuthorizationCredentialData(_CredentialData):
    """Attribute block of the ECR Authorization vLEI credential.

    Issued by a legal entity to its QVI, authorizing issuance of an ECR
    credential. Carries no nonce.

    Attributes
    ----------
    digest:
        SAID of this block (``d``).
    qvi_aid:
        AID of the QVI asked to issue the ECR credential (``i``).
    timestamp:
        Issuance date-time (``dt``).
    issuee:
        AID of the intended ECR recipient (``AID``).
    lei:
        LEI of the requesting legal entity (``LEI``).
    person_legal_name:
        Requested recipient name.
    engagement_context_role:
        Requested role, digested under ``officialOrganizationalRole``.
    """

    variant = CredentialVariant.ECR_AUTH
    schema = ECR_AUTH_SCHEMA
    args_type = EngagementContextRoleAuthorizationCredentialDataArgs
    _LABELS = (
        ("i", "qvi_aid"),
        ("dt", "timestamp"),
        ("AID", "issuee"),
        ("LEI", "lei"),
        ("personLegalName", "person_legal_name"),
        # Upstream schema label; not engagementContextRole.
        ("officialOrganizationalRole", "engagement_context_role"),
    )

    digest: SAID = field(init=False)
    qvi_aid: AID
    timestamp: str
    issuee: AID
    lei: str
    person_legal_name: str
    engagement_context_role: str
    digest_service: InitVar[DigestService | None] = None


@dataclass(frozen=True)
class OfficialOrganizationalRoleCredentialData(_CredentialData):
    """Attribute block of the Official Organizational Role (OOR) vLEI credential.

    Asserts a person's ISO 5009 official role at a legal entity, e.g.
    ``"Chairman"``.
    """

    variant = CredentialVariant.OOR
    schema = OOR_SCHEMA
    args_type = OfficialOrganizationalRoleCredentialDataArgs
    _LABELS = (
        ("u", "nonce"),
        ("i", "issuee"),
        ("dt", "timestamp"),
        ("LEI", "lei"),
        ("personLegalName", "person_legal_name"),
        ("officialOrganizationalRole", "official_organizational_role"),
    )

    digest: SAID = field(init=False)
    nonce: str
    issuee: AID
    timestamp: str
    lei: str
    person_legal_name: str
    official_organizational_role: str
    digest_service: InitVar[DigestService | None] = None


@dataclass(frozen=True)
class OfficialOrganizationalRoleAuthorizationCredentialData(_CredentialData):
    """Attribute block of the OOR Authorization vLEI credential."""

    variant = CredentialVariant.OOR_AUTH
    schema = OOR_AUTH_SCHEMA
    args_type = OfficialOrganizationalRoleAuthorizationCredentialDataArgs
    _LABELS = (
        ("i", "qvi_aid"),
        ("dt", "timestamp"),
        ("AID", "issuee"),
        ("LEI", "lei"),
        ("personLegalName", "person_legal_name"),
        ("officialOrganizationalRole", "official_organizational_role"),
    )

    digest: SAID = field(init=False)
    qvi_aid: AID
    timestamp: str
    issuee: AID
    lei: str
    person_legal_name: str
    official_organizational_role: str
    digest_service: InitVar[DigestService | None] = None


CREDENTIAL_TYPES: dict[CredentialVariant, type[_CredentialData]] = {
    cls.variant: cls
    for cls in (
        LegalEntityCredentialData,
        EngagementContextRoleCredentialData,
        EngagementContextRoleAuthorizationCredentialData,
        OfficialOrganizationalRoleCredentialData,
        OfficialOrganizationalRoleAuthorizationCredentialData,
    )
}
