"""Shared fixtures for the vlei-credentials test suite."""

import hashlib
import json

import pytest

from vlei_credentials import config
from vlei_credentials.credential import (
    EngagementContextRoleAuthorizationCredentialDataArgs,
    EngagementContextRoleCredentialDataArgs,
    LegalEntityCredentialDataArgs,
    OfficialOrganizationalRoleAuthorizationCredentialDataArgs,
    OfficialOrganizationalRoleCredentialDataArgs,
)

QVI_AID = "EHMnCf8_nIemuPx-cUHaDQq8zSnQIFAurdEpwHpNbnvX"
LE_AID = "EAbc123"
PERSON_AID = "EKE7b7owCx8EvJTBHSc6ZFbp5o-TTFhSpYHpT9WqNd3p"
LEI = "254900OPPU84GM83MG36"
TIMESTAMP = "2024-01-01T00:00:00.000000+00:00"
NONCE = "0AAQbn4jrxoXgNcPMxmM9xfx"


class RecordingDigestService:
    """Fake digest service: sha256 over insertion-order JSON, records every call."""

    def __init__(self):
        self.calls = []

    def saidify(self, data, label="d"):
        self.calls.append((dict(data), label))
        completed = dict(data)
        completed[label] = "#" * 44
        raw = json.dumps(completed, separators=(",", ":")).encode("utf-8")
        completed[label] = "E" + hashlib.sha256(raw).hexdigest()[:43]
        return list(completed), completed

    @property
    def last_submitted(self):
        return self.calls[-1][0]


class FailingDigestService:
    """Fake digest service that always raises the given exception."""

    def __init__(self, exc):
        self.exc = exc
        self.calls = 0

    def saidify(self, data, label="d"):
        self.calls += 1
        raise self.exc


@pytest.fixture(autouse=True)
def _local_digest_service(monkeypatch):
    """Every test starts with the local Blake3 saider as the default service."""
    monkeypatch.setattr(config, "DIGEST_SERVICE_URL", "")
    config.reset_digest_service()
    yield
    config.reset_digest_service()


@pytest.fixture
def recording_service():
    return RecordingDigestService()


@pytest.fixture
def le_args():
    return LegalEntityCredentialDataArgs(issuee=LE_AID, timestamp=TIMESTAMP, lei=LEI)


@pytest.fixture
def ecr_args():
    return EngagementContextRoleCredentialDataArgs(
        nonce=NONCE,
        issuee=PERSON_AID,
        timestamp=TIMESTAMP,
        lei=LEI,
        person_legal_name="Jane Doe",
        engagement_context_role="Head of Standards",
    )


@pytest.fixture
def ecr_auth_args():
    return EngagementContextRoleAuthorizationCredentialDataArgs(
        qvi_aid=QVI_AID,
        timestamp=TIMESTAMP,
        issuee=PERSON_AID,
        lei=LEI,
        person_legal_name="Jane Doe",
        engagement_context_role="Head of Standards",
    )


@pytest.fixture
def oor_args():
    return OfficialOrganizationalRoleCredentialDataArgs(
        nonce=NONCE,
        issuee=PERSON_AID,
        timestamp=TIMESTAMP,
        lei=LEI,
        person_legal_name="John Smith",
        official_organizational_role="Chairman",
    )


@pytest.fixture
def oor_auth_args():
    return OfficialOrganizationalRoleAuthorizationCredentialDataArgs(
        qvi_aid=QVI_AID,
        timestamp=TIMESTAMP,
        issuee=PERSON_AID,
        lei=LEI,
        person_legal_name="John Smith",
        official_organizational_role="Chairman",
    )
