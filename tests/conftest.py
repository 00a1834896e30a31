from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from checkstate.domain.model import FetchError, RemoteDocument, StoredRecord

BASE_YAML = """
kind: Dash0SyntheticCheck
metadata:
  name: test-check
spec:
  enabled: true
  plugin:
    kind: http
    spec:
      request:
        url: https://test.example.com
"""

YAML_WITH_METADATA_CHANGES = """
kind: Dash0SyntheticCheck
metadata:
  name: test-check
  createdAt: "2024-01-01T00:00:00Z"
  updatedAt: "2024-01-02T00:00:00Z"
  version: 2
spec:
  enabled: true
  plugin:
    kind: http
    spec:
      request:
        url: https://test.example.com
"""

YAML_WITH_SIGNIFICANT_CHANGES = """
kind: Dash0SyntheticCheck
metadata:
  name: test-check
spec:
  enabled: false
  plugin:
    kind: http
    spec:
      request:
        url: https://different.example.com
"""

# The API keeps permissions in a separate table and merges them into every read.
API_RESPONSE_WITH_PERMISSIONS = (
    '{"kind":"Dash0SyntheticCheck","metadata":{"annotations":{},"labels":'
    '{"dash0.com/dataset":"test-dataset","dash0.com/id":"test-uuid",'
    '"dash0.com/origin":"tf_test-origin","dash0.com/version":"1"},"name":"test-check"},'
    '"spec":{"enabled":true,"permissions":[{"actions":["synthetic_check:read",'
    '"synthetic_check:delete"],"role":"admin"},{"actions":["synthetic_check:read"],'
    '"role":"basic_member"}],"plugin":{"kind":"http","spec":{"request":'
    '{"url":"https://test.example.com"}}}}}'
)

INVALID_YAML = "invalid: : : yaml"


@dataclass(slots=True)
class FakeFetcher:
    """Fetch port double returning a canned document or raising a canned error."""

    document: str = ""
    error: FetchError | None = None
    calls: list[tuple[str, str]] = field(default_factory=list)

    def __call__(self, *, origin: str, dataset: str) -> RemoteDocument:
        self.calls.append((origin, dataset))
        if self.error is not None:
            raise self.error
        return RemoteDocument(origin=origin, dataset=dataset, document=self.document)


@pytest.fixture
def stored_record() -> StoredRecord:
    return StoredRecord(origin="test-origin", dataset="test-dataset", document=BASE_YAML)


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@dataclass(frozen=True, slots=True)
class CheckDocuments:
    base: str = BASE_YAML
    metadata_changes: str = YAML_WITH_METADATA_CHANGES
    significant_changes: str = YAML_WITH_SIGNIFICANT_CHANGES
    api_with_permissions: str = API_RESPONSE_WITH_PERMISSIONS
    invalid: str = INVALID_YAML


@pytest.fixture(scope="session")
def docs() -> CheckDocuments:
    return CheckDocuments()
