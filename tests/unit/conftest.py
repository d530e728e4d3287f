"""Shared test fixtures."""

import pytest

from braindown.core.vault.activation import VaultActivationResolver
from braindown.core.vault.store import VaultConfigStore
from braindown.models.document import Document
from braindown.models.vault import WorkspaceConfig
from tests.unit.fakes import FakeConfigStorage, FakeFilesystem
from tests.unit.samples import BETA_FILES, VAULT_A, VAULT_B, VAULT_C, make_document


@pytest.fixture
def document() -> Document:
    return make_document()


@pytest.fixture
def fs() -> FakeFilesystem:
    fake = FakeFilesystem()
    fake.files[VAULT_B.path] = list(BETA_FILES)
    return fake


@pytest.fixture
def storage() -> FakeConfigStorage:
    return FakeConfigStorage(WorkspaceConfig(vaults=(VAULT_A, VAULT_B, VAULT_C)))


@pytest.fixture
def store(storage: FakeConfigStorage, fs: FakeFilesystem) -> VaultConfigStore:
    return VaultConfigStore(storage, VaultActivationResolver(fs, fs))
