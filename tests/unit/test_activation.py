"""Tests for vault activation with ordered fallback."""

import pytest

from braindown.core.vault.activation import NO_VAULTS, VaultActivationResolver
from braindown.errors import AllVaultsInaccessibleError
from tests.unit.fakes import FakeFilesystem
from tests.unit.samples import BETA_FILES, VAULT_A, VAULT_B, VAULT_C


async def test_falls_back_to_first_accessible_vault(fs: FakeFilesystem) -> None:
    fs.inaccessible.add(VAULT_A.path)
    resolver = VaultActivationResolver(fs, fs)

    result = await resolver.resolve([VAULT_A, VAULT_B, VAULT_C])

    assert result.vault == VAULT_B
    assert result.fallback_used is True
    assert result.fallback_vault_name == "Beta"
    assert result.files == tuple(BETA_FILES)


async def test_stops_probing_after_first_success(fs: FakeFilesystem) -> None:
    fs.inaccessible.add(VAULT_A.path)
    resolver = VaultActivationResolver(fs, fs)

    await resolver.resolve([VAULT_A, VAULT_B, VAULT_C])

    assert fs.checked == [VAULT_A.path, VAULT_B.path]
    assert fs.listed == [VAULT_B.path]


async def test_default_vault_wins_without_fallback(fs: FakeFilesystem) -> None:
    resolver = VaultActivationResolver(fs, fs)

    result = await resolver.resolve([VAULT_A, VAULT_B])

    assert result.vault == VAULT_A
    assert result.index == 0
    assert result.fallback_used is False
    assert result.fallback_vault_name is None


async def test_empty_list_is_not_an_error(fs: FakeFilesystem) -> None:
    resolver = VaultActivationResolver(fs, fs)

    assert await resolver.resolve([]) is NO_VAULTS
    assert fs.checked == []


async def test_all_inaccessible_raises(fs: FakeFilesystem) -> None:
    fs.inaccessible.update({VAULT_A.path, VAULT_B.path})
    resolver = VaultActivationResolver(fs, fs)

    with pytest.raises(AllVaultsInaccessibleError) as excinfo:
        await resolver.resolve([VAULT_A, VAULT_B])

    assert excinfo.value.paths == [VAULT_A.path, VAULT_B.path]
    assert fs.listed == []


async def test_listing_failure_still_activates(fs: FakeFilesystem) -> None:
    fs.broken_listings.add(VAULT_A.path)
    resolver = VaultActivationResolver(fs, fs)

    result = await resolver.resolve([VAULT_A])

    assert result.vault == VAULT_A
    assert result.files is None


async def test_check_that_raises_counts_as_inaccessible(fs: FakeFilesystem) -> None:
    def crash_on_alpha(path: str) -> None:
        if path == VAULT_A.path:
            msg = "checker crashed"
            raise RuntimeError(msg)

    fs.on_check = crash_on_alpha
    resolver = VaultActivationResolver(fs, fs)

    result = await resolver.resolve([VAULT_A, VAULT_B])

    assert result.vault == VAULT_B
    assert result.fallback_used is True


async def test_listing_that_raises_any_error_still_activates(fs: FakeFilesystem) -> None:
    fs.broken_listings.add(VAULT_A.path)
    fs.listing_error = RuntimeError
    resolver = VaultActivationResolver(fs, fs)

    result = await resolver.resolve([VAULT_A])

    assert result.vault == VAULT_A
    assert result.files is None
