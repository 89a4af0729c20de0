"""Tests for the repository state application service."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from fakes import FakeClock, FakeGateway, ManualTimers, make_status
from gitnova.application.services.state_service import (
    RepositoryStateService,
    StateServices,
    build_state_services,
)
from gitnova.features.events import CommitCreated, EventHub, RepositoryDetected
from gitnova.features.state import RefreshDomain
from gitnova.shared import StatusSnapshot


@pytest.fixture
def services(gateway: FakeGateway, hub: EventHub, clock: FakeClock, timers: ManualTimers) -> StateServices:
    return build_state_services(
        gateway=gateway, hub=hub, auto_refresh=True, clock=clock, timer_factory=timers
    )


@pytest.fixture
def service(services: StateServices) -> RepositoryStateService:
    return RepositoryStateService(services_factory=lambda: services)


def test_build_shares_one_hub_and_gateway(services: StateServices, hub: EventHub, gateway: FakeGateway) -> None:
    assert services.hub is hub
    assert services.gateway is gateway
    assert hub.has_listeners(RepositoryDetected)
    assert hub.has_listeners(CommitCreated)


def test_build_without_auto_refresh_only_follows_switches(gateway: FakeGateway) -> None:
    built = build_state_services(gateway=gateway, auto_refresh=False)

    assert built.hub.has_listeners(RepositoryDetected)
    assert not built.hub.has_listeners(CommitCreated)


def test_switch_without_auto_refresh_drops_previous_status(gateway: FakeGateway) -> None:
    built = build_state_services(gateway=gateway, auto_refresh=False)
    service = RepositoryStateService(services_factory=lambda: built)

    async def scenario() -> StatusSnapshot:
        _ = await service.open(Path("/repos/a"))
        _ = await service.status()
        gateway.status = make_status((" M", "repo_b_file.py"))
        _ = await service.open(Path("/repos/b"))
        return await service.status()

    status = asyncio.run(scenario())

    assert [f.path for f in status.files] == ["repo_b_file.py"]
    assert gateway.calls["get_status"] == 2


def test_open_refreshes_requested_domains(service: RepositoryStateService, gateway: FakeGateway) -> None:
    state = asyncio.run(service.open(Path("/repos/demo"), RefreshDomain.STATUS, RefreshDomain.REMOTES))

    assert state.name == "demo"
    assert state.status == gateway.status
    assert state.remotes == tuple(gateway.remotes)
    assert gateway.calls["get_local_branches"] == 0


def test_branches_read_through_cache(service: RepositoryStateService, gateway: FakeGateway) -> None:
    async def scenario() -> None:
        _ = await service.open(Path("/repos/demo"))
        local, remote = await service.branches()
        assert [b.name for b in local] == ["main", "feature"]
        assert [b.full_name for b in remote] == ["origin/main"]
        _ = await service.branches()

    asyncio.run(scenario())

    assert gateway.calls["get_local_branches"] == 1


def test_remotes_read_through_cache(service: RepositoryStateService, gateway: FakeGateway) -> None:
    async def scenario() -> None:
        _ = await service.open(Path("/repos/demo"))
        assert [r.name for r in await service.remotes()] == ["origin"]
        _ = await service.remotes()

    asyncio.run(scenario())

    assert gateway.calls["get_remotes"] == 1


def test_failed_remotes_refresh_returns_empty_listing(
    service: RepositoryStateService, gateway: FakeGateway
) -> None:
    gateway.failures["get_remotes"] = RuntimeError("bad config")

    async def scenario() -> None:
        _ = await service.open(Path("/repos/demo"))
        assert await service.remotes() == ()

    asyncio.run(scenario())


def test_stage_patches_view_without_second_status_read(
    service: RepositoryStateService, gateway: FakeGateway
) -> None:
    gateway.status = make_status((" M", "a.ts"), ("??", "b.ts"))

    async def scenario() -> None:
        _ = await service.open(Path("/repos/demo"))
        status = await service.stage(["a.ts", "b.ts"])
        assert [f.path for f in status.staged] == ["a.ts", "b.ts"]
        assert status.unstaged == ()
        assert status.untracked == ()

    asyncio.run(scenario())

    assert gateway.staged_paths == ["a.ts", "b.ts"]
    assert gateway.calls["get_status"] == 1


def test_staging_a_directory_refetches_status(service: RepositoryStateService, gateway: FakeGateway) -> None:
    gateway.status = make_status((" M", "src/app.py"), (" M", "src/lib.py"))

    async def scenario() -> StatusSnapshot:
        _ = await service.open(Path("/repos/demo"))
        _ = await service.status()
        gateway.status = make_status(("M ", "src/app.py"), ("M ", "src/lib.py"))
        return await service.stage(["src"])

    status = asyncio.run(scenario())

    assert gateway.staged_paths == ["src"]
    assert [f.path for f in status.staged] == ["src/app.py", "src/lib.py"]
    assert status.unstaged == ()
    assert gateway.calls["get_status"] == 2


def test_unstage_patches_view(service: RepositoryStateService, gateway: FakeGateway) -> None:
    gateway.status = make_status(("M ", "a.ts"), ("A ", "new.ts"))

    async def scenario() -> None:
        _ = await service.open(Path("/repos/demo"))
        status = await service.unstage(["a.ts", "new.ts"])
        assert status.staged == ()
        assert [f.path for f in status.unstaged] == ["a.ts"]
        assert [f.path for f in status.untracked] == ["new.ts"]

    asyncio.run(scenario())

    assert gateway.unstaged_paths == ["a.ts", "new.ts"]


def test_failed_stage_leaves_view_untouched(service: RepositoryStateService, gateway: FakeGateway) -> None:
    gateway.status = make_status((" M", "a.ts"))
    gateway.failures["stage"] = RuntimeError("index.lock exists")

    async def scenario() -> None:
        _ = await service.open(Path("/repos/demo"))
        with pytest.raises(RuntimeError):
            _ = await service.stage(["a.ts"])
        status = await service.status()
        assert [f.path for f in status.unstaged] == ["a.ts"]

    asyncio.run(scenario())


def test_repository_switch_resets_changes_view(
    service: RepositoryStateService, services: StateServices
) -> None:
    async def scenario() -> None:
        _ = await service.open(Path("/repos/one"))
        _ = await service.status()
        assert services.changes.peek() is not None
        _ = await service.open(Path("/repos/two"))
        assert services.changes.peek() is None

    asyncio.run(scenario())


def test_close_disposes_everything(
    service: RepositoryStateService, services: StateServices, hub: EventHub
) -> None:
    _ = asyncio.run(service.open(Path("/repos/demo")))

    service.close()

    assert hub.active_tags() == []
    assert services.manager.get_active_repository() is None
