"""One-Time Token Registry — tests for issue/verify/consume and the per-user guard.

Tests cover:
    - verify() matches only the current token of the same identity
    - A second issue() revokes the first token
    - consume() removes the token and is idempotent
    - guard() serializes the same identity but not different identities
    - guard() entries are dropped once nobody holds or awaits them
"""

import asyncio

import pytest

from board.core.one_time_tokens import OneTimeTokenRegistry


def test_issue_returns_hex_token_of_configured_length():
    token = OneTimeTokenRegistry(token_bytes=16).issue("alice")
    assert len(token) == 32
    int(token, 16)


def test_verify_accepts_current_token():
    registry = OneTimeTokenRegistry()
    token = registry.issue("alice")
    assert registry.verify("alice", token)


def test_verify_does_not_consume():
    registry = OneTimeTokenRegistry()
    token = registry.issue("alice")
    registry.verify("alice", token)
    assert registry.verify("alice", token)


def test_verify_rejects_token_of_other_identity():
    registry = OneTimeTokenRegistry()
    alices = registry.issue("alice")
    registry.issue("bob")
    assert not registry.verify("bob", alices)


def test_verify_rejects_when_nothing_issued():
    assert not OneTimeTokenRegistry().verify("alice", "deadbeef")


@pytest.mark.parametrize("presented", ["", None])
def test_verify_rejects_empty_token(presented):
    registry = OneTimeTokenRegistry()
    registry.issue("alice")
    assert not registry.verify("alice", presented)


def test_verify_rejects_non_ascii_without_raising():
    registry = OneTimeTokenRegistry()
    registry.issue("alice")
    assert not registry.verify("alice", "トークン")


def test_second_issue_invalidates_first():
    registry = OneTimeTokenRegistry()
    first = registry.issue("alice")
    second = registry.issue("alice")
    assert first != second
    assert not registry.verify("alice", first)
    assert registry.verify("alice", second)
    assert len(registry) == 1


def test_consume_removes_token():
    registry = OneTimeTokenRegistry()
    token = registry.issue("alice")
    registry.consume("alice")
    assert not registry.verify("alice", token)
    assert "alice" not in registry


def test_consume_is_idempotent():
    registry = OneTimeTokenRegistry()
    registry.issue("alice")
    registry.consume("alice")
    registry.consume("alice")
    registry.consume("never-issued")
    assert len(registry) == 0


def test_consume_leaves_other_identities_alone():
    registry = OneTimeTokenRegistry()
    registry.issue("alice")
    bobs = registry.issue("bob")
    registry.consume("alice")
    assert registry.verify("bob", bobs)


def test_too_short_token_rejected():
    with pytest.raises(ValueError):
        OneTimeTokenRegistry(token_bytes=4)


async def test_guard_serializes_same_identity():
    registry = OneTimeTokenRegistry()
    events: list[str] = []

    async def hold(name: str):
        async with registry.guard("alice"):
            events.append(f"{name}-in")
            await asyncio.sleep(0.01)
            events.append(f"{name}-out")

    await asyncio.gather(hold("a"), hold("b"))
    assert events in (
        ["a-in", "a-out", "b-in", "b-out"],
        ["b-in", "b-out", "a-in", "a-out"],
    )


async def test_guard_does_not_block_other_identities():
    registry = OneTimeTokenRegistry()
    entered = asyncio.Event()

    async def alice():
        async with registry.guard("alice"):
            await asyncio.wait_for(entered.wait(), timeout=1)

    async def bob():
        async with registry.guard("bob"):
            entered.set()

    await asyncio.gather(alice(), bob())
    assert entered.is_set()


async def test_guard_entry_dropped_after_release():
    registry = OneTimeTokenRegistry()
    async with registry.guard("alice"):
        assert "alice" in registry._guards
    assert registry._guards == {}


async def test_guard_entry_dropped_after_error():
    registry = OneTimeTokenRegistry()
    with pytest.raises(RuntimeError):
        async with registry.guard("alice"):
            raise RuntimeError("write failed")
    assert registry._guards == {}


async def test_guard_entry_kept_while_waiter_pending():
    registry = OneTimeTokenRegistry()
    release = asyncio.Event()
    seen: list[int] = []

    async def first():
        async with registry.guard("alice"):
            await release.wait()

    async def second():
        async with registry.guard("alice"):
            seen.append(len(registry._guards))

    tasks = [asyncio.create_task(first()), asyncio.create_task(second())]
    await asyncio.sleep(0.01)
    assert registry._guards["alice"].holders == 2
    release.set()
    await asyncio.gather(*tasks)
    assert seen == [1]
    assert registry._guards == {}
