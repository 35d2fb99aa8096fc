"""End-to-end command scenarios driven through a connection."""

import pytest

from fakedis import CommandError, DataStore, FakeConnection


@pytest.fixture
def timed(clock) -> FakeConnection:
    """A connection whose store runs on the fake clock."""
    return FakeConnection(store=DataStore(clock=clock))


def test_set_get_without_expiry(conn: FakeConnection) -> None:
    assert conn.call(["SET", "a", "1"]) == "OK"
    assert conn.call(["GET", "a"]) == "1"
    assert conn.call(["TTL", "a"]) == -1


def test_key_expires_after_deadline(timed: FakeConnection, clock) -> None:
    assert timed.call(["SET", "a", "1", "EX", "5"]) == "OK"
    assert 0 <= timed.call(["TTL", "a"]) <= 5

    clock.advance(6)
    assert timed.call(["GET", "a"]) is None
    assert timed.call(["EXISTS", "a"]) == 0


def test_ttl_never_increases(timed: FakeConnection, clock) -> None:
    timed.call(["SET", "a", "1", "EX", "5"])
    previous = timed.call(["TTL", "a"])
    for _ in range(6):
        clock.advance(1)
        current = timed.call(["TTL", "a"])
        assert current <= previous
        previous = current
    assert previous == -2


def test_lrem_from_head(conn: FakeConnection) -> None:
    conn.call(["RPUSH", "l", "a", "b", "a", "c", "a"])
    assert conn.call(["LREM", "l", "2", "a"]) == 2
    assert conn.call(["LRANGE", "l", "0", "-1"]) == ["b", "c", "a"]


def test_zrange_withscores(conn: FakeConnection) -> None:
    conn.call(["ZADD", "z", "3", "c", "1", "a", "2", "b"])
    assert conn.call(["ZRANGE", "z", "0", "-1", "WITHSCORES"]) == ["a", 1.0, "b", 2.0, "c", 3.0]


def test_unknown_command(conn: FakeConnection) -> None:
    with pytest.raises(CommandError, match="unknown command"):
        conn.call(["UNKNOWN_CMD"])


def test_pipeline_order(conn: FakeConnection) -> None:
    replies = conn.call_pipelined([
        ["SET", "k1", "v1"],
        ["SET", "k2", "v2"],
        ["GET", "k1"],
        ["GET", "k2"],
    ])
    assert replies == ["OK", "OK", "v1", "v2"]

    # Both writes landed in the one shared store
    assert FakeConnection().call(["MGET", "k1", "k2"]) == ["v1", "v2"]
