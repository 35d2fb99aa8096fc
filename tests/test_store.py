"""Unit tests for the DataStore core."""

import hashlib
from collections import deque

from fakedis.store import DataStore, DataType


class TestDataStoreBasics:
    """Test basic key-value operations."""

    def test_get_nonexistent_key_returns_none(self, store: DataStore) -> None:
        assert store.get("nonexistent") is None

    def test_set_and_get_round_trip(self, store: DataStore) -> None:
        store.set_string("foo", "bar")
        assert store.get("foo") == "bar"

    def test_set_overwrites_value_and_type(self, store: DataStore) -> None:
        store.set("key", deque(["a"]), DataType.LIST)
        store.set_string("key", "value")
        assert store.get("key") == "value"
        assert store.type("key") == DataType.STRING

    def test_delete_counts_only_existing_keys(self, store: DataStore) -> None:
        store.set_string("a", "1")
        store.set_string("b", "2")
        assert store.delete("a", "b", "missing") == 2
        assert store.get("a") is None

    def test_exists_counts_repeated_keys(self, store: DataStore) -> None:
        store.set_string("a", "1")
        assert store.exists("a", "a", "missing") == 2

    def test_type_of_missing_key_is_none(self, store: DataStore) -> None:
        assert store.type("missing") == DataType.NONE
        assert store.type("missing").value == "none"

    def test_dbsize_and_flushdb(self, store: DataStore) -> None:
        store.set_string("a", "1")
        store.set_string("b", "2")
        assert store.dbsize() == 2
        store.flushdb()
        assert store.dbsize() == 0


class TestKeysPattern:
    """KEYS glob matching."""

    def test_star_matches_everything(self, store: DataStore) -> None:
        for key in ("foo", "bar", "baz"):
            store.set_string(key, "x")
        assert sorted(store.keys("*")) == ["bar", "baz", "foo"]

    def test_prefix_pattern(self, store: DataStore) -> None:
        for key in ("foo", "bar", "baz"):
            store.set_string(key, "x")
        assert sorted(store.keys("ba*")) == ["bar", "baz"]

    def test_question_mark_matches_one_character(self, store: DataStore) -> None:
        for key in ("foo", "fooo", "boo"):
            store.set_string(key, "x")
        assert sorted(store.keys("?oo")) == ["boo", "foo"]

    def test_pattern_is_anchored(self, store: DataStore) -> None:
        store.set_string("foobar", "x")
        assert store.keys("foo") == []
        assert store.keys("bar") == []

    def test_other_characters_are_literal(self, store: DataStore) -> None:
        store.set_string("b.z", "x")
        store.set_string("baz", "x")
        store.set_string("[ab]", "x")
        assert store.keys("b.z") == ["b.z"]
        assert store.keys("[ab]") == ["[ab]"]

    def test_pattern_is_case_sensitive(self, store: DataStore) -> None:
        store.set_string("Foo", "x")
        assert store.keys("foo") == []

    def test_expired_keys_are_excluded(self, store: DataStore, clock) -> None:
        store.set_string("live", "x")
        store.set_string("dead", "x", ex=1)
        clock.advance(1)
        assert store.keys("*") == ["live"]


class TestExpiry:
    """Lazy expiration and TTL reporting."""

    def test_ttl_without_deadline(self, store: DataStore) -> None:
        store.set_string("k", "v")
        assert store.ttl("k") == -1
        assert store.pttl("k") == -1

    def test_ttl_of_missing_key(self, store: DataStore) -> None:
        assert store.ttl("missing") == -2
        assert store.pttl("missing") == -2

    def test_expire_missing_key_returns_false(self, store: DataStore) -> None:
        assert store.expire("missing", 10) is False

    def test_ttl_counts_down_to_absent(self, store: DataStore, clock) -> None:
        store.set_string("k", "v")
        assert store.expire("k", 10) is True
        assert store.ttl("k") == 10

        clock.advance(3.5)
        assert store.ttl("k") == 6

        clock.advance(6.5)
        assert store.ttl("k") == -2
        assert store.get("k") is None

    def test_key_expires_exactly_at_deadline(self, store: DataStore, clock) -> None:
        deadline = clock.now + 5
        store.set_string("k", "v", ex=5)
        clock.advance(4.5)
        assert store.get("k") == "v"
        clock.now = deadline
        assert store.get("k") is None

    def test_expired_key_is_absent_for_every_operation(self, store: DataStore, clock) -> None:
        store.set_string("k", "v", ex=1)
        clock.advance(2)

        assert store.exists("k") == 0
        assert store.type("k") == DataType.NONE
        assert store.delete("k") == 0
        assert store.expire("k", 10) is False
        assert store.dbsize() == 0
        # Idempotent: reading again is the same absence
        assert store.get("k") is None
        assert store.ttl("k") == -2

    def test_set_without_options_clears_deadline(self, store: DataStore) -> None:
        store.set_string("k", "v", ex=10)
        store.set_string("k", "v2")
        assert store.ttl("k") == -1

    def test_set_px_option(self, store: DataStore) -> None:
        store.set_string("k", "v", px=1500)
        assert store.pttl("k") == 1500
        assert store.ttl("k") == 1

    def test_set_exat_option(self, store: DataStore, clock) -> None:
        store.set_string("k", "v", exat=int(clock.now) + 100)
        assert store.ttl("k") == 100

    def test_set_pxat_option(self, store: DataStore, clock) -> None:
        store.set_string("k", "v", pxat=(int(clock.now) + 2) * 1000)
        assert store.pttl("k") == 2000

    def test_ex_takes_precedence_over_other_options(self, store: DataStore) -> None:
        store.set_string("k", "v", ex=10, px=500)
        assert store.ttl("k") == 10

    def test_expireat(self, store: DataStore, clock) -> None:
        store.set_string("k", "v")
        assert store.expireat("k", clock.now + 30) is True
        assert store.ttl("k") == 30

    def test_expireat_in_the_past_expires_immediately(self, store: DataStore, clock) -> None:
        store.set_string("k", "v")
        store.expireat("k", clock.now - 1)
        assert store.exists("k") == 0

    def test_pexpire(self, store: DataStore) -> None:
        store.set_string("k", "v")
        assert store.pexpire("k", 2500) is True
        assert store.pttl("k") == 2500

    def test_persist(self, store: DataStore) -> None:
        store.set_string("k", "v", ex=10)
        assert store.persist("k") is True
        assert store.ttl("k") == -1
        assert store.persist("k") is False


class TestTypedAccess:
    """Read and write sides of the type-mismatch policy."""

    def test_get_typed_reads_other_type_as_missing(self, store: DataStore) -> None:
        store.set_string("k", "v")
        assert store.get_typed("k", DataType.LIST) is None
        assert store.get("k") == "v"

    def test_get_or_create_creates_missing(self, store: DataStore) -> None:
        lst = store.get_or_create("k", DataType.LIST, deque)
        assert isinstance(lst, deque)
        assert store.type("k") == DataType.LIST

    def test_get_or_create_replaces_other_type(self, store: DataStore) -> None:
        store.set_string("k", "v", ex=10)
        lst = store.get_or_create("k", DataType.LIST, deque)
        assert len(lst) == 0
        assert store.type("k") == DataType.LIST
        assert store.ttl("k") == -1

    def test_get_or_create_returns_existing(self, store: DataStore) -> None:
        first = store.get_or_create("k", DataType.SET, set)
        first.add("m")
        assert store.get_or_create("k", DataType.SET, set) is first

    def test_update_keeps_deadline(self, store: DataStore) -> None:
        store.set_string("k", "v", ex=10)
        store.update("k", "w")
        assert store.get("k") == "w"
        assert store.ttl("k") == 10


class TestScripts:
    """Script registry."""

    def test_script_load_returns_sha1_digest(self, store: DataStore) -> None:
        script = "return ARGV[1]"
        digest = store.script_load(script)
        assert digest == hashlib.sha1(script.encode("utf-8")).hexdigest()

    def test_script_load_is_deterministic(self, store: DataStore) -> None:
        assert store.script_load("return 1") == store.script_load("return 1")
        assert store.script_load("return 1") != store.script_load("return 2")

    def test_script_exists(self, store: DataStore) -> None:
        digest = store.script_load("return 1")
        assert store.script_exists(digest, "nonexistent") == [1, 0]

    def test_reset_discards_scripts_and_keys(self, store: DataStore) -> None:
        digest = store.script_load("return 1")
        store.set_string("k", "v")
        store.reset()
        assert store.script_exists(digest) == [0]
        assert store.dbsize() == 0
