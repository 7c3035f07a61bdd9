"""Tests for the command registry trie."""

import threading

import pytest

from floodlight_console.commands import CommandRegistry, split_path
from floodlight_console.exceptions import DuplicatePathError


class TestRegister:
    def test_register_and_get(self, stub_command):
        reg = CommandRegistry()
        cmd = stub_command("show switch")
        reg.register(cmd)
        assert reg.get(("show", "switch")) is cmd
        assert len(reg) == 1

    def test_path_is_case_insensitive(self, stub_command):
        reg = CommandRegistry()
        cmd = stub_command("Show Switch")
        reg.register(cmd)
        assert cmd.path == ("show", "switch")
        assert reg.get(("SHOW", "switch")) is cmd
        assert "show switch" in reg

    def test_duplicate_path_rejected(self, stub_command):
        reg = CommandRegistry()
        reg.register(stub_command("show host"))
        with pytest.raises(DuplicatePathError) as exc:
            reg.register(stub_command("SHOW  HOST"))
        assert exc.value.path == ("show", "host")
        assert "show host" in str(exc.value)

    def test_duplicate_leaves_registry_untouched(self, stub_command):
        reg = CommandRegistry()
        first = stub_command("show")
        reg.register(first)
        root = reg.root
        with pytest.raises(DuplicatePathError):
            reg.register(stub_command("show"))
        assert reg.root is root
        assert reg.get(("show",)) is first

    def test_empty_path_rejected(self, stub_command):
        with pytest.raises(ValueError):
            CommandRegistry().register(stub_command("   "))

    def test_inner_and_leaf_commands_coexist(self, registry):
        assert registry.get(("show",)) is not None
        assert registry.get(("show", "host")) is not None
        assert registry.get(("show", "nothing")) is None
        assert registry.get(("sh",)) is None


class TestUnregister:
    def test_unregister_returns_command(self, registry):
        cmd = registry.get(("show", "host"))
        assert registry.unregister(("show", "host")) is cmd
        assert registry.get(("show", "host")) is None
        assert "host" not in registry.root.children["show"].children

    def test_unregister_prunes_empty_branches(self, stub_command):
        reg = CommandRegistry()
        reg.register(stub_command("clear arp cache"))
        reg.unregister(("clear", "arp", "cache"))
        assert reg.root.children == {}
        assert len(reg) == 0

    def test_unregister_keeps_inner_command(self, registry):
        registry.unregister(("show", "switch"))
        registry.unregister(("show", "host"))
        assert registry.get(("show",)) is not None
        assert registry.root.children["show"].children == {}

    def test_unregister_unknown_path(self, registry):
        assert registry.unregister(("reboot",)) is None
        assert registry.unregister(("show", "host", "extra")) is None

    def test_readers_keep_their_snapshot(self, registry):
        snapshot = registry.root
        registry.unregister(("show", "host"))
        assert "host" in snapshot.children["show"].children


class TestListing:
    def test_commands_in_path_order(self, registry):
        names = [c.name for c in registry.commands()]
        assert names == ["exit", "show", "show host", "show switch"]

    def test_first_tokens(self, registry):
        assert registry.first_tokens() == ["exit", "show"]


class TestMatch:
    def test_exact_beats_prefix(self, stub_command):
        reg = CommandRegistry()
        reg.register(stub_command("show"))
        reg.register(stub_command("showall"))
        step = reg.match(reg.root, "show")
        assert step.node.token == "show"

    def test_several_prefix_matches(self, stub_command):
        reg = CommandRegistry()
        reg.register(stub_command("show"))
        reg.register(stub_command("showall"))
        step = reg.match(reg.root, "sho")
        assert step.node is None
        assert step.candidates == ("show", "showall")

    def test_no_match(self, registry):
        step = registry.match(registry.root, "zzz")
        assert step.node is None
        assert step.candidates == ()


class TestConcurrentRegistration:
    def test_parallel_writers_all_land(self, stub_command):
        reg = CommandRegistry()
        names = [f"cmd{i} sub" for i in range(50)]

        def worker(chunk):
            for name in chunk:
                reg.register(stub_command(name))

        threads = [threading.Thread(target=worker, args=(names[i::5],)) for i in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(reg) == 50
        for name in names:
            assert reg.get(split_path(name)) is not None


def test_split_path():
    assert split_path("  Show   Host ") == ("show", "host")
