#!/usr/bin/env python3
"""
Tests for CommandRegistry and registry merging.
"""

import threading

import pytest

from cmdmux.core import CommandRegistry, combine, merge_into, update


def handler_one(args):
    pass


def handler_two(args):
    pass


def handler_three(args):
    pass


# ============================================================================
# Registration Tests
# ============================================================================

class TestRegister:
    """Tests for register / register_many / command."""

    def test_has_after_register(self):
        """Test has() is true right after register()."""
        registry = CommandRegistry()
        registry.register("test1", handler_one)
        assert registry.has("test1")
        assert "test1" in registry

    def test_register_returns_registry_for_chaining(self):
        """Test register and register_many can be chained."""
        registry = CommandRegistry()
        result = registry.register("test1", handler_one).register_many(
            ["test2", "testtwo"], handler_two
        )
        assert result is registry
        assert registry.names() == ["test1", "test2", "testtwo"]

    def test_register_many_uses_same_handler(self):
        """Test register_many binds every name to the given handler."""
        registry = CommandRegistry().register_many(["a", "b"], handler_one)
        assert registry.resolve("a") is handler_one
        assert registry.resolve("b") is handler_one

    def test_register_many_rejects_single_string(self):
        """Test a bare string is not split into one-letter commands."""
        registry = CommandRegistry()
        with pytest.raises(TypeError, match="collection of names"):
            registry.register_many("greet", handler_one)
        assert len(registry) == 0

    def test_register_many_is_all_or_nothing(self):
        """Test an invalid name leaves the registry untouched."""
        registry = CommandRegistry()
        with pytest.raises(ValueError):
            registry.register_many(["ok", ""], handler_one)
        assert not registry.has("ok")

    def test_register_overwrites(self):
        """Test registering an existing name replaces the handler."""
        registry = CommandRegistry()
        registry.register("cmd", handler_one).register("cmd", handler_two)
        assert registry.resolve("cmd") is handler_two
        assert len(registry) == 1

    def test_register_idempotent(self):
        """Test repeating an identical register call changes nothing."""
        once = CommandRegistry().register("cmd", handler_one)
        twice = CommandRegistry().register("cmd", handler_one).register("cmd", handler_one)
        assert once == twice

    def test_names_are_case_sensitive(self):
        """Test 'Cmd' and 'cmd' are different commands."""
        registry = CommandRegistry().register("cmd", handler_one)
        assert registry.has("cmd")
        assert not registry.has("Cmd")

    @pytest.mark.parametrize("name", ["", None, 3])
    def test_register_rejects_invalid_name(self, name):
        """Test names must be non-empty strings."""
        with pytest.raises(ValueError):
            CommandRegistry().register(name, handler_one)

    def test_register_rejects_non_callable(self):
        """Test handlers must be callable."""
        with pytest.raises(TypeError):
            CommandRegistry().register("cmd", "not callable")

    def test_command_decorator_with_names(self):
        """Test @command registers under every given name."""
        registry = CommandRegistry()

        @registry.command("quit", "q")
        def stop(args):
            pass

        assert registry.resolve("quit") is stop
        assert registry.resolve("q") is stop
        assert not registry.has("stop")

    def test_command_decorator_defaults_to_function_name(self):
        """Test @command() without names uses the function name."""
        registry = CommandRegistry()

        @registry.command()
        def status(args):
            pass

        assert registry.resolve("status") is status


class TestLookup:
    """Tests for lookup helpers."""

    def test_resolve_missing_returns_none(self):
        """Test resolve() returns None for unknown names."""
        assert CommandRegistry().resolve("missing") is None

    def test_unregister(self):
        """Test unregister removes an entry and reports whether it existed."""
        registry = CommandRegistry().register("cmd", handler_one)
        assert registry.unregister("cmd") is True
        assert not registry.has("cmd")
        assert registry.unregister("cmd") is False

    def test_iteration_in_registration_order(self):
        """Test iterating yields names in registration order."""
        registry = CommandRegistry().register("b", handler_one).register("a", handler_two)
        assert list(registry) == ["b", "a"]
        assert registry.names() == ["a", "b"]

    def test_contains_non_string(self):
        """Test `in` with a non-string is False rather than an error."""
        assert 1 not in CommandRegistry()

    def test_copy_is_independent(self):
        """Test copy() shares handlers but not the mapping."""
        original = CommandRegistry().register("a", handler_one)
        clone = original.copy()
        clone.register("b", handler_two)
        assert clone.resolve("a") is handler_one
        assert not original.has("b")


# ============================================================================
# combine Tests
# ============================================================================

class TestCombine:
    """Tests for combine() and the | operator."""

    @pytest.fixture
    def registries(self):
        a = CommandRegistry().register("test1", handler_one).register("test2", handler_two)
        b = CommandRegistry().register("test2", handler_three).register("test3", handler_three)
        return a, b

    def test_combine_contains_all_names(self, registries):
        """Test the combined registry holds every name from both inputs."""
        a, b = registries
        merged = combine(a, b)
        assert merged.names() == ["test1", "test2", "test3"]

    def test_combine_is_right_biased(self, registries):
        """Test the second registry wins on a name collision."""
        a, b = registries
        assert combine(a, b).resolve("test2") is handler_three
        assert combine(b, a).resolve("test2") is handler_two

    def test_combine_does_not_mutate_inputs(self, registries):
        """Test neither input changes."""
        a, b = registries
        a_before, b_before = a.copy(), b.copy()
        merged = combine(a, b)
        assert a == a_before
        assert b == b_before
        assert merged is not a and merged is not b

    def test_or_operator(self, registries):
        """Test a | b is combine(a, b)."""
        a, b = registries
        assert (a | b) == combine(a, b)


# ============================================================================
# merge_into Tests
# ============================================================================

class TestMergeInto:
    """Tests for merge_into()."""

    def test_merge_with_suffix(self):
        """Test colliding names are kept under the _bis suffix."""
        cli1 = CommandRegistry().register("test1", handler_one).register("test2", handler_two)
        cli2 = CommandRegistry().register("test2", handler_three).register("test4", handler_three)

        result = merge_into(cli1, cli2, suffix_collisions=True)

        assert result is cli1
        assert cli1.resolve("test2") is handler_two
        assert cli1.resolve("test2_bis") is handler_three
        assert cli1.resolve("test4") is handler_three
        assert not cli1.has("test4_bis")

    def test_merge_without_suffix_keeps_existing(self):
        """Test colliding incoming handlers are dropped."""
        cli1 = CommandRegistry().register("test1", handler_one).register("test2", handler_two)
        cli2 = CommandRegistry().register("test2", handler_three).register("test4", handler_three)

        merge_into(cli1, cli2, suffix_collisions=False)

        assert cli1.resolve("test2") is handler_two
        assert not cli1.has("test2_bis")
        assert cli1.has("test4")

    def test_merge_does_not_mutate_other(self):
        """Test the source registry is left unchanged."""
        cli1 = CommandRegistry().register("x", handler_one)
        cli2 = CommandRegistry().register("x", handler_two)
        merge_into(cli1, cli2, suffix_collisions=True)
        assert cli2.names() == ["x"]

    def test_suffixed_name_collision_is_last_write_wins(self):
        """Test an existing suffixed name is overwritten."""
        cli1 = CommandRegistry().register("x", handler_one).register("x_bis", handler_two)
        cli2 = CommandRegistry().register("x", handler_three)

        merge_into(cli1, cli2, suffix_collisions=True)

        assert cli1.resolve("x") is handler_one
        assert cli1.resolve("x_bis") is handler_three

    def test_custom_suffix(self):
        """Test a custom collision suffix."""
        cli1 = CommandRegistry().register("x", handler_one)
        cli2 = CommandRegistry().register("x", handler_two)
        merge_into(cli1, cli2, suffix_collisions=True, suffix="_2")
        assert cli1.resolve("x_2") is handler_two

    def test_empty_suffix_rejected(self):
        """Test an empty suffix is refused when suffixing is on."""
        with pytest.raises(ValueError):
            merge_into(CommandRegistry(), CommandRegistry(), True, suffix="")

    def test_merge_into_is_opposite_bias_of_combine(self):
        """Test merge_into keeps the target's handler where combine keeps the other's."""
        a = CommandRegistry().register("x", handler_one)
        b = CommandRegistry().register("x", handler_two)
        assert combine(a, b).resolve("x") is handler_two
        assert merge_into(a.copy(), b, False).resolve("x") is handler_one


# ============================================================================
# update Tests
# ============================================================================

class TestUpdate:
    """Tests for update() and the |= operator."""

    def test_update_overwrites(self):
        """Test update replaces colliding handlers and adds no suffixed names."""
        cli1 = CommandRegistry().register("test1", handler_one).register("test2", handler_two)
        cli2 = CommandRegistry().register("test2", handler_three)

        update(cli1, cli2)

        assert cli1.resolve("test2") is handler_three
        assert not cli1.has("test2_bis")

    def test_ior_operator(self):
        """Test |= updates in place."""
        cli1 = CommandRegistry().register("test2", handler_two)
        cli2 = CommandRegistry().register("test2", handler_three)
        original = cli1

        cli1 |= cli2

        assert cli1 is original
        assert cli1.has("test2")
        assert not cli1.has("test2_bis")


# ============================================================================
# Locking Tests
# ============================================================================

class TestLocking:
    """Tests for locked() and merges across threads."""

    def test_locked_yields_registry(self):
        """Test locked() yields the registry and is re-entrant."""
        registry = CommandRegistry()
        with registry.locked() as locked:
            assert locked is registry
            registry.register("a", handler_one)
            with registry.locked():
                assert registry.has("a")

    def test_locked_blocks_other_threads(self):
        """Test a writer in another thread waits while the lock is held."""
        registry = CommandRegistry()
        done = threading.Event()

        def writer():
            registry.register("late", handler_one)
            done.set()

        with registry.locked():
            thread = threading.Thread(target=writer)
            thread.start()
            assert not done.wait(timeout=0.2)
            assert not registry.has("late")

        thread.join(timeout=5)
        assert done.is_set()
        assert registry.has("late")

    def test_cross_merge_does_not_deadlock(self):
        """Test merging two registries into each other concurrently finishes."""
        a = CommandRegistry().register_many([f"a{i}" for i in range(2000)], handler_one)
        b = CommandRegistry().register_many([f"b{i}" for i in range(2000)], handler_two)
        start = threading.Barrier(2)

        def merge(target, other):
            start.wait()
            for _ in range(20):
                merge_into(target, other, suffix_collisions=True)

        threads = [
            threading.Thread(target=merge, args=(a, b)),
            threading.Thread(target=merge, args=(b, a)),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert not any(thread.is_alive() for thread in threads)
        assert a.has("b1999")
        assert b.has("a1999")

    def test_reader_never_sees_partial_merge(self):
        """Test a concurrent reader only sees the state before or after a merge."""
        size = 20000
        target = CommandRegistry()
        other = CommandRegistry().register_many([f"cmd{i}" for i in range(size)], handler_one)
        finished = threading.Event()
        lengths = set()
        snapshots = set()

        def reader():
            while not finished.is_set():
                lengths.add(len(target))
                with target.locked():
                    snapshots.add((target.resolve("cmd0") is None,
                                   target.resolve(f"cmd{size - 1}") is None))

        thread = threading.Thread(target=reader)
        thread.start()
        merge_into(target, other, suffix_collisions=False)
        finished.set()
        thread.join(timeout=10)

        lengths.add(len(target))
        assert lengths <= {0, size}
        assert snapshots <= {(True, True), (False, False)}
        assert len(target) == size
