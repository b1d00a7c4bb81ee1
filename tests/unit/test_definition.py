# tests/unit/test_definition.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import enum
import unittest
from unittest.mock import Mock

from ledgerstate.core.definition import MachineBuilder, MachineDefinition
from ledgerstate.core.errors import InitialStateAlreadyDefinedError, InvalidStateError, InvalidTransitionError
from ledgerstate.core.scope import ANY, Exactly


class Status(enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"


class TestStateDeclaration(unittest.TestCase):
    """Test cases for MachineBuilder.state.

    Tests verify:
    1. States are recorded in declaration order
    2. Only one initial state is allowed
    3. Names are normalized
    """

    def setUp(self):
        self.builder = MachineBuilder()

    def test_declares_states_in_order(self):
        self.builder.state("a", initial=True)
        self.builder.state("b")
        self.assertEqual(self.builder.states, ["a", "b"])
        self.assertEqual(self.builder.initial_state, "a")

    def test_second_initial_state_rejected(self):
        self.builder.state("a", initial=True)
        with self.assertRaises(InitialStateAlreadyDefinedError) as ctx:
            self.builder.state("b", initial=True)
        self.assertEqual(ctx.exception.existing, "a")
        self.assertEqual(ctx.exception.state, "b")
        self.assertIn("already defined as 'a'", str(ctx.exception))
        self.assertEqual(self.builder.initial_state, "a")
        self.assertNotIn("b", self.builder.states)

    def test_second_initial_state_is_invalid_state_error(self):
        self.builder.state("a", initial=True)
        with self.assertRaises(InvalidStateError):
            self.builder.state("a", initial=True)

    def test_names_are_normalized(self):
        self.assertEqual(self.builder.state(Status.PENDING, initial=True), "pending")
        self.assertEqual(self.builder.state(42), "42")
        self.assertEqual(self.builder.states, ["pending", "42"])


class TestTransitionDeclaration(unittest.TestCase):
    """Test cases for MachineBuilder.transition."""

    def setUp(self):
        self.builder = MachineBuilder()
        for name in ("a", "b", "c"):
            self.builder.state(name, initial=(name == "a"))

    def test_single_and_multiple_targets(self):
        self.assertEqual(self.builder.transition("a", "b"), ["b"])
        self.assertEqual(self.builder.transition("b", ["a", "c"]), ["a", "c"])
        self.assertEqual(self.builder.successors, {"a": ["b"], "b": ["a", "c"]})

    def test_declarations_accumulate(self):
        self.builder.transition("a", "b")
        self.builder.transition("a", "c")
        self.assertEqual(self.builder.successors["a"], ["b", "c"])

    def test_enum_states_accepted(self):
        builder = MachineBuilder()
        builder.state(Status.PENDING, initial=True)
        builder.state(Status.APPROVED)
        builder.transition(Status.PENDING, [Status.APPROVED])
        self.assertEqual(builder.successors, {"pending": ["approved"]})

    def test_undeclared_from_rejected(self):
        with self.assertRaises(InvalidStateError) as ctx:
            self.builder.transition("x", "a")
        self.assertEqual(ctx.exception.state, "x")

    def test_undeclared_target_rejected_without_partial_update(self):
        with self.assertRaises(InvalidStateError):
            self.builder.transition("a", ["b", "x"])
        self.assertEqual(self.builder.successors, {})

    def test_entry_transition_without_from(self):
        self.builder.transition(None, "a")
        self.assertEqual(self.builder.successors, {None: ["a"]})

    def test_none_targets_declare_nothing(self):
        self.assertEqual(self.builder.transition("a", None), [])
        self.assertEqual(self.builder.successors, {"a": []})
        with self.assertRaises(InvalidTransitionError):
            self.builder.guard_transition(from_="a", action=Mock())


class TestHookScopeValidation(unittest.TestCase):
    """Test cases for guard/callback scope validation.

    Tests verify:
    1. Wildcard scopes are always valid
    2. Undeclared states are rejected before graph checks
    3. Terminal sources and untargeted destinations are rejected
    4. Both sides given must form an edge
    """

    def setUp(self):
        self.builder = MachineBuilder()
        self.builder.state("pending", initial=True)
        self.builder.state("approved")
        self.builder.state("rejected")
        self.builder.transition("pending", ["approved", "rejected"])

    def register_methods(self):
        return [self.builder.guard_transition, self.builder.before_transition, self.builder.after_transition]

    def test_wildcard_scope_always_valid(self):
        empty = MachineBuilder()
        empty.guard_transition(action=Mock())
        empty.before_transition(action=Mock())
        empty.after_transition(action=Mock())

    def test_undeclared_state_rejected(self):
        for register in self.register_methods():
            with self.assertRaises(InvalidStateError):
                register(from_="ghost", action=Mock())
            with self.assertRaises(InvalidStateError):
                register(to="ghost", action=Mock())

    def test_state_existence_checked_before_terminal_check(self):
        # "ghost" would also fail the terminal check; existence wins.
        with self.assertRaises(InvalidStateError):
            self.builder.guard_transition(from_="ghost", to="approved", action=Mock())

    def test_terminal_from_rejected(self):
        for register in self.register_methods():
            with self.assertRaises(InvalidTransitionError) as ctx:
                register(from_="approved", action=Mock())
            self.assertIn("terminal state 'approved'", str(ctx.exception))

    def test_initial_to_rejected(self):
        for register in self.register_methods():
            with self.assertRaises(InvalidTransitionError) as ctx:
                register(to="pending", action=Mock())
            self.assertIn("initial state 'pending'", str(ctx.exception))

    def test_missing_edge_rejected(self):
        self.builder.state("archived")
        self.builder.transition("approved", "archived")
        with self.assertRaises(InvalidTransitionError) as ctx:
            self.builder.before_transition(from_="pending", to="archived", action=Mock())
        self.assertEqual(ctx.exception.from_state, "pending")
        self.assertEqual(ctx.exception.to_state, "archived")

    def test_valid_scopes_registered_in_order(self):
        first, second, third = Mock(), Mock(), Mock()
        self.builder.guard_transition(from_="pending", action=first)
        self.builder.guard_transition(to="approved", action=second)
        self.builder.guard_transition("pending", "rejected", third)
        guards = self.builder.build().guards
        self.assertEqual([g.action for g in guards], [first, second, third])
        self.assertEqual(guards[0].from_pattern, Exactly("pending"))
        self.assertIs(guards[0].to_pattern, ANY)

    def test_hook_before_transition_declared_is_rejected(self):
        builder = MachineBuilder()
        builder.state("a", initial=True)
        builder.state("b")
        with self.assertRaises(InvalidTransitionError):
            builder.after_transition(from_="a", action=Mock())
        builder.transition("a", "b")
        builder.after_transition(from_="a", action=Mock())

    def test_empty_target_list_leaves_state_terminal(self):
        self.builder.transition("approved", [])
        with self.assertRaises(InvalidTransitionError):
            self.builder.guard_transition(from_="approved", action=Mock())

    def test_decorator_form(self):
        @self.builder.before_transition(to="approved")
        def notify(subject):
            return "original"

        self.assertEqual(notify(None), "original")
        self.assertIs(self.builder.build().before_callbacks[0].action, notify)

    def test_decorator_form_validates_on_application(self):
        decorator = self.builder.guard_transition(to="pending")
        with self.assertRaises(InvalidTransitionError):
            decorator(Mock())

    def test_non_callable_action_rejected(self):
        with self.assertRaises(TypeError):
            self.builder.after_transition(to="approved", action="not callable")


class TestBuild(unittest.TestCase):
    """Test cases for MachineBuilder.build and MachineDefinition."""

    def setUp(self):
        self.builder = MachineBuilder()
        self.builder.state("a", initial=True)
        self.builder.state("b")
        self.builder.state("c")
        self.builder.transition("a", ["b", "c"])

    def test_build_requires_initial_state(self):
        builder = MachineBuilder()
        builder.state("a")
        with self.assertRaises(InvalidStateError):
            builder.build()

    def test_definition_contents(self):
        definition = self.builder.build()
        self.assertIsInstance(definition, MachineDefinition)
        self.assertEqual(definition.states, ("a", "b", "c"))
        self.assertEqual(definition.initial_state, "a")
        self.assertEqual(definition.successors_of("a"), ("b", "c"))
        self.assertEqual(definition.successors_of("b"), ())
        self.assertTrue(definition.has_edge("a", "b"))
        self.assertFalse(definition.has_edge("b", "a"))
        self.assertTrue(definition.is_terminal("b"))
        self.assertFalse(definition.is_terminal("a"))

    def test_duplicate_state_declarations_collapse(self):
        self.builder.state("b")
        self.assertEqual(self.builder.build().states, ("a", "b", "c"))

    def test_definition_is_read_only(self):
        definition = self.builder.build()
        with self.assertRaises(TypeError):
            definition.successors["b"] = ("a",)
        with self.assertRaises(Exception):
            definition.initial_state = "b"

    def test_definition_is_a_snapshot(self):
        definition = self.builder.build()
        self.builder.transition("b", "c")
        self.builder.after_transition(from_="b", action=Mock())
        self.assertEqual(definition.successors_of("b"), ())
        self.assertEqual(definition.after_callbacks, ())
        self.assertEqual(self.builder.build().successors_of("b"), ("c",))

    def test_definition_selects_hooks(self):
        guard, before, after = Mock(), Mock(), Mock()
        self.builder.guard_transition(to="b", action=guard)
        self.builder.before_transition(from_="a", action=before)
        self.builder.after_transition("a", "c", after)
        definition = self.builder.build()

        self.assertEqual([g.action for g in definition.guards_for("a", "b")], [guard])
        self.assertEqual(definition.guards_for("a", "c"), [])
        self.assertEqual([c.action for c in definition.before_callbacks_for("a", "c")], [before])
        self.assertEqual([c.action for c in definition.after_callbacks_for("a", "c")], [after])
        self.assertEqual(definition.after_callbacks_for("a", "b"), [])


if __name__ == "__main__":
    unittest.main()
