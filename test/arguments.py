# python
"""
Arguments module behavioral tests (grammar construction and value slots).

Scope
- Validate Argument construction, names and fluent builders.
- Validate the sibling ordering invariant on nested arguments and options.
- Validate defaults (placement, validation, value prefill) and make_* toggles.
- Validate bind/reset semantics and lookups (option, find, kind).
- Validate infer() bracket notation.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from parley import (
    Argument,
    ArgumentKind,
    infer,
    INTEGER,
    ALPHANUMERIC,
    InvalidNameError,
    InvalidStateError,
    InvalidValueError,
    MalformedGrammarError,
    OrderingViolationError,
    StructuralConfigurationError,
    ArgumentValidationFailedError,
)


class TestArgument(TestCase):
    """Behavioral tests for Argument construction and builders."""

    def testNameIsStripped(self):
        self.assertEqual(Argument("  user ").name, "user")

    def testEmptyNameRejected(self):
        with self.assertRaises(InvalidNameError):
            Argument("   ")

    def testEmptyNameIsValueError(self):
        with self.assertRaises(ValueError):
            Argument("")

    def testNonStringNameRejected(self):
        with self.assertRaises(TypeError):
            Argument(42)

    def testCreateMatchesConstructor(self):
        argument = Argument.create("amount", True)
        self.assertEqual(argument.name, "amount")
        self.assertTrue(argument.optional)

    def testRequiredByDefault(self):
        argument = Argument("user")
        self.assertFalse(argument.optional)
        self.assertFalse(argument.enum)
        self.assertIsNone(argument.default)
        self.assertEqual(argument.value, "")
        self.assertIs(argument.kind, ArgumentKind.REQUIRED)

    def testMakeOptional(self):
        argument = Argument("reason").make_optional()
        self.assertTrue(argument.optional)
        self.assertIs(argument.kind, ArgumentKind.OPTIONAL)

    def testArgumentsPropertyIsACopy(self):
        parent = Argument("target").add_argument(Argument("reason"))
        parent.arguments.append(Argument("other"))
        self.assertEqual([child.name for child in parent.arguments], ["reason"])

    def testReprUsesTypename(self):
        self.assertTrue(repr(Argument("user")).startswith("argument(name='user'"))

    def testRichReprHidesValue(self):
        names = [name for name, _ in Argument("user").__rich_repr__()]
        self.assertNotIn("value", names)
        self.assertIn("arguments", names)


class TestOrdering(TestCase):
    """Sibling ordering: required arguments never follow optional ones."""

    def testRequiredAfterOptionalRejected(self):
        parent = Argument("parent").add_argument(Argument("first", optional=True))
        with self.assertRaises(OrderingViolationError):
            parent.add_argument(Argument("second"))

    def testOrderingViolationIsStructural(self):
        parent = Argument("parent").add_argument(Argument("first", optional=True))
        with self.assertRaises(StructuralConfigurationError):
            parent.add_argument(Argument("second"))

    def testOptionalAfterRequiredAccepted(self):
        parent = Argument("parent").add_arguments([Argument("first"), Argument("second", optional=True)])
        self.assertEqual([child.name for child in parent.arguments], ["first", "second"])

    def testOptionsFollowOrdering(self):
        enum = Argument("type").add_option(Argument("read", optional=True))
        with self.assertRaises(OrderingViolationError):
            enum.add_option(Argument("send"))

    def testRejectedArgumentIsNotAdded(self):
        parent = Argument("parent").add_argument(Argument("first", optional=True))
        with self.assertRaises(OrderingViolationError):
            parent.add_argument(Argument("second"))
        self.assertEqual(len(parent.arguments), 1)


class TestEnum(TestCase):
    """Enum arguments: options, lookups and restrictions."""

    def makeEnum(self):
        return Argument("type", optional=True).add_options(
            Argument("read"),
            Argument("clear"),
            Argument("send").add_arguments([Argument("user"), Argument("message")]),
        )

    def testAddOptionMakesEnum(self):
        enum = self.makeEnum()
        self.assertTrue(enum.enum)
        self.assertIs(enum.kind, ArgumentKind.ENUM)

    def testEnumWinsOverOptional(self):
        self.assertIs(self.makeEnum().kind, ArgumentKind.ENUM)

    def testOptionLookupIsCaseInsensitive(self):
        self.assertEqual(self.makeEnum().option("SEND").name, "send")

    def testUnknownOptionIsNone(self):
        self.assertIsNone(self.makeEnum().option("bogus"))

    def testOptionOnNonEnumIsNone(self):
        self.assertIsNone(Argument("target").add_argument(Argument("reason")).option("reason"))

    def testPlainArgumentOnEnumRejected(self):
        with self.assertRaises(InvalidStateError):
            self.makeEnum().add_argument(Argument("extra", optional=True))

    def testOptionsOnParentRejected(self):
        with self.assertRaises(InvalidStateError):
            Argument("target").add_argument(Argument("reason")).add_option(Argument("read"))

    def testMakeEnumWithoutOptions(self):
        self.assertIs(Argument("mode").make_enum().kind, ArgumentKind.ENUM)

    def testDefaultOnRequiredEnumAccepted(self):
        enum = Argument("switch").add_options(Argument("on"), Argument("off")).set_default("on")
        self.assertEqual(enum.default, "on")
        self.assertFalse(enum.optional)

    def testFindSearchesOptionChildren(self):
        self.assertEqual(self.makeEnum().find("MESSAGE").name, "message")

    def testFindMissingIsNone(self):
        self.assertIsNone(self.makeEnum().find("nobody"))


class TestDefaults(TestCase):
    """Default placement, validation and value prefill."""

    def testDefaultRequiresOptionalOrEnum(self):
        with self.assertRaises(InvalidStateError):
            Argument("user").set_default("bob")

    def testDefaultIsConvertedToString(self):
        argument = Argument("amount", optional=True).set_default(10)
        self.assertEqual(argument.default, "10")

    def testDefaultPrefillsValue(self):
        self.assertEqual(Argument("amount", optional=True).set_default("10").value, "10")

    def testDefaultMustSatisfyRule(self):
        argument = Argument("amount", optional=True).set_validator(INTEGER)
        with self.assertRaises(InvalidValueError):
            argument.set_default("ten")

    def testRuleIsCheckedBeforePlacement(self):
        argument = Argument("amount").set_validator(INTEGER)
        with self.assertRaises(InvalidValueError):
            argument.set_default("ten")

    def testSetValidatorRequiresRule(self):
        with self.assertRaises(TypeError):
            Argument("amount").set_validator(str.isdigit)

    def testMakeRequiredWithDefaultRejected(self):
        argument = Argument("amount", optional=True).set_default("1")
        with self.assertRaises(InvalidStateError):
            argument.make_required()

    def testMakeRequiredWithoutDefault(self):
        self.assertFalse(Argument("amount", optional=True).make_required().optional)


class TestBinding(TestCase):
    """bind() and reset() on value slots."""

    def testBindStoresToken(self):
        self.assertEqual(Argument("user").bind("bob").value, "bob")

    def testEmptyBindFallsBackToDefault(self):
        argument = Argument("amount", optional=True).set_default("10")
        self.assertEqual(argument.bind("").value, "10")

    def testEmptyBindWithoutDefault(self):
        self.assertEqual(Argument("user").bind("").value, "")

    def testBindValidatesToken(self):
        argument = Argument("amount").set_validator(INTEGER)
        with self.assertRaises(ArgumentValidationFailedError) as context:
            argument.bind("ten")
        self.assertEqual(str(context.exception), "Argument 'amount' is invalid. Must be a valid number.")

    def testBindFailureCarriesContext(self):
        argument = Argument("name").set_validator(ALPHANUMERIC)
        with self.assertRaises(ArgumentValidationFailedError) as context:
            argument.bind("1abc")
        self.assertIs(context.exception.options["argument"], argument)
        self.assertEqual(context.exception.options["input"], "1abc")

    def testEmptyBindSkipsValidation(self):
        self.assertEqual(Argument("amount").set_validator(INTEGER).bind("").value, "")

    def testResetIsRecursive(self):
        child = Argument("reason", optional=True).set_default("none")
        parent = Argument("user").add_argument(child)
        parent.bind("bob")
        child.bind("spam")
        parent.reset()
        self.assertEqual(parent.value, "")
        self.assertEqual(child.value, "none")

    def testIsValid(self):
        argument = Argument("amount").set_validator(INTEGER)
        self.assertTrue(argument.is_valid("-3"))
        self.assertFalse(argument.is_valid("3.5"))


class TestInfer(TestCase):
    """Bracket notation: <required> [optional] [optional](default)."""

    def testInferNamesAndFlags(self):
        arguments = infer("<user> <item> [amount](10)")
        self.assertEqual([argument.name for argument in arguments], ["user", "item", "amount"])
        self.assertEqual([argument.optional for argument in arguments], [False, False, True])

    def testInferDefault(self):
        amount = infer("<user> <item> [amount](10)")[-1]
        self.assertEqual(amount.default, "10")
        self.assertEqual(amount.value, "10")

    def testInferWithoutBracketsRejected(self):
        with self.assertRaises(MalformedGrammarError):
            infer("<user> item")

    def testInferMismatchedBracketsRejected(self):
        with self.assertRaises(MalformedGrammarError):
            infer("<user]")

    def testInferEmptyNameRejected(self):
        with self.assertRaises(InvalidNameError):
            infer("<user> []")

    def testInferEmptyTextRejected(self):
        with self.assertRaises(MalformedGrammarError):
            infer("   ")

    def testInferDefaultOnRequiredRejected(self):
        with self.assertRaises(InvalidStateError):
            infer("<amount>(10)")

    def testInferOrderingEnforced(self):
        with self.assertRaises(OrderingViolationError):
            infer("[reason] <user>")


if __name__ == "__main__":
    unittest.main()
