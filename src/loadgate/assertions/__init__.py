"""Assertion system for checking load-test statistics."""

from loadgate.assertions.base import Assertion, AssertionResult

__all__ = ["Assertion", "AssertionResult"]
