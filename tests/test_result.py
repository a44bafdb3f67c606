"""
Unit tests for the Result type and error helpers.
"""

import unittest

from scriptorium.errors import InvariantViolationError, OperationError, SchemaValidationError, invariant
from scriptorium.result import Err, Ok, gather_results, is_err, is_ok, normalize_error, to_err


class TestResult(unittest.TestCase):
    """Test Ok/Err behaviour."""

    def test_ok(self):
        result = Ok(3)
        self.assertTrue(result.ok)
        self.assertTrue(is_ok(result))
        self.assertEqual(result.unwrap(), 3)
        self.assertEqual(result.unwrap_or(0), 3)
        self.assertEqual(result.map(lambda v: v * 2), Ok(6))
        self.assertEqual(result.flat_map(lambda v: Err(ValueError(str(v)))).ok, False)

    def test_err(self):
        error = ValueError("boom")
        result = Err(error)
        self.assertFalse(result.ok)
        self.assertTrue(is_err(result))
        self.assertEqual(result.unwrap_or("fallback"), "fallback")
        self.assertIs(result.map(lambda v: v * 2), result)
        with self.assertRaises(ValueError):
            result.unwrap()

    def test_map_err(self):
        result = Err(ValueError("boom")).map_err(lambda e: RuntimeError(f"wrapped: {e}"))
        self.assertIsInstance(result.error, RuntimeError)
        self.assertEqual(str(result.error), "wrapped: boom")


class TestErrorHelpers(unittest.TestCase):
    """Test error normalization."""

    def test_normalize_error(self):
        error = KeyError("x")
        self.assertIs(normalize_error(error), error)
        self.assertEqual(str(normalize_error("plain string")), "plain string")

    def test_to_err_keeps_operation_and_cause(self):
        cause = ValueError("bad row")
        with self.assertLogs(level="ERROR"):
            result = to_err(cause, "get_posts")

        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, OperationError)
        self.assertEqual(result.error.operation, "get_posts")
        self.assertIs(result.error.cause, cause)
        self.assertIn("get_posts", str(result.error))
        self.assertIn("bad row", str(result.error))

    def test_invariant(self):
        invariant(True, "Never raised")
        with self.assertRaises(InvariantViolationError) as ctx:
            invariant(False, "Slugs must be unique", {"slug": "a"})
        self.assertEqual(ctx.exception.context, {"slug": "a"})

    def test_schema_validation_error_lists_issues(self):
        error = SchemaValidationError("Invalid post data", "post", ["slug: Field required"])
        self.assertEqual(str(error), "Invalid post data (slug: Field required)")
        self.assertEqual(error.context, "post")


class TestGatherResults(unittest.IsolatedAsyncioTestCase):
    """Test joining concurrent Result-returning fetches."""

    async def test_all_succeed_in_argument_order(self):
        async def value(v):
            return Ok(v)

        result = await gather_results(value(1), value(2), value(3))
        self.assertEqual(result, Ok([1, 2, 3]))

    async def test_first_failure_fails_the_aggregate(self):
        first = ValueError("first")
        second = ValueError("second")

        async def ok():
            return Ok(1)

        async def fail(error):
            return Err(error)

        result = await gather_results(ok(), fail(first), fail(second))
        self.assertFalse(result.ok)
        self.assertIs(result.error, first)


if __name__ == "__main__":
    unittest.main()
