import unittest
from datetime import datetime, timedelta, timezone

from gdrivebrowser.util.time import parse_rfc3339


class TestParseRfc3339(unittest.TestCase):
    def test_parses_z_suffix(self) -> None:
        self.assertEqual(
            parse_rfc3339("2025-01-01T12:34:56Z"),
            datetime(2025, 1, 1, 12, 34, 56, tzinfo=timezone.utc),
        )

    def test_parses_fraction_and_offset(self) -> None:
        dt = parse_rfc3339("2025-01-01T21:34:56.123+09:00")
        self.assertEqual(dt.utcoffset(), timedelta(0))
        self.assertEqual(dt.hour, 12)
        self.assertEqual(dt.microsecond, 123000)

    def test_rejects_naive_and_empty(self) -> None:
        for value in ("", "2025-01-01T00:00:00", "garbage"):
            with self.assertRaises(ValueError):
                parse_rfc3339(value)


if __name__ == "__main__":
    unittest.main()
