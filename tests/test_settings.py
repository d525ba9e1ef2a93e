import os
import unittest
from datetime import date
from unittest.mock import patch

from inflation_tracker.config import SERIES, Settings, validate_start_year
from tests.fixtures import make_settings


class TestSettings(unittest.TestCase):
    def test_series_ids(self):
        self.assertEqual(SERIES["HEADLINE_NSA"], "CUUR0000SA0")
        self.assertEqual(SERIES["HEADLINE_SA"], "CUSR0000SA0")
        self.assertEqual(SERIES["CORE_SA"], "CUSR0000SA0L1E")

    def test_defaults_from_environment(self):
        env = {
            "BLS_API_KEY": "abc",
            "CPI_START_YEAR": "2018",
            "BLS_TIMEOUT": "12.5",
            "CPI_ALIGNMENT": "date",
            "CPI_CYCLE_TIMEOUT": "20",
            "BLS_BASE_URL": "https://example.test/data/",
        }
        with patch.dict(os.environ, env):
            settings = Settings()
        self.assertTrue(settings.has_api_key())
        self.assertEqual(settings.start_year, 2018)
        self.assertEqual(settings.timeout, 12.5)
        self.assertEqual(settings.alignment, "date")
        self.assertEqual(settings.cycle_timeout, 20.0)
        self.assertEqual(settings.base_url, "https://example.test/data")
        settings.validate()

    def test_no_cycle_timeout_by_default(self):
        with patch.dict(os.environ, {"CPI_CYCLE_TIMEOUT": ""}):
            self.assertIsNone(Settings().cycle_timeout)

    def test_validate(self):
        make_settings().validate()
        for overrides in (
            {"start_year": 1900},
            {"start_year": date.today().year + 1},
            {"timeout": 0},
            {"cycle_timeout": -1.0},
            {"alignment": "nearest"},
            {"next_release": "soon"},
            {"next_release": ""},
        ):
            with self.subTest(**overrides):
                with self.assertRaises(ValueError):
                    make_settings(**overrides).validate()

    def test_validate_start_year_bounds(self):
        validate_start_year(1913)
        validate_start_year(date.today().year)
        with self.assertRaises(ValueError):
            validate_start_year(1912)


if __name__ == "__main__":
    unittest.main()
