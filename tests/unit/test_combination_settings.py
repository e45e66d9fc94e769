import os
import sys
from pathlib import Path
import unittest
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from combiner.application.services.combination_settings import CombinationSettings
from combiner.bootstrap import build_lookup_store, build_text_client, create_combination_session
from combiner.infrastructure.inmemory.inmemory_combination_repo import InMemoryCombinationRecordRepository


class CombinationSettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = CombinationSettings()

        self.assertEqual(25, settings.rate_limit_max_requests)
        self.assertEqual(60_000, settings.rate_limit_window_ms)
        self.assertEqual(2_000, settings.cooldown_ms)
        self.assertEqual(2.0, settings.release_delay_s)
        self.assertEqual((3, 15), (settings.min_word_length, settings.max_word_length))
        self.assertEqual(0.8, settings.word_temperature)
        self.assertEqual(10, settings.word_max_tokens)

    def test_from_env_reads_overrides(self) -> None:
        env = {
            "COMBINER_RATE_LIMIT_MAX_REQUESTS": "10",
            "COMBINER_COOLDOWN_MS": "500",
            "COMBINER_RELEASE_DELAY_S": "0.5",
            "COMBINER_MAX_WORD_LENGTH": "12",
        }
        with mock.patch.dict(os.environ, env, clear=False):
            settings = CombinationSettings.from_env()

        self.assertEqual(10, settings.rate_limit_max_requests)
        self.assertEqual(500, settings.cooldown_ms)
        self.assertEqual(0.5, settings.release_delay_s)
        self.assertEqual(12, settings.max_word_length)

    def test_out_of_range_values_are_clamped(self) -> None:
        settings = CombinationSettings(
            rate_limit_max_requests=0,
            cooldown_ms=-5,
            min_word_length=6,
            max_word_length=2,
            word_temperature=9.0,
        )

        self.assertEqual(1, settings.rate_limit_max_requests)
        self.assertEqual(0, settings.cooldown_ms)
        self.assertEqual(6, settings.max_word_length)
        self.assertEqual(2.0, settings.word_temperature)


class BootstrapTests(unittest.TestCase):
    def test_no_api_key_means_no_text_client(self) -> None:
        self.assertIsNone(build_text_client())

    def test_generation_can_be_disabled_with_a_key_present(self) -> None:
        env = {"COMBINER_LLM_API_KEY": "secret", "COMBINER_GENERATIVE_ENABLED": "0"}
        with mock.patch.dict(os.environ, env, clear=False):
            self.assertIsNone(build_text_client())

    def test_lookup_store_requires_a_directory(self) -> None:
        self.assertIsNone(build_lookup_store())

    def test_session_wires_settings_into_gates(self) -> None:
        settings = CombinationSettings(rate_limit_max_requests=4, cooldown_ms=750, release_delay_s=0)

        session = create_combination_session(settings, repository=InMemoryCombinationRecordRepository())

        self.assertEqual(4, session.pipeline.rate_limiter.max_requests)
        self.assertEqual(750, session.guard.cooldown_ms)
        self.assertIsNone(session.pipeline.text_client)
        self.assertEqual(4, len(session.elements))


if __name__ == "__main__":
    unittest.main()
