import unittest
import os
import yaml
from unittest.mock import patch, mock_open

from ranker.config_loader import load_config, RankingConfig, SimilarityConfig, SkillMatchConfig
from ranker.exceptions import ConfigurationError
from ranker.scorer.service import RankingService


class TestConfigLoader(unittest.TestCase):

    def setUp(self):
        self.sample_config = {
            "similarity": {"degree_match_threshold": 80, "eligibility_match_threshold": 95},
            "skills": {"scoring_floor": 60, "token_weight": 25},
            "neutral_score": 90,
            "max_workers": 2,
        }
        self.config_yaml = yaml.dump(self.sample_config)

    def test_load_config_default(self):
        with patch("builtins.open", mock_open(read_data=self.config_yaml)):
            with patch("os.path.exists", return_value=True):
                config = load_config("dummy_path.yaml")
                self.assertIsInstance(config, RankingConfig)
                self.assertEqual(config.similarity.degree_match_threshold, 80)
                self.assertEqual(config.similarity.eligibility_match_threshold, 95)
                self.assertEqual(config.skills.scoring_floor, 60)
                self.assertEqual(config.neutral_score, 90)
                self.assertEqual(config.max_workers, 2)

    def test_unspecified_sections_use_defaults(self):
        with patch("builtins.open", mock_open(read_data=yaml.dump({"max_workers": 3}))):
            with patch("os.path.exists", return_value=True):
                config = load_config("dummy")
                self.assertEqual(config.similarity, SimilarityConfig())
                self.assertEqual(config.skills, SkillMatchConfig())
                self.assertEqual(config.neutral_score, 100.0)

    def test_missing_file_uses_defaults(self):
        with patch("os.path.exists", return_value=False):
            with patch.dict(os.environ, {}, clear=True):
                config = load_config("missing.yaml")
                self.assertEqual(config, RankingConfig())

    def test_env_var_override_workers(self):
        with patch("builtins.open", mock_open(read_data=self.config_yaml)):
            with patch("os.path.exists", return_value=True):
                with patch.dict(os.environ, {"RANKER_MAX_WORKERS": "6"}):
                    config = load_config("dummy_path.yaml")
                    self.assertEqual(config.max_workers, 6)

    def test_env_var_override_neutral_score(self):
        with patch("builtins.open", mock_open(read_data=self.config_yaml)):
            with patch("os.path.exists", return_value=True):
                with patch.dict(os.environ, {"RANKER_NEUTRAL_SCORE": "75"}):
                    config = load_config("dummy_path.yaml")
                    self.assertEqual(config.neutral_score, 75.0)

    def test_invalid_yaml(self):
        with patch("builtins.open", mock_open(read_data="similarity: [unclosed")):
            with patch("os.path.exists", return_value=True):
                with self.assertRaises(ConfigurationError):
                    load_config("broken.yaml")

    def test_non_mapping(self):
        with patch("builtins.open", mock_open(read_data="- a\n- b\n")):
            with patch("os.path.exists", return_value=True):
                with self.assertRaises(ConfigurationError):
                    load_config("list.yaml")

    def test_invalid_value(self):
        with patch("builtins.open", mock_open(read_data=yaml.dump({"max_workers": "many"}))):
            with patch("os.path.exists", return_value=True):
                with self.assertRaises(ConfigurationError):
                    load_config("bad.yaml")


class TestRelatedFieldsFile(unittest.TestCase):

    def test_service_loads_configured_table(self):
        config = RankingConfig(similarity=SimilarityConfig(related_fields_file="/nonexistent.yaml"))
        with self.assertRaises(ConfigurationError):
            RankingService(config)

    def test_service_uses_packaged_table_by_default(self):
        service = RankingService(RankingConfig())
        self.assertTrue(service.related_fields.are_related("Computer Science", "Information Technology"))


if __name__ == '__main__':
    unittest.main()
