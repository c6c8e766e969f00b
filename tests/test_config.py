# tests/test_config.py - Tests for configuration management
"""
Unit tests for the Config class.
"""

import pytest
import yaml
from pageload_profiler.utils.config import Config


class TestConfig:
    """Test cases for Config"""

    def test_defaults(self):
        """Test default quiet period thresholds"""
        config = Config()

        assert config.get('interactive.min_quiet_duration_ms') == 5000
        assert config.get('interactive.max_concurrent_network_requests') == 2
        assert config.get('output.format') == 'stdout'

    def test_get_missing_key(self):
        """Test missing keys fall back to the default"""
        config = Config()

        assert config.get('interactive.unknown') is None
        assert config.get('nope.nothing', 42) == 42

    def test_set_creates_sections(self):
        """Test setting a nested key"""
        config = Config()
        config.set('output.format', 'json')
        config.set('extra.key', 1)

        assert config.get('output.format') == 'json'
        assert config.get('extra.key') == 1

    def test_instances_do_not_share_defaults(self):
        """Test changing one config leaves new instances untouched"""
        Config().set('interactive.min_quiet_duration_ms', 1)

        assert Config().get('interactive.min_quiet_duration_ms') == 5000

    def test_load_from_file_merges(self, tmp_path):
        """Test file values override defaults without dropping siblings"""
        config_file = tmp_path / 'config.yaml'
        config_file.write_text(yaml.dump({'interactive': {'min_quiet_duration_ms': 3000}}))

        config = Config(str(config_file))

        assert config.get('interactive.min_quiet_duration_ms') == 3000
        assert config.get('interactive.max_concurrent_network_requests') == 2

    def test_missing_file_keeps_defaults(self, tmp_path):
        """Test a missing config file is not fatal"""
        config = Config(str(tmp_path / 'missing.yaml'))

        assert config.get('interactive.min_quiet_duration_ms') == 5000

    def test_negative_threshold_rejected(self, tmp_path):
        """Test invalid thresholds are rejected on load"""
        config_file = tmp_path / 'config.yaml'
        config_file.write_text(yaml.dump({'interactive': {'max_concurrent_network_requests': -1}}))

        with pytest.raises(ValueError):
            Config(str(config_file))

    def test_save_to_file(self, tmp_path):
        """Test saved configuration can be loaded back"""
        config_file = tmp_path / 'saved.yaml'
        config = Config()
        config.set('interactive.min_quiet_duration_ms', 4000)

        config.save_to_file(str(config_file))

        assert Config(str(config_file)).get('interactive.min_quiet_duration_ms') == 4000

    def test_to_dict_is_a_copy(self):
        """Test the exported dictionary does not alias the config"""
        config = Config()
        exported = config.to_dict()
        exported['interactive']['min_quiet_duration_ms'] = 1

        assert config.get('interactive.min_quiet_duration_ms') == 5000
