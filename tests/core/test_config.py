"""
Tests for configuration management.
"""

import json
import os

from chefcampaign.core.config import (
    get_config,
    get_config_value,
    set_config_value,
    deep_merge,
    get_user_config_path
)


class TestConfig:
    """
    Tests for the layered configuration.
    """

    def test_defaults_loaded(self):
        """
        Test that the packaged defaults are available.
        """
        assert get_config_value("generated_concept.temperature") == 0.9
        assert get_config_value("generated_concept.max_tokens") == 2048
        assert get_config_value("image_generation.default_model") == "recraft"
        assert get_config_value("image_generation.recraft.style") == "realistic_image"
        assert get_config_value("image_generation.gemini.aspect_ratio") == "1:1"

    def test_missing_key_returns_default(self):
        assert get_config_value("nonexistent.key", "fallback") == "fallback"
        assert get_config_value("generated_concept.nonexistent") is None

    def test_null_value_returns_default(self):
        """
        Test that a null value in the configuration falls back to the default.
        """
        assert get_config_value("http.timeout", 30) == 30

    def test_user_config_is_deep_merged(self, tmp_path):
        """
        Test that a user file overrides single nested keys without dropping siblings.
        """
        user_config = {"image_generation": {"recraft": {"style": "digital_illustration"}}}
        with open(get_user_config_path(), "w") as f:
            json.dump(user_config, f)

        get_config(reload=True)

        assert get_config_value("image_generation.recraft.style") == "digital_illustration"
        assert get_config_value("image_generation.recraft.size") == "1024x1024"
        assert get_config_value("image_generation.default_model") == "recraft"

    def test_set_config_value_without_saving(self):
        set_config_value("generated_concept.temperature", 0.5, save=False)

        assert get_config_value("generated_concept.temperature") == 0.5
        assert not os.path.exists(get_user_config_path())

    def test_set_config_value_creates_sections_and_saves(self):
        set_config_value("server.extra.flag", True)

        assert get_config_value("server.extra.flag") is True
        with open(get_user_config_path()) as f:
            saved = json.load(f)
        assert saved["server"]["extra"]["flag"] is True

    def test_deep_merge(self):
        base = {"a": {"b": 1, "c": 2}, "d": 3}
        deep_merge(base, {"a": {"b": 10}, "e": 4})

        assert base == {"a": {"b": 10, "c": 2}, "d": 3, "e": 4}

    def test_deep_merge_replaces_non_dict(self):
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": "flat"})

        assert base == {"a": "flat"}
