# -------------------------------------------------------------------------------------------------
#  Copyright (C) 2015-2025 Nautech Systems Pty Ltd. All rights reserved.
#  https://nautechsystems.io
#
#  Licensed under the GNU Lesser General Public License Version 3.0 (the "License");
#  You may not use this file except in compliance with the License.
#  You may obtain a copy of the License at https://www.gnu.org/licenses/lgpl-3.0.en.html
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.
# -------------------------------------------------------------------------------------------------
"""
Tests for configuration flags and loading.
"""

import json

import pytest
import yaml

from injectree import config as config_module
from injectree.config import Configuration, get_configuration, load_mapping
from injectree.exceptions import ConfigurationError


class TestConfiguration:

    def test_defaults(self):
        config = Configuration()

        assert not config.is_strict()
        assert not config.is_initialized()

    def test_raw_accessors(self):
        config = Configuration()

        config.set_strict(True)
        config.set_initialized(True)

        assert config.is_strict()
        assert config.is_initialized()

    def test_configure_is_write_once(self):
        config = Configuration()

        assert config.configure(True) is config
        assert config.is_strict()
        assert config.is_initialized()

        with pytest.raises(ConfigurationError, match="can only be initialized once") as exc_info:
            config.configure(False)

        assert exc_info.value.suggestion is not None
        assert "Suggestion:" in str(exc_info.value)
        assert config.is_strict()

    def test_configure_reuses_module_logger(self, monkeypatch):
        def fail(name):
            raise AssertionError(f"Logger created for {name}")

        monkeypatch.setattr(config_module, "Logger", fail)

        assert Configuration().configure(True).is_strict()

    def test_normalize(self):
        config = Configuration()

        assert config.normalize("FooBar") == "foobar"
        assert config.normalize(None) is None
        assert config.normalize("   ") == "   "
        assert config.normalize(42) == 42

    def test_strict_normalize_keeps_case(self):
        assert Configuration(strict=True).normalize("FooBar") == "FooBar"

    def test_to_dict(self):
        assert Configuration(strict=True).to_dict() == {"strict": True, "initialized": False}

    def test_global_configuration_is_shared(self):
        assert get_configuration() is get_configuration()


class TestConfigurationLoading:

    def test_from_dict(self):
        config = Configuration.from_dict({"strict": True})

        assert config.is_strict()
        assert config.is_initialized()

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ConfigurationError, match="Unknown configuration keys: verbose"):
            Configuration.from_dict({"strict": True, "verbose": True})

    def test_from_dict_rejects_initialized_key(self):
        with pytest.raises(ConfigurationError, match="Unknown configuration keys: initialized"):
            Configuration.from_dict({"strict": False, "initialized": False})

    def test_from_yaml_file(self, tmp_path):
        path = tmp_path / "injectree.yaml"
        path.write_text("strict: true\n")

        assert Configuration.from_file(path).is_strict()

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "injectree.json"
        path.write_text(json.dumps({"strict": False}))

        config = Configuration.from_file(str(path))

        assert not config.is_strict()
        assert config.is_initialized()

    def test_from_empty_file(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")

        assert not Configuration.from_file(path).is_strict()

    def test_to_file_round_trip(self, tmp_path):
        yaml_path = tmp_path / "nested" / "injectree.yaml"
        json_path = tmp_path / "injectree.json"

        Configuration(strict=True).to_file(yaml_path)
        Configuration(strict=True).to_file(json_path, format="json")

        assert yaml.safe_load(yaml_path.read_text()) == {"strict": True}
        assert json.loads(json_path.read_text()) == {"strict": True}
        assert Configuration.from_file(yaml_path).is_strict()

    def test_to_file_unsupported_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported format: toml"):
            Configuration().to_file(tmp_path / "injectree.toml", format="toml")

    @pytest.mark.parametrize("value", ["true", "1", "YES", "on"])
    def test_from_environment_truthy(self, monkeypatch, value):
        monkeypatch.setenv("INJECTREE_STRICT", value)

        assert Configuration.from_environment().is_strict()

    @pytest.mark.parametrize("value", ["false", "0", "no", ""])
    def test_from_environment_falsy(self, monkeypatch, value):
        monkeypatch.setenv("INJECTREE_STRICT", value)

        assert not Configuration.from_environment().is_strict()

    def test_from_environment_unset(self, monkeypatch):
        monkeypatch.delenv("INJECTREE_STRICT", raising=False)

        config = Configuration.from_environment()

        assert not config.is_strict()
        assert config.is_initialized()

    def test_from_environment_custom_prefix(self, monkeypatch):
        monkeypatch.setenv("APP_STRICT", "true")

        assert Configuration.from_environment(prefix="APP_").is_strict()


class TestLoadMapping:

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            load_mapping(tmp_path / "missing.yaml")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "injectree.toml"
        path.write_text("strict = true")

        with pytest.raises(ConfigurationError, match="Unsupported configuration file format: .toml"):
            load_mapping(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="Failed to parse configuration file"):
            load_mapping(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("strict: [unclosed")

        with pytest.raises(ConfigurationError, match="Failed to parse configuration file"):
            load_mapping(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- strict\n")

        with pytest.raises(ConfigurationError, match="must hold a mapping"):
            load_mapping(path)
