"""Tests for the root scripts that editor tasks invoke."""
import pytest

import check_config
import init_configs
import update_metrics
from mlconfig.config import metadata_path, api_config_path
from mlconfig.documents import load_document, save_document
from mlconfig.domain.errors import DocumentError


class TestInitConfigs:

    def test_creates_both_documents(self, test_settings):
        assert init_configs.main([]) == 0

        assert load_document(metadata_path())["project_name"] == "sentiment-classifier"
        assert "settings" in load_document(api_config_path())

    def test_help_writes_nothing(self, test_settings):
        with pytest.raises(SystemExit) as excinfo:
            init_configs.main(["--help"])

        assert excinfo.value.code == 0
        assert not metadata_path().exists()
        assert not api_config_path().exists()

    def test_unknown_flag_rejected(self, test_settings):
        with pytest.raises(SystemExit) as excinfo:
            init_configs.main(["--froce"])

        assert excinfo.value.code == 2
        assert not metadata_path().exists()

    def test_asks_before_overwriting(self, test_settings):
        init_configs.init_configs()
        save_document(metadata_path(), {"project_name": "edited"})

        written = init_configs.init_configs(confirm=lambda prompt: "n")

        assert written == 0
        assert load_document(metadata_path()) == {"project_name": "edited"}

    def test_confirmed_overwrite(self, test_settings):
        init_configs.init_configs()
        save_document(metadata_path(), {"project_name": "edited"})

        assert init_configs.init_configs(confirm=lambda prompt: "y") == 2
        assert load_document(metadata_path())["project_name"] == "sentiment-classifier"

    def test_force_skips_prompt(self, test_settings):
        init_configs.init_configs()

        def never(prompt):
            raise AssertionError("should not prompt")

        assert init_configs.init_configs(force=True, confirm=never) == 2


class TestUpdateMetrics:

    def test_parse_metrics(self):
        assert update_metrics.parse_metrics(["accuracy=0.9", "epochs=3", "notes=ok", "tags=[1,2]"]) == {
            "accuracy": 0.9,
            "epochs": 3,
            "notes": "ok",
            "tags": [1, 2],
        }

    def test_parse_metrics_rejects_bad_argument(self):
        with pytest.raises(DocumentError, match="name=value"):
            update_metrics.parse_metrics(["accuracy"])

    def test_main_updates_document(self, test_settings, capsys):
        init_configs.init_configs()

        assert update_metrics.main(["accuracy=0.95", "auc=0.9"]) == 0

        metrics = load_document(metadata_path())["performance_metrics"]
        assert metrics["accuracy"] == 0.95
        assert metrics["custom_metrics"]["auc"] == 0.9
        assert "performance_metrics.accuracy = 0.95" in capsys.readouterr().out

    def test_main_requires_metrics(self, test_settings):
        init_configs.init_configs()
        before = load_document(metadata_path())

        with pytest.raises(SystemExit) as excinfo:
            update_metrics.main([])

        assert excinfo.value.code == 2
        assert load_document(metadata_path()) == before

    def test_main_without_document(self, test_settings):
        assert update_metrics.main(["accuracy=0.95"]) == 1


class TestCheckConfig:

    def test_missing_documents(self, test_settings, capsys):
        assert check_config.main([]) == 1
        assert "MISSING" in capsys.readouterr().out

    def test_broken_document(self, test_settings, capsys):
        init_configs.init_configs()
        api_config_path().write_text('{"openai": {', encoding="utf-8")

        assert check_config.main([]) == 1
        assert "INVALID" in capsys.readouterr().out

    def test_non_utf8_document(self, test_settings, capsys):
        init_configs.init_configs()
        metadata_path().write_bytes(b'{"project_name": "caf\xe9"}')

        assert check_config.main([]) == 1
        assert "INVALID" in capsys.readouterr().out

    def test_unknown_flag_rejected(self, test_settings):
        init_configs.init_configs()
        with pytest.raises(SystemExit) as excinfo:
            check_config.main(["--fromat"])
        assert excinfo.value.code == 2

    def test_valid_documents_mask_credentials(self, test_settings, capsys, monkeypatch):
        init_configs.init_configs()
        monkeypatch.setenv("OPENAI_API_KEY", "sk-live-abcdefghijkl")

        assert check_config.main([]) == 0

        out = capsys.readouterr().out
        assert "sk...kl" in out
        assert "sk-live-abcdefghijkl" not in out
        assert "sentiment-classifier" in out

    def test_format_flag(self, test_settings, capsys):
        init_configs.init_configs()
        metadata_path().write_text('{"project_name": "compact"}', encoding="utf-8")

        assert check_config.main(["--format"]) == 0
        assert "(reformatted)" in capsys.readouterr().out
        assert metadata_path().read_text(encoding="utf-8") == '{\n  "project_name": "compact"\n}\n'
