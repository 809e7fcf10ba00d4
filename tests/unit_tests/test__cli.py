import json

import pytest
from click.testing import CliRunner

from catalog_api.cli import cli
from catalog_api.config.settings import get_settings


@pytest.fixture
def runner(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STORAGE_BACKEND", "json-file")
    monkeypatch.setenv("DATA_FILE", str(tmp_path / "data" / "catalog.json"))
    monkeypatch.setenv("AWS_S3_BUCKET_NAME", "cli-bucket")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "very-secret")
    get_settings.cache_clear()
    yield CliRunner()
    get_settings.cache_clear()


def test_show_config(runner):
    result = runner.invoke(cli, ["show-config"])

    assert result.exit_code == 0, result.output
    assert "Current Configuration:" in result.output
    assert "s3_bucket_name: cli-bucket" in result.output
    assert "very-secret" not in result.output


def test_show_config_as_json(runner):
    result = runner.invoke(cli, ["show-config", "--as-json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["storage_backend"] == "json-file"


def test_env_file_option(runner, tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text("AWS_S3_BUCKET_NAME=from-env-file\n", encoding="utf-8")

    result = runner.invoke(cli, ["--env-file", str(env_file), "show-config", "--as-json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["s3_bucket_name"] == "from-env-file"


def test_init_store_creates_data_file(runner, tmp_path):
    result = runner.invoke(cli, ["init-store"])

    assert result.exit_code == 0, result.output
    assert "json-file" in result.output
    data = json.loads((tmp_path / "data" / "catalog.json").read_text(encoding="utf-8"))
    assert data == {"products": [], "categories": []}
