"""Tests for argument parsing, configuration and the CLI entry point."""
import json
import logging
import os
from unittest.mock import patch

import pytest

from args import parse_args
from catalog.models import CatalogQuery
from cli_config import apply_catalog_overrides, load_config
from common.errors import CatalogError, CatalogTimeoutError, NetworkError, NotFoundError
from constants import Constants, ExitCodes, apply_config
from conftest import DATA_DIR
from jdkresolve import build_query, format_result, main, run
from versioning.models import DownloadCandidate

FALLBACK_FILE = os.path.join(DATA_DIR, "microsoft_catalog.json")


def _args(*extra):
    return parse_args(["-v", "17", "--os", "linux", "--arch", "x64", *extra])


class TestArgParsing:
    """Tests for CLI argument parsing."""

    def test_defaults(self):
        ns = parse_args(["-v", "17"])
        assert ns.VERSION == "17"
        assert ns.VENDOR == "adoptium"
        assert ns.IMAGE_TYPE == "jdk"
        assert ns.JVM_IMPL is None
        assert ns.OUTPUT_FORMAT == "text"
        assert ns.QUIET is False

    def test_version_required(self):
        with pytest.raises(SystemExit):
            parse_args([])

    def test_choices_case_insensitive(self):
        ns = parse_args(["-v", "17", "--vendor", "Microsoft", "--jvm-impl", "OpenJ9", "--loglevel", "debug"])
        assert ns.VENDOR == "microsoft"
        assert ns.JVM_IMPL == "openj9"
        assert ns.LOG_LEVEL == "DEBUG"

    def test_unknown_vendor_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["-v", "17", "--vendor", "oracle"])

    @pytest.mark.parametrize("flag,value", [("--page-size", "0"), ("--max-pages", "-1"), ("--deadline", "-5")])
    def test_numeric_validation(self, flag, value):
        with pytest.raises(SystemExit):
            parse_args(["-v", "17", flag, value])


class TestConfig:
    """YAML config and CLI overrides update Constants."""

    def test_apply_config_sections(self):
        apply_config({
            "catalog": {"base_url": "https://mirror.test", "page_size": "50", "deadline_sec": 60},
            "http": {"retry_max": 5},
        })

        assert Constants.CATALOG_BASE_URL == "https://mirror.test"
        assert Constants.CATALOG_PAGE_SIZE == 50
        assert Constants.CATALOG_FETCH_DEADLINE_SEC == 60.0
        assert Constants.HTTP_RETRY_MAX == 5

    def test_apply_config_ignores_invalid_values(self, caplog):
        original = Constants.CATALOG_PAGE_SIZE
        with caplog.at_level(logging.WARNING):
            apply_config({"catalog": {"page_size": "twenty"}, "unknown": {"x": 1}})

        assert Constants.CATALOG_PAGE_SIZE == original
        assert "Invalid value for catalog.page_size" in caplog.text

    def test_load_config_explicit_file(self, tmp_path):
        path = tmp_path / "jdkresolve.yml"
        path.write_text("catalog:\n  max_pages: 7\n", encoding="utf-8")

        load_config(parse_args(["-v", "17", "--config", str(path)]))

        assert Constants.CATALOG_MAX_PAGES == 7

    def test_load_config_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(parse_args(["-v", "17", "--config", str(tmp_path / "nope.yml")]))

    def test_load_config_default_location(self, tmp_path, monkeypatch):
        (tmp_path / "jdkresolve.yaml").write_text("http:\n  request_timeout: 5\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv(Constants.ENV_CONFIG, raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

        load_config(parse_args(["-v", "17"]))

        assert Constants.REQUEST_TIMEOUT == 5.0

    def test_cli_overrides(self):
        apply_catalog_overrides(_args("--base-url", "http://local", "--page-size", "10",
                                      "--max-pages", "3", "--deadline", "0"))

        assert Constants.CATALOG_BASE_URL == "http://local"
        assert Constants.CATALOG_PAGE_SIZE == 10
        assert Constants.CATALOG_MAX_PAGES == 3
        assert Constants.CATALOG_FETCH_DEADLINE_SEC == 0.0


class TestBuildQuery:
    """CLI arguments become a catalog query in marketplace vocabulary."""

    def test_explicit_platform_mapped(self):
        query = build_query(parse_args(["-v", "17", "--vendor", "microsoft", "--os", "darwin", "--arch", "arm64"]))

        assert query == CatalogQuery("microsoft", "mac", "aarch64", "jdk", "hotspot")

    def test_vendor_default_jvm_impl(self):
        assert build_query(_args("--vendor", "ibm")).jvm_impl == "openj9"
        assert build_query(_args("--vendor", "ibm", "--jvm-impl", "hotspot")).jvm_impl == "hotspot"

    @patch("jdkresolve.detect_architecture", return_value="x64")
    @patch("jdkresolve.detect_platform", return_value="windows")
    def test_detected_platform(self, mock_platform, mock_arch):
        query = build_query(parse_args(["-v", "17", "--image-type", "jre"]))

        assert (query.os, query.arch, query.image_type) == ("windows", "x64", "jre")


class TestRun:
    """run() maps outcomes to exit codes and output."""

    @pytest.fixture(autouse=True)
    def no_user_config(self):
        with patch("cli_config._load_yaml_config", return_value={}):
            yield

    @patch("jdkresolve.PackageResolver")
    def test_success_text(self, mock_resolver, capsys):
        mock_resolver.return_value.resolve.return_value = DownloadCandidate("17.0.7+7", "https://dl/jdk.tar.gz")

        code = run(_args("--vendor", "microsoft"))

        assert code == ExitCodes.SUCCESS.value
        assert capsys.readouterr().out.strip() == "17.0.7+7 https://dl/jdk.tar.gz"
        query, fallback = mock_resolver.call_args.args
        assert query.vendor == "microsoft"
        assert fallback == []

    @patch("jdkresolve.PackageResolver")
    def test_success_json(self, mock_resolver, capsys):
        mock_resolver.return_value.resolve.return_value = DownloadCandidate("17.0.7+7", "https://dl/jdk.tar.gz")

        run(_args("-f", "json"))

        out = json.loads(capsys.readouterr().out)
        assert out == {
            "version": "17.0.7+7",
            "url": "https://dl/jdk.tar.gz",
            "vendor": "adoptium",
            "distribution": "Temurin",
            "os": "linux",
            "arch": "x64",
            "image_type": "jdk",
            "jvm_impl": "hotspot",
        }

    @patch("jdkresolve.PackageResolver")
    def test_success_reports_distribution_name(self, mock_resolver, capsys, caplog):
        mock_resolver.return_value.resolve.return_value = DownloadCandidate("17.0.7+7", "https://dl/jdk.tar.gz")

        with caplog.at_level(logging.INFO, logger="jdkresolve"):
            run(_args("--vendor", "ibm", "-f", "json"))

        assert json.loads(capsys.readouterr().out)["distribution"] == "Semeru"
        assert "Resolved Java 17.0.7+7 (Semeru)" in caplog.text

    @patch("jdkresolve.PackageResolver")
    def test_quiet(self, mock_resolver, capsys):
        mock_resolver.return_value.resolve.return_value = DownloadCandidate("17.0.7+7", "u")

        assert run(_args("-q")) == ExitCodes.SUCCESS.value
        assert capsys.readouterr().out == ""

    @pytest.mark.parametrize("error,code", [
        (NotFoundError("8", ["17.0.7+7"]), ExitCodes.NOT_FOUND),
        (NetworkError("down"), ExitCodes.CONNECTION_ERROR),
        (CatalogTimeoutError(301.0, 300.0), ExitCodes.CONNECTION_ERROR),
        (CatalogError("garbage"), ExitCodes.CATALOG_ERROR),
    ])
    @patch("jdkresolve.PackageResolver")
    def test_error_exit_codes(self, mock_resolver, error, code, caplog):
        mock_resolver.return_value.resolve.side_effect = error

        with caplog.at_level(logging.ERROR):
            assert run(_args()) == code.value
        assert caplog.records

    @patch("catalog.fetcher.robust_get")
    def test_invalid_specifier(self, mock_get):
        assert run(parse_args(["-v", "not-a-version", "--os", "linux", "--arch", "x64"])) == ExitCodes.USAGE_ERROR.value
        mock_get.assert_not_called()

    @patch("catalog.fetcher.robust_get", return_value=(200, {}, "[]"))
    def test_fallback_file_end_to_end(self, mock_get, capsys):
        code = run(_args("--vendor", "microsoft", "--fallback-file", FALLBACK_FILE))

        assert code == ExitCodes.SUCCESS.value
        assert capsys.readouterr().out.strip() == (
            "17.0.7+7 https://aka.ms/download-jdk/microsoft-jdk-17.0.7-linux-x64.tar.gz"
        )

    def test_missing_fallback_file(self, tmp_path):
        code = run(_args("--fallback-file", str(tmp_path / "missing.json")))

        assert code == ExitCodes.FILE_ERROR.value

    def test_malformed_fallback_file(self, tmp_path):
        path = tmp_path / "fallback.json"
        path.write_text('{"not": "a list"}', encoding="utf-8")

        assert run(_args("--fallback-file", str(path))) == ExitCodes.FILE_ERROR.value


class TestMain:

    @patch("jdkresolve.run", return_value=ExitCodes.NOT_FOUND.value)
    @patch("jdkresolve.configure_logging")
    def test_exits_with_run_code(self, mock_logging, mock_run):
        with pytest.raises(SystemExit) as excinfo:
            main(["-v", "8", "--loglevel", "DEBUG"])

        assert excinfo.value.code == ExitCodes.NOT_FOUND.value
        mock_logging.assert_called_once_with("DEBUG")


def test_format_result_text():
    query = CatalogQuery("adoptium", "linux", "x64")
    assert format_result(DownloadCandidate("11.0.19+7", "https://u"), query, "text") == "11.0.19+7 https://u"
