"""Tests for the wiktglot command line."""
import argparse

import orjson
import pytest

import wiktglot.cli.lookup as cli
from wiktglot.cli.lookup import EXIT_CONFIG, EXIT_FAILED, EXIT_OK, build_parser, load_config, main
from wiktglot.resolver import Resolver


@pytest.fixture
def offline(monkeypatch, make_client):
    """Route the CLI's resolvers to in-memory pages."""
    def install(**client_settings):
        client = make_client(**client_settings)
        monkeypatch.setattr(cli, "Resolver", lambda config: Resolver(config, client=client))
        return client
    return install


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("WIKTGLOT_TIMEOUT", "WIKTGLOT_RATE_LIMIT"):
        monkeypatch.delenv(name, raising=False)


class TestLookupCommand:
    """Tests for `wiktglot lookup`."""

    def test_json(self, offline, capsys):
        """JSON output carries the word, languages and groups."""
        offline()
        assert main(["lookup", "bonjour", "--from", "fr", "--to", "en", "--json"]) == EXIT_OK

        data = orjson.loads(capsys.readouterr().out)
        assert data["word"] == "bonjour"
        assert data["source_language"] == "fr"
        assert [g["part_of_speech"] for g in data["groups"]] == ["noun", "interjection"]

    def test_json_correction(self, offline, capsys):
        """A corrected lookup reports both spellings in JSON."""
        offline()
        assert main(["lookup", "azucar", "--from", "es", "--to", "en", "--json"]) == EXIT_OK

        data = orjson.loads(capsys.readouterr().out)
        assert data["searched_for"] == "azucar"
        assert data["found_as"] == "azúcar"

    def test_table(self, offline, capsys):
        """The table view lists every rendering."""
        offline()
        assert main(["lookup", "cat", "--from", "en", "--to", "fr"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "caponner" in out
        assert "chatte" in out

    def test_invalid_pair(self, offline):
        """A pair without English exits before any request."""
        client = offline()
        assert main(["lookup", "hola", "--from", "es", "--to", "fr"]) == EXIT_CONFIG
        assert client.calls == 0

    def test_not_found(self, offline):
        """A missing page exits with the failure code."""
        offline()
        assert main(["lookup", "qwertyuiop", "--from", "es", "--to", "en"]) == EXIT_FAILED

    def test_missing_languages(self):
        """Both --from and --to are required."""
        with pytest.raises(SystemExit):
            main(["lookup", "bonjour", "--from", "fr"])


class TestSearchCommand:
    """Tests for `wiktglot search`."""

    def test_plain(self, offline, capsys):
        """Titles outside the language's script are dropped."""
        offline(search_results={"annyeong": ["안녕", "Annyeong", "안녕하세요"]})
        assert main(["search", "annyeong", "--lang", "ko"]) == EXIT_OK
        assert capsys.readouterr().out.split() == ["안녕", "안녕하세요"]

    def test_json(self, offline, capsys):
        """--json prints the unfiltered title list."""
        offline(search_results={"annyeong": ["안녕", "Annyeong"]})
        assert main(["search", "annyeong", "--json"]) == EXIT_OK
        assert orjson.loads(capsys.readouterr().out) == ["안녕", "Annyeong"]

    def test_unknown_language(self, offline):
        """An unknown language tag is a configuration error."""
        offline()
        assert main(["search", "annyeong", "--lang", "xx"]) == EXIT_CONFIG


class TestLanguagesCommand:

    def test_lists_tags(self, capsys):
        """Every tag is listed and the pivot is marked."""
        assert main(["languages"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "ja" in out
        assert "(pivot)" in out


class TestLoadConfig:
    """Tests for command-line overrides."""

    def test_defaults(self):
        """Without flags, pacing stays off."""
        args = build_parser().parse_args(["lookup", "x", "--from", "fr", "--to", "en"])
        config = load_config(args)
        assert not config.pacing_enabled

    def test_overrides(self):
        """--timeout and --rate override the environment."""
        args = build_parser().parse_args([
            "lookup", "x", "--from", "fr", "--to", "en", "--timeout", "3", "--rate", "4/2",
        ])
        config = load_config(args)
        assert config.timeout == 3.0
        assert (config.rate_limit_requests, config.rate_limit_window) == (4, 2.0)

    def test_config_file(self, tmp_path):
        """--config reads settings from a YAML file."""
        path = tmp_path / "wiktglot.yaml"
        path.write_text("timeout: 6\nsearch_limit: 2\n")
        args = argparse.Namespace(config=path, timeout=None, rate=None)
        config = load_config(args)
        assert config.timeout == 6
        assert config.search_limit == 2

    def test_bad_rate(self, capsys):
        """A malformed --rate exits with the configuration code."""
        assert main(["lookup", "x", "--from", "fr", "--to", "en", "--rate", "fast"]) == EXIT_CONFIG

    def test_non_numeric_timeout_env(self, offline, monkeypatch):
        """A malformed environment variable exits with the configuration code."""
        client = offline()
        monkeypatch.setenv("WIKTGLOT_TIMEOUT", "ten")
        assert main(["lookup", "bonjour", "--from", "fr", "--to", "en"]) == EXIT_CONFIG
        assert client.calls == 0

    def test_wrong_type_in_config_file(self, offline, tmp_path):
        """A wrong-typed YAML value exits with the configuration code."""
        client = offline()
        path = tmp_path / "wiktglot.yaml"
        path.write_text("timeout: fast\n")
        assert main(["lookup", "bonjour", "--from", "fr", "--to", "en", "--config", str(path)]) == EXIT_CONFIG
        assert client.calls == 0
