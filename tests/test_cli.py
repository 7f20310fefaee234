"""Tests for the oc-info command line."""

import httpx
from click.testing import CliRunner

from ocinfo import __version__
from ocinfo.cli import main
from ocinfo.config import Settings

REGISTRY_URL = "https://registry.example.com/"

COMPONENTS = {
    "header": {
        "name": "header",
        "version": "1.0.0",
        "author": "Jane <jane@x.com>",
        "dependencies": {"lodash": "^4.17.0"},
        "oc": {"plugins": ["getUser"]},
    },
    "footer": {
        "name": "footer",
        "version": "2.0.0",
        "author": {"name": "Bob"},
        "dependencies": {"lodash": "^4.17.0", "moment": "2.x"},
    },
    "legacy": {
        "name": "legacy",
        "version": "0.1.0",
        "author": "Old Timer",
        "oc": {"state": "deprecated"},
        "dependencies": {"jquery": "1.x"},
    },
}


def _handler(components=COMPONENTS, broken=()):
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/":
            hrefs = [f"https://registry.example.com/{n}" for n in [*components, *broken]]
            return httpx.Response(200, json={"type": "oc-registry", "components": hrefs})
        name = path.strip("/").split("/")[0]
        if name in components:
            return httpx.Response(200, json=components[name])
        return httpx.Response(500, text="boom")

    return httpx.MockTransport(handler)


def _invoke(args, transport=None, env=None):
    runner = CliRunner()
    return runner.invoke(main, args, obj={"transport": transport or _handler()}, env=env)


# --- Usage Tests ---


def test_missing_arguments_prints_usage():
    result = _invoke([])
    assert result.exit_code == 1
    assert "Usage: oc-info https://your-registry-url.domain.com <option>" in result.output


def test_missing_option_prints_usage():
    result = _invoke([REGISTRY_URL])
    assert result.exit_code == 1
    assert "Available options:" in result.output


def test_invalid_option():
    result = _invoke([REGISTRY_URL, "versions"])
    assert result.exit_code == 1
    assert "option versions is not valid" in result.output
    assert "Available options:" in result.output


def test_unknown_flag_is_a_usage_error():
    result = _invoke([REGISTRY_URL, "authors", "--everything"])
    assert result.exit_code == 1
    assert "Available options:" in result.output


def test_version():
    result = _invoke(["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


# --- Report Tests ---


def test_authors_report():
    result = _invoke([REGISTRY_URL, "authors"])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "Found 2 component authors for 2 active components:",
        "* Bob (1)",
        "* Jane <jane@x.com> (1)",
    ]


def test_dependencies_report_with_details():
    result = _invoke([REGISTRY_URL, "dependencies", "--details"])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "Found 2 node.js dependencies for 2 active components:",
        "* lodash (2)",
        "\t* header@1.0.0",
        "\t* footer@2.0.0",
        "* moment (1)",
        "\t* footer@2.0.0",
    ]


def test_plugins_report():
    result = _invoke([REGISTRY_URL, "plugins"])
    assert result.exit_code == 0
    assert "Found 1 node.js plugins for 2 active components:" in result.output
    assert "* getUser (1)" in result.output


def test_deprecated_component_never_reported():
    for option in ("authors", "dependencies", "plugins"):
        result = _invoke([REGISTRY_URL, option])
        assert result.exit_code == 0
        assert "for 2 active components" in result.output
        assert "Old Timer" not in result.output
        assert "jquery" not in result.output


# --- Error Tests ---


def test_invalid_registry_exits_with_error():
    transport = httpx.MockTransport(lambda _: httpx.Response(200, json={"type": "npm"}))
    result = _invoke([REGISTRY_URL, "authors"], transport=transport)
    assert result.exit_code == 1
    assert "oc registry url is not valid" in result.output


def test_failed_fetch_aborts_before_aggregation(monkeypatch):
    def fail_aggregate(*args, **kwargs):
        raise AssertionError("aggregate must not run after a failed fetch")

    monkeypatch.setattr("ocinfo.cli.aggregate", fail_aggregate)
    result = _invoke([REGISTRY_URL, "authors"], transport=_handler(broken=["broken"]))
    assert result.exit_code == 1
    assert "could not fetch info for https://registry.example.com/broken" in result.output
    assert "Found" not in result.output


# --- Configuration Tests ---


def test_verbose_logs_requests():
    result = _invoke([REGISTRY_URL, "authors", "--verbose"])
    assert result.exit_code == 0
    assert "Fetching info for 3 components" in result.output


def test_settings_from_env():
    settings = Settings.from_env({"OC_INFO_USER_AGENT": "audit/1.0", "OC_INFO_VERBOSE": "yes"})
    assert settings.user_agent == "audit/1.0"
    assert settings.verbose


def test_settings_defaults():
    settings = Settings.from_env({})
    assert settings.user_agent == f"oc-info/{__version__}"
    assert not settings.verbose


# --- Output Fidelity Tests ---


def test_null_href_prints_error_line():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"type": "oc-registry", "components": [None]})

    result = _invoke([REGISTRY_URL, "authors"], transport=httpx.MockTransport(handler))
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "component href must be a string" in result.output


def test_error_line_keeps_emoji_shortcodes():
    result = _invoke([REGISTRY_URL, "authors"], transport=_handler(broken=[":thumbs_up:"]))
    assert result.exit_code == 1
    assert "https://registry.example.com/:thumbs_up:" in result.output


def test_empty_registry_warns():
    result = _invoke([REGISTRY_URL, "authors"], transport=_handler(components={}))
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "registry lists no components",
        "Found 0 component authors for 0 active components:",
    ]
