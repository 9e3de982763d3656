import json

import pytest
from click.testing import CliRunner

from bohr.cli import _load_config, cli


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_render_writes_svg(project):
    runner = CliRunner()
    result = runner.invoke(cli, ["render", "20", "--seed", "3"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "Rendered Calcium (Ca) with 4 orbits" in result.output
    output = project / "output" / "020-calcium.svg"
    assert output.exists()
    assert output.read_text(encoding="utf-8").count("<animateMotion") == 20


def test_render_html_to_explicit_path(project):
    runner = CliRunner()
    target = project / "posts" / "helium.html"
    result = runner.invoke(
        cli, ["render", "He", "--html", "-o", str(target), "--selector", "#helium"]
    )
    assert result.exit_code == 0
    page = target.read_text(encoding="utf-8")
    assert 'id="helium"' in page
    assert "<h1>Helium (He)</h1>" in page


@pytest.mark.parametrize("element", ["0", "119", "Xx"])
def test_render_unknown_element(project, element):
    runner = CliRunner()
    result = runner.invoke(cli, ["render", element])
    assert result.exit_code != 0
    assert "Unknown element" in result.output
    assert not (project / "output").exists()


def test_render_reports_export_error(project):
    (project / "bohr.yaml").write_text("template_dir: tpl\n", encoding="utf-8")
    (project / "tpl").mkdir()
    (project / "tpl" / "page.html.jinja").write_text("{{ nope.deeper }}", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["render", "1", "--html"])
    assert result.exit_code == 1
    assert "Render failed:" in result.output
    assert "Undefined variable" in result.output


def test_info_and_list(project):
    runner = CliRunner()
    result = runner.invoke(cli, ["info", "ca"])
    assert result.exit_code == 0
    assert "Calcium" in result.output
    assert "shells: 2, 8, 8, 2" in result.output

    result = runner.invoke(cli, ["info", "200"])
    assert result.exit_code != 0

    result = runner.invoke(cli, ["list"])
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert len(lines) == 118
    assert lines[0].split()[:3] == ["1", "H", "Hydrogen"]


def test_positions_json(project):
    runner = CliRunner()
    result = runner.invoke(cli, ["positions", "2", "--seed", "8", "--at", "1.5"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["element"] == "He"
    assert payload["time"] == 1.5
    assert len(payload["orbits"]) == 1
    orbit = payload["orbits"][0]
    assert orbit["stagger"] == pytest.approx(orbit["duration"] / 2, abs=1e-5)
    assert len(orbit["electrons"]) == 2


def test_positions_rejects_negative_time(project):
    runner = CliRunner()
    result = runner.invoke(cli, ["positions", "2", "--at", "-1"])
    assert result.exit_code == 2
    assert "--at" in result.output
    assert not result.output.lstrip().startswith("{")


def test_frames_stream(project):
    runner = CliRunner()
    result = runner.invoke(cli, ["frames", "3", "--fps", "1000", "--count", "4", "--seed", "2"])
    assert result.exit_code == 0
    frames = [json.loads(line) for line in result.output.strip().splitlines()]
    assert len(frames) == 4
    assert [f["element"] for f in frames] == ["Li"] * 4
    assert frames[-1]["time"] == pytest.approx(0.004)

    result = runner.invoke(cli, ["frames", "3", "--fps", "0"])
    assert result.exit_code != 0


def test_pick_renders_selection(project, monkeypatch):
    class FakePrompt:
        def __init__(self, value):
            self.value = value

        def ask(self):
            return self.value

    monkeypatch.setattr("bohr.cli.questionary.select", lambda *a, **k: FakePrompt(8))
    runner = CliRunner()
    result = runner.invoke(cli, ["pick"])
    assert result.exit_code == 0
    assert (project / "output" / "008-oxygen.svg").exists()

    monkeypatch.setattr("bohr.cli.questionary.select", lambda *a, **k: FakePrompt(None))
    result = runner.invoke(cli, ["pick"])
    assert result.exit_code != 0


def test_load_config_overrides(project):
    (project / "bohr.yaml").write_text("seed: 1\ncontainer: '#a'\n", encoding="utf-8")
    config = _load_config(project, seed=5, selector="#b")
    assert config["seed"] == 5
    assert config["container"] == "#b"
    assert _load_config(project)["seed"] == 1


def test_module_main_entrypoint():
    from bohr.__main__ import main

    assert callable(main)


def test_main_invokes_cli(monkeypatch):
    import bohr.cli as cli_mod

    called = {}

    def fake_cli():
        called["ran"] = True

    monkeypatch.setattr(cli_mod, "cli", fake_cli)
    cli_mod.main()
    assert called["ran"]
