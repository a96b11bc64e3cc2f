import json

from typer.testing import CliRunner

from sung_russian_ipa.cli import app


runner = CliRunner()


def test_word():
    result = runner.invoke(app, ["word", "вода"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "vɑ dɑ"
    assert lines[1] == "stress: 1 (correction)"


def test_word_with_options():
    result = runner.invoke(app, ["word", "молоко", "--lock", "0"])
    assert result.exit_code == 0
    assert result.output.splitlines()[0] == "mo ɫɑ ko"
    result = runner.invoke(app, ["word", "день", "--stress", "0", "--style", "modern-standard", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["syllables"][0]["ipa"] == "dʲenʲ"
    assert data["stress"] == {"index": 0, "provenance": "user"}


def test_word_bad_stress():
    result = runner.invoke(app, ["word", "вода", "--stress", "5"])
    assert result.exit_code != 0


def test_word_unknown_style():
    result = runner.invoke(app, ["word", "вода", "--style", "bolshoi"])
    assert result.exit_code != 0


def test_transcribe_text():
    result = runner.invoke(app, ["transcribe", "брат был"])
    assert result.exit_code == 0
    assert "brɑd bɨɫ" in result.output


def test_transcribe_reports_unverified_stress():
    result = runner.invoke(app, ["transcribe", "окно"])
    assert result.exit_code == 0
    assert "stress unverified: окно" in result.output


def test_transcribe_file_to_json(tmp_path):
    src = tmp_path / "song.txt"
    src.write_text("Вода, вода!\n", encoding="utf-8")
    out = tmp_path / "out" / "song.json"
    result = runner.invoke(app, ["transcribe", "--file", str(src), "--out-json", str(out)])
    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["style"] == "sung-russian"
    assert [w["processed"]["word"] for w in data["words"]] == ["вода", "вода"]


def test_transcribe_needs_exactly_one_input(tmp_path):
    assert runner.invoke(app, ["transcribe"]).exit_code != 0
    assert runner.invoke(app, ["transcribe", "--file", str(tmp_path / "missing.txt")]).exit_code != 0


def test_transcribe_with_stress_dict(tmp_path):
    d = tmp_path / "stress.yaml"
    d.write_text("окно: 1\n", encoding="utf-8")
    result = runner.invoke(app, ["transcribe", "окно", "--stress-dict", str(d), "--syllables"])
    assert result.exit_code == 0
    assert "ɑ.ˈkno" in result.output


def test_styles():
    result = runner.invoke(app, ["styles"])
    assert result.exit_code == 0
    for name in ("sung-russian", "modern-standard", "petersburg", "choir"):
        assert name in result.output


def test_doctor():
    result = runner.invoke(app, ["doctor"])
    assert result.exit_code == 0
    assert "stress corrections:" in result.output


def test_batch(tmp_path):
    src = tmp_path / "texts"
    src.mkdir()
    (src / "a.txt").write_text("вода\n", encoding="utf-8")
    out = tmp_path / "out"
    result = runner.invoke(app, ["batch", str(src), "--out-dir", str(out)])
    assert result.exit_code == 0
    assert (out / "a.json").exists()
    assert (out / "a.ipa.txt").read_text(encoding="utf-8") == "vɑdɑ\n"
