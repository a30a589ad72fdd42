"""Tests for builderdocs.cli."""

import pytest

from builderdocs.cli import build_parser, main


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.paths == []
    assert args.config == "builderdocs.yaml"
    assert args.catalog is None
    assert not args.verbose and not args.quiet


def test_verbosity_flags_exclusive():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["-v", "-q"])


class TestMain:
    def test_generates_reference(self, tmp_path, fixtures_dir):
        out = tmp_path / "out"
        code = main([
            "--config", str(tmp_path / "missing.yaml"),
            "--catalog", "sample_api.steps.StepCatalog",
            str(fixtures_dir), str(out),
        ])
        assert code == 0
        assert (out / "index.md").is_file()
        assert (out / "step_http_request.md").is_file()
        assert (out / "step_noop.md").is_file()
        index = (out / "index.md").read_text(encoding="utf-8")
        assert "* [log](./step_log.html): Log a message. " in index

    def test_config_file(self, tmp_path, fixtures_dir):
        out = tmp_path / "site"
        config = tmp_path / "builderdocs.yaml"
        config.write_text(
            f"sources:\n  dirs: ['{fixtures_dir.as_posix()}']\n"
            f"catalog:\n  step_catalog: sample_api.steps.StepCatalog\n"
            f"output:\n  dir: '{out.as_posix()}'\n  title: Sample API\n  link_suffix: .md\n",
            encoding="utf-8",
        )
        assert main(["--config", str(config), "-q"]) == 0
        index = (out / "index.md").read_text(encoding="utf-8")
        assert index.startswith("# Sample API\n")
        assert "(./step_loop.md)" in index

    def test_unknown_catalog(self, tmp_path):
        code = main([
            "--config", str(tmp_path / "missing.yaml"),
            "--catalog", "sample_api.steps.NoSuchCatalog",
            str(tmp_path / "out"),
        ])
        assert code == 1
        assert not (tmp_path / "out").exists()

    def test_unknown_vocabulary_entry(self, tmp_path):
        config = tmp_path / "builderdocs.yaml"
        config.write_text("vocabulary:\n  widget: builtins.object\n", encoding="utf-8")
        assert main(["--config", str(config), str(tmp_path / "out")]) == 1
