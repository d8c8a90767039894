"""Tests for the kahva command line entry point."""

import json

import pytest

from kahva.main import main, parse_args


def write_config(tmp_path, settings=None) -> str:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(settings or {}))
    return str(path)


class TestParseArgs:
    """Test command line parsing"""

    def test_defaults(self):
        args = parse_args([])
        assert args.repository is None
        assert args.revisions == []
        assert args.config is None

    def test_repeated_revisions(self):
        args = parse_args(["--repository", "/tmp/repo", "-r", "main", "--revisions", "side"])
        assert args.repository == "/tmp/repo"
        assert args.revisions == ["main", "side"]


class TestMain:
    """Test printing the log"""

    def test_prints_one_line_per_row(self, repo_builder, tmp_path, capsysbinary):
        c1 = repo_builder.commit("first")
        c2 = repo_builder.commit("second", [c1], branch="main")
        repo_builder.checkout("main")

        main(["--repository", repo_builder.repo.workdir, "--config", write_config(tmp_path)])

        lines = capsysbinary.readouterr().out.split(b"\n")
        assert b"Loaded 2 rows" in lines[0]
        assert lines[1].startswith(b"@ ")
        assert c2[:8].encode() in lines[1]
        assert lines[2].startswith(b"o ")
        assert c1[:8].encode() in lines[2]
        assert lines[3] == b""

    def test_styles_from_config(self, repo_builder, tmp_path, capsysbinary):
        c1 = repo_builder.commit("first", branch="main")
        repo_builder.checkout("main")
        config = write_config(tmp_path, {"colors": {"commit_id": "red", "node": "green"}})

        main(["--repository", repo_builder.repo.workdir, "--config", config])

        out = capsysbinary.readouterr().out
        assert b"\x1b[32m@\x1b[39m " in out
        assert b"\x1b[31m" + c1[:8].encode() in out

    def test_revision_filter(self, repo_builder, tmp_path, capsysbinary):
        base = repo_builder.commit("base")
        c2 = repo_builder.commit("second", [base], branch="main")
        c3 = repo_builder.commit("side work", [base], branch="side")
        repo_builder.checkout("main")

        main(["--repository", repo_builder.repo.workdir, "--config", write_config(tmp_path), "-r", "side"])

        out = capsysbinary.readouterr().out
        assert c3[:8].encode() in out
        assert base[:8].encode() in out
        assert c2[:8].encode() not in out

    def test_debug_labels(self, repo_builder, tmp_path, capsysbinary):
        repo_builder.commit("first", branch="main")
        repo_builder.checkout("main")
        config = write_config(tmp_path, {"ui": {"debug-labels": True}})

        main(["--repository", repo_builder.repo.workdir, "--config", config])

        assert b"<<node::@>>" in capsysbinary.readouterr().out

    def test_unknown_revision_exits(self, repo_builder, tmp_path, capsys):
        repo_builder.commit("first", branch="main")
        repo_builder.checkout("main")

        with pytest.raises(SystemExit) as exc_info:
            main(["--repository", repo_builder.repo.workdir, "--config", write_config(tmp_path), "-r", "nope"])
        assert exc_info.value.code == 1
        assert "Unknown revision nope" in capsys.readouterr().err
