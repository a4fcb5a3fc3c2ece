"""Integration tests for the wordvecs CLI"""

import pytest

from wordvecs.cli import build_parser, main


class TestCli:
    """Test CLI entry point behavior"""

    @pytest.fixture
    def animals_path(self, tmp_path, animals_bytes):
        path = tmp_path / "animals.bin"
        path.write_bytes(animals_bytes)
        return path

    def test_prints_neighbors(self, animals_path, capsys):
        exit_code = main([str(animals_path), "cat", "--count", "1"])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "cat" in output
        assert "dog" in output
        assert "0.8000" in output
        assert "bird" not in output

    def test_unknown_word_is_marked(self, animals_path, capsys):
        exit_code = main([str(animals_path), "zebra", "--count", "2"])

        assert exit_code == 0
        assert "zebra (not in vocabulary)" in capsys.readouterr().out

    def test_limit_restricts_vocabulary(self, animals_path, capsys):
        exit_code = main([str(animals_path), "cat", "--limit", "2"])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "dog" in output
        assert "bird" not in output

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.bin"), "cat"]) == 1

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "bad.bin"
        path.write_bytes(b"not a model")

        assert main([str(path), "cat"]) == 1

    def test_oversized_header(self, tmp_path):
        path = tmp_path / "huge.bin"
        path.write_bytes(b"9" * 5000 + b" 2\n")

        assert main([str(path), "cat"]) == 1

    def test_invalid_count(self, animals_path):
        assert main([str(animals_path), "cat", "--count", "-3"]) == 1

    def test_zero_count(self, animals_path, capsys):
        assert main([str(animals_path), "cat", "--count", "0"]) == 1
        assert "dog" not in capsys.readouterr().out

    def test_negative_limit(self, animals_path):
        assert main([str(animals_path), "cat", "--limit", "-1"]) == 1


def test_parser_arguments():
    args = build_parser().parse_args(["model.bin", "king", "queen", "--limit", "500"])

    assert args.path == "model.bin"
    assert args.words == ["king", "queen"]
    assert args.limit == 500
    assert args.count is None
