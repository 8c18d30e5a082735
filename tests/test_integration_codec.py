import io
import json
import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

import dams_codec
from dams_codec import cli


@pytest.mark.parametrize(
    "text",
    ["Oi do bi", "x, ok!", "2024", "o o", "", "(do) bi"],
)
def test_cli_round_trip(tmp_path, text: str) -> None:
    input_text = tmp_path / "input.txt"
    input_text.write_text(text + "\n", encoding="utf-8")
    output_code = tmp_path / "encoded.txt"
    output_text = tmp_path / "decoded.txt"

    cli.main(["encode", "--input-text", str(input_text), "--output-code", str(output_code)])
    assert output_code.read_text(encoding="utf-8") == dams_codec.encode(text) + "\n"

    cli.main(["decode", "--input-code", str(output_code), "--output-text", str(output_text)])
    assert output_text.read_text(encoding="utf-8") == text + "\n"


def test_cli_stdin_stdout(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("9\n"))
    cli.main(["encode", "--input-text", "-", "--output-code", "-"])
    assert capsys.readouterr().out == "0909\n"

    monkeypatch.setattr("sys.stdin", io.StringIO("0909\n"))
    cli.main(["decode", "--input-code", "-", "--output-text", "-"])
    assert capsys.readouterr().out == "9\n"


def test_cli_inspect(tmp_path, capsys) -> None:
    code_path = tmp_path / "code.txt"
    code_path.write_text("3|11|1|6I0909\n", encoding="utf-8")

    cli.main(["inspect", "--input-code", str(code_path)])
    assert capsys.readouterr().out.splitlines() == [
        "LETTER\t3|11",
        "SEPARATOR\t|",
        "LETTER\t1|6",
        "DIGIT_JOINER\tI",
        "DIGIT_CODE\t0909",
    ]


def test_cli_decode_persists_config(tmp_path) -> None:
    code_path = tmp_path / "code.txt"
    code_path.write_text(dams_codec.encode("Ação") + "\n", encoding="utf-8")
    output_text = tmp_path / "decoded.txt"
    config_path = tmp_path / "config.json"

    cli.main(
        [
            "decode",
            "--input-code",
            str(code_path),
            "--output-text",
            str(output_text),
            "--config",
            str(config_path),
            "--accent-aware",
        ]
    )
    assert output_text.read_text(encoding="utf-8") == "Oíão\n"
    assert json.loads(config_path.read_text())["accent_aware"] is True

    # Second run picks the setting up from the config file alone
    output_text.unlink()
    cli.main(
        [
            "decode",
            "--input-code",
            str(code_path),
            "--output-text",
            str(output_text),
            "--config",
            str(config_path),
        ]
    )
    assert output_text.read_text(encoding="utf-8") == "Oíão\n"
    assert dams_codec.load_codec_config(config_path).accent_aware


def test_cli_strict_reports_error(tmp_path, capsys) -> None:
    code_path = tmp_path / "code.txt"
    code_path.write_text("1|35", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(
            [
                "decode",
                "--input-code",
                str(code_path),
                "--output-text",
                str(tmp_path / "out.txt"),
                "--strict",
            ]
        )
    assert exc_info.value.code == 2
    assert "offset 3" in capsys.readouterr().err


def test_cli_rejects_unsupported_config(tmp_path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"version": "v99"}), encoding="utf-8")
    code_path = tmp_path / "code.txt"
    code_path.write_text("0909", encoding="utf-8")

    with pytest.raises(SystemExit):
        cli.main(
            [
                "decode",
                "--input-code",
                str(code_path),
                "--output-text",
                str(tmp_path / "out.txt"),
                "--config",
                str(config_path),
            ]
        )


def test_skipped_chunks_are_logged(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="dams_codec.codec"):
        assert dams_codec.decode("1|35") == "o"
    assert "Skipping chunk '5' at offset 3" in caplog.text


def test_concurrent_use_is_consistent() -> None:
    texts = ["Oi do bi", "2024", "x, ok!", "Ação 1"] * 25
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda t: dams_codec.decode(dams_codec.encode(t)), texts))
    assert results == [dams_codec.decode(dams_codec.encode(t)) for t in texts]
