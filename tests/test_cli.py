# tests/test_cli.py
# Tests for the oceanforge command-line record dump
# RELEVANT FILES: python/oceanforge/cli.py, python/oceanforge/config.py, python/oceanforge/uniforms.py
import json

import pytest

from oceanforge.cli import build_parser, main


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert args.method is None
    assert args.format == "json"
    assert args.time == 0.0


def test_json_output_for_default_method(capsys) -> None:
    assert main(["--seed", "3", "--time", "1.5"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["name"] == "FbmWaterMaterial"
    assert out["size"] == 240
    assert out["fields"]["time"] == pytest.approx(1.5)
    assert out["fields"]["vertex_wave_count"] == 40


def test_layout_output(capsys) -> None:
    assert main(["--method", "sum", "--seed", "1", "--format", "layout"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "SumWaterMaterial (320 bytes)"
    assert "   16  waves: array<mat3x3<f32>, 4>" in lines
    assert "  304  tip_color: vec4<f32>" in lines


def test_hex_output_is_deterministic(capsys) -> None:
    assert main(["--method", "sum", "--seed", "5", "--format", "hex"]) == 0
    first = capsys.readouterr().out.strip()
    assert main(["--method", "sum", "--seed", "5", "--format", "hex"]) == 0
    second = capsys.readouterr().out.strip()
    assert first == second
    assert len(first) == 2 * 320


def test_spectrum_method(capsys) -> None:
    assert main(["--method", "spectrum"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["name"] == "SpectrumParameters"
    assert out["size"] == 32
    assert out["fields"]["swell"] == pytest.approx(0.42)


def test_wgsl_output(capsys) -> None:
    assert main(["--method", "fft", "--format", "wgsl"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("struct FftWaterMaterial {")
    assert "    peak_omega: f32," in out


def test_preset_and_config_file(tmp_path, capsys) -> None:
    path = tmp_path / "water.json"
    path.write_text(json.dumps({"spectrum": {"wind_speed": 15.0}}), encoding="utf-8")
    assert main(["--preset", "storm", "--config", str(path), "--method", "spectrum"]) == 0
    out = json.loads(capsys.readouterr().out)
    # preset swell survives, file wind speed wins
    assert out["fields"]["swell"] == pytest.approx(0.8)
    assert out["fields"]["gamma"] == pytest.approx(3.3)


@pytest.mark.parametrize(
    "argv",
    [
        ["--preset", "hurricane"],
        ["--time", "-1"],
        ["--config", "does-not-exist.json"],
    ],
)
def test_errors_return_exit_code_2(argv, capsys) -> None:
    assert main(argv) == 2
    assert "oceanforge: error:" in capsys.readouterr().err


def test_bad_config_contents(tmp_path, capsys) -> None:
    path = tmp_path / "water.json"
    path.write_text(json.dumps({"spectrum": {"fetch": -5.0}}), encoding="utf-8")
    assert main(["--config", str(path)]) == 2
    assert "fetch" in capsys.readouterr().err


@pytest.mark.parametrize("count", [0, 2.5, 2**32])
def test_bad_fbm_wave_count_returns_exit_code_2(tmp_path, capsys, count) -> None:
    path = tmp_path / "water.json"
    path.write_text(json.dumps({"fbm": {"vertex_wave_count": count}}), encoding="utf-8")
    assert main(["--config", str(path)]) == 2
    assert "wave_count" in capsys.readouterr().err
