import numpy as np
import pytest

from main import build_parser, main


@pytest.fixture
def small_config(tmp_path):
    config = tmp_path / "config.csv"
    config.write_text("numRowSubArray,32\nnumColSubArray,32\nmemcelltype,2\n")
    return str(config)


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.dup_row == 1
    assert args.subarray_row is None
    assert args.log_level == "INFO"


def test_random_workload(small_config, capsys):
    perf = main(["--config", small_config, "--batch-size", "2", "--log-level", "WARNING"])
    assert perf.readLatency > 0
    assert "ProcessingUnit" in capsys.readouterr().out


def test_matrix_files_and_save(small_config, tmp_path, monkeypatch):
    rng = np.random.default_rng(3)
    weightFile, inputFile = tmp_path / "weight.csv", tmp_path / "input.csv"
    np.savetxt(weightFile, rng.uniform(-1, 1, size=(64, 32)), delimiter=',')
    np.savetxt(inputFile, rng.integers(0, 2, size=(64, 3)), delimiter=',')
    monkeypatch.chdir(tmp_path)

    perf = main(["--config", small_config, "--weight", str(weightFile), "--input", str(inputFile),
                 "--save", "--log-level", "ERROR"])
    assert perf.readDynamicEnergy > 0
    assert (tmp_path / "SynapticCOREoutput.txt").exists()


def test_duplication_flags(small_config):
    base = main(["--config", small_config, "--log-level", "ERROR"])
    dup = main(["--config", small_config, "--dup-row", "2", "--log-level", "ERROR"])
    assert dup.readLatency - dup.bufferLatency - dup.icLatency == pytest.approx(
        (base.readLatency - base.bufferLatency - base.icLatency) / 2, rel=1e-9)
