import logging

import numpy as np
import pytest

from constant import *
from ColumnResistance import MapWeightToConductance
from ProcessingUnit import ProcessingUnit, AreaResult, PerformanceResult


def make_pe(env, numSubArrayRow, numSubArrayCol):
    pe = ProcessingUnit(*env.args)
    pe.Initialize(numSubArrayRow, numSubArrayCol)
    pe.CalculateArea()
    return pe


def workload(env, numRow, numCol, numVector, seed=0):
    rng = np.random.default_rng(seed)
    weight = MapWeightToConductance(rng.uniform(-1, 1, size=(numRow, numCol)), env.param)
    inputs = rng.integers(0, 2, size=(numRow, numVector)).astype(float)
    return weight, inputs


def core_latency(perf):
    return perf.readLatency - perf.bufferLatency - perf.icLatency


def test_sram_128x128_conventional_parallel(make_env):
    env = make_env("sram", operationmode=int(OperationMode.CONVENTIONAL_PARALLEL),
                   numRowSubArray=128, numColSubArray=128, numColMuxed=8, levelOutput=32)
    pe = make_pe(env, 1, 1)
    rng = np.random.default_rng(1)
    weight = rng.integers(0, 2, size=(128, 128)).astype(float)
    inputs = np.zeros((128, 4))
    for k in range(4):
        inputs[rng.permutation(128)[:64], k] = 1

    perf = pe.CalculatePerformance(weight, inputs, 1, 1, 1, 1)
    assert isinstance(perf, PerformanceResult)
    for value in (perf.readLatency, perf.readDynamicEnergy):
        assert np.isfinite(value)
        assert value >= 0
    assert perf.leakage > 0

    subArray = pe.subArray
    assert subArray.area > 0
    assert subArray.readLatency == pytest.approx(
        subArray.readLatencyADC + subArray.readLatencyAccum + subArray.readLatencyOther, rel=1e-12)
    assert perf.readLatency == pytest.approx(
        perf.coreLatencyADC + perf.coreLatencyAccum + perf.coreLatencyOther, rel=1e-12)
    assert perf.readDynamicEnergy == pytest.approx(
        perf.coreEnergyADC + perf.coreEnergyAccum + perf.coreEnergyOther, rel=1e-12)


def test_area_result(make_env):
    env = make_env("rram_1t1r")
    pe = ProcessingUnit(*env.args)
    pe.Initialize(2, 2)
    area = pe.CalculateArea()
    assert isinstance(area, AreaResult)
    assert area.area == pytest.approx(area.height * area.width)
    assert area.area > 4 * pe.subArray.usedArea
    assert area.areaAccum >= pe.adderTree.area > 0


def test_tiling_energy_is_additive(make_env):
    env = make_env("rram_1t1r", operationmode=int(OperationMode.CONVENTIONAL_PARALLEL))
    weight, inputs = workload(env, 64, 64, 3)

    tiled = make_pe(env, 2, 2).CalculatePerformance(weight, inputs, 1, 1, 2, 2)

    single = make_pe(env, 1, 1)
    tiles = [single.CalculatePerformance(weight[i:i+32, j:j+32], inputs[i:i+32], 1, 1, 1, 1)
             for i in (0, 32) for j in (0, 32)]

    assert tiled.subArrayReadDynamicEnergy == pytest.approx(
        sum(t.subArrayReadDynamicEnergy for t in tiles), rel=1e-12)
    # tiles share the input stream: latency combines by max, not by sum
    assert tiled.coreLatencyADC == pytest.approx(max(t.coreLatencyADC for t in tiles), rel=1e-12)
    assert tiled.coreLatencyADC < sum(t.coreLatencyADC for t in tiles)


def test_duplication_divides_latency(make_env):
    env = make_env("fefet", operationmode=int(OperationMode.CONVENTIONAL_PARALLEL))
    weight, inputs = workload(env, 32, 32, 4)

    base = make_pe(env, 1, 1).CalculatePerformance(weight, inputs, 1, 1, 1, 1)
    dup = make_pe(env, 2, 2).CalculatePerformance(weight, inputs, 2, 2, 2, 2)

    assert core_latency(dup) * 4 == pytest.approx(core_latency(base), rel=1e-9)
    assert dup.subArrayReadDynamicEnergy == pytest.approx(base.subArrayReadDynamicEnergy, rel=1e-12)


def test_partial_duplication_uses_adder_tree(make_env):
    env = make_env("rram_1t1r", operationmode=int(OperationMode.CONVENTIONAL_SEQUENTIAL))
    weight, inputs = workload(env, 64, 32, 2)

    pe = make_pe(env, 4, 2)
    perf = pe.CalculatePerformance(weight, inputs, 2, 1, 4, 2)
    assert pe.adderTree.readDynamicEnergy > 0
    assert perf.coreEnergyAccum >= pe.adderTree.readDynamicEnergy
    assert perf.readDynamicEnergy > perf.subArrayReadDynamicEnergy


def test_results_do_not_accumulate(make_env):
    env = make_env("rram_xpoint", operationmode=int(OperationMode.BNN_SEQUENTIAL))
    weight, inputs = workload(env, 32, 32, 2)
    pe = make_pe(env, 1, 1)
    first = pe.CalculatePerformance(weight, inputs, 1, 1, 1, 1)
    second = pe.CalculatePerformance(weight, inputs, 1, 1, 1, 1)
    assert first == second


def test_performance_leaves_subarray_structure_alone(make_env):
    env = make_env("rram_1t1r", operationmode=int(OperationMode.CONVENTIONAL_SEQUENTIAL))
    weight, inputs = workload(env, 32, 32, 2)
    pe = make_pe(env, 1, 1)
    before = (pe.subArray.levelOutput, pe.subArray.numColMuxed, pe.subArray.area)
    pe.CalculatePerformance(weight, inputs, 1, 1, 1, 1)
    assert (pe.subArray.levelOutput, pe.subArray.numColMuxed, pe.subArray.area) == before
    assert pe.subArray.levelOutput == env.param.levelOutput


def test_input_never_mutated(make_env):
    env = make_env("rram_1t1r")
    weight, inputs = workload(env, 64, 32, 2)
    weightCopy, inputsCopy = weight.copy(), inputs.copy()
    make_pe(env, 2, 1).CalculatePerformance(weight, inputs, 1, 1, 2, 1)
    np.testing.assert_array_equal(weight, weightCopy)
    np.testing.assert_array_equal(inputs, inputsCopy)


def test_shape_mismatch(make_env):
    env = make_env("rram_1t1r")
    pe = make_pe(env, 1, 1)
    with pytest.raises(ValueError):
        pe.CalculatePerformance(np.ones((32, 32)), np.ones((16, 2)), 1, 1, 1, 1)


def test_performance_before_initialize(make_env, caplog):
    env = make_env("rram_1t1r")
    pe = ProcessingUnit(*env.args)
    with caplog.at_level(logging.ERROR):
        assert pe.CalculatePerformance(np.ones((32, 32)), np.ones((32, 2)), 1, 1, 1, 1) is None
    assert "Require initialization first" in caplog.text


def test_summary_logged(make_env, caplog):
    env = make_env("rram_1t1r")
    weight, inputs = workload(env, 32, 32, 2)
    pe = make_pe(env, 1, 1)
    with caplog.at_level(logging.INFO, logger="ProcessingUnit"):
        pe.CalculatePerformance(weight, inputs, 1, 1, 1, 1, progress=True)
    assert "2 input vectors" in caplog.text


def test_report(make_env, tmp_path, capsys):
    env = make_env("rram_1t1r")
    weight, inputs = workload(env, 32, 32, 2)
    pe = make_pe(env, 1, 1)
    perf = pe.CalculatePerformance(weight, inputs, 1, 1, 1, 1)
    pe.PrintProperty(perf)
    assert "Leakage Power" in capsys.readouterr().out
    path = tmp_path / "pe.txt"
    pe.SaveOutput(perf, str(path))
    text = path.read_text()
    assert "ProcessingUnit" in text
    assert "Output Bus" in text
