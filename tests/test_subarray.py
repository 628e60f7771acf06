import logging

import numpy as np
import pytest

from constant import *
from SubArray import SubArray, ReadBreakdown
from ColumnResistance import GetColumnResistance, GetInputVector, MapWeightToConductance
from conftest import ALL_MODES, CELL_CONFIGS

BLOCK_NAMES = [
    'wlDecoder', 'wlNewDecoderDriver', 'wlDecoderDriver', 'wlNewSwitchMatrix', 'wlSwitchMatrix',
    'slSwitchMatrix', 'mux', 'muxDecoder', 'precharger', 'senseAmp', 'rowCurrentSenseAmp',
    'sramWriteDriver', 'multilevelSenseAmp', 'multilevelSAEncoder', 'dff', 'adder', 'shiftAdd',
]

SEQUENTIAL = {OperationMode.CONVENTIONAL_SEQUENTIAL, OperationMode.BNN_SEQUENTIAL, OperationMode.XNOR_SEQUENTIAL}


def expected_blocks(cell, mode):
    if cell == "sram":
        if mode in SEQUENTIAL:
            return {'wlDecoder', 'senseAmp', 'dff', 'adder', 'precharger', 'sramWriteDriver'}
        blocks = {'wlSwitchMatrix', 'multilevelSenseAmp', 'multilevelSAEncoder', 'precharger', 'sramWriteDriver'}
        if mode.is_conventional:
            blocks |= {'mux', 'muxDecoder'}
        return blocks

    oneT = cell in ("rram_1t1r", "fefet")
    if mode in SEQUENTIAL:
        blocks = {'wlDecoder', 'wlNewDecoderDriver' if oneT else 'wlDecoderDriver',
                  'slSwitchMatrix', 'mux', 'muxDecoder', 'dff', 'adder'}
        if mode.is_conventional:
            # cellBit = 4 needs the encoder
            blocks |= {'multilevelSenseAmp', 'multilevelSAEncoder'}
        else:
            blocks |= {'rowCurrentSenseAmp'}
        return blocks
    return {'wlNewSwitchMatrix' if oneT else 'wlSwitchMatrix', 'slSwitchMatrix', 'mux', 'muxDecoder',
            'multilevelSenseAmp', 'multilevelSAEncoder'}


def make_subarray(env):
    PM = env.param
    subArray = SubArray(*env.args)
    subArray.Initialize(PM.numRowSubArray, PM.numColSubArray, PM.unitLengthWireResistance)
    return subArray


def workload(env, activity=0.5, seed=0):
    PM = env.param
    rng = np.random.default_rng(seed)
    weight = MapWeightToConductance(rng.uniform(-1, 1, size=(PM.numRowSubArray, PM.numColSubArray)), PM)
    vector = np.zeros(PM.numRowSubArray)
    vector[:int(PM.numRowSubArray * activity)] = 1
    rng.shuffle(vector)
    return weight, vector


def run(env, subArray, activity=0.5):
    weight, vector = workload(env, activity)
    _, activityRowRead = GetInputVector(vector[:, None], 0)
    columnResistance = GetColumnResistance(vector, weight, env.cell, env.param, subArray.resCellAccess)
    subArray.CalculateArea()
    latency = subArray.CalculateLatency(columnResistance, activityRowRead)
    energy = subArray.CalculatePower(columnResistance, activityRowRead)
    return latency, energy


@pytest.mark.parametrize("cell", list(CELL_CONFIGS))
@pytest.mark.parametrize("mode", ALL_MODES)
def test_mode_selects_blocks(make_env, cell, mode):
    env = make_env(cell, operationmode=int(mode))
    subArray = make_subarray(env)
    assert set(subArray.GetBlocks()) == expected_blocks(cell, mode)

    run(env, subArray)
    for name in set(BLOCK_NAMES) - set(subArray.GetBlocks()):
        block = getattr(subArray, name)
        assert not block.initialized, name
        assert block.area == 0, name
        assert block.readLatency == 0, name
        assert block.readDynamicEnergy == 0, name


@pytest.mark.parametrize("cell", list(CELL_CONFIGS))
@pytest.mark.parametrize("mode", ALL_MODES)
def test_breakdown_sums_to_total(make_env, cell, mode):
    env = make_env(cell, operationmode=int(mode))
    subArray = make_subarray(env)
    latency, energy = run(env, subArray)

    assert isinstance(latency, ReadBreakdown)
    assert latency.total == pytest.approx(latency.adc + latency.accum + latency.other, rel=1e-12)
    assert energy.total == pytest.approx(energy.adc + energy.accum + energy.other, rel=1e-12)
    assert latency.total > 0
    assert np.isfinite(latency.total)
    assert np.isfinite(energy.total)
    assert subArray.readLatency == latency.total
    assert subArray.readDynamicEnergy == energy.total

    assert subArray.area > 0
    assert subArray.emptyArea == pytest.approx(subArray.area - subArray.usedArea)
    assert subArray.areaADC + subArray.areaAccum + subArray.areaOther == pytest.approx(
        subArray.usedArea - subArray.areaArray)


@pytest.mark.parametrize("cell", list(CELL_CONFIGS))
def test_deterministic(make_env, cell):
    env = make_env(cell)
    subArray = make_subarray(env)
    first = run(env, subArray)
    second = run(env, subArray)
    assert first == second


def test_shift_add_with_multiple_read_pulses(make_env):
    env = make_env("rram_1t1r", operationmode=int(OperationMode.CONVENTIONAL_PARALLEL), numBitInput=8)
    subArray = make_subarray(env)
    assert 'shiftAdd' in subArray.GetBlocks()
    latency, energy = run(env, subArray)
    assert latency.accum == subArray.shiftAdd.readLatency > 0
    assert energy.accum == subArray.shiftAdd.readDynamicEnergy > 0


def test_binary_parallel_has_no_accumulation(make_env):
    env = make_env("fefet", operationmode=int(OperationMode.XNOR_PARALLEL), numBitInput=8)
    subArray = make_subarray(env)
    latency, energy = run(env, subArray)
    assert latency.accum == 0
    assert energy.accum == 0


def test_num_col_muxed_clamped(make_env):
    env = make_env("rram_1t1r", numColMuxed=64)
    subArray = make_subarray(env)
    assert subArray.numColMuxed == 32


def test_reinitialize_reclamps_from_configured_mux(make_env, caplog):
    env = make_env("rram_1t1r", numColMuxed=64)
    subArray = SubArray(*env.args)
    subArray.Initialize(32, 32, env.param.unitLengthWireResistance)
    assert subArray.numColMuxed == 32
    with caplog.at_level(logging.WARNING):
        subArray.Initialize(128, 128, env.param.unitLengthWireResistance)
    assert subArray.numColMuxed == 64
    assert "Already initialized!" in caplog.text


def test_activity_is_not_remembered_between_reads(make_env):
    env = make_env("rram_1t1r", operationmode=int(OperationMode.CONVENTIONAL_SEQUENTIAL))
    subArray = make_subarray(env)
    weight, vector = workload(env)
    columnResistance = GetColumnResistance(vector, weight, env.cell, env.param, subArray.resCellAccess)
    subArray.CalculateArea()

    first = subArray.CalculateLatency(columnResistance, 0.5)
    subArray.CalculateLatency(columnResistance, 0.1)
    assert subArray.CalculateLatency(columnResistance, 0.5) == first
    with pytest.raises(TypeError):
        subArray.CalculateLatency(columnResistance)
    with pytest.raises(TypeError):
        subArray.CalculatePower(columnResistance)


def test_sram_leakage_includes_cells(make_env):
    env = make_env("sram", operationmode=int(OperationMode.CONVENTIONAL_PARALLEL))
    subArray = make_subarray(env)
    run(env, subArray)
    blocks = sum(block.leakage for block in subArray.GetBlocks().values())
    assert subArray.leakage > blocks > 0


def test_idle_vector_costs_no_row_reads(make_env):
    env = make_env("rram_1t1r", operationmode=int(OperationMode.CONVENTIONAL_SEQUENTIAL))
    subArray = make_subarray(env)
    busy, _ = run(env, subArray, activity=0.5)
    idle, _ = run(env, subArray, activity=0.0)
    assert idle.accum == 0
    assert idle.total < busy.total


def test_wide_access_transistor_raises(make_env):
    env = make_env("rram_1t1r", resistanceOn=1e3)
    with pytest.raises(ValueError):
        make_subarray(env)


def test_calculate_before_initialize(make_env, caplog):
    env = make_env("sram")
    subArray = SubArray(*env.args)
    with caplog.at_level(logging.ERROR):
        assert subArray.CalculateArea() is None
        assert subArray.CalculateLatency(np.ones(32), 0.5) is None
        assert subArray.CalculatePower(np.ones(32), 0.5) is None
    assert subArray.area == 0
    assert subArray.readLatency == 0
    assert subArray.readDynamicEnergy == 0
    assert "[SubArray] Error: Require initialization first!" in caplog.text


def test_relaxed_cell_grows_array(make_env):
    tight = make_subarray(make_env("rram_xpoint"))
    relaxed = make_subarray(make_env("rram_xpoint", relaxArrayCellWidth=1, relaxArrayCellHeight=1))
    assert relaxed.lengthRow > tight.lengthRow
    assert relaxed.lengthCol > tight.lengthCol


def test_report(make_env, tmp_path, capsys):
    env = make_env("rram_1t1r")
    subArray = make_subarray(env)
    run(env, subArray)
    subArray.PrintProperty()
    out = capsys.readouterr().out
    assert "Array:" in out
    assert "multilevelSenseAmp" in out

    path = tmp_path / "out.txt"
    subArray.SaveOutput(filename=str(path))
    assert "SubArray" in path.read_text()
