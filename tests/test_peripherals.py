import math

import pytest

from constant import *
from Adder import Adder
from AdderTree import AdderTree
from Bus import Bus
from DFF import DFF
from Decoder import RowDecoder
from Mux import Mux
from SenseAmp import SenseAmp
from ShiftAdd import ShiftAdd
from MultilevelSenseAmp import MultilevelSenseAmp, column_power


def test_adder_latency_grows_with_width(param, tech, gate_params):
    narrow = Adder(param, tech, gate_params)
    narrow.Initialize(4, 8)
    wide = Adder(param, tech, gate_params)
    wide.Initialize(12, 8)
    capLoad = gate_params["capTgDrain"]
    assert wide.CalculateLatency(1e20, capLoad, 1) > narrow.CalculateLatency(1e20, capLoad, 1)
    # energy scales with the number of adders working
    assert narrow.CalculatePower(1, 8) == pytest.approx(2 * narrow.CalculatePower(1, 4))


def test_adder_packs_into_width(param, tech, gate_params):
    adder = Adder(param, tech, gate_params)
    adder.Initialize(6, 32)
    adder.CalculateArea()
    wAdder = gate_params["wNand"] * 9 * 6
    assert adder.width == pytest.approx(wAdder * 32)
    # 8 adders per row, 4 rows
    adder.CalculateArea(0, wAdder * 8.5, AreaModify.NONE)
    assert adder.width == pytest.approx(wAdder * 8.5)
    assert adder.height == pytest.approx(4 * gate_params["hNand"])


def test_dff_latency_is_half_a_clock(param, tech, gate_params):
    dff = DFF(param, tech, gate_params)
    dff.Initialize(16)
    assert dff.CalculateLatency(4) == pytest.approx(4 / param.clkFreq / 2)
    dff.CalculatePower(1, 16)
    assert dff.leakage > 0


@pytest.mark.parametrize("numSubcoreRow, numStage", [(1, 0), (2, 1), (5, 3), (8, 3)])
def test_adder_tree_stages(param, tech, gate_params, numSubcoreRow, numStage):
    tree = AdderTree(param, tech, gate_params)
    tree.Initialize(numSubcoreRow, 10, 4)
    assert tree.numStage == numStage
    assert len(list(tree._stages(0))) == numStage


def test_adder_tree_is_stateless_across_calls(param, tech, gate_params):
    tree = AdderTree(param, tech, gate_params)
    tree.Initialize(4, 8, 16)
    tree.CalculateArea()
    first = tree.CalculateLatency(3, 4, 0)
    firstEnergy = tree.CalculatePower(3, 4)
    tree.CalculateArea()
    assert tree.CalculateLatency(3, 4, 0) == first
    assert tree.CalculatePower(3, 4) == firstEnergy
    assert tree.numAdderBit == 8


def test_single_row_adder_tree_is_empty(param, tech, gate_params):
    tree = AdderTree(param, tech, gate_params)
    tree.Initialize(1, 8, 16)
    assert tree.CalculateArea() == 0
    assert tree.CalculateLatency(10, 1, 0) == 0
    assert tree.CalculatePower(10, 1) == 0


def test_shift_add_hides_under_read_pulse(param, tech, gate_params):
    single = ShiftAdd(param, tech, gate_params)
    single.Initialize(16, 8, 1)
    multi = ShiftAdd(param, tech, gate_params)
    multi.Initialize(16, 8, 4)
    once = single.CalculateLatency(1)
    excess = max(once - param.readPulseWidth, 0)
    assert multi.CalculateLatency(1) == pytest.approx(excess * 3 + once)


def test_decoder_mux_output_stage(param, tech, gate_params):
    plain = RowDecoder(param, tech, gate_params)
    plain.Initialize(5, False)
    mux = RowDecoder(param, tech, gate_params)
    mux.Initialize(5, True)
    assert mux.CalculateArea() > plain.CalculateArea()


def test_mux_override_layout(param, tech, gate_params):
    mux = Mux(param, tech, gate_params)
    mux.Initialize(16, 8, 5e3)
    mux.CalculateArea(0, 50e-6, AreaModify.NONE)
    mux.CalculateArea(3e-6, 50e-6, AreaModify.OVERRIDE)
    assert mux.height == 3e-6
    assert mux.width == 50e-6
    assert mux.area == pytest.approx(3e-6 * 50e-6)


def test_sense_amp_pitch_too_small(param, tech, gate_params):
    sa = SenseAmp(param, tech, gate_params)
    with pytest.raises(ValueError):
        sa.Initialize(32, False, 0.1, 4 * tech.featureSize, 32)


def test_multilevel_sense_amp_open_column(param, tech, gate_params):
    mlsa = MultilevelSenseAmp(param, tech, gate_params)
    mlsa.Initialize(4, 32, 32, True, True)
    energy = mlsa.CalculatePower([math.inf] * 4, 1)
    assert math.isfinite(energy)
    assert energy > 0
    assert column_power(math.inf, 32, True, param) > 0


@pytest.mark.parametrize("mode", [HORIZONTAL, VERTICAL])
def test_bus(param, tech, gate_params, mode):
    bus = Bus(param, tech, gate_params)
    bus.Initialize(mode, 2, 4, 0, 64, 50e-6, 80e-6)
    bus.CalculateArea(1, True)
    assert bus.busLength == pytest.approx(4 * 80e-6 if mode == HORIZONTAL else 2 * 50e-6)
    assert bus.repeaterSize >= 1
    assert bus.CalculateLatency(2) == pytest.approx(2 * bus.CalculateLatency(1))
    assert bus.CalculatePower(64, 1) > 0
    assert bus.leakage > 0


def test_bus_delay_tolerance_bound(param, tech, gate_params):
    fast = Bus(param, tech, gate_params)
    fast.Initialize(HORIZONTAL, 1, 4, 0, 32, 50e-6, 80e-6)
    relaxed = Bus(param, tech, gate_params)
    relaxed.Initialize(HORIZONTAL, 1, 4, 0.5, 32, 50e-6, 80e-6)
    assert relaxed.repeaterSize <= fast.repeaterSize
    assert relaxed.unitLengthDelay <= fast.unitLengthDelay * 1.5 * (1 + 1e-12)


def test_bus_unknown_mode(param, tech, gate_params):
    with pytest.raises(ValueError):
        Bus(param, tech, gate_params).Initialize(7, 1, 1, 0, 8, 1e-6, 1e-6)
