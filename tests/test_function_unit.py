import logging

import pytest

from constant import *
from FunctionUnit import FunctionUnit
from DFF import DFF


def test_magic_layout_keeps_area():
    unit = FunctionUnit()
    unit.area = 12.0
    unit.ApplyLayout(newHeight=3.0, option=AreaModify.MAGIC)
    assert unit.height == 3.0
    assert unit.width == pytest.approx(4.0)


def test_override_layout():
    unit = FunctionUnit()
    unit.height, unit.width, unit.area = 1, 1, 1
    unit.ApplyLayout(2.0, 5.0, AreaModify.OVERRIDE)
    assert unit.area == pytest.approx(10.0)


def test_override_needs_both_dimensions():
    unit = FunctionUnit()
    with pytest.raises(ValueError):
        unit.ApplyLayout(2.0, 0, AreaModify.OVERRIDE)


def test_calculate_before_initialize_is_a_noop(param, tech, gate_params, caplog):
    dff = DFF(param, tech, gate_params)
    with caplog.at_level(logging.ERROR):
        assert dff.CalculateArea() is None
        assert dff.CalculateLatency(10) is None
        assert dff.CalculatePower(10, 10) is None
    assert dff.area == 0
    assert dff.readLatency == 0
    assert dff.readDynamicEnergy == 0
    assert "[DFF] Error: Require initialization first!" in caplog.text


def test_initialize_twice_warns(param, tech, gate_params, caplog):
    dff = DFF(param, tech, gate_params)
    dff.Initialize(8)
    with caplog.at_level(logging.WARNING):
        dff.Initialize(16)
    assert "Already initialized" in caplog.text
    assert dff.numDff == 16


def test_save_output_appends(param, tech, gate_params, tmp_path, capsys):
    dff = DFF(param, tech, gate_params)
    dff.Initialize(8)
    dff.CalculateArea()
    out = tmp_path / "report.txt"
    dff.SaveOutput("Buffer", str(out))
    dff.SaveOutput("Buffer", str(out))
    assert out.read_text().count("Buffer") == 2

    dff.PrintProperty()
    assert "DFF" in capsys.readouterr().out
