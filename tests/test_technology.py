import pytest

from constant import *
from Technology import Technology
from gate_calculator import horowitz, CalculateGateArea, CalculateOnResistance, CalculateGateLeakage


def test_unsupported_node():
    with pytest.raises(ValueError):
        Technology().Initialize(28, DeviceRoadmap.HP)


def test_unknown_roadmap():
    with pytest.raises(ValueError):
        Technology().Initialize(32, 5)


def test_hp_leaks_more_than_lstp():
    hp = Technology().Initialize(32, DeviceRoadmap.HP)
    lstp = Technology().Initialize(32, DeviceRoadmap.LSTP)
    width = 4 * hp.featureSize
    assert CalculateGateLeakage(INV, 1, width, width, 300, hp) > CalculateGateLeakage(INV, 1, width, width, 300, lstp)


def test_on_resistance_scales_with_width(tech):
    r1 = CalculateOnResistance(tech.featureSize, NMOS, 300, tech)
    r2 = CalculateOnResistance(2 * tech.featureSize, NMOS, 300, tech)
    assert r1 == pytest.approx(2 * r2)


def test_horowitz_zero_time_constant():
    res = horowitz(0, 0.5, 1e9)
    assert res['result'] == 0
    assert res['rampOutput'] == 1e20


def test_horowitz_ramp_chain():
    res = horowitz(1e-10, 0.5, 1e20)
    assert res['result'] > 0
    slower = horowitz(1e-10, 0.5, res['rampOutput'])
    assert slower['result'] > res['result']


def test_gate_area_folds_wide_transistors(tech):
    F = tech.featureSize
    narrow = CalculateGateArea(INV, 1, 2*F, 4*F, MAX_TRANSISTOR_HEIGHT*F, tech)
    wide = CalculateGateArea(INV, 1, 60*F, 120*F, MAX_TRANSISTOR_HEIGHT*F, tech)
    assert wide['height'] == narrow['height']
    assert wide['width'] > narrow['width']


def test_gate_params(gate_params):
    for key in ("hInv", "wInv", "capInvInput", "resInv", "hNand", "wNand", "leakageNand",
                "capTgDrain", "capTgGateN", "minCellHeight", "minCellWidth"):
        assert gate_params[key] > 0, key
