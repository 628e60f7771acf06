import numpy as np
import pytest

from constant import *
from ColumnResistance import CopySubArray, CopySubInput, GetInputVector, GetColumnResistance, \
    MapWeightToConductance


def test_copies_never_alias(rng):
    weight = rng.uniform(size=(8, 6))
    tile = CopySubArray(weight, 4, 2, 4, 4)
    assert tile.shape == (4, 4)
    np.testing.assert_array_equal(tile, weight[4:8, 2:6])
    tile[:] = -1
    assert (weight >= 0).all()

    batch = rng.integers(0, 2, size=(8, 5)).astype(float)
    sub = CopySubInput(batch, 2, 3, 4)
    np.testing.assert_array_equal(sub, batch[2:6, :3])
    sub[:] = 7
    assert (batch <= 1).all()


def test_edge_tile_is_cut():
    weight = np.arange(20.0).reshape(4, 5)
    assert CopySubArray(weight, 2, 3, 4, 4).shape == (2, 2)


def test_input_vector_activity():
    batch = np.array([[1, 0], [0, 0], [1, 0], [1, 0]], dtype=float)
    vector, activity = GetInputVector(batch, 0)
    np.testing.assert_array_equal(vector, [1, 0, 1, 1])
    assert activity == pytest.approx(0.75)
    assert GetInputVector(batch, 1)[1] == 0


def test_weight_mapping(param):
    g = MapWeightToConductance([param.algoWeightMin, 0, param.algoWeightMax, 5], param)
    assert g[0] == pytest.approx(param.minConductance)
    assert g[1] == pytest.approx((param.minConductance + param.maxConductance) / 2)
    assert g[2] == pytest.approx(param.maxConductance)
    assert g[3] == pytest.approx(param.maxConductance)


def _env(make_env, cell, mode):
    return make_env(cell, operationmode=int(mode), wireWidth=-1)


def test_parallel_read_sums_active_rows(make_env):
    env = _env(make_env, "rram_xpoint", OperationMode.CONVENTIONAL_PARALLEL)
    weight = np.array([[1e-5, 2e-6], [4e-6, 1e-6], [5e-6, 3e-6]])
    input = np.array([1, 0, 1])
    R = GetColumnResistance(input, weight, env.cell, env.param, 0)
    np.testing.assert_allclose(R, [1/(1e-5 + 5e-6), 1/(2e-6 + 3e-6)])


def test_sequential_read_averages_active_rows(make_env):
    env = _env(make_env, "rram_xpoint", OperationMode.CONVENTIONAL_SEQUENTIAL)
    weight = np.array([[1e-5, 2e-6], [4e-6, 1e-6], [5e-6, 3e-6]])
    input = np.array([1, 0, 1])
    R = GetColumnResistance(input, weight, env.cell, env.param, 0)
    np.testing.assert_allclose(R, [2/(1e-5 + 5e-6), 2/(2e-6 + 3e-6)])


def test_1t1r_adds_access_resistance(make_env):
    env = _env(make_env, "rram_1t1r", OperationMode.CONVENTIONAL_PARALLEL)
    weight = np.full((2, 2), 1e-5)
    R = GetColumnResistance(np.array([1, 0]), weight, env.cell, env.param, 0)
    np.testing.assert_allclose(R, 1e5 + env.cell.resistanceAccess)


def test_wire_resistance_grows_with_distance(make_env):
    env = make_env("fefet")
    weight = np.full((4, 4), 1e-5)
    R = GetColumnResistance(np.ones(4), weight, env.cell, env.param, 0)
    assert (np.diff(R) > 0).all()


def test_sram_ignores_weight(make_env):
    env = _env(make_env, "sram", OperationMode.CONVENTIONAL_PARALLEL)
    weight = np.array([[0.0, 1.0], [1.0, 0.0]])
    R = GetColumnResistance(np.array([1, 1]), weight, env.cell, env.param, 2e4)
    np.testing.assert_allclose(R, [1e4, 1e4])


@pytest.mark.parametrize("cell", ["sram", "rram_1t1r", "rram_xpoint", "fefet"])
@pytest.mark.parametrize("mode", [OperationMode.CONVENTIONAL_PARALLEL, OperationMode.CONVENTIONAL_SEQUENTIAL])
def test_all_zero_input_is_open_circuit(make_env, cell, mode):
    env = make_env(cell, operationmode=int(mode))
    weight = np.full((4, 3), 1e-5)
    with np.errstate(all='raise'):
        R = GetColumnResistance(np.zeros(4), weight, env.cell, env.param, 1e4)
    assert np.isinf(R).all()


def test_zero_conductance_cells_read_open(make_env):
    env = _env(make_env, "rram_xpoint", OperationMode.CONVENTIONAL_PARALLEL)
    weight = np.array([[0.0, 1e-5], [0.0, 1e-5]])
    R = GetColumnResistance(np.ones(2), weight, env.cell, env.param, 0)
    assert np.isinf(R[0])
    assert R[1] == pytest.approx(5e4)


def test_shape_mismatch(make_env):
    env = make_env("rram_1t1r")
    with pytest.raises(ValueError):
        GetColumnResistance(np.ones(3), np.ones((4, 4)), env.cell, env.param, 0)
