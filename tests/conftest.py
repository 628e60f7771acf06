import numpy as np
import pytest

from constant import *
from Param import Param
from Technology import Technology
from MemCell import MemCell
from gate_calculator import compute_gate_params

ALL_MODES = list(OperationMode)

# (memcelltype, accesstype)
CELL_CONFIGS = {
    "sram": (MemCellType.SRAM, AccessType.CMOS),
    "rram_1t1r": (MemCellType.RRAM, AccessType.CMOS),
    "rram_xpoint": (MemCellType.RRAM, AccessType.NONE),
    "fefet": (MemCellType.FeFET, AccessType.CMOS),
}


class Env:
    def __init__(self, param):
        self.param = param
        self.tech = Technology().Initialize(param.technode, param.deviceroadmap)
        self.cell = MemCell(param)
        self.gate_params = compute_gate_params(param, self.tech)

    @property
    def args(self):
        return self.param, self.tech, self.cell, self.gate_params


@pytest.fixture
def make_env():
    """Factory: make_env(cell="rram_1t1r", operationmode=2, **param_overrides)."""
    def _make(cell="rram_1t1r", **overrides):
        param = Param()
        param.memcelltype, param.accesstype = CELL_CONFIGS[cell]
        param.numRowSubArray = 32
        param.numColSubArray = 32
        for key, value in overrides.items():
            setattr(param, key, value)
        return Env(param)
    return _make


@pytest.fixture
def param():
    return Param()


@pytest.fixture
def tech(param):
    return Technology().Initialize(param.technode, param.deviceroadmap)


@pytest.fixture
def gate_params(param, tech):
    return compute_gate_params(param, tech)


@pytest.fixture
def cell(param):
    return MemCell(param)


@pytest.fixture
def rng():
    return np.random.default_rng(0)
