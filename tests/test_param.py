import pytest

from constant import *
from Param import Param, WIRE_TABLE


def test_defaults():
    param = Param()
    assert param.mode == OperationMode.CONVENTIONAL_PARALLEL
    assert param.parallelRead
    assert param.numRowSubArray == 128
    assert param.numColMuxed == 8
    assert param.levelOutput == 32
    assert param.maxConductance == pytest.approx(1/500e3)
    assert param.minConductance == pytest.approx(1/50e6)


def test_derived_fields_follow_assignment():
    param = Param()
    param.resistanceOn = 100e3
    assert param.maxConductance == pytest.approx(1/100e3)

    param.operationmode = 3
    assert param.mode == OperationMode.BNN_SEQUENTIAL
    assert not param.parallelRead


def test_wire_model():
    param = Param()
    AR, Rho = WIRE_TABLE[40]
    unit = Rho / (40e-9 * 40e-9 * AR)
    assert param.unitLengthWireResistance == pytest.approx(unit)
    # FeFET 1T1R cell is 4F x 4F
    assert param.wireResistanceRow == pytest.approx(unit * 40e-9 * 4)

    param.wireWidth = -1
    assert param.unitLengthWireResistance == 1.0
    assert param.wireResistanceRow == 0
    assert param.wireResistanceCol == 0


def test_sram_forces_single_bit_cell():
    param = Param()
    param.memcelltype = MemCellType.SRAM
    assert param.cellBit == 1


def test_cell_type_codes_are_enum_members():
    import constant
    assert not hasattr(constant, "SRAM")
    param = Param()
    param.memcelltype = 1
    assert param.memcelltype == MemCellType.SRAM
    assert param.cellBit == 1


@pytest.mark.parametrize("field, value", [
    ("wireWidth", 33),
    ("operationmode", 7),
    ("memcelltype", 9),
    ("accesstype", 0),
    ("deviceroadmap", 3),
])
def test_invalid_codes_raise(field, value):
    param = Param()
    with pytest.raises(ValueError):
        setattr(param, field, value)


def test_operation_mode_flags():
    assert OperationMode.from_code("4") == OperationMode.BNN_PARALLEL
    assert OperationMode.XNOR_SEQUENTIAL.is_binary
    assert not OperationMode.XNOR_SEQUENTIAL.parallel_read
    assert OperationMode.CONVENTIONAL_SEQUENTIAL.is_conventional
    with pytest.raises(ValueError):
        OperationMode.from_code(0)


def test_load_csv(tmp_path, caplog):
    config = tmp_path / "config.csv"
    config.write_text("operationmode,1\nnumRowSubArray,64\nreadVoltage,0.3\n"
                      "currentMode,false\nnotAParam,1\n# comment,2\n")
    param = Param().load_csv(str(config))

    assert param.mode == OperationMode.CONVENTIONAL_SEQUENTIAL
    assert param.numRowSubArray == 64
    assert isinstance(param.numRowSubArray, int)
    assert param.readVoltage == pytest.approx(0.3)
    assert param.currentMode is False
    assert "notAParam" in caplog.text
