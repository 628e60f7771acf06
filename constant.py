from enum import IntEnum

# gate types
INV = 0
NOR = 1
NAND = 2

# transistor types
NMOS = 0
PMOS = 1

# layout rules, in units of feature size
MAX_TRANSISTOR_HEIGHT = 28
MAX_TRANSISTOR_HEIGHT_14nm = 40
MAX_TRANSISTOR_HEIGHT_10nm = 44
MAX_TRANSISTOR_HEIGHT_7nm = 48
MIN_GAP_BET_P_AND_N_DIFFS = 3.5
MIN_GAP_BET_SAME_TYPE_DIFFS = 1.6
MIN_GAP_BET_GATE_POLY = 2.8
MIN_GAP_BET_CONTACT_POLY = 0.7
CONTACT_SIZE = 1.3
MIN_WIDTH_POWER_RAIL = 3.4
MIN_POLY_EXT_DIFF = 1.0
MIN_GAP_BET_FIELD_POLY = 1.6
POLY_WIDTH = 1.0
M2_PITCH = 3.2
M3_PITCH = 2.8

# leakage of stacked gates relative to a single transistor
AVG_RATIO_LEAK_2INPUT_NAND = 0.48
AVG_RATIO_LEAK_3INPUT_NAND = 0.31
AVG_RATIO_LEAK_2INPUT_NOR = 1.95
AVG_RATIO_LEAK_3INPUT_NOR = 3.08

MIN_NMOS_SIZE = 1.5
IR_DROP_TOLERANCE = 0.25

# voltage sense amp transistor widths, in units of feature size
W_SENSE_P = 7.5
W_SENSE_N = 3.75
W_SENSE_ISO = 12.5
W_SENSE_EN = 5.0
W_SENSE_MUX = 9.0

# on-chip wire capacitance, F/m
UNIT_WIRE_CAP = 0.2e-15/1e-6

# switch matrix
ROW_MODE = 0
COL_MODE = 1

# bus direction
HORIZONTAL = 0
VERTICAL = 1


class MemCellType(IntEnum):
    SRAM = 1
    RRAM = 2
    FeFET = 3


class AccessType(IntEnum):
    CMOS = 1
    BJT = 2
    DIODE = 3
    NONE = 4


class DeviceRoadmap(IntEnum):
    HP = 1
    LSTP = 2


class AreaModify(IntEnum):
    NONE = 0
    MAGIC = 1
    OVERRIDE = 2


class OperationMode(IntEnum):
    CONVENTIONAL_SEQUENTIAL = 1
    CONVENTIONAL_PARALLEL = 2
    BNN_SEQUENTIAL = 3
    BNN_PARALLEL = 4
    XNOR_SEQUENTIAL = 5
    XNOR_PARALLEL = 6

    @classmethod
    def from_code(cls, code):
        try:
            return cls(int(code))
        except ValueError:
            raise ValueError(f"Unknown operation mode: {code}") from None

    @property
    def parallel_read(self) -> bool:
        return self in (OperationMode.CONVENTIONAL_PARALLEL,
                        OperationMode.BNN_PARALLEL,
                        OperationMode.XNOR_PARALLEL)

    @property
    def is_conventional(self) -> bool:
        return self in (OperationMode.CONVENTIONAL_SEQUENTIAL,
                        OperationMode.CONVENTIONAL_PARALLEL)

    @property
    def is_binary(self) -> bool:
        return not self.is_conventional
