import csv
import logging

from constant import *

logger = logging.getLogger(__name__)

# wire width (nm) -> (aspect ratio, resistivity in ohm*m)
WIRE_TABLE = {
    200: (2.10, 2.42e-8),
    100: (2.30, 2.73e-8),
    50: (2.34, 3.91e-8),
    40: (1.90, 4.03e-8),
    32: (1.90, 4.51e-8),
    22: (2.00, 5.41e-8),
    14: (2.10, 7.43e-8),
}

# assigning any of these recomputes the derived fields
_SOURCE_FIELDS = {
    'operationmode', 'memcelltype', 'accesstype', 'deviceroadmap', 'wireWidth',
    'resistanceOn', 'resistanceOff',
    'heightInFeatureSizeSRAM', 'widthInFeatureSizeSRAM',
    'heightInFeatureSize1T1R', 'widthInFeatureSize1T1R',
    'heightInFeatureSizeCrossbar', 'widthInFeatureSizeCrossbar',
}


class Param:
    """Design options of one sub-array/PE run.

    Plain attributes with a few derived ones kept in sync on assignment,
    e.g. ``param.resistanceOn = 100e3`` also refreshes ``maxConductance``.
    One Param instance is passed explicitly to every block constructor.
    """

    def __init__(self):
        object.__setattr__(self, '_ready', False)

        # 1: conventional sequential, 2: conventional parallel, 3: BNN sequential,
        # 4: BNN parallel, 5: XNOR sequential, 6: XNOR parallel
        self.operationmode = 2
        self.memcelltype = 3        # 1: SRAM, 2: RRAM, 3: FeFET
        self.accesstype = 1         # 1: CMOS, 2: BJT, 3: diode, 4: none (cross-point)
        self.transistortype = 1     # conventional
        self.deviceroadmap = 2      # 1: HP, 2: LSTP

        self.speedUpDegree = 1
        self.algoWeightMax = 1
        self.algoWeightMin = -1

        self.clkFreq = 1e9
        self.featuresize = 40e-9    # wire width for sub-array simulation
        self.temp = 301
        self.technode = 32
        self.wireWidth = 40

        self.numRowSubArray = 128
        self.numColSubArray = 128
        self.relaxArrayCellHeight = 0
        self.relaxArrayCellWidth = 0

        self.numColMuxed = 8        # columns sharing one ADC
        self.levelOutput = 32       # multilevel SA output levels, 2^N
        self.cellBit = 4
        self.numBitInput = 1        # read pulses per input vector
        self.numRowPerSynapse = 1
        self.numColPerSynapse = 1
        self.currentMode = True     # current-mode multilevel sense amp

        # SRAM
        self.heightInFeatureSizeSRAM = 8
        self.widthInFeatureSizeSRAM = 20
        self.widthSRAMCellNMOS = 2.08
        self.widthSRAMCellPMOS = 1.23
        self.widthAccessCMOS = 1.31
        self.minSenseVoltage = 0.1

        # analog synaptic devices
        self.heightInFeatureSize1T1R = 4
        self.widthInFeatureSize1T1R = 4
        self.heightInFeatureSizeCrossbar = 2
        self.widthInFeatureSizeCrossbar = 2

        self.resistanceOn = 500e3
        self.resistanceOff = 500e3*100
        self.readVoltage = 0.5
        self.readPulseWidth = 10e-9
        self.accessVoltage = 1.1
        self.resistanceAccess = 15e3

        object.__setattr__(self, '_ready', True)
        self._update_derived()

    def __setattr__(self, name, value):
        super().__setattr__(name, value)
        if self._ready and name in _SOURCE_FIELDS:
            self._update_derived()

    def _update_derived(self):
        set_ = super().__setattr__

        mode = OperationMode.from_code(self.operationmode)
        set_('mode', mode)
        set_('parallelRead', mode.parallel_read)

        try:
            MemCellType(int(self.memcelltype))
        except ValueError:
            raise ValueError(f"Unknown memory cell type: {self.memcelltype}") from None
        try:
            AccessType(int(self.accesstype))
        except ValueError:
            raise ValueError(f"Unknown access type: {self.accesstype}") from None
        try:
            DeviceRoadmap(int(self.deviceroadmap))
        except ValueError:
            raise ValueError(f"Unknown device roadmap: {self.deviceroadmap}") from None

        if self.memcelltype == MemCellType.SRAM:
            set_('cellBit', 1)

        set_('maxConductance', 1.0/self.resistanceOn)
        set_('minConductance', 1.0/self.resistanceOff)

        wireWidth = int(self.wireWidth)
        if wireWidth != -1 and wireWidth not in WIRE_TABLE:
            raise ValueError(f"Wire width out of range: {self.wireWidth}")

        if self.memcelltype == MemCellType.SRAM:
            cellHeight, cellWidth = self.heightInFeatureSizeSRAM, self.widthInFeatureSizeSRAM
        elif self.accesstype == AccessType.CMOS:
            cellHeight, cellWidth = self.heightInFeatureSize1T1R, self.widthInFeatureSize1T1R
        else:
            cellHeight, cellWidth = self.heightInFeatureSizeCrossbar, self.widthInFeatureSizeCrossbar
        set_('wireLengthRow', wireWidth * 1e-9 * cellHeight)
        set_('wireLengthCol', wireWidth * 1e-9 * cellWidth)

        if wireWidth == -1:
            # ignore wire resistance
            set_('unitLengthWireResistance', 1.0)
            set_('wireResistanceRow', 0)
            set_('wireResistanceCol', 0)
        else:
            AR, Rho = WIRE_TABLE[wireWidth]
            unitLengthWireResistance = Rho / (wireWidth*1e-9 * wireWidth*1e-9 * AR)
            set_('unitLengthWireResistance', unitLengthWireResistance)
            set_('wireResistanceRow', unitLengthWireResistance * self.wireLengthRow)
            set_('wireResistanceCol', unitLengthWireResistance * self.wireLengthCol)

    def load_csv(self, filename):
        """Override defaults from a two-column ``key,value`` CSV file."""
        with open(filename, mode='r', newline='') as csvfile:
            reader = csv.reader(csvfile)
            for row in reader:
                if len(row) != 2 or row[0].strip().startswith('#'):
                    continue
                key, value = row[0].strip(), row[1].strip()
                if key.startswith('_') or not hasattr(self, key):
                    logger.warning("Unknown parameter '%s' in %s, skipped", key, filename)
                    continue
                setattr(self, key, _cast_like(getattr(self, key), value))
        return self

    def PrintProperty(self):
        print("Param:")
        for key, value in vars(self).items():
            if not key.startswith('_'):
                print(f"    {key}: {value}")


def _cast_like(default, value: str):
    if isinstance(default, bool):
        return value.lower() in ('1', 'true', 'yes')
    if isinstance(default, int):
        return int(float(value))
    if isinstance(default, float):
        return float(value)
    return value
