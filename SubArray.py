import math
import logging
from collections import namedtuple

from constant import *
from FunctionUnit import FunctionUnit
from gate_calculator import horowitz, CalculateGateCap, CalculateDrainCap, CalculateGateLeakage, \
    CalculateOnResistance, CalculateTransconductance

from Decoder import RowDecoder
from DecoderDriver import DecoderDriver
from WLNewDecoderDriver import WLNewDecoderDriver
from SwitchMatrix import SwitchMatrix
from NewSwitchMatrix import NewSwitchMatrix
from Mux import Mux
from Precharger import Precharger
from SenseAmp import SenseAmp
from CurrentSenseAmp import CurrentSenseAmp
from SRAMWriteDriver import SRAMWriteDriver
from MultilevelSenseAmp import MultilevelSenseAmp
from MultilevelSAEncoder import MultilevelSAEncoder
from DFF import DFF
from Adder import Adder
from ShiftAdd import ShiftAdd

logger = logging.getLogger(__name__)

# total = adc + accum + other
ReadBreakdown = namedtuple("ReadBreakdown", ["total", "adc", "accum", "other"])


class SubArray(FunctionUnit):
    """One crossbar macro with its row/column periphery.

    The operation mode picks which peripheral blocks exist (see
    ``Initialize``); blocks not used by the mode are never initialized and
    keep zero area, latency and energy. CalculateLatency/CalculatePower are
    pure functions of the column resistances and the row activity and
    return a ReadBreakdown.
    """

    def __init__(self, param, tech, cell, gate_params):
        super().__init__(param, tech, gate_params)
        self.cell = cell

        self.mode = param.mode
        self.numColMuxed = param.numColMuxed
        self.levelOutput = param.levelOutput
        self.clkFreq = param.clkFreq
        self.relaxArrayCellHeight = param.relaxArrayCellHeight
        self.relaxArrayCellWidth = param.relaxArrayCellWidth
        self.numReadPulse = param.numBitInput
        self.avgWeightBit = param.cellBit
        self.numCellPerSynapse = param.numColPerSynapse
        self.activityRowRead = 1

        self.heightArray = self.widthArray = self.areaArray = 0
        self.readDynamicEnergyArray = 0
        self.colDelay = 0
        self.resCellAccess = 0
        self.capCellAccess = 0
        self.areaADC = self.areaAccum = self.areaOther = 0
        self.readLatencyADC = self.readLatencyAccum = self.readLatencyOther = 0
        self.readDynamicEnergyADC = self.readDynamicEnergyAccum = self.readDynamicEnergyOther = 0

        # circuit modules
        self.wlDecoder = RowDecoder(param, tech, gate_params)
        self.wlNewDecoderDriver = WLNewDecoderDriver(param, tech, gate_params)
        self.wlDecoderDriver = DecoderDriver(param, tech, cell, gate_params)
        self.wlNewSwitchMatrix = NewSwitchMatrix(param, tech, gate_params)
        self.wlSwitchMatrix = SwitchMatrix(param, tech, gate_params)
        self.slSwitchMatrix = SwitchMatrix(param, tech, gate_params)
        self.mux = Mux(param, tech, gate_params)
        self.muxDecoder = RowDecoder(param, tech, gate_params)
        self.precharger = Precharger(param, tech, gate_params)
        self.senseAmp = SenseAmp(param, tech, gate_params)
        self.rowCurrentSenseAmp = CurrentSenseAmp(param, tech, gate_params)
        self.sramWriteDriver = SRAMWriteDriver(param, tech, gate_params)
        self.multilevelSenseAmp = MultilevelSenseAmp(param, tech, gate_params)
        self.multilevelSAEncoder = MultilevelSAEncoder(param, tech, gate_params)
        self.dff = DFF(param, tech, gate_params)
        self.adder = Adder(param, tech, gate_params)
        self.shiftAdd = ShiftAdd(param, tech, gate_params)

        self._active = {}

    @property
    def muxed(self):
        return self.numColMuxed > 1

    def _use(self, name):
        block = getattr(self, name)
        self._active[name] = block
        return block

    def GetBlocks(self):
        """Blocks initialized for the current mode, in layout order."""
        return dict(self._active)

    def Initialize(self, numRow, numCol, unitWireRes):
        self.numRow = numRow
        self.numCol = numCol
        self.unitWireRes = unitWireRes
        self.numColMuxed = min(self.param.numColMuxed, numCol)
        self.numReadCellPerOperationNeuro = numCol
        self._active = {}

        cell, F = self.cell, self.tech.featureSize
        MIN_CELL_HEIGHT = MAX_TRANSISTOR_HEIGHT
        MIN_CELL_WIDTH = (MIN_GAP_BET_GATE_POLY + POLY_WIDTH) * 2
        cellHeight, cellWidth = cell.heightInFeatureSize, cell.widthInFeatureSize

        if cell.isSRAM:
            if self.relaxArrayCellWidth:
                cellWidth = max(cellWidth, MIN_CELL_WIDTH)
            if self.relaxArrayCellHeight:
                cellHeight = max(cellHeight, MIN_CELL_HEIGHT)
            self.lengthRow = numCol * cellWidth * F
            self.lengthCol = numRow * cellHeight * F
        elif cell.is1T1R:
            # a switch matrix column holds 2 pass gates
            if self.relaxArrayCellWidth:
                cellWidth = max(cellWidth, MIN_CELL_WIDTH*2)
            if self.relaxArrayCellHeight:
                cellHeight = max(cellHeight, MIN_CELL_HEIGHT)
            self.lengthRow = numCol * cellWidth * F
            self.lengthCol = numRow * cellHeight * F
        else:
            # cross-point cells are drawn at the device feature size
            rowPitch, colPitch = cellWidth * cell.featureSize, cellHeight * cell.featureSize
            if self.relaxArrayCellWidth:
                rowPitch = max(rowPitch, MIN_CELL_WIDTH*2*F)
            if self.relaxArrayCellHeight:
                colPitch = max(colPitch, MIN_CELL_HEIGHT*F)
            self.lengthRow = numCol * rowPitch
            self.lengthCol = numRow * colPitch

        self.capRow1 = self.lengthRow * UNIT_WIRE_CAP    # BL for 1T1R, WL for cross-point and SRAM
        self.capRow2 = self.lengthRow * UNIT_WIRE_CAP    # WL for 1T1R
        self.capCol = self.lengthCol * UNIT_WIRE_CAP
        self.resRow = self.lengthRow * unitWireRes
        self.resCol = self.lengthCol * unitWireRes

        if cell.isSRAM:
            self._initialize_sram()
        else:
            self._initialize_nvm()
        self._mark_initialized()

    def _initialize_sram(self):
        cell, F, T = self.cell, self.tech.featureSize, self.param.temp
        numRow, numCol, mode = self.numRow, self.numCol, self.mode

        self.resCellAccess = CalculateOnResistance(cell.widthAccessCMOS * F, NMOS, T, self.tech)
        self.capCellAccess = CalculateDrainCap(cell.widthAccessCMOS * F, NMOS, cell.widthInFeatureSize * F, self.tech)
        cell.resCellAccess = self.resCellAccess
        cell.capCellAccess = self.capCellAccess
        cell.capSRAMCell = self.capCellAccess \
            + CalculateDrainCap(cell.widthSRAMCellNMOS * F, NMOS, cell.widthInFeatureSize * F, self.tech) \
            + CalculateDrainCap(cell.widthSRAMCellPMOS * F, PMOS, cell.widthInFeatureSize * F, self.tech) \
            + CalculateGateCap(cell.widthSRAMCellNMOS * F, self.tech) \
            + CalculateGateCap(cell.widthSRAMCellPMOS * F, self.tech)

        if not mode.parallel_read:
            self._use('wlDecoder').Initialize(math.ceil(math.log2(numRow)), False)
            self._use('senseAmp').Initialize(numCol, False, cell.minSenseVoltage, self.lengthRow/numCol,
                                             self.numReadCellPerOperationNeuro)
            adderBit = math.ceil(math.log2(numRow)) + 1
            numAdder = numCol // self.numCellPerSynapse
            self._use('dff').Initialize((adderBit+1) * numAdder)
            self._use('adder').Initialize(adderBit, numAdder)
            if mode.is_conventional and self.numReadPulse > 1:
                self._use('shiftAdd').Initialize(numAdder, adderBit+1, self.numReadPulse)
        else:
            self._use('wlSwitchMatrix').Initialize(ROW_MODE, numRow, self.resRow, self.activityRowRead)
            if mode.is_conventional and self.muxed:
                self._use('mux').Initialize(math.ceil(numCol/self.numColMuxed), self.numColMuxed,
                                            self.resCellAccess/numRow/2)
                self._use('muxDecoder').Initialize(math.ceil(math.log2(self.numColMuxed)), True)
            self._use('multilevelSenseAmp').Initialize(numCol // self.numColMuxed, self.levelOutput,
                                                       self.numReadCellPerOperationNeuro, True,
                                                       self.param.currentMode)
            self._use('multilevelSAEncoder').Initialize(self.levelOutput, numCol // self.numColMuxed)
            if mode.is_conventional and self.numReadPulse > 1:
                self._use('shiftAdd').Initialize(math.ceil(numCol/self.numColMuxed),
                                                 int(math.log2(self.levelOutput))+1, self.numReadPulse)

        self._use('precharger').Initialize(numCol, self.resCol, self.numReadCellPerOperationNeuro)
        self._use('sramWriteDriver').Initialize(numCol)

    def _initialize_nvm(self):
        cell, F, T = self.cell, self.tech.featureSize, self.param.temp
        numRow, numCol, mode = self.numRow, self.numCol, self.mode

        if cell.is1T1R:
            cell.resCellAccess = cell.resistanceOn * IR_DROP_TOLERANCE
            cell.widthAccessCMOS = CalculateOnResistance(F, NMOS, T, self.tech) * IR_DROP_TOLERANCE * 2 / cell.resCellAccess
            if cell.widthAccessCMOS > cell.widthInFeatureSize:
                raise ValueError(f"Transistor width of 1T1R={cell.widthAccessCMOS:.2f}F is larger than "
                                 f"the assigned cell width={cell.widthInFeatureSize:.2f}F in layout")
            cell.resMemCellOn = cell.resCellAccess + cell.resistanceOn
            cell.resMemCellOff = cell.resCellAccess + cell.resistanceOff
            cell.resMemCellAvg = cell.resCellAccess + cell.resistanceAvg
            self.resCellAccess = cell.resCellAccess

            # gate cap of the access transistors on the WL, drain cap on the column
            self.capRow2 += CalculateGateCap(cell.widthAccessCMOS * F, self.tech) * numCol
            self.capCol += CalculateDrainCap(cell.widthAccessCMOS * F, NMOS, cell.widthInFeatureSize * F, self.tech) * numRow
        else:
            cell.resMemCellOn = cell.resistanceOn
            cell.resMemCellOff = cell.resistanceOff
            cell.resMemCellAvg = cell.resistanceAvg
            self.resCellAccess = 0

        numAdder = math.ceil(numCol/self.numColMuxed)
        if not mode.parallel_read:
            resTg = cell.resMemCellOn / 2
            self._use('wlDecoder').Initialize(math.ceil(math.log2(numRow)), False)
            if cell.is1T1R:
                self._use('wlNewDecoderDriver').Initialize(numRow)
            else:
                self._use('wlDecoderDriver').Initialize(ROW_MODE, numRow, numCol)
            self._use('slSwitchMatrix').Initialize(COL_MODE, numCol, resTg, self.activityRowRead)
            if self.muxed:
                self._use('mux').Initialize(numAdder, self.numColMuxed, resTg)
                self._use('muxDecoder').Initialize(math.ceil(math.log2(self.numColMuxed)), True)

            if mode.is_conventional:
                adderBit = math.ceil(math.log2(numRow)) + self.avgWeightBit
                self._use('multilevelSenseAmp').Initialize(numCol // self.numColMuxed, 2**self.avgWeightBit,
                                                           self.numReadCellPerOperationNeuro, False,
                                                           self.param.currentMode)
                if self.avgWeightBit > 1:
                    self._use('multilevelSAEncoder').Initialize(2**self.avgWeightBit, numCol // self.numColMuxed)
            else:
                adderBit = math.ceil(math.log2(numRow)) + 1
                self._use('rowCurrentSenseAmp').Initialize(numCol // self.numColMuxed, True, False,
                                                           self.numReadCellPerOperationNeuro)
            self._use('dff').Initialize((adderBit+1) * numAdder)
            self._use('adder').Initialize(adderBit, numAdder)
            if mode.is_conventional and self.numReadPulse > 1:
                self._use('shiftAdd').Initialize(numAdder, adderBit+1, self.numReadPulse)
        else:
            resTg = cell.resMemCellOn / numRow / 2
            if cell.is1T1R:
                self._use('wlNewSwitchMatrix').Initialize(numRow, self.activityRowRead)
            else:
                self._use('wlSwitchMatrix').Initialize(ROW_MODE, numRow, resTg, self.activityRowRead)
            self._use('slSwitchMatrix').Initialize(COL_MODE, numCol, resTg * numRow, self.activityRowRead)
            if self.muxed:
                self._use('mux').Initialize(numAdder, self.numColMuxed, resTg)
                if mode.is_binary:
                    # the XNOR/BNN column pairs halve the selection space
                    numAddr = max(math.ceil(math.log2(self.numColMuxed/2)), 1)
                else:
                    numAddr = math.ceil(math.log2(self.numColMuxed))
                self._use('muxDecoder').Initialize(numAddr, True)
            self._use('multilevelSenseAmp').Initialize(numCol // self.numColMuxed, self.levelOutput,
                                                       self.numReadCellPerOperationNeuro, True,
                                                       self.param.currentMode)
            self._use('multilevelSAEncoder').Initialize(self.levelOutput, numCol // self.numColMuxed)
            if mode.is_conventional and self.numReadPulse > 1:
                self._use('shiftAdd').Initialize(numAdder, int(math.log2(self.levelOutput))+1, self.numReadPulse)

    def _area_of(self, *names):
        return sum(getattr(self, name).area for name in names if name in self._active)

    def _height_of(self, *names):
        return sum(getattr(self, name).height for name in names if name in self._active)

    def _mux_area(self, widthArray):
        if 'mux' not in self._active:
            return
        self.mux.CalculateArea(0, widthArray, AreaModify.NONE)
        self.muxDecoder.CalculateArea()
        minMuxHeight = max(self.muxDecoder.height, self.mux.height)
        self.mux.CalculateArea(minMuxHeight, widthArray, AreaModify.OVERRIDE)

    def CalculateArea(self):
        if not self._check_initialized():
            return
        self.heightArray = self.lengthCol
        self.widthArray = self.lengthRow
        self.areaArray = self.heightArray * self.widthArray
        heightArray, widthArray = self.heightArray, self.widthArray
        active = self._active

        # row drivers on the left edge of the array
        for name in ('wlDecoder', 'wlNewDecoderDriver', 'wlDecoderDriver', 'wlSwitchMatrix', 'wlNewSwitchMatrix'):
            if name in active:
                active[name].CalculateArea(heightArray, 0, AreaModify.NONE)
        # column circuits stacked under the array
        for name in ('precharger', 'sramWriteDriver', 'slSwitchMatrix', 'multilevelSenseAmp',
                     'multilevelSAEncoder', 'rowCurrentSenseAmp', 'adder', 'dff', 'shiftAdd'):
            if name in active:
                active[name].CalculateArea(0, widthArray, AreaModify.NONE)
        if 'senseAmp' in active:
            self.senseAmp.CalculateArea(0, widthArray, AreaModify.MAGIC)
        self._mux_area(widthArray)

        rowDrivers = ('wlDecoder', 'wlNewDecoderDriver', 'wlDecoderDriver', 'wlSwitchMatrix', 'wlNewSwitchMatrix')
        columnStack = ('precharger', 'sramWriteDriver', 'slSwitchMatrix', 'mux', 'senseAmp', 'multilevelSenseAmp',
                       'multilevelSAEncoder', 'rowCurrentSenseAmp', 'adder', 'dff', 'shiftAdd')
        widthRowDrive = sum(getattr(self, name).width for name in rowDrivers if name in active)
        widthMuxDecoder = self.muxDecoder.width if 'muxDecoder' in active else 0

        self.height = heightArray + self._height_of(*columnStack)
        self.width = max(widthRowDrive, widthMuxDecoder) + widthArray
        self.area = self.height * self.width
        self.usedArea = self.areaArray + sum(block.area for block in active.values())
        self.emptyArea = self.area - self.usedArea

        if self.cell.isSRAM:
            self.areaADC = self._area_of('precharger', 'senseAmp', 'multilevelSenseAmp', 'multilevelSAEncoder')
            self.areaOther = self._area_of('wlDecoder', 'wlSwitchMatrix', 'sramWriteDriver', 'mux', 'muxDecoder')
        else:
            self.areaADC = self._area_of('multilevelSenseAmp', 'multilevelSAEncoder', 'rowCurrentSenseAmp')
            self.areaOther = self._area_of(*rowDrivers, 'slSwitchMatrix', 'mux', 'muxDecoder')
        self.areaAccum = self._area_of('adder', 'dff', 'shiftAdd')
        return self.area

    def _sram_col_delay(self, rampInput):
        cell, F, T, tech = self.cell, self.tech.featureSize, self.param.temp, self.tech
        resPullDown = CalculateOnResistance(cell.widthSRAMCellNMOS * F, NMOS, T, tech)
        tau = (self.resCellAccess + resPullDown) * (self.capCellAccess + self.capCol) + self.resCol * self.capCol / 2
        # the bit line only needs to swing half of the minimum sense voltage
        tau *= math.log(tech.vdd / (tech.vdd - cell.minSenseVoltage / 2))
        gm = CalculateTransconductance(cell.widthAccessCMOS * F, NMOS, tech)
        beta = 1 / (resPullDown * gm)
        return horowitz(tau, beta, rampInput)['result']

    def _mux_latency(self, rampInput):
        if 'mux' not in self._active:
            return 0
        numMuxOut = math.ceil(self.numCol/self.numColMuxed)
        self.mux.CalculateLatency(rampInput, 0, self.numColMuxed)
        self.muxDecoder.CalculateLatency(1e20, self.mux.capTgGateN*numMuxOut, self.mux.capTgGateP*numMuxOut,
                                         self.numColMuxed)
        return (self.mux.readLatency + self.muxDecoder.readLatency) / self.numReadPulse

    def CalculateLatency(self, columnResistance, activityRowRead):
        if not self._check_initialized():
            return
        act = activityRowRead
        numRow, numColMuxed, numReadPulse = self.numRow, self.numColMuxed, self.numReadPulse
        active = self._active
        capTgDrain = self.gate_params["capTgDrain"]

        if self.cell.isSRAM:
            numReadOperationPerRow = math.ceil(self.numCol/self.numReadCellPerOperationNeuro)
            if not self.mode.parallel_read:
                numRead = numReadOperationPerRow * numRow * act
                self.wlDecoder.CalculateLatency(1e20, self.capRow1, 0, numRow*act)
                self.precharger.CalculateLatency(1e20, self.capCol, numRead)
                self.senseAmp.CalculateLatency(numRead)
                self.dff.CalculateLatency(numRead)
                self.adder.CalculateLatency(1e20, capTgDrain, numRead)
                if 'shiftAdd' in active:
                    self.shiftAdd.CalculateLatency(1)
                self.colDelay = self._sram_col_delay(self.wlDecoder.rampOutput) * numRead

                latencyADC = self.precharger.readLatency + self.colDelay + self.senseAmp.readLatency
                latencyAccum = self.adder.readLatency + self.dff.readLatency + self.shiftAdd.readLatency
                latencyOther = self.wlDecoder.readLatency
            else:
                self.wlSwitchMatrix.CalculateLatency(1e20, self.capRow1, self.resRow, numColMuxed)
                self.precharger.CalculateLatency(1e20, self.capCol, numColMuxed)
                muxLatency = self._mux_latency(1e20)
                self.multilevelSenseAmp.CalculateLatency(columnResistance, numColMuxed, 1)
                self.multilevelSAEncoder.CalculateLatency(1e20, numColMuxed)
                if 'shiftAdd' in active:
                    self.shiftAdd.CalculateLatency(numColMuxed)
                colDelay = self._sram_col_delay(self.wlSwitchMatrix.rampOutput)
                if self.mode.is_conventional:
                    self.colDelay = colDelay / numReadPulse
                else:
                    self.colDelay = colDelay * numReadOperationPerRow * numRow * act

                latencyADC = self.precharger.readLatency + self.colDelay \
                    + self.multilevelSenseAmp.readLatency + self.multilevelSAEncoder.readLatency
                latencyAccum = self.shiftAdd.readLatency
                latencyOther = max(self.wlSwitchMatrix.readLatency, muxLatency)
        else:
            # the column is sensed once it drops 15~20% below the precharge level
            tau = self.capCol * (self.cell.resMemCellAvg / (numRow/2))
            colRamp = horowitz(tau, 0, 1e20)['rampOutput']
            self.colDelay = tau * 0.2 * numColMuxed

            if not self.mode.parallel_read:
                numReadRow = numRow * act * numColMuxed
                self.wlDecoder.CalculateLatency(1e20, self.capRow2, 0, numReadRow)
                if self.cell.is1T1R:
                    self.wlNewDecoderDriver.CalculateLatency(self.wlDecoder.rampOutput, self.capRow2, self.resRow,
                                                             numReadRow)
                else:
                    self.wlDecoderDriver.CalculateLatency(self.wlDecoder.rampOutput, self.capRow1, self.capRow1,
                                                          self.resRow, numReadRow)
                self.slSwitchMatrix.CalculateLatency(1e20, self.capCol, self.resCol, 0)
                muxLatency = self._mux_latency(colRamp)
                if self.mode.is_conventional:
                    self.multilevelSenseAmp.CalculateLatency(columnResistance, numColMuxed, numRow*act)
                    if 'multilevelSAEncoder' in active:
                        self.multilevelSAEncoder.CalculateLatency(1e20, numColMuxed*numRow*act)
                else:
                    self.rowCurrentSenseAmp.CalculateLatency(columnResistance, numColMuxed, numRow*act)
                self.adder.CalculateLatency(1e20, capTgDrain, numColMuxed*numRow*act)
                self.dff.CalculateLatency(numColMuxed*numRow*act)
                if 'shiftAdd' in active:
                    self.shiftAdd.CalculateLatency(numColMuxed)
                rowDrive = self.wlDecoder.readLatency + self.wlNewDecoderDriver.readLatency \
                    + self.wlDecoderDriver.readLatency
            else:
                if self.cell.is1T1R:
                    self.wlNewSwitchMatrix.CalculateLatency(1e20, self.capRow2, self.resRow, numColMuxed)
                else:
                    self.wlSwitchMatrix.CalculateLatency(1e20, self.capRow1, self.resRow, numColMuxed)
                self.slSwitchMatrix.CalculateLatency(1e20, self.capCol, self.resCol, 0)
                muxLatency = self._mux_latency(colRamp)
                self.multilevelSenseAmp.CalculateLatency(columnResistance, numColMuxed, 1)
                self.multilevelSAEncoder.CalculateLatency(1e20, numColMuxed)
                if 'shiftAdd' in active:
                    self.shiftAdd.CalculateLatency(numColMuxed)
                rowDrive = self.wlNewSwitchMatrix.readLatency + self.wlSwitchMatrix.readLatency

            latencyADC = self.multilevelSenseAmp.readLatency + self.multilevelSAEncoder.readLatency \
                + self.rowCurrentSenseAmp.readLatency
            latencyAccum = self.adder.readLatency + self.dff.readLatency + self.shiftAdd.readLatency
            latencyOther = max(rowDrive, muxLatency) + self.colDelay / numReadPulse

        self.readLatencyADC = latencyADC
        self.readLatencyAccum = latencyAccum
        self.readLatencyOther = latencyOther
        self.readLatency = latencyADC + latencyAccum + latencyOther
        self.latencyBreakdown = ReadBreakdown(self.readLatency, latencyADC, latencyAccum, latencyOther)
        return self.latencyBreakdown

    def _mux_energy(self):
        if 'mux' not in self._active:
            return 0
        self.mux.CalculatePower(self.numColMuxed)
        self.muxDecoder.CalculatePower(self.numColMuxed)
        return (self.mux.readDynamicEnergy + self.muxDecoder.readDynamicEnergy) / self.numReadPulse

    def CalculatePower(self, columnResistance, activityRowRead):
        if not self._check_initialized():
            return
        act = activityRowRead
        numRow, numCol, numColMuxed = self.numRow, self.numCol, self.numColMuxed
        cell, tech = self.cell, self.tech
        active = self._active
        vdd2 = tech.vdd ** 2

        if cell.isSRAM:
            # average value, can be non-integer
            numReadOperationPerRow = max(numCol / self.numReadCellPerOperationNeuro, 1)
            self.readDynamicEnergyArray = 0    # just BL discharging
            self.sramWriteDriver.CalculatePower()
            self.precharger.CalculatePower(numReadOperationPerRow*numRow*act if not self.mode.parallel_read
                                           else numColMuxed)
            if not self.mode.parallel_read:
                numRead = numReadOperationPerRow * numRow * act
                numAdderPerOperation = self.numReadCellPerOperationNeuro / self.numCellPerSynapse
                self.wlDecoder.CalculatePower(numRow*act)
                self.adder.CalculatePower(numRead, numAdderPerOperation)
                self.dff.CalculatePower(numRead, numAdderPerOperation*(self.adder.numBit+1))
                self.senseAmp.CalculatePower(numRead)
                if 'shiftAdd' in active:
                    self.shiftAdd.CalculatePower(numRead)

                energyADC = self.precharger.readDynamicEnergy + self.readDynamicEnergyArray \
                    + self.senseAmp.readDynamicEnergy
                energyAccum = self.adder.readDynamicEnergy + self.dff.readDynamicEnergy \
                    + self.shiftAdd.readDynamicEnergy
                energyOther = self.wlDecoder.readDynamicEnergy
            else:
                self.wlSwitchMatrix.CalculatePower(numColMuxed, act)
                muxEnergy = self._mux_energy()
                self.multilevelSenseAmp.CalculatePower(columnResistance, 1)
                self.multilevelSAEncoder.CalculatePower(numColMuxed)
                if 'shiftAdd' in active:
                    self.shiftAdd.CalculatePower(numColMuxed)

                energyADC = self.precharger.readDynamicEnergy + self.readDynamicEnergyArray \
                    + self.multilevelSenseAmp.readDynamicEnergy + self.multilevelSAEncoder.readDynamicEnergy
                energyAccum = self.shiftAdd.readDynamicEnergy
                energyOther = self.wlSwitchMatrix.readDynamicEnergy + muxEnergy

            # two cross-coupled inverters per cell
            arrayLeakage = CalculateGateLeakage(INV, 1, cell.widthSRAMCellNMOS * tech.featureSize,
                                                cell.widthSRAMCellPMOS * tech.featureSize, self.param.temp, tech) \
                * tech.vdd * 2 * numRow * numCol
        else:
            numReadCells = math.ceil(numCol/numColMuxed)
            capBL = self.lengthCol * UNIT_WIRE_CAP
            self.slSwitchMatrix.CalculatePower(0, act)
            muxEnergy = self._mux_energy()

            if not self.mode.parallel_read:
                numReadRow = numRow * act * numColMuxed
                self.wlDecoder.CalculatePower(numReadRow)
                if cell.is1T1R:
                    self.wlNewDecoderDriver.CalculatePower(numReadRow)
                else:
                    self.wlDecoderDriver.CalculatePower(numReadCells, numReadRow)
                if self.mode.is_conventional:
                    self.multilevelSenseAmp.CalculatePower(columnResistance, numRow*act)
                    if 'multilevelSAEncoder' in active:
                        self.multilevelSAEncoder.CalculatePower(numRow*act*numColMuxed)
                else:
                    self.rowCurrentSenseAmp.CalculatePower(columnResistance, numRow*act)
                self.adder.CalculatePower(numReadRow, numReadCells)
                self.dff.CalculatePower(numReadRow, numReadCells*(self.adder.numBit+1))
                if 'shiftAdd' in active:
                    self.shiftAdd.CalculatePower(numColMuxed)

                # selected BLs and the selected WL, one row at a time
                readDynamicEnergyArray = capBL * cell.readVoltage**2 * numReadCells
                readDynamicEnergyArray += self.capRow2 * vdd2
                self.readDynamicEnergyArray = readDynamicEnergyArray * numReadRow
                rowDrive = self.wlDecoder.readDynamicEnergy + self.wlNewDecoderDriver.readDynamicEnergy \
                    + self.wlDecoderDriver.readDynamicEnergy
            else:
                if cell.is1T1R:
                    self.wlNewSwitchMatrix.CalculatePower(numColMuxed, act)
                else:
                    self.wlSwitchMatrix.CalculatePower(numColMuxed, act)
                self.multilevelSenseAmp.CalculatePower(columnResistance, 1)
                self.multilevelSAEncoder.CalculatePower(numColMuxed)
                if 'shiftAdd' in active:
                    self.shiftAdd.CalculatePower(numColMuxed)

                # selected BLs and every activated WL at once
                readDynamicEnergyArray = capBL * cell.readVoltage**2 * numReadCells
                readDynamicEnergyArray += self.capRow2 * vdd2 * numRow * act
                self.readDynamicEnergyArray = readDynamicEnergyArray * numColMuxed
                rowDrive = self.wlNewSwitchMatrix.readDynamicEnergy + self.wlSwitchMatrix.readDynamicEnergy

            energyADC = self.readDynamicEnergyArray + self.multilevelSenseAmp.readDynamicEnergy \
                + self.multilevelSAEncoder.readDynamicEnergy + self.rowCurrentSenseAmp.readDynamicEnergy
            energyAccum = self.adder.readDynamicEnergy + self.dff.readDynamicEnergy + self.shiftAdd.readDynamicEnergy
            energyOther = rowDrive + muxEnergy
            arrayLeakage = 0

        self.readDynamicEnergyADC = energyADC
        self.readDynamicEnergyAccum = energyAccum
        self.readDynamicEnergyOther = energyOther
        self.readDynamicEnergy = energyADC + energyAccum + energyOther
        self.leakage = arrayLeakage + sum(block.leakage for block in active.values())
        self.energyBreakdown = ReadBreakdown(self.readDynamicEnergy, energyADC, energyAccum, energyOther)
        return self.energyBreakdown

    def _array_report(self):
        return "\n".join([
            "",
            "Array:",
            f"Area = {self.heightArray*1e6}um x {self.widthArray*1e6}um = {self.areaArray*1e12}um^2",
            f"Read Dynamic Energy = {self.readDynamicEnergyArray*1e12}pJ",
        ])

    def _breakdown_report(self):
        return "\n".join([
            f"Used Area = {self.usedArea*1e12}um^2",
            f"Empty Area = {self.emptyArea*1e12}um^2",
            f"Read Latency (ADC / Accum / Other) = {self.readLatencyADC*1e9}ns / "
            f"{self.readLatencyAccum*1e9}ns / {self.readLatencyOther*1e9}ns",
            f"Read Dynamic Energy (ADC / Accum / Other) = {self.readDynamicEnergyADC*1e12}pJ / "
            f"{self.readDynamicEnergyAccum*1e12}pJ / {self.readDynamicEnergyOther*1e12}pJ",
        ])

    def PrintProperty(self, name="SubArray"):
        print(self._array_report())
        for blockName, block in self._active.items():
            block.PrintProperty(blockName)
        super().PrintProperty(name)
        print(self._breakdown_report())

    def SaveOutput(self, name="SubArray", filename="SynapticCOREoutput.txt"):
        with open(filename, "a") as outfile:
            outfile.write(self._array_report() + "\n")
        for blockName, block in self._active.items():
            block.SaveOutput(blockName, filename)
        super().SaveOutput(name, filename)
        with open(filename, "a") as outfile:
            outfile.write(self._breakdown_report() + "\n\n")
