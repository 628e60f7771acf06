import math
from constant import *
from FunctionUnit import FunctionUnit
from gate_calculator import CalculateGateArea, CalculateGateCap, CalculateGateCapacitance, \
    CalculateOnResistance, horowitz
from DFF import DFF


class SwitchMatrix(FunctionUnit):
    """Transmission-gate pairs with a DFF bank, driving rows (ROW_MODE)
    or source/bit lines (COL_MODE). TG size follows the requested resTg."""

    def __init__(self, param, tech, gate_params):
        super().__init__(param, tech, gate_params)
        self.dff = DFF(param, tech, gate_params)

    def Initialize(self, mode, numOutput, resTg, activityRowRead=1):
        self.mode = mode
        self.numOutput = numOutput
        self.activityRowRead = activityRowRead
        self.resTg = resTg

        F = self.tech.featureSize
        T = self.param.temp
        self.widthTgN = CalculateOnResistance(F, NMOS, T, self.tech) * F / (resTg*2)
        self.widthTgP = CalculateOnResistance(F, PMOS, T, self.tech) * F / (resTg*2)

        self.dff.Initialize(numOutput)
        self._mark_initialized()

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        F = self.tech.featureSize
        minCellHeight = self.gate_params["minCellHeight"]
        if self.tech.featureSizeInNano == 14:
            minCellHeight *= MAX_TRANSISTOR_HEIGHT_14nm / MAX_TRANSISTOR_HEIGHT

        if self.mode == ROW_MODE:
            if newHeight:
                if newHeight < minCellHeight:
                    raise ValueError("[SwitchMatrix] pass gate height is even larger than the array height")
                numTgPairPerCol = int(newHeight / minCellHeight)
                numColTgPair = math.ceil(self.numOutput / numTgPairPerCol)
                TgHeight = newHeight / numTgPairPerCol
                tg = CalculateGateArea(INV, 1, self.widthTgN, self.widthTgP, TgHeight, self.tech)
                self.height = newHeight
                self.width = tg['width'] * 2 * numColTgPair
                self.dff.CalculateArea(self.height, 0, AreaModify.NONE)
            else:
                tg = CalculateGateArea(INV, 1, self.widthTgN, self.widthTgP, minCellHeight, self.tech)
                self.height = tg['height'] * self.numOutput
                self.width = tg['width'] * 2
                self.dff.CalculateArea(self.height, 0, AreaModify.NONE)
            self.width += self.dff.width
        else:
            if newWidth:
                minCellWidth = 2 * (POLY_WIDTH + MIN_GAP_BET_GATE_POLY) * F
                if newWidth < minCellWidth:
                    raise ValueError("[SwitchMatrix] pass gate width is even larger than the array width")
                numTgPairPerRow = int(newWidth / (minCellWidth*2))
                if numTgPairPerRow == 0:
                    raise ValueError("[SwitchMatrix] pass gate pair does not fit in the array width")
                numRowTgPair = math.ceil(self.numOutput / numTgPairPerRow)
                tg = CalculateGateArea(INV, 1, self.widthTgN, self.widthTgP, minCellHeight, self.tech)
                self.width = newWidth
                self.height = tg['height'] * numRowTgPair
                self.dff.CalculateArea(0, self.width, AreaModify.NONE)
            else:
                tg = CalculateGateArea(INV, 1, self.widthTgN, self.widthTgP, minCellHeight, self.tech)
                self.width = tg['width'] * 2 * self.numOutput
                self.height = tg['height']
                self.dff.CalculateArea(0, self.width, AreaModify.NONE)
            self.height += self.dff.height

        self.area = self.height * self.width

        # capacitance
        self.capTgGateN = CalculateGateCap(self.widthTgN, self.tech)
        self.capTgGateP = CalculateGateCap(self.widthTgP, self.tech)
        self.capTgDrain = CalculateGateCapacitance(INV, 1, self.widthTgN, self.widthTgP, tg['height'], self.tech)['capOutput']

        self.ApplyLayout(newHeight, newWidth, option)

    def CalculateLatency(self, rampInput, capLoad, resLoad, numRead):
        if not self._check_initialized():
            return
        self.rampInput = rampInput
        self.dff.CalculateLatency(numRead)

        capOutput = self.capTgDrain * 3
        tr = self.resTg * (capOutput + capLoad) + resLoad * capLoad / 2  # elmore delay model
        res = horowitz(tr, 0, rampInput)
        self.rampOutput = res['rampOutput']
        self.readLatency = res['result'] * numRead + self.dff.readLatency
        return self.readLatency

    def CalculatePower(self, numRead, activityRowRead):
        if not self._check_initialized():
            return
        self.dff.CalculatePower(numRead, self.numOutput)
        self.leakage = self.dff.leakage

        readDynamicEnergy = 0
        if self.mode == ROW_MODE:
            readDynamicEnergy += (self.capTgDrain * 3) * self.param.readVoltage ** 2 * self.numOutput * activityRowRead
            readDynamicEnergy += (self.capTgGateN + self.capTgGateP) * self.tech.vdd ** 2 * self.numOutput * activityRowRead
        # No read energy in COL_MODE
        self.readDynamicEnergy = readDynamicEnergy * numRead + self.dff.readDynamicEnergy
        return self.readDynamicEnergy
