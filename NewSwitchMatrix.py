import math
from constant import *
from FunctionUnit import FunctionUnit
from gate_calculator import CalculateGateArea, CalculateGateCap, CalculateGateCapacitance, \
    CalculateOnResistance, horowitz
from DFF import DFF


class NewSwitchMatrix(FunctionUnit):
    """1T1R word-line switch matrix: per row a DFF and two TG pairs that
    pass either Vaccess or GND to the access transistor gates."""

    def __init__(self, param, tech, gate_params):
        super().__init__(param, tech, gate_params)
        self.dff = DFF(param, tech, gate_params)

    def Initialize(self, numOutput, activityRowRead):
        self.numOutput = numOutput
        self.activityRowRead = activityRowRead

        # TG sized for the gate load of one row
        F = self.tech.featureSize
        self.resTg = 1 / (1/CalculateOnResistance(F * 2, NMOS, self.param.temp, self.tech)
                          + 1/CalculateOnResistance(F * 2 * self.tech.pnSizeRatio, PMOS, self.param.temp, self.tech))
        self.widthTgN = F * 2
        self.widthTgP = F * 2 * self.tech.pnSizeRatio

        self.dff.Initialize(numOutput)
        self._mark_initialized()

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        minCellHeight = self.gate_params["minCellHeight"]
        if newHeight:
            if newHeight < minCellHeight:
                raise ValueError("[NewSwitchMatrix] pass gate height is even larger than the array height")
            numTgPairPerCol = int(newHeight / minCellHeight)
            numColTgPair = math.ceil(self.numOutput / numTgPairPerCol)
            TgHeight = newHeight / numTgPairPerCol
            tg = CalculateGateArea(INV, 1, self.widthTgN, self.widthTgP, TgHeight, self.tech)
            self.height = newHeight
            self.width = tg['width'] * 4 * numColTgPair
        else:
            tg = CalculateGateArea(INV, 1, self.widthTgN, self.widthTgP, minCellHeight, self.tech)
            self.height = tg['height'] * self.numOutput
            self.width = tg['width'] * 4
        self.dff.CalculateArea(self.height, 0, AreaModify.NONE)
        self.width += self.dff.width
        self.area = self.height * self.width

        self.capTgGateN = CalculateGateCap(self.widthTgN, self.tech)
        self.capTgGateP = CalculateGateCap(self.widthTgP, self.tech)
        self.capTgDrain = CalculateGateCapacitance(INV, 1, self.widthTgN, self.widthTgP, tg['height'], self.tech)['capOutput']

        self.ApplyLayout(newHeight, newWidth, option)

    def CalculateLatency(self, rampInput, capLoad, resLoad, numRead):
        if not self._check_initialized():
            return
        self.rampInput = rampInput
        self.dff.CalculateLatency(numRead)

        capOutput = self.capTgDrain * 5
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

        PM, TC = self.param, self.tech
        readDynamicEnergy = self.capTgDrain * 2 * PM.accessVoltage ** 2 * self.numOutput * activityRowRead
        readDynamicEnergy += self.capTgDrain * 5 * PM.readVoltage ** 2 * self.numOutput * activityRowRead
        readDynamicEnergy += (self.capTgGateN + self.capTgGateP) * 3 * TC.vdd ** 2 * self.numOutput * activityRowRead
        self.readDynamicEnergy = readDynamicEnergy * numRead + self.dff.readDynamicEnergy
        return self.readDynamicEnergy
