from constant import *
from FunctionUnit import FunctionUnit
from gate_calculator import CalculateGateArea, CalculateGateCap, CalculateGateCapacitance, \
    CalculateGateLeakage, CalculateOnResistance, horowitz


class DecoderDriver(FunctionUnit):
    """Cross-point word-line driver: one INV and three TGs per row, the TGs
    sized so a fully loaded line stays within the IR drop tolerance."""

    def __init__(self, param, tech, cell, gate_params):
        super().__init__(param, tech, gate_params)
        self.cell = cell

    def Initialize(self, mode, numOutput, numLoad):
        self.mode = mode
        self.numOutput = numOutput
        self.numLoad = numLoad

        F = self.tech.featureSize
        T = self.param.temp
        self.widthInvN, self.widthInvP = self.gate_params["widthInvN"], self.gate_params["widthInvP"]
        self.resTg = self.cell.resMemCellOn / numLoad * IR_DROP_TOLERANCE
        # special TG for driver, not digital
        self.widthTgN = CalculateOnResistance(F, NMOS, T, self.tech) * F / (self.resTg*2)
        self.widthTgP = CalculateOnResistance(F, PMOS, T, self.tech) * F / (self.resTg*2)

        self._mark_initialized()

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        GP = self.gate_params
        tg = CalculateGateArea(INV, 1, self.widthTgN, self.widthTgP, GP["minCellHeight"], self.tech)

        hUnit = max(GP["hInv"], tg['height'])
        wUnit = GP["wInv"] + tg['width'] * 3
        if self.mode == ROW_MODE:
            self.height = hUnit * self.numOutput
            self.width = wUnit
        else:
            self.height = wUnit
            self.width = hUnit * self.numOutput
        self.area = self.height * self.width

        self.capTgGateN = CalculateGateCap(self.widthTgN, self.tech)
        self.capTgGateP = CalculateGateCap(self.widthTgP, self.tech)
        self.capTgDrain = CalculateGateCapacitance(INV, 1, self.widthTgN, self.widthTgP, tg['height'], self.tech)['capOutput']

        self.ApplyLayout(newHeight, newWidth, option)

    def CalculateLatency(self, rampInput, capLoad1, capLoad2, resLoad, numRead):
        if not self._check_initialized():
            return
        self.rampInput = rampInput
        capOutput = self.capTgDrain*4 + self.capTgGateN*0.5 + self.capTgGateP*0.5
        tr = self.resTg * (capOutput + capLoad1) + resLoad * capLoad1 / 2
        res = horowitz(tr, 0, rampInput)
        self.rampOutput = res['rampOutput']
        self.readLatency = res['result'] * numRead
        return self.readLatency

    def CalculatePower(self, numReadCellPerOp, numRead):
        if not self._check_initialized():
            return
        GP = self.gate_params
        vdd2 = self.tech.vdd ** 2

        self.leakage = CalculateGateLeakage(INV, 1, self.widthInvN, self.widthInvP, self.param.temp, self.tech) \
            * self.tech.vdd * self.numOutput

        # Selected SLs and BLs are floating, unselected ones are GND
        readDynamicEnergy = (GP["capInvInput"] + self.capTgGateN * 2 + self.capTgGateP) * vdd2 * numReadCellPerOp
        readDynamicEnergy += (GP["capInvOutput"] + self.capTgGateP * 2 + self.capTgGateN) * vdd2 * numReadCellPerOp
        self.readDynamicEnergy = readDynamicEnergy * numRead
        return self.readDynamicEnergy
