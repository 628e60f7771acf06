import math

from constant import *
from FunctionUnit import FunctionUnit
from gate_calculator import CalculateGateArea, CalculateGateCap, CalculateGateCapacitance, CalculateOnResistance


class Mux(FunctionUnit):
    """Transmission-gate column mux: numInput muxes, each numSelection-to-1."""

    def __init__(self, param, tech, gate_params):
        super().__init__(param, tech, gate_params)

    def Initialize(self, numInput, numSelection, resTg):
        self.numInput = numInput
        self.numSelection = numSelection
        self.resTg = resTg * IR_DROP_TOLERANCE

        F = self.tech.featureSize
        T = self.param.temp
        self.widthTgN = CalculateOnResistance(F, NMOS, T, self.tech) * F / (self.resTg*2)
        self.widthTgP = CalculateOnResistance(F, PMOS, T, self.tech) * F / (self.resTg*2)
        self._mark_initialized()

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        tg = CalculateGateArea(INV, 1, self.widthTgN, self.widthTgP, self.gate_params["minCellHeight"], self.tech)
        hTg, wTg = tg['height'], tg['width']

        numTg = self.numInput * self.numSelection
        if newWidth and option == AreaModify.NONE:
            numTgPerRow = int(newWidth / wTg)
            if numTgPerRow < 1:
                raise ValueError("[Mux] pass gate width is even larger than the array width")
            numRowTg = math.ceil(numTg / numTgPerRow)
            self.width = newWidth
            self.height = hTg * numRowTg
        else:
            self.width = wTg * numTg
            self.height = hTg
        self.area = self.height * self.width

        self.capTgGateN = CalculateGateCap(self.widthTgN, self.tech)
        self.capTgGateP = CalculateGateCap(self.widthTgP, self.tech)
        self.capTgDrain = CalculateGateCapacitance(INV, 1, self.widthTgN, self.widthTgP, hTg, self.tech)['capOutput']

        self.ApplyLayout(newHeight, newWidth, option)

    def CalculateLatency(self, rampInput, capLoad, numRead):
        if not self._check_initialized():
            return
        self.rampInput = rampInput
        tr = self.resTg * (self.capTgDrain + 0.5*self.capTgGateN + 0.5*self.capTgGateP + capLoad)
        self.readLatency = 2.3 * tr * numRead  # charging from 0% to 90%
        return self.readLatency

    def CalculatePower(self, numRead):
        if not self._check_initialized():
            return
        # no leakage through transmission gates
        self.leakage = 0
        readDynamicEnergy = self.capTgGateN * self.numInput * self.tech.vdd ** 2
        readDynamicEnergy += (self.capTgDrain * 2) * self.numInput * self.param.readVoltage ** 2  # selected pass gates (OFF to ON)
        self.readDynamicEnergy = readDynamicEnergy * numRead
        return self.readDynamicEnergy
