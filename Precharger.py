import math
from constant import *
from FunctionUnit import FunctionUnit
from gate_calculator import CalculateGateArea, CalculateDrainCap, CalculateGateLeakage, \
    CalculateOnResistance, CalculateTransconductance, horowitz


class Precharger(FunctionUnit):
    """Bit-line precharger: one precharge PMOS and two equalizer PMOS per column."""

    def __init__(self, param, tech, gate_params):
        super().__init__(param, tech, gate_params)

    def Initialize(self, numCol, resLoad, numReadCellPerOperationNeuro):
        self.numCol = numCol
        self.resLoad = resLoad
        self.numReadCellPerOperationNeuro = numReadCellPerOperationNeuro

        F = self.tech.featureSize
        self.widthPMOSBitlineEqual = MIN_NMOS_SIZE * F
        self.widthPMOSBitlinePrecharger = 6 * F
        self._mark_initialized()

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        hMax = MAX_TRANSISTOR_HEIGHT * self.tech.featureSize
        pre = CalculateGateArea(INV, 1, 0, self.widthPMOSBitlinePrecharger, hMax, self.tech)
        eq = CalculateGateArea(INV, 1, 0, self.widthPMOSBitlineEqual, hMax, self.tech)

        hUnit = pre['height'] + eq['height'] * 2
        wUnit = max(pre['width'], eq['width'])
        if newWidth and option == AreaModify.NONE:
            numUnitPerRow = int(newWidth / wUnit)
            if numUnitPerRow == 0:
                raise ValueError("[Precharger] unit width is larger than the assigned width")
            numRowUnit = math.ceil(self.numCol / numUnitPerRow)
            self.width = newWidth
            self.height = numRowUnit * hUnit
        else:
            self.width = self.numCol * wUnit
            self.height = hUnit
        self.area = self.height * self.width

        self.capOutputBitlinePrecharger = \
            CalculateDrainCap(self.widthPMOSBitlinePrecharger, PMOS, pre['height'], self.tech) \
            + CalculateDrainCap(self.widthPMOSBitlineEqual, PMOS, eq['height'], self.tech)

        self.ApplyLayout(newHeight, newWidth, option)

    def CalculateLatency(self, rampInput, capLoad, numRead):
        if not self._check_initialized():
            return
        self.rampInput = rampInput
        resPullUp = CalculateOnResistance(self.widthPMOSBitlinePrecharger, PMOS, self.param.temp, self.tech)
        tau = resPullUp * (capLoad + self.capOutputBitlinePrecharger) + self.resLoad * capLoad / 2
        gm = CalculateTransconductance(self.widthPMOSBitlinePrecharger, PMOS, self.tech)
        beta = 1 / (resPullUp * gm)
        res = horowitz(tau, beta, rampInput)
        self.rampOutput = res['rampOutput']
        self.readLatency = res['result'] * numRead
        return self.readLatency

    def CalculatePower(self, numRead):
        if not self._check_initialized():
            return
        self.leakage = CalculateGateLeakage(INV, 1, 0, self.widthPMOSBitlinePrecharger, self.param.temp, self.tech) \
            * self.tech.vdd * self.numCol
        # Assuming the bitline voltage is completely restored
        self.readDynamicEnergy = self.capOutputBitlinePrecharger * self.tech.vdd ** 2 \
            * min(self.numReadCellPerOperationNeuro, self.numCol) * 2 * numRead
        return self.readDynamicEnergy
