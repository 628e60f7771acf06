import math
from constant import *
from FunctionUnit import FunctionUnit
from gate_calculator import CalculateGateArea, CalculateGateCap, CalculateDrainCap, CalculateGateLeakage, \
    CalculateTransconductance


class SenseAmp(FunctionUnit):
    """Voltage latch sense amp, one per sensed column, laid out on the
    column pitch."""

    def __init__(self, param, tech, gate_params):
        super().__init__(param, tech, gate_params)

    def Initialize(self, numCol, currentSense, senseVoltage, pitchSenseAmp, numReadCellPerOperationNeuro):
        self.numCol = numCol
        self.currentSense = currentSense
        self.senseVoltage = senseVoltage
        self.pitchSenseAmp = pitchSenseAmp
        self.numReadCellPerOperationNeuro = numReadCellPerOperationNeuro

        if pitchSenseAmp <= self.tech.featureSize * 6:
            raise ValueError("[SenseAmp] pitch too small, cannot do the layout")

        F = self.tech.featureSize
        h = pitchSenseAmp
        self.capLoad = CalculateGateCap((W_SENSE_P + W_SENSE_N) * F, self.tech) \
            + CalculateDrainCap(W_SENSE_N * F, NMOS, h, self.tech) \
            + CalculateDrainCap(W_SENSE_P * F, PMOS, h, self.tech) \
            + CalculateDrainCap(W_SENSE_ISO * F, PMOS, h, self.tech) \
            + CalculateDrainCap(W_SENSE_MUX * F, NMOS, h, self.tech)
        self._mark_initialized()

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        F = self.tech.featureSize
        h = self.pitchSenseAmp
        senseP = CalculateGateArea(INV, 1, 0, W_SENSE_P * F, h, self.tech)
        senseN = CalculateGateArea(INV, 1, W_SENSE_N * F, 0, h, self.tech)
        senseIso = CalculateGateArea(INV, 1, 0, W_SENSE_ISO * F, h, self.tech)
        senseEn = CalculateGateArea(INV, 1, W_SENSE_EN * F, 0, h, self.tech)

        areaUnit = senseP['area'] * 2 + senseN['area'] * 2 + senseIso['area'] + senseEn['area']
        self.area = areaUnit * self.numCol
        if newWidth:
            self.width = newWidth
            self.height = self.area / self.width
        else:
            self.width = self.pitchSenseAmp * self.numCol
            self.height = self.area / self.width
        self.ApplyLayout(newHeight, newWidth, option)

    def CalculateLatency(self, numRead):
        if not self._check_initialized():
            return
        F = self.tech.featureSize
        gm = CalculateTransconductance(W_SENSE_N * F, NMOS, self.tech) \
            + CalculateTransconductance(W_SENSE_P * F, PMOS, self.tech)
        tau = self.capLoad / gm
        self.readLatency = (tau * math.log(self.tech.vdd / self.senseVoltage) + 1/self.param.clkFreq) * numRead
        return self.readLatency

    def CalculatePower(self, numRead):
        if not self._check_initialized():
            return
        F = self.tech.featureSize
        self.leakage = CalculateGateLeakage(INV, 1, W_SENSE_EN * F, 0, self.param.temp, self.tech) \
            * self.tech.vdd * self.numCol
        self.readDynamicEnergy = self.capLoad * self.tech.vdd ** 2 \
            * min(self.numReadCellPerOperationNeuro, self.numCol) * numRead
        return self.readDynamicEnergy
