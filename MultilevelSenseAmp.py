import math
from constant import *
from FunctionUnit import FunctionUnit

# Cadence-fitted column power, keyed by (currentMode, roadmap) then technode:
# (static power per comparator level in uW, coefficient, exponent) for
#   P = static*(levels-1)*1e-6 + coefficient*exp(exponent*log10(R))
# Nodes below 14nm fall back to the 7nm fit.
COLUMN_POWER_FIT = {
    (True, DeviceRoadmap.HP): {
        130: (19.898, 0.17452, -2.367), 90: (13.09, 0.14900, -2.345), 65: (9.9579, 0.1083, -2.321),
        45: (7.7017, 0.0754, -2.296), 32: (3.9648, 0.079, -2.313), 22: (1.8939, 0.073, -2.311),
        14: (1.2, 0.0584, -2.311), 10: (0.8, 0.0318, -2.311), 7: (0.5, 0.0210, -2.311),
    },
    (True, DeviceRoadmap.LSTP): {
        130: (18.09, 0.1380, -2.303), 90: (12.612, 0.1023, -2.303), 65: (8.4147, 0.0972, -2.303),
        45: (6.3162, 0.075, -2.303), 32: (3.0875, 0.0649, -2.297), 22: (1.7, 0.0631, -2.303),
        14: (1.0, 0.0508, -2.303), 10: (0.55, 0.0315, -2.303), 7: (0.35, 0.0235, -2.303),
    },
    (False, DeviceRoadmap.HP): {
        130: (27.84, 0.207452, -2.367), 90: (22.2, 0.164900, -2.345), 65: (13.058, 0.128483, -2.321),
        45: (8.162, 0.097754, -2.296), 32: (4.76, 0.083709, -2.313), 22: (2.373, 0.084273, -2.311),
        14: (1.467, 0.060584, -2.311), 10: (0.9077, 0.049418, -2.311), 7: (0.5614, 0.040310, -2.311),
    },
    (False, DeviceRoadmap.LSTP): {
        130: (23.4, 0.169380, -2.303), 90: (14.42, 0.144323, -2.303), 65: (10.18, 0.121272, -2.303),
        45: (7.062, 0.100225, -2.303), 32: (3.692, 0.079449, -2.297), 22: (1.866, 0.072341, -2.303),
        14: (1.126, 0.061085, -2.303), 10: (0.6917, 0.051580, -2.303), 7: (0.4211, 0.043555, -2.303),
    },
}

# LSTP column latency fit: technode -> (T_max log slope, T_max offset,
#   cubic for ratio <= 0.9, quartic for ratio >= 1.1); other nodes use 1ns.
COLUMN_LATENCY_FIT = {
    130: (0.2679, 0.0478, (3.915, -5.3996, 2.4653, 0.3856), (0.0004, -0.0087, 0.0742, -0.2725, 1.2211)),
    90: (0.0586, 1.41, (3.726, -5.651, 2.8249, 0.3574), (0.0000008, -0.00007, 0.0017, -0.0188, 0.9835)),
    65: (0.1239, 0.6642, (1.3899, -2.6913, 2.0483, 0.3202), (0.0036, -0.0363, 0.1043, -0.0346, 1.0512)),
    45: (0.0714, 0.7651, (3.7949, -5.6685, 2.6492, 0.4807), (0.000001, -0.00006, 0.0001, -0.0171, 1.0057)),
    32: (0.0714, 0.7651, (3.7949, -5.6685, 2.6492, 0.4807), (0.000001, -0.00006, 0.0001, -0.0171, 1.0057)),
}


def _poly(coeffs, x):
    result = 0
    for c in coeffs:
        result = result * x + c
    return result


def column_power(columnRes, levelOutput, currentMode, param):
    """Fitted comparator-bank power of one column for a given read resistance."""
    # the fit is at Vread = 0.5V, scale the equivalent column resistance
    columnRes *= 0.5/param.readVoltage
    if math.isinf(columnRes):
        Column_Power = 1e-6
    elif columnRes == 0:
        Column_Power = 0
    else:
        fit = COLUMN_POWER_FIT[(bool(currentMode), DeviceRoadmap(int(param.deviceroadmap)))]
        static, coeff, exponent = fit.get(param.technode, fit[7])
        Column_Power = static*(levelOutput-1)*1e-6
        Column_Power += coeff*math.exp(exponent*math.log10(columnRes))
    Column_Power *= (1+1.3e-3*(param.temp-300))
    return Column_Power


class MultilevelSenseAmp(FunctionUnit):
    """Flash-ADC style multilevel sense amp, one per (muxed) column.

    Reference resistances Rref split the conductance range into
    levelOutput steps; latency and power come from technology fits.
    """

    def __init__(self, param, tech, gate_params):
        super().__init__(param, tech, gate_params)

    def Initialize(self, numCol, levelOutput, numReadCellPerOperationNeuro, parallel, currentMode):
        self.numCol = numCol
        self.levelOutput = levelOutput
        self.numReadCellPerOperationNeuro = numReadCellPerOperationNeuro
        self.parallel = parallel
        self.currentMode = currentMode

        PM = self.param
        self.Rref = []
        for i in range(levelOutput):
            if parallel:
                # conductance ramps from all rows ON down to zero
                R_start = PM.resistanceOn / PM.numRowSubArray
                G_start = 1/R_start
                G_index = 0 - G_start
            else:
                G_start = 1/PM.resistanceOn
                G_index = 1/PM.resistanceOff - G_start
            self.Rref.append(1/(G_start + i*G_index/levelOutput))

        self._mark_initialized()

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        GP = self.gate_params
        self.area = (GP["aNmos"]*48 + GP["aPmos"]*24) * (self.levelOutput-1) * self.numCol
        if newWidth:
            self.width = newWidth
            self.height = self.area/self.width
        elif newHeight:
            self.height = newHeight
            self.width = self.area/self.height
        else:
            self.height = GP["hNmos"] + GP["hPmos"]
            self.width = self.area/self.height
        self.ApplyLayout(newHeight, newWidth, option)

    def _latency_col(self, columnResistance):
        LatencyCol = 0
        for columnRes in columnResistance:
            if columnRes == columnRes:  # skip NaN
                LatencyCol = max(LatencyCol, self.GetColumnLatency(columnRes))
        return min(max(LatencyCol, 1e-9), 10e-9)

    def CalculateLatency(self, columnResistance, numColMuxed, numRead):
        if not self._check_initialized():
            return
        if self.currentMode:
            LatencyCol = self._latency_col(columnResistance)
            self.readLatency = LatencyCol * numColMuxed * numRead
        else:
            self.readLatency = 1e-9 * numColMuxed * numRead
        return self.readLatency

    def CalculatePower(self, columnResistance, numRead):
        if not self._check_initialized():
            return
        self.leakage = 0
        LatencyCol = self._latency_col(columnResistance)
        readDynamicEnergy = 0
        for columnRes in columnResistance:
            P_Col = self.GetColumnPower(columnRes)
            if self.currentMode:
                readDynamicEnergy += max(P_Col*LatencyCol, 0)
            else:
                readDynamicEnergy += max(P_Col*1e-9, 0)
        self.readDynamicEnergy = readDynamicEnergy * numRead
        return self.readDynamicEnergy

    def GetColumnLatency(self, columnRes):
        mid_bound = 1.1
        low_bound = 0.9

        columnRes *= 0.5/self.param.readVoltage
        if math.isinf(columnRes) or columnRes == 0:
            return 0
        if self.param.deviceroadmap == DeviceRoadmap.HP or self.param.technode not in COLUMN_LATENCY_FIT:
            return 1e-9

        slope, offset, lowFit, highFit = COLUMN_LATENCY_FIT[self.param.technode]
        T_max = (slope*math.log(columnRes/1000)+offset)*1e-9
        Column_Latency = 0
        for i in range(1, self.levelOutput-1):
            ratio = self.Rref[i]/columnRes
            if ratio >= 20 or ratio <= 0.05:
                T = 1e-9
            elif ratio <= low_bound:
                T = T_max * _poly(lowFit, ratio)
            elif ratio >= mid_bound:
                T = T_max * _poly(highFit, ratio)
            else:
                T = T_max
            Column_Latency = max(Column_Latency, T)
        return Column_Latency

    def GetColumnPower(self, columnRes):
        return column_power(columnRes, self.levelOutput, self.currentMode, self.param)
