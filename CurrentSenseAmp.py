import math
from constant import *
from FunctionUnit import FunctionUnit
from MultilevelSenseAmp import column_power


class CurrentSenseAmp(FunctionUnit):
    """Single-threshold current sense amp used for row-by-row binary reads
    of RRAM/FeFET arrays. Power reuses the 2-level comparator fit."""

    def __init__(self, param, tech, gate_params):
        super().__init__(param, tech, gate_params)

    def Initialize(self, numCol, parallel, rowbyrow, numReadCellPerOperationNeuro):
        self.numCol = numCol
        self.parallel = parallel
        self.rowbyrow = rowbyrow
        self.numReadCellPerOperationNeuro = numReadCellPerOperationNeuro
        self._mark_initialized()

    def CalculateUnitArea(self):
        GP = self.gate_params
        self.areaUnit = GP["aNmos"]*48 + GP["aPmos"]*40
        return self.areaUnit

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        self.area = self.CalculateUnitArea() * self.numCol
        if newWidth:
            self.width = newWidth
            self.height = self.area / self.width
        else:
            self.height = self.gate_params["hNmos"] + self.gate_params["hPmos"]
            self.width = self.area / self.height
        self.ApplyLayout(newHeight, newWidth, option)

    def GetColumnLatency(self, columnRes):
        if math.isinf(columnRes) or columnRes == 0:
            return 0
        return 1e-9

    def _latency_col(self, columnResistance):
        LatencyCol = 0
        for columnRes in columnResistance:
            if columnRes == columnRes:
                LatencyCol = max(LatencyCol, self.GetColumnLatency(columnRes))
        return min(max(LatencyCol, 1e-9), 10e-9)

    def CalculateLatency(self, columnResistance, numColMuxed, numRead):
        if not self._check_initialized():
            return
        self.readLatency = self._latency_col(columnResistance) * numColMuxed * numRead
        return self.readLatency

    def CalculatePower(self, columnResistance, numRead):
        if not self._check_initialized():
            return
        self.leakage = 0
        LatencyCol = self._latency_col(columnResistance)
        readDynamicEnergy = 0
        for columnRes in columnResistance:
            readDynamicEnergy += max(column_power(columnRes, 2, True, self.param) * LatencyCol, 0)
        self.readDynamicEnergy = readDynamicEnergy * numRead
        return self.readDynamicEnergy
