import math
from constant import *
from FunctionUnit import FunctionUnit


class SRAMWriteDriver(FunctionUnit):
    """SRAM bit-line write driver (3 INVs per column). Only its area and
    leakage enter a read-only estimate."""

    def __init__(self, param, tech, gate_params):
        super().__init__(param, tech, gate_params)

    def Initialize(self, numCol):
        self.numCol = numCol
        self._mark_initialized()

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        GP = self.gate_params
        hUnit = GP["hInv"] * 3
        wUnit = GP["wInv"]
        if newWidth and option == AreaModify.NONE:
            numUnitPerRow = int(newWidth / wUnit)
            if numUnitPerRow == 0:
                raise ValueError("[SRAMWriteDriver] unit width is larger than the assigned width")
            numRowUnit = math.ceil(self.numCol / numUnitPerRow)
            self.width = newWidth
            self.height = numRowUnit * hUnit
        else:
            self.width = self.numCol * wUnit
            self.height = hUnit
        self.area = self.height * self.width
        self.ApplyLayout(newHeight, newWidth, option)

    def CalculatePower(self):
        if not self._check_initialized():
            return
        self.leakage = self.gate_params["leakageInv"] * 3 * self.numCol
        self.readDynamicEnergy = 0
        return self.leakage
