from constant import *
from FunctionUnit import FunctionUnit
from DFF import DFF
from Adder import Adder


class ShiftAdd(FunctionUnit):
    """Shift-and-add accumulating partial sums of successive input bits."""

    def __init__(self, param, tech, gate_params):
        super().__init__(param, tech, gate_params)
        self.dff = DFF(param, tech, gate_params)
        self.adder = Adder(param, tech, gate_params)

    def Initialize(self, numUnit, numAdderBit, numReadPulse):
        self.numUnit = numUnit
        self.numAdderBit = numAdderBit
        self.numReadPulse = numReadPulse

        self.numDff = (numAdderBit+1 + numReadPulse-1) * numUnit
        self.dff.Initialize(self.numDff)
        self.adder.Initialize(numAdderBit, numUnit)
        self._mark_initialized()

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        if newWidth and option == AreaModify.NONE:
            self.adder.CalculateArea(0, newWidth, AreaModify.NONE)
            self.dff.CalculateArea(0, newWidth, AreaModify.NONE)
            self.width = newWidth
        else:
            self.adder.CalculateArea()
            self.dff.CalculateArea()
            self.width = max(self.adder.width, self.dff.width) + self.gate_params["wInv"] + self.gate_params["wNand"]
        self.height = self.adder.height + self.dff.height
        self.area = self.height * self.width
        self.ApplyLayout(newHeight, newWidth, option)

    def CalculateLatency(self, numRead):
        if not self._check_initialized():
            return
        # The shift-and-add of one pulse hides under the integration of the
        # next one; only the excess over a read pulse shows up.
        self.adder.CalculateLatency(1e20, self.gate_params["capTgDrain"], 1)
        self.dff.CalculateLatency(1)
        shiftAddLatency = self.adder.readLatency + self.dff.readLatency

        if self.numReadPulse > 1:
            hidden = max(shiftAddLatency - self.param.readPulseWidth, 0) * (self.numReadPulse - 1)
            self.readLatency = (hidden + shiftAddLatency) * numRead
        else:
            self.readLatency = shiftAddLatency * numRead
        return self.readLatency

    def CalculatePower(self, numRead):
        if not self._check_initialized():
            return
        self.adder.CalculatePower(numRead, self.numUnit)
        self.dff.CalculatePower(numRead, self.numDff)
        self.readDynamicEnergy = self.adder.readDynamicEnergy + self.dff.readDynamicEnergy
        self.leakage = self.adder.leakage + self.dff.leakage
        return self.readDynamicEnergy
