import math
from constant import *
from FunctionUnit import FunctionUnit


class DFF(FunctionUnit):
    """Bank of master-slave D flip-flops (2 TG + 2 INV per latch)."""

    def __init__(self, param, tech, gate_params):
        super().__init__(param, tech, gate_params)

    def Initialize(self, numDff):
        self.numDff = numDff
        self._mark_initialized()

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        hDff = self.gate_params["hInv"]
        wDff = self.gate_params["wInv"] * 12

        if newHeight and option == AreaModify.NONE:
            numDffPerCol = max(int(newHeight / hDff), 1)
            numColDff = math.ceil(self.numDff / numDffPerCol)
            self.height = newHeight
            self.width = wDff * numColDff
        elif newWidth and option == AreaModify.NONE:
            numDffPerRow = max(int(newWidth / wDff), 1)
            numRowDff = math.ceil(self.numDff / numDffPerRow)
            self.width = newWidth
            self.height = hDff * numRowDff
        else:
            self.width = wDff * self.numDff
            self.height = hDff
        self.area = self.width * self.height

        self.ApplyLayout(newHeight, newWidth, option)

    def CalculateLatency(self, numRead):
        if not self._check_initialized():
            return
        self.readLatency = 1/self.param.clkFreq/2 * numRead
        return self.readLatency

    def CalculatePower(self, numRead, numDffPerOperation):
        if not self._check_initialized():
            return
        GP = self.gate_params
        vdd2 = self.tech.vdd ** 2

        self.leakage = GP["leakageInv"] * 4 * self.numDff

        # Assume input D=1 and the energy of CLK INV and CLK TG are for 1 clock cycles
        # CLK INV (all DFFs have energy consumption)
        readDynamicEnergy = (GP["capInvInput"] + GP["capInvOutput"]) * vdd2 * 4 * self.numDff
        # CLK TG (all DFFs have energy consumption)
        readDynamicEnergy += GP["capTgGateN"] * vdd2 * 2 * self.numDff
        readDynamicEnergy += GP["capTgGateP"] * vdd2 * 2 * self.numDff
        # D to Q path (only selected DFFs have energy consumption)
        numActive = min(numDffPerOperation, self.numDff)
        readDynamicEnergy += (GP["capTgDrain"] * 3 + GP["capInvInput"]) * vdd2 * numActive
        readDynamicEnergy += (GP["capTgDrain"] + GP["capInvOutput"]) * vdd2 * numActive
        readDynamicEnergy += (GP["capInvInput"] + GP["capInvOutput"]) * vdd2 * numActive

        self.readDynamicEnergy = readDynamicEnergy * numRead
        return self.readDynamicEnergy


if __name__ == "__main__":
    from Param import Param
    from Technology import Technology
    from gate_calculator import compute_gate_params

    param = Param()
    tech = Technology().Initialize(param.technode, param.deviceroadmap)
    gate_params = compute_gate_params(param, tech)

    dff = DFF(param, tech, gate_params)
    dff.Initialize(64)
    dff.CalculateArea()
    dff.CalculateLatency(64)
    dff.CalculatePower(64, 64)

    print(dff.area, dff.readLatency, dff.readDynamicEnergy, dff.leakage)
