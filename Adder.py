import math
from constant import *
from FunctionUnit import FunctionUnit
from gate_calculator import horowitz, CalculateTransconductance


class Adder(FunctionUnit):
    """Bank of numAdder ripple-carry adders, each numBit wide (9 NAND2 per bit)."""

    def __init__(self, param, tech, gate_params):
        super().__init__(param, tech, gate_params)

    def Initialize(self, numBit, numAdder):
        self.numBit = numBit
        self.numAdder = numAdder
        self._mark_initialized()

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        hAdder = self.gate_params["hNand"]
        wAdder = self.gate_params["wNand"] * 9 * self.numBit

        if newWidth and option == AreaModify.NONE:
            numAdderPerRow = max(int(newWidth / wAdder), 1)
            numRowAdder = math.ceil(self.numAdder / numAdderPerRow)
            self.width = newWidth
            self.height = hAdder * numRowAdder
        elif newHeight and option == AreaModify.NONE:
            numAdderPerCol = max(int(newHeight / hAdder), 1)
            numColAdder = math.ceil(self.numAdder / numAdderPerCol)
            self.height = newHeight
            self.width = wAdder * numColAdder
        else:
            self.width = wAdder * self.numAdder
            self.height = hAdder
        self.area = self.width * self.height
        self.ApplyLayout(newHeight, newWidth, option)

    def CalculateLatency(self, rampInput, capLoad, numRead):
        if not self._check_initialized():
            return
        GP = self.gate_params
        self.rampInput = rampInput

        # Calibration data pattern is A=1111111..., B=1000000... and Cin=1
        resPullDown = GP["resNandN"] * 2
        resPullUp = GP["resNandP"]
        trDown = resPullDown * (GP["capNandOutput"] + GP["capNandInput"] * 3)
        trUp = resPullUp * (GP["capNandOutput"] + GP["capNandInput"] * 2)
        betaDown = 1 / (resPullDown * CalculateTransconductance(GP["widthNandN"], NMOS, self.tech))
        betaUp = 1 / (resPullUp * CalculateTransconductance(GP["widthNandP"], PMOS, self.tech))

        # 1st, 2nd: carry generation of bit 0
        res = horowitz(trDown, betaDown, rampInput)
        readLatency = res['result']
        res = horowitz(trUp, betaUp, res['rampOutput'])
        readLatency += res['result']

        # 3rd, 4th: carry ripple through every middle bit
        res = horowitz(trDown, betaDown, res['rampOutput'])
        readLatencyIntermediate = res['result']
        res = horowitz(trUp, betaUp, res['rampOutput'])
        readLatencyIntermediate += res['result']
        if self.numBit > 2:
            readLatency += readLatencyIntermediate * (self.numBit - 2)

        # 5th to 7th: sum of the last bit, the last stage drives capLoad
        res = horowitz(trDown, betaDown, res['rampOutput'])
        readLatency += res['result']
        res = horowitz(trUp, betaUp, res['rampOutput'])
        readLatency += res['result']
        trLast = resPullDown * (GP["capNandOutput"] + capLoad)
        res = horowitz(trLast, betaDown, res['rampOutput'])
        readLatency += res['result']

        self.rampOutput = res['rampOutput']
        self.readLatency = readLatency * numRead
        return self.readLatency

    def CalculatePower(self, numRead, numAdderPerOperation):
        if not self._check_initialized():
            return
        GP = self.gate_params
        vdd2 = self.tech.vdd ** 2
        capIn, capOut = GP["capNandInput"], GP["capNandOutput"]

        self.leakage = GP["leakageNand"] * 9 * self.numBit * self.numAdder

        # 1st stage
        readDynamicEnergy = (capIn * 6) * vdd2   # Input of 1 and 2 and Cin
        readDynamicEnergy += (capOut * 2) * vdd2  # Output of S[0] and 5
        # Second and later stages
        readDynamicEnergy += (capIn * 7) * vdd2 * (self.numBit-1)
        readDynamicEnergy += (capOut * 3) * vdd2 * (self.numBit-1)

        # Hidden transition
        # First stage
        readDynamicEnergy += (capOut + capIn) * vdd2 * 2      # #2 and #3
        readDynamicEnergy += (capOut + capIn * 2) * vdd2      # #4
        readDynamicEnergy += (capOut + capIn * 3) * vdd2      # #5
        readDynamicEnergy += (capOut + capIn) * vdd2          # #6
        # Second and later stages
        readDynamicEnergy += (capOut + capIn * 3) * vdd2 * (self.numBit-1)      # #1
        readDynamicEnergy += (capOut + capIn) * vdd2 * (self.numBit-1)          # #3
        readDynamicEnergy += (capOut + capIn) * vdd2 * 2 * (self.numBit-1)      # #6 and #7

        self.readDynamicEnergy = readDynamicEnergy * min(numAdderPerOperation, self.numAdder) * numRead
        return self.readDynamicEnergy


if __name__ == "__main__":
    from Param import Param
    from Technology import Technology
    from gate_calculator import compute_gate_params

    param = Param()
    tech = Technology().Initialize(param.technode, param.deviceroadmap)
    gate_params = compute_gate_params(param, tech)

    adder = Adder(param, tech, gate_params)
    adder.Initialize(4, 64)
    adder.CalculateArea()
    adder.CalculateLatency(1e20, gate_params["capTgDrain"], 128)
    adder.CalculatePower(128, 64)

    print(adder.area, adder.readLatency, adder.readDynamicEnergy)
