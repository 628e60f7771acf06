import math
import logging

from constant import *
from FunctionUnit import FunctionUnit
from gate_calculator import CalculateGateArea, CalculateGateCapacitance, CalculateGateLeakage, \
    CalculateOnResistance, CalculateTransconductance, horowitz

logger = logging.getLogger(__name__)


class RowDecoder(FunctionUnit):
    """INV/NAND2 predecoder followed by wide NOR gates.

    With ``MUX=True`` the output stage is a NAND + two driver INVs that
    enable column-mux transmission gates (both N and P gates are driven).
    """

    def __init__(self, param, tech, gate_params: dict):
        super().__init__(param, tech, gate_params)

    def Initialize(self, numAddrRow: int, MUX: bool):
        GP = self.gate_params

        self.numAddrRow = numAddrRow
        self.MUX = MUX

        # INV
        self.widthInvN, self.widthInvP = GP["widthInvN"], GP["widthInvP"]
        self.numInv = numAddrRow

        # NAND2
        self.widthNandN, self.widthNandP = GP["widthNandN"], GP["widthNandP"]
        self.numNand = 4 * math.floor(numAddrRow/2)

        # NOR (ceil(N/2) inputs)
        self.numNorInput = max(math.ceil(numAddrRow/2), 1)
        self.widthNorN = GP["widthNorN"]
        self.widthNorP = self.numNorInput * GP["widthNorP"]
        if numAddrRow > 2:
            self.numNor = pow(2, numAddrRow)
            self.numMetalConnection = self.numNand + (numAddrRow % 2) * 2
        else:
            self.numNor = 0
            self.numMetalConnection = 0

        self.widthDriverInvN, self.widthDriverInvP = GP["widthDriverInvN"], GP["widthDriverInvP"]

        # input/output capacitance of each stage
        self.capInvInput, self.capInvOutput = GP["capInvInput"], GP["capInvOutput"]
        if self.numNand > 0:
            self.capNandInput, self.capNandOutput = GP["capNandInput"], GP["capNandOutput"]
        else:
            self.capNandInput, self.capNandOutput = 0, 0
        if self.numNor > 0:
            hMax = MAX_TRANSISTOR_HEIGHT * self.tech.featureSize
            capNor = CalculateGateCapacitance(NOR, self.numNorInput, self.widthNorN, self.widthNorP, hMax, self.tech)
            self.capNorInput, self.capNorOutput = capNor['capInput'], capNor['capOutput']
        else:
            self.capNorInput, self.capNorOutput = 0, 0
        capDriverInv = CalculateGateCapacitance(INV, 1, self.widthDriverInvN, self.widthDriverInvP,
                                                GP["hInv"], self.tech)
        self.capDriverInvInput, self.capDriverInvOutput = capDriverInv['capInput'], capDriverInv['capOutput']

        self._mark_initialized()

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        GP = self.gate_params

        hNor, wNor = 0, 0
        if self.numNor > 0:
            nor = CalculateGateArea(NOR, self.numNorInput, self.widthNorN, self.widthNorP,
                                    self.tech.featureSize * MAX_TRANSISTOR_HEIGHT, self.tech)
            hNor, wNor = nor['height'], nor['width']

        self.height = max(hNor * self.numNor, GP["hNand"] * self.numNand, GP["hInv"] * self.numInv)
        self.width = GP["wInv"] + GP["wNand"] + M3_PITCH * self.numMetalConnection * self.tech.featureSize + wNor
        if self.MUX:
            self.width += GP["wNand"] + GP["wInv"] * 2
        else:
            self.width += GP["wInv"] * 2
        self.area = self.height * self.width

        self.ApplyLayout(newHeight, newWidth, option)
        return self.area

    def CalculateLatency(self, rampInput, capLoad1, capLoad2, numRead):
        """
        capLoad1: load of the output driver (or the N gates of a column mux)
        capLoad2: load of the P gates of a column mux
        """
        if not self._check_initialized():
            return
        T = self.param.temp
        self.rampInput = rampInput
        self.readLatency = 0
        ramp = rampInput

        # INV
        resPullDown = CalculateOnResistance(self.widthInvN, NMOS, T, self.tech)
        if self.numNand > 0:
            tr = resPullDown * (self.capInvOutput + self.capNandInput * 2)
        else:
            tr = resPullDown * (self.capInvOutput + capLoad1)
        gm = CalculateTransconductance(self.widthInvN, NMOS, self.tech)
        beta = 1 / (resPullDown * gm)
        res = horowitz(tr, beta, ramp)
        self.readLatency += res['result']
        ramp = res['rampOutput']

        # NAND2
        if self.numNand > 0:
            resPullDown = CalculateOnResistance(self.widthNandN, NMOS, T, self.tech) * 2
            if self.numNor > 0:
                tr = resPullDown * (self.capNandOutput + self.capNorInput * self.numNor/4)
            else:
                tr = resPullDown * (self.capNandOutput + capLoad1)
            gm = CalculateTransconductance(self.widthNandN, NMOS, self.tech)
            beta = 1 / (resPullDown * gm)
            res = horowitz(tr, beta, ramp)
            self.readLatency += res['result']
            ramp = res['rampOutput']

        # NOR
        if self.numNor > 0:
            resPullUp = CalculateOnResistance(self.widthNorP, PMOS, T, self.tech) * self.numNorInput
            if self.MUX:
                tr = resPullUp * (self.capNorOutput + self.capNandInput)
            else:
                tr = resPullUp * (self.capNorOutput + self.capDriverInvInput)
            gm = CalculateTransconductance(self.widthNorP, PMOS, self.tech)
            beta = 1 / (resPullUp * gm)
            res = horowitz(tr, beta, ramp)
            self.readLatency += res['result']
            ramp = res['rampOutput']

        if self.MUX:
            # NAND2 enable
            resPullDown = CalculateOnResistance(self.widthNandN, NMOS, T, self.tech) * 2
            tr = resPullDown * (self.capNandOutput + self.capDriverInvInput)
            gm = CalculateTransconductance(self.widthNandN, NMOS, self.tech)
            beta = 1 / (resPullDown * gm)
            res = horowitz(tr, beta, ramp)
            self.readLatency += res['result']
            ramp = res['rampOutput']

            # 1st driver INV, drives the N gates and the 2nd INV
            resPullUp = CalculateOnResistance(self.widthDriverInvP, PMOS, T, self.tech)
            tr = resPullUp * (self.capDriverInvOutput + self.capDriverInvInput + capLoad1)
            gm = CalculateTransconductance(self.widthDriverInvP, PMOS, self.tech)
            beta = 1 / (resPullUp * gm)
            res = horowitz(tr, beta, ramp)
            self.readLatency += res['result']
            ramp = res['rampOutput']

            # 2nd driver INV, drives the P gates
            resPullDown = CalculateOnResistance(self.widthDriverInvN, NMOS, T, self.tech)
            tr = resPullDown * (self.capDriverInvOutput + capLoad2)
            gm = CalculateTransconductance(self.widthDriverInvN, NMOS, self.tech)
            beta = 1 / (resPullDown * gm)
            res = horowitz(tr, beta, ramp)
            self.readLatency += res['result']
            ramp = res['rampOutput']
        else:
            # output driver INV pair
            resPullDown = CalculateOnResistance(self.widthDriverInvN, NMOS, T, self.tech)
            tr = resPullDown * (self.capDriverInvOutput + self.capDriverInvInput)
            gm = CalculateTransconductance(self.widthDriverInvN, NMOS, self.tech)
            beta = 1 / (resPullDown * gm)
            res = horowitz(tr, beta, ramp)
            self.readLatency += res['result']
            ramp = res['rampOutput']

            resPullUp = CalculateOnResistance(self.widthDriverInvP, PMOS, T, self.tech)
            tr = resPullUp * (self.capDriverInvOutput + capLoad1)
            gm = CalculateTransconductance(self.widthDriverInvP, PMOS, self.tech)
            beta = 1 / (resPullUp * gm)
            res = horowitz(tr, beta, ramp)
            self.readLatency += res['result']
            ramp = res['rampOutput']

        self.rampOutput = ramp
        self.readLatency *= numRead
        return self.readLatency

    def CalculatePower(self, numRead):
        if not self._check_initialized():
            return
        GP = self.gate_params
        vdd = self.tech.vdd

        self.leakage = GP["leakageInv"] * self.numInv
        self.leakage += GP["leakageNand"] * self.numNand
        if self.numNor > 0:
            self.leakage += CalculateGateLeakage(NOR, self.numNorInput, self.widthNorN, self.widthNorP,
                                                 self.param.temp, self.tech) * vdd * self.numNor
        if self.MUX:
            self.leakage += GP["leakageNand"] * self.numNor
            self.leakage += CalculateGateLeakage(INV, 1, self.widthDriverInvN, self.widthDriverInvP,
                                                 self.param.temp, self.tech) * vdd * 2 * self.numNor
        else:
            self.leakage += CalculateGateLeakage(INV, 1, self.widthDriverInvN, self.widthDriverInvP,
                                                 self.param.temp, self.tech) * vdd * 2 * max(self.numNor, 1)

        readDynamicEnergy = 0
        # INV, half of the address bits toggle
        readDynamicEnergy += (self.capInvInput + self.capNandInput * 2) * vdd * vdd * math.floor(self.numAddrRow/2) * 2
        readDynamicEnergy += (self.capInvInput + self.capNorInput * self.numNor/2) * vdd * vdd * (self.numAddrRow - math.floor(self.numAddrRow/2)*2)
        # NAND2, one of every four switches
        readDynamicEnergy += (self.capNandOutput + self.capNorInput * self.numNor/4) * vdd * vdd * self.numNand/4
        # one selected NOR
        if self.MUX:
            readDynamicEnergy += (self.capNorOutput + self.capNandInput) * vdd * vdd
        else:
            readDynamicEnergy += (self.capNorOutput + self.capDriverInvInput) * vdd * vdd
        # output driver or mux enable circuit
        if self.MUX:
            readDynamicEnergy += (self.capNandOutput + self.capDriverInvInput) * vdd * vdd
            readDynamicEnergy += (self.capDriverInvOutput + self.capDriverInvInput) * vdd * vdd
            readDynamicEnergy += self.capDriverInvOutput * vdd * vdd
        else:
            readDynamicEnergy += (self.capDriverInvInput + self.capDriverInvOutput) * vdd * vdd * 2

        self.readDynamicEnergy = readDynamicEnergy * numRead
        return self.readDynamicEnergy


if __name__ == "__main__":
    from Param import Param
    from Technology import Technology
    from gate_calculator import compute_gate_params

    param = Param()
    tech = Technology().Initialize(param.technode, param.deviceroadmap)
    gate_params = compute_gate_params(param, tech)

    rowDecoder = RowDecoder(param, tech, gate_params)
    rowDecoder.Initialize(numAddrRow=7, MUX=False)
    rowDecoder.CalculateArea()
    rowDecoder.CalculateLatency(1e20, 1e-13, 0, 128)
    rowDecoder.CalculatePower(128)

    print(f"Number of INV: {rowDecoder.numInv}, NAND2: {rowDecoder.numNand}, NOR: {rowDecoder.numNor}")
    print(f"Area: {rowDecoder.area*1e12:.4f} μm2 ({rowDecoder.height*1e6:.2f} x {rowDecoder.width*1e6:.2f} μm)")
    print(f"Read Latency: {rowDecoder.readLatency*1e9:.4f} ns")
    print(f"Leakage: {rowDecoder.leakage*1e6:.4f} μW")
    print(f"Read Dynamic Energy: {rowDecoder.readDynamicEnergy*1e12:.4f} pJ")
