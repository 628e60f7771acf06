import math
from constant import *
from FunctionUnit import FunctionUnit
from gate_calculator import CalculateGateArea, CalculateOnResistance, CalculateGateCapacitance, \
    CalculateTransconductance, horowitz, CalculateGateLeakage


class MultilevelSAEncoder(FunctionUnit):
    """Thermometer-to-binary encoder behind each multilevel sense amp."""

    def __init__(self, param, tech, gate_params):
        super().__init__(param, tech, gate_params)

    def Initialize(self, numLevel, numEncoder):
        self.numLevel = numLevel        # number of levels from the multilevel SA
        self.numEncoder = numEncoder    # number of encoders needed
        self.numInput = math.ceil(numLevel/2)           # inputs of the large NAND
        self.numGate = math.ceil(math.log2(numLevel))   # number of large NANDs

        hMax = MAX_TRANSISTOR_HEIGHT * self.tech.featureSize
        GP = self.gate_params
        nandLg = CalculateGateCapacitance(NAND, self.numInput, GP["widthNandN"], GP["widthNandP"], hMax, self.tech)
        self.capNandLgInput, self.capNandLgOutput = nandLg['capInput'], nandLg['capOutput']
        self._mark_initialized()

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        GP = self.gate_params
        nandLg = CalculateGateArea(NAND, self.numInput, GP["widthNandN"], GP["widthNandP"],
                                   MAX_TRANSISTOR_HEIGHT * self.tech.featureSize, self.tech)

        wEncoder = 2*GP["wInv"] + GP["wNand"] + nandLg['width']
        hEncoder = max((self.numLevel-1)*GP["hInv"], (self.numLevel-1)*GP["hNand"])

        if newWidth and option == AreaModify.NONE:
            numEncoderPerRow = max(int(newWidth / wEncoder), 1)
            numRowEncoder = math.ceil(self.numEncoder / numEncoderPerRow)
            self.width = newWidth
            self.height = hEncoder * numRowEncoder
        else:
            self.height = hEncoder * self.numEncoder
            self.width = wEncoder
        self.area = self.height * self.width
        self.ApplyLayout(newHeight, newWidth, option)

    def CalculateLatency(self, rampInput, numRead):
        if not self._check_initialized():
            return
        GP = self.gate_params
        T = self.param.temp
        self.rampInput = rampInput
        ramp = [rampInput]

        # 1st INV to NAND2
        resPullDown = CalculateOnResistance(GP["widthInvN"], NMOS, T, self.tech) * 2
        tr = resPullDown * (GP["capInvOutput"] + GP["capNandInput"] * 2)
        gm = CalculateTransconductance(GP["widthNandN"], NMOS, self.tech)
        beta = 1 / (resPullDown * gm)
        res = horowitz(tr, beta, ramp[0])
        readLatency = res['result']
        ramp.append(res['rampOutput'])

        # 2nd NAND2 to large NAND
        resPullUp = CalculateOnResistance(GP["widthNandP"], PMOS, T, self.tech)
        tr = resPullUp * (GP["capNandOutput"] + self.capNandLgInput * self.numInput)
        gm = CalculateTransconductance(GP["widthNandP"], PMOS, self.tech)
        beta = 1 / (resPullUp * gm)
        res = horowitz(tr, beta, ramp[1])
        readLatency += res['result']
        ramp.append(res['rampOutput'])

        # 3rd large NAND to INV, overlapped with the next read
        resPullDown = CalculateOnResistance(GP["widthNandN"], NMOS, T, self.tech) * 2
        tr = resPullDown * (self.capNandLgOutput + GP["capInvInput"])
        gm = CalculateTransconductance(GP["widthNandN"], NMOS, self.tech)
        beta = 1 / (resPullDown * gm)
        res = horowitz(tr, beta, ramp[2])
        ramp.append(res['rampOutput'])

        # 4th INV
        resPullUp = CalculateOnResistance(GP["widthInvP"], PMOS, T, self.tech)
        tr = resPullUp * GP["capInvOutput"]
        gm = CalculateTransconductance(GP["widthInvP"], PMOS, self.tech)
        beta = 1 / (resPullUp * gm)
        res = horowitz(tr, beta, ramp[3])
        ramp.append(res['rampOutput'])

        self.readLatency = readLatency * numRead
        self.rampOutput = ramp[4]
        return self.readLatency

    def CalculatePower(self, numRead):
        if not self._check_initialized():
            return
        GP = self.gate_params
        vdd = self.tech.vdd
        T = self.param.temp
        numStage = (self.numLevel+self.numGate) * self.numEncoder

        self.leakage = CalculateGateLeakage(INV, 1, GP["widthInvN"], GP["widthInvP"], T, self.tech) * vdd * numStage
        self.leakage += CalculateGateLeakage(NAND, 2, GP["widthNandN"], GP["widthNandP"], T, self.tech) * vdd * numStage
        self.leakage += CalculateGateLeakage(NAND, self.numInput, GP["widthNandN"], GP["widthNandP"], T, self.tech) \
            * vdd * self.numGate * self.numEncoder

        readDynamicEnergy = (GP["capInvInput"] + GP["capInvOutput"]) * vdd * vdd * numStage
        readDynamicEnergy += (GP["capNandInput"] + GP["capNandOutput"]) * vdd * vdd * numStage
        readDynamicEnergy += (self.capNandLgInput + self.capNandLgOutput) * vdd * vdd * self.numGate * self.numEncoder
        self.readDynamicEnergy = readDynamicEnergy * numRead
        return self.readDynamicEnergy
