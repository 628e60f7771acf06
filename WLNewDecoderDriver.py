import math
from constant import *
from FunctionUnit import FunctionUnit
from gate_calculator import CalculateGateLeakage, CalculateOnResistance, CalculateTransconductance, horowitz


class WLNewDecoderDriver(FunctionUnit):
    """Word-line driver for 1T1R arrays behind a RowDecoder:
    NAND2 -> INV -> NAND2 -> TG pair per row."""

    def __init__(self, param, tech, gate_params):
        super().__init__(param, tech, gate_params)

    def Initialize(self, numWLRow):
        self.numWLRow = numWLRow
        self._mark_initialized()

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        GP = self.gate_params
        hUnit = max(GP['hInv'], GP['hNand'], GP['hTg'])
        if newHeight:
            numUnitPerCol = max(int(newHeight / hUnit), 1)
            numColUnit = math.ceil(self.numWLRow / numUnitPerCol)
            self.height = newHeight
            self.width = (3 * GP['wNand'] + GP['wInv'] + 2 * GP['wTg']) * numColUnit
        else:
            self.height = hUnit * self.numWLRow
            self.width = 3 * GP['wNand'] + GP['wInv'] + 2 * GP['wTg']
        self.area = self.height * self.width

        self.ApplyLayout(newHeight, newWidth, option)

    def CalculateLatency(self, rampInput, capLoad, resLoad, numRead):
        """
        // 1st stage: NAND2
        resPullDown = CalculateOnResistance(widthNandN, NMOS, inputParameter.temperature, tech) * 2;
        trnand = resPullDown * (capNandOutput + capInvInput);
        ...
        // 4th stage: TG
        capOutput = 2 * capTgDrain;
        trtg = resTg * (capOutput + capLoad) + resLoad * capLoad / 2;
        readLatency += horowitz(trtg, 0, 1e20, &rampOutput);
        """
        if not self._check_initialized():
            return
        DT = self.gate_params
        T = self.param.temp
        self.rampInput = rampInput

        # 1st stage: NAND2, connect to INV
        resPullDown = CalculateOnResistance(DT['widthNandN'], NMOS, T, self.tech) * 2
        trnand = resPullDown * (DT['capNandOutput'] + DT['capInvInput'])
        gmnand = CalculateTransconductance(DT['widthNandN'], NMOS, self.tech)
        betanand = 1 / (resPullDown * gmnand)
        res = horowitz(trnand, betanand, rampInput)
        readLatency = res['result']

        # 2nd stage: INV, connect to 2 NAND2
        resPullUp = CalculateOnResistance(DT['widthInvP'], PMOS, T, self.tech)
        trinv = resPullUp * (DT['capInvOutput'] + 2 * DT['capNandInput'])
        gminv = CalculateTransconductance(DT['widthNandP'], PMOS, self.tech)
        betainv = 1 / (resPullUp * gminv)
        res = horowitz(trinv, betainv, res['rampOutput'])
        readLatency += res['result']

        # 3rd stage: NAND2, connect to 2 transmission gates
        resPullDown = CalculateOnResistance(DT['widthNandN'], NMOS, T, self.tech) * 2
        trnand = resPullDown * (DT['capNandOutput'] + DT['capTgGateP'] + DT['capTgGateN'])
        gmnand = CalculateTransconductance(DT['widthNandN'], NMOS, self.tech)
        betanand = 1 / (resPullDown * gmnand)
        res = horowitz(trnand, betanand, res['rampOutput'])
        readLatency += res['result']

        # 4th stage: TG
        capOutput = 2 * DT['capTgDrain']
        trtg = DT['resTg'] * (capOutput + capLoad) + resLoad * capLoad / 2
        res = horowitz(trtg, 0, 1e20)
        readLatency += res['result']
        self.rampOutput = res['rampOutput']

        self.readLatency = readLatency * numRead
        return self.readLatency

    def CalculatePower(self, numRead):
        if not self._check_initialized():
            return
        DT = self.gate_params
        vdd = self.tech.vdd
        T = self.param.temp

        # no leakage in TG
        self.leakage = CalculateGateLeakage(NAND, 2, DT['widthNandN'], DT['widthNandP'], T, self.tech) * vdd * self.numWLRow * 2
        self.leakage += CalculateGateLeakage(INV, 1, DT['widthInvN'], DT['widthInvP'], T, self.tech) * vdd * self.numWLRow * 2

        # only one row activated
        readDynamicEnergy = DT['capNandInput'] * vdd * vdd
        readDynamicEnergy += (DT['capInvOutput'] + DT['capTgGateN']) * vdd * vdd
        readDynamicEnergy += (DT['capNandOutput'] + DT['capTgGateN'] + DT['capTgGateP']) * vdd * vdd
        readDynamicEnergy += DT['capTgDrain'] * self.param.readVoltage ** 2
        self.readDynamicEnergy = readDynamicEnergy * numRead
        return self.readDynamicEnergy
