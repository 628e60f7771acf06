import math
from constant import *
from FunctionUnit import FunctionUnit
from Adder import Adder


class AdderTree(FunctionUnit):
    """numAdderTree binary trees, each reducing numSubcoreRow partial sums.

    Stage k adds ceil(J/2) pairs and widens the operand by one bit; the
    stage adders are sized on the fly, so repeated Calculate* calls never
    change the structural state set by Initialize.
    """

    def __init__(self, param, tech, gate_params):
        super().__init__(param, tech, gate_params)
        self.adder = Adder(param, tech, gate_params)

    def Initialize(self, numSubcoreRow, numAdderBit, numAdderTree):
        self.numSubcoreRow = numSubcoreRow
        self.numAdderBit = int(numAdderBit)
        self.numAdderTree = int(numAdderTree)
        self.numStage = math.ceil(math.log2(numSubcoreRow)) if numSubcoreRow > 1 else 0
        self._mark_initialized()

    def _stages(self, numUnitAdd):
        """Yield (numBit, numAdder) for every stage of one tree."""
        J = numUnitAdd if numUnitAdd else self.numSubcoreRow
        I = math.ceil(math.log2(J)) if J > 1 else 0
        numBitEachStage = self.numAdderBit
        for _ in range(I):
            numAdderEachStage = math.ceil(J/2)
            yield numBitEachStage, numAdderEachStage
            numBitEachStage += 1
            J = math.ceil(J/2)

    def _stage_adder(self, numBit, numAdder):
        adder = Adder(self.param, self.tech, self.gate_params)
        adder.Initialize(numBit, numAdder)
        return adder

    def CalculateArea(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        if not self._check_initialized():
            return
        numAdderEachTree = sum(numBit * numAdder for numBit, numAdder in self._stages(0))
        if numAdderEachTree == 0:
            # a single row of sub-arrays needs no reduction
            self.height = self.width = self.area = 0
            return self.area

        self.adder = self._stage_adder(numAdderEachTree, self.numAdderTree)
        if newWidth and option == AreaModify.NONE:
            self.adder.CalculateArea(0, newWidth, AreaModify.NONE)
        elif newHeight and option == AreaModify.NONE:
            self.adder.CalculateArea(newHeight, 0, AreaModify.NONE)
        else:
            self.adder.CalculateArea()
        self.height = self.adder.height
        self.width = self.adder.width
        self.area = self.adder.area
        self.ApplyLayout(newHeight, newWidth, option)
        return self.area

    def CalculateLatency(self, numRead, numUnitAdd, capLoad):
        if not self._check_initialized():
            return
        readLatency = 0
        for numBit, numAdder in self._stages(numUnitAdd):
            adder = self._stage_adder(numBit, numAdder)
            readLatency += adder.CalculateLatency(1e20, capLoad, 1)
        self.readLatency = readLatency * numRead
        return self.readLatency

    def CalculatePower(self, numRead, numUnitAdd):
        if not self._check_initialized():
            return
        readDynamicEnergy = 0
        leakage = 0
        for numBit, numAdder in self._stages(numUnitAdd):
            adder = self._stage_adder(numBit, numAdder)
            readDynamicEnergy += adder.CalculatePower(1, numAdder)
            leakage += adder.leakage

        self.readDynamicEnergy = readDynamicEnergy * self.numAdderTree * numRead
        self.leakage = leakage * self.numAdderTree
        return self.readDynamicEnergy
