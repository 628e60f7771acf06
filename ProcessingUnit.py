import math
import logging
from collections import namedtuple

import numpy as np
from tqdm import tqdm

from constant import *
from SubArray import SubArray, ReadBreakdown
from AdderTree import AdderTree
from Bus import Bus
from DFF import DFF
from ColumnResistance import CopySubArray, CopySubInput, GetInputVector, GetColumnResistance

logger = logging.getLogger(__name__)

AreaResult = namedtuple("AreaResult", ["area", "height", "width", "areaADC", "areaAccum", "areaOther"])

PerformanceResult = namedtuple("PerformanceResult", [
    "readLatency", "readDynamicEnergy", "leakage",
    "bufferLatency", "bufferDynamicEnergy", "icLatency", "icDynamicEnergy",
    "coreLatencyADC", "coreLatencyAccum", "coreLatencyOther",
    "coreEnergyADC", "coreEnergyAccum", "coreEnergyOther",
    "subArrayReadDynamicEnergy",
])

_ZERO = ReadBreakdown(0, 0, 0, 0)


def _add(a, b):
    return ReadBreakdown(*(x + y for x, y in zip(a, b)))


def _max(a, b):
    return ReadBreakdown(*(max(x, y) for x, y in zip(a, b)))


def _scale(a, factor):
    return ReadBreakdown(*(x * factor for x in a))


class ProcessingUnit:
    """A grid of identical sub-arrays sharing one adder tree, an input and an
    output buffer and two buses.

    The weight matrix is tiled over the grid (or duplicated over it for
    speed-up) and evaluated one input vector at a time.
    """

    def __init__(self, param, tech, cell, gate_params):
        self.param = param
        self.tech = tech
        self.cell = cell
        self.gate_params = gate_params

        self.subArray = SubArray(param, tech, cell, gate_params)
        self.adderTree = AdderTree(param, tech, gate_params)
        self.busInput = Bus(param, tech, gate_params)
        self.busOutput = Bus(param, tech, gate_params)
        self.bufferInput = DFF(param, tech, gate_params)
        self.bufferOutput = DFF(param, tech, gate_params)

        self.numSubArrayRow = self.numSubArrayCol = 0
        self.area = self.height = self.width = 0

    @property
    def numBitSubArrayOutput(self):
        # bits of one sub-array partial sum
        PM = self.param
        if PM.parallelRead:
            return math.log2(PM.levelOutput)
        return math.log2(PM.numRowSubArray) + PM.cellBit - 1

    def Initialize(self, numSubArrayRow, numSubArrayCol):
        PM = self.param
        numRow, numCol = PM.numRowSubArray, PM.numColSubArray
        self.numSubArrayRow = numSubArrayRow
        self.numSubArrayCol = numSubArrayCol

        self.subArray.Initialize(numRow, numCol, PM.unitLengthWireResistance)
        self.adderTree.Initialize(numSubArrayRow, self.numBitSubArrayOutput + PM.numBitInput + 1,
                                  math.ceil(numSubArrayCol * numCol / self.subArray.numColMuxed))

        self.bufferInput.Initialize(PM.numBitInput * numRow)
        self.bufferOutput.Initialize(int((numCol // self.subArray.numColMuxed)
                                         * (self.numBitSubArrayOutput + PM.numBitInput + self.adderTree.numStage)))

        self.subArray.CalculateArea()
        self.busInput.Initialize(HORIZONTAL, numSubArrayRow, numSubArrayCol, 0, numRow,
                                 self.subArray.height, self.subArray.width)
        self.busOutput.Initialize(VERTICAL, numSubArrayRow, numSubArrayCol, 0, numCol,
                                  self.subArray.height, self.subArray.width)

    def CalculateArea(self):
        subArray = self.subArray
        numSubArray = self.numSubArrayRow * self.numSubArrayCol

        subArray.CalculateArea()
        self.adderTree.CalculateArea(0, subArray.width, AreaModify.NONE)
        self.bufferInput.CalculateArea(self.numSubArrayRow * subArray.height, 0, AreaModify.NONE)
        self.bufferOutput.CalculateArea(0, self.numSubArrayCol * subArray.width, AreaModify.NONE)
        self.busInput.CalculateArea(1, True)
        self.busOutput.CalculateArea(1, True)

        bufferArea = self.bufferInput.area + self.bufferOutput.area
        self.area = subArray.usedArea * numSubArray + self.adderTree.area + bufferArea
        self.height = math.sqrt(self.area)
        self.width = self.area / self.height if self.height else 0

        result = AreaResult(
            area=self.area, height=self.height, width=self.width,
            areaADC=subArray.areaADC * numSubArray,
            areaAccum=subArray.areaAccum * numSubArray + self.adderTree.area,
            areaOther=subArray.areaOther * numSubArray + bufferArea,
        )
        logger.debug("PE area: %.4e m^2 (%d x %d sub-arrays)", self.area, self.numSubArrayRow, self.numSubArrayCol)
        return result

    def _evaluate_tile(self, memory, inputs, numInVector, progress=False, desc=None):
        """Run every input vector through one tile.

        Returns the summed latency and energy breakdowns of the tile.
        """
        latency, energy = _ZERO, _ZERO
        for k in tqdm(range(numInVector), desc=desc, disable=not progress, leave=False):
            vector, activityRowRead = GetInputVector(inputs, k)
            columnResistance = GetColumnResistance(vector, memory, self.cell, self.param,
                                                   self.subArray.resCellAccess)
            latency = _add(latency, self.subArray.CalculateLatency(columnResistance, activityRowRead))
            energy = _add(energy, self.subArray.CalculatePower(columnResistance, activityRowRead))
        return latency, energy

    def _tiles(self, weightMatrixRow, weightMatrixCol, numTileRow, numTileCol):
        PM = self.param
        for i in range(numTileRow):
            for j in range(numTileCol):
                if i*PM.numRowSubArray < weightMatrixRow and j*PM.numColSubArray < weightMatrixCol:
                    numRowMatrix = min(PM.numRowSubArray, weightMatrixRow - i*PM.numRowSubArray)
                    numColMatrix = min(PM.numColSubArray, weightMatrixCol - j*PM.numColSubArray)
                    yield i, j, numRowMatrix, numColMatrix

    def CalculatePerformance(self, weight, inputBatch, arrayDupRow, arrayDupCol, numSubArrayRow, numSubArrayCol,
                             progress=False):
        if not self.subArray.initialized:
            logger.error("[ProcessingUnit] Error: Require initialization first!")
            return

        PM = self.param
        weight = np.asarray(weight, dtype=float)
        inputBatch = np.asarray(inputBatch, dtype=float)
        if weight.ndim != 2 or inputBatch.ndim != 2:
            raise ValueError("Weight and input batch must both be 2-D")
        if inputBatch.shape[0] != weight.shape[0]:
            raise ValueError(f"Input batch has {inputBatch.shape[0]} rows, "
                             f"weight matrix has {weight.shape[0]}")
        weightMatrixRow, weightMatrixCol = weight.shape
        numInVector = inputBatch.shape[1]

        numAddRow = math.ceil(weightMatrixRow / PM.numRowSubArray)
        numReadAdderTree = int(numInVector / PM.numBitInput) * self.subArray.numColMuxed
        coreLatency, coreEnergy = _ZERO, _ZERO
        subArrayReadDynamicEnergy = 0
        adderTreeLeakage = 0
        numDup = arrayDupRow * arrayDupCol

        if numDup > 1:
            if arrayDupRow < numSubArrayRow or arrayDupCol < numSubArrayCol:
                # the duplicated matrix still spans several sub-arrays
                numTileRow = math.ceil(weightMatrixRow / PM.numRowSubArray)
                numTileCol = math.ceil(weightMatrixCol / PM.numColSubArray)
                for i, j, numRowMatrix, numColMatrix in self._tiles(weightMatrixRow, weightMatrixCol,
                                                                     numTileRow, numTileCol):
                    memory = CopySubArray(weight, i*PM.numRowSubArray, j*PM.numColSubArray, numRowMatrix, numColMatrix)
                    inputs = CopySubInput(inputBatch, i*PM.numRowSubArray, numInVector, numRowMatrix)
                    latency, energy = self._evaluate_tile(memory, inputs, numInVector, progress, f"tile {i},{j}")
                    subArrayReadDynamicEnergy += energy.total

                    self.adderTree.CalculateLatency(numReadAdderTree, numAddRow, 0)
                    self.adderTree.CalculatePower(numReadAdderTree, numAddRow)
                    adderTreeLeakage = self.adderTree.leakage

                    latency = latency._replace(total=latency.total + self.adderTree.readLatency,
                                               accum=latency.accum + self.adderTree.readLatency)
                    energy = energy._replace(total=energy.total + self.adderTree.readDynamicEnergy,
                                             accum=energy.accum + self.adderTree.readDynamicEnergy)
                    coreLatency = _max(coreLatency, latency)
                    coreEnergy = _add(coreEnergy, energy)
                # duplicated copies serve disjoint slices of the batch
                coreLatency = _scale(coreLatency, 1/numDup)
            else:
                memory = CopySubArray(weight, 0, 0, weightMatrixRow, weightMatrixCol)
                inputs = CopySubInput(inputBatch, 0, numInVector, weightMatrixRow)
                latency, coreEnergy = self._evaluate_tile(memory, inputs, numInVector, progress, "duplicated")
                subArrayReadDynamicEnergy = coreEnergy.total
                # a single pass covers every output, no adder tree
                coreLatency = _scale(latency, 1/numDup)
        else:
            for i, j, numRowMatrix, numColMatrix in self._tiles(weightMatrixRow, weightMatrixCol,
                                                                 numSubArrayRow, numSubArrayCol):
                memory = CopySubArray(weight, i*PM.numRowSubArray, j*PM.numColSubArray, numRowMatrix, numColMatrix)
                inputs = CopySubInput(inputBatch, i*PM.numRowSubArray, numInVector, numRowMatrix)
                latency, energy = self._evaluate_tile(memory, inputs, numInVector, progress, f"tile {i},{j}")
                subArrayReadDynamicEnergy += energy.total
                # tiles run side by side on the same input stream
                coreLatency = _max(coreLatency, latency)
                coreEnergy = _add(coreEnergy, energy)

            self.adderTree.CalculateLatency(numReadAdderTree, numAddRow, 0)
            self.adderTree.CalculatePower(numReadAdderTree, numAddRow)
            adderTreeLeakage = self.adderTree.leakage
            coreLatency = coreLatency._replace(total=coreLatency.total + self.adderTree.readLatency,
                                               accum=coreLatency.accum + self.adderTree.readLatency)
            coreEnergy = coreEnergy._replace(total=coreEnergy.total + self.adderTree.readDynamicEnergy,
                                             accum=coreEnergy.accum + self.adderTree.readDynamicEnergy)

        # the amount of data moved is fixed whatever the duplication
        numInputBit = weightMatrixRow / PM.numRowPerSynapse * numInVector
        self.bufferInput.CalculateLatency(numInVector * numAddRow)
        self.bufferOutput.CalculateLatency(numInVector / PM.numBitInput)
        self.bufferInput.CalculatePower(weightMatrixRow / PM.numRowPerSynapse, numInVector)
        self.bufferOutput.CalculatePower(weightMatrixCol / PM.numColPerSynapse * self.adderTree.numAdderBit,
                                         numInVector / PM.numBitInput)

        self.busInput.CalculateLatency(numInputBit / self.busInput.busWidth)
        self.busInput.CalculatePower(self.busInput.busWidth, numInputBit / self.busInput.busWidth)
        numOutputBit = weightMatrixCol / PM.numColPerSynapse * self.numBitSubArrayOutput * numInVector / PM.numBitInput
        numOutputRead = numOutputBit / (self.busOutput.numRow * self.busOutput.busWidth)
        self.busOutput.CalculateLatency(numOutputRead)
        self.busOutput.CalculatePower(self.busOutput.numRow * self.busOutput.busWidth, numOutputRead)

        bufferLatency = self.bufferInput.readLatency + self.bufferOutput.readLatency
        bufferDynamicEnergy = self.bufferInput.readDynamicEnergy + self.bufferOutput.readDynamicEnergy
        icLatency = self.busInput.readLatency + self.busOutput.readLatency
        icDynamicEnergy = self.busInput.readDynamicEnergy + self.busOutput.readDynamicEnergy

        leakage = self.subArray.leakage * numSubArrayRow * numSubArrayCol + adderTreeLeakage \
            + self.bufferInput.leakage + self.bufferOutput.leakage

        result = PerformanceResult(
            readLatency=coreLatency.total + bufferLatency + icLatency,
            readDynamicEnergy=coreEnergy.total + bufferDynamicEnergy + icDynamicEnergy,
            leakage=leakage,
            bufferLatency=bufferLatency,
            bufferDynamicEnergy=bufferDynamicEnergy,
            icLatency=icLatency,
            icDynamicEnergy=icDynamicEnergy,
            coreLatencyADC=coreLatency.adc,
            coreLatencyAccum=coreLatency.accum,
            coreLatencyOther=coreLatency.other + bufferLatency + icLatency,
            coreEnergyADC=coreEnergy.adc,
            coreEnergyAccum=coreEnergy.accum,
            coreEnergyOther=coreEnergy.other + bufferDynamicEnergy + icDynamicEnergy,
            subArrayReadDynamicEnergy=subArrayReadDynamicEnergy,
        )
        logger.info("PE %dx%d, %d input vectors: latency %.4e s, energy %.4e J, leakage %.4e W",
                    numSubArrayRow, numSubArrayCol, numInVector,
                    result.readLatency, result.readDynamicEnergy, result.leakage)
        return result

    def _report(self, perf=None):
        lines = [
            "---------------------------------------------------------",
            "ProcessingUnit",
            f"Area = {self.height*1e6}um x {self.width*1e6}um = {self.area*1e12}um^2",
        ]
        if perf is not None:
            lines += [
                f"Read Latency = {perf.readLatency*1e9}ns",
                f" - ADC / Accum / Other = {perf.coreLatencyADC*1e9}ns / {perf.coreLatencyAccum*1e9}ns / "
                f"{perf.coreLatencyOther*1e9}ns",
                f" - Buffer = {perf.bufferLatency*1e9}ns, IC = {perf.icLatency*1e9}ns",
                f"Read Dynamic Energy = {perf.readDynamicEnergy*1e12}pJ",
                f" - ADC / Accum / Other = {perf.coreEnergyADC*1e12}pJ / {perf.coreEnergyAccum*1e12}pJ / "
                f"{perf.coreEnergyOther*1e12}pJ",
                f" - Buffer = {perf.bufferDynamicEnergy*1e12}pJ, IC = {perf.icDynamicEnergy*1e12}pJ",
                f"Leakage Power = {perf.leakage*1e6}uW",
            ]
        return "\n".join(lines)

    def PrintProperty(self, perf=None):
        self.subArray.PrintProperty()
        self.adderTree.PrintProperty("AdderTree")
        self.bufferInput.PrintProperty("Input Buffer")
        self.bufferOutput.PrintProperty("Output Buffer")
        self.busInput.PrintProperty("Input Bus")
        self.busOutput.PrintProperty("Output Bus")
        print(self._report(perf))

    def SaveOutput(self, perf=None, filename="SynapticCOREoutput.txt"):
        self.subArray.SaveOutput(filename=filename)
        self.adderTree.SaveOutput("AdderTree", filename)
        self.bufferInput.SaveOutput("Input Buffer", filename)
        self.bufferOutput.SaveOutput("Output Buffer", filename)
        self.busInput.SaveOutput("Input Bus", filename)
        self.busOutput.SaveOutput("Output Bus", filename)
        with open(filename, "a") as outfile:
            outfile.write(self._report(perf) + "\n\n")
