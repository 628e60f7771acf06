import math
import logging
from constant import *
from FunctionUnit import FunctionUnit
from gate_calculator import CalculateGateArea, CalculateGateCapacitance, CalculateGateLeakage, CalculateOnResistance

logger = logging.getLogger(__name__)


class Bus(FunctionUnit):
    """Repeated wire bus running across a grid of sub-arrays.

    A HORIZONTAL bus runs along every row of the grid (numRow buses, each
    numCol units long), a VERTICAL one along every column. Repeaters are
    sized for minimum delay; a non-zero delaytolerance trades delay for
    energy by shrinking them and packing them closer.
    """

    def __init__(self, param, tech, gate_params):
        super().__init__(param, tech, gate_params)

    def _repeater(self, repeaterSize):
        GP, tech, T = self.gate_params, self.tech, self.param.temp
        hMax = MAX_TRANSISTOR_HEIGHT * tech.featureSize
        widthN, widthP = GP["widthInvN"] * repeaterSize, GP["widthInvP"] * repeaterSize
        cap = CalculateGateCapacitance(INV, 1, widthN, widthP, hMax, tech)
        resOnRep = CalculateOnResistance(widthN, NMOS, T, tech) + CalculateOnResistance(widthP, PMOS, T, tech)
        return cap['capInput'], cap['capOutput'], resOnRep

    def _unit_length(self, repeaterSize, minDist):
        capRepInput, capRepOutput, resOnRep = self._repeater(repeaterSize)
        res, cap = self.unitLengthWireResistance, UNIT_WIRE_CAP
        delay = 0.7 * (resOnRep * (capRepInput + capRepOutput + cap*minDist)
                       + 0.5 * res*minDist * cap*minDist + res*minDist * capRepInput) / minDist
        energy = (capRepInput + capRepOutput + cap*minDist) * self.tech.vdd**2 / minDist
        return delay, energy

    def Initialize(self, mode, numRow, numCol, delaytolerance, busWidth, unitHeight, unitWidth):
        if mode not in (HORIZONTAL, VERTICAL):
            raise ValueError(f"[Bus] Unknown bus mode: {mode}")
        self.mode = mode
        self.numRow = numRow
        self.numCol = numCol
        self.delaytolerance = delaytolerance
        self.busWidth = busWidth
        self.unitHeight = unitHeight
        self.unitWidth = unitWidth
        self.unitLengthWireResistance = self.param.unitLengthWireResistance

        # optimal repeater design for the highest speed
        capMinInvInput, capMinInvOutput, resOnMin = self._repeater(1)
        self.repeaterSize = max(math.floor(math.sqrt(
            resOnMin * UNIT_WIRE_CAP / capMinInvInput / self.unitLengthWireResistance)), 1)
        self.minDist = math.sqrt(2 * resOnMin * (capMinInvOutput + capMinInvInput)
                                 / (self.unitLengthWireResistance * UNIT_WIRE_CAP))
        self.unitLengthDelay, self.unitLengthEnergy = self._unit_length(self.repeaterSize, self.minDist)

        if delaytolerance:
            # smaller, denser repeaters until the delay budget is used up
            minUnitLengthDelay = self.unitLengthDelay
            repeaterSize, minDist = self.repeaterSize, self.minDist
            while repeaterSize > 1:
                delay, energy = self._unit_length(repeaterSize / 2, minDist * 0.9)
                if delay > minUnitLengthDelay * (1 + delaytolerance):
                    break
                repeaterSize, minDist = repeaterSize / 2, minDist * 0.9
                self.unitLengthDelay, self.unitLengthEnergy = delay, energy
            self.repeaterSize, self.minDist = repeaterSize, minDist

        if mode == HORIZONTAL:
            self.busLength = unitWidth * numCol
            self.numBus = numRow
        else:
            self.busLength = unitHeight * numRow
            self.numBus = numCol
        self.totalWireLength = self.busLength * self.numBus * busWidth
        self.numRepeater = math.ceil(self.totalWireLength / self.minDist)

        self._mark_initialized()

    def CalculateArea(self, foldedratio=1, overLap=True):
        if not self._check_initialized():
            return
        GP, F = self.gate_params, self.tech.featureSize
        rep = CalculateGateArea(INV, 1, GP["widthInvN"] * self.repeaterSize, GP["widthInvP"] * self.repeaterSize,
                                MAX_TRANSISTOR_HEIGHT * F, self.tech)
        self.areaRepeater = rep['area'] * self.numRepeater * foldedratio
        # wires routed on top of the sub-arrays take no extra area
        wirePitch = M2_PITCH * F
        self.areaWire = 0 if overLap else self.totalWireLength * wirePitch
        self.area = self.areaRepeater + self.areaWire

        if self.mode == HORIZONTAL:
            self.width = self.busLength
            self.height = self.area / self.width if self.width else 0
        else:
            self.height = self.busLength
            self.width = self.area / self.height if self.height else 0
        return self.area

    def CalculateLatency(self, numRead):
        if not self._check_initialized():
            return
        self.readLatency = self.unitLengthDelay * self.busLength * numRead
        return self.readLatency

    def CalculatePower(self, numBitAccess, numRead):
        if not self._check_initialized():
            return
        GP = self.gate_params
        self.leakage = CalculateGateLeakage(INV, 1, GP["widthInvN"] * self.repeaterSize,
                                            GP["widthInvP"] * self.repeaterSize, self.param.temp, self.tech) \
            * self.tech.vdd * self.numRepeater
        self.readDynamicEnergy = self.unitLengthEnergy * self.busLength * numBitAccess * numRead
        return self.readDynamicEnergy
