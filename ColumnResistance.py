import numpy as np

from constant import *


def CopySubArray(original, positionRow, positionCol, numRow, numCol):
    """Return the numRow x numCol tile of a weight matrix as a new array."""
    original = np.asarray(original, dtype=float)
    return original[positionRow:positionRow+numRow, positionCol:positionCol+numCol].copy()


def CopySubInput(original, positionRow, numInputVector, numRow):
    """Return the rows of the input batch feeding one tile, first numInputVector columns."""
    original = np.asarray(original, dtype=float)
    return original[positionRow:positionRow+numRow, :numInputVector].copy()


def GetInputVector(inputBatch, k):
    """Column k of the batch and its row activity (fraction of non-zero rows)."""
    inputBatch = np.asarray(inputBatch, dtype=float)
    vector = inputBatch[:, k].copy()
    activityRowRead = np.count_nonzero(vector) / vector.size if vector.size else 0.0
    return vector, activityRowRead


def MapWeightToConductance(weight, param):
    # algoWeightMin -> minConductance, algoWeightMax -> maxConductance
    weight = np.clip(np.asarray(weight, dtype=float), param.algoWeightMin, param.algoWeightMax)
    scale = (weight - param.algoWeightMin) / (param.algoWeightMax - param.algoWeightMin)
    return param.minConductance + scale * (param.maxConductance - param.minConductance)


def GetColumnResistance(input, weight, cell, param, resCellAccess):
    """Effective read resistance of every column of a tile.

    Only rows whose input is 1 contribute. Each active cell is seen through
    its own resistance plus the row wire up to its column and the column
    wire down to the sense amp (plus the access resistance of a 1T1R cell).
    SRAM reads see a fixed access + column wire resistance per active row.
    Sequential RRAM/FeFET reads sense one row at a time, so the conductance
    is averaged over the active rows. A column without active rows has no
    conductance and reads as np.inf.
    """
    input = np.asarray(input, dtype=float)
    weight = np.asarray(weight, dtype=float)
    if weight.ndim != 2:
        raise ValueError(f"Weight tile must be 2-D, got shape {weight.shape}")
    if input.shape != (weight.shape[0],):
        raise ValueError(f"Input vector of shape {input.shape} does not match "
                         f"a weight tile with {weight.shape[0]} rows")

    numRow, numCol = weight.shape
    active = input.astype(int) == 1
    numActive = np.count_nonzero(active)

    with np.errstate(divide='ignore'):
        if cell.isSRAM:
            totalWireResistance = resCellAccess + param.wireResistanceCol
            columnG = np.full(numCol, numActive / totalWireResistance)
        else:
            i = np.arange(numRow)[:, None]
            j = np.arange(numCol)[None, :]
            totalWireResistance = 1.0/weight + (j+1) * param.wireResistanceRow \
                + (numRow-i) * param.wireResistanceCol
            if cell.memCellType == MemCellType.RRAM and cell.accessType == AccessType.CMOS:
                totalWireResistance = totalWireResistance + cell.resistanceAccess
            columnG = (1.0/totalWireResistance)[active].sum(axis=0)
            if not param.parallelRead:
                columnG = columnG / numActive if numActive else np.zeros(numCol)

        return 1.0/columnG
