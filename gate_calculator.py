import math
from typing import Dict

from constant import *


def _temp_index(temperature) -> int:
    tempIndex = int(temperature) - 300
    if tempIndex > 100 or tempIndex < 0:
        raise ValueError(f"Temperature out of range (300-400K): {temperature}")
    return tempIndex


def _max_transistor_widths(widthNMOS, widthPMOS, heightTransistorRegion, tech):
    """Largest unfolded N/P width that fits in the transistor region."""
    F = tech.featureSize
    ratio = widthPMOS / (widthPMOS + widthNMOS)
    if ratio == 0:  # no PMOS
        maxWidthPMOS = 0
        maxWidthNMOS = heightTransistorRegion - (MIN_POLY_EXT_DIFF + MIN_GAP_BET_FIELD_POLY/2) * 2 * F
    elif ratio == 1:  # no NMOS
        maxWidthPMOS = heightTransistorRegion - (MIN_POLY_EXT_DIFF + MIN_GAP_BET_FIELD_POLY/2) * 2 * F
        maxWidthNMOS = 0
    else:
        maxWidthPMOS = ratio * (heightTransistorRegion - MIN_GAP_BET_P_AND_N_DIFFS * F
                                - (MIN_POLY_EXT_DIFF + MIN_GAP_BET_FIELD_POLY/2) * 2 * F)
        maxWidthNMOS = maxWidthPMOS / ratio * (1 - ratio)
    return maxWidthNMOS, maxWidthPMOS


def compute_gate_params(param, tech) -> Dict[str, float]:
    """Standard-cell numbers shared by every peripheral block.

    All widths are in meters; the dict is built once per (param, tech) pair
    and passed to each block constructor as ``gate_params``.
    """
    gate_params = {}
    F = tech.featureSize
    hMax = MAX_TRANSISTOR_HEIGHT * F

    # bare transistors
    widthNmos = MIN_NMOS_SIZE * F
    widthPmos = tech.pnSizeRatio * MIN_NMOS_SIZE * F
    nmos = CalculateGateArea(INV, 1, widthNmos, 0, hMax, tech)
    pmos = CalculateGateArea(INV, 1, 0, widthPmos, hMax, tech)
    gate_params['widthNmos'], gate_params['widthPmos'] = widthNmos, widthPmos
    gate_params['hNmos'], gate_params['wNmos'], gate_params['aNmos'] = nmos['height'], nmos['width'], nmos['area']
    gate_params['hPmos'], gate_params['wPmos'], gate_params['aPmos'] = pmos['height'], pmos['width'], pmos['area']
    gate_params['capNmosInput'], gate_params['capNmosOutput'] = CalculateGateCapacitance(INV, 1, widthNmos, 0, hMax, tech).values()
    gate_params['capPmosInput'], gate_params['capPmosOutput'] = CalculateGateCapacitance(INV, 1, 0, widthPmos, hMax, tech).values()

    # INV
    widthInvN = MIN_NMOS_SIZE * F
    widthInvP = tech.pnSizeRatio * MIN_NMOS_SIZE * F
    inv = CalculateGateArea(INV, 1, widthInvN, widthInvP, hMax, tech)
    capInv = CalculateGateCapacitance(INV, 1, widthInvN, widthInvP, hMax, tech)
    gate_params['widthInvN'], gate_params['widthInvP'] = widthInvN, widthInvP
    gate_params['capInvInput'], gate_params['capInvOutput'] = capInv['capInput'], capInv['capOutput']
    gate_params['resInv'] = CalculateOnResistance(widthInvN, NMOS, param.temp, tech)
    gate_params['hInv'], gate_params['wInv'], gate_params['aInv'] = inv['height'], inv['width'], inv['area']
    gate_params['leakageInv'] = CalculateGateLeakage(INV, 1, widthInvN, widthInvP, param.temp, tech) * tech.vdd

    # driver INV (mux select lines)
    gate_params['widthDriverInvN'] = 2 * MIN_NMOS_SIZE * F
    gate_params['widthDriverInvP'] = 2 * tech.pnSizeRatio * MIN_NMOS_SIZE * F

    # NAND2
    widthNandN = 2 * MIN_NMOS_SIZE * F
    widthNandP = tech.pnSizeRatio * MIN_NMOS_SIZE * F
    nand = CalculateGateArea(NAND, 2, widthNandN, widthNandP, hMax, tech)
    capNand = CalculateGateCapacitance(NAND, 2, widthNandN, widthNandP, hMax, tech)
    gate_params['widthNandN'], gate_params['widthNandP'] = widthNandN, widthNandP
    gate_params['capNandInput'], gate_params['capNandOutput'] = capNand['capInput'], capNand['capOutput']
    gate_params['resNandN'] = CalculateOnResistance(widthNandN, NMOS, param.temp, tech)
    gate_params['resNandP'] = CalculateOnResistance(widthNandP, PMOS, param.temp, tech)
    gate_params['hNand'], gate_params['wNand'], gate_params['aNand'] = nand['height'], nand['width'], nand['area']
    gate_params['leakageNand'] = CalculateGateLeakage(NAND, 2, widthNandN, widthNandP, param.temp, tech) * tech.vdd

    # NOR2
    widthNorN = MIN_NMOS_SIZE * F
    widthNorP = tech.pnSizeRatio * 2 * MIN_NMOS_SIZE * F
    capNor = CalculateGateCapacitance(NOR, 2, widthNorN, widthNorP, hMax, tech)
    gate_params['widthNorN'], gate_params['widthNorP'] = widthNorN, widthNorP
    gate_params['capNorInput'], gate_params['capNorOutput'] = capNor['capInput'], capNor['capOutput']

    # transmission gate
    widthTgN = MIN_NMOS_SIZE * F
    widthTgP = tech.pnSizeRatio * MIN_NMOS_SIZE * F
    tg = CalculateGateArea(INV, 1, widthTgN, widthTgP, hMax, tech)
    capTg = CalculateGateCapacitance(INV, 1, widthTgN, widthTgP, tg['height'], tech)
    gate_params['widthTgN'], gate_params['widthTgP'] = widthTgN, widthTgP
    gate_params['resTg'] = 1 / (1/CalculateOnResistance(widthTgN, NMOS, param.temp, tech)
                                + 1/CalculateOnResistance(widthTgP, PMOS, param.temp, tech))
    gate_params['hTg'], gate_params['wTg'], gate_params['aTg'] = tg['height'], tg['width'], tg['area']
    gate_params['capTgInput'], gate_params['capTgOutput'] = capTg['capInput'], capTg['capOutput']
    gate_params['capTgDrain'] = capTg['capOutput']
    gate_params['capTgGateN'] = CalculateGateCap(widthTgN, tech)
    gate_params['capTgGateP'] = CalculateGateCap(widthTgP, tech)

    # cell pitch limits of the peripheral circuits
    gate_params['minCellHeight'] = MAX_TRANSISTOR_HEIGHT * F
    gate_params['minCellWidth'] = 2 * (POLY_WIDTH + MIN_GAP_BET_GATE_POLY) * F
    gate_params['resCellAccess'] = param.resistanceOn * IR_DROP_TOLERANCE

    return gate_params


def horowitz(tr, beta, ramp_input) -> dict:
    """
    double horowitz(double tr, double beta, double rampInput, double *rampOutput) {
        double alpha;
        alpha = 1 / rampInput / tr;
        double vs = 0.5;
        double result = tr * sqrt(log(vs) * log(vs) + 2 * alpha * beta * (1 - vs));
        *rampOutput = (1 - vs) / result;
        return result;
    }
    """
    if tr == 0:
        return {'result': 0.0, 'rampOutput': 1e20}
    alpha = 1 / ramp_input / tr
    vs = 0.5  # normalized switching voltage
    result = tr * math.sqrt(math.log(vs) * math.log(vs) + 2 * alpha * beta * (1 - vs))
    return {'result': result, 'rampOutput': (1 - vs) / result}


def CalculateGateCap(width, tech):
    return (tech.capIdealGate + tech.capOverlap + 3 * tech.capFringe) * width + tech.phyGateLength * tech.capPolywire


def CalculateGateArea(gateType: int, numInput: int, widthNMOS: float, widthPMOS: float,
                      heightTransistorRegion: float, tech) -> dict:
    F = tech.featureSize
    maxWidthNMOS, maxWidthPMOS = _max_transistor_widths(widthNMOS, widthPMOS, heightTransistorRegion, tech)

    def region(width, maxWidth):
        if width <= 0:
            return 0, 0
        if width <= maxWidth:  # no folding
            return 2 * (POLY_WIDTH + MIN_GAP_BET_GATE_POLY) * F, width
        numFolded = math.ceil(width / maxWidth)
        return (numFolded + 1) * (POLY_WIDTH + MIN_GAP_BET_GATE_POLY) * F, maxWidth

    unitWidthRegionN, heightRegionN = region(widthNMOS, maxWidthNMOS)
    unitWidthRegionP, heightRegionP = region(widthPMOS, maxWidthPMOS)

    if gateType == INV:
        widthRegionN, widthRegionP = unitWidthRegionN, unitWidthRegionP
    elif gateType in (NOR, NAND):
        widthRegionN, widthRegionP = numInput * unitWidthRegionN, numInput * unitWidthRegionP
    else:
        raise ValueError(f"Unknown gate type: {gateType}")

    width = max(widthRegionN, widthRegionP)
    if widthPMOS > 0 and widthNMOS > 0:  # a gate
        height = heightTransistorRegion
    else:  # a single transistor
        height = heightRegionN + heightRegionP + (MIN_POLY_EXT_DIFF + MIN_GAP_BET_FIELD_POLY/2) * 2 * F

    return {'area': width * height, 'height': height, 'width': width}


def _drain_geometry(width, maxWidth, F):
    """(numFolded, unitWidthDrain, unitWidthSource, heightDrain) of one transistor."""
    if width <= 0:
        return 0, 0, 0, 0
    if width <= maxWidth:
        unit = F * MIN_GAP_BET_GATE_POLY
        return 1, unit, unit, width
    numFolded = math.ceil(width / maxWidth)
    unitDrain = math.ceil((numFolded + 1) / 2) * F * MIN_GAP_BET_GATE_POLY
    unitSource = math.floor((numFolded + 1) / 2) * F * MIN_GAP_BET_GATE_POLY
    return numFolded, unitDrain, unitSource, maxWidth


def CalculateGateCapacitance(gateType, numInput, widthNMOS, widthPMOS, heightTransistorRegion, tech) -> dict:
    F = tech.featureSize
    maxWidthNMOS, maxWidthPMOS = _max_transistor_widths(widthNMOS, widthPMOS, heightTransistorRegion, tech)
    numFoldedN, unitDrainN, unitSourceN, heightDrainN = _drain_geometry(widthNMOS, maxWidthNMOS, F)
    numFoldedP, unitDrainP, unitSourceP, heightDrainP = _drain_geometry(widthPMOS, maxWidthPMOS, F)

    if gateType == INV:
        widthDrainN, widthDrainP = unitDrainN, unitDrainP
    elif gateType == NOR:
        # PMOS in series, NMOS in parallel
        widthDrainP = numInput * unitDrainP + (numInput - 1) * unitSourceP if widthPMOS > 0 else 0
        widthDrainN = math.floor((numInput + 1) / 2) * unitDrainN
    elif gateType == NAND:
        # NMOS in series, PMOS in parallel
        widthDrainN = numInput * unitDrainN + (numInput - 1) * unitSourceN if widthNMOS > 0 else 0
        widthDrainP = math.floor((numInput + 1) / 2) * unitDrainP
    else:
        raise ValueError(f"Unknown gate type: {gateType}")

    widthDrainSidewallN = widthDrainN * 2 + heightDrainN if widthNMOS > 0 else 0
    widthDrainSidewallP = widthDrainP * 2 + heightDrainP if widthPMOS > 0 else 0

    capDrainBottomN = widthDrainN * heightDrainN * tech.capJunction
    capDrainBottomP = widthDrainP * heightDrainP * tech.capJunction
    capDrainSidewallN = widthDrainSidewallN * tech.capSidewall
    capDrainSidewallP = widthDrainSidewallP * tech.capSidewall
    capDrainToChannelN = numFoldedN * heightDrainN * tech.capDrainToChannel
    capDrainToChannelP = numFoldedP * heightDrainP * tech.capDrainToChannel

    capOutput = (capDrainBottomN + capDrainBottomP + capDrainSidewallN + capDrainSidewallP
                 + capDrainToChannelN + capDrainToChannelP)
    capInput = CalculateGateCap(widthNMOS, tech) + CalculateGateCap(widthPMOS, tech)
    return {'capInput': capInput, 'capOutput': capOutput}


def CalculateDrainCap(width, type, heightTransistorRegion, tech):
    F = tech.featureSize
    if type == NMOS:
        maxWidth = _max_transistor_widths(width, 0, heightTransistorRegion, tech)[0]
    else:
        maxWidth = _max_transistor_widths(0, width, heightTransistorRegion, tech)[1]
    numFolded, unitDrain, _, heightDrain = _drain_geometry(width, maxWidth, F)
    if numFolded == 0:
        return 0.0
    capBottom = unitDrain * heightDrain * tech.capJunction
    capSidewall = (unitDrain * 2 + heightDrain) * tech.capSidewall
    capToChannel = numFolded * heightDrain * tech.capDrainToChannel
    return capBottom + capSidewall + capToChannel


def CalculateGateLeakage(gateType, numInput, widthNMOS, widthPMOS, temperature, tech):
    tempIndex = _temp_index(temperature)
    leakN = tech.currentOffNmos[tempIndex]
    leakP = tech.currentOffPmos[tempIndex]

    if gateType == INV:
        return (widthNMOS * leakN + widthPMOS * leakP) / 2
    if gateType == NOR:
        leakageN = widthNMOS * leakN * numInput
        ratio = AVG_RATIO_LEAK_2INPUT_NOR if numInput == 2 else AVG_RATIO_LEAK_3INPUT_NOR
        return leakageN * ratio
    if gateType == NAND:
        leakageP = widthPMOS * leakP * numInput
        ratio = AVG_RATIO_LEAK_2INPUT_NAND if numInput == 2 else AVG_RATIO_LEAK_3INPUT_NAND
        return leakageP * ratio
    raise ValueError(f"Unknown gate type: {gateType}")


def CalculateOnResistance(width, type, temp, tech):
    tempIndex = _temp_index(temp)
    if type == NMOS:
        current = tech.currentOnNmos[tempIndex]
    else:
        current = tech.currentOnPmos[tempIndex]
    return tech.effectiveResistanceMultiplier * tech.vdd / (current * width)


def CalculateTransconductance(width, type, tech):
    if type == NMOS:
        return width * tech.current_gmNmos
    return width * tech.current_gmPmos
