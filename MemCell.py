from constant import *


class MemCell:
    """Memory cell descriptor.

    Geometry is in units of feature size, resistances in ohm. The derived
    access numbers (resCellAccess, resMemCellOn/Off/Avg, capSRAMCell, ...)
    stay zero until SubArray.Initialize fills them for the chosen array.
    """

    def __init__(self, param):
        self.memCellType = MemCellType(int(param.memcelltype))
        self.accessType = AccessType(int(param.accesstype))
        self.featureSize = param.featuresize

        if self.memCellType == MemCellType.SRAM:
            self.heightInFeatureSize = param.heightInFeatureSizeSRAM
            self.widthInFeatureSize = param.widthInFeatureSizeSRAM
        elif self.accessType == AccessType.CMOS:
            self.heightInFeatureSize = param.heightInFeatureSize1T1R
            self.widthInFeatureSize = param.widthInFeatureSize1T1R
        else:
            self.heightInFeatureSize = param.heightInFeatureSizeCrossbar
            self.widthInFeatureSize = param.widthInFeatureSizeCrossbar

        # SRAM transistor widths, in feature size
        self.widthSRAMCellNMOS = param.widthSRAMCellNMOS
        self.widthSRAMCellPMOS = param.widthSRAMCellPMOS
        self.widthAccessCMOS = param.widthAccessCMOS
        self.minSenseVoltage = param.minSenseVoltage

        self.resistanceOn = param.resistanceOn
        self.resistanceOff = param.resistanceOff
        self.resistanceAvg = (param.resistanceOn + param.resistanceOff) / 2

        self.readVoltage = param.readVoltage
        self.readPulseWidth = param.readPulseWidth
        self.accessVoltage = param.accessVoltage
        self.resistanceAccess = param.resistanceAccess

        # filled by SubArray.Initialize
        self.resCellAccess = 0
        self.capCellAccess = 0
        self.capSRAMCell = 0
        self.resMemCellOn = 0
        self.resMemCellOff = 0
        self.resMemCellAvg = 0

    @property
    def isSRAM(self) -> bool:
        return self.memCellType == MemCellType.SRAM

    @property
    def is1T1R(self) -> bool:
        return not self.isSRAM and self.accessType == AccessType.CMOS
