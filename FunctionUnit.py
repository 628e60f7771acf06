import logging

from constant import *

logger = logging.getLogger(__name__)


class FunctionUnit:
    """Common state and layout helpers of every circuit block.

    Subclasses call ``_mark_initialized()`` at the end of Initialize and
    guard each Calculate* method with ``if not self._check_initialized(): return``.
    """

    def __init__(self, param=None, tech=None, gate_params=None):
        self.param = param
        self.tech = tech
        self.gate_params = gate_params

        self.height = self.width = 0
        self.area = 0
        self.usedArea = 0
        self.emptyArea = 0
        self.newHeight = self.newWidth = 0

        self.readLatency = 0
        self.readDynamicEnergy = 0
        self.leakage = 0
        self.rampInput = 1e20
        self.rampOutput = 1e20

        self.initialized = False

    @property
    def blockName(self):
        return type(self).__name__

    def _mark_initialized(self):
        if self.initialized:
            logger.warning("[%s] Warning: Already initialized!", self.blockName)
        self.initialized = True

    def _check_initialized(self) -> bool:
        if not self.initialized:
            logger.error("[%s] Error: Require initialization first!", self.blockName)
            return False
        return True

    def MagicLayout(self):
        if self.newHeight:
            self.width = self.area / self.newHeight
            self.height = self.newHeight
        elif self.newWidth:
            self.height = self.area / self.newWidth
            self.width = self.newWidth

    def OverrideLayout(self):
        if self.newHeight and self.newWidth:
            self.height = self.newHeight
            self.width = self.newWidth
        else:
            raise ValueError(f"[{self.blockName}] Need to provide both newHeight and newWidth for OverrideLayout()")
        self.area = self.height * self.width

    def ApplyLayout(self, newHeight=0, newWidth=0, option=AreaModify.NONE):
        self.newHeight, self.newWidth = newHeight, newWidth
        if option == AreaModify.MAGIC:
            self.MagicLayout()
        elif option == AreaModify.OVERRIDE:
            self.OverrideLayout()

    def _report(self, name):
        return "\n".join([
            "---------------------------------------------------------",
            name,
            f"Area = {self.height*1e6}um x {self.width*1e6}um = {self.area*1e12}um^2",
            "Timing:",
            f" - Read Latency = {self.readLatency*1e9}ns",
            "Power:",
            f" - Read Dynamic Energy = {self.readDynamicEnergy*1e12}pJ",
            f" - Leakage Power = {self.leakage*1e6}uW",
        ])

    def PrintProperty(self, name=None):
        print(self._report(name or self.blockName))

    def SaveOutput(self, name=None, filename="SynapticCOREoutput.txt"):
        with open(filename, "a") as outfile:
            outfile.write(self._report(name or self.blockName) + "\n\n\n")
