import logging

from constant import *

logger = logging.getLogger(__name__)

# Per-node device records. Currents are per unit width (A/m, i.e. uA/um),
# transconductance in S/m, capacitances per unit width (F/m) or area (F/m^2).
# Values are the 300 K numbers; Technology.Initialize expands them over 300-400 K.
_TECH_TABLE = {
    # node: {roadmap: (vdd, vth, phyGateLength, capIdealGate, capFringe,
    #                  capJunction, capSidewall, IonN, IonP, IoffN, IoffP, gmN, gmP)}
    130: {DeviceRoadmap.HP:   (1.3, 0.30, 7.0e-8, 1.2e-9, 2.3e-10, 1.6e-3, 4.0e-10, 1010.0, 460.0, 2.0e-2, 1.0e-2, 1.20e3, 0.55e3),
          DeviceRoadmap.LSTP: (1.3, 0.55, 7.5e-8, 1.1e-9, 2.3e-10, 1.6e-3, 4.0e-10, 440.0, 200.0, 1.0e-5, 6.0e-6, 0.70e3, 0.32e3)},
    90:  {DeviceRoadmap.HP:   (1.2, 0.28, 3.7e-8, 8.7e-10, 2.1e-10, 1.4e-3, 3.5e-10, 1080.0, 500.0, 5.0e-2, 2.5e-2, 1.35e3, 0.62e3),
          DeviceRoadmap.LSTP: (1.2, 0.50, 6.5e-8, 1.0e-9, 2.1e-10, 1.4e-3, 3.5e-10, 470.0, 215.0, 1.5e-5, 8.0e-6, 0.75e3, 0.35e3)},
    65:  {DeviceRoadmap.HP:   (1.1, 0.26, 2.5e-8, 7.2e-10, 1.9e-10, 1.2e-3, 3.0e-10, 1180.0, 560.0, 1.0e-1, 5.0e-2, 1.50e3, 0.70e3),
          DeviceRoadmap.LSTP: (1.2, 0.48, 4.5e-8, 8.8e-10, 1.9e-10, 1.2e-3, 3.0e-10, 520.0, 235.0, 2.0e-5, 1.0e-5, 0.82e3, 0.38e3)},
    45:  {DeviceRoadmap.HP:   (1.0, 0.24, 1.8e-8, 6.8e-10, 1.8e-10, 1.0e-3, 2.8e-10, 1250.0, 600.0, 1.5e-1, 7.5e-2, 1.65e3, 0.78e3),
          DeviceRoadmap.LSTP: (1.1, 0.45, 2.8e-8, 6.9e-10, 1.8e-10, 1.0e-3, 2.8e-10, 560.0, 260.0, 3.0e-5, 1.5e-5, 0.90e3, 0.42e3)},
    32:  {DeviceRoadmap.HP:   (0.9, 0.22, 1.3e-8, 6.4e-10, 1.7e-10, 1.0e-3, 2.5e-10, 1320.0, 640.0, 2.0e-1, 1.0e-1, 1.80e3, 0.85e3),
          DeviceRoadmap.LSTP: (1.0, 0.42, 2.0e-8, 6.2e-10, 1.7e-10, 1.0e-3, 2.5e-10, 600.0, 280.0, 4.0e-5, 2.0e-5, 0.98e3, 0.46e3)},
    22:  {DeviceRoadmap.HP:   (0.85, 0.20, 9.0e-9, 5.9e-10, 1.6e-10, 1.0e-3, 2.4e-10, 1400.0, 690.0, 2.5e-1, 1.3e-1, 1.95e3, 0.93e3),
          DeviceRoadmap.LSTP: (0.9, 0.40, 1.4e-8, 5.6e-10, 1.6e-10, 1.0e-3, 2.4e-10, 640.0, 300.0, 5.0e-5, 2.5e-5, 1.05e3, 0.50e3)},
    14:  {DeviceRoadmap.HP:   (0.8, 0.18, 6.0e-9, 5.2e-10, 1.5e-10, 1.0e-3, 2.2e-10, 1480.0, 760.0, 3.0e-1, 1.5e-1, 2.10e3, 1.02e3),
          DeviceRoadmap.LSTP: (0.8, 0.38, 1.0e-8, 5.0e-10, 1.5e-10, 1.0e-3, 2.2e-10, 690.0, 330.0, 6.0e-5, 3.0e-5, 1.12e3, 0.54e3)},
}

# on-current loss per kelvin above 300 K
ION_DERATE_PER_K = 1.2e-3
# off-current doubles every this many kelvin
IOFF_DOUBLING_K = 25.0


class Technology:
    """CMOS device record for one technology node and roadmap.

    currentOnNmos/currentOffNmos (and the PMOS ones) are lists indexed by
    (temperature - 300) for 300..400 K, the same way the physics formulas
    look them up.
    """

    def __init__(self):
        self.initialized = False
        self.featureSizeInNano = 0
        self.featureSize = 0
        self.deviceRoadmap = None

    def Initialize(self, featureSizeInNano, deviceRoadmap):
        if self.initialized:
            logger.warning("[Technology] Warning: Already initialized!")

        try:
            deviceRoadmap = DeviceRoadmap(int(deviceRoadmap))
        except ValueError:
            raise ValueError(f"Unknown device roadmap: {deviceRoadmap}") from None

        node = int(featureSizeInNano)
        if node not in _TECH_TABLE:
            raise ValueError(f"Unsupported technology node: {featureSizeInNano}nm "
                             f"(supported: {sorted(_TECH_TABLE, reverse=True)})")

        (vdd, vth, phyGateLength, capIdealGate, capFringe, capJunction, capSidewall,
         IonN, IonP, IoffN, IoffP, gmN, gmP) = _TECH_TABLE[node][deviceRoadmap]

        self.featureSizeInNano = node
        self.featureSize = node * 1e-9
        self.deviceRoadmap = deviceRoadmap

        self.vdd = vdd
        self.vth = vth
        self.phyGateLength = phyGateLength
        self.pnSizeRatio = 2.0 if deviceRoadmap == DeviceRoadmap.HP else 2.2
        self.effectiveResistanceMultiplier = 1.54

        self.capIdealGate = capIdealGate
        self.capFringe = capFringe
        self.capOverlap = self.capIdealGate * 0.2
        self.capPolywire = 0.0
        self.capJunction = capJunction
        self.capSidewall = capSidewall
        self.capDrainToChannel = capFringe

        self.current_gmNmos = gmN
        self.current_gmPmos = gmP

        self.currentOnNmos = [IonN * (1 - ION_DERATE_PER_K * t) for t in range(101)]
        self.currentOnPmos = [IonP * (1 - ION_DERATE_PER_K * t) for t in range(101)]
        self.currentOffNmos = [IoffN * 2 ** (t / IOFF_DOUBLING_K) for t in range(101)]
        self.currentOffPmos = [IoffP * 2 ** (t / IOFF_DOUBLING_K) for t in range(101)]

        self.initialized = True
        logger.debug("Technology initialized: %dnm %s, vdd=%.2fV",
                     node, deviceRoadmap.name, self.vdd)
        return self

    def PrintProperty(self):
        print(f"Technology: {self.featureSizeInNano}nm {self.deviceRoadmap.name}")
        print(f"  vdd = {self.vdd}V, vth = {self.vth}V, pnSizeRatio = {self.pnSizeRatio}")
        print(f"  Ion(N/P) @300K = {self.currentOnNmos[0]:.1f}/{self.currentOnPmos[0]:.1f} uA/um")
        print(f"  Ioff(N/P) @300K = {self.currentOffNmos[0]*1e3:.3g}/{self.currentOffPmos[0]*1e3:.3g} nA/um")


if __name__ == "__main__":
    tech = Technology()
    tech.Initialize(32, DeviceRoadmap.LSTP)
    tech.PrintProperty()
