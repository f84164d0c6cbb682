import math

from core.models import ConductorMaterial, SystemType, DropStatus

# Conductor resistivity at ~20°C (ohm * mm2 / m)
RESISTIVITY = {
    ConductorMaterial.COPPER: 0.017241,
    ConductorMaterial.ALUMINUM: 0.028264,
}

# Standard cross-sections offered (mm2), ascending
CROSS_SECTIONS = (1.5, 2.5, 4, 6, 10, 16, 25, 35, 50)

# Circuit factor: DC and single-phase count the return conductor
CIRCUIT_FACTORS = {
    SystemType.DC: 2.0,
    SystemType.SINGLE_PHASE: 2.0,
    SystemType.THREE_PHASE: math.sqrt(3),
}

# Rough copper ampacity per section under common conditions (indicative only)
AMPACITY_HINT_CU = {
    1.5: "10–16 A",
    2.5: "16–25 A",
    4: "25–32 A",
    6: "32–40 A",
    10: "50–63 A",
    16: "63–80 A",
    25: "80–110 A",
    35: "100–140 A",
    50: "125–170 A",
}

# Upper bound (inclusive, %) -> (status, label). Anything above the last bound is excessive.
DROP_STATUS_TIERS = (
    (3.0, DropStatus.OK, "acceptable"),
    (5.0, DropStatus.WARNING, "acceptable for socket circuits"),
)
EXCESSIVE_LABEL = "excessive, recommend larger section or shorter run"

MIN_ALLOWED_DROP_V = 1e-9

def round_up_to_list(value: float, options=CROSS_SECTIONS) -> float:
    for option in options:
        if value <= option:
            return option
    return options[-1]
