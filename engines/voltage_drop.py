import math
from typing import List, Tuple

from core.models import CircuitInput, ComparisonRow, DropStatus, SystemType, VoltageDropResult
from engines.tables import (
    AMPACITY_HINT_CU, CIRCUIT_FACTORS, CROSS_SECTIONS, DROP_STATUS_TIERS,
    EXCESSIVE_LABEL, MIN_ALLOWED_DROP_V, RESISTIVITY, round_up_to_list,
)

class VoltageDropLogic:
    @staticmethod
    def circuit_factor(system: SystemType) -> float:
        return CIRCUIT_FACTORS[system]

    @staticmethod
    def drop_volts_for_section(circuit: CircuitInput, section_mm2: float) -> float:
        # R per metre = rho / S; length is one-way, the factor accounts for the return path
        if section_mm2 == 0:
            return math.inf
        rho = RESISTIVITY[circuit.material]
        k = VoltageDropLogic.circuit_factor(circuit.system)
        return circuit.current_a * k * circuit.length_m * (rho / section_mm2)

    @staticmethod
    def drop_volts(circuit: CircuitInput) -> float:
        return VoltageDropLogic.drop_volts_for_section(circuit, circuit.cross_section_mm2)

    @staticmethod
    def drop_percent(drop_v: float, voltage_v: float) -> float:
        if voltage_v <= 0:
            return 0.0
        return (drop_v / voltage_v) * 100.0

    @staticmethod
    def classify(drop_pct: float) -> Tuple[DropStatus, str]:
        for limit, status, label in DROP_STATUS_TIERS:
            if drop_pct <= limit:
                return status, label
        return DropStatus.EXCESSIVE, EXCESSIVE_LABEL

    @staticmethod
    def status_label(drop_pct: float) -> str:
        return VoltageDropLogic.classify(drop_pct)[1]

    @staticmethod
    def required_section(circuit: CircuitInput) -> float:
        """Continuous cross-section (mm2) that just meets the target drop."""
        max_drop_v = (circuit.target_drop_pct / 100.0) * circuit.voltage_v
        rho = RESISTIVITY[circuit.material]
        k = VoltageDropLogic.circuit_factor(circuit.system)
        return (rho * k * circuit.current_a * circuit.length_m) / max(max_drop_v, MIN_ALLOWED_DROP_V)

    @staticmethod
    def recommend_section(circuit: CircuitInput) -> float:
        s_needed = VoltageDropLogic.required_section(circuit)
        # Round up to 2 decimals before matching against the offered sections
        s_needed = math.ceil(s_needed * 100) / 100
        return round_up_to_list(s_needed, CROSS_SECTIONS)

    @staticmethod
    def comparison_table(circuit: CircuitInput) -> List[ComparisonRow]:
        rows = []
        for section in CROSS_SECTIONS:
            d_v = VoltageDropLogic.drop_volts_for_section(circuit, section)
            rows.append(ComparisonRow(
                cross_section_mm2=section,
                drop_volts=d_v,
                drop_percent=VoltageDropLogic.drop_percent(d_v, circuit.voltage_v),
                ampacity_hint=AMPACITY_HINT_CU.get(section, "–"),
            ))
        return rows

    @staticmethod
    def evaluate(circuit: CircuitInput) -> VoltageDropResult:
        d_v = VoltageDropLogic.drop_volts(circuit)
        pct = VoltageDropLogic.drop_percent(d_v, circuit.voltage_v)
        status, label = VoltageDropLogic.classify(pct)
        return VoltageDropResult(
            drop_volts=d_v,
            drop_percent=pct,
            status=status,
            status_label=label,
            recommended_section_mm2=VoltageDropLogic.recommend_section(circuit),
            comparison=VoltageDropLogic.comparison_table(circuit),
        )
