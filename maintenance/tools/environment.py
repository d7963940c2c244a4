"""Environmental impact tools.

Reports the energy ledger and the emissions it avoided.
"""

from models.responses import EnvironmentalReportResponse
from session import get_monitor


def get_environmental_report() -> dict:
    """Report cumulative solar energy, CO2 avoided and tree equivalents.

    Returns:
        EnvironmentalReportResponse with ledger totals since the ledger started
    """
    report = get_monitor().ledger.report()

    return EnvironmentalReportResponse(
        ledgerStart=report.started_at.isoformat(),
        totalEnergyKwh=round(report.total_kwh, 4),
        co2SavingsKg=round(report.co2_savings_kg, 4),
        treeEquivalents=round(report.tree_equivalents, 4),
        summary=(
            f"Produced {report.total_kwh:.1f} kWh, avoiding {report.co2_savings_kg:.1f} kg of CO2 "
            f"(equivalent to planting {report.tree_equivalents:.1f} trees)"
        ),
    ).model_dump()
