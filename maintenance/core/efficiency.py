"""Panel efficiency calculation."""

from config import settings


def efficiency(
    irradiance: float,
    power_produced: float,
    nameplate_watts: float | None = None,
) -> float:
    """Ratio of measured output to nameplate output at the observed irradiance.

    A nameplate-rated panel produces ``nameplate_watts`` at 1000 W/m2, so the
    expected power scales linearly with irradiance. Values above 1.0 are
    possible under favourable conditions or sensor noise.

    Args:
        irradiance: Plane-of-array irradiance in W/m2
        power_produced: Measured output in W
        nameplate_watts: Rated output at 1000 W/m2 (defaults to settings)

    Returns:
        Efficiency ratio, or 0.0 when there is no sunlight (irradiance <= 0)
    """
    if irradiance <= 0:
        return 0.0
    if nameplate_watts is None:
        nameplate_watts = settings.nameplate_watts
    expected_power = irradiance / 1000.0 * nameplate_watts
    return power_produced / expected_power
