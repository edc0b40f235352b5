from .errors import (
    SeedingError,
    SeedIndexError,
    ScalarTypeMismatch,
)
from .dual import (
    Dual,
    ScalarType,
    primal,
    derivative,
)
from .elements import (
    SingularityElement,
    SourcePoint,
    SourceBlob,
    position,
    flux,
    circulation,
    radius,
    positions,
    fluxes,
)
from .seeding import (
    DegreeOfFreedom,
    degrees_of_freedom,
    dualize,
    seed_position,
    seed_strength,
    seed,
    seeded_variants,
)
from .api import (
    JacobianConfig,
    JacobianResult,
    jacobian,
)
from .viz import (
    ElementPlotConfig,
    plot_elements,
)
from .plotly_viz import (
    PlotlyElementsConfig,
    plot_elements_interactive,
)

__all__ = [
    "SeedingError", "SeedIndexError", "ScalarTypeMismatch",
    "Dual", "ScalarType", "primal", "derivative",
    "SingularityElement", "SourcePoint", "SourceBlob",
    "position", "flux", "circulation", "radius", "positions", "fluxes",
    "DegreeOfFreedom", "degrees_of_freedom",
    "dualize", "seed_position", "seed_strength", "seed", "seeded_variants",
    "JacobianConfig", "JacobianResult", "jacobian",
    "ElementPlotConfig", "plot_elements",
    "PlotlyElementsConfig", "plot_elements_interactive",
]
