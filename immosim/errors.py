class SimulationInputError(ValueError):
    """Raised when parameters cannot produce a projection."""


class UnknownRegimeError(SimulationInputError):
    def __init__(self, regime):
        super().__init__(f"Unsupported tax regime: {regime!r}")
        self.regime = regime
