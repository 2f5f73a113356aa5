"""Exceptions and warnings raised by the fan chart engine."""


class FanChartError(Exception):
    """Base class for fan chart failures."""


class RootNotFoundError(FanChartError, LookupError):
    """The requested root id is absent from the person index or hidden."""

    def __init__(self, root_id):
        super().__init__(f"Root person {root_id!r} not found or hidden")
        self.root_id = root_id


class ConfigurationError(FanChartError):
    """The engine was constructed without its person or parent link index."""


class ChartNotBuiltError(FanChartError):
    """The chart has no root yet, so there is nothing to project."""


class LabelOverflowWarning(UserWarning):
    """A wedge label was truncated to fit its generation's budget."""

    def __init__(self, person_id, generation: int, source: str, limit: int):
        super().__init__(
            f"Label for {person_id!r} at generation {generation} truncated "
            f"from {len(source)} to {limit} characters"
        )
        self.person_id = person_id
        self.generation = generation
        self.source = source
        self.limit = limit
