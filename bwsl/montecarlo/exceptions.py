"""Exceptions raised by the Monte Carlo bookkeeping."""


class MonteCarloError(Exception):
    """Base class for Monte Carlo bookkeeping errors."""


class MoveInvalidSequence(MonteCarloError):
    """Proposals and resolutions (accept/reject/impossible) did not alternate."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"{name} move: invalid sequence of proposals, acceptances or rejections")


class InvalidProbability(MonteCarloError):
    """A move was resolved with a probability outside [0, 1]."""

    def __init__(self, prob: float):
        self.prob = prob
        super().__init__(f"{prob} is not a valid probability")
