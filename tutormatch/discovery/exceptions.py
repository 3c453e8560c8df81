"""Exceptions raised by the discovery service."""


class DiscoveryError(Exception):
    """Base exception for discovery failures."""

    pass


class LearnerNotFoundError(DiscoveryError):
    """The requested learner does not exist in the profile store."""

    def __init__(self, learner_id: str) -> None:
        super().__init__(f"Learner not found: {learner_id}")
        self.learner_id = learner_id
