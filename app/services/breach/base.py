from abc import ABC, abstractmethod


class BreachProvider(ABC):

    @abstractmethod
    def range_counts(self, prefix: str) -> dict[str, int]:
        """
        k-anonymity range lookup.

        Only the 5 character fingerprint prefix is sent.
        Returns {suffix: occurrence_count} for every known hash
        sharing that prefix.

        Raises CollaboratorUnavailable when the service cannot answer.
        """
        pass
