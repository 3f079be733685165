from abc import ABC, abstractmethod

class LossFactory(ABC):
    @abstractmethod
    def create_loss(self, kind):
        """
        Return a Loss instance (callable) for the given kind.
        """
        pass
