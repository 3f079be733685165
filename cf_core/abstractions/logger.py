from abc import ABC, abstractmethod

class Logger(ABC):
    @abstractmethod
    def log_scalar(self, name, value, step):
        pass

    @abstractmethod
    def log_str(self, string, name):
        pass

    @abstractmethod
    def save_config(self, config: dict):
        pass
