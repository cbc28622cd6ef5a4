from abc import ABC, abstractmethod
from pathlib import Path
import joblib


class BaseModel(ABC):
    """fit(features, labels) -> model, predict(model, features) -> labels, stored as one joblib blob."""

    @abstractmethod
    def fit(self, X, y):
        pass

    @abstractmethod
    def predict(self, X):
        pass

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        joblib.dump(self, path)
        return path

    @classmethod
    def load(cls, path: str | Path):
        model = joblib.load(path)
        if not isinstance(model, cls):
            raise TypeError(f"{path} holds a {type(model).__name__}, expected {cls.__name__}")
        return model
