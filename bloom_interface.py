from abc import ABC, abstractmethod


class BloomFilterInterface(ABC):
    @abstractmethod
    def add(self, item: str) -> None:
        """Aggiunge un elemento (o il contenuto di un file) al filtro."""
        pass

    @abstractmethod
    def possibly_contains(self, item: str) -> bool:
        """True se l'elemento potrebbe essere presente, False se sicuramente non lo è."""
        pass

    @abstractmethod
    def certainly_contains(self, item: str) -> bool:
        """True solo se l'elemento è stato aggiunto letteralmente."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Riporta il filtro allo stato vuoto."""
        pass

    def clear(self) -> None:
        """Alias di reset()."""
        self.reset()

    def __call__(self, item: str) -> bool:
        return self.possibly_contains(item)

    def __contains__(self, item: str) -> bool:
        return self.possibly_contains(item)
