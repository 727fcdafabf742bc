# string_hasher.py

import mmh3
from typing import List, Union


class StringHasher:
    """
    Famiglia di 'hash_count' funzioni hash indipendenti.
    La funzione i-esima è MurmurHash3 (32 bit) con seed = i, quindi
    deterministica tra processi diversi.
    """

    def __init__(self, hash_count: int = 3):
        if not isinstance(hash_count, int) or isinstance(hash_count, bool):
            raise TypeError(f"hash_count deve essere int, non {type(hash_count).__name__}")
        if hash_count < 1:
            raise ValueError(f"hash_count deve essere >= 1 (ricevuto {hash_count})")
        self.hash_count = hash_count

    def hash(self, item: Union[str, bytes], index: int) -> int:
        """Valore della funzione hash 'index' su 'item'."""
        if not 0 <= index < self.hash_count:
            raise IndexError(f"indice hash {index} fuori da 0..{self.hash_count - 1}")
        return mmh3.hash(item, index)

    def positions(self, item: Union[str, bytes], size: int) -> List[int]:
        """Calcola 'hash_count' posizioni in un bit array lungo 'size'."""
        if size < 1:
            raise ValueError(f"size deve essere >= 1 (ricevuto {size})")
        return [mmh3.hash(item, seed) % size for seed in range(self.hash_count)]

    def __len__(self) -> int:
        return self.hash_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StringHasher):
            return NotImplemented
        return self.hash_count == other.hash_count

    def __hash__(self) -> int:
        return hash((StringHasher, self.hash_count))

    def __repr__(self) -> str:
        return f"StringHasher(hash_count={self.hash_count})"
