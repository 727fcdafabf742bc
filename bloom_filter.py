# bloom_filter.py

import logging
import math
import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set, Tuple, Union

from bitarray import bitarray

from bloom_interface import BloomFilterInterface
from string_hasher import StringHasher
from token_splitter import split_tokens

log = logging.getLogger(__name__)

# ============================================================
# CONFIGURAZIONE
# ============================================================

DEFAULT_SIZE = 1024
DEFAULT_HASH_COUNT = 3
FILE_ENCODING = "utf-8"


# ============================================================
# PARAMETRI OTTIMALI BLOOM FILTER
# ============================================================

def optimal_parameters(expected_items: int, false_positive_rate: float) -> Tuple[int, int]:
    """
    (size, hash_count) per 'expected_items' elementi e il tasso di falsi
    positivi desiderato. È solo un suggerimento: il filtro non lo impone.
    """
    if expected_items < 0:
        raise ValueError(f"expected_items deve essere >= 0 (ricevuto {expected_items})")
    if not 0.0 < false_positive_rate < 1.0:
        raise ValueError(f"false_positive_rate deve stare in (0, 1) (ricevuto {false_positive_rate})")
    if expected_items == 0:
        return DEFAULT_SIZE, DEFAULT_HASH_COUNT
    ln2 = math.log(2.0)
    m = int(math.ceil(-expected_items * math.log(false_positive_rate) / (ln2 ** 2)))
    k = max(1, int(round((m / expected_items) * ln2)))
    return m, k


def _as_readable_file(token: Union[str, Path]) -> Optional[Path]:
    """Path se 'token' nomina un file leggibile, altrimenti None."""
    try:
        path = Path(token)
        if path.is_file() and os.access(path, os.R_OK):
            return path
    except (OSError, ValueError):
        # nomi troppo lunghi, byte nulli, ecc.: non è un file
        return None
    return None


class BloomFilter(BloomFilterInterface):
    def __init__(self, hash_count: int = DEFAULT_HASH_COUNT, size: int = DEFAULT_SIZE):
        """Costruttore del Bloom Filter: 'size' bit e 'hash_count' funzioni hash."""
        if not isinstance(size, int) or isinstance(size, bool):
            raise TypeError(f"size deve essere int, non {type(size).__name__}")
        if size < 1:
            raise ValueError(f"size deve essere >= 1 (ricevuto {size})")
        self._hasher = StringHasher(hash_count)
        self._size = size
        self.bit_array = bitarray(size)
        self.bit_array.setall(0)
        # Insieme di verifica: gli elementi aggiunti letteralmente
        self._items: Set[str] = set()

    @classmethod
    def for_capacity(cls, expected_items: int, false_positive_rate: float = 0.01) -> "BloomFilter":
        size, hash_count = optimal_parameters(expected_items, false_positive_rate)
        return cls(hash_count=hash_count, size=size)

    @classmethod
    def _from_parts(cls, hasher: StringHasher, size: int, bits: bitarray, items: Set[str]) -> "BloomFilter":
        bf = cls.__new__(cls)
        bf._hasher = hasher
        bf._size = size
        bf.bit_array = bits
        bf._items = items
        return bf

    # --- Proprietà ---

    @property
    def size(self) -> int:
        return self._size

    @property
    def hash_count(self) -> int:
        return self._hasher.hash_count

    @property
    def bit_count(self) -> int:
        """Numero di bit a 1."""
        return self.bit_array.count(1)

    @property
    def fill_ratio(self) -> float:
        return self.bit_count / self._size

    def estimated_false_positive_rate(self) -> float:
        """Probabilità stimata di falso positivo dato il riempimento attuale."""
        return self.fill_ratio ** self.hash_count

    def _hashes(self, item: str) -> List[int]:
        """Calcola 'hash_count' posizioni nel bit array per un dato elemento."""
        return self._hasher.positions(item, self._size)

    # --- Inserimento ---

    def add(self, item: str) -> None:
        """
        Se 'item' è un file leggibile ne aggiunge i token (separati da virgole
        e/o spazi), altrimenti aggiunge 'item' stesso come elemento letterale.
        """
        path = _as_readable_file(item)
        if path is None:
            self.add_item(item)
            return
        try:
            self.add_from_file(path)
        except OSError as exc:
            log.debug("Impossibile leggere %s (%s): aggiunto come elemento", path, exc)
            self.add_item(item)

    def add_item(self, item: str) -> None:
        """Aggiunge un elemento letterale, senza guardare il filesystem."""
        for index in self._hashes(item):
            self.bit_array[index] = 1
        self._items.add(item)

    def add_from_file(self, path: Union[str, Path]) -> int:
        """Aggiunge i token di un file. Ritorna il numero di token aggiunti."""
        path = Path(path)
        text = path.read_text(encoding=FILE_ENCODING, errors="ignore")
        tokens = split_tokens(text)
        for token in tokens:
            self.add_item(token)
        log.debug("Caricati %d token da %s", len(tokens), path)
        return len(tokens)

    def add_from_files(self, source: Union[str, Path, Iterable[Union[str, Path]]]) -> int:
        """
        Carica elementi nel filtro.
        Accetta:
         - Un singolo percorso (str o Path) -> Carica quel file.
         - Una lista di percorsi (Iterable) -> Carica tutti i file nella lista.
        Ritorna: Il numero totale di elementi aggiunti.
        """
        if not isinstance(source, (str, Path)) and isinstance(source, Iterable):
            return sum(self.add_from_files(single_path) for single_path in source)

        path = Path(source)
        if not path.exists():
            log.warning("File %s non trovato.", path)
            return 0
        return self.add_from_file(path)

    # --- Interrogazione ---

    def possibly_contains(self, item: str) -> bool:
        """True se l'elemento è potenzialmente presente."""
        return all(self.bit_array[index] for index in self._hashes(item))

    def certainly_contains(self, item: str) -> bool:
        """True se l'elemento è stato aggiunto (nessun falso positivo)."""
        return item in self._items

    def contains(self, items: Union[str, Sequence[str]]) -> Union[bool, List[bool]]:
        """
        Accetta sia stringa singola che lista di stringhe.
        """
        if isinstance(items, str):
            return self.possibly_contains(items)
        return [self.possibly_contains(i) for i in items]

    def verify_from_paths(self, paths: Iterable[Union[str, Path]]) -> List[bool]:
        results: List[bool] = []
        for p in paths:
            path_obj = Path(p)
            if not path_obj.exists():
                log.warning("File %s non trovato.", path_obj)
                continue
            tokens = split_tokens(path_obj.read_text(encoding=FILE_ENCODING, errors="ignore"))
            results.extend(self.possibly_contains(token) for token in tokens)
        return results

    def reset(self) -> None:
        """Resetta il filtro."""
        self.bit_array.setall(0)
        self._items.clear()

    # --- Copia e trasferimento ---

    def copy(self) -> "BloomFilter":
        return self._from_parts(self._hasher, self._size, self.bit_array.copy(), set(self._items))

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> "BloomFilter":
        return self.copy()

    def take(self) -> "BloomFilter":
        """Sposta lo stato in un nuovo filtro; questo resta vuoto."""
        moved = self._from_parts(self._hasher, self._size, self.bit_array, self._items)
        self.bit_array = bitarray(self._size)
        self.bit_array.setall(0)
        self._items = set()
        return moved

    # --- Algebra ---

    def _check_compatible(self, other: "BloomFilter") -> None:
        if self._size != other._size:
            raise ValueError(f"Dimensioni diverse: {self._size} != {other._size}")
        if self.hash_count != other.hash_count:
            raise ValueError(f"Numero di hash diverso: {self.hash_count} != {other.hash_count}")

    def __and__(self, other: object) -> "BloomFilter":
        """
        Intersezione approssimata: AND dei bit. Può riportare come presenti
        elementi che non stanno in entrambi i filtri.
        """
        if not isinstance(other, BloomFilter):
            return NotImplemented
        self._check_compatible(other)
        return self._from_parts(self._hasher, self._size, self.bit_array & other.bit_array,
                                self._items & other._items)

    def __or__(self, other: object) -> "BloomFilter":
        """Unione: OR dei bit."""
        if not isinstance(other, BloomFilter):
            return NotImplemented
        self._check_compatible(other)
        return self._from_parts(self._hasher, self._size, self.bit_array | other.bit_array,
                                self._items | other._items)

    def __iand__(self, other: object) -> "BloomFilter":
        if not isinstance(other, BloomFilter):
            return NotImplemented
        self._check_compatible(other)
        self.bit_array &= other.bit_array
        self._items &= other._items
        return self

    def __ior__(self, other: object) -> "BloomFilter":
        if not isinstance(other, BloomFilter):
            return NotImplemented
        self._check_compatible(other)
        self.bit_array |= other.bit_array
        self._items |= other._items
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BloomFilter):
            return NotImplemented
        return (self._size == other._size
                and self.hash_count == other.hash_count
                and self.bit_array == other.bit_array
                and self._items == other._items)

    __hash__ = None  # mutabile

    def __len__(self) -> int:
        """Numero di elementi letterali distinti aggiunti."""
        return len(self._items)

    def __repr__(self) -> str:
        return (f"BloomFilter(hash_count={self.hash_count}, size={self._size}, "
                f"bits_set={self.bit_count}, items={len(self._items)})")
