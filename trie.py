# trie.py

"""Prefix trie con algebra sugli insiemi di parole, visite e serializzazione testuale."""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Iterable, Iterator, TextIO

from token_splitter import split_tokens

log = logging.getLogger(__name__)

Visitor = Callable[["TrieNode"], None]


class TrieNode:
    """Singolo nodo del trie. La radice ha data = None."""

    __slots__ = ("data", "children", "is_terminal")

    def __init__(self, data: str | None = None):
        self.data = data
        self.children: dict[str, TrieNode] = {}
        self.is_terminal: bool = False

    def sorted_children(self) -> list[TrieNode]:
        """Figli in ordine crescente di carattere."""
        return [self.children[ch] for ch in sorted(self.children)]

    def __repr__(self) -> str:
        return f"TrieNode({self.data!r}, terminal={self.is_terminal}, children={len(self.children)})"


def _check_word(word: object) -> None:
    if not isinstance(word, str):
        raise TypeError(f"attesa una stringa, non {type(word).__name__}")


class Trie:
    """Dizionario esatto di parole con ricerca per prefisso."""

    def __init__(self, words: Iterable[str] = ()):
        self.root = TrieNode()
        self._word_count = 0
        self.update(words)

    # --- Operazioni di base ---

    def insert(self, word: str) -> None:
        _check_word(word)
        node = self.root
        for ch in word:
            child = node.children.get(ch)
            if child is None:
                child = node.children[ch] = TrieNode(ch)
            node = child
        if not node.is_terminal:
            node.is_terminal = True
            self._word_count += 1

    def update(self, words: Iterable[str]) -> None:
        """Inserisce le parole nell'ordine dato."""
        for word in words:
            self.insert(word)

    def search(self, word: str) -> bool:
        _check_word(word)
        node = self._walk(word)
        return node is not None and node.is_terminal

    def starts_with(self, prefix: str) -> bool:
        _check_word(prefix)
        return self._walk(prefix) is not None

    def remove(self, word: str) -> bool:
        """
        Rimuove 'word' se presente e pota i nodi rimasti senza figli e non
        terminali risalendo verso la radice. Ritorna True se la parola c'era.
        """
        _check_word(word)
        path = [self.root]
        node = self.root
        for ch in word:
            node = node.children.get(ch)
            if node is None:
                return False
            path.append(node)
        if not node.is_terminal:
            return False

        node.is_terminal = False
        self._word_count -= 1

        for idx in range(len(path) - 1, 0, -1):
            cur = path[idx]
            if cur.is_terminal or cur.children:
                break
            del path[idx - 1].children[cur.data]
        return True

    def _walk(self, s: str) -> TrieNode | None:
        node = self.root
        for ch in s:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    # --- Enumerazione ---

    def words(self, prefix: str = "") -> Iterator[str]:
        """Parole che iniziano con 'prefix', in ordine lessicografico."""
        _check_word(prefix)
        start = self._walk(prefix)
        if start is None:
            return
        stack = [(start, prefix)]
        while stack:
            node, word = stack.pop()
            if node.is_terminal:
                yield word
            for ch in sorted(node.children, reverse=True):
                stack.append((node.children[ch], word + ch))

    def __iter__(self) -> Iterator[str]:
        return self.words()

    def __len__(self) -> int:
        return self._word_count

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.search(word)

    def __call__(self, word: str) -> bool:
        return self.search(word)

    def node_count(self) -> int:
        """Numero totale di nodi, radice inclusa."""
        total = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            total += 1
            stack.extend(node.children.values())
        return total

    # --- Visite ---

    def bfs(self, visitor: Visitor) -> None:
        """Visita per livelli, radice compresa; fratelli in ordine crescente."""
        queue = deque([self.root])
        while queue:
            node = queue.popleft()
            visitor(node)
            queue.extend(node.sorted_children())

    def dfs(self, visitor: Visitor) -> None:
        """Visita in preordine, radice compresa; fratelli in ordine crescente."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            visitor(node)
            stack.extend(reversed(node.sorted_children()))

    # --- Copia e trasferimento ---

    def copy(self) -> Trie:
        clone = Trie()
        stack = [(self.root, clone.root)]
        while stack:
            src, dst = stack.pop()
            dst.is_terminal = src.is_terminal
            for ch, child in src.children.items():
                dst_child = dst.children[ch] = TrieNode(ch)
                stack.append((child, dst_child))
        clone._word_count = self._word_count
        return clone

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> Trie:
        return self.copy()

    def take(self) -> Trie:
        """Sposta l'albero in un nuovo trie; questo resta vuoto (solo radice)."""
        moved = Trie()
        moved.root, moved._word_count = self.root, self._word_count
        self.root, self._word_count = TrieNode(), 0
        return moved

    # --- Algebra ---

    def __add__(self, other: object) -> Trie:
        if not isinstance(other, Trie):
            return NotImplemented
        result = self.copy()
        result.update(other)
        return result

    def __iadd__(self, other: object) -> Trie:
        if not isinstance(other, Trie):
            return NotImplemented
        self.update(list(other))
        return self

    def __sub__(self, other: object) -> Trie:
        if not isinstance(other, Trie):
            return NotImplemented
        result = self.copy()
        result -= other
        return result

    def __isub__(self, other: object) -> Trie:
        if not isinstance(other, Trie):
            return NotImplemented
        for word in list(other):
            self.remove(word)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trie):
            return NotImplemented
        # words() è ordinato, quindi l'ordine di inserimento non conta
        return len(self) == len(other) and list(self) == list(other)

    __hash__ = None  # mutabile

    # --- Serializzazione ---

    def dump(self, stream: TextIO) -> None:
        """Scrive una parola per riga, in ordine crescente."""
        for word in self:
            stream.write(word)
            stream.write("\n")

    def dumps(self) -> str:
        return "".join(word + "\n" for word in self)

    def load(self, stream: TextIO) -> int:
        """
        Legge lo stream fino alla fine e inserisce ogni token non vuoto
        (separatori: virgole e/o spazi). Le parole già presenti restano.
        Ritorna il numero di token letti.
        """
        return self.loads(stream.read())

    def loads(self, text: str) -> int:
        tokens = split_tokens(text)
        self.update(tokens)
        log.debug("Caricati %d token nel trie (%d parole)", len(tokens), self._word_count)
        return len(tokens)

    def __repr__(self) -> str:
        return f"Trie({list(self)!r})"
