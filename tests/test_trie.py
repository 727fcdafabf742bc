import copy
import io

import pytest

from trie import Trie, TrieNode


def _chars(trie: Trie, order: str) -> str:
    visited = []
    getattr(trie, order)(lambda node: visited.append(node.data) if node.data is not None else None)
    return "".join(visited)


class TestTrieBasics:
    def test_insert_search_starts_with(self) -> None:
        trie = Trie()
        assert not trie.search("apple")

        trie.insert("apple")

        assert trie.search("apple")
        assert not trie.search("app")
        assert trie.starts_with("app")
        assert trie.starts_with("")
        assert not trie.starts_with("banana")

    def test_every_prefix_is_a_prefix(self) -> None:
        trie = Trie(["strawberry"])
        for i in range(1, len("strawberry") + 1):
            assert trie.starts_with("strawberry"[:i])

    def test_insert_is_idempotent(self) -> None:
        trie = Trie(["apple", "apple"])
        trie.insert("apple")
        assert len(trie) == 1
        assert trie.node_count() == 6

    def test_empty_word(self) -> None:
        trie = Trie()
        assert not trie.search("")
        trie.insert("")
        assert trie.search("")
        assert trie.root.is_terminal
        assert len(trie) == 1
        assert trie.remove("")
        assert not trie.search("")
        assert trie.node_count() == 1

    def test_initial_words(self) -> None:
        trie = Trie(["apple", "banana", "cherry"])
        for word in ("apple", "banana", "cherry"):
            assert trie.search(word)
        assert not trie.search("orange")
        assert len(trie) == 3

    def test_call_contains_iter(self) -> None:
        trie = Trie(["banana", "apple", "app"])
        assert trie("apple")
        assert not trie("cherry")
        assert "banana" in trie
        assert 42 not in trie
        assert list(trie) == ["app", "apple", "banana"]
        assert list(trie.words("ap")) == ["app", "apple"]
        assert list(trie.words("x")) == []

    def test_rejects_non_strings(self) -> None:
        trie = Trie()
        with pytest.raises(TypeError):
            trie.insert(None)
        with pytest.raises(TypeError):
            trie.search(b"apple")
        with pytest.raises(TypeError):
            Trie([1, 2])

    def test_repr(self) -> None:
        assert repr(Trie(["b", "a"])) == "Trie(['a', 'b'])"


class TestRemove:
    def test_remove(self) -> None:
        trie = Trie(["apple", "banana", "bar"])

        assert trie.remove("banana")
        assert not trie.search("banana")
        assert trie.search("apple")
        assert trie.search("bar")

        trie.remove("bar")
        assert not trie.search("bar")
        assert trie.search("apple")

        assert not trie.remove("orange")
        assert trie.search("apple")

    def test_remove_prunes_branch(self) -> None:
        trie = Trie(["apple", "app"])
        trie.remove("apple")
        assert trie.search("app")
        assert not trie.starts_with("appl")
        assert trie.node_count() == 4

    def test_remove_keeps_longer_word(self) -> None:
        trie = Trie(["app", "apple"])
        trie.remove("app")
        assert not trie.search("app")
        assert trie.search("apple")
        assert trie.starts_with("app")
        assert trie.node_count() == 6

    def test_remove_everything_leaves_root(self) -> None:
        trie = Trie(["apple", "banana", "bar"])
        for word in ("apple", "banana", "bar"):
            trie.remove(word)
        assert len(trie) == 0
        assert trie.node_count() == 1
        assert trie.root.children == {}

    def test_remove_twice_and_prefix_miss(self) -> None:
        trie = Trie(["apple", "banana"])
        trie.remove("apple")
        snapshot = trie.copy()
        assert not trie.remove("apple")
        assert not trie.remove("ban")
        assert trie == snapshot
        assert trie.node_count() == snapshot.node_count()


class TestTraversal:
    def test_bfs(self) -> None:
        trie = Trie(["apple", "banana", "app"])
        assert _chars(trie, "bfs") == "abpapnlaena"

    def test_dfs(self) -> None:
        assert _chars(Trie(["app", "apple"]), "dfs") == "apple"
        assert _chars(Trie(["banana", "apple", "app"]), "dfs") == "applebanana"

    def test_root_visited_first(self) -> None:
        trie = Trie(["ab"])
        for order in ("bfs", "dfs"):
            nodes = []
            getattr(trie, order)(nodes.append)
            assert nodes[0] is trie.root
            assert len(nodes) == trie.node_count() == 3
            assert all(isinstance(n, TrieNode) for n in nodes)

    def test_order_independent_of_insertion(self) -> None:
        first = Trie(["cab", "abc", "bca"])
        second = Trie(["bca", "cab", "abc"])
        assert _chars(first, "bfs") == _chars(second, "bfs")
        assert _chars(first, "dfs") == _chars(second, "dfs") == _chars(first.copy(), "dfs")

    def test_long_word(self) -> None:
        word = "a" * 5000
        trie = Trie([word])
        count = []
        trie.dfs(count.append)
        assert len(count) == 5001
        assert trie.copy().search(word)


class TestCopyAndTake:
    def test_copy(self) -> None:
        original = Trie(["apple", "banana"])
        for clone in (original.copy(), copy.copy(original), copy.deepcopy(original)):
            assert clone.search("apple")
            assert clone.search("banana")
            assert not clone.search("orange")
            clone.insert("cherry")
            assert not original.search("cherry")
            assert clone.root is not original.root

    def test_take(self) -> None:
        source = Trie(["apple", "banana"])
        moved = source.take()
        assert moved.search("apple")
        assert moved.search("banana")
        assert len(source) == 0
        assert source.node_count() == 1
        assert not source.search("apple")


class TestAlgebra:
    def test_union(self) -> None:
        result = Trie(["apple", "banana"]) + Trie(["cherry", "apple"])
        assert set(result) == {"apple", "banana", "cherry"}

    def test_union_in_place(self) -> None:
        first = Trie(["apple", "banana"])
        first += Trie(["cherry", "apple"])
        assert set(first) == {"apple", "banana", "cherry"}
        first += first
        assert len(first) == 3

    def test_union_laws(self) -> None:
        a, b, c = Trie(["x", "xy"]), Trie(["y", "x"]), Trie(["z"])
        assert a + b == b + a
        assert (a + b) + c == a + (b + c)

    def test_difference(self) -> None:
        result = Trie(["apple", "banana", "cherry"]) - Trie(["apple", "orange"])
        assert set(result) == {"banana", "cherry"}
        assert not result.search("orange")

    def test_difference_in_place(self) -> None:
        first = Trie(["apple", "banana", "cherry"])
        first -= Trie(["apple", "orange"])
        assert not first.search("apple")
        assert first.search("banana")
        assert first.search("cherry")
        first -= first
        assert len(first) == 0

    def test_operands_unchanged(self) -> None:
        a, b = Trie(["apple"]), Trie(["apple", "kiwi"])
        _ = a + b
        _ = a - b
        assert list(a) == ["apple"]
        assert list(b) == ["apple", "kiwi"]

    def test_unsupported_operand(self) -> None:
        with pytest.raises(TypeError):
            Trie() + ["apple"]

    def test_equality(self) -> None:
        first = Trie(["apple", "banana"])
        second = Trie(["banana", "apple"])
        third = Trie(["apple", "cherry"])
        assert first == second
        assert not first != second
        assert first != third
        assert first == first
        assert Trie(["app"]) != Trie(["app", "apple"])
        assert first != ["apple", "banana"]

    def test_equality_ignores_shape(self) -> None:
        pruned = Trie(["apple", "apricot"])
        pruned.remove("apricot")
        assert pruned == Trie(["apple"])

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(Trie())


class TestSerialization:
    def test_round_trip(self) -> None:
        original = Trie(["apple", "banana"])
        stream = io.StringIO()
        original.dump(stream)

        stream.seek(0)
        restored = Trie()
        restored.load(stream)

        assert restored == original
        assert not restored.search("cherry")

    def test_dumps_format(self) -> None:
        assert Trie(["banana", "apple"]).dumps() == "apple\nbanana\n"
        assert Trie().dumps() == ""

    def test_load_merges(self) -> None:
        trie = Trie(["kiwi"])
        assert trie.load(io.StringIO("apple, banana\n\n  cherry ,")) == 3
        assert set(trie) == {"kiwi", "apple", "banana", "cherry"}

    def test_loads(self) -> None:
        trie = Trie()
        trie.loads(Trie(["x", "xy", "y"]).dumps())
        assert list(trie) == ["x", "xy", "y"]
