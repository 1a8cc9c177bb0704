import io

from unikorncore.trie import Trie


def test_added_word_is_found():
    trie = Trie()
    trie.add_word("hello")
    assert trie.check_word("hello") is True
    assert "hello" in trie


def test_prefix_is_not_a_word():
    trie = Trie()
    trie.add_word("hello")
    assert trie.check_word("hell") is False
    assert trie.check_word("helloo") is False
    assert trie.check_word("") is False


def test_prefix_word_and_longer_word_coexist():
    trie = Trie()
    trie.add_word("car")
    trie.add_word("cart")
    assert trie.check_word("car")
    assert trie.check_word("cart")
    assert not trie.check_word("ca")


def test_unicode_words():
    trie = Trie()
    trie.add_word("café")
    assert "café" in trie
    assert "cafe" not in trie


def test_add_dictionary_splits_on_whitespace():
    trie = Trie()
    trie.add_dictionary(io.StringIO("alpha beta\n  gamma\tdelta\n\nepsilon"))
    for word in ("alpha", "beta", "gamma", "delta", "epsilon"):
        assert word in trie
    assert "alpha beta" not in trie


def test_contains_rejects_non_strings():
    trie = Trie()
    trie.add_word("1")
    assert (1 in trie) is False