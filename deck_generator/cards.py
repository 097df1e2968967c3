"""カード及びデッキ

- SpotItCard: シンボルの集合. 同じシンボルを追加しても変化しない
- SpotItDeck: カードを順序付きで保持する. 山札として push / pop / shuffle できる

デッキの検算には, デッキを行列で表現したものを使う.

行列: デッキ構成
行数: カード数
列数: デッキ内で使われているシンボル数
値: 0 or 1, 1の場合、そのカードがそのシンボルを有するということ

上記行列を D として、任意の2つのカードで共通するシンボルの総数が1である、ということは
    D * D^T の対角成分が n + 1 (カード当たりのシンボル数), 非対角成分が 1
である、ことが条件となる.
"""

import copy
import random
from itertools import combinations
from typing import Iterable, Iterator

import numpy as np

from deck_generator.symbols import DEFAULT_ALPHABET, Symbol, SymbolAlphabet


class SpotItCard:
    """Spot It! (ドブル) のカード

    シンボルを0個以上持つ. 比較は集合として行うため、追加した順序は問わない
    """

    def __init__(self, symbols: Iterable[Symbol] = ()):
        self._symbols: set[Symbol] = set(symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpotItCard):
            return NotImplemented
        return self._symbols == other._symbols

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(sorted(self._symbols))

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._symbols

    def __repr__(self) -> str:
        return f"SpotItCard({self.symbols()})"

    def add(self, symbol: Symbol) -> None:
        # 既に持っているシンボルなら何もしない
        self._symbols.add(symbol)

    def symbols(self) -> list[Symbol]:
        """シンボル一覧 (ソート済み)"""
        return sorted(self._symbols)

    def shared_symbols(self, card: "SpotItCard") -> set[Symbol]:
        """2枚のカードに共通するシンボル"""
        return self._symbols & card._symbols

    def match_exactly_one_symbol(self, card: "SpotItCard") -> bool:
        """2枚のカードに共通するシンボルが丁度1つならTrue

        共通するシンボルが0個 (空のカード同士を含む), あるいは2個以上ならFalse
        """
        return len(self.shared_symbols(card)) == 1


def match_exactly_one_symbol(a: SpotItCard, b: SpotItCard) -> bool:
    return a.match_exactly_one_symbol(b)


class SpotItDeck:
    """カードの山札

    デッキ構築直後は全カードのペアで共通シンボルが1つだけになっているが、
    push_card / pop_card でカードを入れ替えた場合はその限りではない (呼び出し側の責任)
    """

    def __init__(self, cards: Iterable[SpotItCard] = ()):
        self.cards: list[SpotItCard] = list(cards)

    @classmethod
    def default(cls, alphabet: SymbolAlphabet = DEFAULT_ALPHABET) -> "SpotItDeck":
        """シンボル1つだけのカードを全シンボル分並べたデッキ"""
        return cls(SpotItCard([symbol]) for symbol in alphabet)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpotItDeck):
            return NotImplemented
        return self.cards == other.cards

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[SpotItCard]:
        return iter(self.cards)

    def __getitem__(self, index: int) -> SpotItCard:
        return self.cards[index]

    def __repr__(self) -> str:
        return f"SpotItDeck(n_cards={len(self.cards)})"

    def is_empty(self) -> bool:
        return len(self.cards) == 0

    def push_card(self, card: SpotItCard) -> None:
        self.cards.append(card)

    def pop_card(self) -> SpotItCard | None:
        """末尾のカードを取り出す. 空ならNone"""
        if self.is_empty():
            return None
        return self.cards.pop()

    def pop_card_at(self, index: int) -> SpotItCard | None:
        """index番目のカードを取り出す. 範囲外 (負の値を含む) ならNone"""
        if index < 0 or index >= len(self.cards):
            return None
        return self.cards.pop(index)

    def shuffle(self, rng: random.Random | None = None) -> None:
        """カードの順序をランダムに並び替える

        Args:
            rng (random.Random | None, optional):
                乱数生成器. Noneならrandomモジュールのグローバルな乱数を使う (random.seedの影響を受ける)
        """
        if rng is None:
            random.shuffle(self.cards)
        else:
            rng.shuffle(self.cards)

    def copy(self) -> "SpotItDeck":
        # カードも複製し、片方への変更がもう片方に影響しないようにする
        return SpotItDeck(copy.deepcopy(self.cards))

    def to_symbol_ids(self, alphabet: SymbolAlphabet = DEFAULT_ALPHABET) -> list[list[int]]:
        """各カードのシンボルをシンボルIDのリストに変換"""
        return [sorted(alphabet.index(s) for s in card) for card in self.cards]


def is_spot_it_deck(deck: SpotItDeck) -> bool:
    """任意の2枚のカードで共通するシンボルが丁度1つならTrue"""
    return all(a.match_exactly_one_symbol(b) for a, b in combinations(deck.cards, 2))


def deck_to_deck_matrix(deck: SpotItDeck) -> tuple[np.ndarray, list[Symbol]]:
    """デッキを行列に変換

    Returns:
        np.ndarray: (カード数, 使用シンボル数) の0/1行列
        list[Symbol]: 各列に対応するシンボル
    """
    used_symbols = sorted({s for card in deck.cards for s in card})
    col = {s: i for i, s in enumerate(used_symbols)}

    deck_m = np.zeros((len(deck.cards), len(used_symbols)), dtype=int)
    for card_i, card in enumerate(deck.cards):
        for symbol in card:
            deck_m[card_i, col[symbol]] = 1

    return deck_m, used_symbols


def check_projective_plane_deck(deck: SpotItDeck, n: int) -> None:
    """位数 n の有限射影平面から構築したデッキになっているか検算

    条件を満たさなければAssertionError
    """
    k = n + 1  # カード当たりのシンボル数
    r = n + 1  # デッキ全体での各シンボルの出現回数 (双対性より k と同じ)

    deck_m, _ = deck_to_deck_matrix(deck)
    assert deck_m.shape == (n * n + n + 1, n * n + n + 1), f"デッキの形状 {deck_m.shape} が不正"
    assert np.all(deck_m.sum(axis=1) == k)  # 各カードが有するシンボル数は必ずkになる
    assert np.all(deck_m.sum(axis=0) == r)  # デッキ全体での各シンボルの出現回数がrであることを確認
    # 対角がk, 非対角が1になっているか確認
    product = deck_m.dot(deck_m.T)
    assert np.all(np.diag(product) == k) and np.all(product[~np.eye(product.shape[0], dtype=bool)] == 1)
