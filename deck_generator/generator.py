from deck_generator.cards import SpotItDeck
from deck_generator.symbols import DEFAULT_ALPHABET, SymbolAlphabet
from deck_generator.variations.projective_plane_by_prime import (
    AlphabetTooSmallError,
    GenerationError,
    OrderNotPrimeError,
)
from deck_generator.variations.projective_plane_by_prime import (
    get_valid_orders as _get_valid_orders_prime,
)
from deck_generator.variations.projective_plane_by_prime import (
    make_spot_it_deck as _make_spot_it_deck_prime,
)

__all__ = [
    "AlphabetTooSmallError",
    "GenerationError",
    "OrderNotPrimeError",
    "generate",
    "get_valid_orders",
]


def get_valid_orders(*, alphabet: SymbolAlphabet = DEFAULT_ALPHABET, max_order: int | None = None) -> list[int]:
    """作成可能な位数のリストを返す

    Args:
        alphabet (SymbolAlphabet, optional):
            使用するシンボル一覧
        max_order (int | None, optional):
            出力する位数の最大値

    Returns:
        list[int]: generate() に渡せる位数 (昇順)
    """
    return _get_valid_orders_prime(n_symbols=len(alphabet), max_order=max_order)


def generate(order: int, *, alphabet: SymbolAlphabet = DEFAULT_ALPHABET) -> SpotItDeck:
    """Spot It! (ドブル) デッキ構築

    任意の2枚のカードに共通するシンボルが丁度1つになるデッキを返す.
    同じ order, alphabet であれば常に同じ順序で同じカードが並ぶ.

    Args:
        order (int):
            有限射影平面の位数 n (1 あるいは素数).
            カード1枚あたりのシンボル数は n + 1, カード数は n * n + n + 1 になる
        alphabet (SymbolAlphabet, optional):
            使用するシンボル一覧. Defaults to DEFAULT_ALPHABET.

    Raises:
        OrderNotPrimeError: order が 1 でも素数でもない (シンボル数より先に判定する)
        AlphabetTooSmallError: alphabet のシンボル数が n * n + n + 1 未満

    Returns:
        SpotItDeck: 構築したデッキ
    """
    return _make_spot_it_deck_prime(order, alphabet)
