"""カードに描画するシンボルの一覧

シンボルは文字列で表現し、値が同じであれば同じシンボルとみなす。
シンボル一覧 (アルファベット) は固定順序の有限集合で、デッキ構築時は先頭から順に使用する。
"""

from typing import Final, Iterable, Iterator

Symbol = str

# デフォルトのシンボル (93種類)
# 位数 n のデッキには n * n + n + 1 個のシンボルが必要なため、ここでは n = 7 (57個) まで構築できる
FRUIT_SYMBOLS: Final[tuple[Symbol, ...]] = (
    "Apple",
    "Apricot",
    "Avocado",
    "Banana",
    "Bilberry",
    "Blackberry",
    "Blackcurrant",
    "Blueberry",
    "Boysenberry",
    "Currant",
    "Cherry",
    "Cherimoya",
    "ChicoFruit",
    "Cloudberry",
    "Coconut",
    "Cranberry",
    "Cucumber",
    "CustardApple",
    "Damson",
    "Date",
    "Dragonfruit",
    "Durian",
    "Elderberry",
    "Feijoa",
    "Fig",
    "GojiBerry",
    "Gooseberry",
    "Grape",
    "Raisin",
    "Grapefruit",
    "Guava",
    "Honeyberry",
    "Huckleberry",
    "Jabuticaba",
    "Jackfruit",
    "Jambul",
    "Jujube",
    "JuniperBerry",
    "Kiwano",
    "Kiwifruit",
    "Kumquat",
    "Lemon",
    "Lime",
    "Loquat",
    "Longan",
    "Lychee",
    "Mango",
    "Mangosteen",
    "Marionberry",
    "Melon",
    "Cantaloupe",
    "Honeydew",
    "Watermelon",
    "MiracleFruit",
    "Mulberry",
    "Nectarine",
    "Nance",
    "Olive",
    "Orange",
    "BloodOrange",
    "Clementine",
    "Mandarine",
    "Tangerine",
    "Papaya",
    "Passionfruit",
    "Peach",
    "Pear",
    "Persimmon",
    "Physalis",
    "Plantain",
    "Plum",
    "Prune",
    "Pineapple",
    "Plumcot",
    "Pomegranate",
    "Pomelo",
    "PurpleMangosteen",
    "Quince",
    "Raspberry",
    "Salmonberry",
    "Rambutan",
    "Redcurrant",
    "SalalBerry",
    "Salak",
    "Satsuma",
    "Soursop",
    "StarFruit",
    "SolanumQuitoense",
    "Strawberry",
    "Tamarillo",
    "Tamarind",
    "UgliFruit",
    "Yuzu",
)


class SymbolAlphabet:
    """固定順序のシンボル一覧

    - i番目のシンボルの取得 (alphabet[i]) と、固定順序での列挙のみを提供する
    - 重複するシンボルは許容しない
    """

    def __init__(self, symbols: Iterable[Symbol]):
        self._symbols: tuple[Symbol, ...] = tuple(symbols)
        if len(self._symbols) == 0:
            raise ValueError("シンボルが1つも指定されていない")
        if len(set(self._symbols)) != len(self._symbols):
            dups = sorted({s for s in self._symbols if self._symbols.count(s) > 1})
            raise ValueError(f"シンボル {dups} が重複している")
        self._index: dict[Symbol, int] = {s: i for i, s in enumerate(self._symbols)}

    def __len__(self) -> int:
        return len(self._symbols)

    def __getitem__(self, i: int) -> Symbol:
        return self._symbols[i]

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

    def __repr__(self) -> str:
        return f"SymbolAlphabet(n_symbols={len(self)})"

    def index(self, symbol: Symbol) -> int:
        """シンボルの通し番号 (シンボルID) を返す"""
        try:
            return self._index[symbol]
        except KeyError:
            raise ValueError(f"シンボル '{symbol}' はアルファベットに存在しない") from None

    def take(self, count: int) -> list[Symbol]:
        """先頭から count 個のシンボルを返す

        Args:
            count (int): 取得するシンボル数

        Raises:
            ValueError: シンボル数が不足している

        Returns:
            list[Symbol]: 先頭から順に並んだシンボル
        """
        if count < 0 or count > len(self._symbols):
            raise ValueError(f"{count}個のシンボルを取得できない (全シンボル数: {len(self._symbols)})")
        return list(self._symbols[:count])


DEFAULT_ALPHABET: Final[SymbolAlphabet] = SymbolAlphabet(FRUIT_SYMBOLS)
