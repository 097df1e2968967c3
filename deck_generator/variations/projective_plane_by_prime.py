"""位数 n (素数) の有限射影平面からデッキを構築

位数 n のアフィン平面は n * n 個の点 (x, y) (0 <= x, y < n) を持ち、
直線は傾き毎に n + 1 個の平行類に分かれ、各平行類は n 本の平行な直線からなる。

- 傾き: 無限大 (x = c), 及び 0, 1/1, 1/2, ..., 1/(n-1) (y = s * x + c)
- 各直線は n 個の点を持つ
- 異なる平行類の2直線は丁度1点で交わる (n が素数であれば mod n の計算が体になるため)
- 同じ平行類の2直線は交わらない

平行類毎に「無限遠点」を1つ追加し、その平行類の全直線に含めると、同じ平行類の直線同士も1点を共有する。
さらに全ての無限遠点を含む「無限遠直線」を1本追加すると有限射影平面になり、
    点の数 = 直線の数 = n * n + n + 1
    各直線の点の数 = 各点を通る直線の数 = n + 1
    任意の2直線は丁度1点で交わる
となる。点をシンボル、直線をカードとみなしたものがデッキとなる。

参考:
    * カードゲーム ドブル(Dobble)の数理, https://amori.hatenablog.com/entry/2016/10/06/015906
    * The Dobble Algorithm, https://mickydore.medium.com/the-dobble-algorithm-b9c9018afc52
"""

import sys
from dataclasses import dataclass
from fractions import Fraction
from itertools import combinations
from typing import Final, Iterator

import galois
import numpy as np
from tqdm import tqdm

from deck_generator.cards import SpotItCard, SpotItDeck
from deck_generator.symbols import DEFAULT_ALPHABET, Symbol, SymbolAlphabet

# cx_Freezeでbase=Win32GUIでビルドされた場合、標準出力が空になりtqdmが使えないため判定
disable_tqdm: Final[bool] = (not sys.stdout) or (not sys.stderr)

# これより大きい値は試し割りだと時間がかかりすぎるため galois.is_prime で判定する
TRIAL_DIVISION_LIMIT: Final[int] = 1 << 32


class GenerationError(ValueError):
    # デッキ構築に関するエラー
    pass


class OrderNotPrimeError(GenerationError):
    # 位数が素数ではない (位数1は例外として許容)
    pass


class AlphabetTooSmallError(GenerationError):
    # 位数に対してシンボル数が足りない
    pass


def is_prime(n: int) -> bool:
    """素数判定

    Args:
        n (int): 入力

    Returns:
        bool: 素数ならTrue, 非素数ならFalse
    """
    # 1以下の値は素数ではない
    if n <= 1:
        return False

    # 2と3は素数
    if n <= 3:
        return True

    # 2と3の倍数で割り切れる場合は素数ではない
    if n % 2 == 0 or n % 3 == 0:
        return False

    if n > TRIAL_DIVISION_LIMIT:
        return bool(galois.is_prime(n))

    # 5から始めて、6k ± 1 (kは整数) の形を持つ数を調べる
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6

    return True


def is_valid_order(n: int) -> bool:
    """デッキを構築可能な位数か

    条件: n が 1, あるいは素数であること
    (素数の累乗でも有限射影平面は存在するが、ここでは対象外)
    """
    return n == 1 or is_prime(n)


def n_cards_for_order(n: int) -> int:
    """位数 n のデッキのカード数 (= 全シンボル数)"""
    return n * n + n + 1


def n_symbols_per_card_for_order(n: int) -> int:
    """位数 n のデッキのカード1枚当たりのシンボル数"""
    return n + 1


def validate_order(n: object) -> int:
    """位数のチェック

    Raises:
        OrderNotPrimeError: 整数でない, あるいは 1 でも素数でもない

    Returns:
        int: 位数
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise OrderNotPrimeError(f"位数 ({n!r}) が整数ではない")
    n = int(n)
    if not is_valid_order(n):
        raise OrderNotPrimeError(f"位数 ({n}) が「1 あるいは素数」ではない")
    return n


@dataclass(frozen=True)
class ProjectivePlane:
    """シンボルを割り当てた有限射影平面

    Attributes:
        order: 位数 n
        grid: (n, n) の配列. grid[x, y] が点 (x, y) のシンボル
        infinity: 無限遠点のシンボル. infinity[i] が i 番目の傾きの平行類に対応する (n + 1 個)
    """

    order: int
    grid: np.ndarray
    infinity: tuple[Symbol, ...]


def build_plane(n: int, alphabet: SymbolAlphabet = DEFAULT_ALPHABET) -> ProjectivePlane:
    """アルファベットの先頭からシンボルを割り当てた平面を構築

    先頭の n * n 個を行優先で grid に、続く n + 1 個を無限遠点に割り当てる

    Raises:
        ValueError: n が1未満
        AlphabetTooSmallError: アルファベットのシンボル数が n * n + n + 1 未満
    """
    if n < 1:
        raise ValueError(f"位数 ({n}) は1以上でなければならない")

    n_required = n_cards_for_order(n)
    if len(alphabet) < n_required:
        raise AlphabetTooSmallError(
            f"位数 {n} のデッキには {n_required} 個のシンボルが必要だが、{len(alphabet)} 個しかない"
        )

    symbols = alphabet.take(n_required)
    grid = np.empty((n, n), dtype=object)
    for i, symbol in enumerate(symbols[: n * n]):
        grid[i // n, i % n] = symbol
    infinity = tuple(symbols[n * n :])

    assert len(infinity) == n + 1
    grid.flags.writeable = False

    return ProjectivePlane(order=n, grid=grid, infinity=infinity)


@dataclass(frozen=True)
class Slope:
    """直線の傾き

    有限の傾きは既約分数 (Fraction) で保持し, 無限大 (垂直方向) は value=None で表す
    """

    value: Fraction | None

    @classmethod
    def infinite(cls) -> "Slope":
        return cls(None)

    @classmethod
    def finite(cls, numerator: int, denominator: int = 1) -> "Slope":
        if denominator == 0:
            raise ValueError("傾きの分母が0 (無限大は Slope.infinite() を使う)")
        return cls(Fraction(numerator, denominator))

    @property
    def is_infinite(self) -> bool:
        return self.value is None

    def __str__(self) -> str:
        if self.value is None:
            return "inf"
        return f"{self.value.numerator}/{self.value.denominator}"


def calc_slopes(n: int) -> list[Slope]:
    """位数 n のアフィン平面の傾き (平行類) を列挙

    [無限大, 0, 1/1, 1/2, ..., 1/(n-1)] の n + 1 個.
    mod n で 1/k (1 <= k < n) は 0 以外の元をそれぞれ1回ずつ取るため、全ての平行類を1回ずつ網羅する

    NOTE: n = 1 の場合は [無限大, 0] を返すが、直線の構築には使わない (synthesize_lines 参照)
    """
    if n < 1:
        raise ValueError(f"位数 ({n}) は1以上でなければならない")

    slopes = [Slope.infinite(), Slope.finite(0)]
    slopes += [Slope.finite(1, k) for k in range(1, n)]

    assert len(slopes) == n + 1
    return slopes


def _line_points(n: int, slope: Slope, offset: int, gf: type[galois.FieldArray]) -> list[tuple[int, int]]:
    """傾き slope, 切片 offset の直線上の点 (x, y) を列挙"""
    if slope.is_infinite:
        # x = offset
        return [(offset, y) for y in range(n)]

    assert slope.value is not None
    p = slope.value.numerator % n
    q = slope.value.denominator % n
    if q == 0:
        raise ValueError(f"傾き {slope} は mod {n} で定義できない")
    s = gf(p) / gf(q)

    # y = s * x + offset (mod n)
    return [(x, int(s * gf(x) + gf(offset))) for x in range(n)]


def synthesize_line(
    plane: ProjectivePlane,
    slope_index: int,
    slope: Slope,
    offset: int,
    *,
    gf: type[galois.FieldArray] | None = None,
) -> SpotItCard:
    """1本の直線 (1枚のカード) を構築

    Args:
        plane (ProjectivePlane): 平面
        slope_index (int): 傾きの番号. 対応する無限遠点 plane.infinity[slope_index] をカードに加える
        slope (Slope): 傾き
        offset (int): 切片 (0 <= offset < n)
        gf (type[galois.FieldArray] | None, optional): 位数 n のガロア体. Noneならここで生成する

    Returns:
        SpotItCard: n + 1 個のシンボルを持つカード
    """
    n = plane.order
    if n == 1:
        raise ValueError("位数1の平面には傾きが定義できない")
    if not (0 <= offset < n):
        raise ValueError(f"切片 ({offset}) は 0 以上 {n} 未満でなければならない")
    if not (0 <= slope_index <= n):
        raise ValueError(f"傾きの番号 ({slope_index}) は 0 以上 {n} 以下でなければならない")

    if gf is None:
        # 位数 n (素数) のガロア体. 0 以上 n 未満の整数の世界で、除算は逆元の乗算になる
        gf = galois.GF(n)
    elif gf.order != n:
        raise ValueError(f"ガロア体の位数 ({gf.order}) が平面の位数 ({n}) と一致しない")

    card = SpotItCard(plane.grid[x, y] for x, y in _line_points(n, slope, offset, gf))
    card.add(plane.infinity[slope_index])

    assert len(card) == n + 1
    return card


def synthesize_lines(plane: ProjectivePlane) -> Iterator[SpotItCard]:
    """無限遠直線以外の全直線を (傾き, 切片) の順に構築"""
    n = plane.order

    if n == 1:
        # 点が1つしかなく傾きを区別できないため、唯一の点と各無限遠点を組にする
        for symbol in plane.infinity:
            yield SpotItCard([plane.grid[0, 0], symbol])
        return

    # ガロア体はデッキ全体で1つだけ生成する
    gf = galois.GF(n)
    slopes = calc_slopes(n)
    pairs = [(i, offset) for i in range(len(slopes)) for offset in range(n)]
    for i, offset in tqdm(pairs, desc="デッキ構築", disable=disable_tqdm, leave=False):
        yield synthesize_line(plane, i, slopes[i], offset, gf=gf)


def make_spot_it_deck(n: object, alphabet: SymbolAlphabet = DEFAULT_ALPHABET) -> SpotItDeck:
    """位数 n の有限射影平面からデッキを構築

    Args:
        n (int): 位数 (1 あるいは素数)
        alphabet (SymbolAlphabet, optional): 使用するシンボル一覧. 先頭から n * n + n + 1 個を使う

    Raises:
        OrderNotPrimeError: 位数が 1 でも素数でもない
        AlphabetTooSmallError: シンボル数が足りない

    Returns:
        SpotItDeck: n * n + n + 1 枚のカード
    """
    n = validate_order(n)
    plane = build_plane(n, alphabet)

    deck = SpotItDeck(synthesize_lines(plane))
    # 最後の1枚 (無限遠直線)
    deck.push_card(SpotItCard(plane.infinity))

    n_cards = n_cards_for_order(n)
    assert len(deck) == n_cards

    if __debug__:
        for card in deck:
            # 各カードのシンボル数は n + 1 そろっている
            assert len(card) == n + 1
        for a, b in combinations(deck.cards, 2):
            # 任意のカードを2枚選んだ時、必ず共通するシンボルが1つだけ見つかる
            assert a.match_exactly_one_symbol(b)

    return deck


def get_valid_orders(*, n_symbols: int, max_order: int | None = None) -> list[int]:
    """シンボル数 n_symbols で構築可能な位数のリスト

    Args:
        n_symbols (int): 使用可能なシンボル数
        max_order (int | None, optional): 出力する位数の最大値
    """
    orders = []
    n = 1
    while n_cards_for_order(n) <= n_symbols:
        if max_order is not None and n > max_order:
            break
        if is_valid_order(n):
            orders.append(n)
        n += 1
    return orders
