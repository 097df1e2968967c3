import csv
import json
import os
import random

import numpy as np

from deck_generator.cards import SpotItDeck
from deck_generator.generator import generate
from deck_generator.symbols import DEFAULT_ALPHABET, SymbolAlphabet


def save_card_list_to_csv(output_dir: str, deck: SpotItDeck, *, alphabet: SymbolAlphabet = DEFAULT_ALPHABET):
    """カード毎のシンボルID, シンボル一覧, カード毎のシンボル名, のcsvをそれぞれ出力

    Args:
        output_dir: 出力先ディレクトリ
        deck: 出力するデッキ
        alphabet: デッキ構築に使用したシンボル一覧. シンボルIDはこの並び順で振る
    """
    pairs = deck.to_symbol_ids(alphabet)

    # 各カードのIDのcsv
    _path = os.path.join(output_dir, "pairs.csv")
    try:
        with open(_path, "w") as f:
            f.write("\n".join([",".join([str(x) for x in row]) for row in pairs]))
    except Exception as e:
        raise type(e)(f"{_path} の保存に失敗") from e

    # 使用されたシンボル一覧のcsv
    used_ids = sorted({i for row in pairs for i in row})
    _path = os.path.join(output_dir, "symbols.csv")
    try:
        with open(_path, "w", encoding="utf_8_sig") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(["ID", "シンボル"])
            for i in used_ids:
                writer.writerow([str(i), alphabet[i]])
    except Exception as e:
        raise type(e)(f"{_path} の保存に失敗") from e

    # 各カードのシンボル名のcsv
    _path = os.path.join(output_dir, "card_names.csv")
    rows = [[alphabet[i] for i in row] for row in pairs]
    try:
        with open(_path, "w", encoding="utf_8_sig") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerows(rows)
    except Exception as e:
        raise type(e)(f"{_path} の保存に失敗") from e

    return


def main() -> None:
    # ============
    # パラメータ設定
    # ============
    # ファイル名
    output_dir = "output"  # 出力ディレクトリ
    params_name = "parameters.json"  # 実行時のパラメータ値を出力するjson名
    # デッキの設定
    order: int = 7  # 有限射影平面の位数 (1 あるいは素数), カード1枚当たりのシンボル数は order + 1
    # その他
    shuffle: bool = True  # True: デッキをシャッフルする
    seed: int | None = 0  # 乱数種

    # ======================
    # 出力フォルダ作成
    # ======================
    os.makedirs(output_dir, exist_ok=True)

    # ======================
    # パラメータをjsonで出力
    # ======================
    params = {
        "order": order,
        "n_symbols_per_card": order + 1,
        "shuffle": shuffle,
        "seed": seed,
    }
    with open(output_dir + os.sep + params_name, mode="w", encoding="utf_8") as f:
        json.dump(params, f, indent=2, ensure_ascii=False)

    # ========
    # 前処理
    # ========
    # 乱数初期化
    random.seed(seed)
    np.random.seed(seed)

    # ========
    # メイン
    # ========
    deck = generate(order, alphabet=DEFAULT_ALPHABET)
    if shuffle:
        deck.shuffle()

    save_card_list_to_csv(output_dir, deck, alphabet=DEFAULT_ALPHABET)

    print(f"カード数: {len(deck)}, カード1枚当たりのシンボル数: {order + 1}")
    for i, card in enumerate(deck):
        print(f"{i}: {', '.join(card.symbols())}")

    return


if __name__ == "__main__":
    main()
