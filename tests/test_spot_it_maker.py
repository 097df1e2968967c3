import csv
import json
import os

from deck_generator.generator import generate
from spot_it_maker import main, save_card_list_to_csv


def test_save_card_list_to_csv(tmp_path):
    deck = generate(2)
    save_card_list_to_csv(str(tmp_path), deck)

    pairs = (tmp_path / "pairs.csv").read_text().splitlines()
    assert len(pairs) == 7
    assert pairs[0] == "0,1,4"

    with open(tmp_path / "symbols.csv", encoding="utf_8_sig") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["ID", "シンボル"]
    assert rows[1] == ["0", "Apple"]
    assert len(rows) == 1 + 7

    with open(tmp_path / "card_names.csv", encoding="utf_8_sig") as f:
        names = list(csv.reader(f))
    assert names[0] == ["Apple", "Apricot", "Bilberry"]


def test_main_writes_outputs(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    main()

    output_dir = tmp_path / "output"
    with open(output_dir / "parameters.json", encoding="utf_8") as f:
        params = json.load(f)
    assert params["order"] == 7
    assert params["n_symbols_per_card"] == 8
    for name in ["pairs.csv", "symbols.csv", "card_names.csv"]:
        assert os.path.isfile(output_dir / name)
    assert len((output_dir / "pairs.csv").read_text().splitlines()) == 57
