import pytest

from deck_generator.symbols import FRUIT_SYMBOLS, SymbolAlphabet


@pytest.fixture
def alphabet_85() -> SymbolAlphabet:
    """Alphabet of the first 85 fruits."""
    return SymbolAlphabet(FRUIT_SYMBOLS[:85])


@pytest.fixture
def alphabet_20() -> SymbolAlphabet:
    """Alphabet large enough for order 3 (13 symbols) but not for order 5 (31 symbols)."""
    return SymbolAlphabet(f"S{i:02d}" for i in range(20))
