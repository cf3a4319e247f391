from .errors import ConfigurationError

RESERVED_CHARS = '*()'


class Alphabet:
    def __init__(self, symbols: str):
        if len(symbols) == 0:
            raise ConfigurationError('alphabet must not be empty')
        for char in symbols:
            if char in RESERVED_CHARS or char.isspace():
                raise ConfigurationError(f'character {char!r} is not allowed in an alphabet')

        self.symbol_to_index_map = dict()
        for i, char in enumerate(symbols):
            if char in self.symbol_to_index_map:
                raise ConfigurationError(f'character {char!r} appears more than once in alphabet')
            self.symbol_to_index_map[char] = i
        self._symbols = symbols

    def size(self) -> int:
        return len(self._symbols)

    def contains(self, symbol: str) -> bool:
        return symbol in self.symbol_to_index_map

    def index_of(self, symbol: str) -> int:
        try:
            return self.symbol_to_index_map[symbol]
        except KeyError:
            raise ConfigurationError(f'character {symbol!r} is not in the alphabet') from None

    def symbol_at(self, index: int) -> str:
        if not 0 <= index < self.size():
            raise ConfigurationError(f'index {index} out of range 0-{self.size() - 1}')
        return self._symbols[index]

    def __len__(self):
        return self.size()

    def __contains__(self, symbol):
        return self.contains(symbol)

    def __eq__(self, other):
        return isinstance(other, Alphabet) and self._symbols == other._symbols

    def __hash__(self):
        return hash(self._symbols)

    def __str__(self):
        return self._symbols

    def __repr__(self):
        return f'Alphabet({self._symbols!r})'
