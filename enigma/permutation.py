import numpy as np

from .alphabet import Alphabet
from .errors import ConfigurationError


def parse_cycles(cycles: str) -> list:
    """
    split a cycle notation string like '(ABC) (DE)' into its groups ['ABC', 'DE'].
    whitespace is ignored everywhere, every symbol has to sit inside a pair of parentheses
    """
    groups = []
    current = None
    for char in cycles:
        if char.isspace():
            continue
        if char == '(':
            if current is not None:
                raise ConfigurationError(f'nested parenthesis in cycles {cycles!r}')
            current = ''
        elif char == ')':
            if current is None:
                raise ConfigurationError(f'unmatched ")" in cycles {cycles!r}')
            groups.append(current)
            current = None
        elif current is None:
            raise ConfigurationError(f'character {char!r} outside of a cycle in {cycles!r}')
        else:
            current += char
    if current is not None:
        raise ConfigurationError(f'unclosed "(" in cycles {cycles!r}')
    return groups


class Permutation:
    def __init__(self, cycles: str, alphabet: Alphabet):
        self.alphabet = alphabet
        n_positions = alphabet.size()

        # unregistered positions keep the identity
        self._forward = np.arange(n_positions)
        self._backward = np.arange(n_positions)
        self._registered = np.zeros(n_positions, dtype=bool)

        for cycle in parse_cycles(cycles):
            self._add_cycle(cycle)

    def _add_cycle(self, cycle: str):
        indices = [self.alphabet.index_of(char) for char in cycle]
        for idx, char in zip(indices, cycle):
            if self._registered[idx]:
                raise ConfigurationError(f'character {char!r} appears in more than one cycle position')
            self._registered[idx] = True
        # each symbol goes to its right neighbour, the last one back to the first
        for curr, nxt in zip(indices, indices[1:] + indices[:1]):
            self._forward[curr] = nxt
            self._backward[nxt] = curr

    def size(self) -> int:
        return self.alphabet.size()

    def wrap(self, p: int) -> int:
        return p % self.size()

    def permute(self, p: int) -> int:
        return int(self._forward[self.wrap(p)])

    def invert(self, c: int) -> int:
        return int(self._backward[self.wrap(c)])

    def permute_symbol(self, symbol: str) -> str:
        return self.alphabet.symbol_at(self.permute(self.alphabet.index_of(symbol)))

    def invert_symbol(self, symbol: str) -> str:
        return self.alphabet.symbol_at(self.invert(self.alphabet.index_of(symbol)))

    def derangement(self) -> bool:
        """
        True if no symbol that was explicitly put into a cycle maps to itself.
        symbols that never appear in a cycle are not looked at, although they are fixed points
        """
        registered = np.flatnonzero(self._registered)
        return not np.any(self._forward[registered] == registered)

    def __repr__(self):
        mapping = ''.join(self.alphabet.symbol_at(int(i)) for i in self._forward)
        return f'<Permutation {self.alphabet} -> {mapping}>'
