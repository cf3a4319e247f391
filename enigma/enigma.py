import copy
import enum
import logging

import numpy as np

from .alphabet import Alphabet
from .errors import ConfigurationError
from .permutation import Permutation

logger = logging.getLogger(__name__)


def gen_permutation_cycles(symbols: str, seed: int) -> str:
    """random wiring for a rotor, written in cycle notation"""
    n_elements = len(symbols)
    rng = np.random.default_rng(seed)
    perm_forward = rng.permutation(n_elements).tolist()

    visited = set()
    cycles = []
    for start in range(n_elements):
        if start in visited:
            continue
        cycle = ''
        idx = start
        while idx not in visited:
            visited.add(idx)
            cycle += symbols[idx]
            idx = perm_forward[idx]
        cycles.append(f'({cycle})')
    return ' '.join(cycles)


def gen_swap_cycles(symbols: str, n_swaps: int, seed: int) -> str:
    """random pairwise swaps, e.g. for a reflector (n_swaps = len // 2) or a plugboard"""
    if n_swaps > len(symbols) // 2:
        raise ConfigurationError(f'cannot place {n_swaps} swaps on {len(symbols)} symbols')
    rng = np.random.default_rng(seed)
    chosen = rng.choice(list(symbols), size=2 * n_swaps, replace=False)
    return ' '.join(f'({first}{second})' for first, second in zip(chosen[::2], chosen[1::2]))


class RotorKind(enum.Enum):
    MOVING = 'M'
    FIXED = 'N'
    REFLECTING = 'R'


class Rotor:
    """
    A wheel with a fixed wiring (a Permutation) and a rotational offset, the setting.
    What a rotor can do depends on its kind:
        MOVING: advances when stepped and has notches that drive its left neighbour
        FIXED: never moves
        REFLECTING: never moves and its setting is pinned to 0
    """

    def __init__(self, name: str, permutation: Permutation, kind: RotorKind = RotorKind.FIXED, notches: str = ''):
        if notches and kind != RotorKind.MOVING:
            raise ConfigurationError(f'rotor {name} of kind {kind.name} cannot have notches')
        for notch in notches:
            if not permutation.alphabet.contains(notch):
                raise ConfigurationError(f'notch {notch!r} of rotor {name} is not in the alphabet')

        self.name = name
        self.permutation = permutation
        self.kind = kind
        self.notches = frozenset(notches)

        self.setting = 0

    @property
    def alphabet(self) -> Alphabet:
        return self.permutation.alphabet

    def size(self) -> int:
        return self.permutation.size()

    def rotates(self) -> bool:
        return self.kind == RotorKind.MOVING

    def reflects(self) -> bool:
        return self.kind == RotorKind.REFLECTING

    def set(self, position):
        """position is either an index or a symbol of the alphabet"""
        if isinstance(position, str):
            position = self.alphabet.index_of(position)
        if self.kind == RotorKind.REFLECTING and position != 0:
            raise ConfigurationError(f'reflector {self.name} has only one position')
        self.setting = self.permutation.wrap(position)

    def advance(self):
        if self.kind == RotorKind.MOVING:
            self.setting = self.permutation.wrap(self.setting + 1)

    def at_notch(self) -> bool:
        if self.kind == RotorKind.MOVING:
            return self.alphabet.symbol_at(self.setting) in self.notches
        return False

    def convert_forward(self, p: int) -> int:
        # the wiring is turned by `setting` against the contacts of the machine
        shifted = self.permutation.permute(self.permutation.wrap(p + self.setting))
        return self.permutation.wrap(shifted - self.setting)

    def convert_backward(self, c: int) -> int:
        shifted = self.permutation.invert(self.permutation.wrap(c + self.setting))
        return self.permutation.wrap(shifted - self.setting)

    def __repr__(self):
        return f'<Rotor {self.name} kind={self.kind.name} setting={self.setting}>'


def moving_rotor(name: str, permutation: Permutation, notches: str) -> Rotor:
    return Rotor(name, permutation, kind=RotorKind.MOVING, notches=notches)


def fixed_rotor(name: str, permutation: Permutation) -> Rotor:
    return Rotor(name, permutation, kind=RotorKind.FIXED)


def reflector(name: str, permutation: Permutation) -> Rotor:
    return Rotor(name, permutation, kind=RotorKind.REFLECTING)


class Machine:
    """
    Rotor machine with num_rotors slots. Slot 0 holds the reflector, slot num_rotors - 1 the fast rotor.
    The rotors in the slots are copies of the rotors in the pool, so converting never changes the pool.
    """

    def __init__(self, alphabet: Alphabet, num_rotors: int, num_pawls: int, all_rotors):
        if num_rotors <= 1:
            raise ConfigurationError(f'a machine needs more than one rotor slot, got {num_rotors}')
        if not 0 <= num_pawls < num_rotors:
            raise ConfigurationError(f'number of pawls {num_pawls} must be in [0, {num_rotors})')
        self._alphabet = alphabet
        self._num_rotors = num_rotors
        self._num_pawls = num_pawls

        all_rotors = list(all_rotors)
        rotor_lengths = np.array([rot.size() for rot in all_rotors], dtype=int)
        if not np.all(rotor_lengths == alphabet.size()):
            raise ConfigurationError('rotors do not have same number of positions as the alphabet')

        self._all_rotors = dict()
        for rot in all_rotors:
            if rot.name in self._all_rotors:
                raise ConfigurationError(f'rotor name {rot.name} is used more than once')
            self._all_rotors[rot.name] = rot

        self._rotors = []
        self._plugboard = Permutation('', alphabet)

    def num_rotors(self) -> int:
        return self._num_rotors

    def num_pawls(self) -> int:
        return self._num_pawls

    def alphabet(self) -> Alphabet:
        return self._alphabet

    def available_rotors(self) -> list:
        return list(self._all_rotors)

    def get_rotor(self, k: int) -> Rotor:
        return self._rotors[k]

    def _resolve_rotors(self, names) -> list:
        """fresh copies of the named pool rotors at setting 0, checked against the slot and pawl counts"""
        names = list(names)
        if len(names) != self._num_rotors:
            raise ConfigurationError(f'expected {self._num_rotors} rotors, got {len(names)}')
        if len(set(names)) != len(names):
            raise ConfigurationError(f'a rotor is used more than once in {names}')

        rotors = []
        for name in names:
            if name not in self._all_rotors:
                raise ConfigurationError(f'rotor {name} does not exist')
            rot = copy.copy(self._all_rotors[name])
            rot.setting = 0
            rotors.append(rot)

        n_moving = sum(rot.rotates() for rot in rotors)
        if n_moving != self._num_pawls:
            raise ConfigurationError(f'{n_moving} moving rotors do not match {self._num_pawls} pawls')
        return rotors

    def _apply_setting(self, rotors: list, setting: str):
        if len(setting) != self._num_rotors - 1:
            raise ConfigurationError(f'setting {setting!r} must have {self._num_rotors - 1} characters')
        if len(rotors) != self._num_rotors:
            raise ConfigurationError('rotors have to be inserted before they can be set')
        positions = [self._alphabet.index_of(symbol) for symbol in setting]
        for rot, position in zip(rotors[1:], positions):
            rot.set(position)

    def insert_rotors(self, names):
        self._rotors = self._resolve_rotors(names)

    def set_rotors(self, setting: str):
        """setting holds one symbol per slot, leftmost non-reflector slot first"""
        self._apply_setting(self._rotors, setting)

    def reconfigure(self, names, setting: str, plugboard: Permutation):
        """
        insert, set and plug in one go. everything is checked before the machine changes,
        a failure leaves the previous configuration in place. slot 0 has to be a reflector
        """
        rotors = self._resolve_rotors(names)
        if not rotors[0].reflects():
            raise ConfigurationError(f'first rotor must be a reflector, got {rotors[0].name}')
        self._apply_setting(rotors, setting)
        if plugboard.size() != self._alphabet.size():
            raise ConfigurationError('plug board does not have the same number of positions as the alphabet')
        self._rotors = rotors
        self._plugboard = plugboard

    def get_rotor_positions(self) -> list:
        return [rot.setting for rot in self._rotors]

    def rotor_settings(self) -> str:
        return ''.join(self._alphabet.symbol_at(rot.setting) for rot in self._rotors[1:])

    def plugboard(self) -> Permutation:
        return self._plugboard

    def set_plugboard(self, plugboard: Permutation):
        if plugboard.size() != self._alphabet.size():
            raise ConfigurationError('plug board does not have the same number of positions as the alphabet')
        self._plugboard = plugboard

    def _advance_rotors(self):
        # decide on the positions before the keystroke, then move all at once
        rotated = np.zeros(self._num_rotors, dtype=bool)
        rotated[-1] = True
        for i in range(1, self._num_rotors - 1):
            rotated[i] = self._rotors[i].rotates() and self._rotors[i + 1].at_notch()
        for rot, rotate in zip(self._rotors, rotated):
            if rotate:
                rot.advance()

    def _apply_rotors(self, number: int) -> int:
        for rot in reversed(self._rotors):
            number = rot.convert_forward(number)
        for rot in self._rotors[1:]:
            number = rot.convert_backward(number)
        return number

    def convert(self, c, verbose: bool = False):
        """
        encode one symbol index, advancing the rotors first.
        a string argument is treated as a whole message, see convert_message
        """
        if isinstance(c, str):
            return self.convert_message(c, verbose=verbose)

        self._advance_rotors()
        number = self._plugboard.permute(c)
        plugged = number
        number = self._apply_rotors(number)
        number = self._plugboard.permute(number)

        if verbose:
            logger.info('[%s] %s -> %s -> %s', self.rotor_settings(), self._alphabet.symbol_at(self._plugboard.wrap(c)),
                        self._alphabet.symbol_at(plugged), self._alphabet.symbol_at(number))
        return number

    def convert_message(self, msg: str, verbose: bool = False) -> str:
        msg = ''.join(char for char in msg if not char.isspace())
        output = str()
        for char in msg:
            number = self.convert(self._alphabet.index_of(char), verbose=verbose)
            output += self._alphabet.symbol_at(number)
        return output
