from .alphabet import Alphabet
from .enigma import Machine, Rotor, RotorKind, fixed_rotor, moving_rotor, reflector
from .errors import ConfigurationError
from .permutation import Permutation
