"""
Reading machine descriptions and message files.

A configuration looks like

    ABCDEFGHIJKLMNOPQRSTUVWXYZ
    5 3
    I     MQ  (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
    ...
    B     R   (AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN) (MO) (TZ) (VW)

i.e. the alphabet, the number of rotor slots and pawls and then the available rotors,
each with a name, a type token (M + notches, N or R) and its wiring in cycle notation.

An input file contains setup lines, starting with '*', and message lines:

    * B BETA III IV I AXLE (YF) (ZH)
    FROM HIS SHOULDER HIAWATHA
"""
import logging

from .alphabet import Alphabet
from .enigma import Machine, Rotor, RotorKind
from .errors import ConfigurationError
from .permutation import Permutation

logger = logging.getLogger(__name__)

GROUP_SIZE = 5


def _is_int(token: str) -> bool:
    try:
        int(token)
    except ValueError:
        return False
    return True


def read_rotor(tokens: list, pos: int, alphabet: Alphabet):
    """read the rotor description starting at tokens[pos], return the rotor and the position after it"""
    if pos + 1 >= len(tokens):
        raise ConfigurationError(f'bad rotor description starting at {tokens[pos]!r}')
    name = tokens[pos]
    if name.startswith('('):
        raise ConfigurationError(f'cycle {name!r} does not belong to any rotor')
    type_and_notches = tokens[pos + 1]
    pos += 2

    cycles = []
    while pos < len(tokens) and tokens[pos].startswith('('):
        cycle = tokens[pos]
        if ')' not in cycle:
            raise ConfigurationError(f'malformed cycle {cycle!r} in rotor {name}')
        cycles.append(cycle)
        pos += 1
    permutation = Permutation(' '.join(cycles), alphabet)

    try:
        kind = RotorKind(type_and_notches[0])
    except ValueError:
        raise ConfigurationError(f'rotor type {type_and_notches!r} of rotor {name} does not exist') from None
    return Rotor(name, permutation, kind=kind, notches=type_and_notches[1:]), pos


def read_config(text: str) -> Machine:
    tokens = text.split()
    if len(tokens) == 0:
        raise ConfigurationError('configuration file truncated')
    alphabet = Alphabet(tokens[0])

    if len(tokens) < 3:
        raise ConfigurationError('configuration file truncated')
    if not (_is_int(tokens[1]) and _is_int(tokens[2])):
        raise ConfigurationError('number of rotors and number of pawls expected after the alphabet')
    num_rotors = int(tokens[1])
    num_pawls = int(tokens[2])
    if num_pawls >= num_rotors:
        raise ConfigurationError(f'number of pawls {num_pawls} must be smaller than number of rotors {num_rotors}')
    if len(tokens) > 3 and _is_int(tokens[3]):
        raise ConfigurationError('only two numbers expected after the alphabet')

    rotors = []
    pos = 3
    while pos < len(tokens):
        rotor, pos = read_rotor(tokens, pos, alphabet)
        rotors.append(rotor)

    machine = Machine(alphabet, num_rotors, num_pawls, rotors)
    logger.debug('machine with %d slots, %d pawls and rotors %s', num_rotors, num_pawls,
                 ' '.join(rot.name for rot in rotors))
    return machine


def setup(machine: Machine, line: str):
    """configure machine from a setup line: '* <rotor names> <setting> <plugboard cycles>'"""
    tokens = line.split()
    if len(tokens) == 0 or not tokens[0].startswith('*'):
        raise ConfigurationError(f'setup line must start with "*": {line!r}')
    # '*B BETA ...' is the same as '* B BETA ...'
    first = tokens[0][1:]
    tokens = ([first] if first else []) + tokens[1:]

    n_rotors = machine.num_rotors()
    if len(tokens) < n_rotors + 1:
        raise ConfigurationError(f'setup line truncated: {line!r}')
    names = tokens[:n_rotors]
    setting = tokens[n_rotors]
    plugboard_cycles = ' '.join(tokens[n_rotors + 1:])

    plugboard = Permutation(plugboard_cycles, machine.alphabet())
    machine.reconfigure(names, setting, plugboard)
    logger.debug('rotors %s at %s, plugboard %r', ' '.join(names), setting, plugboard_cycles)


def format_groups(msg: str, size: int = GROUP_SIZE) -> str:
    return ' '.join(msg[i:i + size] for i in range(0, len(msg), size))


def process(machine: Machine, lines, verbose: bool = False):
    """
    run the lines of an input file through the machine.
    setup lines reconfigure the machine, every message line yields one line of grouped output
    """
    configured = False
    for line in lines:
        line = line.rstrip('\r\n')
        if '*' in line:
            setup(machine, line)
            configured = True
            continue
        if not configured and line.strip():
            raise ConfigurationError('message found before the first setup line')
        yield format_groups(machine.convert_message(line, verbose=verbose))
