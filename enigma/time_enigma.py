import time
import string
import random
import tqdm

from enigma.alphabet import Alphabet
from enigma.enigma import Machine, gen_permutation_cycles, gen_swap_cycles, moving_rotor, fixed_rotor, reflector
from enigma.permutation import Permutation

n_messages = 3000
chars_per_message = 256
charset = string.ascii_uppercase


def build_machine() -> Machine:
    alphabet = Alphabet(charset)
    rotor_seeds = [21, 32, 34]
    rotors = [moving_rotor(f'R{seed}', Permutation(gen_permutation_cycles(charset, seed), alphabet), notches='Q')
              for seed in rotor_seeds]
    rotors.append(fixed_rotor('BETA', Permutation(gen_permutation_cycles(charset, 7), alphabet)))
    rotors.append(reflector('B', Permutation(gen_swap_cycles(charset, len(charset) // 2, seed=3), alphabet)))

    machine = Machine(alphabet, num_rotors=5, num_pawls=3, all_rotors=rotors)
    machine.insert_rotors(['B', 'BETA', 'R21', 'R32', 'R34'])
    machine.set_plugboard(Permutation(gen_swap_cycles(charset, 10, seed=41), alphabet))
    return machine


def main():
    encoder = build_machine()
    rotor_setting = 'DEHA'

    messages = [''.join(random.choices(charset, k=chars_per_message)) for _ in range(n_messages)]
    tick = time.time()
    for message in tqdm.tqdm(messages):
        encoder.set_rotors(rotor_setting)
        encoder.convert_message(message)
    tock = time.time()

    avg_time = (tock - tick) / n_messages

    print(f'Average encoding time for message with {chars_per_message} characters: {avg_time:.2e} seconds')


if __name__ == '__main__':
    main()
