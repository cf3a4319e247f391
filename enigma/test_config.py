import unittest as ut

from enigma import config
from enigma.errors import ConfigurationError

SMALL_CONFIG = """
ABCD
2 1
R R (AB) (CD)
M MA (ABD)
F N (AC)
"""

DEFAULT_CONFIG = """
ABCDEFGHIJKLMNOPQRSTUVWXYZ
5 3
I MQ (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
II ME (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
III MV (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
IV MJ (AEPLIYWCOXMRFZBSTGJQNH) (DV) (KU)
V MZ (AVOLDRWFIUQ)(BZKSMNHYC) (EGTJPX)
Beta N (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
Gamma N (AFNIRLBSQWVXGUZDKMTPCOYJHE)
B R (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP) (RX) (SZ) (TV)
C R (AR) (BD) (CO) (EJ) (FN) (GT) (HK) (IV) (LM) (PW) (QZ) (SX) (UY)
"""

HIAWATHA_SETUP = '* B Beta III IV I AXLE (HQ) (EX) (IP) (TR) (BY)'


class ReadConfigTest(ut.TestCase):
    def test_small_config(self):
        machine = config.read_config(SMALL_CONFIG)
        self.assertEqual(machine.num_rotors(), 2)
        self.assertEqual(machine.num_pawls(), 1)
        self.assertEqual(str(machine.alphabet()), 'ABCD')
        self.assertListEqual(machine.available_rotors(), ['R', 'M', 'F'])

    def test_rotor_kinds(self):
        machine = config.read_config(DEFAULT_CONFIG)
        machine.insert_rotors(['B', 'Beta', 'III', 'IV', 'I'])
        self.assertTrue(machine.get_rotor(0).reflects())
        self.assertFalse(machine.get_rotor(1).rotates())
        self.assertTrue(machine.get_rotor(4).rotates())
        self.assertSetEqual(set(machine.get_rotor(4).notches), {'Q'})
        self.assertEqual(machine.get_rotor(4).permutation.permute_symbol('A'), 'E')
        self.assertTrue(machine.get_rotor(0).permutation.derangement())

    def test_config_errors(self):
        bad_configs = [
            '',
            'ABCD',
            'ABCD 2',
            'A*CD 2 1 R R (AB)',
            'ABCD X 1 R R (AB)',
            'ABCD 2 2 R R (AB)',
            'ABCD 2 1 3 R R (AB)',
            'ABCD 2 1 R X (AB)',
            'ABCD 2 1 R R (AB',
            'ABCD 2 1 R R (AE)',
            'ABCD 2 1 R',
            'ABCD 2 1 (AB) R R (CD)',
            'ABCD 2 1 R R (AB) R R (CD)',
            'ABCD 2 1 M MX (ABCD)',
            'ABCD 1 0 R R (AB)',
        ]
        for text in bad_configs:
            with self.assertRaises(ConfigurationError, msg=text):
                config.read_config(text)


class SetupTest(ut.TestCase):
    def setUp(self):
        self.machine = config.read_config(SMALL_CONFIG)

    def test_setup(self):
        config.setup(self.machine, '* R M B (AC)')
        self.assertEqual(self.machine.get_rotor(1).name, 'M')
        self.assertEqual(self.machine.rotor_settings(), 'B')
        self.assertEqual(self.machine.plugboard().permute_symbol('A'), 'C')
        self.assertEqual(self.machine.plugboard().permute_symbol('B'), 'B')

    def test_star_glued_to_first_rotor(self):
        config.setup(self.machine, '*R M A')
        self.assertEqual(self.machine.get_rotor(0).name, 'R')

    def test_setup_errors(self):
        bad_lines = [
            'R M A',
            '* R M',
            '* R M AB',
            '* R X A',
            '* M R A',
            '* R F A',
            '* R M A (AB',
            '* R M A (AE)',
        ]
        for line in bad_lines:
            with self.assertRaises(ConfigurationError, msg=line):
                config.setup(self.machine, line)

    def test_failed_setup_keeps_previous_configuration(self):
        config.setup(self.machine, '* R M B (AC)')
        plugboard = self.machine.plugboard()
        for line in ['* M R A', '* R M E', '* R M A (AE)', '* R F A']:
            with self.assertRaises(ConfigurationError, msg=line):
                config.setup(self.machine, line)
            self.assertEqual(self.machine.get_rotor(0).name, 'R')
            self.assertEqual(self.machine.get_rotor(1).name, 'M')
            self.assertEqual(self.machine.rotor_settings(), 'B')
            self.assertIs(self.machine.plugboard(), plugboard)


class ProcessTest(ut.TestCase):
    def test_format_groups(self):
        self.assertEqual(config.format_groups('ABCDEFGHIJKL'), 'ABCDE FGHIJ KL')
        self.assertEqual(config.format_groups('ABCDE'), 'ABCDE')
        self.assertEqual(config.format_groups(''), '')
        self.assertEqual(config.format_groups('ABCDEFG', size=3), 'ABC DEF G')

    def test_state_carries_over_lines(self):
        machine = config.read_config(SMALL_CONFIG)
        output = list(config.process(machine, ['* R M A', 'AAAA', '', 'AA AAAA']))
        self.assertListEqual(output, ['CDCD', '', 'CDCDC D'])

    def test_setup_resets_machine(self):
        machine = config.read_config(SMALL_CONFIG)
        output = list(config.process(machine, ['* R M A\n', 'AA\n', '* R M A\n', 'AA\n']))
        self.assertListEqual(output, ['CD', 'CD'])

    def test_message_before_setup(self):
        machine = config.read_config(SMALL_CONFIG)
        with self.assertRaises(ConfigurationError):
            list(config.process(machine, ['AAAA']))
        self.assertListEqual(list(config.process(machine, ['', '* R M A'])), [''])

    def test_hiawatha(self):
        machine = config.read_config(DEFAULT_CONFIG)
        output = list(config.process(machine, [HIAWATHA_SETUP, 'FROM HIS SHOULDER HIAWATHA']))
        self.assertListEqual(output, ['QVPQS OKOIL PUBKJ ZPISF XDW'])

    def test_reciprocity(self):
        machine = config.read_config(DEFAULT_CONFIG)
        plain = ['TOOK THE CAMERA OF ROSEWOOD', 'MADE OF SLIDING FOLDING ROSEWOOD']
        encoded = list(config.process(machine, [HIAWATHA_SETUP] + plain))
        decoded = list(config.process(machine, [HIAWATHA_SETUP] + encoded))
        self.assertListEqual(decoded, [config.format_groups(line.replace(' ', '')) for line in plain])


if __name__ == '__main__':
    ut.main()
