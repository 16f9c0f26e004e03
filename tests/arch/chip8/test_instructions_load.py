import unittest

from chip8_tracer.common.errors import MemoryAccessFault
from .helpers import build_cpu, write_program

class TestChip8LoadInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu, self.bus = build_cpu()
        self.state = self.cpu.get_state()

    def _execute(self, word):
        write_program(self.bus, [word])
        self.state.pc = 0x200
        return self.cpu.step()

    def test_ld_imm(self):
        self._execute(0x6A42)
        self.assertEqual(self.state.v[0xA], 0x42)

    def test_ld_i(self):
        self._execute(0xA123)
        self.assertEqual(self.state.i, 0x123)

    def test_timers(self):
        self.state.v[1] = 0x3C
        self._execute(0xF115)
        self.assertEqual(self.state.delay_timer, 0x3C)
        self._execute(0xF118)
        self.assertEqual(self.state.sound_timer, 0x3C)

        self.state.delay_timer = 0x12
        self._execute(0xF207)
        self.assertEqual(self.state.v[2], 0x12)

    def test_add_i(self):
        self.state.i = 0x100
        self.state.v[1] = 0x20
        self.state.v[0xF] = 0x09
        self._execute(0xF11E)
        self.assertEqual(self.state.i, 0x120)
        self.assertEqual(self.state.v[0xF], 0x09)

    def test_add_i_wraps_at_16_bits(self):
        self.state.i = 0xFFFF
        self.state.v[1] = 0x02
        self._execute(0xF11E)
        self.assertEqual(self.state.i, 0x0001)

    def test_ld_font(self):
        self.state.v[2] = 0xA
        self._execute(0xF229)
        self.assertEqual(self.state.i, 50)
        self.assertEqual(self.bus.peek(self.state.i), 0xF0)

    def test_bcd(self):
        self.state.v[5] = 234
        self.state.i = 0x300
        self._execute(0xF533)
        self.assertEqual([self.bus.peek(0x300 + k) for k in range(3)], [2, 3, 4])
        self.assertEqual(self.state.i, 0x300)

    def test_bcd_out_of_range(self):
        self.state.i = 0xFFE
        with self.assertRaises(MemoryAccessFault):
            self._execute(0xF033)
        self.assertEqual(self.bus.peek(0xFFE), 0)

    def test_store_load_round_trip(self):
        self.state.v[0:4] = [1, 2, 3, 4]
        self.state.i = 0x300
        self._execute(0xF355)
        self.assertEqual([self.bus.peek(0x300 + k) for k in range(4)], [1, 2, 3, 4])
        self.assertEqual(self.state.i, 0x304)

        self.state.v[0:4] = [0, 0, 0, 0]
        self.state.v[4] = 0x99
        self.state.i = 0x300
        self._execute(0xF365)
        self.assertEqual(self.state.v[0:5], [1, 2, 3, 4, 0x99])
        self.assertEqual(self.state.i, 0x304)

    def test_store_out_of_range_leaves_memory_untouched(self):
        self.state.v = list(range(1, 17))
        self.state.i = 0xFF8
        with self.assertRaises(MemoryAccessFault):
            self._execute(0xFF55)
        self.assertEqual([self.bus.peek(0xFF8 + k) for k in range(8)], [0] * 8)
        self.assertEqual(self.state.i, 0xFF8)
        self.assertEqual(self.state.pc, 0x200)

if __name__ == '__main__':
    unittest.main()
