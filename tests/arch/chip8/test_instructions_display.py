import unittest

from chip8_tracer.common.errors import MemoryAccessFault
from chip8_tracer.arch.chip8.state import SCREEN_WIDTH
from .helpers import build_cpu, write_program

class TestChip8DisplayInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu, self.bus = build_cpu()
        self.state = self.cpu.get_state()

    def _execute(self, word):
        write_program(self.bus, [word])
        self.state.pc = 0x200
        return self.cpu.step()

    def _lit_columns(self, row):
        return [x for x in range(SCREEN_WIDTH) if self.state.pixel(x, row)]

    def test_cls(self):
        self.state.frame_buffer[10] = 1
        self._execute(0x00E0)
        self.assertEqual(sum(self.state.frame_buffer), 0)
        self.assertTrue(self.state.should_redraw)

    def test_draw_font_glyph(self):
        self.state.i = 0x000  # glyph "0"
        self._execute(0xD015)
        self.assertEqual(self._lit_columns(0), [0, 1, 2, 3])
        self.assertEqual(self._lit_columns(1), [0, 3])
        self.assertEqual(self.state.v[0xF], 0)
        self.assertTrue(self.state.should_redraw)

    def test_draw_twice_erases_and_sets_collision(self):
        self.state.i = 0x000
        self._execute(0xD015)
        self._execute(0xD015)
        self.assertEqual(sum(self.state.frame_buffer), 0)
        self.assertEqual(self.state.v[0xF], 1)

    def test_sprite_is_clipped_at_right_edge(self):
        self.bus.load(0x300, 0xFF)
        self.state.i = 0x300
        self.state.v[0] = 60
        self._execute(0xD011)
        self.assertEqual(self._lit_columns(0), [60, 61, 62, 63])

    def test_sprite_is_clipped_at_bottom_edge(self):
        self.state.i = 0x000
        self.state.v[1] = 30
        self._execute(0xD015)
        self.assertEqual(self._lit_columns(30), [0, 1, 2, 3])
        self.assertEqual(self._lit_columns(31), [0, 3])
        for row in range(0, 3):
            self.assertEqual(self._lit_columns(row), [])

    def test_sprite_read_past_memory_faults_without_drawing(self):
        self.state.i = 0xFFE
        with self.assertRaises(MemoryAccessFault) as ctx:
            self._execute(0xD015)
        self.assertEqual(ctx.exception.pc, 0x200)
        self.assertEqual(self.state.pc, 0x200)
        self.assertFalse(any(self.state.frame_buffer))
        self.assertFalse(self.state.should_redraw)
        self.assertEqual(self.state.vf, 0)

    def test_rows_clipped_at_bottom_are_not_read(self):
        # y=30 では2行しか描画されないため、I+5がメモリ末尾を越えてもフォールトしない
        self.bus.load(0xFFE, 0x80)
        self.bus.load(0xFFF, 0x80)
        self.state.i = 0xFFE
        self.state.v[1] = 30
        self._execute(0xD015)
        self.assertEqual(self._lit_columns(30), [0])
        self.assertEqual(self._lit_columns(31), [0])
        self.assertTrue(self.state.should_redraw)

    def test_origin_wraps_before_drawing(self):
        self.bus.load(0x300, 0x80)
        self.state.i = 0x300
        self.state.v[0] = 66
        self.state.v[1] = 33
        self._execute(0xD011)
        self.assertEqual(self.state.pixel(2, 1), 1)

    def test_collision_is_cumulative_over_rows(self):
        self.bus.load(0x300, 0x80)
        self.bus.load(0x301, 0x80)
        self.state.frame_buffer[0] = 1  # (0, 0) を点灯しておく
        self.state.i = 0x300
        self._execute(0xD012)
        self.assertEqual(self.state.pixel(0, 0), 0)
        self.assertEqual(self.state.pixel(0, 1), 1)
        self.assertEqual(self.state.v[0xF], 1)

    def test_zero_height_sprite(self):
        self.state.v[0xF] = 1
        self._execute(0xD010)
        self.assertEqual(sum(self.state.frame_buffer), 0)
        self.assertEqual(self.state.v[0xF], 0)
        self.assertTrue(self.state.should_redraw)

if __name__ == '__main__':
    unittest.main()
