# chip8_tracer/arch/chip8/instructions/maps.py
"""
オペコードと命令実装のマッピング定義。

二段階のディスパッチ表です。一段目は上位ニブル (msb) で引き、
値が辞書の場合は SUB_SELECTORS で取り出したサブセレクタ（下位12bit、下位ニブル、下位バイトのいずれか）で二段目を引きます。
"""
from typing import Callable, Dict

from chip8_tracer.arch.chip8.opcode import Opcode
from . import alu
from . import control
from . import display
from . import load

# @intent:map 二段目を持つ命令クラスのサブセレクタ抽出関数。
SUB_SELECTORS: Dict[int, Callable[[Opcode], int]] = {
    0x0000: lambda op: op.nnn,
    0x8000: lambda op: op.n,
    0xE000: lambda op: op.kk,
    0xF000: lambda op: op.kk,
}

# @intent:map 命令クラスから (ニーモニック, オペランド書式) へのマッピングテーブル。
# 書式はOpcodeのフィールド (x, y, n, nnn, kk) で展開されます。
DECODE_MAP = {
    0x0000: {
        0x0E0: ("CLS", ()),
        0x0EE: ("RET", ()),
    },
    0x1000: ("JP", ("${nnn:03X}",)),
    0x2000: ("CALL", ("${nnn:03X}",)),
    0x3000: ("SE", ("V{x:X}", "#${kk:02X}")),
    0x4000: ("SNE", ("V{x:X}", "#${kk:02X}")),
    0x5000: ("SE", ("V{x:X}", "V{y:X}")),
    0x6000: ("LD", ("V{x:X}", "#${kk:02X}")),
    0x7000: ("ADD", ("V{x:X}", "#${kk:02X}")),
    0x8000: {
        0x0: ("LD", ("V{x:X}", "V{y:X}")),
        0x1: ("OR", ("V{x:X}", "V{y:X}")),
        0x2: ("AND", ("V{x:X}", "V{y:X}")),
        0x3: ("XOR", ("V{x:X}", "V{y:X}")),
        0x4: ("ADD", ("V{x:X}", "V{y:X}")),
        0x5: ("SUB", ("V{x:X}", "V{y:X}")),
        0x6: ("SHR", ("V{x:X}", "V{y:X}")),
        0x7: ("SUBN", ("V{x:X}", "V{y:X}")),
        0xE: ("SHL", ("V{x:X}", "V{y:X}")),
    },
    0x9000: ("SNE", ("V{x:X}", "V{y:X}")),
    0xA000: ("LD", ("I", "${nnn:03X}")),
    0xB000: ("JP", ("V0", "${nnn:03X}")),
    0xC000: ("RND", ("V{x:X}", "#${kk:02X}")),
    0xD000: ("DRW", ("V{x:X}", "V{y:X}", "{n}")),
    0xE000: {
        0x9E: ("SKP", ("V{x:X}",)),
        0xA1: ("SKNP", ("V{x:X}",)),
    },
    0xF000: {
        0x07: ("LD", ("V{x:X}", "DT")),
        0x0A: ("LD", ("V{x:X}", "K")),
        0x15: ("LD", ("DT", "V{x:X}")),
        0x18: ("LD", ("ST", "V{x:X}")),
        0x1E: ("ADD", ("I", "V{x:X}")),
        0x29: ("LD", ("F", "V{x:X}")),
        0x33: ("LD", ("B", "V{x:X}")),
        0x55: ("LD", ("[I]", "V{x:X}")),
        0x65: ("LD", ("V{x:X}", "[I]")),
    },
}

# @intent:map 命令クラスから実行関数へのマッピングテーブル。DECODE_MAPと同じ形をとります。
EXECUTE_MAP = {
    0x0000: {
        0x0E0: display.execute_cls,
        0x0EE: control.execute_ret,
    },
    0x1000: control.execute_jp,
    0x2000: control.execute_call,
    0x3000: control.execute_se_imm,
    0x4000: control.execute_sne_imm,
    0x5000: control.execute_se_reg,
    0x6000: load.execute_ld_imm,
    0x7000: alu.execute_add_imm,
    0x8000: {
        0x0: alu.execute_ld_reg,
        0x1: alu.execute_or,
        0x2: alu.execute_and,
        0x3: alu.execute_xor,
        0x4: alu.execute_add,
        0x5: alu.execute_sub,
        0x6: alu.execute_shr,
        0x7: alu.execute_subn,
        0xE: alu.execute_shl,
    },
    0x9000: control.execute_sne_reg,
    0xA000: load.execute_ld_i,
    0xB000: control.execute_jp_v0,
    0xC000: alu.execute_rnd,
    0xD000: display.execute_drw,
    0xE000: {
        0x9E: control.execute_skp,
        0xA1: control.execute_sknp,
    },
    0xF000: {
        0x07: load.execute_ld_vx_dt,
        0x0A: control.execute_ld_key,
        0x15: load.execute_ld_dt_vx,
        0x18: load.execute_ld_st_vx,
        0x1E: load.execute_add_i,
        0x29: load.execute_ld_font,
        0x33: load.execute_ld_bcd,
        0x55: load.execute_ld_store,
        0x65: load.execute_ld_load,
    },
}
