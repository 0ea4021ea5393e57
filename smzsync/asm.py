"""An immediate-mode 65816 assembler that emits machine code and a listing."""

from __future__ import annotations

import enum
import io


class Flags(enum.IntFlag):
    """Processor status flags (nvmxdizc)."""

    CARRY = 0x01
    ZERO = 0x02
    IRQ_DISABLE = 0x04
    DECIMAL_MODE = 0x08
    INDEX_REGISTER_8BIT = 0x10
    ACCUMULATOR_8BIT = 0x20
    OVERFLOW = 0x40
    NEGATIVE = 0x80


def _imm16(value: int) -> tuple[int, int]:
    return value & 0xFF, (value >> 8) & 0xFF


def _imm24(value: int) -> tuple[int, int, int]:
    return value & 0xFF, (value >> 8) & 0xFF, (value >> 16) & 0xFF


def _long_args(d: tuple[int, ...]) -> str:
    return f"${d[3]:02x}{d[2]:02x}{d[1]:02x}"


def _word_args(d: tuple[int, ...]) -> str:
    return f"${d[2]:02x}{d[1]:02x}"


class Emitter:
    """Assembles 65816 instructions into ``code`` and a text listing into ``text``.

    Either sink may be ``None``, in which case that output is skipped.
    The emitter tracks the m/x register-width flags to reject instructions
    whose immediate operand width does not match the current mode.
    """

    def __init__(self, code: bytearray | None = None, text: io.StringIO | None = None):
        self.code = code
        self.text = text
        self._flags = 0
        self._address = 0
        self._base_set = False

    # --- flag tracking -------------------------------------------------

    def flags(self) -> Flags:
        return Flags(self._flags)

    def is_x16bit(self) -> bool:
        return self._flags & Flags.INDEX_REGISTER_8BIT == 0

    def is_m16bit(self) -> bool:
        return self._flags & Flags.ACCUMULATOR_8BIT == 0

    def assume_rep(self, c: int) -> None:
        self._flags &= ~int(c) & 0xFF

    def assume_sep(self, c: int) -> None:
        self._flags |= int(c) & 0xFF

    # --- emitter state -------------------------------------------------

    def clone(self) -> Emitter:
        """Return a new emitter with fresh buffers and the same address and flags."""
        other = Emitter(bytearray(), io.StringIO())
        other._flags = self._flags
        other._address = self._address
        other._base_set = self._base_set
        return other

    def append(self, other: Emitter) -> None:
        """Take over the state of ``other`` and move its output onto this emitter."""
        self._address = other._address
        self._base_set = other._base_set
        self._flags = other._flags
        if other.code is not None:
            if self.code is not None:
                self.code.extend(other.code)
            other.code.clear()
        if other.text is not None and self.text is not None:
            self.text.write(other.text.getvalue())

    def set_base(self, addr: int) -> None:
        self._address = addr & 0xFFFFFFFF
        self._base_set = True

    def get_base(self) -> int:
        return self._address

    def _emit_base(self) -> None:
        if self.text is None or not self._base_set:
            return
        self.text.write(f"base ${self._address:06x}\n")
        self._base_set = False

    def _emit(self, ins: str, args: str, data: tuple[int, ...]) -> None:
        if self.code is not None:
            self.code.extend(data)
        if self.text is not None:
            self._emit_base()
            hexbytes = " ".join(f"{b:02x}" for b in data)
            self.text.write(f"    {ins:<5} {args:<8} ; ${self._address:06x}  {hexbytes}\n")
        self._address = (self._address + len(data)) & 0xFFFFFFFF

    def _require_m8(self, name: str) -> None:
        if self.is_m16bit():
            raise RuntimeError(
                f"asm: {name} called but 'm' flag is 16-bit; "
                "call sep(0x20) or assume_sep(0x20) first"
            )

    def _require_m16(self, name: str) -> None:
        if not self.is_m16bit():
            raise RuntimeError(
                f"asm: {name} called but 'm' flag is 8-bit; "
                "call rep(0x20) or assume_rep(0x20) first"
            )

    def _require_x8(self, name: str) -> None:
        if self.is_x16bit():
            raise RuntimeError(
                f"asm: {name} called but 'x' flag is 16-bit; "
                "call sep(0x10) or assume_sep(0x10) first"
            )

    # --- pseudo instructions -------------------------------------------

    def comment(self, s: str) -> None:
        if self.text is not None:
            self._emit_base()
            self.text.write(f"    ; {s}\n")

    def emit_bytes(self, data: bytes) -> None:
        if self.text is not None:
            self._emit_base()
            listing = ", ".join(f"${b:02x}" for b in data)
            self.text.write(f"    {'db':<5} {listing}\n")
        if self.code is not None:
            self.code.extend(data)
        self._address = (self._address + len(data)) & 0xFFFFFFFF

    # --- instructions --------------------------------------------------

    def _op8(self, ins: str, args_fmt: str, opcode: int, value: int) -> None:
        d = (opcode, value & 0xFF)
        self._emit(ins, args_fmt.format(d[1]), d)

    def _op_word(self, ins: str, opcode: int, value: int, prefix: str = "", suffix: str = "") -> None:
        d = (opcode, *_imm16(value))
        self._emit(ins, prefix + _word_args(d) + suffix, d)

    def _op_long(self, ins: str, opcode: int, value: int) -> None:
        d = (opcode, *_imm24(value))
        self._emit(ins, _long_args(d), d)

    def rep(self, c: int) -> None:
        self.assume_rep(c)
        self._op8("rep", "#${:02x}", 0xC2, int(c))

    def sep(self, c: int) -> None:
        self.assume_sep(c)
        self._op8("sep", "#${:02x}", 0xE2, int(c))

    def nop(self) -> None:
        self._emit("nop", "", (0xEA,))

    def jsr_abs(self, addr: int) -> None:
        self._op_word("jsr", 0x20, addr)

    def jsl(self, addr: int) -> None:
        self._op_long("jsl", 0x22, addr)

    def jsl_lhb(self, lo: int, hi: int, bank: int) -> None:
        d = (0x22, lo & 0xFF, hi & 0xFF, bank & 0xFF)
        self._emit("jsl", _long_args(d), d)

    def jml(self, addr: int) -> None:
        self._op_long("jml", 0x5C, addr)

    def rts(self) -> None:
        self._emit("rts", "", (0x60,))

    def rtl(self) -> None:
        self._emit("rtl", "", (0x6B,))

    def lda_imm8_b(self, m: int) -> None:
        self._require_m8("lda_imm8_b")
        self._op8("lda.b", "#${:02x}", 0xA9, m)

    def lda_imm16_w(self, m: int) -> None:
        self._require_m16("lda_imm16_w")
        self._op_word("lda.w", 0xA9, m, prefix="#")

    def lda_imm16_lh(self, lo: int, hi: int) -> None:
        self._require_m16("lda_imm16_lh")
        d = (0xA9, lo & 0xFF, hi & 0xFF)
        self._emit("lda.w", "#" + _word_args(d), d)

    def lda_long(self, addr: int) -> None:
        self._op_long("lda.l", 0xAF, addr)

    def lda_abs(self, addr: int) -> None:
        self._op_word("lda.w", 0xAD, addr)

    def lda_abs_x(self, addr: int) -> None:
        self._op_word("lda.w", 0xBD, addr, suffix=",X")

    def lda_dp(self, addr: int) -> None:
        self._op8("lda.b", "${:02x}", 0xA5, addr)

    def sta_long(self, addr: int) -> None:
        self._op_long("sta.l", 0x8F, addr)

    def sta_abs(self, addr: int) -> None:
        self._op_word("sta.w", 0x8D, addr)

    def sta_abs_x(self, addr: int) -> None:
        self._op_word("sta.w", 0x9D, addr, suffix=",X")

    def sta_dp(self, addr: int) -> None:
        self._op8("sta.b", "${:02x}", 0x85, addr)

    def ora_long(self, addr: int) -> None:
        self._op_long("ora.l", 0x0F, addr)

    def ora_imm8_b(self, m: int) -> None:
        self._require_m8("ora_imm8_b")
        self._op8("ora.b", "#${:02x}", 0x09, m)

    def and_imm8_b(self, m: int) -> None:
        self._require_m8("and_imm8_b")
        self._op8("and.b", "#${:02x}", 0x29, m)

    def cmp_imm8_b(self, m: int) -> None:
        self._require_m8("cmp_imm8_b")
        self._op8("cmp.b", "#${:02x}", 0xC9, m)

    def adc_imm8_b(self, m: int) -> None:
        self._require_m8("adc_imm8_b")
        self._op8("adc.b", "#${:02x}", 0x69, m)

    def cpy_imm8_b(self, m: int) -> None:
        self._require_x8("cpy_imm8_b")
        self._op8("cpy.b", "#${:02x}", 0xC0, m)

    def ldx_imm8_b(self, m: int) -> None:
        self._require_x8("ldx_imm8_b")
        self._op8("ldx.b", "#${:02x}", 0xA2, m)

    def ldy_abs(self, addr: int) -> None:
        self._op_word("ldy.w", 0xAC, addr)

    def stz_abs(self, addr: int) -> None:
        self._op_word("stz.w", 0x9C, addr)

    def stz_abs_x(self, addr: int) -> None:
        self._op_word("stz.w", 0x9E, addr, suffix=",X")

    def inc_dp(self, addr: int) -> None:
        self._op8("inc.b", "${:02x}", 0xE6, addr)

    def _branch(self, ins: str, opcode: int, m: int) -> None:
        if not -128 <= m <= 255:
            raise ValueError(f"asm: {ins} branch offset {m} out of range")
        self._op8(ins, "${:02x}", opcode, m)

    def bne(self, m: int) -> None:
        self._branch("bne", 0xD0, m)

    def beq(self, m: int) -> None:
        self._branch("beq", 0xF0, m)

    def bpl(self, m: int) -> None:
        self._branch("bpl", 0x10, m)

    def bra(self, m: int) -> None:
        self._branch("bra", 0x80, m)

    def dex(self) -> None:
        self._emit("dex", "", (0xCA,))

    def dey(self) -> None:
        self._emit("dey", "", (0x88,))