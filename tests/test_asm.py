import io

import pytest

from smzsync.asm import Emitter, Flags


def make_emitter():
    return Emitter(bytearray(), io.StringIO())


def emit_hc_portal(a):
    a.comment("check if in HC overworld:")
    a.sep(0x30)
    a.lda_dp(0x1B)
    a.bne(0x6F - 0x06)
    a.lda_dp(0x8A)
    a.cmp_imm8_b(0x1B)
    a.bne(0x6F - 0x0C)
    a.comment("find free sprite slot:")
    a.ldx_imm8_b(0x0F)
    a.lda_abs_x(0x0DD0)
    a.beq(0x05)
    a.dex()
    a.bpl(-8)
    a.bra(0x6F - 0x18)
    a.comment("open portal at HC:")
    a.lda_imm8_b(0x50)
    a.sta_abs_x(0x0D00)
    a.lda_imm8_b(0x08)
    a.sta_abs_x(0x0D20)
    a.lda_imm8_b(0xE0)
    a.sta_abs_x(0x0D10)
    a.lda_imm8_b(0x07)
    a.sta_abs_x(0x0D30)
    a.stz_abs_x(0x0D40)
    a.stz_abs_x(0x0D50)
    a.stz_abs_x(0x0D60)
    a.stz_abs_x(0x0D70)
    a.stz_abs_x(0x0D80)
    a.lda_imm8_b(0x01)
    a.sta_abs_x(0x0D90)
    a.sta_abs_x(0x0F60)
    a.stz_abs_x(0x0DA0)
    a.stz_abs_x(0x0DB0)
    a.stz_abs_x(0x0DC0)
    a.lda_imm8_b(0x09)
    a.sta_abs_x(0x0DD0)
    a.stz_abs_x(0x0DE0)
    a.stz_abs_x(0x0DF0)
    a.stz_abs_x(0x0E00)
    a.stz_abs_x(0x0E10)
    a.lda_imm8_b(0xBA)
    a.sta_abs_x(0x0E20)
    a.stz_abs_x(0x0E30)
    a.lda_imm8_b(0x80)
    a.sta_abs_x(0x0E40)
    a.lda_imm8_b(0x04)
    a.sta_abs_x(0x0F50)
    a.rep(0x30)


def test_hc_portal_routine_layout():
    a = make_emitter()
    a.set_base(0x707C00)
    emit_hc_portal(a)
    code = bytes(a.code)
    # all exits branch to offset $6F, where the final REP sits:
    assert len(code) == 0x71
    assert code[0x6F:] == bytes([0xC2, 0x30])
    assert a.get_base() == 0x707C00 + 0x71
    assert code[:6] == bytes([0xE2, 0x30, 0xA5, 0x1B, 0xD0, 0x69])
    assert code[14:25] == bytes([0xBD, 0xD0, 0x0D, 0xF0, 0x05, 0xCA, 0x10, 0xF8, 0x80, 0x57, 0xA9])
    assert a.flags() & (Flags.ACCUMULATOR_8BIT | Flags.INDEX_REGISTER_8BIT) == 0


def test_hc_portal_routine_listing():
    a = make_emitter()
    a.set_base(0x707C00)
    emit_hc_portal(a)
    lines = a.text.getvalue().splitlines()
    assert lines[0] == "base $707c00"
    assert lines[1] == "    ; check if in HC overworld:"
    assert lines[2] == "    sep   #$30     ; $707c00  e2 30"
    assert "    ; find free sprite slot:" in lines
    assert "    lda.w $0dd0,X  ; $707c0e  bd d0 0d" in lines
    assert lines[-1] == "    rep   #$30     ; $707c6f  c2 30"


def test_init_hook_jsl_nop():
    a = make_emitter()
    a.set_base(0x008312)
    a.jsl(0x1BB1D7)
    a.nop()
    assert bytes(a.code) == bytes([0x22, 0xD7, 0xB1, 0x1B, 0xEA])
    assert "jsl   $1bb1d7" in a.text.getvalue()


def test_premain_routine_length():
    a = make_emitter()
    a.set_base(0x708000 - 8)
    a.jsr_abs(0x7C00)
    a.jsl_lhb(0xB5, 0x80, 0x00)
    a.rtl()
    assert bytes(a.code) == bytes([0x20, 0x00, 0x7C, 0x22, 0xB5, 0x80, 0x00, 0x6B])


def test_default_ops_syncable_update_bytes():
    a = make_emitter()
    a.assume_sep(0x30)
    a.lda_imm8_b(0x66)
    a.ora_long(0x7EF379)
    a.sta_long(0x7EF379)
    assert bytes(a.code) == bytes([0xA9, 0x66, 0x0F, 0x79, 0xF3, 0x7E, 0x8F, 0x79, 0xF3, 0x7E])


@pytest.mark.parametrize(
    "call",
    [
        lambda a: a.lda_imm8_b(1),
        lambda a: a.ora_imm8_b(1),
        lambda a: a.and_imm8_b(1),
        lambda a: a.cmp_imm8_b(1),
        lambda a: a.adc_imm8_b(1),
        lambda a: a.cpy_imm8_b(1),
        lambda a: a.ldx_imm8_b(1),
    ],
)
def test_8bit_immediates_rejected_in_16bit_mode(call):
    a = make_emitter()
    with pytest.raises(RuntimeError):
        call(a)
    assert bytes(a.code) == b""


def test_16bit_immediates_rejected_in_8bit_mode():
    a = make_emitter()
    a.assume_sep(0x20)
    with pytest.raises(RuntimeError):
        a.lda_imm16_w(0x1234)
    with pytest.raises(RuntimeError):
        a.lda_imm16_lh(0x34, 0x12)


def test_16bit_immediate_encoding():
    a = make_emitter()
    a.rep(0x20)
    a.lda_imm16_w(0x12EF)
    a.lda_imm16_lh(0x60, 0xEA)
    assert bytes(a.code) == bytes([0xC2, 0x20, 0xA9, 0xEF, 0x12, 0xA9, 0x60, 0xEA])


def test_flag_tracking():
    a = make_emitter()
    assert a.is_m16bit() and a.is_x16bit()
    a.sep(0x30)
    assert not a.is_m16bit() and not a.is_x16bit()
    a.rep(0x10)
    assert a.is_x16bit() and not a.is_m16bit()
    assert a.flags() == Flags.ACCUMULATOR_8BIT


def test_clone_and_append():
    a = make_emitter()
    a.set_base(0x707C00)
    a.assume_sep(0x30)
    a.lda_abs(0x02E4)
    t = a.clone()
    assert t.get_base() == a.get_base()
    assert t.flags() == a.flags()
    t.beq(0x01)
    t.rts()
    assert bytes(a.code) == bytes([0xAD, 0xE4, 0x02])
    a.append(t)
    assert bytes(a.code) == bytes([0xAD, 0xE4, 0x02, 0xF0, 0x01, 0x60])
    assert a.get_base() == 0x707C00 + 6
    assert a.text.getvalue().endswith("    rts            ; $707c05  60\n")


def test_emit_bytes():
    a = make_emitter()
    a.emit_bytes(bytes([0x01, 0xAB]))
    assert bytes(a.code) == bytes([0x01, 0xAB])
    assert a.text.getvalue() == "    db    $01, $ab\n"
    assert a.get_base() == 2


def test_base_written_once():
    a = make_emitter()
    a.set_base(0x10)
    a.nop()
    a.nop()
    assert a.text.getvalue().count("base $") == 1


def test_without_sinks_address_still_advances():
    a = Emitter()
    a.jml(0x123456)
    a.comment("ignored")
    assert a.get_base() == 4
    assert a.code is None and a.text is None


def test_misc_encodings():
    a = make_emitter()
    a.assume_sep(0x30)
    a.sta_dp(0x1D)
    a.inc_dp(0x15)
    a.sta_abs(0x012D)
    a.stz_abs(0x0690)
    a.ldy_abs(0x040C)
    a.dey()
    a.jml(0x1BB1D7)
    assert bytes(a.code) == bytes(
        [0x85, 0x1D, 0xE6, 0x15, 0x8D, 0x2D, 0x01, 0x9C, 0x90, 0x06, 0xAC, 0x0C, 0x04, 0x88, 0x5C, 0xD7, 0xB1, 0x1B]
    )


def test_branch_out_of_range():
    a = make_emitter()
    with pytest.raises(ValueError):
        a.bne(-129)