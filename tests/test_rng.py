from uvmapper.rng import LCGRandom, hashcode, lcg_next, string_to_seed

def test_lcg_golden_sequence_seed0():
    rng = LCGRandom(0)
    got = [rng.next() for _ in range(6)]
    assert got == [12345, 1406932606, 654583775, 1449466924, 229283573, 1109335178]

def test_lcg_state_wraps_at_32_bits():
    # state stays 32-bit even when the output drops bit 31
    s = lcg_next(0xFFFFFFFF)
    assert 0 <= s <= 0xFFFFFFFF
    assert LCGRandom(1 << 32).state == 0
    rng = LCGRandom(0xFFFFFFFF)
    assert rng.next() == s & 0x7FFFFFFF

def test_hashcode():
    assert hashcode("") == 0
    assert hashcode("a") == 97
    assert hashcode("ab") == 97 * 31 + 98 == 3105
    assert hashcode("abc") == 96354
    assert hashcode("ganlvtech") == 2110298868
    # UTF-8 bytes, not code points
    assert hashcode("é") == 0xC3 * 31 + 0xA9 == 6214
    assert hashcode("héllo") == 3162660225
    assert hashcode(b"ab") == hashcode("ab")

def test_string_to_seed_rules():
    assert string_to_seed("42") == 42
    assert string_to_seed("0") == 0
    assert string_to_seed("007") == 7
    assert string_to_seed("4294967295") == 4294967295
    assert string_to_seed("4294967296") == hashcode("4294967296") == 3632702254
    assert string_to_seed("abc") == hashcode("abc")
    # 11 digits is never numeric
    assert string_to_seed("12345678901") == hashcode("12345678901")
    assert string_to_seed("") == 0
    assert string_to_seed("-1") == hashcode("-1")
    assert string_to_seed(" 1") == hashcode(" 1")
