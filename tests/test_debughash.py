import struct

from boundls.debughash import hash_double, hash_double_vector, hash_int_vector


def test_hash_double_is_ieee_bits():
    assert hash_double(1.0) == 0x3FF0000000000000


def test_hash_double_round_trip():
    for value in (3.25, -7.5e-12, 1e300):
        bits = hash_double(value)
        assert struct.unpack("<d", struct.pack("<Q", bits))[0] == value


def test_both_zeros_hash_to_zero():
    assert hash_double(0.0) == 0
    assert hash_double(-0.0) == 0


def test_none_vectors_hash_to_zero():
    assert hash_int_vector(None) == 0
    assert hash_double_vector(None) == 0


def test_int_vector_is_additive():
    a, b = [4, 9, 17], [-3, 250]
    combined = hash_int_vector(a + b)
    assert combined == (hash_int_vector(a) + hash_int_vector(b)) % 2**64


def test_negative_int_wraps_to_unsigned():
    assert hash_int_vector([-1]) + hash_int_vector([1]) == 2**64
    assert 0 <= hash_int_vector([-5, -6]) < 2**64


def test_double_vector_sums_element_hashes():
    values = [1.5, -2.25, 1e-3]
    expected = sum(hash_double(v) for v in values) % 2**64
    assert hash_double_vector(values) == expected


def test_double_vector_ignores_zeros():
    assert hash_double_vector([0.0, 2.0, -0.0]) == hash_double_vector([2.0])


def test_double_vector_stays_in_range():
    values = [-1e308] * 10
    assert 0 <= hash_double_vector(values) < 2**64