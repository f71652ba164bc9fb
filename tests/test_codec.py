import struct

import pytest

from codec import compress, decompress, huffman_decode, huffman_encode
from errors import CorruptContainerError, EmptyInputError, InputTooLargeError
from huffman import build_codebook, build_tree, weighted_length
from samples import single_symbol_bytes, skewed_bytes, text_like_bytes, uniform_bytes


SAMPLES = [
    b"a",
    b"ab",
    b"hello huffman!",
    bytes(range(256)),
    bytes(range(256)) * 3 + b"\x00" * 500,
    uniform_bytes(10 * 1024, seed=1),
    skewed_bytes(20000, seed=2),
    text_like_bytes(5000, seed=3),
    single_symbol_bytes(1024 * 10, sym=0x41),
]


@pytest.mark.parametrize("data", SAMPLES)
def test_roundtrip(data):
    assert decompress(compress(data)) == data


@pytest.mark.parametrize("data", SAMPLES)
def test_bit_count_matches_weighted_length(data):
    freqs, payload, nbits, meta = huffman_encode(data)
    codes = build_codebook(build_tree(freqs))
    assert nbits == weighted_length(freqs, codes)
    assert len(payload) == (nbits + 7) // 8
    assert meta["symbols"] == len(data)
    assert meta["distinct"] == len(freqs)


def test_roundtrip_bytearray_and_memoryview():
    data = bytearray(b"mississippi river")
    assert decompress(compress(data)) == bytes(data)
    assert decompress(compress(memoryview(bytes(data)))) == bytes(data)


def test_small_chunks_give_same_container():
    data = text_like_bytes(3000, seed=9)
    assert compress(data, chunk_size=5) == compress(data)


def test_single_repeated_byte():
    freqs, payload, nbits, meta = huffman_encode(b"aaaa")
    assert freqs == {0x61: 4}
    assert nbits == 0 and payload == b""
    assert meta["max_code_len"] == 0
    assert huffman_decode(payload, nbits=0, freqs=freqs) == b"aaaa"
    assert decompress(compress(b"aaaa")) == b"aaaa"


def test_two_distinct_bytes():
    freqs, payload, nbits, _ = huffman_encode(b"ab")
    assert freqs == {0x61: 1, 0x62: 1}
    assert nbits == 2
    assert payload == b"\x02"


def test_empty_input():
    with pytest.raises(EmptyInputError):
        compress(b"")


def test_symbol_count_claims_too_many_entries():
    blob = compress(b"ab")
    bad = struct.pack(">ii", 2, 40) + blob[8:]
    with pytest.raises(CorruptContainerError):
        decompress(bad)


def test_wrong_bit_count_in_header():
    blob = bytearray(compress(b"This is a test" * 100))
    nbits = struct.unpack(">i", blob[:4])[0]
    blob[:4] = struct.pack(">i", nbits - 1)
    with pytest.raises(CorruptContainerError):
        decompress(bytes(blob))


def test_truncated_stream():
    blob = compress(b"This is a test" * 100)
    with pytest.raises(CorruptContainerError):
        decompress(blob[:-3])


def test_frequency_total_disagrees_with_payload():
    # table claims 4 symbols but the payload only encodes 2 of them
    blob = struct.pack(">ii", 2, 2) + struct.pack(">Bi", 0x61, 2) + struct.pack(">Bi", 0x62, 2) + b"\x02"
    with pytest.raises(CorruptContainerError):
        decompress(blob)


def test_single_symbol_with_payload_bits():
    blob = struct.pack(">ii", 8, 1) + struct.pack(">Bi", 0x61, 4) + b"\x00"
    with pytest.raises(CorruptContainerError):
        decompress(blob)


def test_decode_is_idempotent():
    blob = compress(skewed_bytes(5000, seed=7))
    assert decompress(blob) == decompress(blob)


def test_table_order_does_not_change_decoding():
    data = b"abcabcabcddeeff" * 7
    freqs, payload, nbits, _ = huffman_encode(data)
    reordered = dict(reversed(list(freqs.items())))
    assert huffman_decode(payload, nbits=nbits, freqs=reordered) == data


def test_encode_refuses_counts_beyond_int32(monkeypatch):
    import container
    monkeypatch.setattr(container, "I32_MAX", 100)
    with pytest.raises(InputTooLargeError, match="bit count"):
        huffman_encode(text_like_bytes(90, seed=1))
    with pytest.raises(InputTooLargeError):
        compress(b"a" * 101)
